"""Unit tests for render presets and structural layout planning."""

import pytest

from hemline.contexts.rendering import BlockKind, get_render_preset, load_render_presets, plan_layout
from hemline.contexts.structuring import SectionType, infer_structure, structure_to_content


@pytest.mark.unit
def test_presets_merge_over_defaults():
    presets = load_render_presets()

    assert set(presets) == {"modern", "classic", "creative", "minimal"}
    assert presets["modern"].font_size.body == 11
    assert presets["classic"].pdf_font_name == "Times-Roman"
    # creative overrides title/heading only
    assert presets["creative"].font_size.body == 11
    assert presets["creative"].font_size.title == 26
    assert presets["minimal"].uppercase_headings is False


@pytest.mark.unit
def test_unknown_preset():
    with pytest.raises(ValueError, match="not found"):
        get_render_preset("baroque")


@pytest.mark.unit
def test_custom_presets_file(tmp_path):
    config = tmp_path / "presets.yaml"
    config.write_text(
        "defaults:\n"
        "  font_name: Arial\n"
        "  pdf_font_name: Helvetica\n"
        "  font_size: {title: 20, heading: 12, body: 9}\n"
        "  spacing: {section: 10, item: 4}\n"
        "  margin_inches: 0.5\n"
        "  alignment: center\n"
        "  uppercase_headings: false\n"
        "  bullet_glyph: '-'\n"
        "  skills_separator: ' / '\n"
        "presets:\n"
        "  compact:\n"
        "    description: Tight\n"
    )
    preset = get_render_preset("compact", config_path=config)
    assert preset.font_name == "Arial"
    assert preset.skills_separator == " / "


@pytest.mark.unit
def test_layout_follows_section_order_and_omits_empty_sections():
    text = (
        "Jane Roe\njane@example.com\n"
        "Skills\nPython, Go\n"
        "Summary\n"
        "Experience\nDev | Co\nJan 2020 - Present\n- Code\n"
        "Education\nBS Math"
    )
    structure = infer_structure(text)
    content = structure_to_content(structure)

    blocks = plan_layout(structure, content, get_render_preset("modern"))

    assert [b.kind for b in blocks] == [
        BlockKind.TITLE,
        BlockKind.CONTACT,
        BlockKind.HEADING,
        BlockKind.PARAGRAPH,
        BlockKind.HEADING,
        BlockKind.ENTRY,
        BlockKind.BULLET,
        BlockKind.HEADING,
        BlockKind.PARAGRAPH,
    ]
    headings = [b.text for b in blocks if b.kind == BlockKind.HEADING]
    # The empty summary section is omitted along with its heading
    assert headings == ["SKILLS", "EXPERIENCE", "EDUCATION"]
    assert blocks[3].text == "Python • Go"
    assert blocks[5].company == "Co"
    assert blocks[5].dates == "Jan 2020 - Present"


@pytest.mark.unit
def test_duplicate_section_types_render_once():
    structure = infer_structure("Jane\nSkills\nPython\nEducation\nBS\nTechnical Skills\nGo")
    content = structure_to_content(structure)

    blocks = plan_layout(structure, content, get_render_preset("minimal"))

    headings = [b for b in blocks if b.kind == BlockKind.HEADING]
    assert [h.text for h in headings] == ["Skills", "Education"]
    assert headings[0].section_type == SectionType.SKILLS
    assert blocks[2].text == "Python, Go"
