"""
Render preset resolution for structural rebuilds.

Presets live in config/render_presets.yaml: a `defaults` block plus named presets that
override it. Each preset is merged over the defaults with OmegaConf, so presets list
only the settings they change.

Examples:
    >>> preset = get_render_preset("classic")
    >>> preset.font_size.body
    10
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from dotenv import load_dotenv
from omegaconf import OmegaConf

load_dotenv()

DEFAULT_PRESETS_PATH = Path(__file__).parent / "config" / "render_presets.yaml"
RENDER_PRESETS_PATH = Path(os.getenv("HEMLINE_RENDER_PRESETS_PATH") or DEFAULT_PRESETS_PATH)
DEFAULT_RENDER_PRESET = os.getenv("HEMLINE_RENDER_PRESET", "modern")


@dataclass(frozen=True)
class FontSizes:
    title: float
    heading: float
    body: float


@dataclass(frozen=True)
class Spacing:
    section: float
    item: float


@dataclass(frozen=True)
class RenderPreset:
    """Resolved styling for one structural rebuild."""

    name: str
    description: str
    font_name: str
    pdf_font_name: str
    font_size: FontSizes
    spacing: Spacing
    margin_inches: float
    alignment: str
    uppercase_headings: bool
    bullet_glyph: str
    skills_separator: str

    @classmethod
    def from_dict(cls, name: str, data: Dict[str, Any]) -> "RenderPreset":
        return cls(
            name=name,
            description=data.get("description", ""),
            font_name=data["font_name"],
            pdf_font_name=data["pdf_font_name"],
            font_size=FontSizes(**data["font_size"]),
            spacing=Spacing(**data["spacing"]),
            margin_inches=float(data["margin_inches"]),
            alignment=data["alignment"],
            uppercase_headings=bool(data["uppercase_headings"]),
            bullet_glyph=data["bullet_glyph"],
            skills_separator=data["skills_separator"],
        )


def load_render_presets(config_path: Path = None) -> Dict[str, RenderPreset]:
    """
    Load render_presets.yaml and merge every preset over the defaults.

    Args:
        config_path: Optional path to the presets file (defaults to RENDER_PRESETS_PATH)

    Returns:
        Dict mapping preset names to RenderPreset
    """
    if config_path is None:
        config_path = RENDER_PRESETS_PATH

    config = OmegaConf.load(config_path)
    defaults = config.get("defaults") or OmegaConf.create({})

    presets = {}
    for name, overrides in (config.get("presets") or {}).items():
        merged = OmegaConf.merge(defaults, overrides or {})
        presets[name] = RenderPreset.from_dict(name, OmegaConf.to_container(merged, resolve=True))

    return presets


def get_render_preset(name: Optional[str] = None, config_path: Path = None) -> RenderPreset:
    """
    Get a render preset by name.

    Args:
        name: Preset name (default: HEMLINE_RENDER_PRESET env var, then 'modern')
        config_path: Optional path to the presets file

    Returns:
        RenderPreset

    Raises:
        ValueError: If the preset does not exist
    """
    name = name or DEFAULT_RENDER_PRESET
    presets = load_render_presets(config_path)

    if name not in presets:
        raise ValueError(f"Preset '{name}' not found. Available presets: {sorted(presets)}")

    return presets[name]
