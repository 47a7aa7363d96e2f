"""
Prompt templates for the resume tailoring request.
"""

# =============================================================================
# PROMPT TEMPLATES
# =============================================================================

SYSTEM_PROMPT = """\
You improve resumes for applicant tracking systems (ATS), editing only a fixed set of fields.

You may edit:
1. Profile title: align it with the target job title and its keywords.
2. Professional summary: 2-3 concise sentences with better clarity and keyword density.
3. Skills: reorder, normalize naming, remove duplicates. Never add a skill that is not
   already in the resume.
4. Experience bullets: clearer wording and stronger action verbs. Keep every number and
   metric exactly as written and keep the original meaning.

You must not change:
- Company names, employment dates, locations or job titles
- Education or certifications
- Section order or formatting

Use only information that is already in the resume. Write plain ATS-safe text with no
first-person language, emojis, markdown or tables.

Respond with a single valid JSON object and nothing else."""

USER_PROMPT_TEMPLATE = """\
Job Title: {job_title}

Job Description:
{job_description}

Original Resume Text:
{resume_text}

---
Tasks:

1. Extract ATS keywords from the job description into four categories:
   technical_skills, tools_and_technologies, job_responsibilities, industry_terms.

2. Produce the allowed improvements:
   - profile_title: 6-12 words; keep the original if the match is unclear
   - professional_summary: 2-3 sentences
   - skills_optimized: only if the resume has a skills section; existing skills only
   - tailored_experience: one object per role in the resume, matched by job title.
     Copy job_title and company exactly as they appear. Keep the original bullet count
     where possible (3-5 bullets per role).

Return JSON in exactly this shape:

{{
  "ats_keywords": {{
    "technical_skills": [],
    "tools_and_technologies": [],
    "job_responsibilities": [],
    "industry_terms": []
  }},
  "profile_title": "",
  "professional_summary": "",
  "skills_optimized": [],
  "tailored_experience": [
    {{"job_title": "", "company": "", "bullets": [""]}}
  ]
}}"""


def build_user_prompt(job_title: str, job_description: str, resume_text: str) -> str:
    """
    Build the user prompt for one tailoring request.

    Args:
        job_title: Target job title
        job_description: Full job description text
        resume_text: Plain resume text as extracted at ingestion

    Returns:
        User prompt string for the LLM
    """
    return USER_PROMPT_TEMPLATE.format(
        job_title=job_title.strip(),
        job_description=job_description.strip(),
        resume_text=resume_text.strip(),
    )
