# jobtrack/services/skills.py
from __future__ import annotations
from typing import List

from .ai import call_ai, parse_json_response

MAX_PROMPT_CHARS = 8000

SKILL_PROMPTS = {
    "jd": (
        "Extract a list of technical skills, programming languages, frameworks required in this "
        "job description (don't include qualifications). Return ONLY a JSON array of strings.\n\n"
        'Job Description:\n"""\n{text}\n"""'
    ),
    "resume": (
        "Extract a list of technical skills, programming languages, frameworks mentioned in this "
        "resume. Return ONLY a JSON array of strings.\n\n"
        'Resume:\n"""\n{text}\n"""'
    ),
}

def build_skills_prompt(text: str, source: str) -> str:
    if source not in SKILL_PROMPTS:
        raise ValueError(f"unknown skill source: {source!r}")
    return SKILL_PROMPTS[source].format(text=(text or "")[:MAX_PROMPT_CHARS])

def extract_skills(text: str, source: str) -> List[str]:
    """Ask the model for the document's skills; an unparseable reply gives []."""
    reply = call_ai(build_skills_prompt(text, source))
    skills = parse_json_response(reply, default=[], expect=list, label=f"{source} skills")
    return [s for s in skills if isinstance(s, str)]
