from __future__ import annotations
from typing import Any, List

from .rounding import round_half_up

def coerce_skill_list(value: Any) -> List[str]:
    """A list/tuple made only of strings, stripped; anything else becomes []."""
    if not isinstance(value, (list, tuple)) or not all(isinstance(s, str) for s in value):
        return []
    return [s.strip() for s in value if s.strip()]

def match_skills(resume_skills: Any, jd_skills: Any) -> dict:
    """
    Compare resume skills against job-description skills, case-insensitively.
    Output lists keep the job description's order and spelling.
    Repeated job-description entries each count toward the total.
    """
    jd = coerce_skill_list(jd_skills)
    have = {s.lower() for s in coerce_skill_list(resume_skills)}

    matched = [s for s in jd if s.lower() in have]
    missing = [s for s in jd if s.lower() not in have]
    score = f"{round_half_up(len(matched) / len(jd) * 100)}%" if jd else "0%"
    return {"matchScore": score, "matchedSkills": matched, "missingSkills": missing, "jdSkills": jd}
