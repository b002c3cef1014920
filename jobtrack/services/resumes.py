# jobtrack/services/resumes.py
from __future__ import annotations

import re, logging
from typing import Iterable, List

from PyPDF2 import PdfReader

from .ai import call_ai, parse_json_response

logger = logging.getLogger(__name__)

# ========= Constants =========
SECTION_MARKERS = ("summary", "education", "experience", "skills")
ACTION_VERBS = ("developed", "led", "created", "implemented", "designed", "built",
                "managed", "initiated", "launched")
TECH_KEYWORDS = ("Python", "JavaScript", "React", "Node", "Machine Learning", "AWS", "SQL", "Git")

FEEDBACK_MAX_CHARS = 10000
MATCH_MAX_CHARS = 8000


class EmptyDocumentError(ValueError):
    """PDF yielded no text (scanned, image-only or malformed)."""

# ========= PDF =========
def extract_pdf_text(path: str) -> str:
    reader = PdfReader(path)
    text = "\n".join((p.extract_text() or "") for p in reader.pages)
    if not text.strip():
        raise EmptyDocumentError("Empty resume content")
    return text

# ========= Static checks =========
class StaticResumeAnalyzer:
    """
    Rule-based resume checks with no external calls. Vocabularies are fixed at
    construction, so one instance always returns the same feedback for the
    same text.
    """

    def __init__(self, action_verbs: Iterable[str] = ACTION_VERBS,
                 keywords: Iterable[str] = TECH_KEYWORDS,
                 sections: Iterable[str] = SECTION_MARKERS):
        self.action_verbs = tuple(action_verbs)
        self.keywords = tuple(keywords)
        self.sections = tuple(sections)
        self._verb_pats = tuple(re.compile(rf"\b{re.escape(v)}\b", re.I) for v in self.action_verbs)

    def section_feedback(self, text: str) -> List[str]:
        low = (text or "").lower()
        out = []
        for name in self.sections:
            title = name.capitalize()
            if name.lower() in low:
                out.append(f"✅ {title} section found")
            else:
                out.append(f"⚠️ {title} section not found")
        return out

    def count_action_verbs(self, text: str) -> int:
        return sum(len(p.findall(text or "")) for p in self._verb_pats)

    def present_keywords(self, text: str) -> List[str]:
        low = (text or "").lower()
        return [k for k in self.keywords if k.lower() in low]

    def analyze(self, text: str) -> List[str]:
        feedback = self.section_feedback(text)
        feedback.append(f"✅ {self.count_action_verbs(text)} action verbs found")
        feedback.append(f"✅ Found technical keywords: {', '.join(self.present_keywords(text)) or 'None'}")
        return feedback

# ========= AI feedback =========
FEEDBACK_PROMPT = """
You are a professional resume review assistant. Analyze the following resume text and provide detailed, professional feedback in a structured JSON format with the following keys:

1. overall_impression: A quick summary of how the resume comes across at first glance and whether it is aligned with the target role/industry
2. strengths: What's working well (formatting, impactful achievements, relevant skills, clarity) and any standout sections
3. areas_for_improvement: High-level issues hurting the resume (layout, keyword optimization, vague language, lack of metrics)
4. section_feedback: Section-by-section feedback (summary, work experience, education, skills)
5. suggestions: Formatting tweaks, tailoring tips and resources for improvement
6. ats_readability: Whether the resume is likely to pass applicant tracking systems (ATS) and is skimmable for a recruiter in 6-10 seconds

Return ONLY valid JSON in this exact format:
{{
  "overall_impression": "summary here",
  "strengths": ["strength1", "strength2"],
  "areas_for_improvement": ["improvement1", "improvement2"],
  "section_feedback": ["feedback1", "feedback2"],
  "suggestions": ["suggestion1", "suggestion2"],
  "ats_readability": "ats and readability assessment here"
}}

Resume Text:
\"\"\"
{resume}
\"\"\"
""".strip()

MATCH_PROMPT = """
You are a job application assistant. Given the job description and resume below, analyze how well the resume matches the job. Return the response in the following JSON format and use bold words wherever needed for better readability:

{{
  "match_score": "A percentage indicating how well the resume matches the job description",
  "strengths": ["List of strengths based on the resume and JD"],
  "weaknesses": ["List of weak or missing elements in the resume"],
  "suggestions": ["Suggestions to improve the resume for this job description"],
  "overall_analysis": "A brief summary paragraph about the overall match"
}}

Job Description:
\"\"\"
{jd}
\"\"\"

Resume:
\"\"\"
{resume}
\"\"\"
""".strip()

def fallback_feedback(raw: str) -> dict:
    return {
        "overall_impression": raw,
        "strengths": [],
        "areas_for_improvement": [],
        "section_feedback": [],
        "suggestions": [],
        "ats_readability": "Unable to assess ATS compatibility and readability.",
    }

def get_ai_feedback(resume_text: str) -> dict:
    """Structured AI review of a resume. Never raises; degrades to fallback_feedback."""
    try:
        raw = call_ai(FEEDBACK_PROMPT.format(resume=resume_text[:FEEDBACK_MAX_CHARS]))
    except Exception:
        logger.exception("AI resume feedback failed")
        return fallback_feedback("AI failed to generate feedback.")

    parsed = parse_json_response(raw, default=None, expect=dict, label="resume feedback")
    if parsed is None:
        return fallback_feedback(raw)
    for k, v in fallback_feedback("").items():
        parsed.setdefault(k, v)
    return parsed

def get_match_feedback(jd_text: str, resume_text: str) -> str:
    """Free-text match analysis; empty string when the AI call fails."""
    try:
        return call_ai(MATCH_PROMPT.format(jd=jd_text[:MATCH_MAX_CHARS], resume=resume_text[:MATCH_MAX_CHARS]))
    except Exception:
        logger.exception("AI match feedback failed")
        return ""
