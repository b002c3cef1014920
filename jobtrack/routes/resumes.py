# jobtrack/routes/resumes.py
from __future__ import annotations

from flask import Blueprint, request, jsonify, current_app

from ..services.matcher import match_skills
from ..services.resumes import (
    StaticResumeAnalyzer, extract_pdf_text, get_ai_feedback, get_match_feedback,
)
from ..services.skills import extract_skills
from ..services.uploads import is_pdf_upload, temporary_upload

resumes_bp = Blueprint("resumes", __name__)

static_analyzer = StaticResumeAnalyzer()

# 1) Resume feedback: static checks + structured AI review
@resumes_bp.post("/api/resume-feedback")
def resume_feedback():
    f = request.files.get("resume")
    if not is_pdf_upload(f):
        return jsonify(error="bad_request", message="No file uploaded or invalid type. Upload a PDF."), 400

    try:
        with temporary_upload(f) as path:
            text = extract_pdf_text(path)
        return jsonify(
            feedback=get_ai_feedback(text),
            staticFeedback=static_analyzer.analyze(text),
        )
    except Exception:
        current_app.logger.exception("Resume analysis failed")
        return jsonify(error="server_error", message="Error analyzing resume"), 500

# 2) Resume vs job description skill match
@resumes_bp.post("/api/match")
def resume_jd_match():
    resume_file = request.files.get("resume")
    jd_file = request.files.get("jd")
    if not resume_file or not jd_file:
        return jsonify(error="bad_request", message="Both resume and JD files are required."), 400
    if not (is_pdf_upload(resume_file) and is_pdf_upload(jd_file)):
        return jsonify(error="bad_request", message="Only PDF files are allowed."), 400

    try:
        with temporary_upload(resume_file) as resume_path, temporary_upload(jd_file) as jd_path:
            resume_text = extract_pdf_text(resume_path)
            jd_text = extract_pdf_text(jd_path)

        result = match_skills(
            extract_skills(resume_text, "resume"),
            extract_skills(jd_text, "jd"),
        )
        result["feedback"] = get_match_feedback(jd_text, resume_text)
        return jsonify(result)
    except Exception:
        current_app.logger.exception("JD match failed")
        return jsonify(error="server_error", message="Matching failed"), 500
