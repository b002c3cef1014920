# jobtrack/routes/jobs.py
from datetime import datetime, timezone
from flask import Blueprint, request, jsonify, current_app
from flask_login import login_required, current_user

from ..security.ownership import owned_job_required
from ..services.analytics import build_analytics, window_start
from ..services.jobs import (
    clean_job_payload, list_jobs, list_jobs_since, create_job, update_job, delete_job,
)
from ..services.models import JOB_STATUSES, ValidationError, job_to_json

jobs_bp = Blueprint("jobs", __name__, url_prefix="/api/jobs")

def _server_error():
    return jsonify(error="server_error", message="Server error"), 500

@jobs_bp.get("/", strict_slashes=False)
@login_required
def get_jobs():
    try:
        jobs = list_jobs(current_app.config["SUPABASE"], current_user.id)
        return jsonify([job_to_json(j) for j in jobs])
    except Exception:
        current_app.logger.exception("List jobs error")
        return _server_error()

@jobs_bp.get("/status/<status>")
@login_required
def get_jobs_by_status(status):
    if status not in JOB_STATUSES:
        return jsonify(error="bad_request", message=f"status must be one of: {', '.join(JOB_STATUSES)}"), 400
    try:
        jobs = list_jobs(current_app.config["SUPABASE"], current_user.id, status=status)
        return jsonify([job_to_json(j) for j in jobs])
    except Exception:
        current_app.logger.exception("List jobs by status error")
        return _server_error()

@jobs_bp.get("/analytics")
@login_required
def get_analytics():
    period = request.args.get("period", "")
    now = datetime.now(timezone.utc)
    try:
        jobs = list_jobs_since(current_app.config["SUPABASE"], current_user.id, window_start(period, now))
        return jsonify(build_analytics(jobs, period, now))
    except Exception:
        current_app.logger.exception("Analytics error")
        return jsonify(error="server_error", message="Server error while fetching analytics"), 500

@jobs_bp.post("/", strict_slashes=False)
@login_required
def add_job():
    try:
        fields = clean_job_payload(request.get_json(silent=True) or {})
    except ValidationError as e:
        return jsonify(error="bad_request", message=str(e)), 400
    try:
        job = create_job(current_app.config["SUPABASE"], current_user.id, fields)
        return jsonify(job_to_json(job)), 201
    except Exception:
        current_app.logger.exception("Create job error")
        return _server_error()

@jobs_bp.put("/<job_id>")
@owned_job_required
def edit_job(job):
    try:
        fields = clean_job_payload(request.get_json(silent=True) or {}, partial=True)
    except ValidationError as e:
        return jsonify(error="bad_request", message=str(e)), 400
    try:
        updated = update_job(current_app.config["SUPABASE"], job, fields)
        return jsonify(job_to_json(updated))
    except Exception:
        current_app.logger.exception("Update job error")
        return _server_error()

@jobs_bp.delete("/<job_id>")
@owned_job_required
def remove_job(job):
    try:
        delete_job(current_app.config["SUPABASE"], job["id"])
        return jsonify(message="Job removed")
    except Exception:
        current_app.logger.exception("Delete job error")
        return _server_error()
