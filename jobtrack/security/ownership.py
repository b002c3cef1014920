# jobtrack/security/ownership.py
from __future__ import annotations
from functools import wraps
from flask import current_app, jsonify
from flask_login import login_required, current_user

from ..services.jobs import fetch_job

def is_owner(record: dict | None, user_id) -> bool:
    return bool(record) and user_id is not None and str(record.get("user_id")) == str(user_id)

def owned_job_required(fn):
    """
    Use on routes that mutate a job: @owned_job_required
    - 401 when there is no valid token
    - 404 when the job id does not exist
    - 401 when the job belongs to someone else
    The view receives the loaded job row instead of the id.
    """
    @wraps(fn)
    @login_required
    def _wrapped(job_id, **kwargs):
        try:
            job = fetch_job(current_app.config["SUPABASE"], job_id)
        except Exception:
            current_app.logger.exception("job lookup failed")
            return jsonify(error="server_error", message="Server error"), 500
        if not job:
            return jsonify(error="not_found", message="Job not found"), 404
        if not is_owner(job, current_user.id):
            return jsonify(error="unauthorized", message="Not authorized"), 401
        return fn(job, **kwargs)
    return _wrapped
