# jobtrack/services/jobs.py
from __future__ import annotations
import re
import uuid
from datetime import datetime, timezone
from typing import Optional, Dict, Any, List

from .models import (
    JOB_FIELDS, JOB_STATUSES, JOB_TYPES, JOB_MODES,
    DEFAULT_STATUS, DEFAULT_MODE, ValidationError,
)

JOBS_TABLE = "jobs"
REQUIRED_FIELDS = ("company", "role", "date_applied")
DATE_FIELDS     = ("date_applied", "interview_date")
ENUM_FIELDS     = {"status": JOB_STATUSES, "job_type": JOB_TYPES, "mode": JOB_MODES}

# postgres trims trailing zeros from fractional seconds (".12345")
FRACTION_PAT = re.compile(r"\.(\d{1,6})\d*(?=[+-]\d\d:?\d\d$|$)")

def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()

def to_utc_datetime(value) -> Optional[datetime]:
    """Parse an ISO date/datetime (or pass a datetime through) as an aware UTC datetime."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        dt = value
    else:
        text = str(value).strip().replace("Z", "+00:00")
        text = FRACTION_PAT.sub(lambda m: "." + m.group(1).ljust(6, "0"), text, count=1)
        dt = datetime.fromisoformat(text)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)

def clean_job_payload(data: Dict[str, Any], *, partial: bool = False) -> Dict[str, Any]:
    """
    Map a camelCase JSON body onto jobs columns and validate it.
    partial=True is for updates: only keys present in the body are returned.
    Raises ValidationError with a caller-safe message.
    """
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")

    row: Dict[str, Any] = {}
    for col, key in JOB_FIELDS.items():
        if key not in data:
            continue
        value = data.get(key)
        if isinstance(value, str):
            value = value.strip()
        if value in ("", None):
            if col in REQUIRED_FIELDS:
                raise ValidationError(f"{key} is required")
            if col in ("status", "mode"):
                continue
            row[col] = None
            continue
        if col in DATE_FIELDS:
            try:
                value = to_utc_datetime(value).isoformat()
            except (TypeError, ValueError):
                raise ValidationError(f"{key} must be an ISO 8601 date")
        elif col in ENUM_FIELDS:
            if value not in ENUM_FIELDS[col]:
                raise ValidationError(f"{key} must be one of: {', '.join(ENUM_FIELDS[col])}")
        elif not isinstance(value, str):
            raise ValidationError(f"{key} must be a string")
        row[col] = value

    if not partial:
        missing = [JOB_FIELDS[c] for c in REQUIRED_FIELDS if not row.get(c)]
        if missing:
            raise ValidationError(f"Missing required field(s): {', '.join(missing)}")
        row.setdefault("status", DEFAULT_STATUS)
        row.setdefault("mode", DEFAULT_MODE)
    return row

# ---------- store ----------
def list_jobs(supabase, user_id: str, status: Optional[str] = None) -> List[Dict[str, Any]]:
    q = supabase.table(JOBS_TABLE).select("*").eq("user_id", user_id)
    if status:
        q = q.eq("status", status)
    r = q.order("date_applied", desc=True).execute()
    return list(getattr(r, "data", None) or [])

def list_jobs_since(supabase, user_id: str, start: datetime) -> List[Dict[str, Any]]:
    r = (
        supabase.table(JOBS_TABLE)
        .select("*")
        .eq("user_id", user_id)
        .gte("date_applied", start.isoformat())
        .execute()
    )
    return list(getattr(r, "data", None) or [])

def fetch_job(supabase, job_id: str) -> Optional[Dict[str, Any]]:
    r = supabase.table(JOBS_TABLE).select("*").eq("id", job_id).limit(1).execute()
    return (getattr(r, "data", None) or [None])[0]

def create_job(supabase, user_id: str, fields: Dict[str, Any]) -> Dict[str, Any]:
    now = _now_iso()
    row = {"id": str(uuid.uuid4()), "user_id": user_id, **fields, "created_at": now, "updated_at": now}
    r = supabase.table(JOBS_TABLE).insert(row).execute()
    return (getattr(r, "data", None) or [row])[0]

def update_job(supabase, job: Dict[str, Any], fields: Dict[str, Any]) -> Dict[str, Any]:
    changes = {**fields, "updated_at": _now_iso()}
    r = supabase.table(JOBS_TABLE).update(changes).eq("id", job["id"]).execute()
    return (getattr(r, "data", None) or [{**job, **changes}])[0]

def delete_job(supabase, job_id: str) -> None:
    supabase.table(JOBS_TABLE).delete().eq("id", job_id).execute()
