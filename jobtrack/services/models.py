from __future__ import annotations
from flask_login import UserMixin

JOB_STATUSES = ("applied", "interview", "offered", "rejected")
JOB_TYPES    = ("Internship", "Full-Time", "IT + FT", "IT + PBC")
JOB_MODES    = ("on-campus", "off-campus")

DEFAULT_STATUS = "applied"
DEFAULT_MODE   = "on-campus"

# column name -> JSON key
JOB_FIELDS = {
    "company": "company",
    "role": "role",
    "pay": "pay",
    "date_applied": "dateApplied",
    "interview_date": "interviewDate",
    "job_type": "jobType",
    "status": "status",
    "mode": "mode",
    "notes": "notes",
}

class User(UserMixin):
    def __init__(self, id, username, name=None, email=None, **_):
        self.id = id
        self.username = username
        self.name = name
        self.email = email

    @classmethod
    def from_row(cls, row: dict) -> "User":
        return cls(
            id=row.get("id"),
            username=row.get("username"),
            name=row.get("name"),
            email=row.get("email"),
        )

    def to_json(self) -> dict:
        return {"id": self.id, "username": self.username, "name": self.name, "email": self.email}

def job_to_json(row: dict) -> dict:
    out = {"id": row.get("id"), "user": row.get("user_id")}
    for col, key in JOB_FIELDS.items():
        out[key] = row.get(col)
    out["createdAt"] = row.get("created_at")
    out["updatedAt"] = row.get("updated_at")
    return out

class ValidationError(ValueError):
    """Bad client input; the message is safe to show to the caller."""
