from __future__ import annotations
import re, uuid
from datetime import datetime, timezone
from typing import Optional, Dict, Any

from werkzeug.security import generate_password_hash, check_password_hash

from .models import ValidationError

USERS_TABLE = "users"
USERNAME_PAT = re.compile(r"^[a-zA-Z0-9_]+$")
USERNAME_MIN, USERNAME_MAX = 3, 30

def normalize_username(username: Optional[str]) -> str:
    return (username or "").strip().lower()

def validate_username(username: str) -> None:
    if not USERNAME_PAT.match(username or ""):
        raise ValidationError("Username can only contain letters, numbers, and underscores")
    if not (USERNAME_MIN <= len(username) <= USERNAME_MAX):
        raise ValidationError(f"Username must be between {USERNAME_MIN} and {USERNAME_MAX} characters")

def _first(resp) -> Optional[Dict[str, Any]]:
    return (getattr(resp, "data", None) or [None])[0]

def _find_one(supabase, column: str, value) -> Optional[Dict[str, Any]]:
    r = supabase.table(USERS_TABLE).select("*").eq(column, value).limit(1).execute()
    return _first(r)

def fetch_user_by_username(supabase, username: str) -> Optional[Dict[str, Any]]:
    return _find_one(supabase, "username", normalize_username(username))

def fetch_user_by_email(supabase, email: str) -> Optional[Dict[str, Any]]:
    return _find_one(supabase, "email", (email or "").strip().lower())

def fetch_user_by_id(supabase, user_id: str) -> Optional[Dict[str, Any]]:
    return _find_one(supabase, "id", user_id)

def create_user(supabase, *, username: str, name: str, email: str, password: str,
                security_question: str, security_answer: str) -> Dict[str, Any]:
    """
    Insert a users row. Caller is responsible for uniqueness checks.
    Password and security answer are stored hashed only.
    """
    row = {
        "id": str(uuid.uuid4()),
        "username": normalize_username(username),
        "name": name.strip(),
        "email": email.strip().lower(),
        "password_hash": generate_password_hash(password),
        "security_question": security_question.strip(),
        "security_answer_hash": generate_password_hash(security_answer),
        "created_at": datetime.now(timezone.utc).isoformat(),
    }
    r = supabase.table(USERS_TABLE).insert(row).execute()
    return _first(r) or row

def set_password(supabase, user_id: str, new_password: str) -> None:
    supabase.table(USERS_TABLE).update(
        {"password_hash": generate_password_hash(new_password)}
    ).eq("id", user_id).execute()

def check_password(row: Dict[str, Any], password: str) -> bool:
    return bool(row.get("password_hash")) and check_password_hash(row["password_hash"], password or "")

def check_security_answer(row: Dict[str, Any], answer: str) -> bool:
    return bool(row.get("security_answer_hash")) and check_password_hash(row["security_answer_hash"], answer or "")
