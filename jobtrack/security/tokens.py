# jobtrack/security/tokens.py
from __future__ import annotations
import logging
from flask import Request, current_app, jsonify
from itsdangerous import URLSafeTimedSerializer, BadSignature, SignatureExpired

from ..extensions import login_manager
from ..services.models import User
from ..services.users import fetch_user_by_id

logger = logging.getLogger(__name__)

TOKEN_SALT = "auth-token"

def _serializer() -> URLSafeTimedSerializer:
    return URLSafeTimedSerializer(current_app.config["SECRET_KEY"], salt=TOKEN_SALT)

def issue_token(user_id: str) -> str:
    return _serializer().dumps({"id": user_id})

def verify_token(token: str) -> str | None:
    """Return the user id carried by a valid, unexpired token, else None."""
    try:
        data = _serializer().loads(token, max_age=current_app.config["TOKEN_MAX_AGE"])
    except SignatureExpired:
        logger.info("Rejected expired auth token")
        return None
    except BadSignature:
        logger.info("Rejected auth token with bad signature")
        return None
    return data.get("id") if isinstance(data, dict) else None

def bearer_token(req: Request) -> str | None:
    header = (req.headers.get("Authorization") or "").strip()
    if header[:7].lower() == "bearer ":
        return header[7:].strip() or None
    return None

@login_manager.request_loader
def load_user_from_request(req: Request):
    """Restore the caller from an `Authorization: Bearer` token."""
    token = bearer_token(req)
    if not token:
        return None
    user_id = verify_token(token)
    if not user_id:
        return None
    try:
        row = fetch_user_by_id(current_app.config["SUPABASE"], user_id)
    except Exception:
        logger.exception("load_user_from_request failed")
        return None
    return User.from_row(row) if row else None

@login_manager.unauthorized_handler
def unauthorized():
    return jsonify(error="unauthorized", message="Access denied. Valid token required."), 401
