from flask import Blueprint, request, jsonify, current_app
from flask_login import login_required, current_user

from ..security.tokens import issue_token
from ..services.models import User, ValidationError
from ..services.users import (
    normalize_username, validate_username, fetch_user_by_username, fetch_user_by_email,
    create_user, set_password, check_password, check_security_answer,
)

auth_bp = Blueprint("auth", __name__, url_prefix="/api/auth")

SIGNUP_FIELDS = ("username", "name", "email", "password", "securityQuestion", "securityAnswer")

def _bad_request(message):
    return jsonify(error="bad_request", message=message), 400

@auth_bp.post("/signup")
def signup():
    data = request.get_json(silent=True) or {}
    values = {k: data.get(k) for k in SIGNUP_FIELDS}
    missing = [k for k, v in values.items() if not isinstance(v, str) or not v.strip()]
    if missing:
        return _bad_request(f"Missing required field(s): {', '.join(missing)}")

    username = values["username"].strip()
    try:
        validate_username(username)
    except ValidationError as e:
        return _bad_request(str(e))

    supabase = current_app.config["SUPABASE"]
    try:
        if fetch_user_by_username(supabase, username):
            return _bad_request("Username already taken")
        if fetch_user_by_email(supabase, values["email"]):
            return _bad_request("Email already registered")

        row = create_user(
            supabase,
            username=username,
            name=values["name"],
            email=values["email"],
            password=values["password"],
            security_question=values["securityQuestion"],
            security_answer=values["securityAnswer"],
        )
        user = User.from_row(row)
        return jsonify(token=issue_token(user.id), user=user.to_json()), 201
    except Exception:
        current_app.logger.exception("Signup error")
        return jsonify(error="server_error", message="Server error during signup"), 500

@auth_bp.post("/login")
def login():
    data = request.get_json(silent=True) or {}
    username = normalize_username(data.get("username") if isinstance(data.get("username"), str) else "")
    password = data.get("password") if isinstance(data.get("password"), str) else ""
    if not username or not password:
        return _bad_request("Username and password are required.")

    try:
        row = fetch_user_by_username(current_app.config["SUPABASE"], username)
        if not row or not check_password(row, password):
            return jsonify(error="unauthorized", message="Invalid credentials"), 401
        user = User.from_row(row)
        return jsonify(token=issue_token(user.id), user=user.to_json())
    except Exception:
        current_app.logger.exception("Login error")
        return jsonify(error="server_error", message="Server error during login"), 500

@auth_bp.get("/security-question")
def security_question():
    username = normalize_username(request.args.get("username"))
    if not username:
        return _bad_request("Username is required.")
    try:
        row = fetch_user_by_username(current_app.config["SUPABASE"], username)
        if not row:
            return _bad_request("User not found")
        return jsonify(securityQuestion=row.get("security_question"))
    except Exception:
        current_app.logger.exception("Security question error")
        return jsonify(error="server_error", message="Server error fetching security question"), 500

@auth_bp.get("/me")
@login_required
def me():
    return jsonify(user=current_user.to_json())

@auth_bp.post("/forgot-password")
def forgot_password():
    data = request.get_json(silent=True) or {}
    username = normalize_username(data.get("username") if isinstance(data.get("username"), str) else "")
    answer = data.get("securityAnswer")
    new_password = data.get("newPassword")
    if not username or not isinstance(answer, str) or not isinstance(new_password, str) or not new_password:
        return _bad_request("username, securityAnswer and newPassword are required.")

    supabase = current_app.config["SUPABASE"]
    try:
        row = fetch_user_by_username(supabase, username)
        if not row:
            return _bad_request("User not found")
        if not check_security_answer(row, answer):
            return _bad_request("Incorrect security answer")
        set_password(supabase, row["id"], new_password)
        return jsonify(message="Password updated successfully")
    except Exception:
        current_app.logger.exception("Password reset error")
        return jsonify(error="server_error", message="Server error during password reset"), 500
