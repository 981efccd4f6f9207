from flask import Blueprint, request, jsonify, g
from app.errors import ValidationError
from app.services.auth_service import AuthService
from app.repositories.user_repo import UserRepo
from app.utils.decorators import principal_required

auth_bp = Blueprint("auth", __name__)


def _text(data: dict, key: str) -> str:
    value = data.get(key)
    return value.strip() if isinstance(value, str) else ""


def _session_payload(token: str, user) -> dict:
    return {"token": token, **user.to_dict()}


@auth_bp.post("/register", endpoint="auth_register")
def register():
    data = request.get_json(silent=True) or {}

    username = _text(data, "username")
    email = _text(data, "email")
    password = _text(data, "password")

    if not username or not email or not password:
        raise ValidationError("username, email and password are required")

    token, user = AuthService.register(
        username=username,
        email=email,
        password=password,
        full_name=_text(data, "fullName"),
    )
    return jsonify({
        "success": True,
        "message": "User registered successfully",
        "data": _session_payload(token, user),
    }), 201


@auth_bp.post("/login", endpoint="auth_login")
def login():
    data = request.get_json(silent=True) or {}
    # older clients send "username"
    username_or_email = _text(data, "usernameOrEmail") or _text(data, "username")
    password = _text(data, "password")

    if not username_or_email or not password:
        raise ValidationError("Please fill in all fields")

    token, user = AuthService.login(username_or_email, password)
    return jsonify({
        "success": True,
        "message": "Login successful",
        "data": _session_payload(token, user),
    })


@auth_bp.get("/me", endpoint="auth_me")
@principal_required
def me():
    user = UserRepo.get_by_id(g.principal_id)
    return jsonify({"success": True, "data": user.to_dict()})
