import logging

import bcrypt
from flask import Blueprint, current_app, jsonify, request
from flask_jwt_extended import create_access_token, current_user, get_current_user

from config.bd import UniqueViolation
from logic.decorators import admin_required, login_required
from logic.errors import ConflictError, NotFoundError, UnauthorizedError, ValidationError
from logic.mappers import user_from_row
from logic.validation import parse_login, parse_user_create

logger = logging.getLogger(__name__)

auth_bp = Blueprint("auth", __name__)


def hash_password(password, rounds=None):
    rounds = rounds or current_app.config.get("BCRYPT_ROUNDS", 12)
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def check_password(password, password_hash):
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # Stored hash is not a bcrypt hash
        return False


def issue_token(user):
    return create_access_token(
        identity=str(user["id"]),
        additional_claims={
            "email": user["email"],
            "role": user["role"],
            "name": user["fullName"],
        },
    )


def register_jwt_callbacks(jwt):
    """Wire token verification into Flask-JWT-Extended.

    Every protected request re-reads the user named by the token, so a
    deleted account stops working before its token expires.
    """

    @jwt.user_lookup_loader
    def load_user(_jwt_header, jwt_data):
        try:
            user_id = int(jwt_data["sub"])
        except (KeyError, TypeError, ValueError):
            return None
        row = current_app.store.get_user_by_id(user_id)
        return user_from_row(row) if row else None

    @jwt.user_lookup_error_loader
    def unknown_user(_jwt_header, _jwt_data):
        return jsonify({"message": "Session is no longer valid. User not found."}), 401

    @jwt.unauthorized_loader
    def missing_token(reason):
        return jsonify({"message": f"Authentication required: {reason}"}), 401

    @jwt.invalid_token_loader
    def invalid_token(reason):
        return jsonify({"message": f"Invalid token: {reason}"}), 401

    @jwt.expired_token_loader
    def expired_token(_jwt_header, _jwt_data):
        return jsonify({"message": "Token has expired."}), 401


@auth_bp.route("/auth/login", methods=["POST"])
def login():
    payload = parse_login(request.get_json(silent=True))

    row = current_app.store.get_user_by_email(payload.email)
    if not row or not check_password(payload.password, row["password_hash"]):
        logger.info("Rejected login for %s", payload.email)
        raise UnauthorizedError("Invalid email or password.")

    user = user_from_row(row)
    logger.info("User %s logged in", user["email"])
    return jsonify({"token": issue_token(user), "user": user})


@auth_bp.route("/auth/me", methods=["GET"])
@login_required
def me():
    return jsonify(get_current_user())


@auth_bp.route("/users", methods=["GET"])
@admin_required
def list_users():
    return jsonify([user_from_row(r) for r in current_app.store.list_users()])


@auth_bp.route("/users", methods=["POST"])
@admin_required
def create_user():
    payload = parse_user_create(request.get_json(silent=True))

    if current_app.store.get_user_by_email(payload.email):
        raise ConflictError(f"Email {payload.email} is already registered.")

    try:
        row = current_app.store.insert_user(
            email=payload.email,
            full_name=payload.full_name,
            password_hash=hash_password(payload.password),
            role=payload.role,
        )
    except UniqueViolation:
        raise ConflictError(f"Email {payload.email} is already registered.")

    logger.info("User %s created with role %s", payload.email, payload.role)
    return jsonify(user_from_row(row)), 201


@auth_bp.route("/users/<int:user_id>", methods=["DELETE"])
@admin_required
def delete_user(user_id):
    if user_id == current_user["id"]:
        raise ValidationError("You cannot delete your own account.")

    row = current_app.store.delete_user(user_id)
    if not row:
        raise NotFoundError(f"User {user_id} not found.")

    logger.info("User %s deleted", row["email"])
    return jsonify(user_from_row(row))
