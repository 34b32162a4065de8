from functools import wraps

from flask_jwt_extended import current_user, jwt_required

from logic.errors import ForbiddenError


def login_required(fn):
    return jwt_required()(fn)


def admin_required(fn):
    @wraps(fn)
    @jwt_required()
    def wrapper(*args, **kwargs):
        if current_user["role"] != "admin":
            raise ForbiddenError("Access denied: administrators only.")
        return fn(*args, **kwargs)
    return wrapper
