import hmac

from flask import current_app, jsonify, request, session

from . import bp
from .decorators import is_admin


def check_credentials(username, password):
    """Compare a username/password pair against the configured admin accounts."""
    accounts = current_app.config.get("ADMIN_USERS") or {}
    expected = accounts.get(username)
    if not expected or not isinstance(password, str):
        return False
    return hmac.compare_digest(expected, password)


@bp.route("/login", methods=["POST"])
def login():
    body = request.get_json(silent=True) or {}
    username = body.get("username")
    password = body.get("password")

    if check_credentials(username, password):
        session.clear()
        session["user_id"] = username
        session["is_admin"] = True
        current_app.logger.info(f"Admin {username} logged in")
        return jsonify({"success": True})

    current_app.logger.warning(f"Failed login for {username!r}")
    return jsonify({"success": False}), 401


@bp.route("/logout", methods=["POST"])
def logout():
    session.clear()
    return jsonify({"success": True})


@bp.route("/me", methods=["GET"])
def me():
    return jsonify({"user": session.get("user_id"), "isAdmin": is_admin()})
