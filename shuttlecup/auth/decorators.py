"""Decorators for the auth blueprint."""

from functools import wraps

from flask import session

from shuttlecup.errors import AuthorizationError


def is_admin():
    """Whether the current session belongs to a privileged editor."""
    return bool(session.get("is_admin"))


def admin_required(f):
    """Reject the request unless an admin is logged in.

    Usage:
    @admin_required
    def protected_view():
        ...
    """

    @wraps(f)
    def decorated_function(*args, **kwargs):
        if not is_admin():
            raise AuthorizationError()
        return f(*args, **kwargs)

    return decorated_function
