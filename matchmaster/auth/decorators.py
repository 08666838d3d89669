"""Decorators for token-authenticated routes."""

from functools import wraps

from flask import g, request

from matchmaster.extensions import get_core

from .gate import authorize, bearer_token


def token_required(f=None, roles=None):
    """Authenticate the bearer token and store the caller in ``g.caller``.

    Usage:
    @token_required
    def protected_view():
        ...

    @token_required(roles={Role.ADMIN})
    def admin_view():
        ...
    """

    def decorator(func):
        @wraps(func)
        def decorated_function(*args, **kwargs):
            token = bearer_token(request.headers.get("Authorization"))
            g.caller = get_core().gate.authenticate(token)
            if roles:
                authorize(g.caller, roles)
            return func(*args, **kwargs)

        return decorated_function

    if f:
        return decorator(f)
    return decorator
