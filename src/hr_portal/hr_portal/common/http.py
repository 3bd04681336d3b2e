from __future__ import annotations

import logging
from functools import wraps
from typing import Optional

from flask import g, jsonify, request

from ..core.constants import AUTH_COOKIE_NAME
from ..core.exceptions import AuthenticationError, DomainError
from ..users.tokens import Identity, TokenService

logger = logging.getLogger(__name__)


def read_token() -> Optional[str]:
    """Session token from the cookie, falling back to an Authorization bearer header."""
    token = request.cookies.get(AUTH_COOKIE_NAME)
    if token:
        return token
    auth = request.headers.get("Authorization", "")
    if auth.startswith("Bearer "):
        return auth.split(" ", 1)[1].strip() or None
    return None


def make_login_required(tokens: TokenService):
    def login_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            token = read_token()
            if not token:
                return jsonify({"error": "Unauthorized"}), 401
            try:
                g.identity = tokens.decode(token)
            except AuthenticationError as e:
                return fail(e)
            return view(*args, **kwargs)

        return wrapper

    return login_required


def current_identity() -> Identity:
    return g.identity


def json_body() -> dict:
    body = request.get_json(silent=True)
    return body if isinstance(body, dict) else {}


def fail(e: DomainError):
    return jsonify({"error": str(e)}), e.status_code


def server_error(message: str):
    logger.exception(message)
    return jsonify({"error": message}), 500
