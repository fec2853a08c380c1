"""
Session transport: carries the access token in an HTTP-only cookie,
with an Authorization header fallback for non-browser clients.
"""

from typing import Optional
from fastapi import Request, Response

TOKEN_COOKIE_NAME = "token"

COOKIE_OPTIONS = {
    "httponly": True,
    "secure": True,
    "samesite": "strict",
    "path": "/",
}


def set_token_cookie(response: Response, token: str, max_age: int) -> None:
    """Attach the access token to the response as a session cookie."""
    response.set_cookie(TOKEN_COOKIE_NAME, token, max_age=max_age, **COOKIE_OPTIONS)


def clear_token_cookie(response: Response) -> None:
    """Expire the session cookie using the same flags it was set with."""
    response.delete_cookie(TOKEN_COOKIE_NAME, **COOKIE_OPTIONS)


def extract_token_from_header(authorization: Optional[str]) -> Optional[str]:
    """
    Extract the token from an Authorization header value.

    Returns None when the header is absent or does not use the Bearer scheme.
    """
    if not authorization:
        return None

    parts = authorization.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        return None
    return parts[1]


def extract_token(request: Request) -> Optional[str]:
    """Read the access token from the cookie, falling back to the Authorization header."""
    token = request.cookies.get(TOKEN_COOKIE_NAME)
    if token:
        return token
    return extract_token_from_header(request.headers.get("authorization"))
