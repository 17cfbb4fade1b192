"""Session token verification.

Tokens are issued by the external auth service as HS256 JWTs carried in
a cookie. This module only verifies them.
"""

import uuid

import jwt

from career_compass.core.config import settings


def decode_session_subject(token: str) -> uuid.UUID | None:
    """Verify a session JWT and return its subject.

    Checks signature, exp, aud and iss; the sub claim must be a UUID.

    Args:
        token: Encoded JWT from the session cookie.

    Returns:
        The user UUID, or None if the token fails any check.
    """
    try:
        payload = jwt.decode(
            token,
            settings.auth_secret.get_secret_value(),
            algorithms=["HS256"],
            audience=settings.auth_audience,
            issuer=settings.auth_issuer,
        )
        return uuid.UUID(payload["sub"])
    except (jwt.InvalidTokenError, KeyError, ValueError, TypeError, AttributeError):
        return None
