from datetime import UTC, datetime, timedelta
from typing import Optional

from jose import JWTError, jwt

from config import ApplicationConfig

ALGORITHM = "HS256"

PROFILE_CLAIMS = ("email", "first_name", "last_name", "username", "avatar_url")


def create_access_token(
    user_id: str,
    expires_delta: timedelta = timedelta(minutes=15),
    **claims,
) -> str:
    """
    Create an identity token.

    Tokens are normally issued by the identity provider; this exists for
    local development and tests.

    Args:
        user_id: Identity-provider user ID, stored as "sub"
        expires_delta: Token expiration duration
        claims: Optional profile claims (email, first_name, ...)

    Returns:
        JWT token string (HS256)
    """
    now = datetime.now(UTC)
    payload = {
        "sub": user_id,
        "exp": now + expires_delta,
        "iat": now,
    }
    payload.update({k: v for k, v in claims.items() if k in PROFILE_CLAIMS})
    return jwt.encode(payload, ApplicationConfig.IDENTITY_JWT_SECRET, algorithm=ALGORITHM)


def verify_jwt(token: str) -> Optional[dict]:
    """
    Verify and decode an identity token

    Returns:
        Decoded payload dict or None if invalid
    """
    try:
        payload = jwt.decode(
            token, ApplicationConfig.IDENTITY_JWT_SECRET, algorithms=[ALGORITHM]
        )
    except JWTError:
        return None
    if not payload.get("sub"):
        return None
    return payload
