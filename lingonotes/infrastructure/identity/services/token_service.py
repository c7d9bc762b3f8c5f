"""Session token creation and verification service."""

from datetime import UTC, datetime, timedelta

import jwt
from jwt import InvalidTokenError

from lingonotes.config import get_settings
from lingonotes.domain.common.exceptions import ValidationError
from lingonotes.domain.identity.entities.principal import Principal

ALGORITHM = "HS256"
TOKEN_TYPE = "session"


def create_session_token(
    user_id: str, email: str | None, expires_delta: timedelta | None = None
) -> str:
    """Create a signed session token carrying the user's id and email."""
    settings = get_settings()
    now = datetime.now(UTC)
    expire = now + (expires_delta or timedelta(days=settings.SESSION_TOKEN_EXPIRE_DAYS))
    to_encode = {
        "sub": user_id,
        "userId": user_id,
        "email": email,
        "iat": now,
        "exp": expire,
        "type": TOKEN_TYPE,
    }
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=ALGORITHM)


def verify_session_token(token: str) -> Principal | None:
    """Verify a session token and return its principal if valid."""
    try:
        payload = jwt.decode(
            token,
            get_settings().SECRET_KEY,
            algorithms=[ALGORITHM],
            options={"require": ["exp", "sub"]},
        )
    except InvalidTokenError:
        return None

    if payload.get("type") != TOKEN_TYPE:
        return None
    try:
        return Principal(user_id=str(payload["sub"]), email=payload.get("email"))
    except ValidationError:
        return None
