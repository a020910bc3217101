"""Access token helpers for tokens issued by the external auth provider."""

from __future__ import annotations

from datetime import timedelta
from typing import Any

from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt

from app.core.config import get_settings
from app.shared.exceptions import AuthenticationException
from app.shared.utils import utc_now

settings = get_settings()

# Tokens are minted by the auth provider; tokenUrl only feeds the OpenAPI docs.
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="auth/token")
optional_oauth2_scheme = OAuth2PasswordBearer(tokenUrl="auth/token", auto_error=False)


def create_access_token(subject: str, expires_delta: timedelta | None = None, **claims: Any) -> str:
    """Sign an access token the same way the auth provider does (tests, scripts)."""
    expires = expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    payload: dict[str, Any] = {
        "sub": subject,
        "type": "access",
        "exp": utc_now() + expires,
    }
    payload.update(claims)
    return jwt.encode(payload, settings.secret_key, algorithm=settings.jwt_algorithm)


def decode_token(token: str) -> dict[str, Any]:
    """Decode and validate JWT token."""
    try:
        return jwt.decode(token, settings.secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError as exc:
        raise AuthenticationException("Invalid token") from exc
