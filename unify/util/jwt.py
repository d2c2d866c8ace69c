"""JWT session token utilities."""

from datetime import datetime, timedelta, timezone

import jwt
from pydantic import BaseModel

from unify.config import AuthSettings


class TokenPayload(BaseModel):
    """JWT token payload."""

    account_id: str
    exp: datetime


class JWTError(Exception):
    """JWT-related error."""

    pass


def create_token(
    account_id: str, settings: AuthSettings, expires_in: timedelta | None = None
) -> str:
    """Create a session token for an account.

    Args:
        account_id: Account ID
        settings: Authentication settings
        expires_in: Lifetime override (defaults to ``jwt_expiry_days``)

    Returns:
        Encoded JWT token
    """
    lifetime = expires_in if expires_in is not None else timedelta(days=settings.jwt_expiry_days)
    payload = {
        "account_id": account_id,
        "exp": datetime.now(timezone.utc) + lifetime,
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_token(token: str, settings: AuthSettings) -> TokenPayload:
    """Verify and decode a session token.

    Args:
        token: JWT token to verify
        settings: Authentication settings

    Returns:
        Token payload if valid

    Raises:
        JWTError: If token is invalid or expired
    """
    try:
        payload = jwt.decode(
            token, settings.jwt_secret, algorithms=[settings.jwt_algorithm]
        )
        return TokenPayload(**payload)
    except jwt.ExpiredSignatureError:
        raise JWTError("Token has expired")
    except jwt.InvalidTokenError:
        raise JWTError("Invalid token")
    except ValueError:
        raise JWTError("Malformed token payload")
