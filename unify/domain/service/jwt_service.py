"""JWT session token domain service."""

from uuid import UUID

import logfire

from unify.config import AuthSettings
from unify.domain.error import UnauthenticatedError
from unify.domain.value import AccountId
from unify.util.jwt import JWTError, TokenPayload, create_token, verify_token

from .auth_service import AccountAuthenticator
from .base import Service


class JWTService(Service, AccountAuthenticator):
    """Domain service for session tokens.

    Token issuance belongs to the sign-in service; this side only needs to
    decode the tokens it is handed. ``create_token`` is kept for tooling and
    tests.
    """

    def __init__(self, auth_settings: AuthSettings) -> None:
        """Initialize JWT service.

        Args:
            auth_settings: Authentication settings
        """
        self.auth_settings = auth_settings

    def create_token(self, account_id: AccountId) -> str:
        """Create a session token for an account."""
        return create_token(str(account_id), self.auth_settings)

    def verify_token(self, token: str) -> TokenPayload:
        """Verify JWT token and extract payload.

        Raises:
            JWTError: If token is invalid or expired
        """
        with logfire.span("jwt_service.verify_token"):
            try:
                payload = verify_token(token, self.auth_settings)
                logfire.info("JWT token verified", account_id=payload.account_id)
                return payload
            except JWTError as e:
                logfire.warn("JWT token verification failed", error=str(e))
                raise

    async def authenticate(self, credential: str) -> AccountId:
        """Authenticate a session token.

        Signature and expiry are checked here; whether the account is still
        active is decided by the caller.

        Raises:
            UnauthenticatedError: If the token is missing, invalid or expired
        """
        if not credential:
            raise UnauthenticatedError("Missing credential")
        try:
            payload = self.verify_token(credential)
            return AccountId(UUID(payload.account_id))
        except (JWTError, ValueError) as e:
            raise UnauthenticatedError(str(e)) from e
