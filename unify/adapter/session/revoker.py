"""Session revocation against the sign-in service."""

import httpx
import logfire

from unify.adapter.error import SessionRevocationError
from unify.domain.service.auth_service import SessionRevoker
from unify.domain.value import AccountId


class HttpSessionRevoker(SessionRevoker):
    """Asks the sign-in service to drop every session of an account."""

    def __init__(
        self,
        revocation_url: str | None,
        service_token: str | None = None,
        timeout: float = 5.0,
    ) -> None:
        """Initialize session revoker.

        Args:
            revocation_url: Revocation endpoint; None disables revocation
            service_token: Bearer token for the sign-in service
            timeout: Request timeout in seconds
        """
        self.revocation_url = revocation_url
        self.service_token = service_token
        self.timeout = timeout

    async def revoke_all(self, account_id: AccountId) -> None:
        """Revoke all sessions of an account.

        Raises:
            SessionRevocationError: If the sign-in service cannot be reached
                or refuses the request
        """
        if not self.revocation_url:
            logfire.warn(
                "Session revocation not configured, skipping",
                account_id=str(account_id),
            )
            return

        headers = {}
        if self.service_token:
            headers["Authorization"] = f"Bearer {self.service_token}"

        try:
            async with httpx.AsyncClient() as client:
                response = await client.post(
                    self.revocation_url,
                    json={"accountId": str(account_id)},
                    headers=headers,
                    timeout=self.timeout,
                )
        except httpx.HTTPError as e:
            raise SessionRevocationError(
                f"HTTP error revoking sessions of {account_id}: {e}"
            ) from e

        if response.is_error:
            raise SessionRevocationError(
                f"Session revocation failed for {account_id}: {response.status_code}"
            )
        logfire.info("Sessions revoked", account_id=str(account_id))


class MockSessionRevoker(SessionRevoker):
    """Records revoked accounts instead of calling the sign-in service."""

    def __init__(self, fail: bool = False) -> None:
        self.revoked: list[AccountId] = []
        self.fail = fail

    async def revoke_all(self, account_id: AccountId) -> None:
        if self.fail:
            raise SessionRevocationError(f"Mock revocation failure for {account_id}")
        self.revoked.append(account_id)
