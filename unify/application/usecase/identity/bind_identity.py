"""Bind identity use case."""

from uuid import UUID

from pydantic import BaseModel, Field

from unify.application.usecase.base import BaseUseCase
from unify.application.usecase.identity.common import LinkedIdentity
from unify.domain.service import IdentityService
from unify.domain.value import AccountId, AuthProvider


class BindIdentityRequest(BaseModel):
    """Bind identity request."""

    account_id: str  # From authenticated account
    provider: AuthProvider
    identity_token: str = Field(min_length=1)


class BindIdentityResponse(BaseModel):
    """Bind identity response."""

    success: bool = True
    identity: LinkedIdentity


class BindIdentityUseCase(BaseUseCase):
    """Use case for linking another login method to an account."""

    def __init__(self, identity_service: IdentityService) -> None:
        """Initialize bind identity use case.

        Args:
            identity_service: Identity domain service
        """
        self.identity_service = identity_service

    async def execute(self, request: BindIdentityRequest) -> BindIdentityResponse:
        """Execute bind identity flow.

        Raises:
            UnauthenticatedError: If the provider rejects the identity token
            IdentityConflictError: If the identity belongs to another account
        """
        identity = await self.identity_service.bind_identity(
            AccountId(UUID(request.account_id)),
            request.provider,
            request.identity_token,
        )
        return BindIdentityResponse(identity=LinkedIdentity.from_identity(identity))
