"""Unlink identity use case."""

from uuid import UUID

from pydantic import BaseModel

from unify.application.usecase.base import BaseUseCase
from unify.domain.service import IdentityService
from unify.domain.value import AccountId, IdentityId


class UnlinkIdentityRequest(BaseModel):
    """Unlink identity request."""

    account_id: str  # From authenticated account
    identity_id: str


class UnlinkIdentityResponse(BaseModel):
    """Unlink identity response."""

    success: bool
    message: str


class UnlinkIdentityUseCase(BaseUseCase):
    """Use case for removing a login method from an account."""

    def __init__(self, identity_service: IdentityService) -> None:
        """Initialize unlink identity use case.

        Args:
            identity_service: Identity domain service
        """
        self.identity_service = identity_service

    async def execute(self, request: UnlinkIdentityRequest) -> UnlinkIdentityResponse:
        """Execute unlink identity flow.

        Raises:
            NotFoundError: If the identity is not linked to the account
            LastIdentityError: If it is the account's only identity
            CannotUnlinkPrimaryError: If it is the primary identity
        """
        await self.identity_service.unlink_identity(
            AccountId(UUID(request.account_id)),
            IdentityId(UUID(request.identity_id)),
        )
        return UnlinkIdentityResponse(success=True, message="Identity unlinked")
