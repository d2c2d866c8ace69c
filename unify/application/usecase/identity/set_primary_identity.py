"""Set primary identity use case."""

from uuid import UUID

from pydantic import BaseModel

from unify.application.usecase.base import BaseUseCase
from unify.application.usecase.identity.common import LinkedIdentity
from unify.domain.service import IdentityService
from unify.domain.value import AccountId, IdentityId


class SetPrimaryIdentityRequest(BaseModel):
    """Set primary identity request."""

    account_id: str  # From authenticated account
    identity_id: str


class SetPrimaryIdentityResponse(BaseModel):
    """Set primary identity response."""

    identities: list[LinkedIdentity]
    primary: str


class SetPrimaryIdentityUseCase(BaseUseCase):
    """Use case for choosing which linked identity is primary."""

    def __init__(self, identity_service: IdentityService) -> None:
        """Initialize set primary identity use case.

        Args:
            identity_service: Identity domain service
        """
        self.identity_service = identity_service

    async def execute(
        self, request: SetPrimaryIdentityRequest
    ) -> SetPrimaryIdentityResponse:
        """Execute set primary identity flow.

        Raises:
            NotFoundError: If the identity is not linked to the account
        """
        listing = await self.identity_service.set_primary(
            AccountId(UUID(request.account_id)),
            IdentityId(UUID(request.identity_id)),
        )
        return SetPrimaryIdentityResponse(
            identities=[LinkedIdentity.from_identity(i) for i in listing.identities],
            primary=str(listing.primary_id),
        )
