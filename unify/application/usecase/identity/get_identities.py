"""Get identities use case."""

from uuid import UUID

from pydantic import BaseModel

from unify.application.usecase.base import BaseUseCase
from unify.application.usecase.identity.common import LinkedIdentity
from unify.domain.service import IdentityService
from unify.domain.value import AccountId


class GetIdentitiesRequest(BaseModel):
    """Get identities request."""

    account_id: str  # From authenticated account


class GetIdentitiesResponse(BaseModel):
    """Get identities response."""

    identities: list[LinkedIdentity]
    primary: str | None


class GetIdentitiesUseCase(BaseUseCase):
    """Use case for listing the identities linked to an account."""

    def __init__(self, identity_service: IdentityService) -> None:
        """Initialize get identities use case.

        Args:
            identity_service: Identity domain service
        """
        self.identity_service = identity_service

    async def execute(self, request: GetIdentitiesRequest) -> GetIdentitiesResponse:
        """Execute get identities flow.

        Raises:
            NotFoundError: If the account does not exist
        """
        listing = await self.identity_service.list_identities(
            AccountId(UUID(request.account_id))
        )
        return GetIdentitiesResponse(
            identities=[LinkedIdentity.from_identity(i) for i in listing.identities],
            primary=str(listing.primary_id) if listing.primary_id else None,
        )
