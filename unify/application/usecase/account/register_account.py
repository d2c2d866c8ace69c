"""Register account use case."""

from pydantic import BaseModel, Field

from unify.application.usecase.base import BaseUseCase
from unify.application.usecase.identity.common import LinkedIdentity
from unify.domain.service import AccountService
from unify.domain.value import AuthProvider


class RegisterAccountRequest(BaseModel):
    """Register account request."""

    provider: AuthProvider
    identity_token: str = Field(min_length=1)


class RegisterAccountResponse(BaseModel):
    """Register account response."""

    account_id: str
    identity: LinkedIdentity


class RegisterAccountUseCase(BaseUseCase):
    """Use case for creating an account from a first sign-in."""

    def __init__(self, account_service: AccountService) -> None:
        """Initialize register account use case.

        Args:
            account_service: Account domain service
        """
        self.account_service = account_service

    async def execute(self, request: RegisterAccountRequest) -> RegisterAccountResponse:
        """Execute registration flow.

        Raises:
            UnauthenticatedError: If the provider rejects the identity token
            IdentityConflictError: If the identity already has an account
        """
        registered = await self.account_service.register(
            request.provider, request.identity_token
        )
        return RegisterAccountResponse(
            account_id=str(registered.account.id),
            identity=LinkedIdentity.from_identity(registered.identity),
        )
