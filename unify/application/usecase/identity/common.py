"""Response models shared by identity use cases."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from unify.domain.model import Identity
from unify.domain.value import AuthProvider


class LinkedIdentity(BaseModel):
    """Identity as shown on the account-linking screen.

    Serializes with camelCase keys (``providerId``, ``isPrimary``, ...).
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    provider: AuthProvider
    provider_id: str
    email: str | None
    is_primary: bool
    linked_at: datetime

    @classmethod
    def from_identity(cls, identity: Identity) -> "LinkedIdentity":
        return cls(
            id=str(identity.id),
            provider=identity.provider,
            provider_id=identity.external_id,
            email=identity.email,
            is_primary=identity.is_primary,
            linked_at=identity.linked_at,
        )
