"""In-memory identity repository for testing."""

from typing import Optional

from sqlalchemy.exc import IntegrityError

from unify.domain.model import Identity
from unify.domain.repository import IdentityRepository
from unify.domain.value import AccountId, AuthProvider, IdentityId


class InMemoryIdentityRepository(IdentityRepository):
    """In-memory implementation of IdentityRepository for testing."""

    def __init__(self) -> None:
        self._identities: list[Identity] = []

    async def find_by_id(self, identity_id: IdentityId) -> Optional[Identity]:
        """Find identity by ID."""
        for identity in self._identities:
            if identity.id == identity_id:
                return identity
        return None

    async def find_by_provider(
        self, provider: AuthProvider, external_id: str
    ) -> Optional[Identity]:
        """Find identity by provider and external subject ID."""
        for identity in self._identities:
            if identity.provider == provider and identity.external_id == external_id:
                return identity
        return None

    async def find_all_by_account_id(self, account_id: AccountId) -> list[Identity]:
        """Find all identities of an account, oldest link first."""
        matches = [i for i in self._identities if i.account_id == account_id]
        matches.sort(key=lambda i: i.linked_at)
        return matches

    async def save(self, identity: Identity) -> Identity:
        """Save identity.

        Raises:
            IntegrityError: If (provider, external_id) belongs to another identity
        """
        self._check_unique(identity)
        self._put(identity)
        return identity

    async def save_all(self, identities: list[Identity]) -> None:
        """Save identities; validates all of them before writing any."""
        for identity in identities:
            self._check_unique(identity)
        for identity in identities:
            self._put(identity)

    async def delete(self, identity_id: IdentityId) -> None:
        """Delete identity."""
        self._identities = [i for i in self._identities if i.id != identity_id]

    def _check_unique(self, identity: Identity) -> None:
        for existing in self._identities:
            if (
                existing.id != identity.id
                and existing.provider == identity.provider
                and existing.external_id == identity.external_id
            ):
                raise IntegrityError("Duplicate provider identity", None, Exception())

    def _put(self, identity: Identity) -> None:
        for i, existing in enumerate(self._identities):
            if existing.id == identity.id:
                self._identities[i] = identity
                return
        self._identities.append(identity)
