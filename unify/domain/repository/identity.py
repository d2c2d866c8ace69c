"""Identity repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from unify.domain.model.identity import Identity
from unify.domain.value import AccountId, AuthProvider, IdentityId


class IdentityRepository(ABC):
    """Repository for Identity entity.

    Manages the relationship between accounts and their external
    authentication provider identities.
    """

    @abstractmethod
    async def find_by_id(self, identity_id: IdentityId) -> Optional[Identity]:
        """Find an identity by ID.

        Args:
            identity_id: The identity's unique identifier

        Returns:
            The identity if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_provider(
        self, provider: AuthProvider, external_id: str
    ) -> Optional[Identity]:
        """Find an identity by provider and external subject ID.

        Args:
            provider: The authentication provider
            external_id: The subject's ID on that provider

        Returns:
            The identity if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_all_by_account_id(self, account_id: AccountId) -> list[Identity]:
        """Get all identities linked to an account, oldest link first.

        Args:
            account_id: The account's unique identifier

        Returns:
            List of identities (may be empty)
        """
        pass

    @abstractmethod
    async def save(self, identity: Identity) -> Identity:
        """Save an identity (create or update).

        Args:
            identity: The identity to save

        Returns:
            The saved identity

        Raises:
            IntegrityError: If (provider, external_id) is linked to another identity
        """
        pass

    @abstractmethod
    async def save_all(self, identities: list[Identity]) -> None:
        """Save several identities of one account as a single change.

        Used where the single-primary rule would be briefly broken by
        saving the identities one by one.

        Args:
            identities: The identities to save
        """
        pass

    @abstractmethod
    async def delete(self, identity_id: IdentityId) -> None:
        """Delete an identity.

        Args:
            identity_id: The identity to delete
        """
        pass
