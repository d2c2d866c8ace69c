"""Test configuration and fixtures."""

from uuid import uuid4

import logfire
import pytest

from unify.domain.model import OwnedItem
from unify.domain.value import AccountId, ItemKind, OwnedItemId


def make_items(owner_id: AccountId, kind: ItemKind, *keys: str) -> list[OwnedItem]:
    """Helper function to build owned items for test accounts.

    Args:
        owner_id: Account owning the items
        kind: Item kind
        keys: Natural keys, one item per key

    Returns:
        Unsaved owned items
    """
    return [
        OwnedItem(id=OwnedItemId(uuid4()), owner_id=owner_id, kind=kind, natural_key=key)
        for key in keys
    ]


@pytest.fixture(scope="session", autouse=True)
def quiet_logfire():
    """Configure Logfire for tests: spans are recorded, nothing is sent or printed."""
    logfire.configure(send_to_logfire=False, console=False)
