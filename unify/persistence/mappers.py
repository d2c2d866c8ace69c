"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

from typing import Any, Dict
from uuid import UUID

from unify.domain.model import Account, Balance, Identity, MergeRecord, OwnedItem
from unify.domain.value import (
    AccountId,
    AuthProvider,
    BalanceKind,
    DisabledReason,
    IdentityId,
    ItemKind,
    MergeFingerprint,
    MergeStatus,
    OwnedItemId,
)


def _uuid(value: Any) -> UUID:
    return UUID(value) if isinstance(value, str) else value


def row_to_account(row: Dict[str, Any]) -> Account:
    """Convert database row to Account domain model.

    Args:
        row: Database row as dict

    Returns:
        Account domain model
    """
    merged_into = row.get("merged_into")
    disabled_reason = row.get("disabled_reason")
    return Account(
        id=AccountId(_uuid(row["id"])),
        is_active=row["is_active"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
        disabled_at=row.get("disabled_at"),
        disabled_reason=DisabledReason(disabled_reason) if disabled_reason else None,
        merged_into=AccountId(_uuid(merged_into)) if merged_into else None,
    )


def account_to_dict(account: Account) -> Dict[str, Any]:
    """Convert Account domain model to database dict."""
    data = account.model_dump()
    if account.disabled_reason:
        data["disabled_reason"] = account.disabled_reason.value
    return data


def row_to_identity(row: Dict[str, Any]) -> Identity:
    """Convert database row to Identity domain model.

    Args:
        row: Database row as dict

    Returns:
        Identity domain model
    """
    return Identity(
        id=IdentityId(_uuid(row["id"])),
        account_id=AccountId(_uuid(row["account_id"])),
        provider=AuthProvider(row["provider"]),
        external_id=row["external_id"],
        email=row.get("email"),
        is_primary=row["is_primary"],
        linked_at=row["linked_at"],
        updated_at=row["updated_at"],
    )


def identity_to_dict(identity: Identity) -> Dict[str, Any]:
    """Convert Identity domain model to database dict."""
    data = identity.model_dump()
    data["provider"] = identity.provider.value
    return data


def row_to_merge_record(row: Dict[str, Any]) -> MergeRecord:
    """Convert database row to MergeRecord domain model.

    Args:
        row: Database row as dict

    Returns:
        MergeRecord domain model
    """
    return MergeRecord(
        fingerprint=MergeFingerprint(row["fingerprint"]),
        target_account_id=AccountId(_uuid(row["target_account_id"])),
        source_account_id=AccountId(_uuid(row["source_account_id"])),
        status=MergeStatus(row["status"]),
        summary=dict(row.get("summary") or {}),
        attempts=row["attempts"],
        last_error=row.get("last_error"),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
        completed_at=row.get("completed_at"),
    )


def merge_record_to_dict(record: MergeRecord) -> Dict[str, Any]:
    """Convert MergeRecord domain model to database dict."""
    data = record.model_dump()
    data["status"] = record.status.value
    return data


def row_to_owned_item(row: Dict[str, Any]) -> OwnedItem:
    """Convert database row to OwnedItem domain model."""
    return OwnedItem(
        id=OwnedItemId(_uuid(row["id"])),
        owner_id=AccountId(_uuid(row["owner_id"])),
        kind=ItemKind(row["kind"]),
        natural_key=row["natural_key"],
        acquired_at=row["acquired_at"],
    )


def owned_item_to_dict(item: OwnedItem) -> Dict[str, Any]:
    """Convert OwnedItem domain model to database dict."""
    data = item.model_dump()
    data["kind"] = item.kind.value
    return data


def row_to_balance(row: Dict[str, Any]) -> Balance:
    """Convert database row to Balance domain model."""
    return Balance(
        owner_id=AccountId(_uuid(row["owner_id"])),
        kind=BalanceKind(row["kind"]),
        amount=row["amount"],
        updated_at=row["updated_at"],
    )
