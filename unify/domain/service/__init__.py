"""Domain services."""

from .account_service import AccountService, RegisteredAccount
from .auth_service import (
    AccountAuthenticator,
    AuthService,
    CredentialVerifier,
    SessionRevoker,
)
from .base import Service
from .identity_service import IdentityListing, IdentityService
from .jwt_service import JWTService
from .merge_ledger_service import MergeLedgerService, merge_fingerprint
from .merge_orchestrator import MergeOrchestrator, MergeOutcome

__all__ = [
    "AccountAuthenticator",
    "AccountService",
    "AuthService",
    "CredentialVerifier",
    "IdentityListing",
    "IdentityService",
    "JWTService",
    "MergeLedgerService",
    "MergeOrchestrator",
    "MergeOutcome",
    "RegisteredAccount",
    "Service",
    "SessionRevoker",
    "merge_fingerprint",
]
