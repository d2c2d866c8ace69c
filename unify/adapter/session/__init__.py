"""Session revocation adapter."""

from .revoker import HttpSessionRevoker, MockSessionRevoker

__all__ = ["HttpSessionRevoker", "MockSessionRevoker"]
