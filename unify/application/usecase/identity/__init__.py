"""Identity linking use cases."""

from .bind_identity import BindIdentityUseCase
from .get_identities import GetIdentitiesUseCase
from .set_primary_identity import SetPrimaryIdentityUseCase
from .unlink_identity import UnlinkIdentityUseCase

__all__ = [
    "BindIdentityUseCase",
    "GetIdentitiesUseCase",
    "SetPrimaryIdentityUseCase",
    "UnlinkIdentityUseCase",
]
