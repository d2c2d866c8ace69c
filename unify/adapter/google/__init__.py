"""Google Sign-In adapter."""

from .verifier import (
    GoogleCredentialVerifier,
    MockGoogleCredentialVerifier,
    RealGoogleCredentialVerifier,
)

__all__ = [
    "GoogleCredentialVerifier",
    "MockGoogleCredentialVerifier",
    "RealGoogleCredentialVerifier",
]
