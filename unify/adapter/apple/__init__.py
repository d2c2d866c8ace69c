"""Sign in with Apple adapter."""

from .verifier import (
    AppleCredentialVerifier,
    MockAppleCredentialVerifier,
    RealAppleCredentialVerifier,
)

__all__ = [
    "AppleCredentialVerifier",
    "MockAppleCredentialVerifier",
    "RealAppleCredentialVerifier",
]
