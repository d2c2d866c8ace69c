"""Account use cases."""

from .register_account import RegisterAccountUseCase

__all__ = ["RegisterAccountUseCase"]
