"""Infrastructure layer errors."""


class AdapterError(Exception):
    """Base infrastructure error."""

    pass


class ProviderError(AdapterError):
    """External identity provider rejected a credential or could not be reached."""

    pass


class SessionRevocationError(AdapterError):
    """Sessions of a disabled account could not be revoked."""

    pass
