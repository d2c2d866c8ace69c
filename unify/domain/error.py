"""Domain layer errors.

Every error carries a stable ``code`` that clients map to localized
messages, and a ``retryable`` flag telling the caller whether resubmitting
the identical request can succeed.
"""


class DomainError(Exception):
    """Base domain error."""

    code: str = "E9000"
    retryable: bool = False


class ValidationError(DomainError):
    """Domain validation error."""

    code = "E9002"


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    code = "E9001"

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class UnauthenticatedError(DomainError):
    """Credential is missing, malformed, expired or rejected by its provider."""

    code = "E1003"


class IdentityConflictError(DomainError):
    """Raised when an external identity is already linked to another account."""

    code = "E1016"

    def __init__(self, provider: str, external_id: str):
        self.provider = provider
        self.external_id = external_id
        super().__init__(
            f"{provider} identity {external_id} is already linked to another account"
        )


class LastIdentityError(DomainError):
    """Raised when unlinking would leave an account without a login method."""

    code = "E1015"

    def __init__(self, identity_id: str):
        super().__init__(f"Cannot unlink the only identity {identity_id}")


class CannotUnlinkPrimaryError(DomainError):
    """Raised when unlinking the primary identity."""

    code = "E1017"

    def __init__(self, identity_id: str):
        super().__init__(
            f"Cannot unlink primary identity {identity_id}; set another primary first"
        )


class MergeError(DomainError):
    """Base merge error."""

    code = "E16000"


class SelfMergeError(MergeError):
    """Raised when target and source are the same account."""

    code = "E16001"

    def __init__(self, account_id: str):
        super().__init__(f"Account {account_id} cannot be merged into itself")


class SourceAlreadyDisabledError(MergeError):
    """Raised when the account has been merged away or deleted.

    Also raised by identity operations that race a merge of the same
    account: once disabled, nothing may partially succeed on it.
    """

    code = "E16002"

    def __init__(self, account_id: str):
        self.account_id = account_id
        super().__init__(f"Account {account_id} is disabled")


class TargetDisabledError(MergeError):
    """Raised when the merge target is disabled."""

    code = "E16003"

    def __init__(self, account_id: str):
        self.account_id = account_id
        super().__init__(f"Target account {account_id} is disabled")


class MergeInProgressError(MergeError):
    """Raised when another attempt for the same pair holds the ledger."""

    code = "E16004"
    retryable = True

    def __init__(self, fingerprint: str):
        self.fingerprint = fingerprint
        super().__init__(f"Merge {fingerprint[:12]} is already in progress")


class AggregateMergeFailure(MergeError):
    """Raised when a merge step fails after the ledger was claimed.

    The ledger record stays ``pending``; resubmitting the same request
    resumes from the first aggregate that has not completed.
    """

    code = "E16005"
    retryable = True

    def __init__(self, aggregate: str, fingerprint: str, cause: str):
        self.aggregate = aggregate
        self.fingerprint = fingerprint
        super().__init__(f"Merge step '{aggregate}' failed: {cause}")
