"""Error kinds surfaced to the host job framework.

The host decides whether to retry a failed job by reading ``retryable``.
"""


class ActionError(Exception):
    """Base class for classified action failures."""

    retryable = False

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class RetryableError(ActionError):
    """Transient failure: rate limiting or upstream 5xx."""

    retryable = True


class FatalError(ActionError):
    """Non-retryable failure: bad input, auth, permissions, bad SQL."""

    retryable = False


def from_dict(data: dict) -> ActionError:
    """Rebuild an error serialized by the host as {'message': ..., 'retryable': ...}."""
    cls = RetryableError if data.get('retryable') else FatalError
    return cls(data.get('message', ''))
