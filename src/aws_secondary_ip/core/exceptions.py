"""Error taxonomy for secondary IP actions.

Every failure aborts the current action. botocore errors raised by EC2/STS
calls are not wrapped; they propagate unmodified and are grouped under
``ApiError`` so callers can catch them in one place.
"""

from typing import Optional

from botocore.exceptions import BotoCoreError, ClientError

ApiError = (ClientError, BotoCoreError)


class SecondaryIPError(Exception):
    """Base class for all errors raised by this package."""


class ConfigurationError(SecondaryIPError):
    """Contradictory or incomplete action configuration."""


class MetadataUnavailable(SecondaryIPError):
    """Instance metadata could not be read."""


class NotFoundError(SecondaryIPError):
    """A looked-up resource does not exist."""


class InterfaceNotFoundError(MetadataUnavailable, NotFoundError):
    """The OS interface, or its link-layer address, is absent."""

    def __init__(self, interface: str, reason: str = "not found"):
        super().__init__(f"Network interface {interface!r} {reason}")
        self.interface = interface


class ReconciliationTimeout(SecondaryIPError):
    """The interface never reflected the mutation within the timeout."""

    def __init__(self, operation: str, timeout: float, elapsed: Optional[float] = None):
        message = f"Timed out waiting for {operation} after {timeout:g} seconds"
        if elapsed is not None:
            message += f" (elapsed {elapsed:.1f}s)"
        super().__init__(message)
        self.operation = operation
        self.timeout = timeout
        self.elapsed = elapsed
