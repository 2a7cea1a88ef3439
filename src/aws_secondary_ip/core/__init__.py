"""Core utilities for AWS Secondary IP"""

from .base import BaseClient, DEFAULT_REGION
from .display import BaseDisplay, OUTPUT_FORMATS
from .exceptions import (
    ApiError,
    ConfigurationError,
    InterfaceNotFoundError,
    MetadataUnavailable,
    NotFoundError,
    ReconciliationTimeout,
    SecondaryIPError,
)
from .inventory import SystemInventory
from .logging import setup_logging, get_logger, logger
from .store import (
    FileRunStateStore,
    MemoryRunStateStore,
    RunStateStore,
    secondary_ip_key,
)

__all__ = [
    "BaseClient",
    "DEFAULT_REGION",
    "BaseDisplay",
    "OUTPUT_FORMATS",
    "ApiError",
    "ConfigurationError",
    "InterfaceNotFoundError",
    "MetadataUnavailable",
    "NotFoundError",
    "ReconciliationTimeout",
    "SecondaryIPError",
    "SystemInventory",
    "setup_logging",
    "get_logger",
    "logger",
    "FileRunStateStore",
    "MemoryRunStateStore",
    "RunStateStore",
    "secondary_ip_key",
]
