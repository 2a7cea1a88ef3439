"""Pydantic models for AWS Secondary IP."""

from .base import AWSResource, validate_ipv4
from .ec2 import NetworkInterfaceModel, SnapshotModel

__all__ = [
    "AWSResource",
    "validate_ipv4",
    "NetworkInterfaceModel",
    "SnapshotModel",
]
