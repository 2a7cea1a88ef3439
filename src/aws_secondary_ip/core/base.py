"""Base class for boto3-backed clients"""

from typing import Any, Optional

import boto3

DEFAULT_REGION = "us-east-1"


class BaseClient:
    """Holds a boto3 session and memoizes the service clients built from it."""

    def __init__(
        self,
        profile: Optional[str] = None,
        session: Optional[boto3.Session] = None,
        region_name: Optional[str] = None,
    ):
        self.profile = profile
        self.session = session or (
            boto3.Session(profile_name=profile) if profile else boto3.Session()
        )
        self.region_name = region_name or self.session.region_name or DEFAULT_REGION
        self._clients: dict[tuple[str, str], Any] = {}

    def client(self, service: str, region_name: Optional[str] = None):
        region = region_name or self.region_name
        key = (service, region)
        if key not in self._clients:
            self._clients[key] = self.session.client(service, region_name=region)
        return self._clients[key]
