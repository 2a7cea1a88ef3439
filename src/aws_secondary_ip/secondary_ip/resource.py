"""Assign/unassign actions for a secondary private IP on this instance's ENI."""

import time
from functools import cached_property
from typing import Callable, Optional

from ..config import POLL_INTERVAL, SecondaryIPConfig
from ..core.logging import get_logger
from ..core.store import MemoryRunStateStore, RunStateStore
from ..modules.credentials import CredentialResolver
from ..modules.eni import ENIClient
from ..modules.metadata import MetadataReader
from ..modules.snapshots import SnapshotClient
from .engine import ReconciliationEngine
from .models import AssignmentRequest, ReconcileResult

logger = get_logger("resource")


class DeferredMutator:
    """Builds the EC2 client on the first mutating call, not before.

    A run that settles in Checking never resolves credentials, so no STS
    AssumeRole call is made for an interface that is already converged.
    """

    def __init__(self, factory: Callable[[], ENIClient]):
        self._factory = factory

    def assign_private_ip(self, eni_id: str, ip: Optional[str] = None):
        return self._factory().assign_private_ip(eni_id, ip)

    def unassign_private_ip(self, eni_id: str, ip: str):
        return self._factory().unassign_private_ip(eni_id, ip)


class SecondaryIPResource:
    """One action instance: resolves the ENI, then hands off to the engine.

    The EC2 client is built lazily on first use and reused for the lifetime
    of the instance.
    """

    def __init__(
        self,
        config: SecondaryIPConfig,
        store: Optional[RunStateStore] = None,
        metadata: Optional[MetadataReader] = None,
        resolver: Optional[CredentialResolver] = None,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
        poll_interval: float = POLL_INTERVAL,
        on_status: Optional[Callable[[str], None]] = None,
    ):
        self.config = config
        self.store = store if store is not None else MemoryRunStateStore()
        self.metadata = metadata or MetadataReader()
        self._resolver = resolver
        self._clock = clock
        self._sleep = sleep
        self.poll_interval = poll_interval
        self._on_status = on_status

    @cached_property
    def resolver(self) -> CredentialResolver:
        if self._resolver is not None:
            return self._resolver
        az = None if self.config.region else self.metadata.availability_zone()
        return CredentialResolver.from_config(self.config, az)

    @property
    def region(self) -> str:
        return self.resolver.region

    @cached_property
    def ec2(self) -> ENIClient:
        logger.debug("Initializing the EC2 Client")
        return ENIClient(session=self.resolver.session(), region_name=self.region)

    @cached_property
    def interface(self) -> str:
        return self.config.interface or self.metadata.default_interface_name()

    def _engine(self) -> ReconciliationEngine:
        interface = self.interface
        return ReconciliationEngine(
            mutator=DeferredMutator(lambda: self.ec2),
            observe=lambda: self.metadata.private_ips(interface),
            store=self.store,
            clock=self._clock,
            sleep=self._sleep,
            poll_interval=self.poll_interval,
            on_status=self._on_status,
        )

    def _request(self) -> AssignmentRequest:
        return AssignmentRequest(
            name=self.config.name,
            eni_id=self.metadata.eni_id(self.interface),
            desired_ip=self.config.ip,
            timeout=self.config.timeout or None,
        )

    def assign(self) -> ReconcileResult:
        request = self._request()
        logger.debug("assign %s on %s (%s)", request.desired_ip, self.interface, request.eni_id)
        return self._engine().assign(request)

    def unassign(self) -> ReconcileResult:
        request = self._request()
        logger.debug("unassign %s on %s (%s)", request.desired_ip, self.interface, request.eni_id)
        return self._engine().unassign(request)

    def describe(self):
        """The interface as EC2 reports it."""
        return self.ec2.get_network_interface(self.metadata.eni_id(self.interface))

    def find_snapshot_id(self, volume_id: str, most_recent: bool = False) -> str:
        snapshots = SnapshotClient(
            session=self.resolver.session(), region_name=self.region
        )
        return snapshots.find_snapshot_id(volume_id, most_recent)
