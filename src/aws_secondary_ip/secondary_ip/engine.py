"""Secondary IP reconciliation engine.

Drives one assign or unassign through ``Idle -> Checking -> Mutating ->
Waiting -> Settled`` (or ``TimedOut``). The live address list of the
interface is the source of truth: every run re-reads it in Checking, so a
repeated action short-circuits without touching the EC2 API.
"""

import time
from typing import Callable, Optional, Protocol

from ..config import POLL_INTERVAL
from ..core.exceptions import ReconciliationTimeout
from ..core.logging import get_logger
from ..core.store import RunStateStore, secondary_ip_key
from .models import AssignmentRequest, Operation, Phase, ReconcileResult

logger = get_logger("engine")


class PrivateIPMutator(Protocol):
    def assign_private_ip(self, eni_id: str, ip: Optional[str] = None): ...

    def unassign_private_ip(self, eni_id: str, ip: str): ...


class ReconciliationEngine:
    """Compare desired vs. observed addresses, mutate once, wait for the change.

    Args:
        mutator: issues the EC2 assign/unassign calls
        observe: returns the interface's current private IPv4 set; called
            fresh on every poll
        store: run-state store the outcome is recorded in
        clock: monotonic seconds
        sleep: blocks for the given seconds between polls
        poll_interval: seconds between observations while waiting
        on_status: optional callback receiving progress messages
    """

    def __init__(
        self,
        mutator: PrivateIPMutator,
        observe: Callable[[], set[str]],
        store: RunStateStore,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
        poll_interval: float = POLL_INTERVAL,
        on_status: Optional[Callable[[str], None]] = None,
    ):
        self.mutator = mutator
        self.observe = observe
        self.store = store
        self._clock = clock
        self._sleep = sleep
        self.poll_interval = poll_interval
        self._on_status = on_status
        self.phase = Phase.IDLE
        self._phases: list[Phase] = []

    def _status(self, msg: str):
        logger.debug(msg)
        if self._on_status:
            self._on_status(msg)

    def _transition(self, phase: Phase):
        logger.debug("%s -> %s", self.phase.value, phase.value)
        self.phase = phase
        self._phases.append(phase)

    def _start(self):
        self.phase = Phase.IDLE
        self._phases = [Phase.IDLE]
        self._transition(Phase.CHECKING)

    def desired_ip(self, request: AssignmentRequest) -> Optional[str]:
        """The previously recorded IP for this action wins over the requested one."""
        recorded = self.store.get(secondary_ip_key(request.name))
        return recorded or request.desired_ip

    def _observe(self) -> set[str]:
        return set(self.observe())

    def _settle(
        self,
        operation: Operation,
        request: AssignmentRequest,
        ip: Optional[str],
        changed: bool,
        before: set[str],
        after: set[str],
        elapsed: float = 0.0,
        requested_ip: Optional[str] = None,
    ) -> ReconcileResult:
        self._transition(Phase.SETTLED)
        if changed:
            self.store.set(secondary_ip_key(request.name), ip)
        return ReconcileResult(
            operation=operation,
            eni_id=request.eni_id,
            ip=ip,
            changed=changed,
            requested_ip=requested_ip,
            phase=self.phase,
            elapsed=elapsed,
            before=before,
            after=after,
            phases=list(self._phases),
        )

    def _wait(
        self,
        noun: str,
        request: AssignmentRequest,
        settled: Callable[[set[str]], bool],
    ) -> tuple[set[str], float]:
        self._transition(Phase.WAITING)
        start = self._clock()
        while True:
            current = self._observe()
            elapsed = self._clock() - start
            if settled(current):
                return current, elapsed
            if request.timeout and elapsed >= request.timeout:
                self._transition(Phase.TIMED_OUT)
                raise ReconciliationTimeout(noun, request.timeout, elapsed)
            self._status(
                f"Waiting for {noun} on {request.eni_id} "
                f"({len(current)} address(es), {elapsed:.0f}s elapsed)"
            )
            self._sleep(self.poll_interval)

    def assign(self, request: AssignmentRequest) -> ReconcileResult:
        self._start()
        ip = self.desired_ip(request)
        baseline = self._observe()

        if ip and ip in baseline:
            logger.debug("secondary ip (%s) is already attached to %s", ip, request.eni_id)
            return self._settle(
                "assign", request, ip, False, baseline, baseline, requested_ip=ip
            )

        self._transition(Phase.MUTATING)
        self._status(f"Assigning {ip or 'a new secondary IP'} to {request.eni_id}")
        self.mutator.assign_private_ip(request.eni_id, ip)

        current, elapsed = self._wait(
            "assignment", request, lambda seen: len(seen) > len(baseline)
        )
        added = current - baseline
        if ip in added:
            assigned = ip
        else:
            assigned = sorted(added)[0] if added else ip
        logger.info("Secondary IP %s assigned to %s", assigned, request.eni_id)
        return self._settle(
            "assign", request, assigned, True, baseline, current, elapsed, ip
        )

    def unassign(self, request: AssignmentRequest) -> ReconcileResult:
        self._start()
        ip = self.desired_ip(request)
        baseline = self._observe()

        if not ip or ip not in baseline:
            logger.debug("Secondary IP %s is already detached from %s", ip, request.eni_id)
            return self._settle(
                "unassign", request, None, False, baseline, baseline, requested_ip=ip
            )

        self._transition(Phase.MUTATING)
        self._status(f"Unassigning {ip} from {request.eni_id}")
        self.mutator.unassign_private_ip(request.eni_id, ip)

        # Compared against the pre-mutation baseline; assumes nothing else
        # changes the interface's addresses while waiting.
        current, elapsed = self._wait(
            "unassignment", request, lambda seen: len(seen) < len(baseline)
        )
        logger.info("Secondary IP %s unassigned from %s", ip, request.eni_id)
        return self._settle(
            "unassign", request, None, True, baseline, current, elapsed, ip
        )
