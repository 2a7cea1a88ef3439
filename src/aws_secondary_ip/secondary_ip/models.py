"""Data models for secondary IP reconciliation."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Literal, Optional

Operation = Literal["assign", "unassign"]


class Phase(str, Enum):
    IDLE = "idle"
    CHECKING = "checking"
    MUTATING = "mutating"
    WAITING = "waiting"
    SETTLED = "settled"
    TIMED_OUT = "timed_out"


@dataclass(frozen=True)
class AssignmentRequest:
    """One assign/unassign invocation against a resolved ENI."""

    name: str
    eni_id: str
    desired_ip: Optional[str] = None
    timeout: Optional[float] = None  # seconds; None or 0 waits forever


@dataclass
class ReconcileResult:
    """Outcome of a reconciliation run."""

    operation: Operation
    eni_id: str
    ip: Optional[str]
    changed: bool
    requested_ip: Optional[str] = None
    phase: Phase = Phase.SETTLED
    elapsed: float = 0.0
    before: set[str] = field(default_factory=set)
    after: set[str] = field(default_factory=set)
    phases: list[Phase] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "operation": self.operation,
            "eni_id": self.eni_id,
            "ip": self.ip,
            "requested_ip": self.requested_ip,
            "changed": self.changed,
            "phase": self.phase.value,
            "elapsed": round(self.elapsed, 3),
            "before": sorted(self.before),
            "after": sorted(self.after),
        }

    def summary(self) -> str:
        ip = self.ip if self.operation == "assign" else self.requested_ip
        if not self.changed:
            return f"{self.operation}: {ip or '-'} on {self.eni_id} already converged"
        verb = "assigned to" if self.operation == "assign" else "unassigned from"
        return f"{ip} {verb} {self.eni_id} in {self.elapsed:.1f}s"
