"""Secondary private IP reconciliation."""

from .engine import ReconciliationEngine
from .models import AssignmentRequest, Phase, ReconcileResult
from .resource import SecondaryIPResource

__all__ = [
    "ReconciliationEngine",
    "AssignmentRequest",
    "Phase",
    "ReconcileResult",
    "SecondaryIPResource",
]
