from reconciler.reconciliation.engine import compare, compare_serial, compare_specs, reconcile
from reconciler.reconciliation.models import (
    ComparisonResult,
    ImeiReconciliation,
    ReconciliationConfig,
)

__all__ = [
    "ComparisonResult",
    "ImeiReconciliation",
    "ReconciliationConfig",
    "compare",
    "compare_serial",
    "compare_specs",
    "reconcile",
]
