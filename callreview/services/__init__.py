"""Server-side query and write operations."""

from .call_repository import CallRepository
from .evaluation_writer import EvaluationWriter, log_invalidation
from .metrics import MetricsAggregator, ALL_SCOPE, percentage, round_half_up

__all__ = [
    "CallRepository",
    "EvaluationWriter",
    "log_invalidation",
    "MetricsAggregator",
    "ALL_SCOPE",
    "percentage",
    "round_half_up",
]
