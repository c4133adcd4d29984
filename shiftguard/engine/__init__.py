"""Analysis engine: per-candidate pipeline and result aggregation."""

from .aggregator import build_result
from .orchestrator import Orchestrator, analyze_schedule, sequential_ids

__all__ = [
    "Orchestrator",
    "analyze_schedule",
    "build_result",
    "sequential_ids",
]
