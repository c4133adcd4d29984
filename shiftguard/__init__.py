"""Shift schedule normalization and compliance engine.

Modules:
- config: store configuration, YAML/JSON loading and validation
- domain: value types, roster/constraint store and repositories
- services: parser, time helpers and the per-shift rules
- engine: orchestrator and result aggregation
- io: CSV import/export helpers
- validator: post-analysis invariant checks and text summary
- cli: command-line interface entrypoints
"""

from .config import ConfigurationError, SchedulerConfig, StoreConfig, load_config
from .engine.orchestrator import Orchestrator, analyze_schedule

__all__ = [
    "ConfigurationError",
    "SchedulerConfig",
    "StoreConfig",
    "load_config",
    "Orchestrator",
    "analyze_schedule",
]
