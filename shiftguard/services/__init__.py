"""Services for parsing and per-shift rule application."""

from .availability import AvailabilityTrimmer
from .base import AnalysisContext, ShiftRule
from .constraints import ComplianceAdjuster
from .coverage import CoverageReport, analyze_coverage
from .lunch import LunchInserter, plan_lunch
from .parser import ParseOutcome, parse_schedule_text
from .requirements import resolve_min_staff, unavailability_by_employee
from .timeplan import parse_time_string, round_to_quarter

__all__ = [
    "AnalysisContext",
    "ShiftRule",
    "AvailabilityTrimmer",
    "ComplianceAdjuster",
    "LunchInserter",
    "plan_lunch",
    "CoverageReport",
    "analyze_coverage",
    "ParseOutcome",
    "parse_schedule_text",
    "resolve_min_staff",
    "unavailability_by_employee",
    "parse_time_string",
    "round_to_quarter",
]
