"""Orchestrator - runs the parse, per-shift rules, coverage and aggregation stages."""

from __future__ import annotations

import itertools
from datetime import date
from typing import Callable, Iterable, List, Optional, Sequence

from shiftguard.config import StoreConfig, validate_constraints
from shiftguard.domain.models import Constraint, Employee, RawCandidate, ScheduleResult, Shift, ShiftDraft
from shiftguard.services.availability import AvailabilityTrimmer
from shiftguard.services.base import AnalysisContext, ShiftRule
from shiftguard.services.constraints import ComplianceAdjuster
from shiftguard.services.coverage import analyze_coverage
from shiftguard.services.lunch import LunchInserter, paid_minutes
from shiftguard.services.parser import parse_schedule_text
from shiftguard.services.timeplan import format_hm

from .aggregator import build_result


def sequential_ids(prefix: str = "shift") -> Callable[[], str]:
    """Deterministic id source: ``prefix-1``, ``prefix-2``, ..."""
    counter = itertools.count(1)
    return lambda: f"{prefix}-{next(counter)}"


class Orchestrator:
    """
    Single deterministic pass over user-supplied shifts.

    Each candidate goes through the rules in order (availability, then
    compliance), independently and in input order, then gets its lunch.
    Coverage is computed over the survivors and everything is aggregated
    into a ScheduleResult. No alternative placements are ever searched.
    """

    def __init__(
        self,
        rules: Sequence[ShiftRule] | None = None,
        lunch: LunchInserter | None = None,
        verbose: bool = False,
    ):
        """
        Initialize orchestrator with its rule order.

        Args:
            rules: Rules applied to every candidate (default: availability, compliance)
            lunch: Lunch inserter used to finalize shifts
            verbose: Print per-stage progress lines
        """
        self.rules: List[ShiftRule] = list(rules) if rules is not None else [AvailabilityTrimmer(), ComplianceAdjuster()]
        self.lunch = lunch or LunchInserter()
        self.verbose = verbose

    def _log(self, message: str) -> None:
        if self.verbose:
            print(message)

    def analyze(
        self,
        text: str,
        store: StoreConfig,
        employees: Sequence[Employee],
        constraints: Iterable[Constraint],
        reference_date: Optional[date] = None,
        id_factory: Optional[Callable[[], str]] = None,
    ) -> ScheduleResult:
        """
        Normalize a batch of free-text shifts against the store rules.

        Args:
            text: One ``[Tag] Name: HH:mm - HH:mm`` expression per line
            store: Store hours and labor rules
            employees: Roster snapshot
            constraints: NoSolo and Unavailable constraints
            reference_date: Day the times are anchored to (default: today)
            id_factory: Zero-argument callable returning shift ids

        Returns:
            ScheduleResult

        Raises:
            ConfigurationError: If the store config or a constraint is malformed
        """
        constraints = list(constraints)
        store.validate()
        validate_constraints(constraints)

        reference_date = reference_date or date.today()
        next_id = id_factory or sequential_ids("shift")
        ctx = AnalysisContext.build(store, constraints, reference_date)

        outcome = parse_schedule_text(text, employees, reference_date)
        self._log(
            f"[INFO] Parsed {len(outcome.candidates)} candidates "
            f"({len(outcome.skipped)} lines skipped) for {reference_date.isoformat()}"
        )

        shifts: List[Shift] = []
        for candidate in outcome.candidates:
            draft = self.process_candidate(candidate, ctx)
            if draft.is_removed:
                self._log(
                    f"[WARN] Dropped {candidate.employee.name} "
                    f"{format_hm(candidate.start)}-{format_hm(candidate.end)}: {'; '.join(draft.notes)}"
                )
                continue
            shift = self.lunch.build_shift(draft, store, next_id())
            ctx.record_paid_minutes(shift.employee_id, paid_minutes(shift))
            shifts.append(shift)

        coverage = analyze_coverage(shifts, ctx.open_at, ctx.close_at, ctx.min_staff)
        self._log(
            f"[INFO] Coverage: {len(coverage.slots)} slots, {coverage.failures} below min staff ({ctx.min_staff})"
        )

        result = build_result(
            shifts,
            coverage,
            budget=store.budget,
            input_text=text,
            candidate_count=len(outcome.candidates),
        )
        self._log(f"[OK] {len(result.shifts)} shifts, {result.total_hours_used:.2f} paid hours, valid={result.is_valid}")
        return result

    def process_candidate(self, candidate: RawCandidate, ctx: AnalysisContext) -> ShiftDraft:
        """Run every rule over one candidate and return its working window."""
        draft = ShiftDraft(employee=candidate.employee, start=candidate.start, end=candidate.end)
        for rule in self.rules:
            rule.apply(draft, ctx)
        return draft


def analyze_schedule(
    text: str,
    store: StoreConfig,
    employees: Sequence[Employee],
    constraints: Iterable[Constraint] = (),
    reference_date: Optional[date] = None,
    id_factory: Optional[Callable[[], str]] = None,
    verbose: bool = False,
) -> ScheduleResult:
    """
    Convenience function to analyze a schedule with the default rule order.

    See ``Orchestrator.analyze`` for the arguments.
    """
    orchestrator = Orchestrator(verbose=verbose)
    return orchestrator.analyze(
        text,
        store,
        employees,
        constraints,
        reference_date=reference_date,
        id_factory=id_factory,
    )
