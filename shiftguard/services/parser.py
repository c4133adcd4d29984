"""Extract (employee, start, end) candidates from free-text schedule lines."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import date
from typing import Dict, List, Sequence

from shiftguard.domain.models import Employee, RawCandidate

from .timeplan import anchor

# "[Mgr] Alice: 09:00 - 17:00"; the bracketed tag is optional and ignored.
LINE_RE = re.compile(
    r"(?:\[.*?\]\s*)?([A-Za-z][A-Za-z .'\-]*?)\s*:\s*(\d{1,2}:\d{2})\s*-\s*(\d{1,2}:\d{2})"
)

PARSE_ERROR = "Could not parse any shifts from input. Use format 'Name: HH:mm - HH:mm'"


@dataclass
class ParseOutcome:
    candidates: List[RawCandidate] = field(default_factory=list)
    skipped: List[int] = field(default_factory=list)  # 1-based line numbers


def _roster_index(employees: Sequence[Employee]) -> Dict[str, Employee]:
    index: Dict[str, Employee] = {}
    for emp in employees:
        # first roster entry wins on duplicate names
        index.setdefault(" ".join(emp.name.split()).lower(), emp)
    return index


def parse_schedule_text(text: str, employees: Sequence[Employee], reference_date: date) -> ParseOutcome:
    """
    Parse one shift expression per line.

    Lines that do not match the grammar, carry an impossible time or name
    nobody on the roster are skipped silently and recorded in ``skipped``.

    Args:
        text: Multi-line schedule text
        employees: Roster to match names against (case-insensitive)
        reference_date: Day every ``HH:MM`` is anchored to

    Returns:
        ParseOutcome with candidates in line order
    """
    outcome = ParseOutcome()
    roster = _roster_index(employees)

    for line_number, line in enumerate((text or "").splitlines(), start=1):
        if not line.strip():
            continue
        match = LINE_RE.search(line)
        if not match:
            outcome.skipped.append(line_number)
            continue
        name, start_str, end_str = match.groups()
        emp = roster.get(" ".join(name.split()).lower())
        if emp is None:
            outcome.skipped.append(line_number)
            continue
        try:
            start = anchor(reference_date, start_str)
            end = anchor(reference_date, end_str)
        except ValueError:
            outcome.skipped.append(line_number)
            continue
        outcome.candidates.append(RawCandidate(employee=emp, start=start, end=end, line_number=line_number))

    return outcome
