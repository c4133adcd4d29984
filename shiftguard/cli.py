"""Command-line interface for the shift normalization engine."""

from __future__ import annotations

import argparse
import json
import sys
from datetime import date
from pathlib import Path

from shiftguard.config import load_config
from shiftguard.domain.db import DEFAULT_DB_URL, get_session, init_database, reset_database
from shiftguard.domain.repositories import ConstraintRepository, EmployeeRepository
from shiftguard.engine.orchestrator import Orchestrator
from shiftguard.io.export_csv import export_coverage_csv, export_employees_csv, export_shifts_csv
from shiftguard.io.import_csv import import_constraints_csv, import_employees_csv
from shiftguard.validator import summarize_result, validate_result


def _read_input(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    return Path(path).read_text(encoding="utf-8")


def _cmd_init_db(args: argparse.Namespace) -> None:
    """Initialize the database."""
    db_url = args.db or DEFAULT_DB_URL
    if args.reset:
        reset_database(db_url)
    else:
        init_database(db_url)
    print(f"[OK] Database initialized: {db_url}")


def _cmd_import_csv(args: argparse.Namespace) -> None:
    """Import roster and constraint CSVs into the database."""
    db_url = args.db or DEFAULT_DB_URL
    session = get_session(db_url)

    try:
        if args.employees:
            count = import_employees_csv(session, args.employees)
            print(f"[OK] Imported {count} employees")

        if args.constraints:
            count = import_constraints_csv(session, args.constraints)
            print(f"[OK] Imported {count} constraints")

        session.close()
        print("[OK] CSV import complete")

    except Exception as e:
        session.rollback()
        session.close()
        print(f"[ERROR] Import failed: {e}")
        raise


def _cmd_export(args: argparse.Namespace) -> None:
    """Export the stored roster to CSV."""
    db_url = args.db or DEFAULT_DB_URL
    session = get_session(db_url)

    try:
        count = export_employees_csv(session, args.employees)
        session.close()
        print(f"[OK] Exported {count} employees to {args.employees}")

    except Exception as e:
        session.close()
        print(f"[ERROR] Export failed: {e}")
        raise


def _cmd_analyze(args: argparse.Namespace) -> None:
    """Normalize a schedule text file against the store rules."""
    cfg = load_config(args.config)
    employees, constraints = cfg.employees, cfg.constraints

    db_url = args.db or cfg.db_url
    if db_url:
        session = get_session(db_url)
        try:
            employees = EmployeeRepository.get_all(session)
            constraints = ConstraintRepository.get_all(session)
        finally:
            session.close()
        print(f"[INFO] Loaded {len(employees)} employees and {len(constraints)} constraints from {db_url}")

    reference_date = date.fromisoformat(args.date) if args.date else None
    text = _read_input(args.input)

    result = Orchestrator(verbose=args.verbose).analyze(
        text,
        cfg.store,
        employees,
        constraints,
        reference_date=reference_date,
    )

    if args.strict:
        validate_result(result, employees, cfg.store)
        print("[OK] Result invariants hold")

    if args.json:
        Path(args.json).write_text(json.dumps(result.to_dict(), indent=2), encoding="utf-8")
        print(f"[INFO] Result written to {args.json}")
    if args.shifts_csv:
        export_shifts_csv(result, args.shifts_csv)
    if args.coverage_csv:
        export_coverage_csv(result, args.coverage_csv)

    print(summarize_result(result))
    if not result.is_valid:
        raise SystemExit(1)


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="shiftguard",
        description="Shift schedule normalization and compliance checks",
    )

    # Global options
    parser.add_argument("--db", help=f"Database URL (default: {DEFAULT_DB_URL})")

    sub = parser.add_subparsers(dest="command", required=True)

    # init-db command
    init = sub.add_parser("init-db", help="Initialize database")
    init.add_argument("--reset", action="store_true", help="Drop and recreate all tables")
    init.set_defaults(func=_cmd_init_db)

    # import-csv command
    imp = sub.add_parser("import-csv", help="Import roster/constraint CSVs into database")
    imp.add_argument("--employees", help="Path to roster CSV")
    imp.add_argument("--constraints", help="Path to constraints CSV")
    imp.set_defaults(func=_cmd_import_csv)

    # export command
    exp = sub.add_parser("export", help="Export the stored roster to CSV")
    exp.add_argument("--employees", required=True, help="Path to export roster CSV")
    exp.set_defaults(func=_cmd_export)

    # analyze command
    ana = sub.add_parser("analyze", help="Normalize a schedule and report violations")
    ana.add_argument("--config", required=True, help="Path to config YAML/JSON")
    ana.add_argument("--input", required=True, help="Schedule text file ('-' for stdin)")
    ana.add_argument("--date", help="Reference day YYYY-MM-DD (default: today)")
    ana.add_argument("--json", help="Optional: write the result as JSON")
    ana.add_argument("--shifts-csv", help="Optional: export shifts to CSV")
    ana.add_argument("--coverage-csv", help="Optional: export coverage slots to CSV")
    ana.add_argument("--strict", action="store_true", help="Re-check result invariants")
    ana.add_argument("--verbose", action="store_true", help="Print per-stage progress")
    ana.set_defaults(func=_cmd_analyze)

    args = parser.parse_args(argv)
    args.func(args)


if __name__ == "__main__":
    main()
