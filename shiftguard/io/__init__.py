"""I/O utilities for CSV import/export."""

from .export_csv import coverage_frame, export_coverage_csv, export_employees_csv, export_shifts_csv, shifts_frame
from .import_csv import import_constraints_csv, import_employees_csv, read_constraints_csv, read_employees_csv

__all__ = [
    "read_employees_csv",
    "read_constraints_csv",
    "import_employees_csv",
    "import_constraints_csv",
    "shifts_frame",
    "coverage_frame",
    "export_shifts_csv",
    "export_coverage_csv",
    "export_employees_csv",
]
