"""CSV import utilities to load employees into MongoDB."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Tuple

import pandas as pd

from employee_directory.domain.errors import DirectoryError, DuplicateEmailError
from employee_directory.domain.models import Employee
from employee_directory.services.directory import EmployeeDirectoryService
from employee_directory.services.validation import split_skills


REQUIRED_COLUMNS = ["name", "email", "age", "department", "skills", "joiningdate", "salary"]


@dataclass
class ImportSummary:
    imported: int = 0
    skipped_emails: List[str] = field(default_factory=list)
    rejected: List[Tuple[int, str]] = field(default_factory=list)  # (CSV line, reason)

    @property
    def skipped(self) -> int:
        return len(self.skipped_emails)


def _cell(value, default=""):
    if value is None or pd.isna(value) or str(value).strip() == "":
        return default
    return value


def row_to_employee(row) -> Employee:
    """Build an Employee from one normalized CSV row (skills are ';'-separated)."""
    return Employee(
        name=str(_cell(row["name"])).strip(),
        email=str(_cell(row["email"])).strip(),
        age=int(_cell(row["age"], 0)),
        department=str(_cell(row["department"])).strip(),
        skills=split_skills(str(_cell(row["skills"])), sep=";"),
        joining_date=str(_cell(row["joiningdate"])).strip(),
        salary=float(_cell(row["salary"], 0.0)),
    )


def import_employees_csv(service: EmployeeDirectoryService, csv_path: str | Path) -> ImportSummary:
    """
    Import employees from CSV into MongoDB.

    Rows whose email already exists are skipped and reported, not overwritten.
    Invalid rows (bad date, missing name or email, non-numeric age or salary)
    are recorded in the summary and the import continues with the next row.

    Args:
        service: Directory service bound to the target collection
        csv_path: Path to employees CSV

    Returns:
        ImportSummary with imported count, skipped emails and rejected rows
    """
    df = pd.read_csv(csv_path, dtype=str, keep_default_na=False)

    # Normalize column names (joining_date and joiningDate both accepted)
    df.columns = df.columns.str.lower().str.strip().str.replace("_", "", regex=False)

    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        raise ValueError(f"CSV {csv_path} is missing columns: {', '.join(missing)}")

    summary = ImportSummary()
    for position, (_, row) in enumerate(df.iterrows()):
        line = position + 2  # header is line 1
        try:
            employee = row_to_employee(row)
            service.add(employee)
            summary.imported += 1
        except DuplicateEmailError as e:
            summary.skipped_emails.append(e.email)
        except (DirectoryError, ValueError) as e:
            summary.rejected.append((line, str(e)))
            print(f"[WARN] Rejected CSV line {line}: {e}")

    if summary.skipped:
        print(f"[WARN] Skipped {summary.skipped} employees with existing emails")
    if summary.rejected:
        print(f"[WARN] Rejected {len(summary.rejected)} invalid rows")
    print(f"[INFO] Imported {summary.imported} employees from {csv_path}")
    return summary
