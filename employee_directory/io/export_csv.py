"""CSV export utilities to export employees from MongoDB."""

from __future__ import annotations

from pathlib import Path

import pandas as pd

from employee_directory.services.directory import EmployeeDirectoryService


EXPORT_COLUMNS = ["id", "name", "email", "age", "department", "skills", "joining_date", "salary"]


def export_employees_csv(
    service: EmployeeDirectoryService,
    csv_path: str | Path,
    sort_field: str = "name",
) -> int:
    """
    Export employees from MongoDB to CSV.

    Args:
        service: Directory service bound to the source collection
        csv_path: Path to output CSV
        sort_field: Field the rows are ordered by

    Returns:
        Number of employees exported
    """
    employees = service.all_employees(sort_field)

    records = []
    for emp in employees:
        records.append({
            'id': emp.id,
            'name': emp.name,
            'email': emp.email,
            'age': emp.age,
            'department': emp.department,
            'skills': ";".join(emp.skills),
            'joining_date': emp.joining_date,
            'salary': emp.salary,
        })

    df = pd.DataFrame(records, columns=EXPORT_COLUMNS)
    df.to_csv(csv_path, index=False)

    print(f"[INFO] Exported {len(records)} employees to {csv_path}")
    return len(records)
