"""Domain models and data access layer."""

from .models import (
    DeleteOutcome,
    DeleteResult,
    DepartmentCount,
    Employee,
    EmployeePage,
    UpdateOutcome,
    UpdateResult,
)
from .repositories import EmployeeRepository

__all__ = [
    "Employee",
    "EmployeePage",
    "DepartmentCount",
    "UpdateOutcome",
    "UpdateResult",
    "DeleteOutcome",
    "DeleteResult",
    "EmployeeRepository",
]
