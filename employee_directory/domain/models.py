"""MongoDB-compatible models for the employee directory."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


@dataclass
class Employee:
    """Employee record as stored in the employees collection."""

    name: str
    email: str
    age: int
    department: str
    skills: List[str] = field(default_factory=list)
    joining_date: str = ""  # ISO format: YYYY-MM-DD
    salary: float = 0.0
    id: Optional[str] = None  # MongoDB ObjectId as hex string

    def __repr__(self) -> str:
        return f"<Employee(id={self.id}, name='{self.name}', email='{self.email}', dept='{self.department}')>"

    def to_dict(self) -> dict:
        """Convert to dictionary for MongoDB (without _id)."""
        return {
            "name": self.name,
            "email": self.email,
            "age": self.age,
            "department": self.department,
            "skills": list(self.skills),
            "joiningDate": self.joining_date,
            "salary": self.salary,
        }

    @classmethod
    def from_dict(cls, data: dict) -> Employee:
        """Create Employee from MongoDB document."""
        doc_id = data.get("_id", data.get("id"))
        return cls(
            id=str(doc_id) if doc_id is not None else None,
            name=data.get("name", ""),
            email=data.get("email", ""),
            age=data.get("age", 0),
            department=data.get("department", ""),
            skills=list(data.get("skills") or []),
            joining_date=data.get("joiningDate") or data.get("joining_date", ""),
            salary=data.get("salary", 0.0),
        )


class UpdateOutcome(str, Enum):
    NOT_FOUND = "not_found"
    UNCHANGED = "unchanged"
    UPDATED = "updated"


class DeleteOutcome(str, Enum):
    NOT_FOUND = "not_found"
    DELETED = "deleted"


@dataclass
class UpdateResult:
    """Outcome of an update plus the matching records before and after it."""

    email: str
    outcome: UpdateOutcome
    matched_count: int = 0
    modified_count: int = 0
    before: List[Employee] = field(default_factory=list)
    after: List[Employee] = field(default_factory=list)


@dataclass
class DeleteResult:
    key: str  # email or id the delete was issued for
    outcome: DeleteOutcome
    deleted_count: int = 0


@dataclass
class EmployeePage:
    page: int
    page_size: int
    sort_field: str
    items: List[Employee] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.items)


@dataclass
class DepartmentCount:
    department: Optional[str]
    count: int

    @classmethod
    def from_dict(cls, data: dict) -> DepartmentCount:
        """Create from a $group aggregation row."""
        return cls(department=data.get("_id"), count=int(data.get("count", 0)))
