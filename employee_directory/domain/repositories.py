"""Repository classes for MongoDB data access."""

from __future__ import annotations

from typing import Iterator, List, Optional

from bson import ObjectId
from pymongo import ASCENDING
from pymongo.collection import Collection
from pymongo.results import DeleteResult, UpdateResult

from .models import DepartmentCount, Employee


class EmployeeRepository:
    """
    Repository for employee data access using MongoDB.

    Each method issues exactly one request against the collection.
    """

    COLLECTION = "employees"

    @staticmethod
    def _stream(cursor) -> Iterator[Employee]:
        for doc in cursor:
            yield Employee.from_dict(doc)

    @staticmethod
    def create_indexes(collection: Collection) -> List[str]:
        """Create the unique email index and the lookup indexes."""
        return [
            collection.create_index([("email", ASCENDING)], unique=True, name="uniq_email"),
            collection.create_index([("department", ASCENDING)], name="idx_department"),
            collection.create_index([("joiningDate", ASCENDING)], name="idx_joining_date"),
        ]

    @staticmethod
    def insert(collection: Collection, employee: Employee) -> Employee:
        """Insert a new employee and return it with its assigned id."""
        result = collection.insert_one(employee.to_dict())
        employee.id = str(result.inserted_id)
        return employee

    @staticmethod
    def get_by_email(collection: Collection, email: str) -> Optional[Employee]:
        doc = collection.find_one({"email": email})
        return Employee.from_dict(doc) if doc else None

    @staticmethod
    def find_all_by_email(collection: Collection, email: str) -> List[Employee]:
        """Get every record carrying this email (used for update snapshots)."""
        return list(EmployeeRepository._stream(collection.find({"email": email})))

    @staticmethod
    def update_by_email(collection: Collection, email: str, changes: dict) -> UpdateResult:
        """Apply an update expression to the first record with this email."""
        return collection.update_one({"email": email}, changes)

    @staticmethod
    def delete_by_email(collection: Collection, email: str) -> DeleteResult:
        return collection.delete_one({"email": email})

    @staticmethod
    def delete_by_id(collection: Collection, object_id: ObjectId) -> DeleteResult:
        return collection.delete_one({"_id": object_id})

    @staticmethod
    def find_by_name_regex(collection: Collection, pattern: str) -> Iterator[Employee]:
        """Case-insensitive regex match on name."""
        return EmployeeRepository._stream(
            collection.find({"name": {"$regex": pattern, "$options": "i"}})
        )

    @staticmethod
    def find_by_department(collection: Collection, department: str) -> Iterator[Employee]:
        return EmployeeRepository._stream(collection.find({"department": department}))

    @staticmethod
    def find_by_skill(collection: Collection, skill: str) -> Iterator[Employee]:
        """Records whose skills array contains the value."""
        return EmployeeRepository._stream(collection.find({"skills": {"$in": [skill]}}))

    @staticmethod
    def find_by_joining_date_range(collection: Collection, start: str, end: str) -> Iterator[Employee]:
        """Inclusive range on the ISO date string (lexicographic comparison)."""
        return EmployeeRepository._stream(
            collection.find({"joiningDate": {"$gte": start, "$lte": end}})
        )

    @staticmethod
    def get_page(collection: Collection, sort_key: str, skip: int, limit: int) -> List[Employee]:
        # _id as tie-breaker keeps equal sort keys in a stable order across pages
        cursor = (
            collection.find()
            .sort([(sort_key, ASCENDING), ("_id", ASCENDING)])
            .skip(skip)
            .limit(limit)
        )
        return list(EmployeeRepository._stream(cursor))

    @staticmethod
    def get_all(collection: Collection, sort_key: str = "name") -> List[Employee]:
        cursor = collection.find().sort([(sort_key, ASCENDING), ("_id", ASCENDING)])
        return list(EmployeeRepository._stream(cursor))

    @staticmethod
    def count_by_department(collection: Collection) -> List[DepartmentCount]:
        pipeline = [{"$group": {"_id": "$department", "count": {"$sum": 1}}}]
        return [DepartmentCount.from_dict(row) for row in collection.aggregate(pipeline)]
