"""Employee directory service - record operations over one collection."""

from __future__ import annotations

import re
from dataclasses import replace
from typing import Iterable, Iterator, List, Optional

from pymongo.errors import DuplicateKeyError

from employee_directory.domain.db import MongoConnection
from employee_directory.domain.errors import DuplicateEmailError, NoChangesRequestedError
from employee_directory.domain.models import (
    DeleteOutcome,
    DeleteResult,
    DepartmentCount,
    Employee,
    EmployeePage,
    UpdateOutcome,
    UpdateResult,
)
from employee_directory.domain.repositories import EmployeeRepository

from .validation import (
    clean_skills,
    normalize_email,
    parse_object_id,
    require_fields,
    resolve_sort_field,
    validate_date,
    validate_page,
)


class EmployeeDirectoryService:
    """
    Add, update, delete, search, list and aggregate employee records.

    The service returns structured results and never prints; rendering is left
    to the caller. Store errors propagate unchanged.
    """

    def __init__(
        self,
        connection: MongoConnection,
        collection_name: str = EmployeeRepository.COLLECTION,
        page_size: int = 5,
    ):
        self.connection = connection
        self.collection = connection.get_database()[collection_name]
        self.page_size = page_size

    def ensure_indexes(self) -> List[str]:
        """
        Create the indexes the directory relies on.

        The unique index on email is what guarantees one record per email;
        without it concurrent adds could both succeed.
        """
        return EmployeeRepository.create_indexes(self.collection)

    def add(self, employee: Employee) -> Employee:
        """
        Insert a new employee.

        The argument is left untouched; the stored copy (with its id) is returned.

        Raises:
            MissingFieldError: name or email is empty
            InvalidDateFormatError: joining date is not YYYY-MM-DD
            DuplicateEmailError: a record with this email already exists
        """
        require_fields({"name": employee.name, "email": employee.email}, ("name", "email"))
        record = replace(
            employee,
            id=None,
            email=normalize_email(employee.email),
            joining_date=validate_date(employee.joining_date),
            skills=clean_skills(employee.skills),
        )
        try:
            return EmployeeRepository.insert(self.collection, record)
        except DuplicateKeyError:
            raise DuplicateEmailError(record.email) from None

    def find_by_email(self, email: str) -> Optional[Employee]:
        return EmployeeRepository.get_by_email(self.collection, normalize_email(email))

    def update(
        self,
        email: str,
        department: Optional[str] = None,
        add_skills: Iterable[str] = (),
    ) -> UpdateResult:
        """
        Replace the department and/or add skills (set-union) on the record with this email.

        The outcome is derived from the store's counts: nothing matched,
        matched but nothing changed, or updated.
        """
        email = normalize_email(email)
        changes = {}
        if department is not None and department.strip():
            changes["$set"] = {"department": department.strip()}
        skills = clean_skills(add_skills)
        if skills:
            changes["$addToSet"] = {"skills": {"$each": skills}}
        if not changes:
            raise NoChangesRequestedError()

        before = EmployeeRepository.find_all_by_email(self.collection, email)
        result = EmployeeRepository.update_by_email(self.collection, email, changes)
        after = EmployeeRepository.find_all_by_email(self.collection, email)

        if result.matched_count == 0:
            outcome = UpdateOutcome.NOT_FOUND
        elif result.modified_count == 0:
            outcome = UpdateOutcome.UNCHANGED
        else:
            outcome = UpdateOutcome.UPDATED

        return UpdateResult(
            email=email,
            outcome=outcome,
            matched_count=result.matched_count,
            modified_count=result.modified_count,
            before=before,
            after=after,
        )

    def delete_by_email(self, email: str) -> DeleteResult:
        email = normalize_email(email)
        result = EmployeeRepository.delete_by_email(self.collection, email)
        return self._delete_result(email, result.deleted_count)

    def delete_by_id(self, identifier: str) -> DeleteResult:
        """Delete by ObjectId hex string; raises InvalidEmployeeIdError if malformed."""
        object_id = parse_object_id(identifier)
        result = EmployeeRepository.delete_by_id(self.collection, object_id)
        return self._delete_result(str(object_id), result.deleted_count)

    @staticmethod
    def _delete_result(key: str, deleted_count: int) -> DeleteResult:
        outcome = DeleteOutcome.DELETED if deleted_count else DeleteOutcome.NOT_FOUND
        return DeleteResult(key=key, outcome=outcome, deleted_count=deleted_count)

    def search_by_name(self, keyword: str, pattern: bool = False) -> Iterator[Employee]:
        """
        Case-insensitive name search.

        The keyword is matched as a plain substring unless pattern=True, in
        which case it is used as a regular expression.
        """
        regex = keyword if pattern else re.escape(keyword)
        return EmployeeRepository.find_by_name_regex(self.collection, regex)

    def search_by_department(self, department: str) -> Iterator[Employee]:
        return EmployeeRepository.find_by_department(self.collection, department)

    def search_by_skill(self, skill: str) -> Iterator[Employee]:
        return EmployeeRepository.find_by_skill(self.collection, skill)

    def search_by_joining_date_range(self, start: str, end: str) -> Iterator[Employee]:
        """Records whose joining date lies within [start, end], both YYYY-MM-DD."""
        return EmployeeRepository.find_by_joining_date_range(
            self.collection, validate_date(start), validate_date(end)
        )

    def list_employees(
        self,
        page: int = 1,
        page_size: Optional[int] = None,
        sort_field: str = "name",
    ) -> EmployeePage:
        """Return one 1-based page of all records sorted ascending by sort_field."""
        size = self.page_size if page_size is None else page_size
        skip = validate_page(page, size)
        sort_key = resolve_sort_field(sort_field)
        items = EmployeeRepository.get_page(self.collection, sort_key, skip, size)
        return EmployeePage(page=page, page_size=size, sort_field=sort_key, items=items)

    def all_employees(self, sort_field: str = "name") -> List[Employee]:
        return EmployeeRepository.get_all(self.collection, resolve_sort_field(sort_field))

    def department_stats(self) -> List[DepartmentCount]:
        """One (department, count) row per distinct department, in no defined order."""
        return EmployeeRepository.count_by_department(self.collection)
