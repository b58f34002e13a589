"""Input validation at the directory service boundary."""

from __future__ import annotations

import re
from datetime import datetime
from typing import Dict, Iterable, List

from bson import ObjectId
from bson.errors import InvalidId

from employee_directory.domain.errors import (
    InvalidDateFormatError,
    InvalidEmployeeIdError,
    InvalidPageError,
    MissingFieldError,
    UnknownSortFieldError,
)

_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")

# Accepted sort names -> stored document keys
SORT_FIELDS: Dict[str, str] = {
    "name": "name",
    "email": "email",
    "age": "age",
    "department": "department",
    "joiningDate": "joiningDate",
    "joining_date": "joiningDate",
    "salary": "salary",
}


def validate_date(value: str) -> str:
    """
    Check that a date is a real calendar date written as YYYY-MM-DD.

    Range queries compare these strings lexicographically, which only orders
    correctly for the fixed-width form.
    """
    value = (value or "").strip()
    if not _ISO_DATE.match(value):
        raise InvalidDateFormatError(value)
    try:
        datetime.strptime(value, "%Y-%m-%d")
    except ValueError:
        raise InvalidDateFormatError(value) from None
    return value


def resolve_sort_field(field: str) -> str:
    key = SORT_FIELDS.get((field or "").strip())
    if key is None:
        raise UnknownSortFieldError(field, SORT_FIELDS.keys())
    return key


def validate_page(page: int, page_size: int) -> int:
    """Return the number of records to skip for a 1-based page."""
    if page < 1 or page_size < 1:
        raise InvalidPageError(page, page_size)
    return (page - 1) * page_size


def parse_object_id(identifier: str) -> ObjectId:
    try:
        return ObjectId((identifier or "").strip())
    except (InvalidId, TypeError):
        raise InvalidEmployeeIdError(identifier) from None


def require_fields(values: Dict[str, str], fields: Iterable[str]) -> None:
    for name in fields:
        value = values.get(name)
        if value is None or (isinstance(value, str) and not value.strip()):
            raise MissingFieldError(name)


def clean_skills(skills: Iterable[str]) -> List[str]:
    """Strip whitespace and drop empty entries; order and duplicates are kept."""
    return [s.strip() for s in skills if s and s.strip()]


def split_skills(raw: str, sep: str = ",") -> List[str]:
    return clean_skills((raw or "").split(sep))


def normalize_email(email: str) -> str:
    """Emails are stored and looked up without surrounding whitespace."""
    return (email or "").strip()
