"""Errors raised by the employee directory."""

from __future__ import annotations


class DirectoryError(Exception):
    """Base class for directory errors that callers are expected to handle."""


class DuplicateEmailError(DirectoryError):
    def __init__(self, email: str):
        self.email = email
        super().__init__(f"Employee with email {email!r} already exists")


class InvalidDateFormatError(DirectoryError):
    def __init__(self, value: str):
        self.value = value
        super().__init__(f"Invalid date {value!r}, expected YYYY-MM-DD")


class UnknownSortFieldError(DirectoryError):
    def __init__(self, field: str, allowed):
        self.field = field
        self.allowed = tuple(allowed)
        super().__init__(f"Unknown sort field {field!r}, expected one of: {', '.join(self.allowed)}")


class InvalidPageError(DirectoryError):
    def __init__(self, page: int, page_size: int):
        self.page = page
        self.page_size = page_size
        super().__init__(f"Page and page size must be >= 1 (got page={page}, page_size={page_size})")


class InvalidEmployeeIdError(DirectoryError):
    def __init__(self, identifier: str):
        self.identifier = identifier
        super().__init__(f"Invalid employee id {identifier!r}")


class MissingFieldError(DirectoryError):
    def __init__(self, field: str):
        self.field = field
        super().__init__(f"Field {field!r} is required")


class NoChangesRequestedError(DirectoryError):
    def __init__(self):
        super().__init__("Update needs a department or at least one skill")
