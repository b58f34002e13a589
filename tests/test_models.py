import pytest
from bson import ObjectId

from employee_directory.domain.errors import (
    InvalidDateFormatError,
    InvalidEmployeeIdError,
    InvalidPageError,
    MissingFieldError,
    UnknownSortFieldError,
)
from employee_directory.domain.models import DepartmentCount, Employee
from employee_directory.services.validation import (
    parse_object_id,
    require_fields,
    resolve_sort_field,
    split_skills,
    validate_date,
    validate_page,
)


class TestEmployeeModel:
    def test_to_dict_uses_stored_keys(self):
        emp = Employee(
            name="Bob Lim", email="bob@example.com", age=45, department="Finance",
            skills=["excel"], joining_date="2019-07-01", salary=87000.0, id="ignored",
        )
        assert emp.to_dict() == {
            "name": "Bob Lim",
            "email": "bob@example.com",
            "age": 45,
            "department": "Finance",
            "skills": ["excel"],
            "joiningDate": "2019-07-01",
            "salary": 87000.0,
        }

    def test_from_dict_converts_object_id(self):
        oid = ObjectId()
        emp = Employee.from_dict({"_id": oid, "name": "Bob", "email": "b@x.io", "joiningDate": "2020-01-01"})
        assert emp.id == str(oid)
        assert emp.joining_date == "2020-01-01"
        assert emp.skills == []

    def test_department_count_from_group_row(self):
        row = DepartmentCount.from_dict({"_id": "HR", "count": 4})
        assert row.department == "HR"
        assert row.count == 4


class TestValidation:
    @pytest.mark.parametrize("value", ["2023-01-01", " 2024-02-29 "])
    def test_valid_dates(self, value):
        assert validate_date(value) == value.strip()

    @pytest.mark.parametrize("value", ["", "2023-1-01", "01-01-2023", "2023-13-01", "2023-02-29", "2023/01/01"])
    def test_invalid_dates(self, value):
        with pytest.raises(InvalidDateFormatError):
            validate_date(value)

    def test_sort_fields(self):
        assert resolve_sort_field("name") == "name"
        assert resolve_sort_field("joiningDate") == "joiningDate"
        assert resolve_sort_field("joining_date") == "joiningDate"
        with pytest.raises(UnknownSortFieldError):
            resolve_sort_field("_id")

    def test_page_skip(self):
        assert validate_page(1, 5) == 0
        assert validate_page(3, 5) == 10
        with pytest.raises(InvalidPageError):
            validate_page(0, 5)

    def test_object_id(self):
        oid = ObjectId()
        assert parse_object_id(str(oid)) == oid
        with pytest.raises(InvalidEmployeeIdError):
            parse_object_id("123")

    def test_require_fields(self):
        require_fields({"name": "A", "email": "a@x.io"}, ("name", "email"))
        with pytest.raises(MissingFieldError):
            require_fields({"name": "", "email": "a@x.io"}, ("name", "email"))

    def test_split_skills(self):
        assert split_skills("python, sql,,  go ") == ["python", "sql", "go"]
        assert split_skills("a;b;a", sep=";") == ["a", "b", "a"]
        assert split_skills("") == []
