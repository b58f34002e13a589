import mongomock
import pytest

from employee_directory.domain.db import MongoConnection
from employee_directory.domain.models import Employee
from employee_directory.services.directory import EmployeeDirectoryService

ENV_VARS = ("MONGO_URI", "MONGO_DB", "MONGO_COLLECTION", "DIRECTORY_PAGE_SIZE", "MONGO_TIMEOUT_MS")


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep developer environment variables out of config resolution."""
    for var in ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setattr("employee_directory.config.load_dotenv", lambda *a, **k: False)


@pytest.fixture
def connection():
    conn = MongoConnection("mongodb://localhost:27017", "EmployeeDB_test", client_factory=mongomock.MongoClient)
    yield conn
    conn.close()


@pytest.fixture
def service(connection):
    svc = EmployeeDirectoryService(connection)
    svc.ensure_indexes()
    return svc


@pytest.fixture
def shared_client(monkeypatch):
    """One in-memory client handed to every MongoConnection the CLI creates."""
    client = mongomock.MongoClient()
    monkeypatch.setattr("employee_directory.domain.db.MongoClient", lambda *a, **k: client)
    return client


def make_employee(**overrides) -> Employee:
    data = dict(
        name="Alice Tan",
        email="alice@example.com",
        age=31,
        department="Engineering",
        skills=["python", "mongodb"],
        joining_date="2022-03-14",
        salary=98000.0,
    )
    data.update(overrides)
    return Employee(**data)
