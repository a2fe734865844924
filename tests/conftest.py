"""Shared pytest fixtures for all tests."""

import random
from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

from codeshare.codes import CodeGenerator
from codeshare.database import Database
from codeshare.main import create_app
from codeshare.repositories.record_store import RecordStore
from codeshare.services.access_guard import AccessGuard
from codeshare.services.container_service import ContainerService
from codeshare.services.resolver import Resolver
from codeshare.services.share_service import ShareService
from codeshare.types import FileEntry, NewFile


class ScriptedRng:
    """
    Stand-in RNG returning a fixed sequence of values from randint().
    """

    def __init__(self, values):
        self.values = iter(values)

    def randint(self, a, b):
        return next(self.values)


@pytest.fixture(autouse=True)
def fast_bcrypt(monkeypatch):
    """
    Use the minimum bcrypt cost so secret hashing stays fast in tests.
    """
    monkeypatch.setattr("codeshare.config.BCRYPT_ROUNDS", 4)


@pytest.fixture
def database(tmp_path):
    """
    Create a temporary database with schema for each test.

    Args:
        tmp_path: pytest tmp_path fixture

    Returns:
        Database handle pointing at tmp_path/test.db
    """
    db = Database(str(tmp_path / "test.db"))
    db.init_schema()
    return db


@pytest.fixture
def store(database):
    return RecordStore(database)


@pytest.fixture
def code_generator():
    return CodeGenerator(random.Random(1234))


@pytest.fixture
def guard(store):
    return AccessGuard(store)


@pytest.fixture
def resolver(store):
    return Resolver(store)


@pytest.fixture
def share_service(store, code_generator):
    return ShareService(store, code_generator)


@pytest.fixture
def container_service(store, code_generator, guard):
    return ContainerService(store, code_generator, guard)


@pytest.fixture
def client(tmp_path):
    """
    Create FastAPI test client backed by a temporary database.

    The client is entered as a context manager so startup events run.
    """
    app = create_app(Database(str(tmp_path / "api.db")), CodeGenerator(random.Random(99)))
    with TestClient(app) as test_client:
        yield test_client


def make_new_files(count, prefix="file"):
    return [
        NewFile(
            name=f"{prefix}{i}.txt",
            url=f"https://storage.example.com/{prefix}{i}.txt",
            size=100 * (i + 1),
            media_type="text/plain",
        )
        for i in range(count)
    ]


def make_entry(code, name="doc.pdf", size=2048):
    return FileEntry(
        code=code,
        name=name,
        url=f"https://storage.example.com/{name}",
        size=size,
        uploaded_at=datetime.now(timezone.utc),
        media_type="application/pdf",
    )


def file_payload(count, prefix="file"):
    return [
        {
            "name": f"{prefix}{i}.txt",
            "url": f"https://storage.example.com/{prefix}{i}.txt",
            "size": 100 * (i + 1),
        }
        for i in range(count)
    ]
