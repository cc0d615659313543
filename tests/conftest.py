import asyncio
from typing import List
from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from bookshelf.books.application import IBookGateway
from bookshelf.books.domain import Book
from bookshelf.config import Settings
from bookshelf.core import RepositoryException
from bookshelf.main import create_app


DRIVER_ERROR_TEXT = 'password authentication failed for user "bookshelf_admin"'


class InMemoryBookGateway(IBookGateway):
    """Gateway double that keeps books in a list."""

    def __init__(self):
        self.books: List[Book] = []
        self.insert_calls = 0
        self.closed = False

    async def insert(self, book: Book) -> Book:
        self.insert_calls += 1
        # Yield so concurrent requests interleave
        await asyncio.sleep(0)
        saved = book.with_id(uuid4())
        self.books.append(saved)
        return saved

    async def list(self) -> List[Book]:
        return list(self.books)

    async def verify(self) -> None:
        return None

    async def close(self) -> None:
        self.closed = True


class FailingBookGateway(IBookGateway):
    """Gateway double whose every operation fails like a dead database."""

    def __init__(self, error: Exception = None):
        self.error = error

    def _fail(self, operation: str):
        cause = ConnectionRefusedError(DRIVER_ERROR_TEXT)
        if self.error is not None:
            raise self.error
        raise RepositoryException(operation, "could not reach database") from cause

    async def insert(self, book: Book) -> Book:
        self._fail("insert")

    async def list(self) -> List[Book]:
        self._fail("list")

    async def verify(self) -> None:
        return None

    async def close(self) -> None:
        return None


def make_settings(**overrides) -> Settings:
    values = dict(
        db_user="bookshelf",
        db_password="s3cret",
        db_host="localhost",
        db_port=5432,
        db_name="bookshelf",
        environment="development",
        host="0.0.0.0",
        port=8080,
        log_level="INFO",
        cors_origins=["*"],
        cors_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        cors_headers=["Content-Type", "Authorization"],
    )
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def settings():
    return make_settings()


@pytest.fixture
def gateway():
    return InMemoryBookGateway()


@pytest.fixture
def app(settings, gateway):
    return create_app(settings, gateway=gateway)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def sample_book():
    return {
        "isbn": "9780134685991",
        "name": "Effective Java",
        "author": "Joshua Bloch",
        "year": "2018",
        "publisher": "Addison-Wesley",
    }
