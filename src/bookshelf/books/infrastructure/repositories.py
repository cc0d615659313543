"""
Books Infrastructure Repositories
=================================

SQLAlchemy implementation of the book gateway.

Every statement is built with SQLAlchemy Core so values are always sent as
bound parameters. Each insert commits in its own transaction; reads use a
plain connection.
"""

from typing import Any, List

from sqlalchemy import Insert, Select, insert, select
from sqlalchemy.ext.asyncio import AsyncEngine

from bookshelf.books.application import IBookGateway
from bookshelf.books.domain import Book
from bookshelf.books.infrastructure.models import BookModel
from bookshelf.config import Settings
from bookshelf.core import RepositoryException
from bookshelf.infrastructure.database import (
    close_engine,
    create_engine,
    verify_connection,
)
from bookshelf.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)

BOOK_COLUMNS = (
    BookModel.id,
    BookModel.isbn,
    BookModel.name,
    BookModel.author,
    BookModel.year,
    BookModel.publisher,
)


def build_insert_statement(book: Book) -> Insert:
    """INSERT ... RETURNING id for an unsaved book."""
    return (
        insert(BookModel)
        .values(
            isbn=book.isbn,
            name=book.name,
            author=book.author,
            year=book.year,
            publisher=book.publisher,
        )
        .returning(BookModel.id)
    )


def build_select_all_statement() -> Select:
    """SELECT every book column, no ordering."""
    return select(*BOOK_COLUMNS)


def _row_to_book(row: Any) -> Book:
    values = row._mapping
    missing = [column.key for column in BOOK_COLUMNS if values[column.key] is None]
    if missing:
        raise ValueError(f"NULL value in column(s): {', '.join(missing)}")
    return Book(
        id=values["id"],
        isbn=values["isbn"],
        name=values["name"],
        author=values["author"],
        year=values["year"],
        publisher=values["publisher"],
    )


class SQLAlchemyBookGateway(IBookGateway):
    """
    SQLAlchemy implementation of the book gateway.

    Holds the single shared engine; pool concurrency is left to
    SQLAlchemy and asyncpg.
    """

    def __init__(self, engine: AsyncEngine):
        self._engine = engine

    async def insert(self, book: Book) -> Book:
        """Insert a book and return it with the generated id."""
        if book.is_saved:
            raise ValueError("Cannot insert a book that already has an id")

        stmt = build_insert_statement(book)
        try:
            async with self._engine.begin() as conn:
                result = await conn.execute(stmt)
                book_id = result.scalar_one()
        except Exception as e:
            logger.error(
                "Failed to insert book",
                extra={"isbn": book.isbn, "error_type": type(e).__name__, "error": str(e)}
            )
            raise RepositoryException("insert", "could not insert book") from e

        logger.info("Book created", extra={"book_id": str(book_id)})
        return book.with_id(book_id)

    async def list(self) -> List[Book]:
        """List every stored book."""
        stmt = build_select_all_statement()
        try:
            async with self._engine.connect() as conn:
                result = await conn.execute(stmt)
                return [_row_to_book(row) for row in result.all()]
        except Exception as e:
            logger.error(
                "Failed to list books",
                extra={"error_type": type(e).__name__, "error": str(e)}
            )
            raise RepositoryException("list", "could not list books") from e

    async def verify(self) -> None:
        await verify_connection(self._engine)

    async def close(self) -> None:
        await close_engine(self._engine)


async def init_book_gateway(settings: Settings) -> SQLAlchemyBookGateway:
    """
    Create the gateway and check the database is reachable.

    Returns:
        SQLAlchemyBookGateway: A verified gateway

    Raises:
        DatabaseConnectionException: If the database cannot be reached
    """
    gateway = SQLAlchemyBookGateway(create_engine(settings))
    try:
        await gateway.verify()
    except Exception:
        await gateway.close()
        raise

    logger.info(
        "Connected to database",
        extra={"db_host": settings.db_host, "db_name": settings.db_name}
    )
    return gateway
