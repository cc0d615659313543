"""
Books Infrastructure Layer
==========================

Infrastructure implementations for the books module:
- Models: SQLAlchemy mapping of the books table
- Repositories: SQLAlchemy book gateway
"""

from bookshelf.books.infrastructure.models import BookModel
from bookshelf.books.infrastructure.repositories import (
    SQLAlchemyBookGateway,
    build_insert_statement,
    build_select_all_statement,
    init_book_gateway,
)

__all__ = [
    "BookModel",
    "SQLAlchemyBookGateway",
    "build_insert_statement",
    "build_select_all_statement",
    "init_book_gateway",
]
