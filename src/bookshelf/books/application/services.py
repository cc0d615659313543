"""
Books Application Services
==========================

Gateway interface for book persistence.

Following SOLID principles:
- Dependency Inversion: handlers depend on IBookGateway, not on SQLAlchemy
"""

from abc import ABC, abstractmethod
from typing import List

from bookshelf.books.domain import Book


# ========== Gateway Interface (Dependency Inversion) ==========

class IBookGateway(ABC):
    """Interface for book data access."""

    @abstractmethod
    async def insert(self, book: Book) -> Book:
        """
        Persist an unsaved book.

        Returns:
            Book: The same book with ``id`` populated

        Raises:
            RepositoryException: If the statement fails
        """

    @abstractmethod
    async def list(self) -> List[Book]:
        """
        Return every stored book in the database's natural order.

        Raises:
            RepositoryException: If the query fails
        """

    @abstractmethod
    async def verify(self) -> None:
        """
        Check that the backing store is reachable.

        Raises:
            DatabaseConnectionException: If it is not
        """

    @abstractmethod
    async def close(self) -> None:
        """Release held connections."""
