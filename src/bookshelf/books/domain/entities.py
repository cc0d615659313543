"""
Books Domain Entities
=====================

Pure Python domain entities for the books catalogue.
"""

from dataclasses import dataclass, replace
from typing import Optional
from uuid import UUID


@dataclass(frozen=True)
class Book:
    """
    Book entity.

    ``id`` is None until the persistence layer assigns one on insert and
    never changes afterwards.
    """

    isbn: str
    name: str
    author: str
    year: str
    publisher: str
    id: Optional[UUID] = None

    @property
    def is_saved(self) -> bool:
        """Check if the book has been assigned an identifier."""
        return self.id is not None

    def with_id(self, book_id: UUID) -> "Book":
        """Return a copy of this book carrying the given identifier."""
        if self.id is not None:
            raise ValueError("Book already has an id")
        return replace(self, id=book_id)
