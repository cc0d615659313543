"""
Books Domain Layer
==================

Contains:
- Entities: Book

This layer has no dependencies on infrastructure - pure Python.
"""

from bookshelf.books.domain.entities import Book

__all__ = ["Book"]
