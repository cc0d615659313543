"""
Books Application Layer
=======================

Contains:
- DTOs: Pydantic models for API serialization
- Gateway interface: the persistence contract handlers depend on

This layer depends on the domain layer only, never on concrete
infrastructure implementations.
"""

from bookshelf.books.application.dto import (
    BookCreateRequest,
    BookResponse,
    HealthResponse,
    ErrorResponse,
)
from bookshelf.books.application.services import IBookGateway

__all__ = [
    # DTOs
    "BookCreateRequest",
    "BookResponse",
    "HealthResponse",
    "ErrorResponse",
    # Gateway Interface
    "IBookGateway",
]
