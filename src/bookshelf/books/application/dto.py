"""
Books Application DTOs
======================

Data Transfer Objects for the books API layer.

Decoding is type checking only: every field is a string, missing or
``null`` fields become the empty string, keys match field names without
regard to case, and unknown fields (including a client supplied ``id``)
are ignored.
"""

from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, StrictStr, field_validator, model_validator

from bookshelf.books.domain import Book


# ========== Request DTOs ==========

class BookCreateRequest(BaseModel):
    """Request model for creating a book."""
    model_config = ConfigDict(extra="ignore")

    isbn: StrictStr = Field(default="", description="ISBN")
    name: StrictStr = Field(default="", description="Title")
    author: StrictStr = Field(default="", description="Author")
    year: StrictStr = Field(default="", description="Publication year")
    publisher: StrictStr = Field(default="", description="Publisher")

    @model_validator(mode="before")
    @classmethod
    def match_keys_case_insensitively(cls, data: Any) -> Any:
        """Map "ISBN", "Name", ... onto their fields; later keys win."""
        if not isinstance(data, dict):
            return data
        fields = {name.lower(): name for name in cls.model_fields}
        matched = {}
        for key, value in data.items():
            if key in cls.model_fields:
                matched[key] = value
            elif isinstance(key, str) and key.lower() in fields:
                matched[fields[key.lower()]] = value
        return matched

    @field_validator("isbn", "name", "author", "year", "publisher", mode="before")
    @classmethod
    def null_means_empty(cls, v: Any) -> Any:
        return "" if v is None else v

    def to_entity(self) -> Book:
        """Build an unsaved Book from the request."""
        return Book(
            isbn=self.isbn,
            name=self.name,
            author=self.author,
            year=self.year,
            publisher=self.publisher,
        )


# ========== Response DTOs ==========

class BookResponse(BaseModel):
    """Response model for a stored book."""
    id: UUID = Field(..., description="Server-generated identifier")
    isbn: str
    name: str
    author: str
    year: str
    publisher: str

    @classmethod
    def from_entity(cls, book: Book) -> "BookResponse":
        if book.id is None:
            raise ValueError("Cannot serialize a book without an id")
        return cls(
            id=book.id,
            isbn=book.isbn,
            name=book.name,
            author=book.author,
            year=book.year,
            publisher=book.publisher,
        )


class HealthResponse(BaseModel):
    """Response model for the health check."""
    message: str = Field(default="OK")


class ErrorResponse(BaseModel):
    """Generic error body; never carries driver or stack details."""
    detail: str
