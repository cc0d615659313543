"""
Books Infrastructure Models
===========================

SQLAlchemy mapping of the pre-existing 'books' table.

These are the database representations of our domain entities.
They belong in the infrastructure layer, not the domain layer.
"""

from uuid import UUID

from sqlalchemy import Text, Uuid, text
from sqlalchemy.orm import Mapped, mapped_column

from bookshelf.infrastructure.database import Base


class BookModel(Base):
    """
    Database model for Book entity.

    Maps to the 'books' table. The id is generated by the database.
    """
    __tablename__ = "books"

    id: Mapped[UUID] = mapped_column(
        Uuid, primary_key=True, server_default=text("gen_random_uuid()")
    )

    isbn: Mapped[str] = mapped_column(Text, nullable=False)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    author: Mapped[str] = mapped_column(Text, nullable=False)
    year: Mapped[str] = mapped_column(Text, nullable=False)
    publisher: Mapped[str] = mapped_column(Text, nullable=False)
