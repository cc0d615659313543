"""
Books Interfaces Layer
======================

Interface adapters (controllers) for the books module.

This is the outermost layer - handles HTTP requests/responses and
delegates to the gateway.
"""

from bookshelf.books.interfaces.controllers import router as books_router, get_book_gateway

__all__ = ["books_router", "get_book_gateway"]
