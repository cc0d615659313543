"""
Bookshelf API
=============

Minimal HTTP service for a PostgreSQL "books" table.
"""

__version__ = "1.0.0"
