"""
Core Exceptions
================

Custom exceptions for the application following clean architecture principles.

These exceptions define domain-specific errors that can be caught and handled
appropriately at the application boundaries. Messages are meant for logs;
HTTP clients only ever see generic text.
"""

from typing import Optional


class ApplicationException(Exception):
    """Base exception for all application errors."""

    def __init__(self, message: str, details: Optional[dict] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class ConfigurationException(ApplicationException):
    """Exception for configuration errors."""


class DatabaseConnectionException(ApplicationException):
    """Raised when the database cannot be reached at startup."""


class RepositoryException(ApplicationException):
    """Base exception for repository/data access errors."""

    def __init__(
        self,
        operation: str,
        message: str,
        details: Optional[dict] = None
    ):
        self.operation = operation
        super().__init__(f"{operation}: {message}", details)
