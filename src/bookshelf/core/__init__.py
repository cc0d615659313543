"""
Core Module
============

Shared core utilities and abstractions used across the application.

This module contains framework-agnostic code that defines the fundamental
building blocks of the system.
"""

from bookshelf.core.exceptions import (
    ApplicationException,
    ConfigurationException,
    DatabaseConnectionException,
    RepositoryException,
)

__all__ = [
    "ApplicationException",
    "ConfigurationException",
    "DatabaseConnectionException",
    "RepositoryException",
]
