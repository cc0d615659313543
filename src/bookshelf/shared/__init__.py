"""
Shared Kernel Module
====================

Generic infrastructure used by the books bounded context and the
application shell: structured logging and HTTP middleware.

DO NOT add book-specific logic to the shared kernel.
"""
