"""
Books Module
============

Bounded Context for the books catalogue.

Responsibilities:
- Persist new books and hand back their generated identifiers
- List every stored book

Books are never updated or deleted by this service.
"""
