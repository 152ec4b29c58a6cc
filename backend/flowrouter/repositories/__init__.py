# Repositories package init
"""
FlowRouter Backend - Repositories Layer
=======================================

What:  Database access for handlers, one repository per entity.

Repository Inventory:
    - CrudRepository (generic): save, find, count, delete over one model
    - BookRepository: CrudRepository[Book, int] plus title update
"""

from flowrouter.repositories.base import CrudRepository
from flowrouter.repositories.book import BookRepository, book_repository

__all__ = ["CrudRepository", "BookRepository", "book_repository"]
