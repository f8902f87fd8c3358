# Stores package init
"""
Inkpost Backend — Persistence Layer
=====================================

What:  Session-bound stores owning the User and Blog records.
How:   Each store wraps the request's AsyncSession and exposes the handful of
       queries the services need. Driver exceptions are translated here:
       unique-index violations → ConflictError, anything else → DatabaseError.

Store Inventory:
    - UserStore: credential records (registration, login, identity lookup)
    - BlogStore: blog records (CRUD, slug lookup, newest-first listing)
"""

from inkpost.stores.blog_store import BlogStore
from inkpost.stores.user_store import UserStore

__all__ = ["BlogStore", "UserStore"]
