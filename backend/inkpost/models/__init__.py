# Models package init
"""
Inkpost Backend — ORM Models
==============================

What:  SQLAlchemy models for the `users` and `blogs` tables.
Who:   Imported by the stores, by Alembic's env.py and by create_all_tables().
"""

from inkpost.models.blog import Blog
from inkpost.models.user import User

__all__ = ["Blog", "User"]
