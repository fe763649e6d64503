# ABOUTME: Database package for the local persistence layer.
# ABOUTME: Provides DatabaseService for SQLite operations using SQLModel.

from oneword.database.service import DatabaseService

__all__ = ["DatabaseService"]
