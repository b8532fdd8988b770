"""
Database configuration and models.
"""

from cliquealo.db.database import engine, SessionLocal, get_db
from cliquealo.db.models import Base

__all__ = ["engine", "SessionLocal", "get_db", "Base"]
