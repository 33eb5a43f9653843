"""
Database infrastructure components.
"""

from .database import Base, engine, SessionLocal, get_db, build_engine
from .models import create_all_tables

__all__ = ["Base", "engine", "SessionLocal", "get_db", "build_engine", "create_all_tables"]
