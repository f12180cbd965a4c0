# backend/app/db/__init__.py

"""
Database Module

Contains SQLAlchemy models, Pydantic schemas, and database configuration.
"""

from app.db.database import Base, Database, get_db
from app.db import models, schemas

__all__ = [
    'Base',
    'Database',
    'get_db',
    'models',
    'schemas'
]
