"""
Database module for bucketsh.

Provides SQLAlchemy session management and initialization.
"""

from .models import Base, Entry
from .session import get_session, init_db, close_db

__all__ = [
    'Base',
    'Entry',
    'get_session',
    'init_db',
    'close_db',
]
