"""
Database module for TextKNN.
"""

from .engine import DatabaseManager
from .models import Base, Document, Posting, StoredField

__all__ = [
    "Base",
    "Document",
    "Posting",
    "StoredField",
    "DatabaseManager",
]
