"""
Base model class for all SQLAlchemy models.

WHY: Centralizing common model helpers (declarative base, id and timestamp
generation) keeps both tables consistent.
"""

import uuid
from datetime import datetime, timezone
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy models.

    WHY: DeclarativeBase provides the foundation for SQLAlchemy 2.0 models
    with improved type hints and async support.
    """

    pass


def generate_id() -> str:
    """
    Generate an opaque text primary key.

    Returns:
        A random UUID4 rendered as a string
    """
    return str(uuid.uuid4())


def utcnow() -> datetime:
    """
    Current time as a naive UTC datetime.

    WHY: Columns are plain DateTime (no timezone), so values must be naive
    to compare equal after a round trip through SQLite or PostgreSQL.
    """
    return datetime.now(timezone.utc).replace(tzinfo=None)
