"""Database package"""

from proposal_desk.db.session import AsyncSessionLocal, engine, get_db
from proposal_desk.models.base import Base

__all__ = ["Base", "AsyncSessionLocal", "engine", "get_db"]
