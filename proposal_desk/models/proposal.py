"""
Proposal model.

WHAT: SQLAlchemy model representing a business proposal owned by one user.

WHY: Proposals are the parent records of the system. Every read and write
is scoped by ``user_id`` so a proposal is only ever visible to its owner.

HOW: Text primary key (caller-suppliable or generated), free-form status
label, optional commercial attributes, and two timestamps.
"""

from datetime import datetime
from typing import Optional
from sqlalchemy import Column, String, Text, DateTime, Float
from sqlalchemy.orm import Mapped

from proposal_desk.models.base import Base, generate_id, utcnow


class Proposal(Base):
    """
    Business proposal model.

    Attributes:
        id: Opaque text primary key
        user_id: Owner identity (immutable after creation)
        title: Internal name, e.g. "Website proposal for ACME"
        client_name: Client the proposal is addressed to
        project_name: Project the proposal covers
        currency: Currency code such as "AED", "INR", "USD"
        estimated_value: Estimated deal value
        status: Free-form label such as draft/sent/accepted/rejected
        notes: Internal notes
        created_at: Set once at creation
        updated_at: Refreshed on every effective update
    """

    __tablename__ = "proposals"

    id: Mapped[str] = Column(String(64), primary_key=True, default=generate_id)

    # Ownership
    user_id: Mapped[str] = Column(
        String(255),
        nullable=False,
        index=True,
        comment="Owner identity",
    )

    # Proposal details
    title: Mapped[str] = Column(
        Text,
        nullable=False,
        comment="Internal proposal name",
    )
    client_name: Mapped[Optional[str]] = Column(Text, nullable=True)
    project_name: Mapped[Optional[str]] = Column(Text, nullable=True)
    currency: Mapped[Optional[str]] = Column(String(16), nullable=True)
    estimated_value: Mapped[Optional[float]] = Column(Float, nullable=True)

    # WHY: Free-form rather than an enum; the set of labels belongs to the UI
    status: Mapped[Optional[str]] = Column(String(64), nullable=True)

    notes: Mapped[Optional[str]] = Column(Text, nullable=True)

    # Timestamps
    # WHY: No onupdate hook; updated_at is stamped explicitly so that an
    # empty patch leaves it untouched
    created_at: Mapped[datetime] = Column(
        DateTime,
        nullable=False,
        default=utcnow,
        comment="Record creation timestamp",
    )
    updated_at: Mapped[datetime] = Column(
        DateTime,
        nullable=False,
        default=utcnow,
        comment="Last modification timestamp",
    )

    def __repr__(self) -> str:
        """String representation for debugging."""
        return f"<Proposal(id={self.id}, title={self.title}, status={self.status})>"
