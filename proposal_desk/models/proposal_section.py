"""
Proposal section model.

WHAT: An ordered block of content (intro, scope, pricing...) inside a
proposal.

WHY: Sections have no owner column. Ownership is derived from the parent
proposal, so every access first confirms the caller owns ``proposal_id``.
"""

from datetime import datetime
from typing import Optional
from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey
from sqlalchemy.orm import Mapped

from proposal_desk.models.base import Base, generate_id, utcnow


class ProposalSection(Base):
    """
    Proposal content section.

    Attributes:
        id: Opaque text primary key
        proposal_id: Parent proposal
        type: Free-form category such as intro/scope/timeline/pricing/terms
        order_index: Caller-assigned position (1, 2, 3...); not unique
        heading: Optional heading
        content: Section body
        created_at: Time the section was last saved
    """

    __tablename__ = "proposal_sections"

    id: Mapped[str] = Column(String(64), primary_key=True, default=generate_id)

    # WHY: No ondelete clause; removing a proposal's sections is done by the
    # repository before the proposal itself is deleted
    proposal_id: Mapped[str] = Column(
        String(64),
        ForeignKey("proposals.id"),
        nullable=False,
        index=True,
        comment="Parent proposal",
    )

    type: Mapped[Optional[str]] = Column(String(64), nullable=True)
    order_index: Mapped[int] = Column(Integer, nullable=False)
    heading: Mapped[Optional[str]] = Column(Text, nullable=True)
    content: Mapped[str] = Column(Text, nullable=False)

    # WHY: Re-stamped on every save, so this reads as "last saved at"
    created_at: Mapped[datetime] = Column(
        DateTime,
        nullable=False,
        default=utcnow,
        comment="Last save timestamp",
    )

    def __repr__(self) -> str:
        """String representation for debugging."""
        return (
            f"<ProposalSection(id={self.id}, proposal_id={self.proposal_id}, "
            f"order_index={self.order_index})>"
        )
