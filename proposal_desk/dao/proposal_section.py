"""
Proposal section Data Access Object (DAO).

WHAT: Database operations for the ProposalSection model.

WHY: Sections carry no owner column, so these queries are scoped by
``proposal_id``. Callers must have confirmed ownership of the parent first.
"""

from typing import List, Optional
from sqlalchemy import select, delete
from sqlalchemy.ext.asyncio import AsyncSession

from proposal_desk.dao.base import BaseDAO
from proposal_desk.models.proposal_section import ProposalSection


class ProposalSectionDAO(BaseDAO[ProposalSection]):
    """
    Data Access Object for ProposalSection model.
    """

    def __init__(self, session: AsyncSession):
        """
        Initialize ProposalSectionDAO.

        Args:
            session: Async database session
        """
        super().__init__(ProposalSection, session)

    async def list_for_proposal(self, proposal_id: str) -> List[ProposalSection]:
        """
        Get every section of a proposal.

        WHY: Ordered by order_index then created_at so renderers get a stable
        sequence even when indices repeat or have gaps.

        Args:
            proposal_id: Parent proposal ID

        Returns:
            Sections of the proposal
        """
        result = await self.session.execute(
            select(ProposalSection)
            .where(ProposalSection.proposal_id == proposal_id)
            .order_by(ProposalSection.order_index, ProposalSection.created_at)
        )
        return list(result.scalars().all())

    async def get_in_proposal(
        self,
        section_id: str,
        proposal_id: str,
    ) -> Optional[ProposalSection]:
        """
        Get a section filtered by (id, proposal_id).

        Args:
            section_id: Section ID
            proposal_id: Declared parent proposal ID

        Returns:
            The section if it exists under that proposal, None otherwise
        """
        result = await self.session.execute(
            select(ProposalSection).where(
                ProposalSection.id == section_id,
                ProposalSection.proposal_id == proposal_id,
            )
        )
        return result.scalar_one_or_none()

    async def delete_in_proposal(
        self,
        section_id: str,
        proposal_id: str,
    ) -> Optional[ProposalSection]:
        """
        Delete a section filtered by (id, proposal_id).

        Args:
            section_id: Section ID
            proposal_id: Declared parent proposal ID

        Returns:
            The deleted section's prior state, or None if nothing matched
        """
        section = await self.get_in_proposal(section_id, proposal_id)
        if not section:
            return None
        return await self.remove(section)

    async def delete_for_proposal(self, proposal_id: str) -> int:
        """
        Delete every section of a proposal.

        Args:
            proposal_id: Parent proposal ID

        Returns:
            Number of sections deleted
        """
        result = await self.session.execute(
            delete(ProposalSection)
            .where(ProposalSection.proposal_id == proposal_id)
            .execution_options(synchronize_session="fetch")
        )
        return result.rowcount
