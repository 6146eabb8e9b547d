"""
Proposal Data Access Object (DAO).

WHAT: Database operations for the Proposal model.

WHY: Every proposal query in the service goes through an owner filter;
keeping those queries here means the filter is written once.

HOW: Extends BaseDAO with owner-scoped update and delete.
"""

from typing import Any, List, Optional
from sqlalchemy.ext.asyncio import AsyncSession

from proposal_desk.dao.base import BaseDAO
from proposal_desk.models.proposal import Proposal


class ProposalDAO(BaseDAO[Proposal]):
    """
    Data Access Object for Proposal model.

    WHAT: Provides owner-scoped CRUD for proposals.
    """

    def __init__(self, session: AsyncSession):
        """
        Initialize ProposalDAO.

        Args:
            session: Async database session
        """
        super().__init__(Proposal, session)

    async def list_for_owner(self, user_id: str) -> List[Proposal]:
        """
        Get all proposals owned by a user.

        Args:
            user_id: Owner identity

        Returns:
            Proposals in the engine's natural order
        """
        return await self.get_by_owner(user_id)

    async def update_owned(
        self,
        proposal_id: str,
        user_id: str,
        **values: Any,
    ) -> Optional[Proposal]:
        """
        Update a proposal filtered by (id, owner).

        Args:
            proposal_id: Proposal ID
            user_id: Owner identity
            **values: Column values to write

        Returns:
            Updated proposal, or None if no owned proposal matched
        """
        proposal = await self.get_by_id_and_owner(proposal_id, user_id)
        if not proposal:
            return None
        return await self.apply(proposal, **values)

    async def delete_owned(self, proposal_id: str, user_id: str) -> Optional[Proposal]:
        """
        Delete a proposal filtered by (id, owner).

        Args:
            proposal_id: Proposal ID
            user_id: Owner identity

        Returns:
            The deleted proposal's prior state, or None if nothing matched
        """
        proposal = await self.get_by_id_and_owner(proposal_id, user_id)
        if not proposal:
            return None
        return await self.remove(proposal)
