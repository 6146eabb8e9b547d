"""
Proposal Repository.

WHAT: Owner-scoped operations on proposals.

WHY: This is where the ownership rules live:
1. Every operation takes the acting Identity explicitly
2. Owner comes from the identity, never from input
3. Records owned by someone else are reported as "not found"
4. Partial updates only touch fields present in the field patch
5. Deleting a proposal also deletes its sections

HOW: Thin layer over ProposalDAO and ProposalSectionDAO. Each operation is
a few independent engine calls inside the request's session; there is no
locking, concurrent writes to the same record are last-write-wins.
"""

import logging
from typing import List, Tuple

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from proposal_desk.core.exceptions import ResourceAlreadyExistsError, ResourceNotFoundError
from proposal_desk.core.guard import Identity
from proposal_desk.dao.proposal import ProposalDAO
from proposal_desk.dao.proposal_section import ProposalSectionDAO
from proposal_desk.models.base import generate_id, utcnow
from proposal_desk.models.proposal import Proposal
from proposal_desk.models.proposal_section import ProposalSection
from proposal_desk.schemas.proposal import FieldPatch, ProposalCreate

logger = logging.getLogger(__name__)

PROPOSAL_NOT_FOUND = "Proposal not found"
PROPOSAL_ID_TAKEN = "Proposal id already in use"

# Columns a field patch may never touch
_PROTECTED_FIELDS = frozenset({"id", "user_id", "created_at", "updated_at"})


class ProposalRepository:
    """
    Owner-scoped access to proposals.

    Usage:
        repo = ProposalRepository(db)
        proposal = await repo.create(identity, ProposalCreate(title="Website"))
    """

    def __init__(self, session: AsyncSession):
        self.session = session
        self.proposals = ProposalDAO(session)
        self.sections = ProposalSectionDAO(session)

    async def require_owned(self, identity: Identity, proposal_id: str) -> Proposal:
        """
        Load a proposal the caller owns.

        WHY: Shared by every proposal operation and by the section repository,
        which has no owner column of its own and relies on this check.

        Args:
            identity: Acting identity
            proposal_id: Proposal ID

        Returns:
            The owned proposal

        Raises:
            ResourceNotFoundError: If the proposal is absent or owned by someone else
        """
        proposal = await self.proposals.get_by_id_and_owner(proposal_id, identity.user_id)
        if not proposal:
            logger.debug(f"Proposal {proposal_id} not visible to user {identity.user_id}")
            raise ResourceNotFoundError(message=PROPOSAL_NOT_FOUND)
        return proposal

    async def create(self, identity: Identity, data: ProposalCreate) -> Proposal:
        """
        Create a proposal owned by the acting identity.

        Args:
            identity: Acting identity (becomes the owner)
            data: Validated creation input

        Returns:
            The persisted proposal

        Raises:
            ResourceAlreadyExistsError: If the supplied id is already in use
        """
        if data.id and await self.proposals.get_by_id(data.id):
            logger.debug(f"Proposal id {data.id} already taken")
            raise ResourceAlreadyExistsError(message=PROPOSAL_ID_TAKEN)

        now = utcnow()
        values = data.model_dump(exclude={"id"})
        try:
            proposal = await self.proposals.create(
                id=data.id or generate_id(),
                user_id=identity.user_id,
                created_at=now,
                updated_at=now,
                **values,
            )
        except IntegrityError:
            # Lost a race with a concurrent create of the same id
            await self.session.rollback()
            raise ResourceAlreadyExistsError(message=PROPOSAL_ID_TAKEN)

        logger.info(f"Proposal {proposal.id} created by user {identity.user_id}")
        return proposal

    async def update(
        self,
        identity: Identity,
        proposal_id: str,
        patch: FieldPatch,
    ) -> Proposal:
        """
        Apply a field patch to an owned proposal.

        WHY: An empty patch is a no-op and returns the stored record without
        advancing updated_at.

        Args:
            identity: Acting identity
            proposal_id: Proposal ID
            patch: Field name to new value; absent keys are left unchanged

        Returns:
            The (possibly unchanged) proposal

        Raises:
            ResourceNotFoundError: If the caller does not own the proposal
        """
        existing = await self.require_owned(identity, proposal_id)

        changes = {
            field: value
            for field, value in patch.items()
            if field not in _PROTECTED_FIELDS
        }
        if not changes:
            return existing

        proposal = await self.proposals.update_owned(
            proposal_id,
            identity.user_id,
            updated_at=utcnow(),
            **changes,
        )
        if not proposal:
            raise ResourceNotFoundError(message=PROPOSAL_NOT_FOUND)

        logger.info(f"Proposal {proposal_id} updated fields {sorted(changes)}")
        return proposal

    async def list(self, identity: Identity) -> List[Proposal]:
        """
        List every proposal the caller owns.

        Args:
            identity: Acting identity

        Returns:
            Owned proposals in the engine's natural order
        """
        return await self.proposals.list_for_owner(identity.user_id)

    async def delete(self, identity: Identity, proposal_id: str) -> Proposal:
        """
        Delete an owned proposal and its sections.

        Args:
            identity: Acting identity
            proposal_id: Proposal ID

        Returns:
            The deleted proposal's prior state

        Raises:
            ResourceNotFoundError: If the caller does not own the proposal
        """
        await self.require_owned(identity, proposal_id)

        removed_sections = await self.sections.delete_for_proposal(proposal_id)

        deleted = await self.proposals.delete_owned(proposal_id, identity.user_id)
        if not deleted:
            raise ResourceNotFoundError(message=PROPOSAL_NOT_FOUND)

        logger.info(
            f"Proposal {proposal_id} deleted with {removed_sections} section(s)"
        )
        return deleted

    async def get_with_sections(
        self,
        identity: Identity,
        proposal_id: str,
    ) -> Tuple[Proposal, List[ProposalSection]]:
        """
        Load an owned proposal together with all its sections.

        Args:
            identity: Acting identity
            proposal_id: Proposal ID

        Returns:
            Tuple of (proposal, sections)

        Raises:
            ResourceNotFoundError: If the caller does not own the proposal
        """
        proposal = await self.require_owned(identity, proposal_id)
        sections = await self.sections.list_for_proposal(proposal_id)
        return proposal, sections
