"""
Section Repository.

WHAT: Parent-scoped operations on proposal sections.

WHY: Sections do not store an owner. Every operation first confirms,
through ProposalRepository.require_owned, that the caller owns the declared
parent proposal. A section id is then re-validated against that parent, so
a section can never be read, moved or deleted through a proposal it does
not belong to.
"""

import logging
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from proposal_desk.core.exceptions import ResourceNotFoundError
from proposal_desk.core.guard import Identity
from proposal_desk.dao.proposal_section import ProposalSectionDAO
from proposal_desk.models.base import utcnow
from proposal_desk.models.proposal_section import ProposalSection
from proposal_desk.schemas.proposal_section import SectionSave
from proposal_desk.services.proposal_repository import ProposalRepository

logger = logging.getLogger(__name__)

SECTION_NOT_FOUND = "Section not found"


class SectionRepository:
    """
    Access to sections of proposals the caller owns.

    Usage:
        repo = SectionRepository(db)
        section = await repo.save(identity, SectionSave(...))
    """

    def __init__(self, session: AsyncSession, proposals: Optional[ProposalRepository] = None):
        self.session = session
        self.proposals = proposals or ProposalRepository(session)
        self.sections = ProposalSectionDAO(session)

    async def save(self, identity: Identity, data: SectionSave) -> ProposalSection:
        """
        Insert a new section or overwrite an existing one.

        WHY: created_at is re-stamped on both paths, so on an existing
        section it records when the section was last saved.

        Args:
            identity: Acting identity
            data: Validated section input

        Returns:
            The inserted or updated section

        Raises:
            ResourceNotFoundError: If the caller does not own the proposal, or
                the section id is unknown, or it belongs to another proposal
        """
        await self.proposals.require_owned(identity, data.proposal_id)

        values = {
            "type": data.type,
            "order_index": data.order_index,
            "heading": data.heading,
            "content": data.content,
            "created_at": utcnow(),
        }

        if data.id:
            existing = await self.sections.get_by_id(data.id)

            # WHY: A parent mismatch is reported exactly like a missing id
            if not existing or existing.proposal_id != data.proposal_id:
                logger.debug(
                    f"Section {data.id} not found under proposal {data.proposal_id}"
                )
                raise ResourceNotFoundError(message=SECTION_NOT_FOUND)

            section = await self.sections.apply(existing, **values)
            logger.info(f"Section {section.id} saved in proposal {data.proposal_id}")
            return section

        section = await self.sections.create(proposal_id=data.proposal_id, **values)
        logger.info(f"Section {section.id} created in proposal {data.proposal_id}")
        return section

    async def delete(
        self,
        identity: Identity,
        section_id: str,
        proposal_id: str,
    ) -> ProposalSection:
        """
        Delete a section of an owned proposal.

        Args:
            identity: Acting identity
            section_id: Section ID
            proposal_id: Declared parent proposal ID

        Returns:
            The deleted section's prior state

        Raises:
            ResourceNotFoundError: If the caller does not own the proposal or
                no such section exists under it
        """
        await self.proposals.require_owned(identity, proposal_id)

        deleted = await self.sections.delete_in_proposal(section_id, proposal_id)
        if not deleted:
            raise ResourceNotFoundError(message=SECTION_NOT_FOUND)

        logger.info(f"Section {section_id} deleted from proposal {proposal_id}")
        return deleted
