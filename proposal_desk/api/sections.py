"""
Proposal section API endpoints.

WHAT: Save (insert or overwrite) and delete sections.

WHY: Sections are only reachable through a proposal the caller owns; the
parent id is always part of the request so it can be re-checked.
Listing sections is done through GET /proposals/{id}.
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from proposal_desk.core.deps import get_current_identity
from proposal_desk.core.guard import Identity
from proposal_desk.db.session import get_db
from proposal_desk.schemas.proposal_section import (
    SectionSave,
    SectionResponse,
    SectionEnvelope,
)
from proposal_desk.services.section_repository import SectionRepository


router = APIRouter(prefix="/sections", tags=["sections"])


@router.post(
    "",
    response_model=SectionEnvelope,
    summary="Save section",
    description="Insert a section when no id is given, otherwise overwrite it",
)
async def save_section(
    data: SectionSave,
    identity: Identity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db),
) -> SectionEnvelope:
    """
    Save a section.

    Raises:
        AuthenticationError (401): If the caller is not signed in
        ResourceNotFoundError (404): If the proposal is not owned by the caller,
            or the section id does not exist under that proposal
        ValidationError (400): If content is empty or order_index is not a
            positive integer
    """
    section = await SectionRepository(db).save(identity, data)
    return SectionEnvelope(section=SectionResponse.model_validate(section))


@router.delete(
    "/{section_id}",
    response_model=SectionEnvelope,
    summary="Delete section",
)
async def delete_section(
    section_id: str,
    proposal_id: str = Query(..., min_length=1, description="Parent proposal id"),
    identity: Identity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db),
) -> SectionEnvelope:
    """
    Delete a section and return its prior state.

    Raises:
        ResourceNotFoundError (404): If the proposal or section is not found
    """
    section = await SectionRepository(db).delete(identity, section_id, proposal_id)
    return SectionEnvelope(section=SectionResponse.model_validate(section))
