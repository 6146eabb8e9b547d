"""
Proposal management API endpoints.

WHAT: RESTful API for proposal CRUD.

WHY: Each endpoint is one operation of the proposal repository:
create, partial update, list, delete, and read-with-sections.

HOW: FastAPI router with:
- Identity resolved by the access guard dependency before anything else
- Owner-scoped repository calls (other users' proposals are 404)
- Response envelopes keyed by "proposal" / "proposals"
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from proposal_desk.core.deps import get_current_identity
from proposal_desk.core.guard import Identity
from proposal_desk.db.session import get_db
from proposal_desk.schemas.proposal import (
    ProposalCreate,
    ProposalUpdate,
    ProposalResponse,
    ProposalEnvelope,
    ProposalListResponse,
    ProposalWithSectionsResponse,
)
from proposal_desk.schemas.proposal_section import SectionResponse
from proposal_desk.services.proposal_repository import ProposalRepository


router = APIRouter(prefix="/proposals", tags=["proposals"])


@router.post(
    "",
    response_model=ProposalEnvelope,
    status_code=status.HTTP_201_CREATED,
    summary="Create proposal",
)
async def create_proposal(
    data: ProposalCreate,
    identity: Identity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db),
) -> ProposalEnvelope:
    """
    Create a proposal owned by the caller.

    Raises:
        AuthenticationError (401): If the caller is not signed in
        ValidationError (400): If the title is missing or empty
    """
    proposal = await ProposalRepository(db).create(identity, data)
    return ProposalEnvelope(proposal=ProposalResponse.model_validate(proposal))


@router.get(
    "",
    response_model=ProposalListResponse,
    summary="List proposals",
)
async def list_proposals(
    identity: Identity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db),
) -> ProposalListResponse:
    """List every proposal the caller owns."""
    proposals = await ProposalRepository(db).list(identity)
    return ProposalListResponse(
        proposals=[ProposalResponse.model_validate(p) for p in proposals]
    )


@router.get(
    "/{proposal_id}",
    response_model=ProposalWithSectionsResponse,
    summary="Get proposal with sections",
)
async def get_proposal_with_sections(
    proposal_id: str,
    identity: Identity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db),
) -> ProposalWithSectionsResponse:
    """
    Get a proposal and all of its sections.

    Raises:
        ResourceNotFoundError (404): If the caller does not own the proposal
    """
    proposal, sections = await ProposalRepository(db).get_with_sections(identity, proposal_id)
    return ProposalWithSectionsResponse(
        proposal=ProposalResponse.model_validate(proposal),
        sections=[SectionResponse.model_validate(s) for s in sections],
    )


@router.patch(
    "/{proposal_id}",
    response_model=ProposalEnvelope,
    summary="Update proposal",
)
async def update_proposal(
    proposal_id: str,
    data: ProposalUpdate,
    identity: Identity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db),
) -> ProposalEnvelope:
    """
    Apply a partial update; omitted fields are left unchanged.

    Raises:
        ResourceNotFoundError (404): If the caller does not own the proposal
    """
    proposal = await ProposalRepository(db).update(identity, proposal_id, data.to_patch())
    return ProposalEnvelope(proposal=ProposalResponse.model_validate(proposal))


@router.delete(
    "/{proposal_id}",
    response_model=ProposalEnvelope,
    summary="Delete proposal",
)
async def delete_proposal(
    proposal_id: str,
    identity: Identity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db),
) -> ProposalEnvelope:
    """
    Delete a proposal (and its sections) and return its prior state.

    Raises:
        ResourceNotFoundError (404): If the caller does not own the proposal
    """
    proposal = await ProposalRepository(db).delete(identity, proposal_id)
    return ProposalEnvelope(proposal=ProposalResponse.model_validate(proposal))
