"""
Pydantic schemas for proposal endpoints.

WHAT: Request/response schemas for proposal management API.

WHY: Schemas define API contracts for proposal operations:
1. Validate incoming request data before any repository call
2. Document API for OpenAPI/Swagger
3. Turn partial updates into an explicit field patch

HOW: Uses Pydantic v2 with Field constraints and ORM mode for SQLAlchemy
integration.
"""

from datetime import datetime
from typing import Any, Dict, Optional
from pydantic import BaseModel, ConfigDict, Field

from proposal_desk.schemas.proposal_section import SectionResponse


# Field name -> new value; a missing key means "leave unchanged"
FieldPatch = Dict[str, Any]


class ProposalCreate(BaseModel):
    """
    Proposal creation request schema.

    WHY: Only the title is required. The owner is never accepted from input;
    it always comes from the acting identity.
    """

    id: Optional[str] = Field(
        default=None,
        min_length=1,
        max_length=64,
        description="Caller-supplied id; generated when omitted",
    )
    title: str = Field(
        ...,
        min_length=1,
        description="Internal proposal name",
    )
    client_name: Optional[str] = None
    project_name: Optional[str] = None
    currency: Optional[str] = Field(default=None, max_length=16)
    # WHY: strict so that true and "12000" are rejected; ints are still accepted
    estimated_value: Optional[float] = Field(default=None, strict=True)
    status: Optional[str] = Field(
        default=None,
        max_length=64,
        description="Free-form label, e.g. draft/sent/accepted/rejected",
    )
    notes: Optional[str] = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "title": "Website proposal for ACME",
                "client_name": "ACME Corp",
                "currency": "USD",
                "estimated_value": 12000,
                "status": "draft",
            }
        },
    )


class ProposalUpdate(BaseModel):
    """
    Proposal partial update request schema.

    WHAT: Any subset of the mutable proposal fields.

    WHY: Only fields the caller actually sent are applied. ``to_patch``
    exposes them as an explicit field patch.
    """

    title: Optional[str] = Field(default=None, min_length=1)
    client_name: Optional[str] = None
    project_name: Optional[str] = None
    currency: Optional[str] = Field(default=None, max_length=16)
    estimated_value: Optional[float] = Field(default=None, strict=True)
    status: Optional[str] = Field(default=None, max_length=64)
    notes: Optional[str] = None

    def to_patch(self) -> FieldPatch:
        """
        Build the field patch for this update.

        WHY: Fields that were omitted, or sent as null, mean "unchanged".
        Clearing a field is not supported.

        Returns:
            Mapping of supplied field names to their new values
        """
        return {
            name: getattr(self, name)
            for name in self.model_fields_set
            if getattr(self, name) is not None
        }


class ProposalResponse(BaseModel):
    """Proposal as returned by the API."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    title: str
    client_name: Optional[str] = None
    project_name: Optional[str] = None
    currency: Optional[str] = None
    estimated_value: Optional[float] = None
    status: Optional[str] = None
    notes: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class ProposalEnvelope(BaseModel):
    """Single proposal response body."""

    proposal: ProposalResponse


class ProposalListResponse(BaseModel):
    """List of the caller's proposals."""

    proposals: list[ProposalResponse]


class ProposalWithSectionsResponse(BaseModel):
    """A proposal together with all of its sections."""

    proposal: ProposalResponse
    sections: list[SectionResponse]
