"""
Pydantic schemas for proposal section endpoints.

WHAT: Request/response schemas for saving and deleting sections.

WHY: Malformed input (empty content, non-positive or non-integer
order_index) is rejected here, before any repository call executes.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


ORDER_INDEX_MAX = 2_147_483_647


class SectionSave(BaseModel):
    """
    Upsert request for a section.

    WHY: Without ``id`` a new section is inserted; with ``id`` the existing
    section is overwritten, provided it belongs to ``proposal_id``.
    """

    id: Optional[str] = Field(
        default=None,
        min_length=1,
        description="Existing section id; omit to insert a new section",
    )
    proposal_id: str = Field(..., min_length=1, description="Parent proposal id")
    type: Optional[str] = Field(
        default=None,
        max_length=64,
        description="Free-form category, e.g. intro/scope/timeline/pricing/terms",
    )
    # WHY: strict so that 1.5, "1" and true are rejected rather than coerced;
    # the upper bound is the 32-bit INTEGER column limit
    order_index: int = Field(
        ...,
        gt=0,
        le=ORDER_INDEX_MAX,
        strict=True,
        description="Caller-assigned position (1, 2, 3...)",
    )
    heading: Optional[str] = None
    content: str = Field(..., min_length=1, description="Section body")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "proposal_id": "3f1c9a0e-0d4e-4a39-9d0e-6a3b0f3c2a11",
                "type": "intro",
                "order_index": 1,
                "heading": "Introduction",
                "content": "Thank you for the opportunity...",
            }
        },
    )


class SectionResponse(BaseModel):
    """Section as returned by the API."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    proposal_id: str
    type: Optional[str] = None
    order_index: int
    heading: Optional[str] = None
    content: str
    created_at: datetime


class SectionEnvelope(BaseModel):
    """Single section response body."""

    section: SectionResponse
