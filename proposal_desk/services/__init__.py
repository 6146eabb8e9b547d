"""
Business logic services package.

WHY: Services hold the ownership rules, separated from API routes and data
access (API → Service → DAO).
"""

from proposal_desk.services.proposal_repository import ProposalRepository
from proposal_desk.services.section_repository import SectionRepository

__all__ = ["ProposalRepository", "SectionRepository"]
