"""
Data Access Object (DAO) package.

WHY: DAOs provide a clean separation between database operations and business logic,
making the codebase more testable and maintainable.
"""

from proposal_desk.dao.base import BaseDAO
from proposal_desk.dao.proposal import ProposalDAO
from proposal_desk.dao.proposal_section import ProposalSectionDAO

__all__ = ["BaseDAO", "ProposalDAO", "ProposalSectionDAO"]
