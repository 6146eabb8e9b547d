"""
Database models package.

WHY: Centralizing model imports ensures Alembic can discover all models
for migration generation and makes it easier to import models elsewhere.
"""

from proposal_desk.models.base import Base
from proposal_desk.models.proposal import Proposal
from proposal_desk.models.proposal_section import ProposalSection

__all__ = ["Base", "Proposal", "ProposalSection"]
