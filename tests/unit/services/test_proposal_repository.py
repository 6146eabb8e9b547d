"""
Unit tests for the Proposal Repository.

WHAT: Tests for owner-scoped proposal operations.

WHY: Verifies that:
1. The owner always comes from the acting identity
2. Other users' proposals behave exactly like missing ones
3. Field patches only touch supplied fields
4. An empty patch does not advance updated_at
5. Deleting a proposal removes its sections
"""

import pytest
from datetime import timedelta

from proposal_desk.core.exceptions import ResourceAlreadyExistsError, ResourceNotFoundError
from proposal_desk.dao.proposal_section import ProposalSectionDAO
from proposal_desk.models.base import utcnow
from proposal_desk.schemas.proposal import ProposalCreate
from proposal_desk.services.proposal_repository import ProposalRepository
from tests.factories import ProposalFactory, SectionFactory


class TestCreate:
    """Tests for ProposalRepository.create."""

    @pytest.mark.asyncio
    async def test_create_sets_owner_and_timestamps(self, db_session, user_a):
        proposal = await ProposalRepository(db_session).create(
            user_a, ProposalCreate(title="Website proposal")
        )

        assert proposal.id
        assert proposal.user_id == user_a.user_id
        assert proposal.title == "Website proposal"
        assert proposal.status is None
        assert proposal.client_name is None
        assert proposal.created_at == proposal.updated_at

    @pytest.mark.asyncio
    async def test_create_keeps_caller_supplied_id(self, db_session, user_a):
        proposal = await ProposalRepository(db_session).create(
            user_a, ProposalCreate(id="custom-id", title="With id", currency="AED")
        )

        assert proposal.id == "custom-id"
        assert proposal.currency == "AED"

    @pytest.mark.asyncio
    async def test_owner_cannot_be_supplied(self, db_session, user_a):
        """Unknown input fields such as user_id are ignored by the schema."""
        data = ProposalCreate.model_validate({"title": "Sneaky", "user_id": "user-b"})

        proposal = await ProposalRepository(db_session).create(user_a, data)

        assert proposal.user_id == user_a.user_id


    @pytest.mark.asyncio
    async def test_taken_id_conflicts(self, db_session, user_a, user_b):
        await ProposalFactory.create(db_session, id="p-1", user_id=user_a.user_id, title="A")

        with pytest.raises(ResourceAlreadyExistsError) as exc_info:
            await ProposalRepository(db_session).create(
                user_b, ProposalCreate(id="p-1", title="B")
            )

        assert exc_info.value.status_code == 409
        assert exc_info.value.to_dict()["details"] is None


class TestUpdate:
    """Tests for ProposalRepository.update."""

    @pytest.mark.asyncio
    async def test_update_applies_patch_and_advances_updated_at(self, db_session, user_a):
        past = utcnow() - timedelta(hours=1)
        existing = await ProposalFactory.create(
            db_session, user_id=user_a.user_id, title="Old", client_name="ACME", updated_at=past
        )

        updated = await ProposalRepository(db_session).update(
            user_a, existing.id, {"title": "New", "status": "sent"}
        )

        assert updated.title == "New"
        assert updated.status == "sent"
        assert updated.client_name == "ACME"
        assert updated.updated_at > past

    @pytest.mark.asyncio
    async def test_empty_patch_is_a_no_op(self, db_session, user_a):
        past = utcnow() - timedelta(hours=1)
        existing = await ProposalFactory.create(
            db_session, user_id=user_a.user_id, title="Same", updated_at=past
        )

        result = await ProposalRepository(db_session).update(user_a, existing.id, {})

        assert result.id == existing.id
        assert result.title == "Same"
        assert result.updated_at == past

    @pytest.mark.asyncio
    async def test_protected_fields_are_not_patchable(self, db_session, user_a):
        past = utcnow() - timedelta(hours=1)
        existing = await ProposalFactory.create(
            db_session, user_id=user_a.user_id, updated_at=past
        )

        result = await ProposalRepository(db_session).update(
            user_a, existing.id, {"user_id": "user-b", "id": "other"}
        )

        assert result.user_id == user_a.user_id
        assert result.id == existing.id
        assert result.updated_at == past

    @pytest.mark.asyncio
    async def test_update_other_users_proposal_not_found(self, db_session, user_a, user_b):
        existing = await ProposalFactory.create(db_session, user_id=user_a.user_id, title="Mine")

        with pytest.raises(ResourceNotFoundError) as exc_info:
            await ProposalRepository(db_session).update(user_b, existing.id, {"title": "Theirs"})

        assert exc_info.value.message == "Proposal not found"
        assert existing.title == "Mine"

    @pytest.mark.asyncio
    async def test_update_missing_not_found(self, db_session, user_a):
        with pytest.raises(ResourceNotFoundError):
            await ProposalRepository(db_session).update(user_a, "missing", {"title": "x"})


class TestListAndGet:
    """Tests for list and get_with_sections."""

    @pytest.mark.asyncio
    async def test_list_only_own(self, db_session, user_a, user_b):
        await ProposalFactory.create(db_session, user_id=user_a.user_id, title="A")
        await ProposalFactory.create(db_session, user_id=user_b.user_id, title="B")
        repo = ProposalRepository(db_session)

        assert [p.title for p in await repo.list(user_a)] == ["A"]
        assert [p.title for p in await repo.list(user_b)] == ["B"]

    @pytest.mark.asyncio
    async def test_get_with_sections(self, db_session, user_a):
        proposal = await ProposalFactory.create(db_session, user_id=user_a.user_id)
        await SectionFactory.create(db_session, proposal, order_index=2, content="Scope")
        await SectionFactory.create(db_session, proposal, order_index=1, content="Intro")

        found, sections = await ProposalRepository(db_session).get_with_sections(
            user_a, proposal.id
        )

        assert found.id == proposal.id
        assert [s.content for s in sections] == ["Intro", "Scope"]

    @pytest.mark.asyncio
    async def test_get_with_sections_other_user_not_found(self, db_session, user_a, user_b):
        proposal = await ProposalFactory.create(db_session, user_id=user_a.user_id)

        with pytest.raises(ResourceNotFoundError):
            await ProposalRepository(db_session).get_with_sections(user_b, proposal.id)


class TestDelete:
    """Tests for ProposalRepository.delete."""

    @pytest.mark.asyncio
    async def test_delete_returns_prior_state_and_removes_sections(self, db_session, user_a):
        proposal = await ProposalFactory.create(
            db_session, user_id=user_a.user_id, title="Gone soon"
        )
        await SectionFactory.create(db_session, proposal, order_index=1)
        await SectionFactory.create(db_session, proposal, order_index=2)
        repo = ProposalRepository(db_session)

        deleted = await repo.delete(user_a, proposal.id)

        assert deleted.title == "Gone soon"
        assert await repo.list(user_a) == []
        assert await ProposalSectionDAO(db_session).list_for_proposal(proposal.id) == []

    @pytest.mark.asyncio
    async def test_delete_other_user_not_found(self, db_session, user_a, user_b):
        proposal = await ProposalFactory.create(db_session, user_id=user_a.user_id)
        section = await SectionFactory.create(db_session, proposal)
        repo = ProposalRepository(db_session)

        with pytest.raises(ResourceNotFoundError):
            await repo.delete(user_b, proposal.id)

        assert [p.id for p in await repo.list(user_a)] == [proposal.id]
        assert await ProposalSectionDAO(db_session).get_by_id(section.id) is not None

    @pytest.mark.asyncio
    async def test_delete_twice_not_found(self, db_session, user_a):
        proposal = await ProposalFactory.create(db_session, user_id=user_a.user_id)
        repo = ProposalRepository(db_session)

        await repo.delete(user_a, proposal.id)

        with pytest.raises(ResourceNotFoundError):
            await repo.delete(user_a, proposal.id)
