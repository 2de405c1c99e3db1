from datetime import date, datetime

import pytest

from artist_booking.domain.proposals.repository import ProposalRepository
from artist_booking.domain.proposals.state import (
    ProposalStatus,
    can_transition,
    ensure_completion_transition,
    ensure_transition,
)
from artist_booking.errors import StateConflictError
from artist_booking.models import Gig, Proposal


@pytest.mark.parametrize(
    "current,target,allowed",
    [
        ("pending", "in-progress", True),
        ("in-progress", "completed", True),
        ("pending", "completed", False),
        ("in-progress", "pending", False),
        ("completed", "in-progress", False),
        ("completed", "completed", False),
        ("pending", "pending", False),
    ],
)
def test_transition_table(current, target, allowed):
    assert can_transition(current, target) is allowed


def test_ensure_transition_raises_with_given_message():
    with pytest.raises(StateConflictError) as exc_info:
        ensure_transition("completed", ProposalStatus.IN_PROGRESS, "This proposal is no longer pending")
    assert exc_info.value.message == "This proposal is no longer pending"
    assert exc_info.value.status_code == 400


def test_confirmed_request_cannot_be_confirmed_again():
    ensure_completion_transition("pending", "confirmed", "not pending")
    with pytest.raises(StateConflictError):
        ensure_completion_transition("confirmed", "confirmed", "not pending")


@pytest.fixture()
def pending_proposal(db_session, venue, artist):
    gig = Gig(
        user_id=venue.id,
        name="Late Show",
        date=date(2030, 1, 10),
        venue="Cellar",
        hourly_rate=50,
        start_time=datetime(2030, 1, 10, 21, 0),
        end_time=datetime(2030, 1, 10, 23, 0),
        total_hours="02:00:00",
    )
    db_session.add(gig)
    db_session.commit()
    proposal = Proposal(
        gig_id=gig.id,
        artist_id=artist.id,
        hourly_rate=50,
        cover_letter="Happy to play",
        status="pending",
        created_at=datetime(2029, 12, 1),
    )
    db_session.add(proposal)
    db_session.commit()
    return proposal


def test_compare_and_swap_lets_only_one_hire_win(db_session, pending_proposal):
    repo = ProposalRepository()
    first = repo.transition_status(
        db_session, pending_proposal.id, "pending", "in-progress", hired_at=datetime(2029, 12, 2)
    )
    second = repo.transition_status(
        db_session, pending_proposal.id, "pending", "in-progress", hired_at=datetime(2029, 12, 3)
    )
    db_session.commit()

    assert first is True
    assert second is False
    db_session.refresh(pending_proposal)
    assert pending_proposal.status == "in-progress"
    assert pending_proposal.hired_at == datetime(2029, 12, 2)


def test_compare_and_swap_rejects_skipping_states(db_session, pending_proposal):
    repo = ProposalRepository()
    assert repo.transition_status(db_session, pending_proposal.id, "in-progress", "completed") is False
    db_session.rollback()
    db_session.refresh(pending_proposal)
    assert pending_proposal.status == "pending"
