"""Proposal service - Submitting proposals and hiring artists"""

import logging

from sqlalchemy.orm import Session

from ...errors import NotFoundError, StateConflictError
from ...models import Proposal, User
from ...shared.validators import utcnow
from ...utils.sanitization import sanitize_text
from ..gigs.repository import GigRepository
from .repository import ProposalRepository
from .schemas import ProposalCreate
from .state import ProposalStatus, ensure_transition

logger = logging.getLogger(__name__)

MSG_NOT_PENDING = "This proposal is no longer pending"
MSG_GIG_NOT_OWNED = "Gig not found or you don't have permission"


class ProposalService:
    """Service layer for the proposal registry and hiring transition"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = ProposalRepository()
        self.gigs = GigRepository()

    def submit_proposal(self, gig_id: int, data: ProposalCreate, artist: User) -> Proposal:
        """Record an artist's bid; an artist may bid on the same gig more than once"""
        gig = self.gigs.get_gig_by_id(self.db, gig_id)
        if not gig:
            raise NotFoundError("Gig not found")

        proposal = self.repo.create_proposal(
            self.db,
            gig_id=gig.id,
            artist_id=artist.id,
            hourly_rate=data.hourlyRate,
            full_gig_amount=data.fullGigAmount,
            cover_letter=sanitize_text(data.coverLetter),
            status=ProposalStatus.PENDING.value,
            created_at=utcnow(),
            hired_at=None,
        )
        logger.info(f"Proposal {proposal.id} submitted by artist {artist.id} for gig {gig.id}")
        return proposal

    def get_proposal(self, proposal_id: int) -> Proposal:
        proposal = self.repo.get_proposal_by_id(self.db, proposal_id)
        if not proposal:
            raise NotFoundError("Proposal not found")
        return proposal

    def hire_artist(self, proposal_id: int, venue: User) -> Proposal:
        """
        Move a pending proposal to in-progress.

        A gig that is missing or owned by another venue is reported the same
        way, so callers cannot discover other venues' gigs.
        """
        proposal = self.get_proposal(proposal_id)

        gig = self.gigs.get_owned_gig(self.db, proposal.gig_id, venue.id)
        if not gig:
            raise NotFoundError(MSG_GIG_NOT_OWNED)

        ensure_transition(proposal.status, ProposalStatus.IN_PROGRESS, MSG_NOT_PENDING)

        hired = self.repo.transition_status(
            self.db,
            proposal.id,
            ProposalStatus.PENDING.value,
            ProposalStatus.IN_PROGRESS.value,
            hired_at=utcnow(),
        )
        if not hired:
            self.db.rollback()
            logger.warning(f"Proposal {proposal.id} was hired concurrently; rejecting venue {venue.id}")
            raise StateConflictError(MSG_NOT_PENDING)

        self.db.commit()
        self.db.refresh(proposal)
        logger.info(f"Venue {venue.id} hired artist {proposal.artist_id} on proposal {proposal.id}")
        return proposal

    def list_gig_proposals(self, gig_id: int, venue: User) -> list[Proposal]:
        gig = self.gigs.get_owned_gig(self.db, gig_id, venue.id)
        if not gig:
            raise NotFoundError("Gig not found")
        return self.repo.get_proposals_for_gig(self.db, gig.id)

    def list_artist_proposals(self, artist: User) -> list[Proposal]:
        return self.repo.get_proposals_for_artist(self.db, artist.id)
