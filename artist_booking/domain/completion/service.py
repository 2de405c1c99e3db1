"""Completion service - Completion requests and venue confirmation with rating"""

import logging

from sqlalchemy.orm import Session

from ...errors import NotFoundError, StateConflictError
from ...models import Proposal, User
from ...shared.validators import utcnow
from ...utils.sanitization import sanitize_text
from ..gigs.repository import GigRepository
from ..proposals.repository import ProposalRepository
from ..proposals.schemas import ProposalResponse
from ..proposals.service import MSG_GIG_NOT_OWNED
from ..proposals.state import (
    CompletionStatus,
    ProposalStatus,
    ensure_completion_transition,
    ensure_transition,
)
from ..ratings.service import RatingService
from .repository import CompletionRepository
from .schemas import CompletionConfirm, CompletionRequestCreate, CompletionResult

logger = logging.getLogger(__name__)

MSG_NO_PROPOSAL = "No proposal found for this gig"
MSG_NOT_IN_PROGRESS = "Can only request completion for in-progress gigs"
MSG_NO_REQUEST = "No completion request found for this gig"
MSG_REQUEST_NOT_PENDING = "Completion request is not in pending status"


class CompletionService:
    """Service layer for the completion workflow"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = CompletionRepository()
        self.proposals = ProposalRepository()
        self.gigs = GigRepository()
        self.ratings = RatingService(db)

    def request_completion(self, gig_id: int, data: CompletionRequestCreate, artist: User) -> Proposal:
        """
        Ask the venue to confirm that the gig took place.

        When the artist has several proposals on the gig the in-progress one
        is used, otherwise the most recent. Repeating the request before the
        venue confirms overwrites the code and address.
        """
        candidates = self.proposals.get_proposals_for_artist(self.db, artist.id, gig_id=gig_id)
        if not candidates:
            raise NotFoundError(MSG_NO_PROPOSAL)

        proposal = next(
            (p for p in candidates if p.status == ProposalStatus.IN_PROGRESS.value),
            candidates[0],
        )
        if proposal.status != ProposalStatus.IN_PROGRESS.value:
            logger.warning(
                f"Artist {artist.id} requested completion on proposal {proposal.id} in status {proposal.status}"
            )
            raise StateConflictError(MSG_NOT_IN_PROGRESS)

        replaced = proposal.completion_request is not None
        self.repo.upsert_request(
            self.db,
            proposal,
            confirmation_code=data.confirmationCode,
            location_address=data.locationAddress,
            requested_at=utcnow(),
        )
        self.db.commit()
        self.db.refresh(proposal)

        logger.info(
            f"Artist {artist.id} {'renewed' if replaced else 'opened'} completion request "
            f"on proposal {proposal.id} for gig {gig_id}"
        )
        return proposal

    def confirm_completion(self, gig_id: int, data: CompletionConfirm, venue: User) -> CompletionResult:
        """
        Confirm a pending completion request and rate the artist.

        Completing the proposal, confirming the request, storing the venue's
        rating and updating the artist aggregate are committed together or
        not at all.
        """
        gig = self.gigs.get_owned_gig(self.db, gig_id, venue.id)
        if not gig:
            raise NotFoundError(MSG_GIG_NOT_OWNED)

        proposals = self.proposals.get_proposals_for_gig(self.db, gig.id)
        if not proposals:
            raise NotFoundError(MSG_NO_PROPOSAL)

        requested = [p for p in proposals if p.completion_request is not None]
        if not requested:
            raise NotFoundError(MSG_NO_REQUEST)

        proposal = next(
            (p for p in requested if p.completion_request.status == CompletionStatus.PENDING.value),
            requested[0],
        )
        request = proposal.completion_request

        ensure_completion_transition(request.status, CompletionStatus.CONFIRMED, MSG_REQUEST_NOT_PENDING)
        ensure_transition(proposal.status, ProposalStatus.COMPLETED, MSG_REQUEST_NOT_PENDING)

        proposal_id, venue_id = proposal.id, venue.id
        now = utcnow()
        comments = sanitize_text(data.comments)

        try:
            confirmed = self.proposals.transition_completion_status(
                self.db,
                request.id,
                CompletionStatus.PENDING.value,
                CompletionStatus.CONFIRMED.value,
                confirmed_at=now,
                confirmed_by=venue.id,
                rating=data.rating,
                rating_tags=list(data.tags),
                rating_comments=comments,
                rated_by=venue.id,
            )
            if not confirmed:
                raise StateConflictError(MSG_REQUEST_NOT_PENDING)

            completed = self.proposals.transition_status(
                self.db,
                proposal.id,
                ProposalStatus.IN_PROGRESS.value,
                ProposalStatus.COMPLETED.value,
            )
            if not completed:
                raise StateConflictError(MSG_REQUEST_NOT_PENDING)

            artist_rating = self.ratings.record_rating(
                proposal.artist_id,
                gig_id=gig.id,
                proposal_id=proposal.id,
                venue_id=venue.id,
                venue_name=venue.name,
                rating=data.rating,
                tags=data.tags,
                comments=comments,
                rated_at=now,
            )
            self.db.commit()
        except Exception:
            self.db.rollback()
            logger.warning(f"Confirmation of proposal {proposal_id} by venue {venue_id} rolled back")
            raise

        self.db.refresh(proposal)
        self.db.refresh(request)
        logger.info(
            f"Venue {venue.id} confirmed completion of proposal {proposal.id} "
            f"with rating {data.rating}"
        )
        return CompletionResult(
            proposal=ProposalResponse.from_model(proposal),
            artistRating=artist_rating,
        )
