"""Proposal repository - Database operations for gig proposals"""

from typing import Optional

from sqlalchemy.orm import Session, joinedload

from ...models import CompletionRequest, Proposal


class ProposalRepository:
    """Repository for proposal database operations"""

    @staticmethod
    def create_proposal(db: Session, **proposal_data) -> Proposal:
        proposal = Proposal(**proposal_data)
        db.add(proposal)
        db.commit()
        db.refresh(proposal)
        return proposal

    @staticmethod
    def get_proposal_by_id(db: Session, proposal_id: int) -> Optional[Proposal]:
        return (
            db.query(Proposal)
            .options(joinedload(Proposal.completion_request))
            .filter(Proposal.id == proposal_id)
            .first()
        )

    @staticmethod
    def get_proposals_for_gig(db: Session, gig_id: int) -> list[Proposal]:
        """All proposals on a gig, oldest first"""
        return (
            db.query(Proposal)
            .options(joinedload(Proposal.completion_request))
            .filter(Proposal.gig_id == gig_id)
            .order_by(Proposal.created_at.asc(), Proposal.id.asc())
            .all()
        )

    @staticmethod
    def get_proposals_for_artist(
        db: Session, artist_id: int, gig_id: Optional[int] = None
    ) -> list[Proposal]:
        """An artist's proposals, newest first, optionally limited to one gig"""
        query = (
            db.query(Proposal)
            .options(joinedload(Proposal.completion_request))
            .filter(Proposal.artist_id == artist_id)
        )
        if gig_id is not None:
            query = query.filter(Proposal.gig_id == gig_id)
        return query.order_by(Proposal.created_at.desc(), Proposal.id.desc()).all()

    @staticmethod
    def transition_status(
        db: Session, proposal_id: int, from_status: str, to_status: str, **extra
    ) -> bool:
        """
        Compare-and-swap the proposal status.

        The UPDATE only matches while the row still holds from_status, so of two
        concurrent writers exactly one sees a row count of 1. Does not commit.
        """
        updated = (
            db.query(Proposal)
            .filter(Proposal.id == proposal_id, Proposal.status == from_status)
            .update({"status": to_status, **extra}, synchronize_session=False)
        )
        return updated == 1

    @staticmethod
    def transition_completion_status(
        db: Session, request_id: int, from_status: str, to_status: str, **extra
    ) -> bool:
        """Compare-and-swap on the completion request status. Does not commit."""
        updated = (
            db.query(CompletionRequest)
            .filter(CompletionRequest.id == request_id, CompletionRequest.status == from_status)
            .update({"status": to_status, **extra}, synchronize_session=False)
        )
        return updated == 1
