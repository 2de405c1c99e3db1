"""Completion repository - Database operations for completion requests"""

from datetime import datetime

from sqlalchemy.orm import Session

from ...models import CompletionRequest, Proposal
from ..proposals.state import CompletionStatus


class CompletionRepository:
    """Repository for completion request database operations"""

    @staticmethod
    def upsert_request(
        db: Session,
        proposal: Proposal,
        confirmation_code: str,
        location_address: str,
        requested_at: datetime,
    ) -> CompletionRequest:
        """
        Attach a pending completion request to the proposal.

        An existing unconfirmed request is overwritten in place and keeps its id.
        Does not commit.
        """
        request = proposal.completion_request
        if request is None:
            request = CompletionRequest(proposal_id=proposal.id)
            db.add(request)
            proposal.completion_request = request

        request.confirmation_code = confirmation_code
        request.location_address = location_address
        request.requested_at = requested_at
        request.status = CompletionStatus.PENDING.value
        db.flush()
        return request
