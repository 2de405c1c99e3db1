"""Completion router - requesting and confirming gig completion"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import ARTIST, VENUE, require_user_type
from ...database import get_db
from ...models import User
from ...schemas import success
from ..proposals.schemas import ProposalResponse
from .schemas import CompletionConfirm, CompletionRequestCreate
from .service import CompletionService

artist_router = APIRouter(prefix="/api/v1/artists", tags=["Completion"])
venue_router = APIRouter(prefix="/api/v1/venues", tags=["Completion"])


def get_completion_service(db: Session = Depends(get_db)) -> CompletionService:
    """Dependency injection for CompletionService"""
    return CompletionService(db)


@artist_router.post("/gigs/{gig_id}/request-completion")
async def request_completion(
    gig_id: int,
    data: CompletionRequestCreate,
    current_user: User = Depends(require_user_type(ARTIST, "Only artist users can request gig completion")),
    service: CompletionService = Depends(get_completion_service),
):
    """Ask the venue to confirm the gig has been performed"""
    proposal = service.request_completion(gig_id, data, current_user)
    return success(
        {"proposal": ProposalResponse.from_model(proposal)},
        message="Completion request submitted",
    )


@venue_router.post("/gigs/{gig_id}/confirm-completion")
async def confirm_completion(
    gig_id: int,
    data: CompletionConfirm,
    current_user: User = Depends(require_user_type(VENUE, "Only venue users can confirm gig completion")),
    service: CompletionService = Depends(get_completion_service),
):
    """Confirm completion and rate the artist"""
    result = service.confirm_completion(gig_id, data, current_user)
    return success(result.model_dump(), message="Gig completion confirmed")
