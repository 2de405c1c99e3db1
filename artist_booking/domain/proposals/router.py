"""Proposal router - submitting proposals and hiring artists"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import ARTIST, VENUE, require_user_type
from ...database import get_db
from ...models import User
from ...schemas import success
from .schemas import ProposalCreate, ProposalResponse
from .service import ProposalService

artist_router = APIRouter(prefix="/api/v1/artists", tags=["Proposals"])
venue_router = APIRouter(prefix="/api/v1/venues", tags=["Proposals"])


def get_proposal_service(db: Session = Depends(get_db)) -> ProposalService:
    """Dependency injection for ProposalService"""
    return ProposalService(db)


@artist_router.post("/gigs/{gig_id}/proposal", status_code=201)
async def submit_proposal(
    gig_id: int,
    data: ProposalCreate,
    current_user: User = Depends(require_user_type(ARTIST, "Only artist users can submit proposals")),
    service: ProposalService = Depends(get_proposal_service),
):
    """Submit a proposal for a gig"""
    proposal = service.submit_proposal(gig_id, data, current_user)
    return success({"proposal": ProposalResponse.from_model(proposal)})


@artist_router.get("/proposals")
async def list_my_proposals(
    current_user: User = Depends(require_user_type(ARTIST, "Only artist users can view their proposals")),
    service: ProposalService = Depends(get_proposal_service),
):
    """List the calling artist's proposals, newest first"""
    proposals = service.list_artist_proposals(current_user)
    return success({"proposals": [ProposalResponse.from_model(p) for p in proposals]})


@venue_router.get("/gigs/{gig_id}/proposals")
async def list_gig_proposals(
    gig_id: int,
    current_user: User = Depends(require_user_type(VENUE, "Only venue users can view gig proposals")),
    service: ProposalService = Depends(get_proposal_service),
):
    """List proposals received for one of the venue's gigs"""
    proposals = service.list_gig_proposals(gig_id, current_user)
    return success({"proposals": [ProposalResponse.from_model(p) for p in proposals]})


@venue_router.post("/proposals/{proposal_id}/hire")
async def hire_artist(
    proposal_id: int,
    current_user: User = Depends(require_user_type(VENUE, "Only venue users can hire artists")),
    service: ProposalService = Depends(get_proposal_service),
):
    """Hire the artist behind a pending proposal"""
    proposal = service.hire_artist(proposal_id, current_user)
    return success({"proposal": ProposalResponse.from_model(proposal)})
