"""Gig router - FastAPI endpoints for venue and artist gig access"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session

from ...auth import ARTIST, VENUE, require_user_type
from ...database import get_db
from ...models import User
from ...schemas import PageParams, get_page_params, success
from .schemas import GigCreate, GigResponse, GigUpdate
from .service import GigService

venue_router = APIRouter(prefix="/api/v1/venues", tags=["Venue Gigs"])
artist_router = APIRouter(prefix="/api/v1/artists", tags=["Artist Gigs"])


def get_gig_service(db: Session = Depends(get_db)) -> GigService:
    """Dependency injection for GigService"""
    return GigService(db)


# ============================================================================
# VENUE ROUTES
# ============================================================================


@venue_router.post("/gigs", status_code=201)
async def create_gig(
    data: GigCreate,
    current_user: User = Depends(require_user_type(VENUE, "Only venue users can create gigs")),
    service: GigService = Depends(get_gig_service),
):
    """Create a gig"""
    gig = service.create_gig(data, current_user)
    return success({"gig": GigResponse.from_model(gig)}, message="Gig created successfully")


@venue_router.get("/gigs")
async def list_venue_gigs(
    search: Optional[str] = Query(None, description="Case-insensitive match on gig name"),
    current_user: User = Depends(require_user_type(VENUE, "Only venue users can access gig listings")),
    params: PageParams = Depends(get_page_params),
    service: GigService = Depends(get_gig_service),
):
    """List the calling venue's own gigs"""
    return success(service.list_gigs(params, search, owner=current_user))


@venue_router.get("/gigs/{gig_id}")
async def get_venue_gig(
    gig_id: int,
    current_user: User = Depends(require_user_type(VENUE, "Only venue users can access gigs")),
    service: GigService = Depends(get_gig_service),
):
    gig = service.get_venue_gig(gig_id, current_user)
    return success({"gig": GigResponse.from_model(gig)})


@venue_router.patch("/gigs/{gig_id}")
async def update_gig(
    gig_id: int,
    data: GigUpdate,
    current_user: User = Depends(require_user_type(VENUE, "Only venue users can update gigs")),
    service: GigService = Depends(get_gig_service),
):
    gig = service.update_gig(gig_id, data, current_user)
    return success({"gig": GigResponse.from_model(gig)}, message="Gig updated successfully")


@venue_router.delete("/gigs/{gig_id}", status_code=204)
async def delete_gig(
    gig_id: int,
    current_user: User = Depends(require_user_type(VENUE, "Only venue users can delete gigs")),
    service: GigService = Depends(get_gig_service),
):
    service.delete_gig(gig_id, current_user)
    return Response(status_code=204)


# ============================================================================
# ARTIST ROUTES
# ============================================================================


@artist_router.get("/gigs")
async def list_gigs_for_artist(
    search: Optional[str] = Query(None, description="Case-insensitive match on gig name"),
    current_user: User = Depends(require_user_type(ARTIST, "Only artist users can view gig listings")),
    params: PageParams = Depends(get_page_params),
    service: GigService = Depends(get_gig_service),
):
    """List every gig open to artists"""
    return success(service.list_gigs(params, search))


@artist_router.get("/gigs/{gig_id}")
async def get_gig_for_artist(
    gig_id: int,
    current_user: User = Depends(require_user_type(ARTIST, "Only artist users can view gigs")),
    service: GigService = Depends(get_gig_service),
):
    gig = service.get_gig(gig_id)
    return success({"gig": GigResponse.from_model(gig)})
