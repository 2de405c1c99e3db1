"""Rating router - public artist reputation"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import get_current_user
from ...database import get_db
from ...models import User
from ...schemas import success
from .service import RatingService

router = APIRouter(prefix="/api/v1/artists", tags=["Ratings"])


def get_rating_service(db: Session = Depends(get_db)) -> RatingService:
    """Dependency injection for RatingService"""
    return RatingService(db)


@router.get("/{artist_id}/rating")
async def get_artist_rating(
    artist_id: int,
    current_user: User = Depends(get_current_user),
    service: RatingService = Depends(get_rating_service),
):
    """Get an artist's average rating, rating count, tag counts and rating history"""
    return success(service.get_artist_rating(artist_id))
