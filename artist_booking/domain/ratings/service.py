"""Rating service - records confirmed-completion ratings and serves artist reputation"""

import logging
from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session

from ...auth import ARTIST
from ...errors import NotFoundError
from ...models import User
from .aggregator import compute_rating_summary
from .repository import RatingRepository
from .schemas import ArtistRatingSummary, RatingEventResponse

logger = logging.getLogger(__name__)


class RatingService:
    """Service layer for the rating aggregator"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = RatingRepository()

    def record_rating(
        self,
        artist_id: int,
        *,
        gig_id: int,
        proposal_id: int,
        venue_id: int,
        venue_name: Optional[str],
        rating: int,
        tags: list[str],
        comments: str,
        rated_at: datetime,
    ) -> ArtistRatingSummary:
        """
        Append a rating event and recompute the artist's aggregate.

        Runs inside the caller's transaction and never commits, so a failure
        in the surrounding confirmation rolls the rating back too.
        """
        aggregate = self.repo.get_aggregate(self.db, artist_id, for_update=True)
        if aggregate is None:
            aggregate = self.repo.create_aggregate(self.db, artist_id)
            logger.info(f"Created rating aggregate for artist {artist_id}")

        self.repo.add_event(
            self.db,
            artist_id=artist_id,
            gig_id=gig_id,
            proposal_id=proposal_id,
            venue_id=venue_id,
            venue_name=venue_name,
            rating=rating,
            tags=list(tags),
            comments=comments,
            rated_at=rated_at,
        )

        summary = compute_rating_summary(self.repo.get_events(self.db, artist_id))
        aggregate.average_rating = summary["averageRating"]
        aggregate.rating_count = summary["ratingCount"]
        aggregate.common_tags = summary["commonTags"]
        self.db.flush()

        logger.info(
            f"Artist {artist_id} rated {rating} by venue {venue_id}; "
            f"average now {summary['averageRating']:.2f} over {summary['ratingCount']}"
        )
        return ArtistRatingSummary(artistId=artist_id, **summary)

    def get_artist_rating(self, artist_id: int) -> dict:
        """Summary plus individual ratings; an unrated artist gets an empty summary"""
        artist = self.db.query(User).filter(User.id == artist_id).first()
        if not artist or artist.user_type != ARTIST:
            raise NotFoundError("Artist not found")

        events = self.repo.get_events(self.db, artist_id)
        summary = compute_rating_summary(events)
        return {
            "artistRating": ArtistRatingSummary(artistId=artist_id, **summary),
            "ratings": [RatingEventResponse.from_model(e) for e in events],
        }
