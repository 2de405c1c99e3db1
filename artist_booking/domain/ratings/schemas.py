"""Rating domain schemas"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from ...models import ArtistRatingEvent


class ArtistRatingSummary(BaseModel):
    artistId: int
    averageRating: float
    ratingCount: int
    commonTags: dict[str, int]


class RatingEventResponse(BaseModel):
    gigId: int
    proposalId: int
    venueId: int
    venueName: Optional[str]
    rating: int
    tags: list[str]
    comments: str
    ratedAt: datetime

    @classmethod
    def from_model(cls, event: ArtistRatingEvent) -> "RatingEventResponse":
        return cls(
            gigId=event.gig_id,
            proposalId=event.proposal_id,
            venueId=event.venue_id,
            venueName=event.venue_name,
            rating=event.rating,
            tags=list(event.tags or []),
            comments=event.comments or "",
            ratedAt=event.rated_at,
        )
