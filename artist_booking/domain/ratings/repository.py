"""Rating repository - Database operations for artist rating aggregates"""

from typing import Optional

from sqlalchemy.orm import Session

from ...models import ArtistRating, ArtistRatingEvent


class RatingRepository:
    """Repository for artist rating database operations"""

    @staticmethod
    def get_aggregate(db: Session, artist_id: int, for_update: bool = False) -> Optional[ArtistRating]:
        query = db.query(ArtistRating).filter(ArtistRating.artist_id == artist_id)
        if for_update:
            # Serializes concurrent recomputes for the same artist (no-op on SQLite)
            query = query.with_for_update()
        return query.first()

    @staticmethod
    def create_aggregate(db: Session, artist_id: int) -> ArtistRating:
        """Add an empty aggregate row. Flushes but does not commit."""
        aggregate = ArtistRating(artist_id=artist_id, average_rating=0.0, rating_count=0, common_tags={})
        db.add(aggregate)
        db.flush()
        return aggregate

    @staticmethod
    def add_event(db: Session, **event_data) -> ArtistRatingEvent:
        event = ArtistRatingEvent(**event_data)
        db.add(event)
        db.flush()
        return event

    @staticmethod
    def get_events(db: Session, artist_id: int) -> list[ArtistRatingEvent]:
        """All rating events for an artist in the order they were recorded"""
        return (
            db.query(ArtistRatingEvent)
            .filter(ArtistRatingEvent.artist_id == artist_id)
            .order_by(ArtistRatingEvent.id.asc())
            .all()
        )
