from sqlalchemy import (
    JSON,
    Column,
    Date,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from .database import Base


class User(Base):
    """Directory entry for an account. Credentials live with the identity service."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    user_type = Column(String(20), nullable=False)  # artist, venue
    created_at = Column(DateTime, server_default=func.now())

    gigs = relationship("Gig", back_populates="owner", cascade="all, delete-orphan")


class Gig(Base):
    __tablename__ = "gigs"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    date = Column(Date, nullable=False)
    venue = Column(String(255), nullable=False)
    # Exactly one of hourly_rate / full_gig_amount is set
    hourly_rate = Column(Numeric(10, 2), nullable=True)
    full_gig_amount = Column(Numeric(10, 2), nullable=True)
    estimated_audience_size = Column(Integer, nullable=True)
    start_time = Column(DateTime, nullable=False)
    end_time = Column(DateTime, nullable=False)
    total_hours = Column(String(20), nullable=True)  # HH:MM:SS
    equipment = Column(Text, nullable=True)
    job_details = Column(Text, nullable=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    owner = relationship("User", back_populates="gigs")


class Proposal(Base):
    __tablename__ = "gig_proposals"

    id = Column(Integer, primary_key=True, index=True)
    # Plain reference: a gig can be deleted while its proposals remain
    gig_id = Column(Integer, nullable=False, index=True)
    artist_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    hourly_rate = Column(Numeric(10, 2), nullable=True)
    full_gig_amount = Column(Numeric(10, 2), nullable=True)
    cover_letter = Column(Text, nullable=False)
    status = Column(String(20), nullable=False, default="pending", index=True)
    created_at = Column(DateTime, nullable=False)
    hired_at = Column(DateTime, nullable=True)  # set once, on pending -> in-progress

    artist = relationship("User")
    completion_request = relationship(
        "CompletionRequest",
        back_populates="proposal",
        uselist=False,
        cascade="all, delete-orphan",
    )
    messages = relationship("Message", back_populates="proposal", cascade="all, delete-orphan")


class CompletionRequest(Base):
    """Artist-initiated completion handshake; carries the venue rating once confirmed."""

    __tablename__ = "completion_requests"

    id = Column(Integer, primary_key=True, index=True)
    proposal_id = Column(
        Integer, ForeignKey("gig_proposals.id", ondelete="CASCADE"), unique=True, nullable=False
    )
    requested_at = Column(DateTime, nullable=False)
    confirmation_code = Column(String(50), nullable=False)
    location_address = Column(String(500), nullable=False)
    status = Column(String(20), nullable=False, default="pending")  # pending, confirmed
    confirmed_at = Column(DateTime, nullable=True)
    confirmed_by = Column(Integer, ForeignKey("users.id"), nullable=True)
    # Venue rating, written once at confirmation
    rating = Column(Integer, nullable=True)
    rating_tags = Column(JSON, nullable=True)
    rating_comments = Column(Text, nullable=True)
    rated_by = Column(Integer, ForeignKey("users.id"), nullable=True)

    proposal = relationship("Proposal", back_populates="completion_request")


class ArtistRating(Base):
    """Derived reputation aggregate, recomputed from ArtistRatingEvent rows."""

    __tablename__ = "artist_ratings"

    artist_id = Column(Integer, ForeignKey("users.id"), primary_key=True)
    average_rating = Column(Float, nullable=False, default=0.0)
    rating_count = Column(Integer, nullable=False, default=0)
    common_tags = Column(JSON, nullable=False, default=dict)
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    events = relationship(
        "ArtistRatingEvent",
        back_populates="aggregate",
        order_by="ArtistRatingEvent.id",
    )


class ArtistRatingEvent(Base):
    __tablename__ = "artist_rating_events"

    id = Column(Integer, primary_key=True, index=True)
    artist_id = Column(Integer, ForeignKey("artist_ratings.artist_id"), nullable=False, index=True)
    gig_id = Column(Integer, nullable=False)
    proposal_id = Column(Integer, unique=True, nullable=False)
    venue_id = Column(Integer, nullable=False)
    venue_name = Column(String(255), nullable=True)
    rating = Column(Integer, nullable=False)
    tags = Column(JSON, nullable=False, default=list)
    comments = Column(Text, nullable=True)
    rated_at = Column(DateTime, nullable=False)

    aggregate = relationship("ArtistRating", back_populates="events")


class Message(Base):
    __tablename__ = "proposal_messages"

    id = Column(Integer, primary_key=True, index=True)
    proposal_id = Column(
        Integer, ForeignKey("gig_proposals.id", ondelete="CASCADE"), nullable=False, index=True
    )
    sender_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    sender_type = Column(String(20), nullable=False)  # artist, venue
    message = Column(Text, nullable=False)
    created_at = Column(DateTime, nullable=False, index=True)

    proposal = relationship("Proposal", back_populates="messages")
