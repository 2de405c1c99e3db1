"""Proposal domain schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, field_validator, model_validator

from ...models import CompletionRequest, Proposal
from ...shared.validators import validate_payment_option
from ..gigs.schemas import money


class ProposalCreate(BaseModel):
    """Schema for an artist's bid on a gig"""

    hourlyRate: Optional[float] = None
    fullGigAmount: Optional[float] = None
    coverLetter: str

    @field_validator("hourlyRate", "fullGigAmount")
    @classmethod
    def validate_amount(cls, v):
        if v is not None and v < 0:
            raise ValueError("Amount must be a positive number")
        return v

    @field_validator("coverLetter")
    @classmethod
    def validate_cover_letter(cls, v):
        v = (v or "").strip()
        if not v:
            raise ValueError("Cover letter is required")
        return v

    @model_validator(mode="after")
    def validate_payment(self):
        validate_payment_option(self.hourlyRate, self.fullGigAmount)
        return self


class VenueRatingResponse(BaseModel):
    rating: int
    tags: list[str]
    comments: str
    ratedBy: int


class CompletionRequestResponse(BaseModel):
    requestedAt: datetime
    confirmationCode: str
    locationAddress: str
    status: str
    confirmedAt: Optional[datetime] = None
    confirmedBy: Optional[int] = None
    venueRating: Optional[VenueRatingResponse] = None

    @classmethod
    def from_model(cls, request: CompletionRequest) -> "CompletionRequestResponse":
        venue_rating = None
        if request.rating is not None:
            venue_rating = VenueRatingResponse(
                rating=request.rating,
                tags=list(request.rating_tags or []),
                comments=request.rating_comments or "",
                ratedBy=request.rated_by,
            )
        return cls(
            requestedAt=request.requested_at,
            confirmationCode=request.confirmation_code,
            locationAddress=request.location_address,
            status=request.status,
            confirmedAt=request.confirmed_at,
            confirmedBy=request.confirmed_by,
            venueRating=venue_rating,
        )


class ProposalResponse(BaseModel):
    """Schema for proposal response"""

    id: int
    gigId: int
    artistId: int
    hourlyRate: Optional[float]
    fullGigAmount: Optional[float]
    coverLetter: str
    status: str
    createdAt: datetime
    hiredAt: Optional[datetime]
    completionRequest: Optional[CompletionRequestResponse] = None

    @classmethod
    def from_model(cls, proposal: Proposal) -> "ProposalResponse":
        request = proposal.completion_request
        return cls(
            id=proposal.id,
            gigId=proposal.gig_id,
            artistId=proposal.artist_id,
            hourlyRate=money(proposal.hourly_rate),
            fullGigAmount=money(proposal.full_gig_amount),
            coverLetter=proposal.cover_letter,
            status=proposal.status,
            createdAt=proposal.created_at,
            hiredAt=proposal.hired_at,
            completionRequest=CompletionRequestResponse.from_model(request) if request else None,
        )
