"""Completion domain schemas - Pydantic models for validation"""

from typing import Any, Optional

from pydantic import BaseModel, field_validator

from ...shared.validators import validate_length
from ..proposals.schemas import ProposalResponse
from ..ratings.aggregator import MAX_RATING, MIN_RATING, invalid_tags
from ..ratings.schemas import ArtistRatingSummary

MSG_RATING_RANGE = f"Rating must be between {MIN_RATING} and {MAX_RATING}"


class CompletionRequestCreate(BaseModel):
    """Schema for an artist's request to mark a gig as done"""

    confirmationCode: str
    locationAddress: str

    @field_validator("confirmationCode")
    @classmethod
    def validate_confirmation_code(cls, v):
        return validate_length(v, "Confirmation code", 3, 50)

    @field_validator("locationAddress")
    @classmethod
    def validate_location_address(cls, v):
        return validate_length(v, "Location address", 5, 500)


class CompletionConfirm(BaseModel):
    """Schema for a venue's confirmation and rating"""

    rating: int
    tags: list[str] = []
    comments: Optional[str] = ""

    @field_validator("rating", mode="before")
    @classmethod
    def validate_rating(cls, v: Any):
        # Floats and booleans are rejected rather than coerced
        if isinstance(v, bool) or not isinstance(v, int):
            raise ValueError(MSG_RATING_RANGE)
        if not MIN_RATING <= v <= MAX_RATING:
            raise ValueError(MSG_RATING_RANGE)
        return v

    @field_validator("tags")
    @classmethod
    def validate_tags(cls, v):
        unknown = invalid_tags(v)
        if unknown:
            raise ValueError(f"Invalid tags: {', '.join(unknown)}")
        # Tags form a set; repeats collapse to the first occurrence
        return list(dict.fromkeys(v))

    @field_validator("comments")
    @classmethod
    def strip_comments(cls, v):
        return (v or "").strip()


class CompletionResult(BaseModel):
    proposal: ProposalResponse
    artistRating: ArtistRatingSummary
