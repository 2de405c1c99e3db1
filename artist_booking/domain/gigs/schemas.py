"""Gig domain schemas - Pydantic models for validation"""

from datetime import date as date_type
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, field_validator

from ...models import Gig

# Request field name -> column name
GIG_FIELD_MAP = {
    "name": "name",
    "date": "date",
    "venue": "venue",
    "hourlyRate": "hourly_rate",
    "fullGigAmount": "full_gig_amount",
    "estimatedAudienceSize": "estimated_audience_size",
    "startTime": "start_time",
    "endTime": "end_time",
    "equipment": "equipment",
    "jobDetails": "job_details",
}


class _GigFields(BaseModel):
    @field_validator("name", "venue", "equipment", "jobDetails", check_fields=False)
    @classmethod
    def strip_text(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator("hourlyRate", check_fields=False)
    @classmethod
    def validate_hourly_rate(cls, v):
        if v is not None and v < 0:
            raise ValueError("Hourly rate cannot be negative")
        return v

    @field_validator("fullGigAmount", check_fields=False)
    @classmethod
    def validate_full_gig_amount(cls, v):
        if v is not None and v < 0:
            raise ValueError("Full gig amount cannot be negative")
        return v

    @field_validator("estimatedAudienceSize", check_fields=False)
    @classmethod
    def validate_audience_size(cls, v):
        if v is not None and v < 0:
            raise ValueError("Estimated audience size cannot be negative")
        return v


class GigCreate(_GigFields):
    """Schema for creating a gig"""

    name: str
    date: date_type
    venue: str
    hourlyRate: Optional[float] = None
    fullGigAmount: Optional[float] = None
    estimatedAudienceSize: Optional[int] = None
    startTime: datetime
    endTime: datetime
    equipment: Optional[str] = None
    jobDetails: Optional[str] = None


class GigUpdate(_GigFields):
    """Schema for updating a gig; send null to clear an optional field"""

    name: Optional[str] = None
    date: Optional[date_type] = None
    venue: Optional[str] = None
    hourlyRate: Optional[float] = None
    fullGigAmount: Optional[float] = None
    estimatedAudienceSize: Optional[int] = None
    startTime: Optional[datetime] = None
    endTime: Optional[datetime] = None
    equipment: Optional[str] = None
    jobDetails: Optional[str] = None


def money(value) -> Optional[float]:
    return float(value) if value is not None else None


class GigResponse(BaseModel):
    """Schema for gig response"""

    id: int
    userId: int
    name: str
    date: date_type
    venue: str
    hourlyRate: Optional[float]
    fullGigAmount: Optional[float]
    estimatedAudienceSize: Optional[int]
    startTime: datetime
    endTime: datetime
    totalHours: Optional[str]
    equipment: Optional[str]
    jobDetails: Optional[str]
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None

    @classmethod
    def from_model(cls, gig: Gig) -> "GigResponse":
        return cls(
            id=gig.id,
            userId=gig.user_id,
            name=gig.name,
            date=gig.date,
            venue=gig.venue,
            hourlyRate=money(gig.hourly_rate),
            fullGigAmount=money(gig.full_gig_amount),
            estimatedAudienceSize=gig.estimated_audience_size,
            startTime=gig.start_time,
            endTime=gig.end_time,
            totalHours=gig.total_hours,
            equipment=gig.equipment,
            jobDetails=gig.job_details,
            createdAt=gig.created_at,
            updatedAt=gig.updated_at,
        )
