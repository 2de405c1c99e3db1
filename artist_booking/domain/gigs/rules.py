"""Gig invariants, checked explicitly on every create and update"""

from datetime import datetime
from typing import Any, Iterable, Optional

from ...errors import ValidationError
from ...shared.validators import format_duration, to_naive_utc, utcnow, validate_payment_option

GIG_FIELDS = (
    "name",
    "date",
    "venue",
    "hourly_rate",
    "full_gig_amount",
    "estimated_audience_size",
    "start_time",
    "end_time",
    "equipment",
    "job_details",
)

MIN_NAME_LENGTH = 3


def build_gig_fields(
    values: dict[str, Any],
    changed: Optional[Iterable[str]] = None,
    now: Optional[datetime] = None,
) -> dict[str, Any]:
    """
    Validate a complete set of gig values and derive total_hours.

    Args:
        values: Every gig field, merged from the stored gig and the incoming changes
        changed: Fields supplied by the caller; "future" checks only apply to these.
            None means all fields (gig creation).
        now: Reference time, naive UTC

    Returns:
        Column values ready to be written

    Raises:
        ValidationError: Listing every violated rule
    """
    now = now or utcnow()
    changed = set(GIG_FIELDS if changed is None else changed)
    errors: list[dict[str, str]] = []

    fields = {key: values.get(key) for key in GIG_FIELDS}
    # The calendar day of each time is read in the offset the caller sent, before normalizing
    start_day = fields["start_time"].date() if fields["start_time"] else None
    end_day = fields["end_time"].date() if fields["end_time"] else None
    fields["start_time"] = to_naive_utc(fields["start_time"])
    fields["end_time"] = to_naive_utc(fields["end_time"])

    for key, label in (("name", "Gig name"), ("venue", "Venue")):
        if not (fields[key] or "").strip():
            errors.append({"field": key, "message": f"{label} is required"})
    if fields["name"] and 0 < len(fields["name"].strip()) < MIN_NAME_LENGTH:
        errors.append(
            {"field": "name", "message": f"Gig name must be at least {MIN_NAME_LENGTH} characters long"}
        )

    try:
        validate_payment_option(fields["hourly_rate"], fields["full_gig_amount"])
    except ValueError as e:
        errors.append({"field": "payment", "message": str(e)})

    gig_date = fields["date"]
    start, end = fields["start_time"], fields["end_time"]

    if gig_date is None:
        errors.append({"field": "date", "message": "Date is required"})
    elif "date" in changed and gig_date < now.date():
        errors.append({"field": "date", "message": "Date must be in the future"})

    if start is None or end is None:
        errors.append({"field": "startTime", "message": "Start time and end time are required"})
    else:
        if "start_time" in changed and start < now:
            errors.append({"field": "startTime", "message": "Start time must be in the future"})
        if end <= start:
            errors.append({"field": "endTime", "message": "End time must be after start time"})
        if gig_date is not None and (start_day != gig_date or end_day != gig_date):
            errors.append(
                {
                    "field": "startTime",
                    "message": "Start time and end time must be on the same day as the gig date",
                }
            )

    if errors:
        raise ValidationError(errors)

    fields["total_hours"] = format_duration((end - start).total_seconds())
    return fields
