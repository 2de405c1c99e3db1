"""
Artist reputation aggregation.

The aggregate is always recomputed from the full list of rating events rather
than adjusted incrementally, so the stored numbers stay consistent with the
events no matter how the list changes. Recomputing twice over the same events
yields the same result.
"""

from collections import Counter
from enum import Enum
from typing import Any, Iterable


class RatingTag(str, Enum):
    PROFESSIONAL = "Professional"
    FUN = "Fun"
    CROWD_PLEASER = "Crowd Pleaser"
    OTHER = "Other"


VALID_TAGS = tuple(tag.value for tag in RatingTag)

MIN_RATING = 1
MAX_RATING = 5


def invalid_tags(tags: Iterable[str]) -> list[str]:
    """Tags outside the fixed vocabulary, in the order given"""
    return [tag for tag in tags if tag not in VALID_TAGS]


def _field(event: Any, name: str):
    if isinstance(event, dict):
        return event[name]
    return getattr(event, name)


def compute_rating_summary(events: Iterable[Any]) -> dict[str, Any]:
    """
    Derive averageRating, ratingCount and commonTags from rating events.

    Events may be ArtistRatingEvent rows or mappings with "rating" and "tags".
    Tags that never occur are absent from commonTags.
    """
    ratings = []
    tag_counts: Counter = Counter()

    for event in events:
        ratings.append(_field(event, "rating"))
        tag_counts.update(_field(event, "tags") or [])

    count = len(ratings)
    return {
        "averageRating": sum(ratings) / count if count else 0,
        "ratingCount": count,
        "commonTags": dict(tag_counts),
    }
