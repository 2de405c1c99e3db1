"""Gig service - Business logic for gig operations"""

import logging
from typing import Optional

from sqlalchemy.orm import Session

from ...errors import NotFoundError
from ...models import Gig, User
from ...schemas import PageParams, Pagination
from .repository import GigRepository
from .rules import GIG_FIELDS, build_gig_fields
from .schemas import GIG_FIELD_MAP, GigCreate, GigResponse, GigUpdate

logger = logging.getLogger(__name__)


class GigService:
    """Service layer for gig business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = GigRepository()

    def create_gig(self, data: GigCreate, user: User) -> Gig:
        """Create a gig owned by the calling venue"""
        values = {GIG_FIELD_MAP[key]: value for key, value in data.model_dump().items()}
        fields = build_gig_fields(values)
        gig = self.repo.create_gig(self.db, user.id, **fields)
        logger.info(f"Gig {gig.id} created by venue {user.id}")
        return gig

    def get_venue_gig(self, gig_id: int, user: User) -> Gig:
        gig = self.repo.get_owned_gig(self.db, gig_id, user.id)
        if not gig:
            raise NotFoundError("Gig not found")
        return gig

    def update_gig(self, gig_id: int, data: GigUpdate, user: User) -> Gig:
        """Merge changes into the stored gig, then re-check every invariant"""
        gig = self.get_venue_gig(gig_id, user)

        changes = {GIG_FIELD_MAP[key]: value for key, value in data.model_dump(exclude_unset=True).items()}
        # Required fields keep their stored value when sent as null
        for key in ("name", "date", "venue", "start_time", "end_time"):
            if key in changes and changes[key] is None:
                del changes[key]

        merged = {key: getattr(gig, key) for key in GIG_FIELDS}
        merged.update(changes)
        fields = build_gig_fields(merged, changed=changes.keys())

        gig = self.repo.update_gig(self.db, gig, **fields)
        logger.info(f"Gig {gig.id} updated by venue {user.id}: {sorted(changes)}")
        return gig

    def delete_gig(self, gig_id: int, user: User) -> None:
        gig = self.get_venue_gig(gig_id, user)
        self.repo.delete_gig(self.db, gig)
        logger.info(f"Gig {gig_id} deleted by venue {user.id}")

    def list_gigs(
        self, params: PageParams, search: Optional[str] = None, owner: Optional[User] = None
    ) -> dict:
        """List gigs with pagination; venues only see their own"""
        search = search.strip() if search else None
        total, gigs = self.repo.list_gigs(
            self.db,
            offset=params.offset,
            limit=params.limit,
            search=search,
            owner_id=owner.id if owner else None,
        )
        return {
            "gigs": [GigResponse.from_model(g) for g in gigs],
            "pagination": Pagination.build(total, params),
        }

    def get_gig(self, gig_id: int) -> Gig:
        gig = self.repo.get_gig_by_id(self.db, gig_id)
        if not gig:
            raise NotFoundError("Gig not found")
        return gig
