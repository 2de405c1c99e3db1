"""Gig repository - Database operations for gigs"""

from typing import Optional

from sqlalchemy.orm import Session

from ...models import Gig


class GigRepository:
    """Repository for gig database operations"""

    @staticmethod
    def get_gig_by_id(db: Session, gig_id: int) -> Optional[Gig]:
        """Get a gig regardless of owner"""
        return db.query(Gig).filter(Gig.id == gig_id).first()

    @staticmethod
    def get_owned_gig(db: Session, gig_id: int, user_id: int) -> Optional[Gig]:
        """Get a gig only if it belongs to the given venue user"""
        return db.query(Gig).filter(Gig.id == gig_id, Gig.user_id == user_id).first()

    @staticmethod
    def list_gigs(
        db: Session,
        offset: int,
        limit: int,
        search: Optional[str] = None,
        owner_id: Optional[int] = None,
    ) -> tuple[int, list[Gig]]:
        """Page through gigs, newest first. Returns (total, gigs)"""
        query = db.query(Gig)

        if owner_id is not None:
            query = query.filter(Gig.user_id == owner_id)

        if search:
            query = query.filter(Gig.name.ilike(f"%{search}%"))

        total = query.count()
        gigs = query.order_by(Gig.created_at.desc(), Gig.id.desc()).offset(offset).limit(limit).all()
        return total, gigs

    @staticmethod
    def create_gig(db: Session, user_id: int, **gig_data) -> Gig:
        gig = Gig(user_id=user_id, **gig_data)
        db.add(gig)
        db.commit()
        db.refresh(gig)
        return gig

    @staticmethod
    def update_gig(db: Session, gig: Gig, **updates) -> Gig:
        """Write every provided column, including explicit None values"""
        for key, value in updates.items():
            if hasattr(gig, key):
                setattr(gig, key, value)

        db.commit()
        db.refresh(gig)
        return gig

    @staticmethod
    def delete_gig(db: Session, gig: Gig) -> None:
        db.delete(gig)
        db.commit()
