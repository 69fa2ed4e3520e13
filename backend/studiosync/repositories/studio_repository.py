# backend/studiosync/repositories/studio_repository.py
"""
Studio Repository for StudioSync

Listing with filters, eager loading of weekly availability, and atomic
replacement of a studio's schedule.
"""

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Query, Session, selectinload

from ..core.exceptions import RepositoryException
from ..models.studio import Studio, StudioAvailability
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)


class StudioRepository(BaseRepository[Studio]):
    def __init__(self, db: Session):
        super().__init__(db, Studio)

    def _apply_eager_loading(self, query: Query) -> Query:
        return query.options(selectinload(Studio.availabilities))

    def list_studios(
        self,
        *,
        city: Optional[str] = None,
        country: Optional[str] = None,
        owner_id: Optional[str] = None,
        is_active: Optional[bool] = None,
        page: int = 1,
        per_page: int = 20,
    ) -> Dict[str, Any]:
        query = self._apply_eager_loading(self.db.query(Studio))
        if city:
            query = query.filter(Studio.city.ilike(city))
        if country:
            query = query.filter(Studio.country.ilike(country))
        if owner_id:
            query = query.filter(Studio.owner_id == owner_id)
        if is_active is not None:
            query = query.filter(Studio.is_active == is_active)
        return self.paginate(query.order_by(Studio.created_at.desc(), Studio.id), page, per_page)

    def get_availability(self, studio_id: str) -> List[StudioAvailability]:
        try:
            return (
                self.db.query(StudioAvailability)
                .filter(StudioAvailability.studio_id == studio_id)
                .order_by(StudioAvailability.day_of_week)
                .all()
            )
        except SQLAlchemyError as e:
            self.logger.error(f"Error getting availability for studio {studio_id}: {str(e)}")
            raise RepositoryException(f"Failed to retrieve availability: {str(e)}")

    def replace_availability(
        self, studio: Studio, entries: List[Dict[str, Any]]
    ) -> List[StudioAvailability]:
        """
        Swap the studio's weekly schedule for ``entries``.

        Old rows are deleted and flushed before the new ones are inserted so
        the (studio_id, day_of_week) unique key never sees both.
        """
        try:
            self.db.query(StudioAvailability).filter(
                StudioAvailability.studio_id == studio.id
            ).delete(synchronize_session=False)
            self.db.flush()
            rows = [StudioAvailability(studio_id=studio.id, **entry) for entry in entries]
            self.db.add_all(rows)
            self.db.flush()
            self.db.expire(studio, ["availabilities"])
            return sorted(rows, key=lambda row: row.day_of_week)
        except SQLAlchemyError as e:
            self.logger.error(f"Error replacing availability for studio {studio.id}: {str(e)}")
            raise RepositoryException(f"Failed to replace availability: {str(e)}")
