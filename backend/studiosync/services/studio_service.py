# backend/studiosync/services/studio_service.py
"""
Studio Service for StudioSync

Studio CRUD and weekly availability. Only the owning user or an admin may
modify a studio.
"""

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from ..core.exceptions import ForbiddenException, NotFoundException
from ..models.studio import Studio, StudioAvailability
from ..models.user import User
from ..repositories.factory import RepositoryFactory
from ..schemas.studio import AvailabilityEntry, StudioCreate, StudioUpdate
from .base import BaseService

logger = logging.getLogger(__name__)


def ensure_can_manage_studio(user: User, studio: Studio) -> None:
    if not (user.is_admin or studio.owner_id == user.id):
        raise ForbiddenException("Only the studio owner or an admin can modify this studio")


class StudioService(BaseService):
    def __init__(self, db: Session):
        super().__init__(db)
        self.repository = RepositoryFactory.create_studio_repository(db)

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
        return self.repository.list_studios(
            city=city,
            country=country,
            owner_id=owner_id,
            is_active=is_active,
            page=page,
            per_page=per_page,
        )

    def get_studio(self, studio_id: str) -> Studio:
        studio = self.repository.get_by_id(studio_id)
        if studio is None:
            raise NotFoundException("Studio not found", details={"studio_id": studio_id})
        return studio

    @BaseService.measure_operation("create_studio")
    def create_studio(self, owner: User, data: StudioCreate) -> Studio:
        fields = data.model_dump(exclude={"availability"})
        with self.transaction():
            studio = self.repository.create(owner_id=owner.id, **fields)
            if data.availability:
                self.repository.replace_availability(studio, _entries(data.availability))
        self.log_operation("create_studio", studio_id=studio.id, owner_id=owner.id)
        return self.get_studio(studio.id)

    @BaseService.measure_operation("update_studio")
    def update_studio(self, user: User, studio_id: str, data: StudioUpdate) -> Studio:
        studio = self.get_studio(studio_id)
        ensure_can_manage_studio(user, studio)
        changes = non_null_changes(data.model_dump(exclude_unset=True), nullable={"description"})
        if changes.get("currency"):
            changes["currency"] = changes["currency"].upper()
        with self.transaction():
            self.repository.update(studio.id, **changes)
        return studio

    def delete_studio(self, user: User, studio_id: str) -> None:
        studio = self.get_studio(studio_id)
        ensure_can_manage_studio(user, studio)
        with self.transaction():
            self.repository.delete(studio.id)
        self.log_operation("delete_studio", studio_id=studio_id, user_id=user.id)

    def get_availability(self, studio_id: str) -> List[StudioAvailability]:
        studio = self.get_studio(studio_id)
        return self.repository.get_availability(studio.id)

    def replace_availability(
        self, user: User, studio_id: str, entries: List[AvailabilityEntry]
    ) -> List[StudioAvailability]:
        studio = self.get_studio(studio_id)
        ensure_can_manage_studio(user, studio)
        with self.transaction():
            rows = self.repository.replace_availability(studio, _entries(entries))
        return rows


def non_null_changes(changes: Dict[str, Any], nullable: set) -> Dict[str, Any]:
    """Drop explicit nulls for columns that cannot hold them."""
    return {key: value for key, value in changes.items() if value is not None or key in nullable}


def _entries(entries: List[AvailabilityEntry]) -> List[Dict[str, Any]]:
    return [entry.model_dump() for entry in entries]
