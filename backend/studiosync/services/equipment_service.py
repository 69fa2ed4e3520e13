# backend/studiosync/services/equipment_service.py
from typing import Any, Dict, Optional

from sqlalchemy.orm import Session

from ..core.exceptions import NotFoundException
from ..models.equipment import Equipment, EquipmentStatus, EquipmentType
from ..models.user import User
from ..repositories.factory import RepositoryFactory
from ..schemas.equipment import EquipmentCreate, EquipmentUpdate
from .base import BaseService
from .studio_service import ensure_can_manage_studio, non_null_changes

NULLABLE_FIELDS = {"description", "brand", "model", "serial_number", "hourly_rate", "daily_rate"}


class EquipmentService(BaseService):
    def __init__(self, db: Session):
        super().__init__(db)
        self.repository = RepositoryFactory.create_equipment_repository(db)
        self.studio_repository = RepositoryFactory.create_studio_repository(db)

    def list_equipment(
        self,
        *,
        studio_id: Optional[str] = None,
        type: Optional[EquipmentType] = None,
        status: Optional[EquipmentStatus] = None,
        page: int = 1,
        per_page: int = 20,
    ) -> Dict[str, Any]:
        return self.repository.list_equipment(
            studio_id=studio_id, type=type, status=status, page=page, per_page=per_page
        )

    def get_equipment(self, equipment_id: str) -> Equipment:
        item = self.repository.get_by_id(equipment_id)
        if item is None:
            raise NotFoundException("Equipment not found", details={"equipment_id": equipment_id})
        return item

    @BaseService.measure_operation("create_equipment")
    def create_equipment(self, user: User, data: EquipmentCreate) -> Equipment:
        studio = self.studio_repository.get_by_id(data.studio_id, load_relationships=False)
        if studio is None:
            raise NotFoundException("Studio not found", details={"studio_id": data.studio_id})
        ensure_can_manage_studio(user, studio)
        with self.transaction():
            item = self.repository.create(**data.model_dump())
        self.log_operation("create_equipment", equipment_id=item.id, studio_id=studio.id)
        return item

    def update_equipment(self, user: User, equipment_id: str, data: EquipmentUpdate) -> Equipment:
        item = self.get_equipment(equipment_id)
        ensure_can_manage_studio(user, item.studio)
        with self.transaction():
            self.repository.update(
                item.id,
                **non_null_changes(data.model_dump(exclude_unset=True), nullable=NULLABLE_FIELDS),
            )
        return item
