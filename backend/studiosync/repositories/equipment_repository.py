# backend/studiosync/repositories/equipment_repository.py
from typing import Any, Dict, Optional

from sqlalchemy.orm import Session

from ..models.equipment import Equipment, EquipmentStatus, EquipmentType
from .base_repository import BaseRepository


class EquipmentRepository(BaseRepository[Equipment]):
    def __init__(self, db: Session):
        super().__init__(db, Equipment)

    def list_equipment(
        self,
        *,
        studio_id: Optional[str] = None,
        type: Optional[EquipmentType] = None,
        status: Optional[EquipmentStatus] = None,
        page: int = 1,
        per_page: int = 20,
    ) -> Dict[str, Any]:
        query = self.db.query(Equipment)
        if studio_id:
            query = query.filter(Equipment.studio_id == studio_id)
        if type is not None:
            query = query.filter(Equipment.type == type)
        if status is not None:
            query = query.filter(Equipment.status == status)
        return self.paginate(query.order_by(Equipment.name, Equipment.id), page, per_page)
