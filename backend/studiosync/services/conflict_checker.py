# backend/studiosync/services/conflict_checker.py
"""
Conflict Checker Service for StudioSync

Runs the reservation admission check. Checks are ordered so the caller
always gets the most fundamental problem first:

1. Range: the interval must be non-empty.
2. Existence: the studio must exist and be active; every equipment item must
   exist and belong to that studio.
3. Opening hours: every studio-local day the interval touches must be
   covered by that day's availability window.
4. Studio overlap with a PENDING, CONFIRMED or PAID reservation.
5. Equipment: out-of-service items, then overlapping active holds.

The studio and equipment rows are locked before the overlap reads, so two
admissions racing for the same studio or item are serialized by the store.
The caller is expected to run the check and the inserts in one transaction.
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
import logging
from typing import Iterable, List, Optional, Tuple

from sqlalchemy.orm import Session

from ..core.constants import DAYS_OF_WEEK
from ..core.exceptions import (
    EquipmentConflictException,
    InvalidRangeException,
    NotFoundException,
    StudioConflictException,
    StudioUnavailableException,
)
from ..core.timezone_utils import js_day_of_week, split_by_local_day
from ..models.equipment import Equipment
from ..models.studio import Studio
from ..repositories.conflict_checker_repository import ConflictCheckerRepository
from ..repositories.factory import RepositoryFactory
from .base import BaseService
from .pricing import calculate_total_price

logger = logging.getLogger(__name__)


@dataclass
class AdmissionResult:
    """Rows locked by a successful check plus the computed price."""

    studio: Studio
    equipment: List[Tuple[Equipment, int]] = field(default_factory=list)
    total_price: Decimal = Decimal("0.00")


class ConflictChecker(BaseService):
    """Service for reservation admission checks."""

    def __init__(self, db: Session, repository: Optional[ConflictCheckerRepository] = None):
        super().__init__(db)
        self.repository = repository or RepositoryFactory.create_conflict_checker_repository(db)

    @BaseService.measure_operation("check_reservation")
    def check_reservation(
        self,
        studio_id: str,
        start_time: datetime,
        end_time: datetime,
        equipment: Iterable[Tuple[str, int]] = (),
        exclude_reservation_id: Optional[str] = None,
    ) -> AdmissionResult:
        """
        Validate a requested reservation interval.

        Args:
            studio_id: Studio to book
            start_time: Aware UTC start
            end_time: Aware UTC end
            equipment: ``(equipment_id, quantity)`` pairs
            exclude_reservation_id: Reservation being rescheduled, ignored in overlap reads

        Returns:
            AdmissionResult with the locked studio, equipment and total price

        Raises:
            InvalidRangeException, NotFoundException, StudioUnavailableException,
            StudioConflictException, EquipmentConflictException
        """
        if end_time <= start_time:
            raise InvalidRangeException(start_time.isoformat(), end_time.isoformat())

        requested = list(equipment)
        studio = self._lock_studio(studio_id)
        items = self._lock_equipment(studio, requested)

        self._check_opening_hours(studio, start_time, end_time)

        conflict = self.repository.find_studio_conflict(
            studio.id, start_time, end_time, exclude_reservation_id
        )
        if conflict is not None:
            self.logger.info(
                f"Studio {studio.id} conflict with reservation {conflict.id} "
                f"for {start_time.isoformat()}-{end_time.isoformat()}"
            )
            raise StudioConflictException(studio.id, conflict.id)

        for item, _quantity in items:
            self._check_equipment(item, start_time, end_time, exclude_reservation_id)

        total_price = calculate_total_price(studio, items, start_time, end_time)
        return AdmissionResult(studio=studio, equipment=items, total_price=total_price)

    def _lock_studio(self, studio_id: str) -> Studio:
        studio = self.repository.lock_studio(studio_id)
        if studio is None or not studio.is_active:
            raise NotFoundException("Studio not found", details={"studio_id": studio_id})
        return studio

    def _lock_equipment(
        self, studio: Studio, requested: List[Tuple[str, int]]
    ) -> List[Tuple[Equipment, int]]:
        if not requested:
            return []
        rows = {row.id: row for row in self.repository.lock_equipment([eid for eid, _ in requested])}
        items = []
        for equipment_id, quantity in requested:
            row = rows.get(equipment_id)
            if row is None or row.studio_id != studio.id:
                raise NotFoundException(
                    "Equipment not found for this studio", details={"equipment_id": equipment_id}
                )
            items.append((row, quantity))
        return items

    def _check_opening_hours(self, studio: Studio, start_time: datetime, end_time: datetime) -> None:
        for day, segment_start, segment_end in split_by_local_day(start_time, end_time):
            day_index = js_day_of_week(day)
            window = self.repository.get_availability_for_day(studio.id, day_index)
            if window is None or not window.covers(segment_start, segment_end):
                self.logger.info(
                    f"Studio {studio.id} closed on {DAYS_OF_WEEK[day_index]} {day.isoformat()} "
                    f"for {segment_start}-{segment_end}"
                )
                raise StudioUnavailableException(studio.id, day.isoformat())

    def _check_equipment(
        self,
        item: Equipment,
        start_time: datetime,
        end_time: datetime,
        exclude_reservation_id: Optional[str],
    ) -> None:
        if not item.is_bookable:
            raise EquipmentConflictException(
                item.id, reason=f"Equipment is not bookable (status {item.status.value})"
            )
        hold = self.repository.find_equipment_conflict(
            item.id, start_time, end_time, exclude_reservation_id
        )
        if hold is not None:
            raise EquipmentConflictException(item.id)
