# backend/studiosync/services/pricing.py
"""
Reservation pricing.

The studio is billed per hour. An equipment item is billed per hour when it
has an hourly rate, otherwise per started day at its daily rate. Items with
neither rate are free. Totals are rounded to cents.
"""

from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
import math
from typing import Iterable, Optional, Tuple

from ..models.equipment import Equipment
from ..models.studio import Studio

CENT = Decimal("0.01")
SECONDS_PER_HOUR = Decimal(3600)


def duration_hours(start_time: datetime, end_time: datetime) -> Decimal:
    return Decimal(str((end_time - start_time).total_seconds())) / SECONDS_PER_HOUR


def equipment_cost(item: Equipment, hours: Decimal, quantity: int = 1) -> Decimal:
    rate: Optional[Decimal] = item.hourly_rate
    if rate is not None:
        return Decimal(rate) * hours * quantity
    if item.daily_rate is not None:
        days = math.ceil(hours / 24)
        return Decimal(item.daily_rate) * days * quantity
    return Decimal(0)


def calculate_total_price(
    studio: Studio,
    items: Iterable[Tuple[Equipment, int]],
    start_time: datetime,
    end_time: datetime,
) -> Decimal:
    hours = duration_hours(start_time, end_time)
    total = Decimal(studio.hourly_rate) * hours
    for item, quantity in items:
        total += equipment_cost(item, hours, quantity)
    return total.quantize(CENT, rounding=ROUND_HALF_UP)
