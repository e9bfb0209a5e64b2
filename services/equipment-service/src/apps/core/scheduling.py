"""
Maintenance Scheduling

Frequency normalization and status classification. Everything here is pure:
no database access and no reads of the system clock, so the same functions
serve the dashboard, the write path and the periodic sweep.
"""

from dataclasses import dataclass, asdict
from datetime import date, datetime, timedelta
from typing import Optional, Dict, Any

from django.db import models

from .constants import (
    DAYS_PER_UNIT,
    LEGACY_UNIT_ALIASES,
    OVERDUE_THRESHOLD_DAYS,
    WARNING_THRESHOLD_DAYS,
    STATUS_OK,
    STATUS_WARNING,
    STATUS_OVERDUE,
)


class MaintenanceStatus(models.TextChoices):
    OK = STATUS_OK, 'OK'
    WARNING = STATUS_WARNING, 'Advertencia'
    OVERDUE = STATUS_OVERDUE, 'Vencido'


@dataclass(frozen=True)
class MaintenanceClassification:
    """Derived maintenance state of one equipment at one point in time."""

    status: str
    days_since_last_maintenance: Optional[int] = None
    days_remaining: Optional[int] = None
    next_maintenance_date: Optional[date] = None

    @property
    def is_scheduled(self) -> bool:
        return self.next_maintenance_date is not None

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        status = MaintenanceStatus(self.status)
        data['status'] = status.value
        data['status_display'] = status.label
        if self.next_maintenance_date:
            data['next_maintenance_date'] = self.next_maintenance_date.isoformat()
        return data


UNSCHEDULED = MaintenanceClassification(status=MaintenanceStatus.OK)


def normalize_unit(unit: Optional[str]) -> Optional[str]:
    """Map a stored unit (current code or legacy label) to its canonical code."""
    if unit in DAYS_PER_UNIT:
        return unit
    return LEGACY_UNIT_ALIASES.get(unit)


def normalize_frequency(value: Optional[int], unit: Optional[str]) -> int:
    """
    Convert a maintenance interval to a day count.

    Unknown units and missing or non-positive values yield 0, which the
    classifier treats as "no schedule".
    """
    canonical = normalize_unit(unit)
    if canonical is None or not value or value < 1:
        return 0
    return int(value) * DAYS_PER_UNIT[canonical]


def _as_date(value) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


def classify(
    last_maintenance_date: Optional[date],
    frequency_days: int,
    today: date
) -> MaintenanceClassification:
    """
    Classify maintenance state from the last maintenance date and interval.

    Thresholds, first match wins:
        days_remaining <= 0  -> overdue
        days_remaining <= 7  -> warning
        otherwise            -> ok
    """
    if last_maintenance_date is None or not frequency_days or frequency_days <= 0:
        return UNSCHEDULED

    last_maintenance_date = _as_date(last_maintenance_date)
    days_since = (_as_date(today) - last_maintenance_date).days
    days_remaining = frequency_days - days_since

    if days_remaining <= OVERDUE_THRESHOLD_DAYS:
        status = MaintenanceStatus.OVERDUE
    elif days_remaining <= WARNING_THRESHOLD_DAYS:
        status = MaintenanceStatus.WARNING
    else:
        status = MaintenanceStatus.OK

    return MaintenanceClassification(
        status=status,
        days_since_last_maintenance=days_since,
        days_remaining=days_remaining,
        next_maintenance_date=last_maintenance_date + timedelta(days=frequency_days),
    )


def classify_equipment(equipment, today: date) -> MaintenanceClassification:
    """Classify an equipment record (anything with the scheduling attributes)."""
    frequency_days = normalize_frequency(
        equipment.maintenance_frequency_value,
        equipment.maintenance_frequency_unit,
    )
    return classify(equipment.last_maintenance_date, frequency_days, today)
