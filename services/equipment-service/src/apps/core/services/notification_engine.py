"""
Maintenance Notification Engine

Turns a maintenance classification into at most one unread notification per
equipment and notification type. Invoked from the equipment write path and
from the periodic sweep with the same code.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Dict, Iterable

from django.db import transaction, DatabaseError, IntegrityError

from ..clock import Clock, system_clock
from ..constants import (
    NOTIFICATION_MAINTENANCE_OVERDUE,
    NOTIFICATION_MAINTENANCE_DUE,
    MESSAGE_MAINTENANCE_OVERDUE,
    MESSAGE_MAINTENANCE_DUE,
    EQUIPMENT_LINK,
)
from ..models import Equipment, Notification
from ..scheduling import MaintenanceClassification, MaintenanceStatus, classify_equipment
from .notification_service import NotificationService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NotificationCandidate:
    """Notification content decided for an equipment, not yet stored."""

    equipment_id: str
    type: str
    message: str
    link: str


@dataclass
class EvaluationResult:
    """Outcome of evaluating one equipment."""

    equipment_id: str
    classification: MaintenanceClassification
    candidate: Optional[NotificationCandidate] = None
    notification: Optional[Notification] = None
    suppressed: bool = False
    warning: Optional[str] = None

    @property
    def created(self) -> bool:
        return self.notification is not None

    @property
    def failed(self) -> bool:
        return self.warning is not None


def decide(
    equipment_id: str,
    equipment_name: str,
    classification: MaintenanceClassification
) -> Optional[NotificationCandidate]:
    """Notification to raise for a classification, or None when all is OK."""
    if classification.status == MaintenanceStatus.OVERDUE:
        notification_type = NOTIFICATION_MAINTENANCE_OVERDUE
        message = MESSAGE_MAINTENANCE_OVERDUE.format(name=equipment_name)
    elif classification.status == MaintenanceStatus.WARNING:
        notification_type = NOTIFICATION_MAINTENANCE_DUE
        message = MESSAGE_MAINTENANCE_DUE.format(
            name=equipment_name,
            days=classification.days_remaining
        )
    else:
        return None

    return NotificationCandidate(
        equipment_id=equipment_id,
        type=notification_type,
        message=message,
        link=EQUIPMENT_LINK.format(equipment_id=equipment_id),
    )


class MaintenanceNotificationService:
    """
    Service that evaluates equipment and dispatches maintenance notifications.

    Handles:
    - Classification with the injected clock
    - Notification decision
    - De-duplication against unread notifications
    - Periodic re-evaluation of all equipment
    """

    def __init__(self, clock: Clock = None, notifications: NotificationService = None):
        self.clock = clock or system_clock
        self.notifications = notifications or NotificationService(clock=self.clock)

    def evaluate(self, equipment: Equipment) -> EvaluationResult:
        """
        Classify an equipment and store a notification if one is due.

        Storage failures are returned as a warning on the result instead of
        being raised, so the caller's own write is never undone by them.
        """
        classification = classify_equipment(equipment, self.clock.today())
        candidate = decide(equipment.id, equipment.name, classification)
        result = EvaluationResult(
            equipment_id=equipment.id,
            classification=classification,
            candidate=candidate,
        )
        if candidate is None:
            return result

        try:
            with transaction.atomic():
                # Serialize concurrent writers on the same equipment
                list(
                    Equipment.objects.select_for_update()
                    .filter(pk=equipment.pk)
                    .values_list('pk', flat=True)
                )
                self._dispatch(candidate, result)
        except IntegrityError as e:
            # A concurrent writer won the race on the unique constraint
            if self.notifications.find_unread_by_equipment_and_type(
                candidate.equipment_id, candidate.type
            ):
                result.suppressed = True
            else:
                self._record_failure(result, e)
        except DatabaseError as e:
            self._record_failure(result, e)

        return result

    def _dispatch(self, candidate: NotificationCandidate, result: EvaluationResult) -> None:
        existing = self.notifications.find_unread_by_equipment_and_type(
            candidate.equipment_id, candidate.type
        )
        if existing is not None:
            result.suppressed = True
            logger.debug(
                f"Suppressed duplicate {candidate.type} for equipment {candidate.equipment_id}",
                extra={'existing_notification_id': str(existing.id)}
            )
            return

        result.notification = self.notifications.insert(
            notification_type=candidate.type,
            message=candidate.message,
            link=candidate.link,
            equipment_id=candidate.equipment_id,
        )

    def _record_failure(self, result: EvaluationResult, error: Exception) -> None:
        result.notification = None
        result.warning = (
            f"No se pudo registrar la notificación para el equipo {result.equipment_id}: {error}"
        )
        logger.warning(
            f"Notification insert failed for equipment {result.equipment_id}: {error}",
            extra={'equipment_id': result.equipment_id, 'error_type': type(error).__name__}
        )

    def reevaluate_all(self, equipment: Iterable[Equipment] = None) -> Dict[str, int]:
        """
        Evaluate every scheduled equipment.

        Picks up equipment that drifted into warning/overdue without being
        edited since its last evaluation.
        """
        if equipment is None:
            equipment = Equipment.objects.filter(
                last_maintenance_date__isnull=False,
                maintenance_frequency_value__isnull=False,
                maintenance_frequency_unit__isnull=False,
            ).order_by('id')

        counts = {
            'evaluated': 0,
            'created': 0,
            'suppressed': 0,
            'failed': 0,
        }

        for item in equipment:
            result = self.evaluate(item)
            counts['evaluated'] += 1
            if result.created:
                counts['created'] += 1
            elif result.suppressed:
                counts['suppressed'] += 1
            elif result.failed:
                counts['failed'] += 1

        logger.info(
            f"Re-evaluated {counts['evaluated']} equipment: "
            f"{counts['created']} notified, {counts['suppressed']} suppressed, "
            f"{counts['failed']} failed"
        )
        return counts
