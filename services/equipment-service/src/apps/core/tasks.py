"""
Equipment Service Celery Tasks

Background re-evaluation of maintenance notifications.
"""

import logging

from celery import shared_task

logger = logging.getLogger(__name__)


@shared_task(name='equipment.reevaluate_maintenance_notifications')
def reevaluate_maintenance_notifications():
    """
    Apply the notification engine to every scheduled equipment.

    Runs daily from celery beat; equipment that is never edited would
    otherwise drift into overdue without a notification.
    """
    from .services import MaintenanceNotificationService

    counts = MaintenanceNotificationService().reevaluate_all()
    logger.info(f"Maintenance sweep finished: {counts}")
    return counts


@shared_task(name='equipment.evaluate_equipment')
def evaluate_equipment(equipment_id: str):
    """Evaluate a single equipment, for callers that only emit its id."""
    from .services import EquipmentService, EquipmentNotFoundError

    try:
        result = EquipmentService().evaluate_equipment(equipment_id)
    except EquipmentNotFoundError:
        logger.error(f"Equipment not found: {equipment_id}")
        return {'success': False, 'error': 'Equipment not found'}

    return {
        'success': not result.failed,
        'status': str(result.classification.status),
        'notification_id': str(result.notification.id) if result.notification else None,
        'suppressed': result.suppressed,
        'warning': result.warning,
    }
