"""
Notification Service.

Owns storage and read/unread state of in-system notifications.
"""
import logging
from typing import Optional, List
from uuid import UUID

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import transaction

from ..clock import Clock, system_clock
from ..constants import DEFAULT_UNREAD_LIMIT
from ..exceptions import NotificationNotFoundError
from ..models import Notification

logger = logging.getLogger(__name__)


class NotificationService:
    """Service for storing and reading notifications."""

    def __init__(self, clock: Clock = None):
        self.clock = clock or system_clock

    def get_by_id(self, notification_id: UUID) -> Notification:
        """Get a notification by ID."""
        try:
            return Notification.objects.get(id=notification_id)
        except (Notification.DoesNotExist, ValidationError):
            raise NotificationNotFoundError(f"Notification {notification_id} not found")

    def list_unread(self, limit: Optional[int] = None) -> List[Notification]:
        """Most recent unread notifications, newest first."""
        if limit is None:
            limit = getattr(settings, 'EQUIPMENT_UNREAD_NOTIFICATIONS_LIMIT', DEFAULT_UNREAD_LIMIT)
        queryset = Notification.objects.filter(is_read=False).order_by('-created_at')
        return list(queryset[:limit])

    def unread_count(self) -> int:
        return Notification.objects.filter(is_read=False).count()

    def find_unread_by_equipment_and_type(
        self,
        equipment_id: str,
        notification_type: str
    ) -> Optional[Notification]:
        """Unread notification for the equipment/type pair, if any."""
        return Notification.objects.filter(
            equipment_id=equipment_id,
            type=notification_type,
            is_read=False,
        ).first()

    def insert(
        self,
        notification_type: str,
        message: str,
        link: str,
        equipment_id: Optional[str] = None,
    ) -> Notification:
        """Persist a new unread notification."""
        notification = Notification.objects.create(
            type=notification_type,
            message=message,
            link=link,
            equipment_id=equipment_id,
            created_at=self.clock.now(),
            is_read=False,
        )

        logger.info(
            f"Created notification: {notification.id}",
            extra={
                'notification_id': str(notification.id),
                'equipment_id': equipment_id,
                'type': notification_type,
            }
        )
        return notification

    @transaction.atomic
    def mark_read(self, notification_id: UUID) -> Notification:
        """Mark a notification as read. Marking twice keeps the first read time."""
        notification = self.get_by_id(notification_id)
        if not notification.is_read:
            notification.is_read = True
            notification.read_at = self.clock.now()
            notification.save(update_fields=['is_read', 'read_at'])
        return notification

    @transaction.atomic
    def mark_all_read(self) -> int:
        """Mark every unread notification as read."""
        count = Notification.objects.filter(is_read=False).update(
            is_read=True,
            read_at=self.clock.now(),
        )
        logger.info(f"Marked {count} notifications as read")
        return count
