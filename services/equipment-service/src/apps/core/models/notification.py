# services/equipment-service/src/apps/core/models/notification.py
"""
Notification Model

In-system notifications. Records are created once, may be marked as read,
and are never deleted.
"""

from django.db import models

from apps.core.constants import (
    NOTIFICATION_MAINTENANCE_OVERDUE,
    NOTIFICATION_MAINTENANCE_DUE,
    NOTIFICATION_NEW_ISSUE,
    MAINTENANCE_NOTIFICATION_TYPES,
)
from shared.common.mixins import UUIDPrimaryKeyMixin


class Notification(UUIDPrimaryKeyMixin, models.Model):
    """In-app notification about an equipment."""

    class Type(models.TextChoices):
        MAINTENANCE_OVERDUE = NOTIFICATION_MAINTENANCE_OVERDUE, 'Mantenimiento vencido'
        MAINTENANCE_DUE = NOTIFICATION_MAINTENANCE_DUE, 'Mantenimiento próximo'
        NEW_ISSUE = NOTIFICATION_NEW_ISSUE, 'Nueva incidencia'

    type = models.CharField(max_length=30, choices=Type.choices)
    message = models.TextField()
    link = models.CharField(max_length=255)
    equipment = models.ForeignKey(
        'core.Equipment',
        on_delete=models.SET_NULL,
        related_name='notifications',
        blank=True,
        null=True
    )

    created_at = models.DateTimeField(db_index=True)
    is_read = models.BooleanField(default=False)
    read_at = models.DateTimeField(blank=True, null=True)

    class Meta:
        db_table = 'notifications'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['is_read', '-created_at']),
            models.Index(fields=['equipment', 'type', 'is_read']),
        ]
        constraints = [
            # At most one unread maintenance notification per equipment and type
            models.UniqueConstraint(
                fields=['equipment', 'type'],
                condition=models.Q(
                    is_read=False,
                    type__in=MAINTENANCE_NOTIFICATION_TYPES
                ),
                name='unique_unread_maintenance_notification'
            )
        ]

    def __str__(self):
        return f"[{self.type}] {self.message}"
