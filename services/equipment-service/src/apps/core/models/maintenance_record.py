# services/equipment-service/src/apps/core/models/maintenance_record.py
"""
Maintenance Record Model

History of maintenance performed on a piece of equipment.
"""

from django.db import models

from shared.common.mixins import UUIDPrimaryKeyMixin


class MaintenanceRecord(UUIDPrimaryKeyMixin, models.Model):
    """A single maintenance intervention."""

    equipment = models.ForeignKey(
        'core.Equipment',
        on_delete=models.CASCADE,
        related_name='maintenance_records'
    )

    date = models.DateField()
    description = models.TextField()
    performed_by = models.CharField(max_length=255)
    attachment = models.FileField(upload_to='maintenance/%Y/%m/', blank=True, null=True)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'maintenance_records'
        ordering = ['-date', '-created_at']
        verbose_name = 'Maintenance Record'
        verbose_name_plural = 'Maintenance Records'
        indexes = [
            models.Index(fields=['equipment', '-date']),
        ]

    def __str__(self):
        return f"{self.equipment_id} @ {self.date}"

    @classmethod
    def get_equipment_history(cls, equipment_id: str, limit: int = 100):
        """Maintenance history for an equipment, newest first."""
        return cls.objects.filter(
            equipment_id=equipment_id
        ).order_by('-date', '-created_at')[:limit]
