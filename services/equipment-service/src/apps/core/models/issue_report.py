# services/equipment-service/src/apps/core/models/issue_report.py
"""
Issue Report Model

Faults reported against equipment.
"""

from django.db import models

from shared.common.mixins import UUIDPrimaryKeyMixin, TimestampMixin


class IssueReport(UUIDPrimaryKeyMixin, TimestampMixin, models.Model):
    """Fault or incident reported for an equipment."""

    class Severity(models.TextChoices):
        MINOR = 'minor', 'Menor'
        MODERATE = 'moderate', 'Moderada'
        SEVERE = 'severe', 'Grave'
        CRITICAL = 'critical', 'Crítica'

    class Status(models.TextChoices):
        OPEN = 'open', 'Abierto'
        IN_PROGRESS = 'in_progress', 'En Progreso'
        RESOLVED = 'resolved', 'Resuelto'
        CLOSED = 'closed', 'Cerrado'

    equipment = models.ForeignKey(
        'core.Equipment',
        on_delete=models.CASCADE,
        related_name='issue_reports'
    )

    reported_by = models.CharField(max_length=255, blank=True, default='')
    reported_at = models.DateTimeField()
    description = models.TextField()
    severity = models.CharField(max_length=20, choices=Severity.choices)
    status = models.CharField(
        max_length=20,
        choices=Status.choices,
        default=Status.OPEN
    )
    attachment = models.FileField(upload_to='issues/%Y/%m/', blank=True, null=True)

    class Meta:
        db_table = 'issue_reports'
        ordering = ['-reported_at']
        verbose_name = 'Issue Report'
        verbose_name_plural = 'Issue Reports'
        indexes = [
            models.Index(fields=['status']),
            models.Index(fields=['severity']),
            models.Index(fields=['equipment', '-reported_at']),
        ]

    def __str__(self):
        return f"{self.equipment_id}: {self.get_severity_display()} ({self.get_status_display()})"

    @property
    def is_open(self) -> bool:
        return self.status == self.Status.OPEN
