# services/equipment-service/src/apps/core/models/equipment.py
"""
Equipment Model

Institutional equipment with its maintenance schedule.
"""

from datetime import date

from django.core.validators import MinValueValidator
from django.db import models

from apps.core.constants import UNIT_DAYS, UNIT_WEEKS, UNIT_MONTHS, EQUIPMENT_LINK
from apps.core.scheduling import (
    MaintenanceClassification,
    classify_equipment,
    normalize_frequency,
)


class Equipment(models.Model):
    """
    Equipment tracked for preventive maintenance.

    The maintenance status is never stored: it is derived from
    ``last_maintenance_date`` and the configured frequency every time it is read.
    """

    class FrequencyUnit(models.TextChoices):
        DAYS = UNIT_DAYS, 'Días'
        WEEKS = UNIT_WEEKS, 'Semanas'
        MONTHS = UNIT_MONTHS, 'Meses'

    class Criticality(models.TextChoices):
        LOW = 'low', 'Baja'
        MEDIUM = 'medium', 'Media'
        HIGH = 'high', 'Alta'
        CRITICAL = 'critical', 'Crítica'

    # Institutional identifier, assigned by the institution and immutable
    id = models.CharField(primary_key=True, max_length=64)

    # ==========================================================================
    # Identification
    # ==========================================================================

    name = models.CharField(max_length=255)
    brand = models.CharField(max_length=120, blank=True, default='')
    model = models.CharField(max_length=120, blank=True, default='')

    # ==========================================================================
    # Location & Ownership
    # ==========================================================================

    location_building = models.CharField(max_length=120, blank=True, default='', db_index=True)
    location_unit = models.CharField(max_length=120, blank=True, default='', db_index=True)
    responsible = models.CharField(
        max_length=255, blank=True, default='', db_index=True,
        help_text='Person in charge of the equipment'
    )

    # ==========================================================================
    # Maintenance Schedule
    # ==========================================================================

    last_calibration_date = models.DateField(blank=True, null=True)
    last_maintenance_date = models.DateField(blank=True, null=True)
    maintenance_frequency_value = models.PositiveIntegerField(
        blank=True, null=True,
        validators=[MinValueValidator(1)]
    )
    maintenance_frequency_unit = models.CharField(
        max_length=20,
        choices=FrequencyUnit.choices,
        blank=True,
        null=True
    )
    custom_maintenance_instructions = models.TextField(blank=True, default='')

    criticality = models.CharField(
        max_length=20,
        choices=Criticality.choices,
        default=Criticality.MEDIUM
    )

    # ==========================================================================
    # Timestamps
    # ==========================================================================

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'equipment'
        ordering = ['name']
        verbose_name = 'Equipment'
        verbose_name_plural = 'Equipment'
        indexes = [
            models.Index(fields=['location_unit', 'name']),
            models.Index(fields=['criticality']),
        ]

    def __str__(self):
        return f"{self.name} ({self.id})"

    # ==========================================================================
    # Properties
    # ==========================================================================

    @property
    def frequency_days(self) -> int:
        """Configured interval in days; 0 when no schedule is configured."""
        return normalize_frequency(
            self.maintenance_frequency_value,
            self.maintenance_frequency_unit
        )

    @property
    def has_schedule(self) -> bool:
        return self.last_maintenance_date is not None and self.frequency_days > 0

    @property
    def link(self) -> str:
        return EQUIPMENT_LINK.format(equipment_id=self.id)

    # ==========================================================================
    # Methods
    # ==========================================================================

    def classify(self, today: date) -> MaintenanceClassification:
        """Maintenance classification as of ``today``."""
        return classify_equipment(self, today)

    def register_maintenance(self, performed_date: date) -> bool:
        """
        Advance the last maintenance date if ``performed_date`` is newer.

        Returns True when the schedule changed.
        """
        if self.last_maintenance_date and performed_date <= self.last_maintenance_date:
            return False
        self.last_maintenance_date = performed_date
        self.save(update_fields=['last_maintenance_date', 'updated_at'])
        return True
