"""
Equipment Service

Core service for equipment records and their maintenance history.
"""

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Optional, Dict, Any, List, Tuple

from django.db import transaction, IntegrityError
from django.db.models import Q

from ..clock import Clock, system_clock
from ..exceptions import EquipmentNotFoundError, EquipmentConflictError
from ..models import Equipment, MaintenanceRecord, IssueReport
from ..scheduling import MaintenanceClassification, MaintenanceStatus
from .notification_engine import MaintenanceNotificationService, EvaluationResult

logger = logging.getLogger(__name__)


@dataclass
class WriteResult:
    """A successful write plus the outcome of the notification step it triggered."""

    instance: Any
    evaluation: Optional[EvaluationResult] = None
    warnings: List[str] = field(default_factory=list)

    @property
    def notification(self):
        return self.evaluation.notification if self.evaluation else None


class EquipmentService:
    """
    Service for managing equipment and maintenance history.

    Handles:
    - Equipment CRUD (writes trigger the notification engine)
    - Live maintenance classification for list/dashboard reads
    - Maintenance history
    """

    allowed_update_fields = [
        'name', 'brand', 'model', 'location_building', 'location_unit',
        'responsible', 'last_calibration_date', 'last_maintenance_date',
        'maintenance_frequency_value', 'maintenance_frequency_unit',
        'custom_maintenance_instructions', 'criticality',
    ]

    def __init__(self, clock: Clock = None, engine: MaintenanceNotificationService = None):
        self.clock = clock or system_clock
        self.engine = engine or MaintenanceNotificationService(clock=self.clock)

    # ==========================================================================
    # Equipment CRUD
    # ==========================================================================

    def get_equipment(self, equipment_id: str) -> Equipment:
        """Get an equipment by its institutional ID."""
        try:
            return Equipment.objects.get(id=equipment_id)
        except Equipment.DoesNotExist:
            raise EquipmentNotFoundError(f"Equipment {equipment_id} not found")

    def list_equipment(
        self,
        status: str = None,
        location_unit: str = None,
        responsible: str = None,
        criticality: str = None,
        search: str = None
    ) -> List[Equipment]:
        """List equipment with filters. ``status`` is matched on the live classification."""
        queryset = self._scoped_queryset(location_unit, responsible)

        if criticality:
            queryset = queryset.filter(criticality=criticality)
        if search:
            queryset = queryset.filter(
                Q(id__icontains=search) |
                Q(name__icontains=search) |
                Q(brand__icontains=search) |
                Q(model__icontains=search)
            )

        equipment = list(queryset.order_by('name'))
        if status:
            today = self.clock.today()
            equipment = [item for item in equipment if item.classify(today).status == status]
        return equipment

    @transaction.atomic
    def create_equipment(self, id: str, name: str, **kwargs) -> WriteResult:
        """Create an equipment and evaluate its maintenance notifications."""
        if Equipment.objects.filter(id=id).exists():
            raise EquipmentConflictError(f"Equipment {id} already exists")

        try:
            with transaction.atomic():
                equipment = Equipment.objects.create(id=id, name=name, **kwargs)
        except IntegrityError:
            # A concurrent create with the same id committed first
            raise EquipmentConflictError(f"Equipment {id} already exists")
        logger.info(f"Created equipment: {equipment.name} ({equipment.id})")

        return self._after_write(equipment)

    @transaction.atomic
    def update_equipment(self, equipment_id: str, **kwargs) -> WriteResult:
        """Update an equipment and re-evaluate its maintenance notifications."""
        equipment = self.get_equipment(equipment_id)

        for field_name, value in kwargs.items():
            if field_name in self.allowed_update_fields:
                setattr(equipment, field_name, value)

        equipment.save()
        logger.info(f"Updated equipment: {equipment.name} ({equipment.id})")

        return self._after_write(equipment)

    def delete_equipment(self, equipment_id: str) -> None:
        """Delete an equipment. Its notifications are kept."""
        equipment = self.get_equipment(equipment_id)
        equipment.delete()
        logger.info(f"Deleted equipment {equipment_id}")

    def evaluate_equipment(self, equipment_id: str) -> EvaluationResult:
        """Run the notification engine for one equipment on demand."""
        return self.engine.evaluate(self.get_equipment(equipment_id))

    def _after_write(self, equipment: Equipment) -> WriteResult:
        evaluation = self.engine.evaluate(equipment)
        result = WriteResult(instance=equipment, evaluation=evaluation)
        if evaluation.warning:
            result.warnings.append(evaluation.warning)
        return result

    # ==========================================================================
    # Maintenance Status
    # ==========================================================================

    def get_maintenance_status(self, equipment: Equipment) -> MaintenanceClassification:
        """Classification of an equipment as of now."""
        return equipment.classify(self.clock.today())

    def get_dashboard_stats(
        self,
        location_unit: str = None,
        responsible: str = None,
        upcoming_limit: int = 10
    ) -> Dict[str, Any]:
        """Equipment counts per maintenance status and open issues for a scope."""
        today = self.clock.today()
        equipment = list(self._scoped_queryset(location_unit, responsible))

        counts = {
            MaintenanceStatus.OK: 0,
            MaintenanceStatus.WARNING: 0,
            MaintenanceStatus.OVERDUE: 0,
        }
        upcoming: List[Tuple[Equipment, MaintenanceClassification]] = []

        for item in equipment:
            classification = item.classify(today)
            counts[classification.status] += 1
            if classification.status == MaintenanceStatus.WARNING:
                upcoming.append((item, classification))

        upcoming.sort(key=lambda pair: pair[1].days_remaining)

        open_issues = IssueReport.objects.filter(
            equipment_id__in=[item.id for item in equipment],
            status=IssueReport.Status.OPEN
        ).count()

        return {
            'date': today.isoformat(),
            'total_equipment': len(equipment),
            'ok_count': counts[MaintenanceStatus.OK],
            'warning_count': counts[MaintenanceStatus.WARNING],
            'overdue_count': counts[MaintenanceStatus.OVERDUE],
            'open_issues_count': open_issues,
            'upcoming_maintenance': [
                {
                    'id': item.id,
                    'name': item.name,
                    'location_unit': item.location_unit,
                    'next_maintenance_date': classification.next_maintenance_date.isoformat(),
                    'days_remaining': classification.days_remaining,
                }
                for item, classification in upcoming[:upcoming_limit]
            ],
        }

    # ==========================================================================
    # Maintenance History
    # ==========================================================================

    @transaction.atomic
    def record_maintenance(
        self,
        equipment_id: str,
        date: date,
        description: str,
        performed_by: str,
        attachment=None
    ) -> WriteResult:
        """
        Add a maintenance record.

        A record newer than the equipment's last maintenance date advances it,
        which is an equipment update and re-runs the notification engine.
        """
        equipment = self.get_equipment(equipment_id)

        record = MaintenanceRecord.objects.create(
            equipment=equipment,
            date=date,
            description=description,
            performed_by=performed_by,
            attachment=attachment,
        )
        logger.info(
            f"Recorded maintenance for {equipment.name}: date={date}, by={performed_by}"
        )

        result = WriteResult(instance=record)
        if equipment.register_maintenance(date):
            write = self._after_write(equipment)
            result.evaluation = write.evaluation
            result.warnings.extend(write.warnings)
        return result

    def get_maintenance_history(self, equipment_id: str, limit: int = 100) -> List[MaintenanceRecord]:
        """Maintenance history for an equipment, newest first."""
        self.get_equipment(equipment_id)
        return list(MaintenanceRecord.get_equipment_history(equipment_id, limit=limit))

    # ==========================================================================
    # Helpers
    # ==========================================================================

    def _scoped_queryset(self, location_unit: str = None, responsible: str = None):
        queryset = Equipment.objects.all()
        if location_unit:
            queryset = queryset.filter(location_unit=location_unit)
        if responsible:
            queryset = queryset.filter(responsible=responsible)
        return queryset
