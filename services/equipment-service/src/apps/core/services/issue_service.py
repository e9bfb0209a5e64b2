"""
Issue Service

Issue reports against equipment.
"""

import logging
from typing import List
from uuid import UUID

from django.core.exceptions import ValidationError
from django.db import transaction, DatabaseError

from ..clock import Clock, system_clock
from ..constants import NOTIFICATION_NEW_ISSUE, MESSAGE_NEW_ISSUE
from ..exceptions import IssueReportNotFoundError
from ..models import IssueReport
from .equipment_service import EquipmentService, WriteResult
from .notification_service import NotificationService

logger = logging.getLogger(__name__)


class IssueService:
    """Service for reporting and tracking equipment issues."""

    allowed_update_fields = ['description', 'severity', 'status', 'reported_by']

    def __init__(
        self,
        clock: Clock = None,
        equipment_service: EquipmentService = None,
        notifications: NotificationService = None
    ):
        self.clock = clock or system_clock
        self.equipment_service = equipment_service or EquipmentService(clock=self.clock)
        self.notifications = notifications or NotificationService(clock=self.clock)

    def get_issue(self, issue_id: UUID) -> IssueReport:
        try:
            return IssueReport.objects.select_related('equipment').get(id=issue_id)
        except (IssueReport.DoesNotExist, ValidationError):
            raise IssueReportNotFoundError(f"Issue report {issue_id} not found")

    def list_issues(
        self,
        status: str = None,
        severity: str = None,
        equipment_id: str = None,
        location_unit: str = None
    ) -> List[IssueReport]:
        """List issue reports, newest first."""
        queryset = IssueReport.objects.select_related('equipment')

        if status:
            queryset = queryset.filter(status=status)
        if severity:
            queryset = queryset.filter(severity=severity)
        if equipment_id:
            queryset = queryset.filter(equipment_id=equipment_id)
        if location_unit:
            queryset = queryset.filter(equipment__location_unit=location_unit)

        return list(queryset.order_by('-reported_at'))

    @transaction.atomic
    def report_issue(
        self,
        equipment_id: str,
        description: str,
        severity: str,
        reported_by: str = '',
        attachment=None
    ) -> WriteResult:
        """Open an issue report and raise a ``new_issue`` notification."""
        equipment = self.equipment_service.get_equipment(equipment_id)

        issue = IssueReport.objects.create(
            equipment=equipment,
            description=description,
            severity=severity,
            reported_by=reported_by,
            reported_at=self.clock.now(),
            status=IssueReport.Status.OPEN,
            attachment=attachment,
        )
        logger.info(
            f"Issue reported for {equipment.name}: {issue.id}",
            extra={'issue_id': str(issue.id), 'severity': severity}
        )

        result = WriteResult(instance=issue)
        try:
            with transaction.atomic():
                self.notifications.insert(
                    notification_type=NOTIFICATION_NEW_ISSUE,
                    message=MESSAGE_NEW_ISSUE.format(
                        severity=issue.get_severity_display(),
                        name=equipment.name
                    ),
                    link=equipment.link,
                    equipment_id=equipment.id,
                )
        except DatabaseError as e:
            logger.warning(f"Notification insert failed for issue {issue.id}: {e}")
            result.warnings.append(
                f"No se pudo registrar la notificación para la incidencia {issue.id}: {e}"
            )
        return result

    @transaction.atomic
    def update_issue(self, issue_id: UUID, **kwargs) -> IssueReport:
        """Update an issue report."""
        issue = self.get_issue(issue_id)

        for field_name, value in kwargs.items():
            if field_name in self.allowed_update_fields:
                setattr(issue, field_name, value)

        issue.save()
        return issue
