"""
Equipment Service Business Logic

All services for equipment maintenance tracking.
"""

from ..exceptions import (
    EquipmentServiceError,
    EquipmentNotFoundError,
    EquipmentConflictError,
    NotificationNotFoundError,
    IssueReportNotFoundError,
)
from .notification_service import NotificationService
from .notification_engine import (
    MaintenanceNotificationService,
    NotificationCandidate,
    EvaluationResult,
    decide,
)
from .equipment_service import EquipmentService, WriteResult
from .issue_service import IssueService


__all__ = [
    # Services
    'NotificationService',
    'MaintenanceNotificationService',
    'EquipmentService',
    'IssueService',

    # Results
    'NotificationCandidate',
    'EvaluationResult',
    'WriteResult',
    'decide',

    # Exceptions
    'EquipmentServiceError',
    'EquipmentNotFoundError',
    'EquipmentConflictError',
    'NotificationNotFoundError',
    'IssueReportNotFoundError',
]
