"""
API Serializers
"""

from .equipment import (
    EquipmentSerializer,
    EquipmentListSerializer,
    EquipmentCreateSerializer,
    EquipmentUpdateSerializer,
    MaintenanceRecordSerializer,
    MaintenanceRecordCreateSerializer,
)
from .issue_report import (
    IssueReportSerializer,
    IssueReportCreateSerializer,
    IssueReportUpdateSerializer,
)
from .notification import NotificationSerializer

__all__ = [
    # Equipment
    'EquipmentSerializer',
    'EquipmentListSerializer',
    'EquipmentCreateSerializer',
    'EquipmentUpdateSerializer',
    'MaintenanceRecordSerializer',
    'MaintenanceRecordCreateSerializer',

    # Issue Report
    'IssueReportSerializer',
    'IssueReportCreateSerializer',
    'IssueReportUpdateSerializer',

    # Notification
    'NotificationSerializer',
]
