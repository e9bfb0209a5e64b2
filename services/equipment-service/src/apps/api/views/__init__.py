"""
API Views
"""

from .equipment import EquipmentViewSet
from .issue_report import IssueReportViewSet
from .notification import NotificationViewSet

__all__ = [
    'EquipmentViewSet',
    'IssueReportViewSet',
    'NotificationViewSet',
]
