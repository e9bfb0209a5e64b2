"""
Equipment Service Models

Equipment, maintenance history, issue reports and notifications.
"""

from .equipment import Equipment
from .maintenance_record import MaintenanceRecord
from .issue_report import IssueReport
from .notification import Notification

__all__ = [
    'Equipment',
    'MaintenanceRecord',
    'IssueReport',
    'Notification',
]
