"""
Equipment Service Exceptions.
"""


class EquipmentServiceError(Exception):
    """Base exception for equipment service errors."""
    pass


class EquipmentNotFoundError(EquipmentServiceError):
    """Equipment not found."""
    pass


class EquipmentConflictError(EquipmentServiceError):
    """Equipment with the same institutional id already exists."""
    pass


class NotificationNotFoundError(EquipmentServiceError):
    """Notification not found."""
    pass


class IssueReportNotFoundError(EquipmentServiceError):
    """Issue report not found."""
    pass
