"""
Equipment Service Constants.
"""

# Frequency units
UNIT_DAYS = 'days'
UNIT_WEEKS = 'weeks'
UNIT_MONTHS = 'months'

# Labels the legacy records were stored with
LEGACY_UNIT_ALIASES = {
    'Días': UNIT_DAYS,
    'Dias': UNIT_DAYS,
    'Semanas': UNIT_WEEKS,
    'Meses': UNIT_MONTHS,
}

DAYS_PER_UNIT = {
    UNIT_DAYS: 1,
    UNIT_WEEKS: 7,
    UNIT_MONTHS: 30,  # fixed 30-day month, not calendar-aware
}

# Classification thresholds, shared by the dashboard and the notification engine
OVERDUE_THRESHOLD_DAYS = 0
WARNING_THRESHOLD_DAYS = 7

# Maintenance status
STATUS_OK = 'ok'
STATUS_WARNING = 'warning'
STATUS_OVERDUE = 'overdue'

# Notification types
NOTIFICATION_MAINTENANCE_OVERDUE = 'maintenance_overdue'
NOTIFICATION_MAINTENANCE_DUE = 'maintenance_due'
NOTIFICATION_NEW_ISSUE = 'new_issue'

MAINTENANCE_NOTIFICATION_TYPES = (
    NOTIFICATION_MAINTENANCE_OVERDUE,
    NOTIFICATION_MAINTENANCE_DUE,
)

# Notification messages
MESSAGE_MAINTENANCE_OVERDUE = 'Equipo "{name}" tiene el mantenimiento VENCIDO.'
MESSAGE_MAINTENANCE_DUE = 'Equipo "{name}" requiere mantenimiento en {days} día(s).'
MESSAGE_NEW_ISSUE = 'Nueva incidencia ({severity}) reportada para el equipo "{name}".'

EQUIPMENT_LINK = '/equipment/{equipment_id}'

DEFAULT_UNREAD_LIMIT = 5
