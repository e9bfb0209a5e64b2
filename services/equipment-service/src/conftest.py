# services/equipment-service/src/conftest.py
"""
Pytest configuration for Equipment Service
"""

import os

# Set up Django settings before importing any Django modules
os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'config.settings.test')

from datetime import date, timedelta

import pytest


# =============================================================================
# Clock Fixtures
# =============================================================================

@pytest.fixture
def today():
    """Pinned evaluation date."""
    return date(2024, 6, 15)


@pytest.fixture
def clock(today):
    from apps.core.clock import FixedClock
    return FixedClock(today)


# =============================================================================
# Equipment Fixtures
# =============================================================================

@pytest.fixture
def make_equipment(today):
    """Factory for equipment whose last maintenance was ``days_ago`` days before today."""
    from apps.core.models import Equipment

    counter = {'n': 0}

    def _make(days_ago=None, value=None, unit=None, **kwargs):
        counter['n'] += 1
        kwargs.setdefault('id', f"EQ-{counter['n']}")
        kwargs.setdefault('name', f"Equipo {counter['n']}")
        kwargs.setdefault('location_unit', 'UCI')
        kwargs.setdefault('responsible', 'Ana Pérez')
        return Equipment.objects.create(
            last_maintenance_date=today - timedelta(days=days_ago) if days_ago is not None else None,
            maintenance_frequency_value=value,
            maintenance_frequency_unit=unit,
            **kwargs
        )

    return _make


@pytest.fixture
def ok_equipment(make_equipment):
    """30-day schedule, maintained 10 days ago (20 days remaining)."""
    return make_equipment(days_ago=10, value=30, unit='days', name='Monitor Multiparámetro')


@pytest.fixture
def warning_equipment(make_equipment):
    """30-day schedule, maintained 25 days ago (5 days remaining)."""
    return make_equipment(days_ago=25, value=30, unit='days', name='Bomba de Infusión')


@pytest.fixture
def overdue_equipment(make_equipment):
    """30-day schedule, maintained 40 days ago (10 days overdue)."""
    return make_equipment(days_ago=40, value=30, unit='days', name='Ventilador Mecánico')


# =============================================================================
# Service Fixtures
# =============================================================================

@pytest.fixture
def notification_service(clock):
    from apps.core.services import NotificationService
    return NotificationService(clock=clock)


@pytest.fixture
def engine(clock, notification_service):
    from apps.core.services import MaintenanceNotificationService
    return MaintenanceNotificationService(clock=clock, notifications=notification_service)


@pytest.fixture
def equipment_service(clock, engine):
    from apps.core.services import EquipmentService
    return EquipmentService(clock=clock, engine=engine)


@pytest.fixture
def issue_service(clock, equipment_service, notification_service):
    from apps.core.services import IssueService
    return IssueService(
        clock=clock,
        equipment_service=equipment_service,
        notifications=notification_service,
    )


# =============================================================================
# API Fixtures
# =============================================================================

@pytest.fixture
def api_client(clock, monkeypatch):
    """API client whose views run on the pinned clock."""
    from rest_framework.test import APIClient
    from apps.api.views import EquipmentViewSet, IssueReportViewSet, NotificationViewSet

    for viewset in (EquipmentViewSet, IssueReportViewSet, NotificationViewSet):
        monkeypatch.setattr(viewset, 'clock', clock)
    return APIClient()
