# services/equipment-service/src/apps/core/tests/test_services.py
"""
Service Layer Tests

Unit tests for Equipment Service business logic.
"""

import uuid
from datetime import timedelta
from unittest.mock import patch

import pytest
from django.db import DatabaseError

from apps.core.models import Equipment, MaintenanceRecord, IssueReport, Notification
from apps.core.scheduling import MaintenanceStatus
from apps.core.services import (
    EquipmentNotFoundError,
    EquipmentConflictError,
    NotificationNotFoundError,
    IssueReportNotFoundError,
)


# =============================================================================
# Equipment Service Tests
# =============================================================================

@pytest.mark.django_db
class TestEquipmentService:
    """Tests for EquipmentService."""

    def test_create_equipment_end_to_end(self, equipment_service, today):
        """Six-month schedule, last maintained 181 days ago: overdue by one day."""
        result = equipment_service.create_equipment(
            id='EQ-1',
            name='Autoclave',
            last_maintenance_date=today - timedelta(days=181),
            maintenance_frequency_value=6,
            maintenance_frequency_unit=Equipment.FrequencyUnit.MONTHS,
        )

        classification = result.evaluation.classification
        assert classification.status == MaintenanceStatus.OVERDUE
        assert classification.days_remaining == -1
        assert result.warnings == []

        notifications = Notification.objects.filter(equipment_id='EQ-1')
        assert notifications.count() == 1
        assert 'VENCIDO' in notifications.get().message
        assert result.notification == notifications.get()

    def test_create_equipment_without_schedule(self, equipment_service):
        result = equipment_service.create_equipment(id='EQ-2', name='Camilla')

        assert result.instance.pk == 'EQ-2'
        assert result.notification is None
        assert result.evaluation.classification.status == MaintenanceStatus.OK

    def test_create_duplicate_id(self, equipment_service, ok_equipment):
        with pytest.raises(EquipmentConflictError):
            equipment_service.create_equipment(id=ok_equipment.id, name='Duplicado')

    def test_create_concurrent_duplicate_id(self, equipment_service, ok_equipment):
        """A duplicate that slips past the existence check still surfaces as a conflict."""
        with patch.object(Equipment.objects, 'filter') as mock_filter:
            mock_filter.return_value.exists.return_value = False
            with pytest.raises(EquipmentConflictError):
                equipment_service.create_equipment(id=ok_equipment.id, name='Duplicado')

        assert Equipment.objects.get(id=ok_equipment.id).name == ok_equipment.name

    def test_get_equipment_not_found(self, equipment_service):
        with pytest.raises(EquipmentNotFoundError):
            equipment_service.get_equipment('NOPE')

    def test_update_equipment_triggers_evaluation(self, equipment_service, ok_equipment, today):
        result = equipment_service.update_equipment(
            ok_equipment.id,
            last_maintenance_date=today - timedelta(days=27),
        )

        assert result.evaluation.classification.status == MaintenanceStatus.WARNING
        assert result.notification.type == Notification.Type.MAINTENANCE_DUE

    def test_update_ignores_id(self, equipment_service, ok_equipment):
        equipment_service.update_equipment(ok_equipment.id, id='OTHER', name='Renombrado')

        assert Equipment.objects.filter(id=ok_equipment.id, name='Renombrado').exists()
        assert not Equipment.objects.filter(id='OTHER').exists()

    def test_repeated_updates_do_not_duplicate(self, equipment_service, overdue_equipment):
        equipment_service.update_equipment(overdue_equipment.id, responsible='Luis')
        equipment_service.update_equipment(overdue_equipment.id, responsible='María')

        assert Notification.objects.filter(equipment=overdue_equipment).count() == 1

    def test_notification_failure_keeps_update(self, equipment_service, notification_service, ok_equipment, today):
        with patch.object(notification_service, 'insert', side_effect=DatabaseError('locked')):
            result = equipment_service.update_equipment(
                ok_equipment.id,
                last_maintenance_date=today - timedelta(days=60),
            )

        ok_equipment.refresh_from_db()
        assert ok_equipment.last_maintenance_date == today - timedelta(days=60)
        assert len(result.warnings) == 1
        assert 'locked' in result.warnings[0]
        assert result.notification is None

    def test_delete_equipment(self, equipment_service, ok_equipment):
        equipment_service.delete_equipment(ok_equipment.id)

        assert not Equipment.objects.filter(id=ok_equipment.id).exists()

    def test_list_equipment_by_status(
        self, equipment_service, ok_equipment, warning_equipment, overdue_equipment
    ):
        overdue = equipment_service.list_equipment(status=MaintenanceStatus.OVERDUE)
        warning = equipment_service.list_equipment(status='warning')

        assert [item.id for item in overdue] == [overdue_equipment.id]
        assert [item.id for item in warning] == [warning_equipment.id]
        assert len(equipment_service.list_equipment()) == 3

    def test_list_equipment_filters(self, equipment_service, make_equipment):
        make_equipment(name='Monitor', location_unit='UCI', responsible='Ana')
        make_equipment(name='Ecógrafo', location_unit='Urgencias', responsible='Ana',
                       brand='Philips', criticality=Equipment.Criticality.HIGH)
        make_equipment(name='Monitor fetal', location_unit='Urgencias', responsible='Luis')

        assert len(equipment_service.list_equipment(location_unit='Urgencias')) == 2
        assert len(equipment_service.list_equipment(responsible='Ana')) == 2
        assert len(equipment_service.list_equipment(search='monitor')) == 2
        assert len(equipment_service.list_equipment(search='philips')) == 1
        assert len(equipment_service.list_equipment(criticality='high')) == 1

    def test_dashboard_stats(
        self, equipment_service, issue_service, ok_equipment, warning_equipment,
        overdue_equipment, make_equipment, today
    ):
        soon = make_equipment(days_ago=28, value=30, unit='days', name='Incubadora')
        issue_service.report_issue(ok_equipment.id, 'Pantalla rota', IssueReport.Severity.MINOR)

        stats = equipment_service.get_dashboard_stats()

        assert stats['date'] == today.isoformat()
        assert stats['total_equipment'] == 4
        assert stats['ok_count'] == 1
        assert stats['warning_count'] == 2
        assert stats['overdue_count'] == 1
        assert stats['open_issues_count'] == 1
        assert [item['id'] for item in stats['upcoming_maintenance']] == [
            soon.id, warning_equipment.id,
        ]
        assert stats['upcoming_maintenance'][0]['days_remaining'] == 2

    def test_dashboard_stats_scoped(self, equipment_service, make_equipment):
        make_equipment(days_ago=40, value=30, unit='days', location_unit='UCI')
        make_equipment(days_ago=40, value=30, unit='days', location_unit='Pabellón')

        stats = equipment_service.get_dashboard_stats(location_unit='Pabellón')

        assert stats['total_equipment'] == 1
        assert stats['overdue_count'] == 1


# =============================================================================
# Maintenance History Tests
# =============================================================================

@pytest.mark.django_db
class TestMaintenanceHistory:
    """Tests for recording maintenance through EquipmentService."""

    def test_record_maintenance_advances_date(self, equipment_service, overdue_equipment, today):
        result = equipment_service.record_maintenance(
            equipment_id=overdue_equipment.id,
            date=today,
            description='Cambio de filtros',
            performed_by='Servicio Técnico',
        )

        overdue_equipment.refresh_from_db()
        assert isinstance(result.instance, MaintenanceRecord)
        assert overdue_equipment.last_maintenance_date == today
        assert result.evaluation.classification.status == MaintenanceStatus.OK
        assert Notification.objects.count() == 0

    def test_record_older_maintenance_keeps_date(self, equipment_service, ok_equipment, today):
        original = ok_equipment.last_maintenance_date

        result = equipment_service.record_maintenance(
            equipment_id=ok_equipment.id,
            date=today - timedelta(days=90),
            description='Registro histórico',
            performed_by='Servicio Técnico',
        )

        ok_equipment.refresh_from_db()
        assert ok_equipment.last_maintenance_date == original
        assert result.evaluation is None
        assert MaintenanceRecord.objects.filter(equipment=ok_equipment).count() == 1

    def test_record_maintenance_unknown_equipment(self, equipment_service, today):
        with pytest.raises(EquipmentNotFoundError):
            equipment_service.record_maintenance('NOPE', today, 'x', 'y')

    def test_history(self, equipment_service, ok_equipment, today):
        for days_ago in (3, 1, 2):
            equipment_service.record_maintenance(
                ok_equipment.id, today - timedelta(days=days_ago), 'Revisión', 'Técnico'
            )

        history = equipment_service.get_maintenance_history(ok_equipment.id)

        assert [record.date for record in history] == [
            today - timedelta(days=1),
            today - timedelta(days=2),
            today - timedelta(days=3),
        ]


# =============================================================================
# Issue Service Tests
# =============================================================================

@pytest.mark.django_db
class TestIssueService:
    """Tests for IssueService."""

    def test_report_issue(self, issue_service, ok_equipment, clock):
        result = issue_service.report_issue(
            equipment_id=ok_equipment.id,
            description='No enciende',
            severity=IssueReport.Severity.CRITICAL,
            reported_by='Enfermería',
        )

        issue = result.instance
        assert issue.status == IssueReport.Status.OPEN
        assert issue.reported_at == clock.now()
        assert result.warnings == []

        notification = Notification.objects.get(type=Notification.Type.NEW_ISSUE)
        assert notification.message == (
            f'Nueva incidencia (Crítica) reportada para el equipo "{ok_equipment.name}".'
        )
        assert notification.link == ok_equipment.link

    def test_every_issue_notifies(self, issue_service, ok_equipment):
        issue_service.report_issue(ok_equipment.id, 'Falla 1', IssueReport.Severity.MINOR)
        issue_service.report_issue(ok_equipment.id, 'Falla 2', IssueReport.Severity.MINOR)

        assert Notification.objects.filter(type=Notification.Type.NEW_ISSUE).count() == 2

    def test_report_issue_notification_failure(self, issue_service, notification_service, ok_equipment):
        with patch.object(notification_service, 'insert', side_effect=DatabaseError('down')):
            result = issue_service.report_issue(ok_equipment.id, 'Ruido', IssueReport.Severity.MODERATE)

        assert IssueReport.objects.filter(id=result.instance.id).exists()
        assert len(result.warnings) == 1

    def test_report_issue_unknown_equipment(self, issue_service):
        with pytest.raises(EquipmentNotFoundError):
            issue_service.report_issue('NOPE', 'x', IssueReport.Severity.MINOR)

    def test_update_issue(self, issue_service, ok_equipment):
        issue = issue_service.report_issue(ok_equipment.id, 'x', IssueReport.Severity.MINOR).instance

        updated = issue_service.update_issue(issue.id, status=IssueReport.Status.RESOLVED)

        assert updated.status == IssueReport.Status.RESOLVED
        assert not updated.is_open

    def test_get_issue_not_found(self, issue_service):
        with pytest.raises(IssueReportNotFoundError):
            issue_service.get_issue(uuid.uuid4())

    def test_get_issue_malformed_id(self, issue_service):
        with pytest.raises(IssueReportNotFoundError):
            issue_service.get_issue('not-a-uuid')

    def test_list_issues(self, issue_service, make_equipment):
        uci = make_equipment(location_unit='UCI')
        urgencias = make_equipment(location_unit='Urgencias')
        issue_service.report_issue(uci.id, 'a', IssueReport.Severity.MINOR)
        issue_service.report_issue(urgencias.id, 'b', IssueReport.Severity.SEVERE)

        assert len(issue_service.list_issues()) == 2
        assert len(issue_service.list_issues(severity='severe')) == 1
        assert len(issue_service.list_issues(location_unit='UCI')) == 1
        assert len(issue_service.list_issues(equipment_id=urgencias.id)) == 1


# =============================================================================
# Notification Service Tests
# =============================================================================

@pytest.mark.django_db
class TestNotificationService:
    """Tests for NotificationService."""

    def _insert(self, service, equipment, notification_type=Notification.Type.NEW_ISSUE):
        return service.insert(
            notification_type=notification_type,
            message='mensaje',
            link=equipment.link,
            equipment_id=equipment.id,
        )

    def test_list_unread_limit(self, notification_service, ok_equipment, settings):
        settings.EQUIPMENT_UNREAD_NOTIFICATIONS_LIMIT = 3
        for _ in range(5):
            self._insert(notification_service, ok_equipment)

        assert len(notification_service.list_unread()) == 3
        assert len(notification_service.list_unread(limit=10)) == 5
        assert notification_service.unread_count() == 5

    def test_list_unread_excludes_read(self, notification_service, ok_equipment):
        first = self._insert(notification_service, ok_equipment)
        self._insert(notification_service, ok_equipment)

        notification_service.mark_read(first.id)

        unread = notification_service.list_unread()
        assert len(unread) == 1
        assert first.id not in [n.id for n in unread]

    def test_mark_read_is_idempotent(self, notification_service, ok_equipment, clock):
        notification = self._insert(notification_service, ok_equipment)

        first = notification_service.mark_read(notification.id)
        second = notification_service.mark_read(notification.id)

        assert first.is_read and second.is_read
        assert second.read_at == clock.now()

    def test_mark_read_not_found(self, notification_service):
        with pytest.raises(NotificationNotFoundError):
            notification_service.mark_read(uuid.uuid4())

    def test_mark_read_malformed_id(self, notification_service):
        with pytest.raises(NotificationNotFoundError):
            notification_service.mark_read('not-a-uuid')

    def test_mark_all_read(self, notification_service, ok_equipment):
        for _ in range(3):
            self._insert(notification_service, ok_equipment)

        assert notification_service.mark_all_read() == 3
        assert notification_service.unread_count() == 0
        assert notification_service.mark_all_read() == 0

    def test_find_unread_by_equipment_and_type(self, notification_service, overdue_equipment):
        notification = self._insert(
            notification_service, overdue_equipment, Notification.Type.MAINTENANCE_OVERDUE
        )

        found = notification_service.find_unread_by_equipment_and_type(
            overdue_equipment.id, Notification.Type.MAINTENANCE_OVERDUE
        )

        assert found == notification
        assert notification_service.find_unread_by_equipment_and_type(
            overdue_equipment.id, Notification.Type.MAINTENANCE_DUE
        ) is None
