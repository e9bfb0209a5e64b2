from django.contrib import admin
from .models import Equipment, MaintenanceRecord, IssueReport, Notification


@admin.register(Equipment)
class EquipmentAdmin(admin.ModelAdmin):
    list_display = ['id', 'name', 'location_unit', 'responsible', 'last_maintenance_date',
                    'maintenance_frequency_value', 'maintenance_frequency_unit', 'criticality']
    list_filter = ['criticality', 'maintenance_frequency_unit', 'location_unit']
    search_fields = ['id', 'name', 'brand', 'model']
    ordering = ['name']


@admin.register(MaintenanceRecord)
class MaintenanceRecordAdmin(admin.ModelAdmin):
    list_display = ['equipment', 'date', 'performed_by']
    search_fields = ['equipment__id', 'equipment__name', 'description']
    ordering = ['-date']


@admin.register(IssueReport)
class IssueReportAdmin(admin.ModelAdmin):
    list_display = ['equipment', 'severity', 'status', 'reported_by', 'reported_at']
    list_filter = ['severity', 'status']
    search_fields = ['equipment__id', 'description']
    ordering = ['-reported_at']


@admin.register(Notification)
class NotificationAdmin(admin.ModelAdmin):
    list_display = ['type', 'message', 'equipment', 'is_read', 'created_at']
    list_filter = ['type', 'is_read']
    search_fields = ['message']
    ordering = ['-created_at']
