"""
Issue Report Serializers
"""

from rest_framework import serializers

from apps.core.models import IssueReport


class IssueReportSerializer(serializers.ModelSerializer):
    """Base serializer for IssueReport."""

    equipment_name = serializers.CharField(source='equipment.name', read_only=True)
    severity_display = serializers.CharField(
        source='get_severity_display',
        read_only=True
    )
    status_display = serializers.CharField(
        source='get_status_display',
        read_only=True
    )

    class Meta:
        model = IssueReport
        fields = [
            'id', 'equipment', 'equipment_name',
            'reported_by', 'reported_at', 'description',
            'severity', 'severity_display',
            'status', 'status_display',
            'attachment', 'created_at', 'updated_at',
        ]
        read_only_fields = fields


class IssueReportCreateSerializer(serializers.Serializer):
    """Serializer for reporting an issue."""

    equipment = serializers.CharField(max_length=64)
    description = serializers.CharField()
    severity = serializers.ChoiceField(choices=IssueReport.Severity.choices)
    reported_by = serializers.CharField(max_length=255, required=False, allow_blank=True)
    attachment = serializers.FileField(required=False, allow_null=True)


class IssueReportUpdateSerializer(serializers.ModelSerializer):

    class Meta:
        model = IssueReport
        fields = ['description', 'severity', 'status', 'reported_by']
