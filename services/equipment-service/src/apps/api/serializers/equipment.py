"""
Equipment Serializers
"""

from django.core.validators import RegexValidator
from rest_framework import serializers

from apps.core.clock import system_clock
from apps.core.models import Equipment, MaintenanceRecord


class EquipmentSerializer(serializers.ModelSerializer):
    """Base serializer for Equipment, with the live maintenance classification."""

    criticality_display = serializers.CharField(
        source='get_criticality_display',
        read_only=True
    )
    maintenance_frequency_unit_display = serializers.CharField(
        source='get_maintenance_frequency_unit_display',
        read_only=True
    )
    maintenance = serializers.SerializerMethodField()

    class Meta:
        model = Equipment
        fields = [
            'id', 'name', 'brand', 'model',
            'location_building', 'location_unit', 'responsible',
            'last_calibration_date', 'last_maintenance_date',
            'maintenance_frequency_value', 'maintenance_frequency_unit',
            'maintenance_frequency_unit_display',
            'custom_maintenance_instructions',
            'criticality', 'criticality_display',
            'maintenance',
            'created_at', 'updated_at',
        ]
        read_only_fields = fields

    def get_maintenance(self, obj):
        clock = self.context.get('clock', system_clock)
        return obj.classify(clock.today()).to_dict()


class EquipmentListSerializer(EquipmentSerializer):
    """List serializer with essential fields only."""

    class Meta(EquipmentSerializer.Meta):
        fields = [
            'id', 'name', 'location_building', 'location_unit', 'responsible',
            'last_maintenance_date', 'criticality', 'criticality_display',
            'maintenance',
        ]
        read_only_fields = fields


class FrequencyValidationMixin:
    """Frequency value and unit are configured together or not at all."""

    def validate(self, data):
        data = super().validate(data)
        instance = getattr(self, 'instance', None)

        value = data.get(
            'maintenance_frequency_value',
            getattr(instance, 'maintenance_frequency_value', None)
        )
        unit = data.get(
            'maintenance_frequency_unit',
            getattr(instance, 'maintenance_frequency_unit', None)
        )

        if (value is None) != (not unit):
            raise serializers.ValidationError({
                'maintenance_frequency_unit': (
                    "maintenance_frequency_value and maintenance_frequency_unit "
                    "must be set together."
                )
            })
        return data


class EquipmentCreateSerializer(FrequencyValidationMixin, serializers.ModelSerializer):
    """Serializer for creating equipment."""

    id = serializers.CharField(
        max_length=64,
        validators=[
            RegexValidator(r"^[^/]+$", message="Equipment ID cannot contain '/'.")
        ]
    )

    class Meta:
        model = Equipment
        fields = [
            'id', 'name', 'brand', 'model',
            'location_building', 'location_unit', 'responsible',
            'last_calibration_date', 'last_maintenance_date',
            'maintenance_frequency_value', 'maintenance_frequency_unit',
            'custom_maintenance_instructions', 'criticality',
        ]

    def validate_id(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError("Equipment ID cannot be blank.")
        return value


class EquipmentUpdateSerializer(FrequencyValidationMixin, serializers.ModelSerializer):
    """Serializer for updating equipment. The institutional ID is immutable."""

    class Meta:
        model = Equipment
        fields = [
            'name', 'brand', 'model',
            'location_building', 'location_unit', 'responsible',
            'last_calibration_date', 'last_maintenance_date',
            'maintenance_frequency_value', 'maintenance_frequency_unit',
            'custom_maintenance_instructions', 'criticality',
        ]


class MaintenanceRecordSerializer(serializers.ModelSerializer):

    class Meta:
        model = MaintenanceRecord
        fields = [
            'id', 'equipment', 'date', 'description', 'performed_by',
            'attachment', 'created_at',
        ]
        read_only_fields = fields


class MaintenanceRecordCreateSerializer(serializers.Serializer):
    """Serializer for recording a maintenance intervention."""

    date = serializers.DateField()
    description = serializers.CharField()
    performed_by = serializers.CharField(max_length=255)
    attachment = serializers.FileField(required=False, allow_null=True)
