"""
Equipment API Views
"""

from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.response import Response

from apps.core.clock import system_clock
from apps.core.models import Equipment
from apps.core.services import (
    EquipmentService,
    EquipmentNotFoundError,
    EquipmentConflictError,
)
from apps.api.serializers import (
    EquipmentSerializer,
    EquipmentListSerializer,
    EquipmentCreateSerializer,
    EquipmentUpdateSerializer,
    MaintenanceRecordSerializer,
    MaintenanceRecordCreateSerializer,
)
from shared.common.exceptions import NotFoundException, ConflictException


class EquipmentViewSet(viewsets.ModelViewSet):
    """
    ViewSet for Equipment.

    Provides CRUD operations, maintenance history and the dashboard.
    Every write runs the maintenance notification engine; notification
    failures come back under ``warnings`` without failing the request.
    """

    queryset = Equipment.objects.all()
    serializer_class = EquipmentSerializer
    lookup_value_regex = '[^/]+'
    clock = system_clock

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.service = EquipmentService(clock=self.clock)

    def get_serializer_class(self):
        if self.action == 'list':
            return EquipmentListSerializer
        elif self.action == 'create':
            return EquipmentCreateSerializer
        elif self.action in ['update', 'partial_update']:
            return EquipmentUpdateSerializer
        return EquipmentSerializer

    def get_serializer_context(self):
        context = super().get_serializer_context()
        context['clock'] = self.clock
        return context

    def get_object(self):
        try:
            return self.service.get_equipment(self.kwargs['pk'])
        except EquipmentNotFoundError as e:
            raise NotFoundException(str(e))

    def list(self, request, *args, **kwargs):
        """List equipment, filtered by scope and live maintenance status."""
        params = request.query_params
        equipment = self.service.list_equipment(
            status=params.get('status'),
            location_unit=params.get('location_unit'),
            responsible=params.get('responsible'),
            criticality=params.get('criticality'),
            search=params.get('search'),
        )

        page = self.paginate_queryset(equipment)
        if page is not None:
            serializer = self.get_serializer(page, many=True)
            return self.get_paginated_response(serializer.data)

        serializer = self.get_serializer(equipment, many=True)
        return Response(serializer.data)

    def create(self, request, *args, **kwargs):
        """Create an equipment."""
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            result = self.service.create_equipment(**serializer.validated_data)
        except EquipmentConflictError as e:
            raise ConflictException(str(e))

        return Response(
            self._write_response(result),
            status=status.HTTP_201_CREATED
        )

    def update(self, request, *args, **kwargs):
        """Update an equipment."""
        partial = kwargs.pop('partial', False)
        instance = self.get_object()

        serializer = self.get_serializer(instance, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)

        try:
            result = self.service.update_equipment(instance.id, **serializer.validated_data)
        except EquipmentNotFoundError as e:
            raise NotFoundException(str(e))

        return Response(self._write_response(result))

    def destroy(self, request, *args, **kwargs):
        try:
            self.service.delete_equipment(self.kwargs['pk'])
        except EquipmentNotFoundError as e:
            raise NotFoundException(str(e))
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=True, methods=['get', 'post'])
    def maintenance(self, request, pk=None):
        """Maintenance history (GET) or record a new intervention (POST)."""
        try:
            if request.method == 'GET':
                records = self.service.get_maintenance_history(pk)
                return Response(MaintenanceRecordSerializer(records, many=True).data)

            serializer = MaintenanceRecordCreateSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)
            result = self.service.record_maintenance(
                equipment_id=pk,
                **serializer.validated_data
            )
        except EquipmentNotFoundError as e:
            raise NotFoundException(str(e))

        data = MaintenanceRecordSerializer(result.instance).data
        data['equipment_maintenance'] = (
            result.evaluation.classification.to_dict() if result.evaluation else None
        )
        data['warnings'] = result.warnings
        return Response(data, status=status.HTTP_201_CREATED)

    @action(detail=True, methods=['post'])
    def evaluate(self, request, pk=None):
        """Run the maintenance notification engine for one equipment."""
        try:
            result = self.service.evaluate_equipment(pk)
        except EquipmentNotFoundError as e:
            raise NotFoundException(str(e))

        return Response({
            'equipment_id': result.equipment_id,
            'maintenance': result.classification.to_dict(),
            'notification_id': str(result.notification.id) if result.notification else None,
            'suppressed': result.suppressed,
            'warnings': [result.warning] if result.warning else [],
        })

    @action(detail=False, methods=['get'])
    def dashboard(self, request):
        """Get dashboard statistics."""
        stats = self.service.get_dashboard_stats(
            location_unit=request.query_params.get('location_unit'),
            responsible=request.query_params.get('responsible'),
        )
        return Response(stats)

    def _write_response(self, result):
        data = EquipmentSerializer(result.instance, context=self.get_serializer_context()).data
        data['notification_id'] = str(result.notification.id) if result.notification else None
        data['warnings'] = result.warnings
        return data
