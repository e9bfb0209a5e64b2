"""
Issue Report API Views
"""

from django_filters import rest_framework as filters
from rest_framework import viewsets, status, mixins
from rest_framework.response import Response

from apps.core.clock import system_clock
from apps.core.models import IssueReport
from apps.core.services import (
    IssueService,
    EquipmentNotFoundError,
    IssueReportNotFoundError,
)
from apps.api.serializers import (
    IssueReportSerializer,
    IssueReportCreateSerializer,
    IssueReportUpdateSerializer,
)
from shared.common.exceptions import NotFoundException, BadRequestException


class IssueReportFilter(filters.FilterSet):
    """Filter for issue reports."""

    status = filters.ChoiceFilter(choices=IssueReport.Status.choices)
    severity = filters.ChoiceFilter(choices=IssueReport.Severity.choices)
    equipment_id = filters.CharFilter(field_name='equipment_id')
    location_unit = filters.CharFilter(field_name='equipment__location_unit')

    # Date filters
    reported_after = filters.DateFilter(field_name='reported_at', lookup_expr='date__gte')
    reported_before = filters.DateFilter(field_name='reported_at', lookup_expr='date__lte')

    class Meta:
        model = IssueReport
        fields = ['status', 'severity', 'equipment_id', 'location_unit']


class IssueReportViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    mixins.CreateModelMixin,
    mixins.UpdateModelMixin,
    viewsets.GenericViewSet
):
    """
    ViewSet for equipment issue reports.

    Issue reports are never deleted; they are closed through their status.
    """

    queryset = IssueReport.objects.select_related('equipment').order_by('-reported_at')
    serializer_class = IssueReportSerializer
    filter_backends = [filters.DjangoFilterBackend]
    filterset_class = IssueReportFilter
    clock = system_clock

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.service = IssueService(clock=self.clock)

    def get_serializer_class(self):
        if self.action == 'create':
            return IssueReportCreateSerializer
        elif self.action in ['update', 'partial_update']:
            return IssueReportUpdateSerializer
        return IssueReportSerializer

    def get_object(self):
        try:
            return self.service.get_issue(self.kwargs['pk'])
        except IssueReportNotFoundError as e:
            raise NotFoundException(str(e))

    def create(self, request, *args, **kwargs):
        """Report an issue for an equipment."""
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = dict(serializer.validated_data)

        try:
            result = self.service.report_issue(
                equipment_id=data.pop('equipment'),
                **data
            )
        except EquipmentNotFoundError as e:
            raise BadRequestException(str(e))

        response = IssueReportSerializer(result.instance).data
        response['warnings'] = result.warnings
        return Response(response, status=status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):
        """Update an issue report."""
        partial = kwargs.pop('partial', False)
        instance = self.get_object()

        serializer = self.get_serializer(instance, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)

        issue = self.service.update_issue(instance.id, **serializer.validated_data)
        return Response(IssueReportSerializer(issue).data)
