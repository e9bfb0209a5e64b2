"""
Notification API Views
"""

from rest_framework import viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from apps.core.clock import system_clock
from apps.core.services import NotificationService, NotificationNotFoundError
from apps.api.serializers import NotificationSerializer
from shared.common.exceptions import NotFoundException, BadRequestException


class NotificationViewSet(viewsets.ViewSet):
    """In-system notifications: unread list and read state."""

    clock = system_clock

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.service = NotificationService(clock=self.clock)

    def list(self, request):
        """Most recent unread notifications."""
        limit = request.query_params.get('limit')
        if limit is not None:
            try:
                limit = int(limit)
            except ValueError:
                raise BadRequestException('limit must be an integer')
            if limit < 1:
                raise BadRequestException('limit must be positive')

        notifications = self.service.list_unread(limit=limit)
        return Response({
            'results': NotificationSerializer(notifications, many=True).data,
            'unread_count': self.service.unread_count(),
        })

    @action(detail=True, methods=['post'])
    def read(self, request, pk=None):
        """Mark a notification as read."""
        try:
            notification = self.service.mark_read(pk)
        except NotificationNotFoundError as e:
            raise NotFoundException(str(e))
        return Response(NotificationSerializer(notification).data)

    @action(detail=False, methods=['post'], url_path='read-all')
    def read_all(self, request):
        """Mark every unread notification as read."""
        count = self.service.mark_all_read()
        return Response({'marked_read': count})

    @action(detail=False, methods=['get'], url_path='unread-count')
    def unread_count(self, request):
        return Response({'unread_count': self.service.unread_count()})
