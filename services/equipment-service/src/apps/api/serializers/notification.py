"""
Notification Serializers
"""

from rest_framework import serializers

from apps.core.models import Notification


class NotificationSerializer(serializers.ModelSerializer):

    type_display = serializers.CharField(source='get_type_display', read_only=True)

    class Meta:
        model = Notification
        fields = [
            'id', 'type', 'type_display', 'message', 'link',
            'equipment', 'created_at', 'is_read', 'read_at',
        ]
        read_only_fields = fields
