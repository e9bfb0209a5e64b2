"""
Equipment Service API URL Configuration
"""

from django.urls import path, include
from rest_framework.routers import DefaultRouter

from apps.api.views import (
    EquipmentViewSet,
    IssueReportViewSet,
    NotificationViewSet,
)

app_name = 'api'

router = DefaultRouter()

# Equipment
router.register(r'equipment', EquipmentViewSet, basename='equipment')

# Issue Reports
router.register(r'issues', IssueReportViewSet, basename='issue-report')

# Notifications
router.register(r'notifications', NotificationViewSet, basename='notification')

urlpatterns = [
    path('', include(router.urls)),
]
