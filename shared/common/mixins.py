# shared/common/mixins.py
"""
Reusable Model Mixins
"""

import uuid

from django.db import models


class UUIDPrimaryKeyMixin(models.Model):
    """
    Mixin that provides a random UUID4 primary key instead of an
    auto-increment integer or a timestamp-derived string.
    """

    id = models.UUIDField(
        primary_key=True,
        default=uuid.uuid4,
        editable=False,
        help_text="Unique identifier for this record"
    )

    class Meta:
        abstract = True


class TimestampMixin(models.Model):
    """
    Mixin that provides created_at and updated_at timestamp fields.
    """

    created_at = models.DateTimeField(
        auto_now_add=True,
        db_index=True,
        help_text="When this record was created"
    )
    updated_at = models.DateTimeField(
        auto_now=True,
        help_text="When this record was last updated"
    )

    class Meta:
        abstract = True
