# Shared Common Library for the Equipment Maintenance Tracker
# Cross-cutting pieces used by every service: model mixins, request
# tracing middleware, pagination and the API exception handler.

__version__ = "1.0.0"

from .exceptions import (
    BaseAPIException,
    BadRequestException,
    NotFoundException,
    ConflictException,
)

__all__ = [
    '__version__',

    # Exceptions
    'BaseAPIException',
    'BadRequestException',
    'NotFoundException',
    'ConflictException',
]
