"""Workflow errors and the custom exception handler for the ERP REST API.

Service functions raise :class:`WorkflowError` subclasses inside
``transaction.atomic()`` blocks so that every write of a multi-step workflow
is rolled back, then convert them into ``(success, message, id)`` results at
their boundary.
"""

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db.models import ProtectedError
from django.http import Http404
from rest_framework.exceptions import ValidationError as DRFValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler


class WorkflowError(Exception):
    """A business rule refused the requested operation."""


class InvalidTransition(WorkflowError):
    """The record is not in the status the operation requires."""

    def __init__(self, label: str, current: str, expected: str):
        self.label = label
        self.current = current
        self.expected = expected
        super().__init__(f"{label} is '{current}', expected '{expected}'.")


class InsufficientStock(WorkflowError):
    """A stock-out or conversion needs more than is available."""

    def __init__(self, item_name: str, requested: int, available: int):
        self.item_name = item_name
        self.requested = requested
        self.available = available
        super().__init__(
            f"Insufficient stock for {item_name}: requested {requested}, available {available}."
        )


def custom_exception_handler(exc, context):
    """Handle Django ValidationError as a REST framework validation error.

    Deleting a row that protected foreign keys still point to is a 409.
    For other exceptions, follow DRF's default behavior.
    """
    if isinstance(exc, DjangoValidationError):
        exc = DRFValidationError(detail=exc.messages)

    if isinstance(exc, Http404):
        return Response({"detail": "Not found."}, status=404)

    if isinstance(exc, ProtectedError):
        blocking = sorted({obj._meta.verbose_name for obj in exc.protected_objects})
        return Response(
            {
                "detail": f"Cannot delete: still referenced by {', '.join(blocking)}.",
                "status_code": 409,
            },
            status=409,
        )

    response = exception_handler(exc, context)

    # Unhandled exceptions fall through to Django's 500 handling.
    if response is not None:
        if not isinstance(response.data, dict):
            response.data = {"detail": response.data}
        response.data["status_code"] = response.status_code

    return response
