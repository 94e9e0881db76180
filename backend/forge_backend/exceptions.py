"""
DRF exception handler that renders every error as {"error": "..."}.
"""
import logging

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = 'An unexpected error occurred'


def _first_message(detail):
    """Reduce DRF error detail (dict/list/str) to a single readable message."""
    if isinstance(detail, dict):
        if not detail:
            return ''
        field, value = next(iter(detail.items()))
        message = _first_message(value)
        if field in ('detail', 'non_field_errors'):
            return message
        return f"{field}: {message}"
    if isinstance(detail, (list, tuple)):
        return _first_message(detail[0]) if detail else ''
    return str(detail)


def api_exception_handler(exc, context):
    response = exception_handler(exc, context)

    if response is None:
        view = context.get('view')
        logger.error(
            "Unhandled error in %s: %s",
            view.__class__.__name__ if view else 'unknown view',
            exc,
            exc_info=exc,
        )
        return Response(
            {'error': GENERIC_ERROR_MESSAGE},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR
        )

    response.data = {'error': _first_message(response.data)}
    return response
