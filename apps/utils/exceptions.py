import logging

from rest_framework import exceptions
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


def _first_message(detail):
    if isinstance(detail, dict):
        for value in detail.values():
            return _first_message(value)
    if isinstance(detail, list):
        return _first_message(detail[0]) if detail else 'Validation failed'
    return str(detail)


def api_exception_handler(exc, context):
    """
    Render every DRF exception as {"success": false, "error": "..."}.
    Validation errors keep the per-field detail under "errors".
    """
    response = exception_handler(exc, context)
    if response is None:
        return None

    if isinstance(exc, exceptions.ValidationError):
        response.data = {
            'success': False,
            'error': _first_message(exc.detail),
            'errors': exc.detail,
        }
    else:
        detail = exc.detail if isinstance(exc, exceptions.APIException) else response.data
        response.data = {
            'success': False,
            'error': _first_message(detail),
        }

    if response.status_code >= 500:
        logger.error("API error in %s: %s", context.get('view').__class__.__name__, exc)
    return response
