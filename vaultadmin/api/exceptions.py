"""
Custom exception handler for standardized API error responses.

Every API error uses the same envelope:
{
    "error": {
        "code": "payment_processor_error",
        "message": "The payment processor could not complete the request.",
        "details": {...},
        "type": "/errors/payment-processor-error",
        "request_id": "abc123"  // When RequestIdMiddleware assigned one
    }
}
"""

import logging

import stripe
from rest_framework.views import exception_handler
from rest_framework.exceptions import (
    ValidationError,
    NotFound,
    PermissionDenied,
    AuthenticationFailed,
    NotAuthenticated,
    MethodNotAllowed,
)
from rest_framework.response import Response

from vaultadmin.exceptions import MissingRequiredInput

logger = logging.getLogger(__name__)


def custom_exception_handler(exc, context):
    """
    Return standardized error responses for API views.

    DRF exceptions (including Django's Http404 and PermissionDenied, which DRF
    converts) keep their status code. Stripe failures become 502, missing
    domain inputs 400, anything else a logged 500.

    Args:
        exc: The exception instance
        context: Dict containing 'view' and 'request' keys

    Returns:
        Response object with the error envelope
    """
    request_id = None
    if context and "request" in context:
        request_id = getattr(context["request"], "request_id", None)

    response = exception_handler(exc, context)

    if response is None:
        if isinstance(exc, stripe.StripeError):
            logger.error(
                "Stripe request failed: %s (request id %s)",
                exc.__class__.__name__,
                getattr(exc, "request_id", None),
            )
            error_code = "payment_processor_error"
            error_message = "The payment processor could not complete the request."
            status_code = 502
            details = (
                {"processor_message": exc.user_message} if exc.user_message else None
            )
        elif isinstance(exc, MissingRequiredInput):
            error_code = "missing_required_input"
            error_message = str(exc)
            status_code = 400
            details = {"field": exc.name}
        else:
            logger.error(
                f"Unhandled exception: {exc.__class__.__name__}: {str(exc)}",
                exc_info=True,
                extra={"request_id": request_id},
            )
            error_code = "internal_server_error"
            error_message = "An unexpected error occurred. Please try again later."
            status_code = 500
            details = None

        response = Response(status=status_code)
        error_data = {
            "code": error_code,
            "message": error_message,
            "details": details,
        }
    else:
        error_data = get_error_data(exc, response)

    error_data["type"] = _get_error_type_uri(error_data["code"])
    if request_id:
        error_data["request_id"] = request_id

    response.data = {"error": error_data}
    return response


def _get_error_type_uri(error_code):
    """Map an error code to its RFC 7807 problem type URI."""
    return f"/errors/{error_code.replace('_', '-')}"


def get_error_data(exc, response):
    """
    Extract standardized error data from a DRF-handled exception.

    Args:
        exc: The exception instance
        response: DRF Response object

    Returns:
        Dict with code, message, and details keys
    """
    if isinstance(exc, ValidationError):
        error_code = "validation_error"
        error_message = "Invalid input data."
        details = (
            response.data
            if isinstance(response.data, dict)
            else {"non_field_errors": response.data}
        )

    elif isinstance(exc, (NotAuthenticated, AuthenticationFailed)):
        error_code = "authentication_failed"
        error_message = "Authentication credentials were not provided or are invalid."
        details = None

    elif isinstance(exc, PermissionDenied):
        error_code = "permission_denied"
        error_message = "You do not have permission to perform this action."
        details = None

    elif isinstance(exc, NotFound) or response.status_code == 404:
        error_code = "not_found"
        error_message = "The requested resource was not found."
        details = None

    elif isinstance(exc, MethodNotAllowed):
        error_code = "method_not_allowed"
        error_message = str(exc) if str(exc) else "Method not allowed."
        details = None

    else:
        error_code = "error"
        error_message = str(exc) if str(exc) else "An error occurred."
        details = response.data if response.data != error_message else None

    return {
        "code": error_code,
        "message": error_message,
        "details": details,
    }
