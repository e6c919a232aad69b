"""
Request id propagation.

Each request is tagged with the id from its ``X-Request-Id`` header, or a
fresh UUID. The id goes on ``request.request_id`` (read by the API error
handler), into the log context so every log line of the request carries it,
and back out on the response.
"""
import uuid

from django.http import HttpRequest, HttpResponse
from django.utils.deprecation import MiddlewareMixin

from vaultadmin.logging_utils import clear_log_context, set_log_context

REQUEST_ID_HEADER = "X-Request-Id"


class RequestIdMiddleware(MiddlewareMixin):
    def process_request(self, request: HttpRequest) -> None:
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        request.request_id = request_id
        set_log_context(request_id=request_id)

    def process_response(
        self, request: HttpRequest, response: HttpResponse
    ) -> HttpResponse:
        request_id = getattr(request, "request_id", None)
        if request_id:
            response[REQUEST_ID_HEADER] = request_id

        clear_log_context()
        return response
