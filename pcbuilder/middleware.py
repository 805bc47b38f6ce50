import logging

from django.http import JsonResponse

from .errors import AuthRequired, PCBuilderError

logger = logging.getLogger(__name__)


class ApiErrorMiddleware:
    """Render ``PCBuilderError`` raised by a view as a JSON error body."""

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        return self.get_response(request)

    def process_exception(self, request, exception):
        if not isinstance(exception, PCBuilderError):
            return None
        if isinstance(exception, AuthRequired):
            logger.warning(
                "Auth failure on %s %s: %s",
                request.method, request.path, exception.message,
            )
        elif exception.status_code >= 500:
            logger.error(
                "%s on %s %s: %s",
                exception.__class__.__name__,
                request.method, request.path, exception.message,
            )
        return JsonResponse(exception.as_dict(), status=exception.status_code)
