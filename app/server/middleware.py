from starlette.middleware.base import BaseHTTPMiddleware

from infrastructure.logging import bind_request_context

CORRELATION_HEADER = "X-Correlation-ID"


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Bind a correlation id and request metadata to every log line."""

    async def dispatch(self, request, call_next):
        with bind_request_context(
            correlation_id=request.headers.get(CORRELATION_HEADER),
            request_path=request.url.path,
            request_method=request.method,
            preferred_language=request.query_params.get("lang")
            or request.cookies.get("lang"),
        ) as correlation_id:
            response = await call_next(request)
            response.headers[CORRELATION_HEADER] = correlation_id
            return response
