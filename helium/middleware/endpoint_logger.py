# helium/middleware/endpoint_logger.py

from fastapi import Request, status

from helium.core.logging_config import LogService


def endpoint_logger(log: LogService):
    """
    Endpoint logger. Adds failure logs to every endpoint.

    Args:
        log: The log service receiving one trace entry per failed response.

    Returns:
        An HTTP middleware function for ``app.middleware("http")``.
    """

    def log_result(request: Request, status_code: int) -> None:
        # string unique to this action at this endpoint
        url = request.url.path
        if request.url.query:
            url = f"{url}?{request.url.query}"
        api_name = f"{request.method} {url}"
        log.trace(f"{api_name}  Result: {status_code}", getattr(request.state, "request_id", None))

    async def response_status(request: Request, call_next):
        try:
            response = await call_next(request)
        except Exception:
            # the outer error middleware turns this into a 500
            log_result(request, status.HTTP_500_INTERNAL_SERVER_ERROR)
            raise

        if response.status_code > 399:
            log_result(request, response.status_code)

        return response

    return response_status
