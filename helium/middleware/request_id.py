# helium/middleware/request_id.py

import uuid

from fastapi import Request

REQUEST_ID_HEADER = "X-Request-ID"


async def request_id_middleware(request: Request, call_next):
    """
    Assigns the request a correlation id and echoes it on the response.

    An inbound X-Request-ID header is reused when present, otherwise a new
    UUID is generated. Handlers read it from ``request.state.request_id``.
    """
    request_id = request.headers.get(REQUEST_ID_HEADER, "").strip() or uuid.uuid4().hex
    request.state.request_id = request_id
    response = await call_next(request)
    response.headers[REQUEST_ID_HEADER] = request_id
    return response
