# museum_inventory/middleware/request_logging.py

import time
import logging
from fastapi import Request

access_logger = logging.getLogger("access")

PROCESS_TIME_HEADER = "X-Process-Time-Ms"


def _access_fields(request: Request, status_code: int, started: float) -> dict:
    return {
        "client_addr": request.client.host if request.client else "unknown",
        "method": request.method,
        "path": request.url.path,
        "status_code": status_code,
        "process_time_ms": round((time.perf_counter() - started) * 1000, 2),
    }


async def request_logging_middleware(request: Request, call_next):
    started = time.perf_counter()

    try:
        response = await call_next(request)
    except Exception:
        # Unhandled errors still get an access line before propagating
        access_logger.info("", extra=_access_fields(request, 500, started))
        raise

    fields = _access_fields(request, response.status_code, started)
    response.headers[PROCESS_TIME_HEADER] = str(fields["process_time_ms"])
    access_logger.info("", extra=fields)

    return response
