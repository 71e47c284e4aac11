"""
Activity tracking hook

Collects request/response metadata once the handler has finished and hands
it to the ActivityRecorder as a background task that runs after the
response has been sent.
"""

import json
import logging
import time
from typing import Any, Optional

from starlette.background import BackgroundTask
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from lead_admin.app.services.activity_recorder import (
    ActivityRecorder,
    RequestContext,
    ResponseContext,
    should_track,
)

logger = logging.getLogger(__name__)


def decode_body(raw: bytes) -> Any:
    if not raw:
        return None
    try:
        return json.loads(raw)
    except ValueError:
        return raw.decode("utf-8", errors="replace")


def request_context(request: Request, body: Any = None) -> RequestContext:
    """Snapshot of a request, taken after routing so path params are known"""
    return RequestContext(
        method=request.method,
        path=request.url.path,
        path_params=dict(request.path_params),
        query_params=dict(request.query_params),
        headers={k.lower(): v for k, v in request.headers.items()},
        client_host=request.client.host if request.client else None,
        body=body,
        identity=getattr(request.state, "identity", None),
    )


async def _replay(chunk: bytes):
    yield chunk


class ActivityTrackerMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        recorder: Optional[ActivityRecorder] = getattr(
            request.app.state, "activity_recorder", None
        )
        if recorder is None or not recorder.enabled or request.method.upper() == "GET":
            return await call_next(request)

        started = time.perf_counter()
        body = decode_body(await request.body())
        response = await call_next(request)

        # Identity and path params are only known once the route has run
        req_ctx = request_context(request, body)
        if not should_track(req_ctx):
            return response

        raw = b"".join([chunk async for chunk in response.body_iterator])
        response.body_iterator = _replay(raw)

        resp_ctx = ResponseContext(
            status_code=response.status_code,
            body=decode_body(raw),
            duration_ms=int((time.perf_counter() - started) * 1000),
        )
        response.background = BackgroundTask(recorder.record, req_ctx, resp_ctx)
        return response
