from __future__ import annotations

import json
from typing import Any

from django.core.serializers.json import DjangoJSONEncoder
from django.http import StreamingHttpResponse

HEARTBEAT = ":heartbeat\n\n"
CONTENT_TYPE = "text/event-stream"
STREAM_HEADERS = {
    "Cache-Control": "no-cache, no-transform",
    "X-Accel-Buffering": "no",
}


def format_event(event: str, data: Any) -> str:
    payload = json.dumps(data, cls=DjangoJSONEncoder)
    return f"event: {event}\ndata: {payload}\n\n"


def event_stream_response(chunks) -> StreamingHttpResponse:
    response = StreamingHttpResponse(chunks, content_type=CONTENT_TYPE)
    for header, value in STREAM_HEADERS.items():
        response[header] = value
    return response
