"""Project-wide DRF exception handler.

Browser clients read a flat ``error`` string; DRF puts messages under
``detail`` or per-field keys. Both are returned.
"""

from __future__ import annotations

from typing import Any

from rest_framework.views import exception_handler


def _first_message(data: Any) -> str:
    if isinstance(data, dict):
        if "detail" in data:
            return _first_message(data["detail"])
        parts = []
        for key, value in data.items():
            message = _first_message(value)
            if key == "non_field_errors":
                parts.append(message)
            else:
                parts.append(f"{key}: {message}")
        return "; ".join(parts)
    if isinstance(data, (list, tuple)):
        return _first_message(data[0]) if data else ""
    return str(data)


def api_exception_handler(exc, context):
    response = exception_handler(exc, context)
    if response is None:
        return None

    data = response.data
    message = _first_message(data)
    if isinstance(data, dict):
        data.setdefault("detail", message)
        data.setdefault("error", message)
    else:
        response.data = {"detail": data, "error": message}
    return response
