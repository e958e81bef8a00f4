"""Public document locations: ``/uploads/<name>`` on disk, absolute in payloads."""

from __future__ import annotations

from urllib.parse import unquote
from urllib.parse import urlsplit

from django.conf import settings


def normalize_document_location(value) -> str:
    """Reduce whatever the dashboard echoes back to a rooted, decoded path.

    ``http://host:5000/uploads/a%20b.pdf?x=1`` -> ``/uploads/a b.pdf``
    """

    raw = str(value or "").strip()
    path = unquote(urlsplit(raw).path)
    if path and not path.startswith("/"):
        path = f"/{path}"
    return path


def stored_document_name(value) -> str:
    """File name as kept on the FileField, i.e. the location minus MEDIA_URL."""

    path = normalize_document_location(value)
    prefix = settings.MEDIA_URL
    if path.startswith(prefix):
        return path[len(prefix) :]
    return path.lstrip("/")


def document_location(field_file) -> str | None:
    if not field_file:
        return None
    return f"{settings.MEDIA_URL}{field_file.name}"


def absolute_document_url(field_file, base_url: str | None = None) -> str | None:
    location = document_location(field_file)
    if location is None:
        return None
    base = settings.PUBLIC_BASE_URL if base_url is None else base_url
    return f"{base.rstrip('/')}{location}"
