from django.conf import settings
from django.views.static import serve


def serve_document(request, path):
    """Stream a stored submission document from MEDIA_ROOT."""

    return serve(request, path, document_root=settings.MEDIA_ROOT)
