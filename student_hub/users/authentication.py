"""Bearer-token authentication shared by REST views and event streams.

Browsers cannot attach an ``Authorization`` header to an ``EventSource``, so
the token is also accepted as the ``token`` query parameter.
"""

from __future__ import annotations

from rest_framework_simplejwt.authentication import JWTAuthentication

QUERY_PARAM = "token"


def _query_token(request) -> str | None:
    params = getattr(request, "query_params", None)
    if params is None:
        params = request.GET
    token = params.get(QUERY_PARAM)
    if isinstance(token, str) and token.strip():
        return token.strip()
    return None


class BearerOrQueryTokenAuthentication(JWTAuthentication):
    """simplejwt authentication with a query-string fallback."""

    def authenticate(self, request):
        header = self.get_header(request)
        raw_token = self.get_raw_token(header) if header is not None else None
        if raw_token is None:
            raw_token = _query_token(request)
        if raw_token is None:
            return None

        validated_token = self.get_validated_token(raw_token)
        return self.get_user(validated_token), validated_token
