"""
Response minification middleware.

Buffers successful responses whose Content-Type is enabled in the settings,
minifies the body and swaps it in only when the result is smaller. Anything
that cannot be parsed or minified is sent as produced by the application.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response
from starlette.types import ASGIApp

from webnify.domain.media_types import MediaTypeError, parse_media_type, should_minify
from webnify.domain.models import MinifySettings
from webnify.services.minifier import Minifier, MinifyError, create_minifier

logger = logging.getLogger(__name__)

SkipFunc = Callable[[Request], bool]


def _is_minifiable_status(status_code: int) -> bool:
    return 200 <= status_code < 300 and status_code != 204


class MinifyMiddleware(BaseHTTPMiddleware):
    """
    Middleware that minifies HTML, CSS, JavaScript, JSON, XML and SVG responses.

    Behavior:
    - ``skip(request)`` returning True bypasses the middleware entirely
    - Only 2xx responses other than 204 are considered
    - Responses with a Content-Encoding other than identity are left alone
    - The original Content-Type (charset included) and other headers are kept
    - Content-Length is rewritten when the body is replaced
    """

    def __init__(
        self,
        app: ASGIApp,
        settings: Optional[MinifySettings] = None,
        skip: Optional[SkipFunc] = None,
        minifier: Optional[Minifier] = None,
    ) -> None:
        super().__init__(app)
        self.settings = settings or MinifySettings()
        self.skip = skip
        self.minifier = minifier or create_minifier(self.settings)

    def _warn(self, message: str) -> None:
        if not self.settings.suppress_warnings:
            logger.warning(message)

    async def dispatch(self, request: Request, call_next):
        if self.skip is not None and self.skip(request):
            return await call_next(request)

        response = await call_next(request)

        # HEAD responses carry the GET Content-Length but no body
        if request.method == "HEAD" or not _is_minifiable_status(response.status_code):
            return response

        # Compressed bodies are not text; leave them to whoever encoded them
        content_encoding = response.headers.get("content-encoding", "").strip().lower()
        if content_encoding and content_encoding != "identity":
            return response

        content_type = response.headers.get("content-type")
        if not content_type:
            return response

        try:
            media_type, params = parse_media_type(content_type)
        except MediaTypeError as e:
            self._warn(f"Minify: Failed to parse media type '{content_type}': {e}")
            return response

        if not should_minify(media_type, self.settings):
            return response

        # The body iterator can only be consumed once; from here on the
        # response has to be rebuilt.
        original_body = b""
        async for chunk in response.body_iterator:
            if isinstance(chunk, str):
                chunk = chunk.encode(params.get("charset") or "utf-8")
            original_body += chunk

        if not original_body:
            return self._rebuild(response, original_body)

        try:
            minified_body = self.minifier.minify(media_type, original_body, params.get("charset"))
        except MinifyError as e:
            self._warn(f"Minify: Failed to minify type '{media_type}': {e}")
            return self._rebuild(response, original_body)

        if minified_body and len(minified_body) < len(original_body):
            logger.debug(
                f"Minified {request.url.path} ({media_type}): "
                f"{len(original_body)} -> {len(minified_body)} bytes"
            )
            return self._rebuild(response, minified_body)

        return self._rebuild(response, original_body)

    @staticmethod
    def _rebuild(response: Response, body: bytes) -> Response:
        new_response = Response(
            content=body,
            status_code=response.status_code,
            background=response.background,
        )
        # Keep repeated headers such as Set-Cookie and the exact Content-Type.
        raw_headers = [(k, v) for k, v in response.raw_headers if k.lower() != b"content-length"]
        raw_headers.append((b"content-length", str(len(body)).encode("latin-1")))
        new_response.raw_headers = raw_headers
        return new_response
