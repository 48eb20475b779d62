"""
Media-type aware minification service.

A ``Minifier`` maps media types to text minification functions, either by
exact media type or by regular expression, and wraps the decode/minify/encode
cycle so callers only deal with bytes. ``create_minifier`` builds one from
``MinifySettings``, registering only the enabled content families:

- HTML via ``minify-html``
- CSS via ``rcssmin``
- JavaScript via ``rjsmin``
- JSON validated with the ``json`` module, then stripped of whitespace
- XML and SVG via ``lxml``
"""
from __future__ import annotations

import json
import logging
import re
from typing import Callable, Dict, List, Optional, Pattern, Tuple, Union

import minify_html
import rcssmin
import rjsmin
from lxml import etree

from webnify.domain.media_types import (
    CSS_CONTENT_TYPE,
    HTML_CONTENT_TYPE,
    JS_CONTENT_TYPE_RE,
    JSON_CONTENT_TYPE_RE,
    SVG_CONTENT_TYPE,
    XML_CONTENT_TYPE_RE,
)
from webnify.domain.models import MinifySettings

logger = logging.getLogger(__name__)

MinifyFunc = Callable[[str], str]

DEFAULT_CHARSET = "utf-8"
JSON_SEQ_SEPARATOR = "\x1e"

# whitespace, comments and processing instructions ahead of the DOCTYPE or root
_XML_PROLOG_ITEM_RE = re.compile(r"\s+|<!--.*?-->|<\?.*?\?>", re.S)
# a string token, or a run of JSON whitespace
_JSON_TOKEN_RE = re.compile(r'("(?:[^"\\]|\\.)*")|[ \t\n\r]+')


class MinifyError(Exception):
    """Raised when a body cannot be minified."""


class Minifier:
    """
    Registry of minification functions keyed by media type.

    Exact registrations take precedence over patterns; patterns are tried in
    the order they were added.
    """

    def __init__(self) -> None:
        self._exact: Dict[str, MinifyFunc] = {}
        self._patterns: List[Tuple[Pattern[str], MinifyFunc]] = []

    def add(self, media_type: str, func: MinifyFunc) -> None:
        self._exact[media_type.lower()] = func

    def add_regexp(self, pattern: Union[str, Pattern[str]], func: MinifyFunc) -> None:
        if isinstance(pattern, str):
            pattern = re.compile(pattern)
        self._patterns.append((pattern, func))

    def match(self, media_type: str) -> Optional[MinifyFunc]:
        func = self._exact.get(media_type)
        if func is not None:
            return func
        for pattern, candidate in self._patterns:
            if pattern.match(media_type):
                return candidate
        return None

    def minify_text(self, media_type: str, text: str) -> str:
        func = self.match(media_type)
        if func is None:
            raise MinifyError(f"no minifier registered for {media_type!r}")
        try:
            return func(text)
        except MinifyError:
            raise
        except Exception as e:
            raise MinifyError(f"failed to minify {media_type!r}: {e}") from e

    def minify(self, media_type: str, data: bytes, charset: Optional[str] = None) -> bytes:
        """
        Minify ``data`` of the given media type and return the new bytes.

        The body is decoded with ``charset`` (UTF-8 when omitted) and encoded
        back with the same charset.
        """
        encoding = charset or DEFAULT_CHARSET
        try:
            text = data.decode(encoding)
        except (LookupError, UnicodeDecodeError) as e:
            raise MinifyError(f"cannot decode body as {encoding!r}: {e}") from e

        result = self.minify_text(media_type, text)

        try:
            return result.encode(encoding)
        except UnicodeEncodeError as e:
            raise MinifyError(f"cannot encode minified body as {encoding!r}: {e}") from e


# ---------------------------------------------------------------------------
# Content family minifiers
# ---------------------------------------------------------------------------


def make_html_minifier(settings: MinifySettings) -> MinifyFunc:
    def _minify(text: str) -> str:
        return minify_html.minify(
            text,
            keep_closing_tags=settings.html_keep_end_tags,
            keep_html_and_head_opening_tags=settings.html_keep_document_tags,
            keep_comments=settings.html_keep_comments,
            minify_css=settings.html_minify_inline,
            minify_js=settings.html_minify_inline,
        )

    return _minify


def make_css_minifier(settings: MinifySettings) -> MinifyFunc:
    def _minify(text: str) -> str:
        return rcssmin.cssmin(text, keep_bang_comments=settings.keep_bang_comments)

    return _minify


def make_js_minifier(settings: MinifySettings) -> MinifyFunc:
    def _minify(text: str) -> str:
        return rjsmin.jsmin(text, keep_bang_comments=settings.keep_bang_comments)

    return _minify


def _reject_constant(name: str):
    raise ValueError(f"{name} is not valid JSON")


def _compact_json(text: str) -> str:
    # Validate only; the output is the input with whitespace outside strings
    # removed, so number text and duplicate keys survive as written.
    json.loads(text, parse_constant=_reject_constant)
    return _JSON_TOKEN_RE.sub(lambda m: m.group(1) or "", text)


def minify_json(text: str) -> str:
    """
    Remove insignificant whitespace from a JSON document.

    Values are never re-encoded. JSON text sequences (RFC 7464) are
    minified record by record.
    """
    if JSON_SEQ_SEPARATOR in text:
        records = [r for r in text.split(JSON_SEQ_SEPARATOR) if r.strip()]
        return "".join(f"{JSON_SEQ_SEPARATOR}{_compact_json(r)}\n" for r in records)
    return _compact_json(text)


def minify_xml(text: str) -> str:
    """
    Drop comments and whitespace-only text between elements.

    The DOCTYPE (internal subset included) and processing instructions
    around the root element are kept. Entity expansion and network access
    are disabled.
    """
    # The declaration and leading instructions are copied through verbatim:
    # lxml refuses str input with an encoding declaration, and drops
    # instructions that precede the DOCTYPE when serialising.
    prolog = []
    pos = 0
    while True:
        match = _XML_PROLOG_ITEM_RE.match(text, pos)
        if not match:
            break
        if match.group(0).startswith("<?"):
            prolog.append(match.group(0))
        pos = match.end()
    text = text[pos:]

    parser = etree.XMLParser(
        remove_blank_text=True,
        remove_comments=True,
        resolve_entities=False,
        no_network=True,
    )
    try:
        root = etree.fromstring(text, parser)
    except etree.XMLSyntaxError as e:
        raise MinifyError(f"invalid XML: {e}") from e
    document = etree.tostring(root.getroottree(), encoding="unicode")
    return "".join(prolog) + document.strip()


def create_minifier(settings: MinifySettings) -> Minifier:
    """
    Build a Minifier with a function registered for each enabled content family.
    """
    minifier = Minifier()

    if settings.minify_html:
        minifier.add(HTML_CONTENT_TYPE, make_html_minifier(settings))
    if settings.minify_css:
        minifier.add(CSS_CONTENT_TYPE, make_css_minifier(settings))
    if settings.minify_js:
        minifier.add_regexp(JS_CONTENT_TYPE_RE, make_js_minifier(settings))
    if settings.minify_json:
        minifier.add_regexp(JSON_CONTENT_TYPE_RE, minify_json)
    if settings.minify_xml:
        minifier.add_regexp(XML_CONTENT_TYPE_RE, minify_xml)
    if settings.minify_svg:
        minifier.add(SVG_CONTENT_TYPE, minify_xml)

    logger.debug(
        f"Created minifier (html={settings.minify_html}, css={settings.minify_css}, "
        f"js={settings.minify_js}, json={settings.minify_json}, "
        f"xml={settings.minify_xml}, svg={settings.minify_svg})"
    )
    return minifier
