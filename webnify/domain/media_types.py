import re
from typing import Dict, Tuple

from webnify.domain.models import MinifySettings

HTML_CONTENT_TYPE = "text/html"
CSS_CONTENT_TYPE = "text/css"
SVG_CONTENT_TYPE = "image/svg+xml"

JS_CONTENT_TYPE_RE = re.compile(r"^(application|text)/(x-)?(java|ecma)script$")
JSON_CONTENT_TYPE_RE = re.compile(r"^(application|text)/((.+\+)?json|json-seq|ld\+json)$")
XML_CONTENT_TYPE_RE = re.compile(r"^(application|text)/(x-)?(xml|atom\+xml|rss\+xml)$")

# RFC 7230 token characters
_TOKEN_RE = re.compile(r"^[!#$%&'*+\-.^_`|~0-9A-Za-z]+$")
# key=value up to the next unquoted ';'
_PARAM_RE = re.compile(r'([^\s=;]+)\s*=\s*("(?:[^"\\]|\\.)*"|[^;]*?)\s*(?:;|$)')


class MediaTypeError(ValueError):
    """Raised when a Content-Type header value cannot be parsed."""


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] == '"':
        return re.sub(r"\\(.)", r"\1", value[1:-1])
    return value


def parse_media_type(value: str) -> Tuple[str, Dict[str, str]]:
    """
    Split a Content-Type value into a lower-cased media type and its parameters.

    ``"text/HTML; Charset=UTF-8"`` gives ``("text/html", {"charset": "UTF-8"})``.
    Parameter keys are lower-cased, values are kept as written (minus quotes).
    """
    if not value or not value.strip():
        raise MediaTypeError("empty media type")

    head, _, rest = value.partition(";")
    media_type = head.strip().lower()
    main_type, sep, sub_type = media_type.partition("/")
    if not sep or not _TOKEN_RE.match(main_type) or not _TOKEN_RE.match(sub_type):
        raise MediaTypeError(f"invalid media type {head.strip()!r}")

    params: Dict[str, str] = {}
    pos = 0
    while pos < len(rest):
        if rest[pos] in " \t;":
            pos += 1
            continue
        match = _PARAM_RE.match(rest, pos)
        if not match or not _TOKEN_RE.match(match.group(1)):
            raise MediaTypeError(f"invalid media type parameter {rest[pos:].strip()!r}")
        params[match.group(1).lower()] = _unquote(match.group(2))
        pos = match.end()

    return media_type, params


def should_minify(media_type: str, settings: MinifySettings) -> bool:
    """
    Return True when ``media_type`` belongs to a family enabled in ``settings``.
    """
    if settings.minify_html and media_type == HTML_CONTENT_TYPE:
        return True
    if settings.minify_css and media_type == CSS_CONTENT_TYPE:
        return True
    if settings.minify_svg and media_type == SVG_CONTENT_TYPE:
        return True
    if settings.minify_js and JS_CONTENT_TYPE_RE.match(media_type):
        return True
    if settings.minify_json and JSON_CONTENT_TYPE_RE.match(media_type):
        return True
    if settings.minify_xml and XML_CONTENT_TYPE_RE.match(media_type):
        return True
    return False
