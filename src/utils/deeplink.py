"""
Partner deep links arrive in many shapes: protocol-relative, scheme-less,
double-slashed, or wrapped inside a redirector's query string. ``clean``
normalises them and ``to_safe_url`` guarantees an http(s) result that is
safe to hand to a browser.
"""
import re
import logging
from urllib.parse import unquote, urlsplit, urlunsplit

DEFAULT_SAFE_URL = "https://www.google.com"

# Query keys that commonly carry an inner link
INNER_URL_KEYS = ["url", "u", "target", "redirect", "redirect_uri", "r", "dest", "destination"]

_SCHEME_RE = re.compile(r"^([A-Za-z][A-Za-z0-9+.\-]*):(.*)$", re.DOTALL)
_PORT_RE = re.compile(r"^\d+(?:[/?#]|$)")

# Get logger
logger = logging.getLogger(__name__)


def _scheme(value):
    match = _SCHEME_RE.match(value)
    if not match:
        return None
    # "host:8080/path" is a host with a port, not a scheme
    if _PORT_RE.match(match.group(2)):
        return None
    return match.group(1).lower()


def _is_http(value):
    return _scheme(value) in ("http", "https")


def _query_items(query):
    items = []
    for part in query.split("&"):
        if not part:
            continue
        name, _, value = part.partition("=")
        items.append((unquote(name), unquote(value)))
    return items


def first_http_url_inside_query(url):
    try:
        query = urlsplit(url).query
    except ValueError:
        return None
    items = _query_items(query)
    if not items:
        return None

    for key in INNER_URL_KEYS:
        value = next((v for name, v in items if name == key), None)
        if value is None:
            continue
        if _is_http(value):
            return value
        # Doubly-encoded inner links
        decoded = unquote(value)
        if _is_http(decoded):
            return decoded
    return None


def clean(raw):
    s = (raw or "").strip()

    if s.startswith("//"):
        s = "https:" + s

    if _scheme(s) is None:
        s = "https://" + s

    try:
        parts = urlsplit(s)
        if parts.netloc and parts.path.startswith("//"):
            s = urlunsplit(parts._replace(path=parts.path[1:]))
    except ValueError:
        logger.debug(f"Could not split deep link {s!r}")

    extracted = first_http_url_inside_query(s)
    if extracted:
        s = extracted

    return s.replace(" ", "%20")


def to_safe_url(raw):
    cleaned = clean(raw)
    if validate_deeplink(cleaned):
        return cleaned
    logger.warning(f"Refusing non-http(s) deep link {raw!r}, using default")
    return DEFAULT_SAFE_URL


def validate_deeplink(url):
    if not url or not url.strip():
        return False
    if not _is_http(url):
        return False
    try:
        return bool(urlsplit(url).netloc)
    except ValueError:
        return False
