"""Header and URL parameter extraction shared by every generator."""

import json
import logging
import re
from urllib.parse import unquote

from api_spec_kit.model.base import RequestSpec

logger = logging.getLogger(__name__)

PATH_PARAM_RE = re.compile(r"\{([^}]+)\}")


def parse_json_example(text: str, default=None):
    """Parse a free-text JSON example.

    Returns ``default`` when the text is blank, malformed or nested too deeply
    to decode. Pass a sentinel to tell an absent example from a JSON ``null``.
    """
    if not text or not text.strip():
        return default
    try:
        return json.loads(text)
    except (ValueError, RecursionError) as e:
        logger.debug("Ignoring unusable JSON example: %s", e)
        return default


def parse_freeform_headers(text: str) -> dict:
    """Parse the free-text headers blob; anything but a JSON object counts as empty."""
    data = parse_json_example(text)
    if not isinstance(data, dict):
        return {}
    return data


def request_headers(request: RequestSpec) -> list[str]:
    """Selected standard headers followed by free-form header keys, de-duplicated."""
    names = [*request.std_headers, *parse_freeform_headers(request.headers).keys()]
    return list(dict.fromkeys(str(n) for n in names))


def aggregate_headers(requests: list[RequestSpec]) -> list[str]:
    """Union of every request's headers, in first-seen order."""
    seen: dict[str, None] = {}
    for request in requests:
        for name in request_headers(request):
            seen.setdefault(name, None)
    return list(seen)


def split_url(url: str) -> tuple[str, str]:
    """Split a URL template into (path, query string)."""
    path, _, query = url.partition("?")
    return path, query


def path_params(url: str) -> list[str]:
    """Placeholder names of ``{name}`` tokens, in URL order."""
    return PATH_PARAM_RE.findall(url)


def query_params(url: str) -> list[tuple[str, str]]:
    """(key, value) pairs of the URL's literal query string."""
    _, query = split_url(url)
    pairs = []
    for part in query.split("&"):
        if not part:
            continue
        key, _, value = part.partition("=")
        if not key:
            continue
        pairs.append((unquote(key), unquote(value)))
    return pairs
