"""Reusable HTTP runtime for generated API clients."""

import email.utils
import json
import logging
import random
import re
import time
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable
from urllib.parse import quote

import requests

logger = logging.getLogger(__name__)

RETRYABLE_STATUSES = frozenset({429, 500, 502, 503, 504})
NO_BODY_METHODS = frozenset({"GET", "HEAD"})
MUTATING_METHODS = frozenset({"POST", "PUT", "PATCH", "DELETE"})
IDEMPOTENCY_HEADER = "Idempotency-Key"
JITTER_RATIO = 0.1

_PLACEHOLDER_RE = re.compile(r"\{([^}]+)\}")
_DELTA_SECONDS_RE = re.compile(r"^\d+(\.\d+)?$")


class MissingPathParameterError(ValueError):
    """A path placeholder had no value at call time."""


@dataclass
class ApiResult:
    """Outcome of one logical call, after retries."""

    ok: bool
    status: int | None
    data: Any = None
    error: Any = None
    headers: dict = field(default_factory=dict)
    attempts: int = 1


class ApiError(Exception):
    """A failed call, raised only when the caller opts in."""

    def __init__(self, result: ApiResult):
        status = result.status if result.status is not None else "network"
        super().__init__(f"request failed ({status}): {result.error}")
        self.result = result


def require_param(name: str, value: Any) -> Any:
    if value is None or str(value) == "":
        raise MissingPathParameterError(f"path parameter '{name}' is required")
    return value


def render_path(template: str, path_params: dict | None = None) -> str:
    """Substitute ``{name}`` placeholders; every placeholder must have a value."""
    params = path_params or {}
    missing = [
        name for name in _PLACEHOLDER_RE.findall(template)
        if params.get(name) is None or str(params.get(name)) == ""
    ]
    if missing:
        raise MissingPathParameterError(f"missing path parameters: {', '.join(missing)}")
    return _PLACEHOLDER_RE.sub(lambda m: quote(str(params[m.group(1)]), safe=""), template)


def encode_query(query: dict | None) -> list[tuple[str, str]]:
    """Flatten query values: lists repeat the key, dicts become one JSON value."""
    pairs = []
    for key, value in (query or {}).items():
        if value is None:
            continue
        if isinstance(value, (list, tuple)):
            pairs.extend((key, _query_value(v)) for v in value)
        else:
            pairs.append((key, _query_value(value)))
    return pairs


def _query_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (dict, list, tuple)):
        return json.dumps(value, separators=(",", ":"))
    return str(value)


def parse_retry_after(value: str | None, now: datetime | None = None) -> float | None:
    """Seconds to wait from a Retry-After header (delta-seconds or HTTP date)."""
    if not value or not value.strip():
        return None
    value = value.strip()
    if _DELTA_SECONDS_RE.match(value):
        return float(value)
    try:
        when = email.utils.parsedate_to_datetime(value)
    except (TypeError, ValueError):
        return None
    if when is None:
        return None
    if when.tzinfo is None:
        when = when.replace(tzinfo=timezone.utc)
    now = now or datetime.now(timezone.utc)
    return max(0.0, (when - now).total_seconds())


class ApiClient:
    """HTTP client shared by every generated operation."""

    def __init__(
        self,
        base_url: str,
        headers: dict | None = None,
        timeout: float = 30.0,
        max_retries: int = 3,
        base_delay: float = 0.5,
        max_delay: float = 30.0,
        session: requests.Session | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.base_url = base_url.rstrip("/")
        self.headers = dict(headers or {})
        self.timeout = timeout
        self.max_retries = max_retries
        self.base_delay = base_delay
        self.max_delay = max_delay
        self.session = session or requests.Session()
        self.sleep = sleep

    def backoff_delay(self, attempt: int, retry_after: float | None = None) -> float:
        """Delay before retry number ``attempt + 1``; Retry-After wins when given.

        Either way the delay never exceeds ``max_delay``.
        """
        if retry_after is not None:
            return min(retry_after, self.max_delay)
        delay = self.base_delay * (2 ** attempt) + random.uniform(0, self.base_delay * JITTER_RATIO)
        return min(delay, self.max_delay)

    def request(
        self,
        method: str,
        path: str,
        path_params: dict | None = None,
        query: dict | None = None,
        headers: dict | None = None,
        body: Any = None,
        raise_on_error: bool = False,
    ) -> ApiResult:
        method = method.upper()
        url = self.base_url + render_path(path, path_params)
        request_headers = {
            k: str(v) for k, v in {**self.headers, **(headers or {})}.items() if v is not None
        }
        present = {k.lower() for k in request_headers}

        data = None
        if body is not None:
            data = body if isinstance(body, (str, bytes)) else json.dumps(body)
            if method not in NO_BODY_METHODS and "content-type" not in present:
                request_headers["Content-Type"] = "application/json"
        if method in MUTATING_METHODS and IDEMPOTENCY_HEADER.lower() not in present:
            request_headers[IDEMPOTENCY_HEADER] = str(uuid.uuid4())

        params = encode_query(query)
        attempt = 0
        while True:
            result, retryable, retry_after = self._attempt(method, url, params, request_headers, data, attempt)
            if result.ok or not retryable or attempt >= self.max_retries:
                break
            delay = self.backoff_delay(attempt, retry_after)
            logger.info(
                "%s %s failed (%s), retry %d/%d in %.2fs",
                method, url, result.status or result.error, attempt + 1, self.max_retries, delay,
            )
            self.sleep(delay)
            attempt += 1

        if not result.ok and raise_on_error:
            raise ApiError(result)
        return result

    def _attempt(self, method, url, params, headers, data, attempt):
        try:
            response = self.session.request(
                method, url, params=params, headers=headers, data=data, timeout=self.timeout
            )
        except (requests.Timeout, requests.ConnectionError) as e:
            error = str(e) or e.__class__.__name__
            return ApiResult(ok=False, status=None, error=error, attempts=attempt + 1), True, None
        except requests.RequestException as e:
            error = str(e) or e.__class__.__name__
            return ApiResult(ok=False, status=None, error=error, attempts=attempt + 1), False, None

        status = response.status_code
        payload = _response_payload(response)
        ok = 200 <= status < 300
        result = ApiResult(
            ok=ok,
            status=status,
            data=payload if ok else None,
            error=None if ok else (payload if payload not in (None, "") else response.reason),
            headers=dict(response.headers),
            attempts=attempt + 1,
        )
        retry_after = parse_retry_after(response.headers.get("Retry-After"))
        return result, status in RETRYABLE_STATUSES, retry_after


def _response_payload(response: requests.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


def pick_headers(names: tuple, values: dict | None) -> dict:
    """Values for an operation's declared headers that the caller supplied."""
    values = values or {}
    return {name: values[name] for name in names if values.get(name) is not None}
