# src/divan/core/request.py
"""
Request construction and dispatch.

One RequestSpec becomes one HTTP exchange:

    spec -> validate -> build_url -> httpx request -> response text
                                                   -> ConnectionError | ProtocolError
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

import httpx

from divan.core.errors import ConnectionError, ProtocolError, ValidationError

logger = logging.getLogger(__name__)

USER_AGENT = "divan/0.1.0"
DEFAULT_TIMEOUT = 30.0

LogHook = Callable[[str], None]


class Method(str, Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"


@dataclass
class RequestSpec:
    method: Method | str
    host: str
    port: int
    database: str = ""
    document: str = ""
    attachment: str = ""
    revision: str = ""
    include_full_document: bool = False
    body: Optional[str] = None
    timeout: float = DEFAULT_TIMEOUT


def _clean(value: Optional[str]) -> str:
    return (value or "").strip()


def _method(value: Method | str) -> Method:
    if isinstance(value, Method):
        return value
    try:
        return Method(str(value).strip().upper())
    except ValueError:
        raise ValidationError(f"Unsupported method: {value!r}") from None


def validate(spec: RequestSpec) -> Method:
    """Check the invariants of a spec. Returns the normalized method."""
    method = _method(spec.method)
    if not _clean(spec.host):
        raise ValidationError("host is required")
    if isinstance(spec.port, bool) or not isinstance(spec.port, int) or not 0 < spec.port < 65536:
        raise ValidationError(f"port out of range: {spec.port!r}")
    if _clean(spec.attachment) and not _clean(spec.document):
        raise ValidationError("attachment without document")
    return method


# === Query string ===

def query_parameters(revision: Optional[str] = None, include_full_document: bool = False) -> dict[str, str]:
    params = {}
    rev = _clean(revision)
    if rev:
        params["rev"] = rev
    if include_full_document:
        params["include_doc"] = "true"
    return params


def serialize_query(params: dict[str, str]) -> str:
    if not params:
        return ""
    return "?" + "&".join(f"{k}={v}" for k, v in params.items())


# === URL ===

def build_url(spec: RequestSpec) -> str:
    validate(spec)

    database = _clean(spec.database).lower()
    url = f"http://{_clean(spec.host)}:{spec.port}/{database}"

    document = _clean(spec.document)
    if document:
        url += f"/{document}"

    attachment = _clean(spec.attachment)
    if attachment:
        url += f"/{attachment}"

    return url + serialize_query(query_parameters(spec.revision, spec.include_full_document))


# === Dispatch ===

def execute(
    spec: RequestSpec,
    *,
    log: Optional[LogHook] = None,
    transport: Optional[httpx.BaseTransport] = None,
) -> str:
    """
    Send the request described by spec and return the response body verbatim.

    Raises ValidationError before any I/O, ConnectionError when the server
    cannot be reached, ProtocolError for any non-2xx (or unreadable) answer.
    """
    method = validate(spec)
    url = build_url(spec)
    emit = log or logger.debug

    headers = {"User-Agent": USER_AGENT, "Accept": "application/json"}
    content = None
    if method is Method.POST and spec.body is not None:
        content = spec.body.encode("utf-8")
        headers["Content-Type"] = "application/json"

    emit(f"{method.value} {url}")
    if content is not None:
        emit(f"body: {spec.body}")

    try:
        with httpx.Client(transport=transport, timeout=spec.timeout) as client:
            response = client.request(method.value, url, headers=headers, content=content)
    except httpx.InvalidURL as e:
        raise ValidationError(f"Invalid URL {url!r}: {e}") from e
    except (httpx.ProtocolError, httpx.DecodingError, httpx.TooManyRedirects) as e:
        raise ProtocolError(method.value, url, None, body=str(e)) from e
    except httpx.TransportError as e:
        connected = not isinstance(e, (httpx.ConnectError, httpx.ConnectTimeout))
        raise ConnectionError(method.value, url, _clean(spec.host), spec.port, str(e), connected=connected) from e
    except httpx.RequestError as e:
        raise ProtocolError(method.value, url, None, body=str(e)) from e

    if not response.is_success:
        raise ProtocolError(method.value, url, response.status_code, response.reason_phrase, response.text)

    return response.text
