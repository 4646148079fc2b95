"""
Database and document operations.

Each function is one request against the server and returns the raw JSON
text of the response.
"""

from typing import Any, Optional

import httpx

from divan.core.encoder import encode
from divan.core.errors import ValidationError
from divan.core.request import LogHook, Method, RequestSpec, execute

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 5984


def _call(
    method: Method,
    host: str,
    port: int,
    log: Optional[LogHook],
    transport: Optional[httpx.BaseTransport],
    **fields,
) -> str:
    spec = RequestSpec(method=method, host=host, port=port, **fields)
    return execute(spec, log=log, transport=transport)


def _require(name: str, value: Optional[str]) -> str:
    if not (value or "").strip():
        raise ValidationError(f"{name} is required")
    return value


# === Server ===

def server_info(host: str = DEFAULT_HOST, port: int = DEFAULT_PORT, log=None, transport=None) -> str:
    return _call(Method.GET, host, port, log, transport)


def list_dbs(host: str = DEFAULT_HOST, port: int = DEFAULT_PORT, log=None, transport=None) -> str:
    return _call(Method.GET, host, port, log, transport, database="_all_dbs")


# === Databases ===

def create_db(db: str, host: str = DEFAULT_HOST, port: int = DEFAULT_PORT, log=None, transport=None) -> str:
    return _call(Method.PUT, host, port, log, transport, database=_require("database", db))


def drop_db(db: str, host: str = DEFAULT_HOST, port: int = DEFAULT_PORT, log=None, transport=None) -> str:
    return _call(Method.DELETE, host, port, log, transport, database=_require("database", db))


# === Documents ===

def create_doc(
    db: str,
    doc: Any,
    host: str = DEFAULT_HOST,
    port: int = DEFAULT_PORT,
    log=None,
    transport=None,
) -> str:
    """Create a document from JSON text, or from a flat record via encode()."""
    body = doc if isinstance(doc, str) else encode(doc)
    return _call(Method.POST, host, port, log, transport, database=_require("database", db), body=body)


def get_doc(db: str, doc_id: str, host: str = DEFAULT_HOST, port: int = DEFAULT_PORT, log=None, transport=None) -> str:
    return _call(
        Method.GET, host, port, log, transport,
        database=_require("database", db),
        document=_require("document id", doc_id),
        include_full_document=True,
    )


def delete_doc(
    db: str,
    doc_id: str,
    rev: str,
    host: str = DEFAULT_HOST,
    port: int = DEFAULT_PORT,
    log=None,
    transport=None,
) -> str:
    return _call(
        Method.DELETE, host, port, log, transport,
        database=_require("database", db),
        document=_require("document id", doc_id),
        revision=_require("revision", rev),
    )


# === Attachments ===

def get_attachment(
    db: str,
    doc_id: str,
    name: str,
    rev: Optional[str] = None,
    host: str = DEFAULT_HOST,
    port: int = DEFAULT_PORT,
    log=None,
    transport=None,
) -> str:
    return _call(
        Method.GET, host, port, log, transport,
        database=_require("database", db),
        document=_require("document id", doc_id),
        attachment=_require("attachment name", name),
        revision=rev or "",
    )
