# tests/test_cli.py
"""Tests for the divan command line."""

import json

import httpx
import pytest
from pytest_httpx import HTTPXMock

from divan.cli.main import main

ROOT = "http://127.0.0.1:5984"


def run(*argv):
    main(list(argv))


# === Server / databases ===

def test_info(httpx_mock: HTTPXMock, capsys):
    httpx_mock.add_response(url=f"{ROOT}/", json={"couchdb": "Welcome", "version": "3.3.3"})
    run("info")
    assert "Welcome" in capsys.readouterr().out


def test_db_list(httpx_mock: HTTPXMock, capsys):
    httpx_mock.add_response(url=f"{ROOT}/_all_dbs", json=["_users", "orders"])
    run("db", "list")
    assert capsys.readouterr().out.splitlines() == ["_users", "orders"]


def test_db_list_empty(httpx_mock: HTTPXMock, capsys):
    httpx_mock.add_response(url=f"{ROOT}/_all_dbs", json=[])
    run("db", "list")
    assert "No databases." in capsys.readouterr().out


def test_db_list_non_json_body(httpx_mock: HTTPXMock, capsys):
    httpx_mock.add_response(url=f"{ROOT}/_all_dbs", text="<html>hello</html>")
    with pytest.raises(SystemExit) as exc_info:
        run("db", "list")
    assert exc_info.value.code == 1
    assert "✗ Error" in capsys.readouterr().out


def test_info_non_json_body(httpx_mock: HTTPXMock, capsys):
    httpx_mock.add_response(url=f"{ROOT}/", text="It works!")
    with pytest.raises(SystemExit) as exc_info:
        run("info")
    assert exc_info.value.code == 1
    assert "✗ Error" in capsys.readouterr().out


def test_db_create_lowercases(httpx_mock: HTTPXMock, capsys):
    httpx_mock.add_response(method="PUT", url=f"{ROOT}/orders", status_code=201, json={"ok": True})
    run("db", "create", "Orders")
    assert "✓ Created database: orders" in capsys.readouterr().out


def test_db_drop(httpx_mock: HTTPXMock, capsys):
    httpx_mock.add_response(method="DELETE", url=f"{ROOT}/orders", json={"ok": True})
    run("db", "drop", "orders")
    assert "✓ Dropped database: orders" in capsys.readouterr().out


def test_host_and_port_flags(httpx_mock: HTTPXMock, capsys):
    httpx_mock.add_response(url="http://couch.local:6000/_all_dbs", json=["a"])
    run("--host", "couch.local", "--port", "6000", "db", "list")
    assert capsys.readouterr().out.strip() == "a"


def test_unreachable_server_exits(httpx_mock: HTTPXMock, capsys):
    httpx_mock.add_exception(httpx.ConnectError("Connection refused"))
    with pytest.raises(SystemExit) as exc_info:
        run("db", "list")
    assert exc_info.value.code == 1
    out = capsys.readouterr().out
    assert "✗ Error" in out
    assert "127.0.0.1:5984" in out


# === Documents ===

def test_doc_create_from_fields(httpx_mock: HTTPXMock, capsys):
    httpx_mock.add_response(method="POST", url=f"{ROOT}/people", status_code=201, json={"ok": True, "id": "p1", "rev": "1-a"})

    run("doc", "create", "people", "--field", "Name=John Doe", "--field", "Age=10", "--items", "Tags=a,b")

    sent = json.loads(httpx_mock.get_request().content)
    assert sent == {"Name": "John Doe", "Age": 10, "Tags": ["a", "b"]}
    out = capsys.readouterr().out
    assert "✓ Created: p1" in out
    assert "rev: 1-a" in out


def test_doc_create_from_json(httpx_mock: HTTPXMock, capsys):
    httpx_mock.add_response(method="POST", url=f"{ROOT}/people", status_code=201, json={"ok": True, "id": "p2", "rev": "1-b"})

    run("doc", "create", "people", "--json", '{"nested": {"ok": true}}')

    assert httpx_mock.get_request().content == b'{"nested": {"ok": true}}'


def test_doc_create_from_file(httpx_mock: HTTPXMock, capsys, tmp_path):
    path = tmp_path / "doc.json"
    path.write_text('{"a": 1}')
    httpx_mock.add_response(method="POST", url=f"{ROOT}/people", status_code=201, json={"ok": True, "id": "p3"})

    run("doc", "create", "people", "--file", str(path))

    assert httpx_mock.get_request().content == b'{"a": 1}'


def test_doc_create_needs_a_body(capsys):
    with pytest.raises(SystemExit) as exc_info:
        run("doc", "create", "people")
    assert exc_info.value.code == 1
    assert "Nothing to create" in capsys.readouterr().out


def test_doc_show(httpx_mock: HTTPXMock, capsys):
    httpx_mock.add_response(url=f"{ROOT}/people/p1?include_doc=true", json={"_id": "p1", "Name": "John Doe"})
    run("doc", "show", "people", "p1")
    assert "John Doe" in capsys.readouterr().out


def test_doc_delete(httpx_mock: HTTPXMock, capsys):
    httpx_mock.add_response(method="DELETE", url=f"{ROOT}/people/p1?rev=1-a", json={"ok": True})
    run("doc", "delete", "people", "p1", "1-a")
    assert "✓ Deleted: p1 (1-a)" in capsys.readouterr().out


def test_doc_show_not_found(httpx_mock: HTTPXMock, capsys):
    httpx_mock.add_response(
        url=f"{ROOT}/people/missing?include_doc=true",
        status_code=404,
        json={"error": "not_found", "reason": "missing"},
    )
    with pytest.raises(SystemExit):
        run("doc", "show", "people", "missing")
    out = capsys.readouterr().out
    assert "404" in out
    assert "lower-case" in out


def test_doc_attachment(httpx_mock: HTTPXMock, capsys):
    httpx_mock.add_response(url=f"{ROOT}/people/p1/notes.txt", text="some notes")
    run("doc", "attachment", "people", "p1", "notes.txt")
    assert capsys.readouterr().out.strip() == "some notes"


# === Encode ===

def test_encode(capsys):
    run("encode", "--field", "Name=John Doe", "--field", "Amount=10.1", "--items", "Nums=1,2,3")
    assert capsys.readouterr().out.strip() == '{\n"Name": "John Doe",\n"Amount": 10.1,\n"Nums": [1,2,3]\n}'


def test_encode_escape(capsys):
    run("encode", "--escape", "--field", 'Quote=say "hi"')
    assert json.loads(capsys.readouterr().out) == {"Quote": 'say "hi"'}


def test_encode_non_finite_stays_text(capsys):
    run("encode", "--field", "x=nan")
    assert json.loads(capsys.readouterr().out) == {"x": "nan"}


def test_bad_field_argument(capsys):
    with pytest.raises(SystemExit) as exc_info:
        run("encode", "--field", "novalue")
    assert exc_info.value.code == 2
