"""
Document commands.
"""

import json
import sys
from pathlib import Path
from rich import print_json

from divan.cli.commands.encode import add_record_arguments, record_from_args
from divan.core import client
from divan.core.encoder import encode
from divan.core.errors import DivanError


def add_subparser(subparsers):
    parser = subparsers.add_parser("doc", help="Document management")
    doc_sub = parser.add_subparsers(dest="doc_command", required=True)

    # create
    create_p = doc_sub.add_parser("create", help="Create a document")
    create_p.add_argument("db", help="Database name")
    source = create_p.add_mutually_exclusive_group()
    source.add_argument("--json", dest="json_text", help="Document as JSON text")
    source.add_argument("--file", help="Path to a JSON document")
    add_record_arguments(create_p)
    create_p.set_defaults(func=doc_create)

    # show
    show_p = doc_sub.add_parser("show", help="Show a document")
    show_p.add_argument("db", help="Database name")
    show_p.add_argument("doc_id", help="Document ID")
    show_p.set_defaults(func=doc_show)

    # delete
    delete_p = doc_sub.add_parser("delete", help="Delete a document revision")
    delete_p.add_argument("db", help="Database name")
    delete_p.add_argument("doc_id", help="Document ID")
    delete_p.add_argument("rev", help="Revision to delete")
    delete_p.set_defaults(func=doc_delete)

    # attachment
    att_p = doc_sub.add_parser("attachment", help="Fetch a document attachment")
    att_p.add_argument("db", help="Database name")
    att_p.add_argument("doc_id", help="Document ID")
    att_p.add_argument("name", help="Attachment name")
    att_p.add_argument("--rev", help="Document revision")
    att_p.set_defaults(func=doc_attachment)


def _body(args) -> str | None:
    if args.json_text:
        return args.json_text
    if args.file:
        path = Path(args.file)
        if not path.exists():
            print(f"✗ File not found: {args.file}")
            sys.exit(1)
        return path.read_text()
    record = record_from_args(args)
    if record:
        return encode(record, escape=args.escape)
    return None


def doc_create(args):
    body = _body(args)
    if body is None:
        print("✗ Nothing to create: pass --json, --file, or --field/--items")
        sys.exit(1)

    try:
        result = json.loads(client.create_doc(args.db, body, host=args.host, port=args.port))
        print(f"✓ Created: {result.get('id')}")
        if result.get("rev"):
            print(f"  rev: {result['rev']}")
    except (DivanError, ValueError) as e:
        print(f"✗ Error: {e}")
        sys.exit(1)


def doc_show(args):
    try:
        print_json(client.get_doc(args.db, args.doc_id, host=args.host, port=args.port))
    except (DivanError, ValueError) as e:
        print(f"✗ Error: {e}")
        sys.exit(1)


def doc_delete(args):
    try:
        client.delete_doc(args.db, args.doc_id, args.rev, host=args.host, port=args.port)
        print(f"✓ Deleted: {args.doc_id} ({args.rev})")
    except DivanError as e:
        print(f"✗ Error: {e}")
        sys.exit(1)


def doc_attachment(args):
    try:
        print(client.get_attachment(args.db, args.doc_id, args.name, rev=args.rev, host=args.host, port=args.port))
    except DivanError as e:
        print(f"✗ Error: {e}")
        sys.exit(1)
