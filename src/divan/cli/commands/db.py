"""
Database commands.
"""

import json
import sys

from divan.core import client
from divan.core.errors import DivanError


def add_subparser(subparsers):
    parser = subparsers.add_parser("db", help="Database management")
    db_sub = parser.add_subparsers(dest="db_command", required=True)

    # list
    list_p = db_sub.add_parser("list", help="List all databases")
    list_p.set_defaults(func=db_list)

    # create
    create_p = db_sub.add_parser("create", help="Create a database")
    create_p.add_argument("name", help="Database name")
    create_p.set_defaults(func=db_create)

    # drop
    drop_p = db_sub.add_parser("drop", help="Drop a database")
    drop_p.add_argument("name", help="Database name")
    drop_p.set_defaults(func=db_drop)


def db_list(args):
    try:
        names = json.loads(client.list_dbs(host=args.host, port=args.port))
        if not names:
            print("No databases.")
            return
        for name in names:
            print(name)
    except (DivanError, ValueError) as e:
        print(f"✗ Error: {e}")
        sys.exit(1)


def db_create(args):
    try:
        client.create_db(args.name, host=args.host, port=args.port)
        print(f"✓ Created database: {args.name.strip().lower()}")
    except DivanError as e:
        print(f"✗ Error: {e}")
        sys.exit(1)


def db_drop(args):
    try:
        client.drop_db(args.name, host=args.host, port=args.port)
        print(f"✓ Dropped database: {args.name.strip().lower()}")
    except DivanError as e:
        print(f"✗ Error: {e}")
        sys.exit(1)
