"""
Server commands.
"""

import sys
from rich import print_json

from divan.core import client
from divan.core.errors import DivanError


def add_subparser(subparsers):
    info_p = subparsers.add_parser("info", help="Show server information")
    info_p.set_defaults(func=server_info)


def server_info(args):
    try:
        print_json(client.server_info(host=args.host, port=args.port))
    except (DivanError, ValueError) as e:
        print(f"✗ Error: {e}")
        sys.exit(1)
