"""
divan CLI.
"""

import argparse
import logging

from rich.logging import RichHandler

from divan.cli.commands import db, doc, encode, server
from divan.core.client import DEFAULT_HOST, DEFAULT_PORT


def setup_logging(verbose: bool):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(show_path=False)],
    )


def main(argv=None):
    parser = argparse.ArgumentParser(prog="divan", description="Document database CLI")
    parser.add_argument("--host", default=DEFAULT_HOST, help=f"Server host (default: {DEFAULT_HOST})")
    parser.add_argument("--port", type=int, default=DEFAULT_PORT, help=f"Server port (default: {DEFAULT_PORT})")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log every request")
    subparsers = parser.add_subparsers(dest="command")

    server.add_subparser(subparsers)
    db.add_subparser(subparsers)
    doc.add_subparser(subparsers)
    encode.add_subparser(subparsers)

    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    if hasattr(args, "func"):
        args.func(args)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
