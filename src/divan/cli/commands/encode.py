"""
Record encoding from the command line.

    divan encode --field Name="John Doe" --field Age=10 --items Tags=a,b,c
"""

import argparse
import math
import sys

from divan.core.encoder import encode
from divan.core.errors import DivanError


def parse_value(text: str):
    try:
        return int(text)
    except ValueError:
        pass
    try:
        value = float(text)
    except ValueError:
        return text
    # nan/inf are not JSON numbers
    return value if math.isfinite(value) else text


def field_arg(text: str):
    key, sep, value = text.partition("=")
    if not sep or not key.strip():
        raise argparse.ArgumentTypeError(f"expected KEY=VALUE, got {text!r}")
    return key.strip(), parse_value(value)


def items_arg(text: str):
    key, sep, value = text.partition("=")
    if not sep or not key.strip():
        raise argparse.ArgumentTypeError(f"expected KEY=A,B,..., got {text!r}")
    items = [parse_value(v) for v in value.split(",")] if value else []
    return key.strip(), items


def add_record_arguments(parser):
    parser.add_argument("--field", dest="fields", action="append", type=field_arg, default=[],
                        metavar="KEY=VALUE", help="Scalar field (repeatable)")
    parser.add_argument("--items", dest="items", action="append", type=items_arg, default=[],
                        metavar="KEY=A,B,...", help="Array field (repeatable)")
    parser.add_argument("--escape", action="store_true", help="Escape quotes and control characters in strings")


def record_from_args(args) -> dict:
    # fields keep command-line order, arrays after scalars
    return dict(args.fields + args.items)


def add_subparser(subparsers):
    enc_p = subparsers.add_parser("encode", help="Encode a record as JSON")
    add_record_arguments(enc_p)
    enc_p.set_defaults(func=encode_record)


def encode_record(args):
    try:
        print(encode(record_from_args(args), escape=args.escape))
    except DivanError as e:
        print(f"✗ Error: {e}")
        sys.exit(1)
