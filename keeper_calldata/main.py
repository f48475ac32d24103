#!/usr/bin/env python3
import argparse
import json
import logging
import sys
from typing import List, Optional

from .utils.config_manager import LOG_LEVELS, load_settings
from .utils.contract_utils import CalldataEncoder, parse_call_arguments
from .utils.exceptions import CalldataError, ConfigurationError
from .utils.logging import setup_logging

LOG = logging.getLogger(__name__)

ENCODE_ERROR_PREFIX = "Error encoding function call:"
DECODE_ERROR_PREFIX = "Error decoding function call:"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="keeper-calldata",
        description="Encode a price-feed contract call into ABI calldata"
    )
    parser.add_argument("function_name", nargs="?",
                       help="Function to call, e.g. updatePrice")
    parser.add_argument("args", nargs="?",
                       help="JSON array of positional arguments, e.g. '[123]'")
    parser.add_argument("--decode", metavar="CALLDATA", default=None,
                       help="Decode calldata instead of encoding")
    parser.add_argument("--list-functions", action="store_true",
                       help="List function selectors and signatures")
    parser.add_argument("--log-level", default=None,
                       choices=LOG_LEVELS,
                       help="Logging level (default: $KEEPER_CALLDATA_LOG_LEVEL or WARNING)")
    parser.add_argument("--log-file", default=None,
                       help="Path to log file")
    return parser


def run_encode(encoder: CalldataEncoder, function_name: str, raw_args: str) -> int:
    try:
        args = parse_call_arguments(raw_args)
        calldata = encoder.encode_function_call(function_name, args)
    except CalldataError as e:
        LOG.debug(f"Encoding {function_name} failed: {e}", exc_info=True)
        print(f"{ENCODE_ERROR_PREFIX} {e.message}", file=sys.stderr)
        return 1

    print(calldata)
    return 0


def run_decode(encoder: CalldataEncoder, calldata: str) -> int:
    try:
        decoded = encoder.decode_function_call(calldata)
    except CalldataError as e:
        LOG.debug(f"Decoding {calldata} failed: {e}", exc_info=True)
        print(f"{DECODE_ERROR_PREFIX} {e.message}", file=sys.stderr)
        return 1

    print(json.dumps(decoded.to_dict()))
    return 0


def run_list(encoder: CalldataEncoder) -> int:
    for selector, signature in encoder.list_functions():
        print(f"{selector} {signature}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main execution flow"""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = load_settings(log_level=args.log_level, log_file=args.log_file)
    except ConfigurationError as e:
        parser.error(e.message)

    setup_logging(settings.log_level, settings.log_file)

    if args.decode is None and not args.list_functions:
        if args.function_name is None or args.args is None:
            parser.error("function_name and args are required when encoding")

    try:
        encoder = CalldataEncoder()
    except CalldataError as e:
        LOG.error(f"Failed to load contract interface: {e}")
        print(f"{ENCODE_ERROR_PREFIX} {e.message}", file=sys.stderr)
        return 1

    if args.list_functions:
        return run_list(encoder)
    if args.decode is not None:
        return run_decode(encoder, args.decode)
    return run_encode(encoder, args.function_name, args.args)


if __name__ == "__main__":
    sys.exit(main())
