"""
Command line entry point.
Resolves the links of a CSV file (or stdin) and writes the frozen links as CSV.
"""

import argparse
import io
import os
import sys
from contextlib import ExitStack
from typing import Optional, List, TextIO

from .api.client import Client
from .api.models import UrlFreezerError
from .batch.csv_adapter import fetch_with_csv
from .utils.constants import DEFAULT_HOST, DEFAULT_TIMEOUT, ENV_USER_ID, ENV_HOST, ENV_TIMEOUT
from .utils.logging import setup_logging, get_logger

logger = get_logger(__name__)

# utf-8-sig drops a leading BOM, undecodable bytes surface per row
INPUT_ENCODING = {'encoding': 'utf-8-sig', 'errors': 'surrogateescape'}

def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog='urlfreezer',
        description='Client CLI for interacting with the urlfreezer service'
    )
    parser.add_argument(
        '-u', '--user-id',
        type=str,
        default=os.getenv(ENV_USER_ID),
        help=f'User identifier (default: from {ENV_USER_ID} env var)'
    )
    parser.add_argument(
        '-i', '--input-file',
        type=str,
        default=None,
        help='CSV file with page, link and label columns (default: stdin)'
    )
    parser.add_argument(
        '-o', '--output-file',
        type=str,
        default=None,
        help='CSV file to write resolved links to (default: stdout)'
    )
    parser.add_argument(
        '--host',
        type=str,
        default=os.getenv(ENV_HOST, DEFAULT_HOST),
        help=f'Service address (default: from {ENV_HOST} env var or {DEFAULT_HOST})'
    )
    parser.add_argument(
        '--timeout',
        type=float,
        default=os.getenv(ENV_TIMEOUT, str(DEFAULT_TIMEOUT)),
        help=f'Transport timeout in seconds (default: from {ENV_TIMEOUT} env var or {DEFAULT_TIMEOUT})'
    )
    parser.add_argument('--debug', action='store_true', help='Enable debug logging')
    parser.add_argument('--log-dir', type=str, default=None, help='Also write logs to this directory')

    args = parser.parse_args(argv)
    if not args.user_id:
        parser.error(f'a user id is required (--user-id or {ENV_USER_ID})')
    return args

def _stdin(stack: ExitStack) -> TextIO:
    """Re-open stdin with the input encoding, leaving the underlying buffer open."""
    buffer = getattr(sys.stdin, 'buffer', None)
    if buffer is None:
        return sys.stdin
    source = io.TextIOWrapper(buffer, newline='', **INPUT_ENCODING)
    stack.callback(source.detach)
    return source

def main(argv: Optional[List[str]] = None) -> int:
    """
    Run the CSV resolution and return the process exit status.
    
    Handles:
    - Argument parsing
    - Logging setup
    - Opening input and output streams
    - Reporting failures
    """
    args = parse_arguments(argv)
    setup_logging(debug=args.debug, log_dir=args.log_dir)

    try:
        with ExitStack() as stack:
            client = stack.enter_context(
                Client.connect_host(args.host, args.user_id, timeout=args.timeout)
            )
            if args.input_file:
                source = stack.enter_context(open(args.input_file, newline='', **INPUT_ENCODING))
            else:
                source = _stdin(stack)
            if args.output_file:
                sink = stack.enter_context(open(args.output_file, 'w', newline='', encoding='utf-8'))
            else:
                sink = sys.stdout

            written = fetch_with_csv(client, source, sink)
    except (UrlFreezerError, OSError) as e:
        logger.error(f"❌ {e}")
        return 1

    logger.debug(f"Done, {written} rows written")
    return 0

def run() -> None:
    sys.exit(main())

if __name__ == "__main__":
    run()
