#!/usr/bin/env python3
"""
Masked Email CLI

Manage Fastmail masked email addresses.
Requires FASTMAIL_ACCOUNT_ID and FASTMAIL_API_KEY environment variables
(or a .env file in the working directory).

Usage:
    # Create or get alias for a website
    masked-fastmail example.com

    # Enable / disable / delete an existing alias
    masked-fastmail --enable user.1234@fastmail.com
    masked-fastmail --disable user.1234@fastmail.com
    masked-fastmail --delete user.1234@fastmail.com
"""

import argparse
import logging
import sys

from dotenv import load_dotenv

import masked_fastmail
from masked_fastmail.actions import AliasAction, run
from masked_fastmail.exceptions import MaskedFastmailError
from masked_fastmail.providers.fastmail import FastmailClient

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False):
    """Configure logging; warnings only unless verbose."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    else:
        logging.basicConfig(level=logging.WARNING, format="%(levelname)s: %(message)s")
    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.DEBUG if verbose else logging.WARNING)


def version_text() -> str:
    return (
        f"Version:\t{masked_fastmail.__version__}\n"
        f"Commit:\t\t{masked_fastmail.__commit__}\n"
        f"Build date:\t{masked_fastmail.__build_date__}"
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="masked-fastmail",
        usage="%(prog)s [flags] <url>\n       %(prog)s [--enable | --disable | --delete] <alias>",
        description=(
            "A command-line tool to manage Fastmail.com masked email addresses.\n"
            "Requires FASTMAIL_ACCOUNT_ID and FASTMAIL_API_KEY environment variables to be set."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Create or get alias for a website:
  %(prog)s example.com

  # Enable an existing alias:
  %(prog)s --enable user.1234@fastmail.com
        """
    )

    # Positional arguments (count is checked after --version)
    parser.add_argument(
        "identifiers",
        nargs="*",
        metavar="url|alias",
        help="Website domain/URL, or an existing alias address when changing state",
    )

    parser.add_argument(
        "--version", "-v",
        action="store_true",
        help="show version information",
    )

    # State changes; the group stores a single AliasAction
    state_group = parser.add_mutually_exclusive_group()
    state_group.add_argument(
        "--enable", "-e",
        action="store_const",
        dest="action",
        const=AliasAction.ENABLE,
        help="enable alias",
    )
    state_group.add_argument(
        "--disable", "-d",
        action="store_const",
        dest="action",
        const=AliasAction.DISABLE,
        help="disable alias (send to trash)",
    )
    state_group.add_argument(
        "--delete",
        action="store_const",
        dest="action",
        const=AliasAction.DELETE,
        help="delete alias (bounce messages)",
    )
    parser.set_defaults(action=AliasAction.NONE)

    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    return parser


def main(argv=None):
    """Entry point; exits the process with the command's status."""
    sys.exit(run_cli(argv))


def run_cli(argv=None) -> int:
    """Parse arguments, run the command and return the exit code."""
    load_dotenv()

    parser = build_parser()
    args = parser.parse_args(argv)

    if args.version:
        print(version_text())
        return 0

    setup_logging(verbose=args.verbose)

    if len(args.identifiers) != 1:
        print(
            f"Error: exactly one URL or alias must be specified\n\n{parser.format_usage()}",
            file=sys.stderr,
        )
        return 1

    identifier = args.identifiers[0]

    logger.debug(f"Identifier: {identifier!r}, action: {args.action.value}")

    try:
        client = FastmailClient()
    except MaskedFastmailError as e:
        print(f"Error: failed to initialize client: {e}", file=sys.stderr)
        return 1

    try:
        with client:
            run(client, identifier, args.action)
    except MaskedFastmailError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    main()
