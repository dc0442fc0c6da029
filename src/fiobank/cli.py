#!/usr/bin/env python3
"""Command-line interface for fiobank."""

import argparse
import logging
import sys
from datetime import date, datetime
from pathlib import Path
from typing import Any

from dotenv import find_dotenv, load_dotenv

from fiobank.client import FioClient
from fiobank.config import get_api_token, get_base_url, load_config
from fiobank.errors import FioError
from fiobank.export import write_csv, write_csv_file
from fiobank.logconfig import setup_logging
from fiobank.models import StatementFormat, TransactionReportFormat
from fiobank.parser import parse_statement

EXIT_ERROR = 1
EXIT_USAGE = 2


def parse_cli_date(value: str) -> date:
    """Parse a YYYY-MM-DD command-line argument."""
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"invalid date {value!r}, expected YYYY-MM-DD") from e


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="fiobank",
        description="Command-line client for the Fio banka API",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  fiobank setup
  fiobank fetch-period --start 2024-01-01 --end 2024-01-31 --format csv
  fiobank fetch-last
  fiobank fetch-statement --year 2024 --statement-id 3 --format pdf -o stmt.pdf
  fiobank parse report.json -o transactions.csv

The API token is read from --token, the FIO_API_TOKEN environment
variable (also loaded from a .env file) or config.json, in that order.
        """,
    )

    parser.add_argument(
        "--token",
        help="Fio API token (or set FIO_API_TOKEN / configure in config.json)",
    )
    parser.add_argument(
        "--base-url",
        help="Alternate API base URL, e.g. a mock server",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to config.json file",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Verbose output",
    )
    parser.add_argument(
        "--log-json",
        action="store_true",
        help="Emit log records as JSON lines",
    )

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    report_formats = [f.value for f in TransactionReportFormat]
    statement_formats = [f.value for f in StatementFormat]

    period = subparsers.add_parser(
        "fetch-period", help="Fetch transactions for a date range (inclusive)"
    )
    period.add_argument("--start", type=parse_cli_date, required=True, help="Start date YYYY-MM-DD")
    period.add_argument("--end", type=parse_cli_date, required=True, help="End date YYYY-MM-DD")
    period.add_argument("--format", choices=report_formats, default="json", help="Output format")

    last = subparsers.add_parser(
        "fetch-last", help="Fetch transactions since last successful download"
    )
    last.add_argument("--format", choices=report_formats, default="json", help="Output format")

    statement = subparsers.add_parser(
        "fetch-statement", help="Fetch account statement by year and statement id"
    )
    statement.add_argument("--year", type=int, required=True)
    statement.add_argument("--statement-id", type=int, required=True, metavar="ID")
    statement.add_argument(
        "--format", choices=statement_formats, default="json", help="Output format"
    )
    statement.add_argument(
        "-o",
        "--output",
        type=Path,
        help="Output file (required for pdf)",
    )

    subparsers.add_parser("last-info", help="Show year and id of last account statement")

    set_last_id = subparsers.add_parser("set-last-id", help="Set last downloaded transaction id")
    set_last_id.add_argument("--transaction-id", type=int, required=True, metavar="ID")

    set_last_date = subparsers.add_parser(
        "set-last-date", help="Set last unsuccessful download date"
    )
    set_last_date.add_argument("--date", type=parse_cli_date, required=True)

    parse = subparsers.add_parser(
        "parse", help="Convert a saved JSON report to CSV"
    )
    parse.add_argument("input", type=Path, help="JSON report file")
    parse.add_argument("-o", "--output", type=Path, help="Output CSV file (default: stdout)")
    parse.add_argument(
        "--format",
        choices=["csv", "tsv"],
        default="csv",
        help="Output format (default: csv)",
    )

    setup = subparsers.add_parser("setup", help="Run interactive setup wizard")
    setup.add_argument(
        "--no-verify",
        action="store_true",
        help="Don't check the token against the API",
    )

    subparsers.add_parser("show-config", help="Show current configuration")

    return parser


def print_text(payload: str) -> None:
    """Write a text payload to stdout, ending with a newline."""
    sys.stdout.write(payload)
    if not payload.endswith("\n"):
        sys.stdout.write("\n")


def create_client(args: argparse.Namespace, config: dict[str, Any] | None) -> FioClient | None:
    """Create an API client from arguments and config, or report why not."""
    token = get_api_token(config, args.token)
    if not token:
        print(
            "Error: API token required. Use --token, FIO_API_TOKEN or run 'fiobank setup'",
            file=sys.stderr,
        )
        return None

    return FioClient(token, base_url=get_base_url(config, args.base_url))


def run_parse(args: argparse.Namespace) -> int:
    """Convert a saved JSON report to CSV."""
    if not args.input.exists():
        print(f"Error: {args.input} not found", file=sys.stderr)
        return EXIT_ERROR

    statement = parse_statement(args.input.read_bytes())
    transactions = list(statement.transactions)
    delimiter = "\t" if args.format == "tsv" else ","

    if args.output:
        write_csv_file(transactions, args.output, delimiter)
        print(f"Wrote {len(transactions)} transactions to {args.output}", file=sys.stderr)
    else:
        write_csv(transactions, sys.stdout, delimiter)

    if args.verbose:
        info = statement.info
        print(f"Account: {info.account_id}/{info.bank_id} ({info.currency})", file=sys.stderr)
        if info.period:
            start, end = info.period
            print(f"Period: {start} to {end}", file=sys.stderr)
    return 0


def run_command(args: argparse.Namespace, client: FioClient) -> int:
    """Run an API subcommand."""
    if args.command == "fetch-period":
        payload = client.fetch_transactions_for_period(
            args.start, args.end, TransactionReportFormat(args.format)
        )
        print_text(payload)

    elif args.command == "fetch-last":
        payload = client.fetch_transactions_since_last_download(
            TransactionReportFormat(args.format)
        )
        print_text(payload)

    elif args.command == "fetch-statement":
        fmt = StatementFormat(args.format)
        data = client.fetch_account_statement(args.year, args.statement_id, fmt)
        if isinstance(data, bytes):
            args.output.write_bytes(data)
            print(f"Wrote {len(data)} bytes to {args.output} ({fmt.value.upper()})")
        elif args.output:
            args.output.write_text(data, encoding="utf-8")
            print(f"Wrote statement to {args.output}", file=sys.stderr)
        else:
            print_text(data)

    elif args.command == "last-info":
        info = client.fetch_last_statement_info()
        print(f"year={info.year}, statement_id={info.statement_id}")

    elif args.command == "set-last-id":
        client.set_last_downloaded_transaction_id(args.transaction_id)
        print(f"Set last downloaded transaction id to {args.transaction_id}")

    elif args.command == "set-last-date":
        client.set_last_unsuccessful_download_date(args.date)
        print(f"Set last unsuccessful download date to {args.date.isoformat()}")

    return 0


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        json_format=args.log_json,
    )

    if args.command is None:
        parser.print_help()
        return EXIT_USAGE

    # Binary statements cannot go to the terminal
    if (
        args.command == "fetch-statement"
        and StatementFormat(args.format).is_binary
        and args.output is None
    ):
        print(
            f"Error: --output is required for binary formats ({args.format})",
            file=sys.stderr,
        )
        return EXIT_USAGE

    # FIO_API_TOKEN may live in a .env file; the real environment wins
    load_dotenv(find_dotenv(usecwd=True))

    # Handle setup first (before loading config)
    if args.command == "setup":
        from fiobank.setup import run_setup

        try:
            run_setup(
                token=args.token,
                base_url=args.base_url,
                config_path=args.config,
                verify=not args.no_verify,
            )
        except (OSError, ValueError) as e:
            print(f"Error: {e}", file=sys.stderr)
            return EXIT_ERROR
        return 0

    try:
        config: dict[str, Any] | None = load_config(args.config)
    except (OSError, ValueError) as e:
        print(f"Error reading config: {e}", file=sys.stderr)
        return EXIT_ERROR

    if args.command == "show-config":
        from fiobank.setup import show_current_config

        if config:
            show_current_config(config)
        else:
            print("No configuration found.")
            print("Run 'fiobank setup' to create one.")
        return 0

    try:
        if args.command == "parse":
            return run_parse(args)

        client = create_client(args, config)
        if client is None:
            return EXIT_ERROR
        return run_command(args, client)

    except FioError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
