"""CSV export of parsed transactions."""

import csv
from dataclasses import fields
from pathlib import Path
from typing import TextIO

from fiobank.models import Transaction

TRANSACTION_FIELDS = [f.name for f in fields(Transaction)]


def write_csv(
    transactions: list[Transaction],
    output: TextIO,
    delimiter: str = ",",
) -> None:
    """
    Write transactions with all fields to an open text stream.

    Args:
        transactions: List of transactions
        output: Writable text stream
        delimiter: CSV delimiter (default comma)
    """
    writer = csv.DictWriter(output, fieldnames=TRANSACTION_FIELDS, delimiter=delimiter)
    writer.writeheader()
    for tx in transactions:
        writer.writerow(tx.to_dict())


def write_csv_file(
    transactions: list[Transaction],
    output_path: Path,
    delimiter: str = ",",
) -> None:
    """Write transactions to a CSV file."""
    with open(output_path, "w", newline="", encoding="utf-8") as f:
        write_csv(transactions, f, delimiter)
