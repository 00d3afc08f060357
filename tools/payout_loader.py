"""
KENOBRAIN — Payout CSV Loader

CSV layout (first row is a header and is ignored):

    Picks,0,1,2,3,4,5,6,7,8,9,10
    1,,3.8
    2,,,15
    ...

Column 0 is the pick count; columns 1-11 are the multipliers for 0-10 hits.
Rows whose first cell is blank or not an integer are skipped, as are blank
cells. Cells that do not parse as a non-negative number are skipped with a
warning. A later row for the same pick count replaces an earlier one.
"""

from __future__ import annotations

import csv
import logging
from io import StringIO
from pathlib import Path

from keno_engine.errors import PayoutFileError, PayoutTableError
from keno_engine.paytable import PayoutTable, to_multiplier

logger = logging.getLogger("kenobrain.loader")

MAX_HIT_COLUMNS = 11   # hits 0..10


def _parse_picks(cell: str):
    try:
        return int(cell.strip())
    except ValueError:
        return None


def parse_payouts_text(text: str, source: str = "<string>") -> PayoutTable:
    rows = {}
    reader = csv.reader(StringIO(text.strip()))
    next(reader, None)  # header

    for line_no, row in enumerate(reader, start=2):
        if not row or not row[0].strip():
            continue
        picks = _parse_picks(row[0])
        if picks is None:
            logger.warning(f"{source}:{line_no}: skipping row, picks={row[0]!r} is not an integer")
            continue

        hits_map = {}
        for hit_col in range(1, MAX_HIT_COLUMNS + 1):
            if hit_col >= len(row):
                break
            value = row[hit_col].strip()
            if not value:
                continue
            try:
                hits_map[hit_col - 1] = to_multiplier(value)
            except PayoutTableError as e:
                logger.warning(f"{source}:{line_no}: skipping hits={hit_col - 1}: {e}")
        rows[picks] = hits_map

    return PayoutTable(rows)


def parse_payouts_csv(path) -> PayoutTable:
    """Load a payout table from a CSV file on disk."""
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise PayoutFileError(f"Cannot read payout file {path}: {e}") from e
    table = parse_payouts_text(text, source=path.name)
    logger.info(f"Loaded {path.name}: picks {table.picks_levels}")
    return table


def list_payout_files(directory) -> list[dict]:
    """Every *.csv in `directory` as {"filename", "name"}; [] if it is missing."""
    directory = Path(directory)
    if not directory.is_dir():
        return []
    return [
        {"filename": p.name, "name": p.stem}
        for p in sorted(directory.iterdir())
        if p.is_file() and p.suffix == ".csv"
    ]


def resolve_payout_file(name, payouts_dir) -> Path:
    """Use `name` as given if it exists, else look it up inside `payouts_dir`."""
    candidate = Path(name)
    if candidate.is_file():
        return candidate
    in_dir = Path(payouts_dir) / name
    if in_dir.is_file():
        return in_dir
    raise PayoutFileError(f"Payout file not found: {name}")
