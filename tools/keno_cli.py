#!/usr/bin/env python3
"""
KENOBRAIN — Keno Odds CLI

Usage:
    python -m tools.keno_cli
    python -m tools.keno_cli payouts_original.csv --picks 4
    python -m tools.keno_cli my_table.csv --json
    python -m tools.keno_cli --list
    python -m tools.keno_cli --pool 40 --drawn 10 --max-picks 6
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from pydantic import ValidationError
from rich.console import Console

from config.settings import PAYOUTS_DIR, ReportConfig
from keno_engine import GameConstants, KenoError, compute_game_report
from keno_engine.odds import validate_places
from tools.console_report import render_report
from tools.payout_loader import list_payout_files, parse_payouts_csv, resolve_payout_file

logger = logging.getLogger("kenobrain.cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Keno odds & payout analysis")
    parser.add_argument("payout_file", nargs="?", default=ReportConfig.DEFAULT_PAYOUT_FILE,
                        help="Payout CSV (path, or name inside --payouts-dir)")
    parser.add_argument("--payouts-dir", type=str, default=str(PAYOUTS_DIR))
    parser.add_argument("--list", action="store_true", help="List available payout files")
    parser.add_argument("--json", action="store_true", help="Dump the report as JSON")
    parser.add_argument("--picks", type=int, default=None, help="Only show one pick level")
    parser.add_argument("--pool", type=int, default=80, help="Numbers in the pool")
    parser.add_argument("--drawn", type=int, default=20, help="Numbers the house draws")
    parser.add_argument("--max-picks", type=int, default=10, help="Most spots a player may pick")
    parser.add_argument("--decimals", type=int, default=ReportConfig.ODDS_DECIMALS,
                        help="Decimal places for '1 in X' odds")
    return parser


def main(argv=None, console: Console = None) -> int:
    args = build_parser().parse_args(argv)
    console = console or Console()
    logging.basicConfig(level=ReportConfig.LOG_LEVEL, format=ReportConfig.LOG_FORMAT,
                        datefmt=ReportConfig.LOG_DATEFMT)

    if args.list:
        files = list_payout_files(args.payouts_dir)
        if not files:
            console.print(f"[yellow]No payout files in {args.payouts_dir}[/yellow]")
        for f in files:
            console.print(f"  {f['name']:<30} {f['filename']}")
        return 0

    try:
        constants = GameConstants(pool_size=args.pool, drawn_count=args.drawn,
                                  max_picks=args.max_picks)
    except ValidationError as e:
        console.print(f"[red]❌ Invalid game constants:[/red] {e.errors()[0]['msg']}")
        return 1

    try:
        validate_places(args.decimals)
    except ValueError as e:
        console.print(f"[red]❌ --decimals: {e}[/red]")
        return 1

    if args.picks is not None and not 1 <= args.picks <= constants.max_picks:
        console.print(f"[red]❌ --picks must be between 1 and {constants.max_picks}[/red]")
        return 1

    try:
        path = resolve_payout_file(args.payout_file, args.payouts_dir)
        table = parse_payouts_csv(path)
        report = compute_game_report(table, constants, odds_places=args.decimals)
    except KenoError as e:
        logger.error(str(e))
        console.print(f"[red]❌ {e}[/red]")
        return 1

    if args.json:
        data = report.to_dict()
        if args.picks is not None:
            data["picks"] = [p for p in data["picks"] if p["picks"] == args.picks]
        console.print_json(json.dumps(data))
        return 0

    render_report(report, console=console, picks=args.picks, source=Path(path).name)
    return 0


if __name__ == "__main__":
    sys.exit(main())
