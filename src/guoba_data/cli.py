#!/usr/bin/env python3
"""
Command-line interface for experiment data.

Usage:
    python -m guoba_data.cli list
    python -m guoba_data.cli percentiles em-sands -p 5 -p 50 -p 95
    python -m guoba_data.cli leaderboard em-sands --minimum-x 100 --limit 20
    python -m guoba_data.cli leaderboard em-sands --json
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional

from .core.config import Settings, get_settings
from .core.models import ViewOptions
from .services import ExperimentService

logger = logging.getLogger("guoba_data.cli")


def _setup_logging(settings: Settings, verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else settings.log_level.upper(),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def _get_settings(args: argparse.Namespace) -> Settings:
    if args.data_dir:
        return Settings(data_dir=Path(args.data_dir))
    return get_settings()


def _fmt(value: Optional[float]) -> str:
    """Format a number like the site does; None renders as ---."""
    if value is None:
        return "---"
    if float(value).is_integer():
        return f"{int(value):,}"
    return f"{value:,}"


def cmd_list(args: argparse.Namespace, service: ExperimentService) -> int:
    """List experiments."""
    experiments = service.list_experiments()
    if experiments is None:
        print("No data available")
        return 1

    if args.json:
        print(json.dumps([e.model_dump(by_alias=True) for e in experiments], indent=2))
        return 0

    print(f"\nExperiments ({len(experiments)})")
    print("=" * 50)
    for meta in experiments:
        flags = []
        if meta.one_shot:
            flags.append("one-shot")
        if meta.archived:
            flags.append("archived")
        suffix = f"  [{', '.join(flags)}]" if flags else ""
        print(f"  {meta.id:<30} {meta.name}{suffix}")
    return 0


def cmd_percentiles(args: argparse.Namespace, service: ExperimentService) -> int:
    """Print percentile curves for an experiment."""
    percentiles = args.percentile or args.settings.default_percentiles

    view = service.get_view(args.experiment, ViewOptions(show_special=False))
    if view is None:
        print("No data available")
        return 1

    series = service.percentiles(view.meta, view.users, percentiles)

    if args.json:
        print(json.dumps([s.model_dump() for s in series], indent=2))
        return 0

    print(f"\n{view.meta.name}: percentiles over {len(view.users)} users")
    print(f"{view.meta.x_label} -> {view.meta.y_label}")
    print("=" * 50)
    for s in series:
        points = ", ".join(f"({_fmt(x)}, {_fmt(y)})" for x, y in s.stats) or "no data"
        print(f"{s.nickname:>6}: {points}")
    return 0


def cmd_leaderboard(args: argparse.Namespace, service: ExperimentService) -> int:
    """Print the leaderboard for an experiment."""
    view = service.get_view(
        args.experiment,
        ViewOptions(minimum_x=args.minimum_x, show_special=False),
    )
    if view is None:
        print("No data available")
        return 1

    rows = view.leaderboard[: args.limit] if args.limit else view.leaderboard

    if args.json:
        print(json.dumps([r.model_dump() for r in rows], indent=2))
        return 0

    meta = view.meta
    print(f"\n{meta.name}: leaderboard")
    if not meta.one_shot:
        print(f"Minimum {meta.x_label}: {_fmt(args.minimum_x)}")
    print("=" * 50)
    for r in rows:
        best = r.best_sample
        line = f"#{r.rank:<4} {r.nickname:<25} {_fmt(r.ar):>12}  {r.affiliation:<20}"
        if not meta.one_shot:
            line += f" {_fmt(best.x if best else None):>10}"
        line += f" {_fmt(r.value):>10}"
        print(line)
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="GUOBA experiment data CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--data-dir", help="Directory with experiments.json, users.json and output/")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # list command
    list_parser = subparsers.add_parser("list", help="List experiments")
    list_parser.add_argument("--json", action="store_true", help="Output JSON")

    # percentiles command
    pct_parser = subparsers.add_parser("percentiles", help="Show percentile curves")
    pct_parser.add_argument("experiment", help="Experiment ID")
    pct_parser.add_argument(
        "-p",
        "--percentile",
        type=float,
        action="append",
        help="Percentile to compute (repeatable, default from settings)",
    )
    pct_parser.add_argument("--json", action="store_true", help="Output JSON")

    # leaderboard command
    lb_parser = subparsers.add_parser("leaderboard", help="Show the leaderboard")
    lb_parser.add_argument("experiment", help="Experiment ID")
    lb_parser.add_argument("--minimum-x", type=float, default=0, help="Minimum x for a qualifying sample")
    lb_parser.add_argument("--limit", type=int, help="Number of rows to show")
    lb_parser.add_argument("--json", action="store_true", help="Output JSON")

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    settings = _get_settings(args)
    _setup_logging(settings, args.verbose)
    args.settings = settings
    logger.debug("Reading data from %s", settings.data_dir)

    commands = {
        "list": cmd_list,
        "percentiles": cmd_percentiles,
        "leaderboard": cmd_leaderboard,
    }

    cmd_func = commands.get(args.command)
    if cmd_func:
        return cmd_func(args, ExperimentService(settings=settings))
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
