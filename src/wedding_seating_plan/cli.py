"""Command line interface for WeddingSeatingPlan."""
from __future__ import annotations

import argparse
import logging
import random
import sys
from pathlib import Path
from typing import Sequence

from .csv_loader import load_all, pad_guests
from .export import format_trace, render_pdf, write_csv
from .models import ROLE_LABELS, PlanConfiguration, SortingCriteria
from .solver import generate


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Wedding seating plan generator")
    parser.add_argument("--guests", required=True, help="Path to guests.csv")
    parser.add_argument("--couples", help="Path to couples.csv")
    parser.add_argument("--exclusions", help="Path to exclusions.csv")
    parser.add_argument("--tables", type=int, required=True,
                        help="Number of tables besides the honor table.")
    parser.add_argument("--seats-per-table", type=int, default=8,
                        help="Seats at each regular table.")
    parser.add_argument("--honor-seats", type=int, default=8,
                        help="Seats at the honor table.")
    parser.add_argument("--total-guests", type=int, default=0,
                        help="Pad the roster with 'Guest N' placeholders up to this count.")
    parser.add_argument("--by-family", action="store_true",
                        help="Keep families together where possible.")
    parser.add_argument("--by-age", action="store_true",
                        help="Order guests by age.")
    parser.add_argument("--by-role", action="store_true",
                        help="Order guests by role.")
    parser.add_argument("--random", action="store_true",
                        help="Shuffle guests within each regular table.")
    parser.add_argument("--seed", type=int,
                        help="Seed for the shuffle, for reproducible output.")
    parser.add_argument("--shape", choices=["round", "square"], default="round",
                        help="Table shape used by visual outputs.")
    parser.add_argument("--out-csv", type=Path, help="Write the seating plan as CSV.")
    parser.add_argument("--out-pdf", type=Path, help="Write the seating chart as PDF.")
    parser.add_argument("--out-trace", type=Path, help="Write the placement trace as text.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log every placement decision.")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point used by ``wedding-seating`` and ``python -m wedding_seating_plan.cli``."""
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        guests, couples, exclusions = load_all(args.guests, args.couples, args.exclusions)
        config = PlanConfiguration(
            total_guests=max(args.total_guests, len(guests)),
            number_of_tables=args.tables,
            seats_per_table=args.seats_per_table,
            honor_table_seats=args.honor_seats,
            sorting_criteria=SortingCriteria(
                by_family=args.by_family,
                by_age=args.by_age,
                by_role=args.by_role,
                random=args.random,
            ),
            table_shape=args.shape,
        )
    except (OSError, ValueError) as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        return 2

    guests = pad_guests(guests, config.total_guests)
    rng = random.Random(args.seed) if args.seed is not None else None
    result = generate(guests, couples, exclusions, config, rng=rng)

    if not result.success:
        for err in result.errors:
            print(f"[ERROR] {err}", file=sys.stderr)
        return 1

    for table in result.tables:
        print(f"[TABLE] {table.number} {table.name} ({len(table.guests)}/{table.capacity})")
        for g in table.guests:
            role = f" [{ROLE_LABELS[g.role]}]" if g.role != "regular" else ""
            print(f"    {g.full_name}{role}")
    for w in result.warnings:
        print(f"[WARNING] {w.kind}: {w.message}")

    if args.out_csv:
        write_csv(result.tables, args.out_csv)
    if args.out_pdf:
        args.out_pdf.parent.mkdir(parents=True, exist_ok=True)
        args.out_pdf.write_bytes(render_pdf(result.tables))
    if args.out_trace:
        args.out_trace.parent.mkdir(parents=True, exist_ok=True)
        args.out_trace.write_text(format_trace(result.debug_trace) + "\n", encoding="utf-8")
    return 0


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    sys.exit(main())
