#!/usr/bin/env python3
"""CLI entry point for parsing a tournament schedule.

Usage:
    python process_schedule.py --data wsop_2026_schedule.pdf --output ./output/
    python process_schedule.py --data mgm_winter.txt --venue "MGM National Harbor" \\
        --year 2026 --output ./output/ --db ./tournaments.db
"""

import argparse
import json
import logging
import os
import sys

# Add parent directory to path for imports (skip when frozen by PyInstaller)
if not getattr(sys, 'frozen', False):
    sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from poker_schedule.core.models import ScheduleConfig
from poker_schedule.core.schedule_parser import parse_schedule
from poker_schedule.core.db_builder import build_database
from poker_schedule.core.format_detector import FORMATS
from poker_schedule.core.venue import detect_series_name
from poker_schedule.core.output_generator import (
    generate_schedule_csv, generate_schedule_json, summarize
)
from poker_schedule.adapters.pdf_text import read_schedule_text


def main(argv=None):
    parser = argparse.ArgumentParser(description='Parse a poker tournament schedule')
    parser.add_argument('--data', nargs='+', required=True,
                        help='Schedule PDF(s) or extracted text file(s)')
    parser.add_argument('--output', required=True, help='Output directory for generated files')
    parser.add_argument('--format', default=None, choices=list(FORMATS),
                        help='Force a layout instead of auto-detecting it')
    parser.add_argument('--year', type=int, default=None,
                        help='Schedule year (default: detected from the header)')
    parser.add_argument('--venue', default=None,
                        help='Venue name (default: detected from the text)')
    parser.add_argument('--min-buyin', type=int, default=100,
                        help='Drop columnar rows priced below this (default 100)')
    parser.add_argument('--db', default=None,
                        help='SQLite database to append tournaments to')
    parser.add_argument('--preview', type=int, default=5,
                        help='Number of records to show in the summary (default 5)')
    parser.add_argument('--verbose', action='store_true', help='Log debug details')

    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format='%(levelname)s %(name)s: %(message)s')

    all_records = []
    for data_path in args.data:
        if not os.path.exists(data_path):
            print(f"Input not found: {data_path}")
            sys.exit(1)

        config = ScheduleConfig(
            year=args.year,
            venue=args.venue,
            format=args.format,
            source_pdf=os.path.basename(data_path),
            min_buyin=args.min_buyin,
        )

        print(f"Parsing {data_path}...")
        try:
            text = read_schedule_text(data_path)
        except (OSError, RuntimeError, ValueError) as e:
            print(f"Could not read {data_path}: {e}")
            sys.exit(1)

        series = detect_series_name(text)
        if series:
            print(f"  Series: {series}")

        records = parse_schedule(text, config)
        print(f"  -> {len(records)} tournaments")

        if args.db:
            os.makedirs(os.path.dirname(os.path.abspath(args.db)), exist_ok=True)
            inserted = build_database(args.db, records, source_pdf=config.source_pdf)
            print(f"  -> {inserted} rows written to {args.db}")

        all_records.extend(records)

    os.makedirs(args.output, exist_ok=True)

    csv_path = os.path.join(args.output, 'schedule.csv')
    generate_schedule_csv(all_records, csv_path)
    print(f"Generated {csv_path}")

    json_path = os.path.join(args.output, 'schedule.json')
    generate_schedule_json(all_records, json_path)
    print(f"Generated {json_path}")

    print(json.dumps(summarize(all_records, args.preview), indent=2))
    print("\nDone!")


if __name__ == '__main__':
    main()
