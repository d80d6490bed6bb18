"""Export parsed tournaments.

Generates:
  - Schedule CSV (one row per tournament, camelCase headers)
  - JSON dump of all records
  - Upload summary: record count plus a short preview
"""

import csv
import json

from .models import TournamentRecord


CSV_FIELDS = [
    'eventNumber', 'eventName', 'date', 'time', 'buyin', 'startingChips',
    'levelDuration', 'reentry', 'lateReg', 'prizePool', 'houseFee',
    'optAddOn', 'rakePct', 'rakeDollars', 'gameVariant', 'venue', 'notes',
    'isSatellite', 'targetEvent', 'isRestart', 'parentEvent',
]


def summarize(records: list[TournamentRecord], preview: int = 5) -> dict:
    """Count and first few records, as returned to the uploader."""
    return {
        'tournamentsCount': len(records),
        'tournaments': [r.to_dict() for r in records[:preview]],
    }


def generate_schedule_csv(records: list[TournamentRecord], output_path: str):
    with open(output_path, 'w', newline='', encoding='utf-8') as f:
        writer = csv.DictWriter(f, fieldnames=CSV_FIELDS, extrasaction='ignore')
        writer.writeheader()
        for r in records:
            row = r.to_dict()
            for flag in ('isSatellite', 'isRestart'):
                row[flag] = 'TRUE' if row[flag] else 'FALSE'
            writer.writerow(row)


def generate_schedule_json(records: list[TournamentRecord], output_path: str):
    with open(output_path, 'w', encoding='utf-8') as f:
        json.dump([r.to_dict() for r in records], f, indent=2)
