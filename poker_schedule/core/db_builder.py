"""Write parsed tournaments to the schedule SQLite database."""

import sqlite3

from .models import TournamentRecord


COLUMNS = [
    'event_number', 'event_name', 'date', 'time', 'buyin',
    'starting_chips', 'level_duration', 'reentry', 'late_reg',
    'prize_pool', 'house_fee', 'opt_add_on', 'rake_pct', 'rake_dollars',
    'game_variant', 'venue', 'notes', 'is_satellite', 'target_event',
    'is_restart', 'parent_event',
]


def _create_tournaments_table(cur):
    cur.execute('''CREATE TABLE IF NOT EXISTS tournaments (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        event_number TEXT,
        event_name TEXT NOT NULL,
        date TEXT NOT NULL,
        time TEXT NOT NULL,
        buyin INTEGER NOT NULL,
        starting_chips INTEGER,
        level_duration TEXT,
        reentry TEXT,
        late_reg TEXT,
        prize_pool INTEGER,
        house_fee INTEGER,
        opt_add_on INTEGER,
        rake_pct REAL,
        rake_dollars INTEGER,
        game_variant TEXT NOT NULL,
        venue TEXT NOT NULL,
        notes TEXT,
        is_satellite INTEGER DEFAULT 0,
        target_event TEXT,
        is_restart INTEGER DEFAULT 0,
        parent_event TEXT,
        source_pdf TEXT,
        created_at DATETIME DEFAULT CURRENT_TIMESTAMP
    )''')


def build_database(db_path: str, records: list[TournamentRecord],
                   source_pdf: str = '') -> int:
    """Append parsed tournaments to the database, creating the table if needed.

    Returns the number of rows inserted.
    """
    conn = sqlite3.connect(db_path)
    try:
        cur = conn.cursor()
        _create_tournaments_table(cur)

        placeholders = ', '.join('?' * (len(COLUMNS) + 1))
        for r in records:
            cur.execute(
                f'''INSERT INTO tournaments ({', '.join(COLUMNS)}, source_pdf)
                    VALUES ({placeholders})''',
                (r.event_number, r.event_name, r.date, r.time, r.buyin,
                 r.starting_chips, r.level_duration, r.reentry, r.late_reg,
                 r.prize_pool, r.house_fee, r.opt_add_on, r.rake_pct, r.rake_dollars,
                 r.game_variant, r.venue, r.notes, int(r.is_satellite), r.target_event,
                 int(r.is_restart), r.parent_event, source_pdf))

        conn.commit()
    finally:
        conn.close()
    return len(records)
