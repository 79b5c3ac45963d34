"""PostgreSQL storage for curated syllable inventories.

The syllables table keeps every inventory version side by side:
- idx: digit value the syllable stands for
- syllable: the letters
- pattern: C/V shape, for browsing the inventory
- inventory_version: which curated set the row belongs to
"""

import psycopg

from ..core.errors import ConfigError
from ..core.syllables import SyllableInventory

DB_CONFIG = {
    "dbname": "phonver",
    "user": "phonver",
    "password": "phonver_dev",
    "host": "localhost",
    "port": 5432,
}


def connect(**overrides):
    """Get a connection to the syllable database."""
    return psycopg.connect(**{**DB_CONFIG, **overrides})


def init_schema(conn):
    """Create the syllables table if it doesn't exist."""
    with conn.cursor() as cur:
        cur.execute("""
            CREATE TABLE IF NOT EXISTS syllables (
                inventory_version TEXT    NOT NULL,
                idx               INTEGER NOT NULL,
                syllable          TEXT    NOT NULL,
                pattern           TEXT,
                PRIMARY KEY (inventory_version, idx),
                UNIQUE (inventory_version, syllable)
            );

            CREATE INDEX IF NOT EXISTS idx_syllables_pattern
                ON syllables(inventory_version, pattern);
        """)
    conn.commit()


def _pattern(syllable):
    return "".join("V" if c in "aeiou" else "C" for c in syllable)


def store_inventory(conn, inventory, version=None, pattern=None):
    """Upsert every syllable of an inventory under a version label.

    Returns:
        Number of rows written.
    """
    if version is None:
        version = inventory.version
    if pattern is None:
        pattern = _pattern
    rows = [(version, idx, syl, pattern(syl)) for idx, syl in enumerate(inventory)]
    with conn.cursor() as cur:
        cur.executemany("""
            INSERT INTO syllables (inventory_version, idx, syllable, pattern)
            VALUES (%s, %s, %s, %s)
            ON CONFLICT (inventory_version, idx) DO UPDATE SET
                syllable = EXCLUDED.syllable,
                pattern = EXCLUDED.pattern
        """, rows)
    conn.commit()
    return len(rows)


def load_inventory(conn, version):
    """Read one inventory version back, in digit order.

    Raises:
        ConfigError: version missing, or indices not exactly 0..N-1.
    """
    with conn.cursor() as cur:
        cur.execute("""
            SELECT idx, syllable
            FROM syllables
            WHERE inventory_version = %s
            ORDER BY idx
        """, (version,))
        rows = cur.fetchall()

    if not rows:
        raise ConfigError(f"No syllables stored for inventory version {version!r}")
    for expected, (idx, _) in enumerate(rows):
        if idx != expected:
            raise ConfigError(f"Inventory {version!r} has a gap: expected index "
                              f"{expected}, found {idx}")
    return SyllableInventory([syl for _, syl in rows], version)


def list_versions(conn):
    """Stored inventory versions with their syllable counts."""
    with conn.cursor() as cur:
        cur.execute("""
            SELECT inventory_version, COUNT(*)
            FROM syllables
            GROUP BY inventory_version
            ORDER BY inventory_version
        """)
        return cur.fetchall()
