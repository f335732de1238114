"""SQLite snapshot storage for people and relationships."""

from pathlib import Path
import sqlite3

from family_tree_layout.models import Person, Relationship
from family_tree_layout.parsing import person_from_record, relationship_from_record


PEOPLE_COLUMNS = (
    "id",
    "first_name",
    "last_name",
    "middle_name",
    "maiden_name",
    "nickname",
    "gender",
    "birthday",
    "birth_place",
    "death_date",
    "death_place",
    "is_living",
    "occupation",
    "bio",
    "photo_url",
)


def create_database(db_path: Path) -> sqlite3.Connection:
    """Create SQLite database with people and relationships tables."""
    conn = sqlite3.connect(db_path)
    conn.row_factory = sqlite3.Row
    cursor = conn.cursor()

    cursor.execute("""
        CREATE TABLE IF NOT EXISTS people (
            id TEXT PRIMARY KEY,
            first_name TEXT NOT NULL,
            last_name TEXT NOT NULL,
            middle_name TEXT,
            maiden_name TEXT,
            nickname TEXT,
            gender TEXT,
            birthday TEXT NOT NULL,
            birth_place TEXT,
            death_date TEXT,
            death_place TEXT,
            is_living INTEGER NOT NULL DEFAULT 1,
            occupation TEXT,
            bio TEXT,
            photo_url TEXT
        )
    """)

    cursor.execute("""
        CREATE TABLE IF NOT EXISTS relationships (
            id TEXT PRIMARY KEY,
            person1_id TEXT NOT NULL,
            person2_id TEXT NOT NULL,
            relationship_type TEXT NOT NULL,
            start_date TEXT,
            end_date TEXT,
            notes TEXT,
            is_deleted INTEGER NOT NULL DEFAULT 0,
            FOREIGN KEY (person1_id) REFERENCES people(id),
            FOREIGN KEY (person2_id) REFERENCES people(id),
            CHECK (person1_id != person2_id)
        )
    """)

    conn.commit()
    return conn


def open_database(db_path: Path) -> sqlite3.Connection:
    """Open an existing snapshot database."""
    if not Path(db_path).exists():
        raise ValueError(f"Database not found: {db_path}")
    conn = sqlite3.connect(db_path)
    conn.row_factory = sqlite3.Row
    return conn


def store_data(conn: sqlite3.Connection, people: list[Person], relationships: list[Relationship]):
    """Insert or replace people and relationships."""
    cursor = conn.cursor()

    placeholders = ", ".join("?" for _ in PEOPLE_COLUMNS)
    cursor.executemany(
        f"INSERT OR REPLACE INTO people ({', '.join(PEOPLE_COLUMNS)}) VALUES ({placeholders})",
        [tuple(p.to_dict()[column] for column in PEOPLE_COLUMNS) for p in people],
    )

    cursor.executemany(
        """
        INSERT OR REPLACE INTO relationships
        (id, person1_id, person2_id, relationship_type, start_date, end_date, notes)
        VALUES (?, ?, ?, ?, ?, ?, ?)
        """,
        [
            (
                r.id,
                r.person1_id,
                r.person2_id,
                r.relationship_type,
                r.start_date.isoformat() if r.start_date else None,
                r.end_date.isoformat() if r.end_date else None,
                r.notes,
            )
            for r in relationships
        ],
    )

    conn.commit()


def delete_relationship(conn: sqlite3.Connection, relationship_id: str):
    """Soft delete: the row stays but is no longer loaded."""
    conn.execute("UPDATE relationships SET is_deleted = 1 WHERE id = ?", (relationship_id,))
    conn.commit()


def load_data(conn: sqlite3.Connection) -> tuple[list[Person], list[Relationship]]:
    """Load all people and every relationship that is not soft deleted."""
    conn.row_factory = sqlite3.Row
    cursor = conn.cursor()

    cursor.execute(f"SELECT {', '.join(PEOPLE_COLUMNS)} FROM people ORDER BY rowid")
    people = [person_from_record(dict(row)) for row in cursor.fetchall()]

    cursor.execute(
        """
        SELECT id, person1_id, person2_id, relationship_type, start_date, end_date, notes
        FROM relationships
        WHERE is_deleted = 0
        ORDER BY rowid
        """
    )
    relationships = [relationship_from_record(dict(row)) for row in cursor.fetchall()]

    return people, relationships


def load_database(db_path: Path) -> tuple[list[Person], list[Relationship]]:
    conn = open_database(db_path)
    try:
        return load_data(conn)
    finally:
        conn.close()
