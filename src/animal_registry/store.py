"""
SQLite-backed record store for Animal rows.

All methods are blocking; callers on the event loop dispatch them to a worker
thread. A single connection is shared and guarded by a lock.
"""
from __future__ import annotations
import enum, logging, sqlite3, threading
from typing import Callable, Iterable, List, Optional, Tuple

from .models import Animal
from .query import AnimalFilter

logger = logging.getLogger(__name__)

SCHEMA = """
CREATE TABLE IF NOT EXISTS animals (
    animal_id INTEGER PRIMARY KEY AUTOINCREMENT,
    species   TEXT    NOT NULL,
    name      TEXT    NOT NULL,
    age       INTEGER NOT NULL CHECK (age >= 0)
)
"""

COLUMNS = "animal_id, species, name, age"


class WriteOutcome(enum.Enum):
    APPLIED = "applied"
    # no row with the identifier was present at write time
    CONFLICT = "conflict"


def _row_to_animal(row: sqlite3.Row) -> Animal:
    return Animal(animal_id=row["animal_id"], species=row["species"], name=row["name"], age=row["age"])


class AnimalStore:

    def __init__(self, conn: sqlite3.Connection):
        conn.row_factory = sqlite3.Row
        self.conn = conn
        self._lock = threading.Lock()

    @classmethod
    def open(cls, path: str) -> "AnimalStore":
        conn = sqlite3.connect(path, check_same_thread=False)
        store = cls(conn)
        store.ensure_schema()
        logger.info("Opened animal store at %s", path)
        return store

    def close(self) -> None:
        with self._lock:
            self.conn.close()

    def ensure_schema(self) -> None:
        with self._lock, self.conn:
            self.conn.execute(SCHEMA)

    # _count/_fetch expect the caller to hold self._lock
    def _count(self, flt: AnimalFilter) -> int:
        where, params = flt.where_clause()
        row = self.conn.execute(f"SELECT COUNT(*) FROM animals {where}", params).fetchone()
        return int(row[0])

    def _fetch(self, flt: AnimalFilter, offset: int, limit: int) -> List[Animal]:
        where, params = flt.where_clause()
        sql = f"SELECT {COLUMNS} FROM animals {where} ORDER BY animal_id LIMIT ? OFFSET ?"
        rows = self.conn.execute(sql, [*params, limit, offset]).fetchall()
        return [_row_to_animal(r) for r in rows]

    def count(self, flt: AnimalFilter) -> int:
        with self._lock:
            return self._count(flt)

    def fetch(self, flt: AnimalFilter, offset: int, limit: int) -> List[Animal]:
        """Filtered read ordered by identifier, then paged with LIMIT/OFFSET."""
        with self._lock:
            return self._fetch(flt, offset, limit)

    def page(self, flt: AnimalFilter, offset: int, limit: int) -> Tuple[int, List[Animal]]:
        """(total matching flt, rows of the requested window), read under one lock."""
        with self._lock:
            return self._count(flt), self._fetch(flt, offset, limit)

    def pick(self, pick_index: Callable[[int], int]) -> Optional[Animal]:
        """Row at offset pick_index(total) of the whole table, or None when it is empty."""
        everything = AnimalFilter()
        with self._lock:
            total = self._count(everything)
            if total == 0:
                return None
            index = pick_index(total)
            if not 0 <= index < total:
                raise ValueError(f"pick_index returned {index}, expected [0, {total})")
            return self._fetch(everything, index, 1)[0]

    def get(self, animal_id: int) -> Optional[Animal]:
        with self._lock:
            row = self.conn.execute(
                f"SELECT {COLUMNS} FROM animals WHERE animal_id = ?", (animal_id,)
            ).fetchone()
        return _row_to_animal(row) if row is not None else None

    def exists(self, animal_id: int) -> bool:
        with self._lock:
            row = self.conn.execute("SELECT 1 FROM animals WHERE animal_id = ?", (animal_id,)).fetchone()
        return row is not None

    def insert(self, animal: Animal) -> int:
        """Persist a new row; the incoming animal_id is ignored. Returns the assigned id."""
        with self._lock, self.conn:
            cur = self.conn.execute(
                "INSERT INTO animals (species, name, age) VALUES (?, ?, ?)",
                (animal.species, animal.name, animal.age),
            )
        return int(cur.lastrowid)

    def replace(self, animal: Animal) -> WriteOutcome:
        with self._lock, self.conn:
            cur = self.conn.execute(
                "UPDATE animals SET species = ?, name = ?, age = ? WHERE animal_id = ?",
                (animal.species, animal.name, animal.age, animal.animal_id),
            )
        return WriteOutcome.APPLIED if cur.rowcount == 1 else WriteOutcome.CONFLICT

    def delete(self, animal_id: int) -> bool:
        with self._lock, self.conn:
            cur = self.conn.execute("DELETE FROM animals WHERE animal_id = ?", (animal_id,))
        return cur.rowcount > 0

    def seed(self, animals: Iterable[Animal]) -> int:
        """Insert `animals` only when the table is empty. Returns rows inserted."""
        with self._lock, self.conn:
            if self.conn.execute("SELECT COUNT(*) FROM animals").fetchone()[0]:
                return 0
            cur = self.conn.executemany(
                "INSERT INTO animals (species, name, age) VALUES (?, ?, ?)",
                [(a.species, a.name, a.age) for a in animals],
            )
        return cur.rowcount
