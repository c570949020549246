"""
SqliteDatStore — SQLite-backed implementation of the DatStore primitives.

Usage::

    store = open_store("~/dats/client_portal.db")

    # Exact-id typed read
    spells = store.try_read(SpellTable, 0x0E00000E)

    # Header-only range enumeration
    headers = store.query_range(0x05000000, 0x05FFFFFF)

    # Build a store (fixtures, import tooling)
    store = SqliteDatStore("out/portal.db", kind=StoreKind.PORTAL,
                           writable=True, create=True)
    store.write_record(GfxObj(id=0x01000001))
"""

import json
import logging
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterable, Iterator, Optional

from datlens.exceptions import RecordDecodeError, StoreError, StoreOpenError
from datlens.records.base import DatRecord
from datlens.store.models import DatStore, RecordHeader, StoreKind

__all__ = ["SqliteDatStore", "open_store", "detect_kind"]

logger = logging.getLogger(__name__)

# Path to the SQL schema file bundled with this package
_SCHEMA_PATH = Path(__file__).parent / "migrations" / "schema.sql"


def detect_kind(path: str) -> StoreKind:
    """File-name heuristic: anything with "cell" in its name is a Cell store."""
    return StoreKind.CELL if "cell" in Path(path).name.lower() else StoreKind.PORTAL


class SqliteDatStore(DatStore):
    """
    One store file.  The database holds a flat ``records`` table keyed by the
    32-bit id and a ``meta`` table recording the store kind.

    No persistent connection is kept open between calls, so any number of
    threads may read concurrently.
    """

    def __init__(
        self,
        db_path: str,
        kind: Optional[StoreKind] = None,
        writable: bool = False,
        create: bool = False,
    ) -> None:
        self._db_path = Path(db_path).expanduser()
        self._writable = writable or create
        self._closed = False

        if create:
            self._db_path.parent.mkdir(parents=True, exist_ok=True)
            self._ensure_schema()
        elif not self._db_path.is_file():
            raise StoreOpenError(f"No such store file: {self._db_path}")

        self._kind = self._resolve_kind(kind, create)

    # ── Internal helpers ──────────────────────────────────────────────────

    @contextmanager
    def _connect(self) -> Iterator[sqlite3.Connection]:
        if self._closed:
            raise StoreError(f"Store {self.name} is closed")
        try:
            conn = sqlite3.connect(str(self._db_path))
        except sqlite3.Error as exc:
            raise StoreError(f"Cannot open {self._db_path}: {exc}") from exc
        conn.row_factory = sqlite3.Row
        try:
            yield conn
            conn.commit()
        except sqlite3.Error as exc:
            raise StoreError(f"SQLite error on {self.name}: {exc}") from exc
        finally:
            conn.close()

    def _ensure_schema(self) -> None:
        """Create tables if they don't already exist."""
        sql = _SCHEMA_PATH.read_text(encoding="utf-8")
        with self._connect() as conn:
            conn.executescript(sql)

    def _resolve_kind(self, requested: Optional[StoreKind], create: bool) -> StoreKind:
        try:
            with self._connect() as conn:
                row = conn.execute("SELECT value FROM meta WHERE key='kind'").fetchone()
        except StoreError as exc:
            raise StoreOpenError(f"{self.name} is not a dat store: {exc}") from exc

        stored = StoreKind(row["value"]) if row else None
        if stored is None:
            kind = requested or detect_kind(str(self._db_path))
            if create:
                self.set_meta("kind", kind.value)
            return kind
        if requested is not None and requested is not stored:
            raise StoreOpenError(
                f"{self.name} is a {stored.value} store, not {requested.value}"
            )
        return stored

    # ── DatStore API ──────────────────────────────────────────────────────

    @property
    def kind(self) -> StoreKind:
        return self._kind

    @property
    def identity(self) -> str:
        return str(self._db_path.resolve())

    @property
    def writable(self) -> bool:
        return self._writable

    @property
    def closed(self) -> bool:
        return self._closed

    def try_read(self, record_type, record_id: int):
        with self._connect() as conn:
            row = conn.execute(
                "SELECT type_name, body FROM records WHERE id=?", (record_id,)
            ).fetchone()
        if row is None:
            return None

        expected = record_type.type_name()
        if row["type_name"] != expected:
            raise RecordDecodeError(
                f"0x{record_id:08X} is a {row['type_name']}, not a {expected}"
            )
        try:
            data = json.loads(row["body"])
            return record_type.from_dict(record_id, data)
        except (ValueError, TypeError, KeyError, AttributeError) as exc:
            raise RecordDecodeError(
                f"0x{record_id:08X} does not decode as {expected}: {exc}"
            ) from exc

    def query_range(self, start_id: int, end_id: int) -> list[RecordHeader]:
        with self._connect() as conn:
            rows = conn.execute(
                "SELECT id, type_name FROM records WHERE id BETWEEN ? AND ? ORDER BY id",
                (start_id, end_id),
            ).fetchall()
        return [RecordHeader(id=r["id"], type_name=r["type_name"]) for r in rows]

    def close(self) -> None:
        if not self._closed:
            logger.debug("Closing store %s", self.name)
        self._closed = True

    # ── Write path ────────────────────────────────────────────────────────

    def _require_writable(self) -> None:
        if not self._writable:
            raise StoreError(f"Store {self.name} was opened read-only")

    def set_meta(self, key: str, value: str) -> None:
        self._require_writable()
        with self._connect() as conn:
            conn.execute(
                "INSERT OR REPLACE INTO meta (key, value) VALUES (?, ?)", (key, value)
            )

    def write_record(self, record: DatRecord) -> None:
        """
        Persist *record*, replacing any record with the same id.
        """
        self.write_records([record])

    def write_records(self, records: Iterable[DatRecord]) -> int:
        """Persist many records in one transaction. Returns the number written."""
        self._require_writable()
        rows = [
            (r.id, r.type_name(), json.dumps(r.to_dict(), ensure_ascii=False))
            for r in records
        ]
        with self._connect() as conn:
            conn.executemany(
                "INSERT OR REPLACE INTO records (id, type_name, body) VALUES (?, ?, ?)",
                rows,
            )
        return len(rows)

    def __repr__(self) -> str:
        return f"SqliteDatStore({self.name!r}, kind={self._kind.value})"


def open_store(path: str, writable: bool = False) -> SqliteDatStore:
    """
    Open an existing store file, detecting its kind.

    The file name decides the first attempt; when that fails the other kind
    is tried before giving up.

    Raises:
        StoreOpenError: the file cannot be opened as either kind.
    """
    first = detect_kind(path)
    try:
        store = SqliteDatStore(path, kind=first, writable=writable)
        logger.info("Loaded %s as %s store", Path(path).name, first.value)
        return store
    except StoreOpenError as exc:
        logger.debug("Failed to load %s as %s store (attempt 1): %s", path, first.value, exc)

    second = first.other()
    try:
        store = SqliteDatStore(path, kind=second, writable=writable)
    except StoreOpenError as exc:
        raise StoreOpenError(
            f"Failed to load {Path(path).name} as either store kind: {exc}"
        ) from exc
    logger.info("Loaded %s as %s store on second attempt", Path(path).name, second.value)
    return store
