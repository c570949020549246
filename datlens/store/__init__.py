"""
store — the opaque record-store collaborator and the open-session table.

Public API
──────────
DatStore         — abstract store: try_read / query_range / kind
SqliteDatStore   — SQLite-backed DatStore
open_store       — open a store file, detecting its kind
SessionRegistry  — open sessions by stable session id
"""

from datlens.store.models import DatStore, RecordHeader, StoreKind
from datlens.store.db import SqliteDatStore, detect_kind, open_store
from datlens.store.registry import SessionRegistry, StoreSession, make_session_id

__all__ = [
    "DatStore",
    "RecordHeader",
    "StoreKind",
    "SqliteDatStore",
    "detect_kind",
    "open_store",
    "SessionRegistry",
    "StoreSession",
    "make_session_id",
]
