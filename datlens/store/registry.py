"""
SessionRegistry — the set of currently open stores.

Every resolution names its store by session id; the registry is the only
place that maps that id back to a live store handle.

Usage::

    registry = SessionRegistry()
    sid = registry.register(open_store("client_portal.db"))
    session = registry.find(sid)
    ...
    registry.close_all()
"""

from __future__ import annotations

import hashlib
import logging
import threading
from dataclasses import dataclass
from typing import Optional

from datlens.store.models import DatStore, StoreKind

__all__ = ["StoreSession", "SessionRegistry", "make_session_id"]

logger = logging.getLogger(__name__)


@dataclass
class StoreSession:
    """One open store handle and the id the rest of the engine knows it by."""
    session_id: str
    store:      DatStore
    kind:       StoreKind
    writable:   bool
    name:       str


def make_session_id(name: str, identity: str, writable: bool) -> str:
    """
    ``"{name}_{digest}_{RW|RO}"`` where digest is the first 12 hex chars of
    SHA-256 over the store identity.  Deterministic for one identity.
    """
    digest = hashlib.sha256(identity.encode("utf-8")).hexdigest()[:12]
    return f"{name}_{digest}_{'RW' if writable else 'RO'}"


class SessionRegistry:
    """
    Thread-safe table of open store sessions.

    Lookups may come from a worker thread while the UI thread registers or
    closes stores; all table access is under one lock.  Store I/O (close)
    happens outside the lock.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._sessions: dict[str, StoreSession] = {}

    # ── Public API ────────────────────────────────────────────────────────

    def register(
        self,
        store: DatStore,
        kind: Optional[StoreKind] = None,
        writable: Optional[bool] = None,
    ) -> str:
        """
        Add *store* and return its session id.

        Registering the same store identity again returns the existing id
        without creating a second session.
        """
        kind = kind or store.kind
        writable = store.writable if writable is None else writable
        session_id = make_session_id(store.name, store.identity, writable)

        with self._lock:
            if session_id in self._sessions:
                logger.debug("Store %s already registered as %s", store.name, session_id)
                return session_id
            self._sessions[session_id] = StoreSession(
                session_id=session_id,
                store=store,
                kind=kind,
                writable=writable,
                name=store.name,
            )

        logger.info("Registered %s store %s as %s", kind.value, store.name, session_id)
        return session_id

    def find(self, session_id: str) -> Optional[StoreSession]:
        """Return the session, or None if it is not open."""
        with self._lock:
            return self._sessions.get(session_id)

    def sessions(self) -> list[StoreSession]:
        """Snapshot of open sessions in registration order."""
        with self._lock:
            return list(self._sessions.values())

    def close(self, session_id: str) -> bool:
        """Close one session. Returns False if it was not open."""
        with self._lock:
            session = self._sessions.pop(session_id, None)
        if session is None:
            return False
        self._close_store(session)
        return True

    def close_all(self) -> int:
        """
        Close every open store.  Safe with zero sessions.

        A store whose close fails is logged and still removed.
        Returns the number of sessions closed.
        """
        with self._lock:
            closing = list(self._sessions.values())
            self._sessions.clear()
        for session in closing:
            self._close_store(session)
        if closing:
            logger.info("Closed %d store session(s)", len(closing))
        return len(closing)

    # ── Internal helpers ──────────────────────────────────────────────────

    @staticmethod
    def _close_store(session: StoreSession) -> None:
        try:
            session.store.close()
        except Exception as exc:  # noqa: BLE001
            logger.warning("Error closing store %s: %s", session.session_id, exc)
        else:
            logger.debug("Closed store session %s", session.session_id)

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)

    def __contains__(self, session_id: object) -> bool:
        with self._lock:
            return session_id in self._sessions
