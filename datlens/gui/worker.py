"""
ResolveWorker — runs one engine call in a background thread.

Usage (tree selection handler)::

    token = self._nav.begin(identifier)
    self._thread = QThread()
    self._worker = ResolveWorker(self._engine, identifier, token)
    self._worker.moveToThread(self._thread)
    self._thread.started.connect(self._worker.run)
    self._worker.resolved.connect(self._on_resolved)     # → nav.accept()
    self._worker.failed.connect(self._on_failed)         # → nav.fail()
    self._worker.resolved.connect(self._thread.quit)
    self._worker.failed.connect(self._thread.quit)
    self._thread.start()

Signals
───────
resolved(object, object) — (token, ResolutionResult)
failed(object, str)      — (token, human-readable error message)

The token is passed back untouched; NavigationViewModel.accept() uses it
to drop results for selections the user has since left.
"""

import logging
from typing import Any, Optional

from PyQt6.QtCore import QObject, pyqtSignal

from datlens.resolver.engine import RecordResolver
from datlens.resolver.models import NavigationIdentifier, RangeEntry

__all__ = ["ResolveWorker"]

logger = logging.getLogger(__name__)


class ResolveWorker(QObject):
    """
    Wraps RecordResolver.resolve (or open_entry, when *entry* is given)
    for execution in a QThread.

    All interaction with the GUI must go through signals — never touch
    Qt widgets from inside run().
    """

    resolved = pyqtSignal(object, object)   # token, ResolutionResult
    failed   = pyqtSignal(object, str)      # token, error message

    def __init__(
        self,
        engine: RecordResolver,
        identifier: NavigationIdentifier,
        token: Any,
        entry: Optional[RangeEntry] = None,
    ) -> None:
        super().__init__()
        self._engine     = engine
        self._identifier = identifier
        self._token      = token
        self._entry      = entry

    def run(self) -> None:
        """Entry point — connect QThread.started to this slot."""
        try:
            if self._entry is None:
                result = self._engine.resolve(self._identifier)
            else:
                result = self._engine.open_entry(self._identifier, self._entry)
            self.resolved.emit(self._token, result)
        except Exception as exc:  # noqa: BLE001
            logger.exception("ResolveWorker.run() failed for %s", self._identifier)
            self.failed.emit(self._token, str(exc))
