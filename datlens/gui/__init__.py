"""
gui — presentation adapters for a PyQt6 front-end.

Public API
──────────
viewmodels            — pure-Python state containers (no Qt)
worker.ResolveWorker  — QObject running engine calls off the UI thread

The worker is not imported here so that the view-models stay usable
without PyQt6 installed.
"""

from datlens.gui import viewmodels

__all__ = ["viewmodels"]
