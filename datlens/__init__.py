"""
datlens — record resolution and cross-reference engine for dat stores.

Packages
────────
records    — typed record classes
store      — store adapter and open-session registry
resolver   — family classifier, range listing, materialization, engine
filters    — spell catalog filter
lookups    — id → name tables for cross-references
gui        — view-models and the Qt background worker
cli        — ``datlens`` command
"""

__version__ = "0.1.0"
