"""
lookups — cross-reference name tables built from auxiliary records.

Public API
──────────
LookupContextBuilder  — best-effort union of id → name tables
LookupSource          — one auxiliary table definition
display_name          — name for an id, falling back to the id itself
"""

from .builder import LOOKUP_SOURCES, LookupContext, LookupContextBuilder, LookupSource, display_name

__all__ = ["LOOKUP_SOURCES", "LookupContext", "LookupContextBuilder", "LookupSource", "display_name"]
