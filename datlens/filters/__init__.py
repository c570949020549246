"""
filters — predicate evaluation over the filterable spell collection.

Public API
──────────
FilterState        — name substring / school / component predicate
FilteredResult     — ordered rows plus a legible status message
SpellFilterEngine  — holds the active collection, recomputes on demand
"""

from .spell_filter import FilteredResult, FilterState, SpellFilterEngine, spell_label

__all__ = ["FilteredResult", "FilterState", "SpellFilterEngine", "spell_label"]
