"""
SpellFilterEngine — stateful filter over the spell catalog.

The engine holds a reference to the active spell collection and
recomputes a filtered, key-ordered projection from the full source on
every apply_filter() call.  It never mutates the source.

When the selection moves away from the spell view the engine is cleared;
applying a filter then yields an explicit "not applicable" result rather
than stale rows from the previous view.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Mapping, Optional

from datlens.records.tables import MagicSchool, SpellBase

__all__ = ["FilterState", "FilteredResult", "SpellFilterEngine", "spell_label"]

logger = logging.getLogger(__name__)

NO_COLLECTION_MESSAGE = "No spell table loaded to filter."
EMPTY_SOURCE_MESSAGE  = "No spells found in the loaded spell table."


@dataclass(frozen=True)
class FilterState:
    name_substring: str                   = ""
    school:         Optional[MagicSchool] = None
    component:      Optional[int]         = None

    @property
    def is_empty(self) -> bool:
        return not self.name_substring.strip() and self.school is None and self.component is None

    def matches(self, spell: SpellBase) -> bool:
        # whitespace-only input means no name predicate; otherwise match verbatim
        if self.name_substring.strip() \
                and self.name_substring.casefold() not in (spell.name or "").casefold():
            return False
        if self.school is not None and spell.school != self.school:
            return False
        if self.component is not None and self.component not in spell.components:
            return False
        return True


@dataclass
class FilteredResult:
    """
    items          — (key, label, spell) rows ordered by key
    status_message — "Listing all N …" vs "Showing N of M …"
    is_empty       — no rows to show
    applicable     — False when no spell collection is active
    total          — size of the unfiltered source
    """
    items:          list[tuple[int, str, SpellBase]] = field(default_factory=list)
    status_message: str                              = ""
    is_empty:       bool                             = True
    applicable:     bool                             = True
    total:          int                              = 0


def spell_label(key: int, spell: SpellBase) -> str:
    return f"{key}: {spell.name or '?'}"


class SpellFilterEngine:

    def __init__(self) -> None:
        self._source: Optional[Mapping[int, SpellBase]] = None

    def set_active_collection(self, spells: Optional[Mapping[int, SpellBase]]) -> None:
        """Make *spells* the collection to filter; None clears it."""
        self._source = spells
        if spells is None:
            logger.debug("Spell filter cleared")
        else:
            logger.debug("Spell filter active over %d spells", len(spells))

    def clear(self) -> None:
        self.set_active_collection(None)

    @property
    def active(self) -> bool:
        return self._source is not None

    def total_count(self) -> int:
        return len(self._source) if self._source is not None else 0

    def apply_filter(self, state: Optional[FilterState] = None) -> FilteredResult:
        state = state or FilterState()
        source = self._source
        if source is None:
            return FilteredResult(
                status_message=NO_COLLECTION_MESSAGE, is_empty=True, applicable=False,
            )

        total = len(source)
        if total == 0:
            return FilteredResult(status_message=EMPTY_SOURCE_MESSAGE, is_empty=True, total=0)

        items = [
            (key, spell_label(key, spell), spell)
            for key, spell in sorted(source.items(), key=lambda kv: kv[0])
            if state.is_empty or state.matches(spell)
        ]

        if state.is_empty:
            message = f"Listing all {len(items)} spells."
        else:
            message = f"Showing {len(items)} of {total} matching spells."
        if items:
            message += " Select one."

        return FilteredResult(
            items=items,
            status_message=message,
            is_empty=not items,
            applicable=True,
            total=total,
        )
