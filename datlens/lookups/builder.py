"""
LookupContextBuilder — id → name tables for rendering cross-references.

Records in one family refer to records of another by id (a heritage
group lists skill ids, a spell lists component ids).  Rendering shows a
name instead of the raw id when the owning table is readable.

Sources
───────
skills          ← SkillTable           0x0E000004
spells          ← SpellTable           0x0E00000E
components      ← SpellComponentTable  0x0E00000F
starting-areas  ← CharGen              0x0E000002   (key = position)

Each source is loaded independently; an unreadable source is simply
absent from the context and rendering falls back to the raw id.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Iterable, Optional

from datlens import constants as ids
from datlens.config import DEFAULT_LOOKUP_SOURCES
from datlens.exceptions import LookupSourceUnavailable, StoreError
from datlens.records.tables import CharGen, SkillTable, SpellComponentTable, SpellTable
from datlens.store.models import StoreKind

if TYPE_CHECKING:
    from datlens.store.registry import StoreSession

__all__ = ["LookupContext", "LookupSource", "LOOKUP_SOURCES", "LookupContextBuilder", "display_name"]

logger = logging.getLogger(__name__)

# semantic name → (id → display name)
LookupContext = dict[str, dict[int, str]]


@dataclass(frozen=True)
class LookupSource:
    """One auxiliary table: where it lives and how to pull (key, name) pairs."""
    key:         str
    family_id:   int
    record_type: type
    names:       Callable[[Any], Iterable[tuple[int, Optional[str]]]]


LOOKUP_SOURCES: tuple[LookupSource, ...] = (
    LookupSource(
        "skills", ids.SKILL_TABLE, SkillTable,
        lambda table: ((k, v.name) for k, v in table.skills.items()),
    ),
    LookupSource(
        "spells", ids.SPELL_TABLE, SpellTable,
        lambda table: ((k, v.name) for k, v in table.spells.items()),
    ),
    LookupSource(
        "components", ids.SPELL_COMPONENT_TABLE, SpellComponentTable,
        lambda table: ((k, v.name) for k, v in table.components.items()),
    ),
    # Heritage groups reference starting areas by position, so the
    # position is the key.
    LookupSource(
        "starting-areas", ids.CHAR_GEN, CharGen,
        lambda chargen: ((i, a.name) for i, a in enumerate(chargen.starting_areas)),
    ),
)


class LookupContextBuilder:
    """
    Builds a fresh LookupContext per call.

    Parameters
    ----------
    sources : the auxiliary tables to try, default LOOKUP_SOURCES
    enabled : keys of *sources* to use; others are skipped
    """

    def __init__(
        self,
        sources: Iterable[LookupSource] = LOOKUP_SOURCES,
        enabled: Iterable[str] = DEFAULT_LOOKUP_SOURCES,
    ) -> None:
        wanted = set(enabled)
        self._sources = tuple(s for s in sources if s.key in wanted)

    @property
    def source_keys(self) -> tuple[str, ...]:
        return tuple(s.key for s in self._sources)

    def build(self, session: "StoreSession") -> LookupContext:
        """
        Union of the tables that load.  Never raises for a missing or
        undecodable source.
        """
        if session.kind is not StoreKind.PORTAL:
            # Cell stores carry no auxiliary tables
            return {}

        context: LookupContext = {}
        for source in self._sources:
            try:
                context[source.key] = self._load(session, source)
            except LookupSourceUnavailable as exc:
                logger.debug("%s", exc)
        return context

    @staticmethod
    def _load(session: "StoreSession", source: LookupSource) -> dict[int, str]:
        try:
            record = session.store.try_read(source.record_type, source.family_id)
        except StoreError as exc:
            raise LookupSourceUnavailable(source.key, str(exc)) from exc
        if record is None:
            raise LookupSourceUnavailable(
                source.key, f"0x{source.family_id:08X} not present in {session.name}"
            )
        # Entries without a name are left out rather than shown blank
        return {key: name for key, name in source.names(record) if name}


def display_name(context: LookupContext, table: str, key: int) -> str:
    """Name for *key* from *table*, or the raw id when it is unknown."""
    name = context.get(table, {}).get(key)
    return name if name is not None else str(key)
