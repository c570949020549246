"""
Named collections (tags) of each store kind.

Cell store
──────────
LandBlocks      every id whose low word is 0xFFFF
LandBlockInfos  every id whose low word is 0xFFFE
EnvCells        interior cells; listed per landblock only, via
                resolve_landblock_cells(), since a listing over every
                landblock would enumerate the whole store

Portal store
────────────
No named collections beyond the family id space; every tag is
unsupported.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

from datlens.constants import (
    CELL_RANGE_MASK,
    ENV_CELLS,
    LANDBLOCK_MASK,
    MAX_ID,
    TAG_ENV_CELLS,
)
from datlens.exceptions import UnknownFamilyError
from datlens.records.cell import LANDBLOCK_INFO_SUFFIX, LANDBLOCK_SUFFIX
from datlens.store.models import StoreKind
from .families import FamilyClassifier
from .models import FamilyDescriptor, NavigationIdentifier, RangeEntry, ResolutionResult
from .range_resolver import RangeResolver

if TYPE_CHECKING:
    from datlens.store.registry import StoreSession

__all__ = ["CollectionResolver"]

logger = logging.getLogger(__name__)

ENV_CELLS_NOTICE = "Select a LandBlock first to list its EnvCells."

_SENTINEL_SUFFIXES = frozenset({LANDBLOCK_SUFFIX, LANDBLOCK_INFO_SUFFIX})


class CollectionResolver:

    def __init__(self, classifier: FamilyClassifier, range_resolver: RangeResolver) -> None:
        self._classifier = classifier
        self._range_resolver = range_resolver

    def tags(self, kind: StoreKind) -> list[str]:
        """Named collections available in a store of *kind*."""
        return [
            d.tag for d in self._classifier.descriptors(kind)
            if d.tag
        ]

    def descriptor_for(self, session: "StoreSession", tag: str) -> FamilyDescriptor:
        descriptor = self._classifier.by_tag(tag)
        if descriptor is None or session.kind not in descriptor.store_kinds:
            raise UnknownFamilyError(tag=tag)
        return descriptor

    def resolve_tag(
        self,
        session: "StoreSession",
        tag: str,
        identifier: Optional[NavigationIdentifier] = None,
    ) -> ResolutionResult:
        """
        Resolve a named collection.

        Raises:
            UnknownFamilyError:    the tag is not a collection of this store kind
            RangeQueryFailedError: the header query failed
        """
        descriptor = self.descriptor_for(session, tag)
        if tag == TAG_ENV_CELLS:
            return ResolutionResult.notice(identifier, ENV_CELLS_NOTICE, descriptor=descriptor)

        # The family id of a landblock-level family is its low-word suffix
        suffix = descriptor.family_id & CELL_RANGE_MASK
        entries = self._range_resolver.list_headers(
            session,
            descriptor,
            0,
            MAX_ID,
            lambda record_id: (record_id & CELL_RANGE_MASK) == suffix,
        )
        logger.info("%s: %d entries in %s", tag, len(entries), session.name)
        message = (
            f"{len(entries)} {tag}. Select one."
            if entries else f"No {tag} found in {session.name}."
        )
        return ResolutionResult.of_entries(
            identifier, entries, descriptor=descriptor, status_message=message,
        )

    def resolve_landblock_cells(self, session: "StoreSession", landblock_id: int) -> list[RangeEntry]:
        """
        Deferred EnvCell rows inside *landblock_id*'s 16-bit sub-range,
        excluding the landblock and landblock-info records themselves.

        Raises:
            RangeQueryFailedError: the header query failed
        """
        entries = self._range_resolver.resolve_range(
            session, ENV_CELLS, base_id=landblock_id & LANDBLOCK_MASK,
        )
        return [e for e in entries if (e.id & CELL_RANGE_MASK) not in _SENTINEL_SUFFIXES]
