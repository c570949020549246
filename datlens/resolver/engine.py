"""
RecordResolver — turns a navigation identifier into typed data.

Usage::

    registry = SessionRegistry()
    sid = registry.register(open_store("client_portal.db"))
    engine = RecordResolver(registry)

    result = engine.resolve(FamilyRef(0x0E00000E, session_id=sid))
    result.entries[0].display_label        # "1: Strength Other I"
    engine.activate(result)                 # once the result is shown
    engine.apply_filter(FilterState(name_substring="strength"))

    listing = engine.resolve(FamilyRef(0x05000000, session_id=sid))
    opened = engine.open_entry(listing.identifier, listing.entries[0])
    opened.record                           # SurfaceTexture

Every entry point is a plain blocking call.  Run it off the UI thread
(gui.worker.ResolveWorker) and drop results for superseded selections.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from datlens.config import EngineConfig
from datlens.exceptions import (
    RangeQueryFailedError,
    ResolutionError,
    StoreNotFoundError,
    UnknownFamilyError,
)
from datlens.filters.spell_filter import FilterState, FilteredResult, SpellFilterEngine
from datlens.lookups.builder import LookupContextBuilder
from datlens.records.cell import LandBlock
from datlens.store.registry import SessionRegistry, StoreSession
from .base import ResolveRequest
from .collections import CollectionResolver
from .factory import get_resolver
from .families import FamilyClassifier, get_classifier
from .materializer import LazyMaterializer
from .models import (
    FamilyRef,
    NavigationIdentifier,
    RangeEntry,
    ResolutionResult,
    SelectionContext,
    TagRef,
)
from .range_resolver import RangeResolver

__all__ = ["RecordResolver"]

logger = logging.getLogger(__name__)


def _spell_source(result: ResolutionResult) -> dict:
    return {e.id: e.materialized for e in result.entries}


class RecordResolver:
    """
    Façade over classifier, strategies, materializer, filter and lookups.

    Parameters
    ----------
    registry       : open store sessions
    classifier     : family table (default: the built-in one)
    config         : EngineConfig (default: EngineConfig())
    lookup_builder : cross-reference builder (default: from config)
    """

    def __init__(
        self,
        registry: SessionRegistry,
        classifier: Optional[FamilyClassifier] = None,
        config: Optional[EngineConfig] = None,
        lookup_builder: Optional[LookupContextBuilder] = None,
    ) -> None:
        self.registry = registry
        self.classifier = classifier or get_classifier()
        self.config = config or EngineConfig()
        self.range_resolver = RangeResolver(
            self.classifier, large_range_warning=self.config.large_range_warning,
        )
        self.materializer = LazyMaterializer(self.classifier)
        self.collections = CollectionResolver(self.classifier, self.range_resolver)
        self.lookup_builder = lookup_builder or LookupContextBuilder(
            enabled=self.config.lookup_sources,
        )
        self.filter_engine = SpellFilterEngine()

    # ── Public API ────────────────────────────────────────────────────────

    def resolve(self, identifier: NavigationIdentifier) -> ResolutionResult:
        """
        Resolve *identifier* to a record, ordered rows, a notice or an error.

        Never raises for target-level problems; they come back as ERROR
        results whose status_message is the user-visible explanation.
        """
        try:
            result = self._resolve(identifier)
        except ResolutionError as exc:
            logger.warning("Could not resolve %s: %s", identifier, exc)
            result = ResolutionResult.failure(identifier, exc)

        if result.is_filterable:
            preview = SpellFilterEngine()
            preview.set_active_collection(_spell_source(result))
            result.status_message = preview.apply_filter().status_message
        return result

    def activate(self, result: ResolutionResult) -> None:
        """
        Point the shared filter engine at *result*, the one now on screen.

        resolve() leaves the filter engine alone, so a result computed for
        a superseded selection cannot disturb the current view.  Call this
        only for the result actually accepted.
        """
        if result.is_filterable:
            self.filter_engine.set_active_collection(_spell_source(result))
        else:
            self.filter_engine.clear()

    def open_entry(self, identifier: NavigationIdentifier, entry: RangeEntry) -> ResolutionResult:
        """
        Materialize *entry* from the listing produced for *identifier*.

        Landblock records come back with their environment cells as
        deferred entries.
        """
        try:
            session = self._session(identifier.session_id)
            record = self.materializer.materialize(session, entry, entry.origin_family_id)
        except ResolutionError as exc:
            logger.warning("Could not open %s: %s", entry.display_label, exc)
            return ResolutionResult.failure(identifier, exc)

        descriptor = (
            self.classifier.classify(entry.origin_family_id)
            if entry.origin_family_id is not None else None
        )
        result = ResolutionResult.of_record(identifier, record, descriptor=descriptor)

        if isinstance(record, LandBlock):
            try:
                result.entries = self.collections.resolve_landblock_cells(session, record.id)
            except RangeQueryFailedError as exc:
                logger.warning("%s", exc)
                result.status_message = str(exc)
            else:
                result.status_message = f"{len(result.entries)} EnvCells in this landblock."
        return result

    def build_context(
        self,
        identifier: NavigationIdentifier,
        selected_key: Any = None,
        origin_family_id: Optional[int] = None,
    ) -> SelectionContext:
        """
        Cross-reference context for rendering a selection under *identifier*.

        Raises:
            StoreNotFoundError: the identifier's session is not open
        """
        session = self._session(identifier.session_id)
        if isinstance(identifier, FamilyRef):
            descriptor = self.classifier.classify(identifier.family_id)
            if origin_family_id is None:
                origin_family_id = identifier.family_id
            object_type = descriptor.name if descriptor else str(identifier)
            if identifier.subtype:
                object_type = f"{object_type}/{identifier.subtype}"
        else:
            object_type = identifier.tag

        return SelectionContext(
            identifier=identifier,
            session_id=session.session_id,
            origin_family_id=origin_family_id,
            selected_key=selected_key,
            lookups=self.lookup_builder.build(session),
            object_type=object_type,
        )

    def apply_filter(self, state: Optional[FilterState] = None) -> FilteredResult:
        """Filter the collection last passed to activate()."""
        return self.filter_engine.apply_filter(state)

    # ── Internal helpers ──────────────────────────────────────────────────

    def _session(self, session_id: str) -> StoreSession:
        session = self.registry.find(session_id)
        if session is None:
            raise StoreNotFoundError(session_id)
        return session

    def _resolve(self, identifier: NavigationIdentifier) -> ResolutionResult:
        session = self._session(identifier.session_id)

        if isinstance(identifier, TagRef):
            return self.collections.resolve_tag(session, identifier.tag, identifier)

        descriptor = self.classifier.classify(identifier.family_id)
        if descriptor is None or session.kind not in descriptor.store_kinds:
            raise UnknownFamilyError(identifier.family_id)
        if descriptor.tag:
            return self.collections.resolve_tag(session, descriptor.tag, identifier)

        strategy = get_resolver(descriptor.category)
        logger.debug("Resolving %s as %s", identifier, descriptor.category.value)
        return strategy.resolve(
            ResolveRequest(
                identifier=identifier,
                descriptor=descriptor,
                session=session,
                range_resolver=self.range_resolver,
            )
        )
