"""
GUI ViewModels — pure-Python state behind the tree, list and detail panes.

No Qt imports here; every class is testable without a display.
Qt widgets observe these objects and update themselves; signal emission
is handled by the Qt layer.

Public API
──────────
NavigationState        — enum for the resolve lifecycle of one selection
NavigationViewModel    — current selection, last-selection-wins results
SpellFilterViewModel   — filter inputs + filtered spell rows
"""

import logging
from enum import Enum
from typing import TYPE_CHECKING, Any, Optional

from datlens.exceptions import DatLensError
from datlens.filters.spell_filter import FilteredResult, FilterState, SpellFilterEngine
from datlens.records.tables import MagicSchool
from datlens.resolver.models import (
    NavigationIdentifier,
    RangeEntry,
    ResolutionResult,
    ResultKind,
)

if TYPE_CHECKING:
    from datlens.resolver.engine import RecordResolver

__all__ = [
    "NavigationState",
    "NavigationViewModel",
    "SpellFilterViewModel",
]

logger = logging.getLogger(__name__)


# ── NavigationViewModel ────────────────────────────────────────────────────────

class NavigationState(str, Enum):
    IDLE    = "idle"
    LOADING = "loading"
    READY   = "ready"
    ERROR   = "error"


class NavigationViewModel:
    """
    Tracks the selected tree node and what the panes should show for it.

    Every selection gets a new token from begin(); a result is applied by
    accept() only if it carries the newest token.  Results for selections
    the user has already moved away from are dropped.  When an engine is
    given, an accepted result is also handed to ``engine.activate()`` so
    the spell filter follows the view on screen and nothing else.

    Attributes
    ──────────
    identifier       — the selected node's identifier, or None
    state            — NavigationState
    result           — last applied ResolutionResult, or None
    status_message   — text for the status bar
    entries          — rows for the list pane
    selected_record  — record for the detail pane
    filter_visible   — derived: whether the spell filter bar is shown
    """

    def __init__(self, engine: Optional["RecordResolver"] = None) -> None:
        self._engine = engine
        self.identifier:      Optional[NavigationIdentifier] = None
        self.state:           NavigationState                = NavigationState.IDLE
        self.result:          Optional[ResolutionResult]     = None
        self.status_message:  str                            = ""
        self.entries:         list[RangeEntry]               = []
        self.selected_record: Any                            = None
        self._token = 0

    @property
    def current_token(self) -> int:
        return self._token

    def begin(self, identifier: NavigationIdentifier) -> int:
        """Start a new selection; returns the token its result must carry."""
        self._token += 1
        self.identifier = identifier
        self.state = NavigationState.LOADING
        self.status_message = f"Loading {identifier}…"
        self.entries = []
        self.selected_record = None
        self.result = None
        return self._token

    def accept(self, token: int, result: ResolutionResult) -> bool:
        """Apply *result* if *token* is current. Returns False for stale results."""
        if token != self._token:
            logger.debug("Dropping stale result for %s (token %d < %d)",
                         result.identifier, token, self._token)
            return False

        self.result = result
        self.status_message = result.status_message
        self.entries = list(result.entries)
        self.selected_record = result.record
        self.state = NavigationState.ERROR if result.kind is ResultKind.ERROR \
            else NavigationState.READY
        if self._engine is not None:
            self._engine.activate(result)
        return True

    def fail(self, token: int, message: str) -> bool:
        """Record an unexpected failure for *token*, ignored if stale."""
        if token != self._token:
            return False
        self.state = NavigationState.ERROR
        self.status_message = f"Error: {message}"
        return True

    def show_entry(self, record: Any) -> None:
        """Put a record opened from the list pane into the detail pane."""
        self.selected_record = record

    @property
    def filter_visible(self) -> bool:
        return self.result is not None and self.result.is_filterable

    @property
    def error(self) -> Optional[DatLensError]:
        return self.result.error if self.result is not None else None


# ── SpellFilterViewModel ───────────────────────────────────────────────────────

class SpellFilterViewModel:
    """
    Filter bar state.  Each setter recomputes the projection from the
    engine's full source.

    Attributes
    ──────────
    name_filter — substring matched against spell names
    school      — MagicSchool or None
    component   — component id or None
    result      — FilteredResult of the last recompute
    """

    def __init__(self, engine: SpellFilterEngine) -> None:
        self._engine = engine
        self._state = FilterState()
        self.result: FilteredResult = engine.apply_filter(self._state)

    @property
    def state(self) -> FilterState:
        return self._state

    @property
    def name_filter(self) -> str:
        return self._state.name_substring

    @name_filter.setter
    def name_filter(self, value: str) -> None:
        self._update(name_substring=value or "")

    @property
    def school(self) -> Optional[MagicSchool]:
        return self._state.school

    @school.setter
    def school(self, value: Optional[MagicSchool]) -> None:
        self._update(school=value)

    @property
    def component(self) -> Optional[int]:
        return self._state.component

    @component.setter
    def component(self, value: Optional[int]) -> None:
        self._update(component=value)

    def reset(self) -> FilteredResult:
        """Clear every predicate."""
        self._state = FilterState()
        return self.refresh()

    def refresh(self) -> FilteredResult:
        """Recompute against the engine's current collection."""
        self.result = self._engine.apply_filter(self._state)
        return self.result

    @property
    def status_message(self) -> str:
        return self.result.status_message

    @property
    def rows(self) -> list[tuple[int, str]]:
        return [(key, label) for key, label, _spell in self.result.items]

    def _update(self, **changes) -> None:
        self._state = FilterState(
            name_substring=changes.get("name_substring", self._state.name_substring),
            school=changes.get("school", self._state.school),
            component=changes.get("component", self._state.component),
        )
        self.refresh()
