"""
Data models for the resolver module.

Key concepts
────────────
FamilyRef / TagRef   — the two address shapes a navigation node carries
FamilyDescriptor     — static description of one record family (the
                       hand-built schema the store itself lacks)
CollectionView       — how one named sub-collection of a table record is
                       projected into rows
RangeEntry           — one list row; a placeholder until materialized
ResolutionResult     — what resolve() hands back: a record, rows, a
                       notice, or a typed error
SelectionContext     — everything rendering needs about the current
                       selection, passed explicitly
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Iterable, Mapping, Optional, Union

from datlens.constants import FAMILY_RANGE_MASK, MAX_ID
from datlens.exceptions import DatLensError
from datlens.lookups.builder import LookupContext
from datlens.store.models import StoreKind

__all__ = [
    "FamilyRef",
    "TagRef",
    "NavigationIdentifier",
    "FamilyCategory",
    "ViewOrder",
    "CollectionView",
    "FamilyDescriptor",
    "RangeEntry",
    "LookupContext",
    "ResultKind",
    "ResolutionResult",
    "SelectionContext",
]


# ── Identifiers ───────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class FamilyRef:
    """``(family_id, subtype, session_id)``; subtype "" means no sub-category."""
    family_id:  int
    subtype:    str = ""
    session_id: str = ""

    def __post_init__(self) -> None:
        if not isinstance(self.family_id, int) or not 0 <= self.family_id <= MAX_ID:
            raise ValueError(f"family_id must be an unsigned 32-bit int, got {self.family_id!r}")

    def __str__(self) -> str:
        text = f"0x{self.family_id:08X}"
        return f"{text}/{self.subtype}" if self.subtype else text


@dataclass(frozen=True)
class TagRef:
    """A named top-level collection of one store (e.g. ``LandBlocks``)."""
    tag:        str
    session_id: str = ""

    def __post_init__(self) -> None:
        if not self.tag:
            raise ValueError("tag must not be empty")

    @classmethod
    def parse(cls, raw: str, session_id: str = "") -> "TagRef":
        """
        Parse a tree-node id of the form ``"{tag}_{session_id}"``.

        A bare tag takes *session_id*.  When both the suffix and
        *session_id* are given they must agree.
        """
        tag, sep, suffix = raw.partition("_")
        if not sep:
            return cls(tag=tag, session_id=session_id)
        if session_id and suffix != session_id:
            raise ValueError(
                f"Tag {raw!r} belongs to session {suffix!r}, not {session_id!r}"
            )
        return cls(tag=tag, session_id=suffix)

    def node_id(self) -> str:
        return f"{self.tag}_{self.session_id}"

    def __str__(self) -> str:
        return self.tag


NavigationIdentifier = Union[FamilyRef, TagRef]


# ── Family descriptors ────────────────────────────────────────────────────────

class FamilyCategory(str, Enum):
    """
    SINGLE_OBJECT
        One record at the family id, shown as-is.
    DICTIONARY_COLLECTION
        One record at the family id whose body is a keyed collection;
        resolves to one row per key.
    COMPOSITE_SUBTYPES
        One record holding several named sub-collections; a subtype must
        be chosen before anything is listed.
    RANGE_COLLECTION
        Every record in the family's id sub-range; listed as placeholders
        and materialized one at a time.
    """
    SINGLE_OBJECT         = "single_object"
    DICTIONARY_COLLECTION = "dictionary_collection"
    COMPOSITE_SUBTYPES    = "composite_subtypes"
    RANGE_COLLECTION      = "range_collection"


class ViewOrder(str, Enum):
    KEY       = "key"         # ascending by key
    INSERTION = "insertion"   # source order (positional collections)


@dataclass(frozen=True)
class CollectionView:
    """Projection of one sub-collection of a table record into rows."""
    title:      str
    items:      Callable[[Any], Iterable[tuple[Any, Any]]]
    label:      Callable[[Any, Any], str]
    order:      ViewOrder = ViewOrder.KEY
    filterable: bool      = False


@dataclass(frozen=True)
class FamilyDescriptor:
    """
    Static description of one logical record family.

    record_type is the decoder: the record class read at ``family_id`` for
    table families, or for each member of a range family.  It is None only
    for range families whose member layout has no decoder yet.

    views maps subtype → CollectionView; "" is the view used when no
    subtype is given.
    """
    family_id:          int
    name:               str
    category:           FamilyCategory
    record_type:        Optional[type]                 = None
    views:              Mapping[str, CollectionView]   = field(default_factory=dict, compare=False, hash=False)
    range_mask:         int                            = FAMILY_RANGE_MASK
    range_start_offset: int                            = 0
    entry_label:        str                            = "File 0x{id:08X}"
    store_kinds:        frozenset[StoreKind]           = frozenset({StoreKind.PORTAL})
    tag:                str                            = ""

    @property
    def subtypes(self) -> tuple[str, ...]:
        return tuple(name for name in self.views if name)

    @property
    def is_range(self) -> bool:
        return self.category is FamilyCategory.RANGE_COLLECTION

    @property
    def has_decoder(self) -> bool:
        return self.record_type is not None

    def range_bounds(self, base_id: Optional[int] = None) -> tuple[int, int]:
        """
        Inclusive ``(start, end)`` id bounds of the family's members.

        *base_id* selects a different block of the same width (used for
        per-landblock cell families); defaults to the family id.
        """
        base = (self.family_id if base_id is None else base_id) & ~self.range_mask & MAX_ID
        return base + self.range_start_offset, base | self.range_mask

    def format_label(self, record_id: int) -> str:
        return self.entry_label.format(id=record_id)


# ── Rows ──────────────────────────────────────────────────────────────────────

@dataclass
class RangeEntry:
    """
    One list row.

    Range rows start as placeholders (``materialized is None``) and are
    filled in by the materializer; keyed-collection rows are created
    already materialized.  Once set, ``materialized`` never reverts.
    """
    id:               Union[int, str]
    display_label:    str
    origin_family_id: Optional[int] = None
    materialized:     Any           = None

    def __setattr__(self, name: str, value: Any) -> None:
        if name == "materialized" and value is None \
                and getattr(self, "materialized", None) is not None:
            raise AttributeError(f"entry {self.display_label!r} is already materialized")
        super().__setattr__(name, value)

    @property
    def is_deferred(self) -> bool:
        return self.materialized is None

    def cache(self, record: Any) -> Any:
        """Store *record* unless a value is already cached; return the cached value."""
        if self.materialized is None:
            self.materialized = record
        return self.materialized

    def __str__(self) -> str:
        return self.display_label


# ── Results ───────────────────────────────────────────────────────────────────

class ResultKind(str, Enum):
    RECORD  = "record"    # one materialized record
    ENTRIES = "entries"   # ordered rows (keyed or deferred)
    NOTICE  = "notice"    # nothing to list yet; message says why
    ERROR   = "error"     # typed failure for the addressed target


@dataclass
class ResolutionResult:
    identifier:     Optional[NavigationIdentifier]
    kind:           ResultKind
    record:         Any                          = None
    entries:        list[RangeEntry]             = field(default_factory=list)
    status_message: str                          = ""
    error:          Optional[DatLensError]       = None
    is_filterable:  bool                         = False
    descriptor:     Optional[FamilyDescriptor]   = None

    @classmethod
    def of_record(cls, identifier, record, descriptor=None, status_message: str = "") -> "ResolutionResult":
        return cls(identifier=identifier, kind=ResultKind.RECORD, record=record,
                   descriptor=descriptor, status_message=status_message)

    @classmethod
    def of_entries(
        cls,
        identifier,
        entries: list[RangeEntry],
        descriptor=None,
        status_message: str = "",
        is_filterable: bool = False,
        record=None,
    ) -> "ResolutionResult":
        return cls(identifier=identifier, kind=ResultKind.ENTRIES, entries=entries,
                   descriptor=descriptor, status_message=status_message,
                   is_filterable=is_filterable, record=record)

    @classmethod
    def notice(cls, identifier, message: str, descriptor=None) -> "ResolutionResult":
        return cls(identifier=identifier, kind=ResultKind.NOTICE,
                   status_message=message, descriptor=descriptor)

    @classmethod
    def failure(cls, identifier, error: DatLensError, descriptor=None) -> "ResolutionResult":
        return cls(identifier=identifier, kind=ResultKind.ERROR, error=error,
                   status_message=str(error), descriptor=descriptor)

    @property
    def ok(self) -> bool:
        return self.kind is not ResultKind.ERROR

    def entry(self, key) -> Optional[RangeEntry]:
        for e in self.entries:
            if e.id == key:
                return e
        return None


@dataclass(frozen=True)
class SelectionContext:
    """
    The current selection, handed to rendering instead of ambient state.

    lookups holds the cross-reference tables built for the selection's
    store; object_type names the family (or collection) being shown.
    """
    identifier:       NavigationIdentifier
    session_id:       str
    origin_family_id: Optional[int]           = None
    selected_key:     Any                     = None
    lookups:          LookupContext           = field(default_factory=dict, compare=False, hash=False)
    object_type:      str                     = ""

    def lookup(self, table: str, key: int) -> Optional[str]:
        return self.lookups.get(table, {}).get(key)
