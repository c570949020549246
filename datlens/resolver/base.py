"""Abstract base class for the per-category resolution strategies."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from datlens.exceptions import DecodeFailedError, StoreError, UnsupportedSubtypeError
from .models import (
    CollectionView,
    FamilyCategory,
    FamilyDescriptor,
    FamilyRef,
    RangeEntry,
    ResolutionResult,
    ViewOrder,
)

if TYPE_CHECKING:
    from datlens.store.registry import StoreSession
    from .range_resolver import RangeResolver

__all__ = ["AbstractCategoryResolver", "ResolveRequest"]

logger = logging.getLogger(__name__)


@dataclass
class ResolveRequest:
    """Everything a strategy needs for one resolution."""
    identifier:     FamilyRef
    descriptor:     FamilyDescriptor
    session:        "StoreSession"
    range_resolver: "RangeResolver"


class AbstractCategoryResolver(ABC):
    """
    Resolves a FamilyRef whose descriptor has one particular category.

    Strategies are stateless; one instance per category is shared.
    Target-level failures are raised as ResolutionError subclasses and
    turned into ERROR results by the engine.
    """

    @property
    @abstractmethod
    def category(self) -> FamilyCategory:
        """The FamilyCategory this strategy handles."""

    @abstractmethod
    def resolve(self, request: ResolveRequest) -> ResolutionResult:
        """Produce the result for ``request.identifier``."""

    # ── Shared helpers ────────────────────────────────────────────────────

    @staticmethod
    def read_table(request: ResolveRequest) -> Any:
        """
        Exact-id read of the family's own record.

        Raises:
            DecodeFailedError: the record is absent or does not decode
        """
        descriptor = request.descriptor
        expected = descriptor.record_type.type_name()
        try:
            record = request.session.store.try_read(descriptor.record_type, descriptor.family_id)
        except StoreError as exc:
            raise DecodeFailedError(descriptor.family_id, expected, str(exc)) from exc
        if record is None:
            raise DecodeFailedError(descriptor.family_id, expected, "record not found")
        return record

    @staticmethod
    def select_view(request: ResolveRequest) -> CollectionView:
        """The view named by the request's subtype, or UnsupportedSubtypeError."""
        descriptor = request.descriptor
        view = descriptor.views.get(request.identifier.subtype)
        if view is None:
            raise UnsupportedSubtypeError(descriptor.name, request.identifier.subtype)
        return view

    @staticmethod
    def project(view: CollectionView, record: Any, family_id: int) -> list[RangeEntry]:
        """Rows of *view* over *record*, already materialized."""
        pairs = list(view.items(record))
        if view.order is ViewOrder.KEY:
            pairs.sort(key=lambda kv: kv[0])
        return [
            RangeEntry(
                id=key,
                display_label=view.label(key, value),
                origin_family_id=family_id,
                materialized=value,
            )
            for key, value in pairs
        ]
