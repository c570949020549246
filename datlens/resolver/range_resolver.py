"""
RangeResolver — list a range family's members as placeholder rows.

Listing is header-only: one ``query_range`` call over the family's id
bounds, never a body read.  Materializing a row is the LazyMaterializer's
job and happens one row at a time on selection.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable, Optional

from datlens.exceptions import RangeQueryFailedError, UnknownFamilyError
from datlens.resolver.families import FamilyClassifier, get_classifier
from datlens.resolver.models import FamilyDescriptor, RangeEntry

if TYPE_CHECKING:
    from datlens.store.registry import StoreSession

__all__ = ["RangeResolver"]

logger = logging.getLogger(__name__)


class RangeResolver:
    """
    Parameters
    ----------
    classifier          : family table used to find bounds and labels
    large_range_warning : listings longer than this are logged at WARNING
    """

    def __init__(
        self,
        classifier: Optional[FamilyClassifier] = None,
        large_range_warning: int = 20000,
    ) -> None:
        self._classifier = classifier or get_classifier()
        self.large_range_warning = large_range_warning

    def resolve_range(
        self,
        session: "StoreSession",
        family_id: int,
        base_id: Optional[int] = None,
    ) -> list[RangeEntry]:
        """
        Placeholder rows for every record in the family's id bounds.

        *base_id* shifts the bounds to another block of the same width
        (per-landblock cell families).

        Raises:
            UnknownFamilyError:    *family_id* is not a range family
            RangeQueryFailedError: the store failed during enumeration
        """
        descriptor = self._classifier.classify(family_id)
        if descriptor is None or not descriptor.is_range:
            raise UnknownFamilyError(family_id)

        start, end = descriptor.range_bounds(base_id)
        return self.list_headers(
            session,
            descriptor,
            start,
            end,
            lambda record_id: start <= record_id <= end,
        )

    def list_headers(
        self,
        session: "StoreSession",
        descriptor: FamilyDescriptor,
        start: int,
        end: int,
        accept: Callable[[int], bool],
    ) -> list[RangeEntry]:
        """
        One header query over ``[start, end]``; rows for ids passing *accept*,
        ascending by id, attributed to *descriptor*.
        """
        try:
            headers = session.store.query_range(start, end)
        except Exception as exc:  # noqa: BLE001
            raise RangeQueryFailedError(descriptor.family_id, str(exc)) from exc

        record_ids = sorted({h.id for h in headers if accept(h.id)})
        dropped = len(headers) - len(record_ids)
        if dropped:
            logger.debug(
                "%s: ignored %d header(s) outside 0x%08X-0x%08X",
                descriptor.name, dropped, start, end,
            )
        if len(record_ids) > self.large_range_warning:
            logger.warning(
                "%s: listing %d entries (threshold %d)",
                descriptor.name, len(record_ids), self.large_range_warning,
            )

        return [
            RangeEntry(
                id=record_id,
                display_label=descriptor.format_label(record_id),
                origin_family_id=descriptor.family_id,
            )
            for record_id in record_ids
        ]
