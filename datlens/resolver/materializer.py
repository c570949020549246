"""LazyMaterializer — load the record behind a placeholder row on selection."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Optional

from datlens.exceptions import ClassificationGapError, DecodeFailedError, StoreError
from datlens.resolver.families import FamilyClassifier, get_classifier
from datlens.resolver.models import RangeEntry

if TYPE_CHECKING:
    from datlens.store.registry import StoreSession

__all__ = ["LazyMaterializer"]

logger = logging.getLogger(__name__)


class LazyMaterializer:
    """
    Turns a deferred RangeEntry into its decoded record.

    The decoder is chosen by the family the row was listed from, never by
    inspecting the id.  A successful load is cached on the entry so the
    store is read at most once per row; a failed load leaves the entry a
    placeholder so selecting it again retries.
    """

    def __init__(self, classifier: Optional[FamilyClassifier] = None) -> None:
        self._classifier = classifier or get_classifier()

    def materialize(
        self,
        session: "StoreSession",
        entry: RangeEntry,
        origin_family_id: Optional[int] = None,
    ) -> Any:
        """
        Return the record for *entry*, reading it from the store if needed.

        Raises:
            ClassificationGapError: the origin family has no decoder
            DecodeFailedError:      the id is absent or does not decode
        """
        if entry.materialized is not None:
            return entry.materialized

        origin = entry.origin_family_id if origin_family_id is None else origin_family_id
        decoder = self._classifier.decoder_for(origin) if origin is not None else None
        if decoder is None:
            logger.warning(
                "Classification gap: family %s has no decoder (entry %s)",
                f"0x{origin:08X}" if origin is not None else "<none>",
                entry.display_label,
            )
            raise ClassificationGapError(origin if origin is not None else 0)

        expected = decoder.type_name()
        try:
            record = session.store.try_read(decoder, entry.id)
        except StoreError as exc:
            logger.warning("Decode of %s 0x%08X failed: %s", expected, entry.id, exc)
            raise DecodeFailedError(entry.id, expected, str(exc)) from exc

        if record is None:
            logger.warning("%s 0x%08X not found in %s", expected, entry.id, session.name)
            raise DecodeFailedError(entry.id, expected, "record not found")

        logger.debug("Materialized %s 0x%08X", expected, entry.id)
        return entry.cache(record)
