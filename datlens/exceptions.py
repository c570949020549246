"""
Project-wide custom exception hierarchy.
All modules raise subclasses of DatLensError — never bare Exception.
"""

__all__ = [
    "DatLensError",
    "ResolutionError",
    "UnknownFamilyError",
    "UnsupportedSubtypeError",
    "StoreNotFoundError",
    "RangeQueryFailedError",
    "DecodeFailedError",
    "ClassificationGapError",
    "LookupSourceUnavailable",
    "StoreError",
    "StoreOpenError",
    "RecordDecodeError",
]


class DatLensError(Exception):
    """Root exception for all datlens errors."""


# ── Resolution ────────────────────────────────────────────────────────────────

class ResolutionError(DatLensError):
    """Base class for errors raised while resolving a navigation identifier."""


class UnknownFamilyError(ResolutionError):
    """Raised when the classifier has no descriptor for a family id or tag."""

    def __init__(self, family_id=None, tag: str = "") -> None:
        self.family_id = family_id
        self.tag = tag
        if tag:
            msg = f"Loading not implemented for collection '{tag}'."
        else:
            msg = f"Loading not implemented for family 0x{family_id:08X}."
        super().__init__(msg)


class UnsupportedSubtypeError(ResolutionError):
    """Raised when a family is known but the requested subtype is not."""

    def __init__(self, family_name: str, subtype: str) -> None:
        self.family_name = family_name
        self.subtype = subtype
        super().__init__(f"Unknown {family_name} subtype: {subtype!r}")


class StoreNotFoundError(ResolutionError):
    """Raised when a session id does not resolve to an open store."""

    def __init__(self, session_id: str) -> None:
        self.session_id = session_id
        super().__init__(f"Database not found for session {session_id!r}.")


class RangeQueryFailedError(ResolutionError):
    """Raised when the store fails while enumerating a family's id range."""

    def __init__(self, family_id: int, reason: str) -> None:
        self.family_id = family_id
        self.reason = reason
        super().__init__(
            f"Error listing files for family 0x{family_id:08X}: {reason}"
        )


class DecodeFailedError(ResolutionError):
    """Raised when an exact-id read is absent or cannot be decoded."""

    def __init__(self, record_id: int, expected_type: str, reason: str = "") -> None:
        self.record_id = record_id
        self.expected_type = expected_type
        self.reason = reason
        msg = f"Could not load {expected_type} 0x{record_id:08X}"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)


class ClassificationGapError(ResolutionError):
    """
    Raised when a range entry's origin family has no registered decoder.

    Distinct from DecodeFailedError: the data may be fine, the family
    table is what is missing an entry.
    """

    def __init__(self, family_id: int) -> None:
        self.family_id = family_id
        super().__init__(
            f"No decoder registered for range family 0x{family_id:08X}."
        )


class LookupSourceUnavailable(ResolutionError):
    """Raised internally when an auxiliary lookup table cannot be loaded."""

    def __init__(self, source: str, reason: str) -> None:
        self.source = source
        self.reason = reason
        super().__init__(f"Lookup source {source!r} unavailable: {reason}")


# ── Store ─────────────────────────────────────────────────────────────────────

class StoreError(DatLensError):
    """Raised on SQLite / store I/O errors."""


class StoreOpenError(StoreError):
    """Raised when a store file cannot be opened as either store kind."""


class RecordDecodeError(StoreError):
    """Raised when a stored record body does not decode to the requested type."""
