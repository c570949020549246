"""Data models and the abstract store interface for the store module."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Optional, TypeVar

from datlens.records.base import DatRecord

__all__ = ["StoreKind", "RecordHeader", "DatStore"]

R = TypeVar("R", bound=DatRecord)


class StoreKind(str, Enum):
    PORTAL = "Portal"
    CELL   = "Cell"

    def other(self) -> "StoreKind":
        return StoreKind.CELL if self is StoreKind.PORTAL else StoreKind.PORTAL


@dataclass(frozen=True)
class RecordHeader:
    """
    One row of a range enumeration — the id and the stored type name only.
    The record body is never decoded to produce a header.
    """
    id:        int
    type_name: str = ""

    def __str__(self) -> str:
        return f"0x{self.id:08X}"


class DatStore(ABC):
    """
    The two primitives the engine is built on, plus store metadata.

    Implementations must tolerate concurrent readers: the engine may call
    ``try_read`` / ``query_range`` from a worker thread while the UI thread
    holds the same store.
    """

    @property
    @abstractmethod
    def kind(self) -> StoreKind:
        """Which of the two store layouts this is."""

    @property
    @abstractmethod
    def identity(self) -> str:
        """Stable identity string (e.g. absolute file path) for session ids."""

    @property
    def name(self) -> str:
        """Short display name, defaults to the last path component of identity."""
        return self.identity.replace("\\", "/").rsplit("/", 1)[-1]

    @property
    def writable(self) -> bool:
        return False

    @abstractmethod
    def try_read(self, record_type: type[R], record_id: int) -> Optional[R]:
        """
        Exact-id typed read.

        Returns None when *record_id* is not present.

        Raises:
            RecordDecodeError: the id exists but does not decode as *record_type*.
        """

    @abstractmethod
    def query_range(self, start_id: int, end_id: int) -> list[RecordHeader]:
        """Enumerate record headers with ``start_id <= id <= end_id``."""

    def close(self) -> None:
        """Release any resources held by the store."""
