"""
Base record types.

Every record the engine can materialize is a dataclass deriving from
DatRecord.  Stores persist a record as ``(id, type_name, body)`` where
``body`` is the JSON form of every field except ``id``; ``from_dict`` /
``to_dict`` are the two halves of that mapping.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, ClassVar

__all__ = ["DatRecord", "AssetRecord"]


@dataclass
class DatRecord:
    """
    Root of all decoded records.

    id — the 32-bit record id in the store's flat id space
    """
    id: int

    # Human label used when the record is shown on its own
    LABEL: ClassVar[str] = ""

    @classmethod
    def type_name(cls) -> str:
        return cls.__name__

    @classmethod
    def from_dict(cls, record_id: int, data: dict[str, Any]) -> "DatRecord":
        """
        Build a record from its stored body.

        The default implementation copies plain fields by name and leaves
        missing ones at their defaults; records with nested structures
        override this.
        """
        kwargs: dict[str, Any] = {}
        for f in fields(cls):
            if f.name == "id" or f.name not in data:
                continue
            kwargs[f.name] = data[f.name]
        return cls(id=record_id, **kwargs)

    def to_dict(self) -> dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self) if f.name != "id"}

    @property
    def display_name(self) -> str:
        label = self.LABEL or self.type_name()
        return f"{label} 0x{self.id:08X}"

    def __str__(self) -> str:
        return f"{self.type_name()}(0x{self.id:08X})"


@dataclass
class AssetRecord(DatRecord):
    """
    A record whose body the viewer shows as an opaque property bag.

    Used for the asset-object families (graphics objects, textures,
    sounds, …) whose inner layout belongs to the binary format library.
    """
    properties: dict[str, Any] = field(default_factory=dict)

    def get(self, key: str, default: Any = None) -> Any:
        return self.properties.get(key, default)
