"""
Cell store records.

Cell ids are laid out per landblock: the high word is the landblock
coordinate, the low word selects the record inside it.

    0xAABBFFFF  LandBlock       (terrain)
    0xAABBFFFE  LandBlockInfo   (static objects, building list)
    0xAABB0100… EnvCell         (interior cells)
"""

from dataclasses import dataclass, field

from .base import AssetRecord

__all__ = ["LandBlock", "LandBlockInfo", "EnvCell", "LANDBLOCK_SUFFIX", "LANDBLOCK_INFO_SUFFIX"]

LANDBLOCK_SUFFIX      = 0xFFFF
LANDBLOCK_INFO_SUFFIX = 0xFFFE


@dataclass
class LandBlock(AssetRecord):
    has_objects: bool      = False
    height:      list[int] = field(default_factory=list)

    LABEL = "LandBlock"


@dataclass
class LandBlockInfo(AssetRecord):
    num_cells: int        = 0
    objects:   list[dict] = field(default_factory=list)

    LABEL = "LandBlockInfo"


@dataclass
class EnvCell(AssetRecord):
    environment_id: int       = 0
    surfaces:       list[int] = field(default_factory=list)

    LABEL = "EnvCell"
