"""
records — typed Python forms of the records the engine materializes.

Public API
──────────
DatRecord / AssetRecord   — base classes
tables                    — catalog and single-object tables (Portal)
assets                    — asset-object range members (Portal)
cell                      — landblocks and interior cells (Cell)
"""

from .base import AssetRecord, DatRecord
from .assets import (
    Animation, Clothing, Environment, GfxObj, LanguageString, MaterialInstance,
    MotionTable, Palette, PaletteSet, ParticleEmitter, RenderSurface, Setup,
    Surface, SurfaceTexture, UILayout, Wave,
)
from .cell import EnvCell, LandBlock, LandBlockInfo
from .tables import (
    CharGen, ChatEmoteData, ChatPoseTable, CombatTable, ExperienceTable,
    GameEventTable, HeritageGroup, MagicSchool, SkillBase, SkillTable,
    SpellBase, SpellComponentBase, SpellComponentTable, SpellSet, SpellTable,
    StartingArea, TabooTable, WeenieDefaults,
)

__all__ = [
    "AssetRecord", "DatRecord",
    "Animation", "Clothing", "Environment", "GfxObj", "LanguageString",
    "MaterialInstance", "MotionTable", "Palette", "PaletteSet", "ParticleEmitter",
    "RenderSurface", "Setup", "Surface", "SurfaceTexture", "UILayout", "Wave",
    "EnvCell", "LandBlock", "LandBlockInfo",
    "CharGen", "ChatEmoteData", "ChatPoseTable", "CombatTable", "ExperienceTable",
    "GameEventTable", "HeritageGroup", "MagicSchool", "SkillBase", "SkillTable",
    "SpellBase", "SpellComponentBase", "SpellComponentTable", "SpellSet",
    "SpellTable", "StartingArea", "TabooTable", "WeenieDefaults",
]
