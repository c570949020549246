"""
FamilyClassifier — the closed table of known record families.

The store has no schema, so this table is it: for every family id the
viewer can navigate to, which category it is, which record class decodes
it (or its members), and how its sub-collections become rows.

Usage::

    classifier = get_classifier()
    descriptor = classifier.classify(0x0E00000E)   # SpellTable, dictionary
    classifier.classify(0x7F000000)                # None: not a known family
    classifier.decoder_for(0x05000000)             # SurfaceTexture
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from datlens.records import (
    Animation, CharGen, ChatPoseTable, Clothing, CombatTable, EnvCell,
    Environment, ExperienceTable, GameEventTable, GfxObj, LandBlock,
    LandBlockInfo, LanguageString, MaterialInstance, MotionTable, Palette,
    PaletteSet, ParticleEmitter, RenderSurface, Setup, SkillTable,
    SpellComponentTable, SpellTable, Surface, SurfaceTexture, TabooTable,
    UILayout, Wave, WeenieDefaults,
)
from datlens import constants as ids
from datlens.resolver.models import (
    CollectionView,
    FamilyCategory,
    FamilyDescriptor,
    ViewOrder,
)
from datlens.store.models import StoreKind

__all__ = ["FamilyClassifier", "BUILTIN_FAMILIES", "get_classifier"]

logger = logging.getLogger(__name__)

_SINGLE = FamilyCategory.SINGLE_OBJECT
_DICT   = FamilyCategory.DICTIONARY_COLLECTION
_COMP   = FamilyCategory.COMPOSITE_SUBTYPES
_RANGE  = FamilyCategory.RANGE_COLLECTION

_CELL_ONLY = frozenset({StoreKind.CELL})


def _named(key, value) -> str:
    return f"{key}: {getattr(value, 'name', None) or '?'}"


# ── Collection views ──────────────────────────────────────────────────────────

_SPELLS_VIEW = CollectionView(
    title="Spells",
    items=lambda table: table.spells.items(),
    label=_named,
    filterable=True,
)

_SPELL_SETS_VIEW = CollectionView(
    title="Spell Sets",
    items=lambda table: table.spell_sets.items(),
    label=lambda key, spell_set: f"{key}: Set ({len(spell_set.tiers)} tiers)",
)

_SKILLS_VIEW = CollectionView(
    title="Skills",
    items=lambda table: table.skills.items(),
    label=_named,
)

_COMPONENTS_VIEW = CollectionView(
    title="Spell Components",
    items=lambda table: table.components.items(),
    label=_named,
)

# Starting areas have no id of their own; the position is the key
_STARTING_AREAS_VIEW = CollectionView(
    title="Starting Areas",
    items=lambda chargen: enumerate(chargen.starting_areas),
    label=lambda index, area: f"[{index}] {area.name or '?'}",
    order=ViewOrder.INSERTION,
)

_HERITAGE_GROUPS_VIEW = CollectionView(
    title="Heritage Groups",
    items=lambda chargen: chargen.heritage_groups.items(),
    label=_named,
)

_CHAT_POSES_VIEW = CollectionView(
    title="Chat Poses",
    items=lambda table: table.chat_poses.items(),
    label=lambda key, pose: f"{key}: {pose}",
)

_CHAT_EMOTES_VIEW = CollectionView(
    title="Chat Emotes",
    items=lambda table: table.chat_emotes.items(),
    label=lambda key, _emote: key,
)


def _range(family_id: int, name: str, record_type: Optional[type]) -> FamilyDescriptor:
    return FamilyDescriptor(
        family_id=family_id, name=name, category=_RANGE, record_type=record_type,
    )


# ── The table ─────────────────────────────────────────────────────────────────

BUILTIN_FAMILIES: tuple[FamilyDescriptor, ...] = (
    # Portal tables
    FamilyDescriptor(ids.WEENIE_DEFAULTS, "WeenieDefaults", _SINGLE, WeenieDefaults),
    FamilyDescriptor(
        ids.CHAR_GEN, "CharGen", _COMP, CharGen,
        views={
            ids.SUBTYPE_STARTING_AREAS:  _STARTING_AREAS_VIEW,
            ids.SUBTYPE_HERITAGE_GROUPS: _HERITAGE_GROUPS_VIEW,
        },
    ),
    FamilyDescriptor(ids.COMBAT_TABLE, "CombatTable", _SINGLE, CombatTable),
    FamilyDescriptor(ids.SKILL_TABLE, "SkillTable", _DICT, SkillTable, views={"": _SKILLS_VIEW}),
    FamilyDescriptor(
        ids.CHAT_POSE_TABLE, "ChatPoseTable", _COMP, ChatPoseTable,
        views={
            ids.SUBTYPE_CHAT_POSES:  _CHAT_POSES_VIEW,
            ids.SUBTYPE_CHAT_EMOTES: _CHAT_EMOTES_VIEW,
        },
    ),
    FamilyDescriptor(
        ids.SPELL_TABLE, "SpellTable", _DICT, SpellTable,
        views={
            "":                     _SPELLS_VIEW,
            ids.SUBTYPE_SPELLS:     _SPELLS_VIEW,
            ids.SUBTYPE_SPELL_SETS: _SPELL_SETS_VIEW,
        },
    ),
    FamilyDescriptor(
        ids.SPELL_COMPONENT_TABLE, "SpellComponentTable", _DICT, SpellComponentTable,
        views={"": _COMPONENTS_VIEW},
    ),
    FamilyDescriptor(ids.EXPERIENCE_TABLE, "ExperienceTable", _SINGLE, ExperienceTable),
    FamilyDescriptor(ids.TABOO_TABLE, "TabooTable", _SINGLE, TabooTable),
    FamilyDescriptor(ids.GAME_EVENT_TABLE, "GameEventTable", _SINGLE, GameEventTable),

    # Portal range families (None = no decoder for the member layout yet)
    _range(ids.GFX_OBJS,           "GfxObjs",           GfxObj),
    _range(ids.SETUPS,             "Setups",            Setup),
    _range(ids.ANIMATIONS,         "Animations",        Animation),
    _range(ids.PALETTES,           "Palettes",          Palette),
    _range(ids.SURFACE_TEXTURES,   "SurfaceTextures",   SurfaceTexture),
    _range(ids.RENDER_SURFACES,    "RenderSurfaces",    RenderSurface),
    _range(ids.SURFACES,           "Surfaces",          Surface),
    _range(ids.MOTION_TABLES,      "MotionTables",      MotionTable),
    _range(ids.SOUNDS,             "Sounds",            Wave),
    _range(ids.ENVIRONMENTS,       "Environments",      Environment),
    _range(ids.PALETTE_SETS,       "PaletteSets",       PaletteSet),
    _range(ids.CLOTHING,           "Clothing",          Clothing),
    _range(ids.QUALITY_FILTERS,    "QualityFilters",    None),
    _range(ids.MATERIALS,          "Materials",         MaterialInstance),
    _range(ids.RENDER_MATERIALS,   "RenderMaterials",   None),
    _range(ids.ANIMATION_HOOK_OPS, "AnimationHookOps",  None),
    _range(ids.UI_LAYOUTS,         "UILayouts",         UILayout),
    _range(ids.LANGUAGE_STRINGS,   "LanguageStrings",   LanguageString),
    _range(ids.GENERATOR_PROFILES, "GeneratorProfiles", None),
    _range(ids.PARTICLE_EMITTERS,  "ParticleEmitters",  ParticleEmitter),
    _range(ids.STRING_STATES,      "StringStates",      None),

    # Cell families, listed through their named collection
    FamilyDescriptor(
        ids.LANDBLOCKS, "LandBlocks", _RANGE, LandBlock,
        entry_label="LandBlock 0x{id:08X}", store_kinds=_CELL_ONLY,
        tag=ids.TAG_LANDBLOCKS,
    ),
    FamilyDescriptor(
        ids.LANDBLOCK_INFOS, "LandBlockInfos", _RANGE, LandBlockInfo,
        entry_label="LandBlockInfo 0x{id:08X}", store_kinds=_CELL_ONLY,
        tag=ids.TAG_LANDBLOCK_INFOS,
    ),
    FamilyDescriptor(
        ids.ENV_CELLS, "EnvCells", _RANGE, EnvCell,
        range_mask=ids.CELL_RANGE_MASK, range_start_offset=0x0001,
        entry_label="EnvCell 0x{id:08X}", store_kinds=_CELL_ONLY,
        tag=ids.TAG_ENV_CELLS,
    ),
)


class FamilyClassifier:
    """
    Exact-match lookup over a fixed set of family descriptors.

    Construction fails if two descriptors share a family id, so no two
    logical families can ever resolve to the same constant.
    """

    def __init__(self, descriptors: Iterable[FamilyDescriptor] = BUILTIN_FAMILIES) -> None:
        table: dict[int, FamilyDescriptor] = {}
        for descriptor in descriptors:
            existing = table.get(descriptor.family_id)
            if existing is not None:
                raise ValueError(
                    f"Family id 0x{descriptor.family_id:08X} assigned to both "
                    f"{existing.name} and {descriptor.name}"
                )
            table[descriptor.family_id] = descriptor
        self._table = table
        self._by_tag = {d.tag: d for d in table.values() if d.tag}

    # ── Public API ────────────────────────────────────────────────────────

    def classify(self, family_id: int) -> Optional[FamilyDescriptor]:
        """Descriptor for *family_id*, or None when the id is not a known family."""
        return self._table.get(family_id)

    def decoder_for(self, family_id: int) -> Optional[type]:
        """Record class for members of *family_id*; None for unknown ids and gaps."""
        descriptor = self._table.get(family_id)
        return descriptor.record_type if descriptor else None

    def is_range_family(self, family_id: int) -> bool:
        descriptor = self._table.get(family_id)
        return descriptor is not None and descriptor.is_range

    def by_tag(self, tag: str) -> Optional[FamilyDescriptor]:
        return self._by_tag.get(tag)

    def known_ids(self) -> list[int]:
        return sorted(self._table)

    def descriptors(self, kind: Optional[StoreKind] = None) -> list[FamilyDescriptor]:
        """All descriptors ordered by id, optionally only those valid for *kind*."""
        return [
            self._table[family_id]
            for family_id in sorted(self._table)
            if kind is None or kind in self._table[family_id].store_kinds
        ]

    def __len__(self) -> int:
        return len(self._table)

    def __contains__(self, family_id: object) -> bool:
        return family_id in self._table


_DEFAULT: Optional[FamilyClassifier] = None


def get_classifier() -> FamilyClassifier:
    """Shared classifier over BUILTIN_FAMILIES."""
    global _DEFAULT
    if _DEFAULT is None:
        _DEFAULT = FamilyClassifier()
        logger.debug("Family table built with %d families", len(_DEFAULT))
    return _DEFAULT
