"""
Family ids of the flat 32-bit record id space.

Portal store
    Catalog / single-object tables live at fixed ids in the 0x0E range.
    Range families own a whole top byte: members are ``family | n`` for
    any 24-bit ``n``.

Cell store
    Ids are ``0xAABBnnnn`` where AABB is the landblock coordinate.  The
    cell families below are keyed by the low word that identifies them;
    they are never addressed as a contiguous range of the full space.
"""

__all__ = [
    # portal tables
    "WEENIE_DEFAULTS", "CHAR_GEN", "COMBAT_TABLE", "SKILL_TABLE",
    "CHAT_POSE_TABLE", "SPELL_TABLE", "SPELL_COMPONENT_TABLE",
    "EXPERIENCE_TABLE", "TABOO_TABLE", "GAME_EVENT_TABLE",
    # portal ranges
    "GFX_OBJS", "SETUPS", "ANIMATIONS", "PALETTES", "SURFACE_TEXTURES",
    "RENDER_SURFACES", "SURFACES", "MOTION_TABLES", "SOUNDS", "ENVIRONMENTS",
    "PALETTE_SETS", "CLOTHING", "QUALITY_FILTERS", "MATERIALS",
    "RENDER_MATERIALS", "ANIMATION_HOOK_OPS", "UI_LAYOUTS", "LANGUAGE_STRINGS",
    "GENERATOR_PROFILES", "PARTICLE_EMITTERS", "STRING_STATES",
    # cell
    "LANDBLOCKS", "LANDBLOCK_INFOS", "ENV_CELLS",
    # masks and names
    "FAMILY_RANGE_MASK", "CELL_RANGE_MASK", "LANDBLOCK_MASK", "MAX_ID",
    "SUBTYPE_SPELLS", "SUBTYPE_SPELL_SETS", "SUBTYPE_STARTING_AREAS",
    "SUBTYPE_HERITAGE_GROUPS", "SUBTYPE_CHAT_POSES", "SUBTYPE_CHAT_EMOTES",
    "TAG_LANDBLOCKS", "TAG_LANDBLOCK_INFOS", "TAG_ENV_CELLS",
]

MAX_ID = 0xFFFFFFFF

# Low 24 bits enumerate members of a portal range family
FAMILY_RANGE_MASK = 0x00FFFFFF
# Low 16 bits enumerate records inside one landblock
CELL_RANGE_MASK   = 0x0000FFFF
LANDBLOCK_MASK    = 0xFFFF0000

# ── Portal: catalog and single-object tables ──────────────────────────────────

WEENIE_DEFAULTS       = 0x0E000001
CHAR_GEN              = 0x0E000002
COMBAT_TABLE          = 0x0E000003
SKILL_TABLE           = 0x0E000004
CHAT_POSE_TABLE       = 0x0E000007
SPELL_TABLE           = 0x0E00000E
SPELL_COMPONENT_TABLE = 0x0E00000F
EXPERIENCE_TABLE      = 0x0E000018
TABOO_TABLE           = 0x0E000019
GAME_EVENT_TABLE      = 0x0E00001A

# ── Portal: range families ────────────────────────────────────────────────────

GFX_OBJS           = 0x01000000
SETUPS             = 0x02000000
ANIMATIONS         = 0x03000000
PALETTES           = 0x04000000
SURFACE_TEXTURES   = 0x05000000
RENDER_SURFACES    = 0x06000000
SURFACES           = 0x08000000
MOTION_TABLES      = 0x09000000
SOUNDS             = 0x0A000000
ENVIRONMENTS       = 0x0D000000
PALETTE_SETS       = 0x0F000000
CLOTHING           = 0x10000000
QUALITY_FILTERS    = 0x16000000
MATERIALS          = 0x18000000
RENDER_MATERIALS   = 0x1A000000
ANIMATION_HOOK_OPS = 0x1D000000
UI_LAYOUTS         = 0x21000000
LANGUAGE_STRINGS   = 0x23000000
GENERATOR_PROFILES = 0x24000000
PARTICLE_EMITTERS  = 0x32000000
STRING_STATES      = 0x41000000

# ── Cell ──────────────────────────────────────────────────────────────────────

LANDBLOCKS      = 0x0000FFFF   # low word of every LandBlock id
LANDBLOCK_INFOS = 0x0000FFFE   # low word of every LandBlockInfo id
ENV_CELLS       = 0x00000001   # first interior cell of a landblock

# ── Subtype and tag names ─────────────────────────────────────────────────────

SUBTYPE_SPELLS          = "Spells"
SUBTYPE_SPELL_SETS      = "SpellSets"
SUBTYPE_STARTING_AREAS  = "StartingAreas"
SUBTYPE_HERITAGE_GROUPS = "HeritageGroups"
SUBTYPE_CHAT_POSES      = "ChatPoses"
SUBTYPE_CHAT_EMOTES     = "ChatEmotes"

TAG_LANDBLOCKS      = "LandBlocks"
TAG_LANDBLOCK_INFOS = "LandBlockInfos"
TAG_ENV_CELLS       = "EnvCells"
