"""
Shared fixtures: small Portal and Cell stores built under tmp_path.

Portal contents
───────────────
0x0E00000E SpellTable          spells 1, 2, 3, 7 (7 unnamed); set 10
0x0E000004 SkillTable          skills 6, 15, 99 (99 unnamed)
0x0E00000F SpellComponentTable components 1, 2, 5
0x0E000002 CharGen             3 starting areas, 2 heritage groups
0x0E000007 ChatPoseTable       poses "wave", "bow"; emote "smile"
0x0E000018 ExperienceTable
0x01000001 GfxObj
0x05000001, 0x05000002, 0x05000010  SurfaceTexture
0x06000001 RenderSurface       (neighbouring family)

Cell contents (file name contains "cell")
──────────────────────────────────────────
landblock 0xA9B4: LandBlock, LandBlockInfo, EnvCells 0x0100, 0x0101
landblock 0xA9B5: LandBlock, EnvCell 0x0100
"""

import pytest

PORTAL_IDS = {
    "spell_table": 0x0E00000E,
    "skill_table": 0x0E000004,
    "component_table": 0x0E00000F,
    "char_gen": 0x0E000002,
    "chat_pose_table": 0x0E000007,
    "experience_table": 0x0E000018,
}


def portal_records():
    from datlens.records import (
        CharGen, ChatEmoteData, ChatPoseTable, ExperienceTable, GfxObj,
        HeritageGroup, MagicSchool, RenderSurface, SkillBase, SkillTable,
        SpellBase, SpellComponentBase, SpellComponentTable, SpellSet,
        SpellTable, StartingArea, SurfaceTexture,
    )
    return [
        SpellTable(
            id=0x0E00000E,
            spells={
                3: SpellBase(name="Strength Other I", school=MagicSchool.CREATURE_ENCHANTMENT,
                             components=[1, 5]),
                1: SpellBase(name="Flame Bolt I", school=MagicSchool.WAR_MAGIC, components=[1, 2]),
                2: SpellBase(name="Heal Self I", school=MagicSchool.LIFE_MAGIC, components=[5]),
                7: SpellBase(name=None, school=MagicSchool.ITEM_ENCHANTMENT),
            },
            spell_sets={10: SpellSet(tiers=[[1, 2], [3]])},
        ),
        SkillTable(
            id=0x0E000004,
            skills={
                6: SkillBase(name="Melee Defense"),
                15: SkillBase(name="Magic Defense"),
                99: SkillBase(name=None),
            },
        ),
        SpellComponentTable(
            id=0x0E00000F,
            components={
                1: SpellComponentBase(name="Lead Scarab"),
                2: SpellComponentBase(name="Iron Scarab"),
                5: SpellComponentBase(name="Hyssop"),
            },
        ),
        CharGen(
            id=0x0E000002,
            starting_areas=[
                StartingArea(name="Holtburg"),
                StartingArea(name="Shoushi"),
                StartingArea(name="Yaraq"),
            ],
            heritage_groups={
                2: HeritageGroup(name="Gharu'ndim", starting_areas=[2]),
                1: HeritageGroup(name="Aluvian", skills=[6], starting_areas=[0]),
            },
        ),
        ChatPoseTable(
            id=0x0E000007,
            chat_poses={"wave": "Wave", "bow": "Bow"},
            chat_emotes={"smile": ChatEmoteData("You smile.", "%s smiles.")},
        ),
        ExperienceTable(id=0x0E000018, levels=[0, 1000, 2500]),
        GfxObj(id=0x01000001),
        SurfaceTexture(id=0x05000010),
        SurfaceTexture(id=0x05000001, textures=[0x06000001]),
        SurfaceTexture(id=0x05000002),
        RenderSurface(id=0x06000001, width=32, height=32),
    ]


def cell_records():
    from datlens.records import EnvCell, LandBlock, LandBlockInfo
    return [
        LandBlock(id=0xA9B4FFFF, has_objects=True),
        LandBlockInfo(id=0xA9B4FFFE, num_cells=2),
        EnvCell(id=0xA9B40100, environment_id=0x0D000001),
        EnvCell(id=0xA9B40101, environment_id=0x0D000002),
        LandBlock(id=0xA9B5FFFF),
        EnvCell(id=0xA9B50100),
    ]


def build_store(path, kind, records):
    from datlens.store.db import SqliteDatStore
    store = SqliteDatStore(str(path), kind=kind, create=True)
    store.write_records(records)
    return store


@pytest.fixture
def portal_store(tmp_path):
    from datlens.store.models import StoreKind
    return build_store(tmp_path / "client_portal.db", StoreKind.PORTAL, portal_records())


@pytest.fixture
def cell_store(tmp_path):
    from datlens.store.models import StoreKind
    return build_store(tmp_path / "client_cell_1.db", StoreKind.CELL, cell_records())


@pytest.fixture
def registry():
    from datlens.store.registry import SessionRegistry
    reg = SessionRegistry()
    yield reg
    reg.close_all()


@pytest.fixture
def portal_session(registry, portal_store):
    return registry.find(registry.register(portal_store))


@pytest.fixture
def cell_session(registry, cell_store):
    return registry.find(registry.register(cell_store))


@pytest.fixture
def engine(registry):
    from datlens.resolver.engine import RecordResolver
    return RecordResolver(registry)
