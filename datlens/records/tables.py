"""
Catalog and single-object table records of the Portal store.

Key concepts
────────────
SpellTable / SkillTable / SpellComponentTable
    Dictionary collections keyed by a numeric id.  Their entries carry a
    ``name`` which the lookup builder turns into id → name tables.
CharGen
    Character-generation data.  ``starting_areas`` is an ordered sequence
    with no intrinsic id: other records reference an area by its position.
ChatPoseTable
    Two string-keyed dictionaries (poses, emotes).
ExperienceTable / CombatTable / …
    Single objects shown as-is.

JSON object keys are always strings, so every int-keyed dictionary is
rebuilt with ``int(key)`` on decode.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import IntEnum
from typing import Any, Optional

from .base import DatRecord

__all__ = [
    "MagicSchool",
    "SpellBase",
    "SpellSet",
    "SpellTable",
    "SkillBase",
    "SkillTable",
    "SpellComponentBase",
    "SpellComponentTable",
    "StartingArea",
    "HeritageGroup",
    "CharGen",
    "ChatEmoteData",
    "ChatPoseTable",
    "ExperienceTable",
    "CombatTable",
    "WeenieDefaults",
    "TabooTable",
    "GameEventTable",
]


class MagicSchool(IntEnum):
    NONE                 = 0
    WAR_MAGIC            = 1
    LIFE_MAGIC           = 2
    ITEM_ENCHANTMENT     = 3
    CREATURE_ENCHANTMENT = 4
    VOID_MAGIC           = 5


def _int_keyed(raw: Optional[dict], decode) -> dict[int, Any]:
    if not raw:
        return {}
    return {int(k): decode(v) for k, v in raw.items()}


# ── Spells ────────────────────────────────────────────────────────────────────

@dataclass
class SpellBase:
    name:        Optional[str] = None
    description: str           = ""
    school:      MagicSchool   = MagicSchool.NONE
    components:  list[int]     = field(default_factory=list)
    base_mana:   int           = 0
    power:       int           = 0
    icon:        int           = 0

    @classmethod
    def from_dict(cls, data: dict) -> "SpellBase":
        return cls(
            name=data.get("name"),
            description=data.get("description", ""),
            school=MagicSchool(data.get("school", 0)),
            components=[int(c) for c in data.get("components", [])],
            base_mana=data.get("base_mana", 0),
            power=data.get("power", 0),
            icon=data.get("icon", 0),
        )

    def to_dict(self) -> dict:
        d = asdict(self)
        d["school"] = int(self.school)
        return d


@dataclass
class SpellSet:
    tiers: list[list[int]] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict) -> "SpellSet":
        return cls(tiers=[[int(s) for s in tier] for tier in data.get("tiers", [])])

    def to_dict(self) -> dict:
        return {"tiers": [list(t) for t in self.tiers]}


@dataclass
class SpellTable(DatRecord):
    spells:     dict[int, SpellBase] = field(default_factory=dict)
    spell_sets: dict[int, SpellSet]  = field(default_factory=dict)

    LABEL = "SpellTable"

    @classmethod
    def from_dict(cls, record_id: int, data: dict) -> "SpellTable":
        return cls(
            id=record_id,
            spells=_int_keyed(data.get("spells"), SpellBase.from_dict),
            spell_sets=_int_keyed(data.get("spell_sets"), SpellSet.from_dict),
        )

    def to_dict(self) -> dict:
        return {
            "spells":     {str(k): v.to_dict() for k, v in self.spells.items()},
            "spell_sets": {str(k): v.to_dict() for k, v in self.spell_sets.items()},
        }


# ── Skills ────────────────────────────────────────────────────────────────────

@dataclass
class SkillBase:
    name:             Optional[str] = None
    description:      str           = ""
    category:         int           = 0
    trained_cost:     int           = 0
    specialized_cost: int           = 0

    @classmethod
    def from_dict(cls, data: dict) -> "SkillBase":
        return cls(**{k: v for k, v in data.items() if k in cls.__dataclass_fields__})

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class SkillTable(DatRecord):
    skills: dict[int, SkillBase] = field(default_factory=dict)

    LABEL = "SkillTable"

    @classmethod
    def from_dict(cls, record_id: int, data: dict) -> "SkillTable":
        return cls(id=record_id, skills=_int_keyed(data.get("skills"), SkillBase.from_dict))

    def to_dict(self) -> dict:
        return {"skills": {str(k): v.to_dict() for k, v in self.skills.items()}}


# ── Spell components ──────────────────────────────────────────────────────────

@dataclass
class SpellComponentBase:
    name:     Optional[str] = None
    category: int           = 0
    icon:     int           = 0
    gesture:  int           = 0
    time:     float         = 0.0
    text:     str           = ""

    @classmethod
    def from_dict(cls, data: dict) -> "SpellComponentBase":
        return cls(**{k: v for k, v in data.items() if k in cls.__dataclass_fields__})

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class SpellComponentTable(DatRecord):
    components: dict[int, SpellComponentBase] = field(default_factory=dict)

    LABEL = "SpellComponentTable"

    @classmethod
    def from_dict(cls, record_id: int, data: dict) -> "SpellComponentTable":
        return cls(
            id=record_id,
            components=_int_keyed(data.get("components"), SpellComponentBase.from_dict),
        )

    def to_dict(self) -> dict:
        return {"components": {str(k): v.to_dict() for k, v in self.components.items()}}


# ── Character generation ──────────────────────────────────────────────────────

@dataclass
class StartingArea:
    name:      Optional[str] = None
    locations: list[int]     = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict) -> "StartingArea":
        return cls(name=data.get("name"), locations=list(data.get("locations", [])))

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class HeritageGroup:
    """
    starting_areas holds positions in CharGen.starting_areas, not ids.
    """
    name:              Optional[str] = None
    icon:              int           = 0
    setup_id:          int           = 0
    attribute_credits: int           = 0
    skill_credits:     int           = 0
    skills:            list[int]     = field(default_factory=list)
    starting_areas:    list[int]     = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict) -> "HeritageGroup":
        return cls(**{k: v for k, v in data.items() if k in cls.__dataclass_fields__})

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class CharGen(DatRecord):
    starting_areas:  list[StartingArea]      = field(default_factory=list)
    heritage_groups: dict[int, HeritageGroup] = field(default_factory=dict)

    LABEL = "CharGen"

    @classmethod
    def from_dict(cls, record_id: int, data: dict) -> "CharGen":
        return cls(
            id=record_id,
            starting_areas=[StartingArea.from_dict(a) for a in data.get("starting_areas", [])],
            heritage_groups=_int_keyed(data.get("heritage_groups"), HeritageGroup.from_dict),
        )

    def to_dict(self) -> dict:
        return {
            "starting_areas":  [a.to_dict() for a in self.starting_areas],
            "heritage_groups": {str(k): v.to_dict() for k, v in self.heritage_groups.items()},
        }


# ── Chat poses ────────────────────────────────────────────────────────────────

@dataclass
class ChatEmoteData:
    my_emote:    str = ""
    other_emote: str = ""


@dataclass
class ChatPoseTable(DatRecord):
    chat_poses:  dict[str, str]           = field(default_factory=dict)
    chat_emotes: dict[str, ChatEmoteData] = field(default_factory=dict)

    LABEL = "ChatPoseTable"

    @classmethod
    def from_dict(cls, record_id: int, data: dict) -> "ChatPoseTable":
        return cls(
            id=record_id,
            chat_poses=dict(data.get("chat_poses", {})),
            chat_emotes={k: ChatEmoteData(**v) for k, v in data.get("chat_emotes", {}).items()},
        )

    def to_dict(self) -> dict:
        return {
            "chat_poses":  dict(self.chat_poses),
            "chat_emotes": {k: asdict(v) for k, v in self.chat_emotes.items()},
        }


# ── Single-object tables ──────────────────────────────────────────────────────

@dataclass
class ExperienceTable(DatRecord):
    attributes:         list[int] = field(default_factory=list)
    vitals:             list[int] = field(default_factory=list)
    trained_skills:     list[int] = field(default_factory=list)
    specialized_skills: list[int] = field(default_factory=list)
    levels:             list[int] = field(default_factory=list)
    skill_credits:      list[int] = field(default_factory=list)

    LABEL = "ExperienceTable"

    def categories(self) -> list[tuple[str, list[int]]]:
        """The XP curves in display order."""
        return [
            ("Attribute XP",         self.attributes),
            ("Vital XP",             self.vitals),
            ("Trained Skill XP",     self.trained_skills),
            ("Specialized Skill XP", self.specialized_skills),
            ("Character Level XP",   self.levels),
            ("Skill Credits",        self.skill_credits),
        ]


@dataclass
class CombatTable(DatRecord):
    maneuvers: list[dict] = field(default_factory=list)

    LABEL = "CombatTable"


@dataclass
class WeenieDefaults(DatRecord):
    defaults: dict[str, Any] = field(default_factory=dict)

    LABEL = "WeenieDefaults"


@dataclass
class TabooTable(DatRecord):
    words: list[str] = field(default_factory=list)

    LABEL = "TabooTable"


@dataclass
class GameEventTable(DatRecord):
    events: dict[str, Any] = field(default_factory=dict)

    LABEL = "GameEventTable"
