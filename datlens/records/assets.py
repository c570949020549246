"""Asset-object records: the members of the Portal store's id-range families."""

from dataclasses import dataclass, field

from .base import AssetRecord

__all__ = [
    "GfxObj",
    "Setup",
    "Animation",
    "Palette",
    "SurfaceTexture",
    "RenderSurface",
    "Surface",
    "MotionTable",
    "Wave",
    "Environment",
    "PaletteSet",
    "Clothing",
    "MaterialInstance",
    "UILayout",
    "LanguageString",
    "ParticleEmitter",
]


@dataclass
class GfxObj(AssetRecord):
    LABEL = "GfxObj"


@dataclass
class Setup(AssetRecord):
    LABEL = "Setup"


@dataclass
class Animation(AssetRecord):
    LABEL = "Animation"


@dataclass
class Palette(AssetRecord):
    colors: list[int] = field(default_factory=list)

    LABEL = "Palette"


@dataclass
class SurfaceTexture(AssetRecord):
    textures: list[int] = field(default_factory=list)

    LABEL = "SurfaceTexture"


@dataclass
class RenderSurface(AssetRecord):
    width:  int = 0
    height: int = 0
    format: str = ""

    LABEL = "RenderSurface"


@dataclass
class Surface(AssetRecord):
    LABEL = "Surface"


@dataclass
class MotionTable(AssetRecord):
    LABEL = "MotionTable"


@dataclass
class Wave(AssetRecord):
    LABEL = "Wave"


@dataclass
class Environment(AssetRecord):
    LABEL = "Environment"


@dataclass
class PaletteSet(AssetRecord):
    palettes: list[int] = field(default_factory=list)

    LABEL = "PaletteSet"


@dataclass
class Clothing(AssetRecord):
    LABEL = "Clothing"


@dataclass
class MaterialInstance(AssetRecord):
    LABEL = "MaterialInstance"


@dataclass
class UILayout(AssetRecord):
    LABEL = "UILayout"


@dataclass
class LanguageString(AssetRecord):
    value: str = ""

    LABEL = "LanguageString"


@dataclass
class ParticleEmitter(AssetRecord):
    LABEL = "ParticleEmitter"
