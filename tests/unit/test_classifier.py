"""
Unit tests for datlens/resolver/families.py and resolver/models.py identifiers

Coverage plan
─────────────
classify          → every known id has a descriptor, unknown → None
uniqueness        → built-in ids distinct, duplicate table rejected
decoder_for       → range decoders, gaps, unknown ids
descriptors       → categories + subtypes of the table families
range_bounds      → default 24-bit width, narrower cell width, base shift
identifiers       → FamilyRef validation/str, TagRef.parse
record types      → type names, every decoder is a DatRecord class
"""

import pytest


class TestClassify:

    def test_every_known_id_classifies(self):
        from datlens.resolver.families import get_classifier
        classifier = get_classifier()
        for family_id in classifier.known_ids():
            descriptor = classifier.classify(family_id)
            assert descriptor is not None
            assert descriptor.family_id == family_id

    def test_unknown_id_is_none_not_error(self):
        from datlens.resolver.families import get_classifier
        assert get_classifier().classify(0x7F000000) is None

    def test_builtin_ids_are_distinct(self):
        from datlens.resolver.families import BUILTIN_FAMILIES
        ids = [d.family_id for d in BUILTIN_FAMILIES]
        names = [d.name for d in BUILTIN_FAMILIES]
        assert len(ids) == len(set(ids))
        assert len(names) == len(set(names))

    def test_duplicate_ids_rejected(self):
        from datlens.resolver.families import FamilyClassifier
        from datlens.resolver.models import FamilyCategory, FamilyDescriptor
        a = FamilyDescriptor(0x23000000, "LanguageStrings", FamilyCategory.RANGE_COLLECTION)
        b = FamilyDescriptor(0x23000000, "StringTables", FamilyCategory.RANGE_COLLECTION)
        with pytest.raises(ValueError, match="0x23000000"):
            FamilyClassifier([a, b])

    def test_spell_table_is_filterable_dictionary(self):
        from datlens.resolver.families import get_classifier
        from datlens.resolver.models import FamilyCategory
        d = get_classifier().classify(0x0E00000E)
        assert d.name == "SpellTable"
        assert d.category is FamilyCategory.DICTIONARY_COLLECTION
        assert d.views[""].filterable
        assert set(d.subtypes) == {"Spells", "SpellSets"}

    @pytest.mark.parametrize("family_id,subtypes", [
        (0x0E000002, {"StartingAreas", "HeritageGroups"}),
        (0x0E000007, {"ChatPoses", "ChatEmotes"}),
    ])
    def test_composites_list_their_subtypes(self, family_id, subtypes):
        from datlens.resolver.families import get_classifier
        from datlens.resolver.models import FamilyCategory
        d = get_classifier().classify(family_id)
        assert d.category is FamilyCategory.COMPOSITE_SUBTYPES
        assert set(d.subtypes) == subtypes

    def test_single_objects(self):
        from datlens.resolver.families import get_classifier
        from datlens.resolver.models import FamilyCategory
        classifier = get_classifier()
        for family_id in (0x0E000001, 0x0E000003, 0x0E000018, 0x0E000019, 0x0E00001A):
            assert classifier.classify(family_id).category is FamilyCategory.SINGLE_OBJECT

    def test_descriptors_by_kind(self):
        from datlens.resolver.families import get_classifier
        from datlens.store.models import StoreKind
        cell = get_classifier().descriptors(StoreKind.CELL)
        assert {d.name for d in cell} == {"LandBlocks", "LandBlockInfos", "EnvCells"}
        assert all(StoreKind.PORTAL in d.store_kinds
                   for d in get_classifier().descriptors(StoreKind.PORTAL))


class TestDecoderFor:

    def test_surface_textures_decode_as_surface_texture(self):
        from datlens.records import SurfaceTexture
        from datlens.resolver.families import get_classifier
        assert get_classifier().decoder_for(0x05000000) is SurfaceTexture

    def test_sounds_decode_as_wave(self):
        from datlens.records import Wave
        from datlens.resolver.families import get_classifier
        assert get_classifier().decoder_for(0x0A000000) is Wave

    @pytest.mark.parametrize("family_id", [0x16000000, 0x1A000000, 0x1D000000, 0x24000000, 0x41000000])
    def test_gap_families_have_no_decoder(self, family_id):
        from datlens.resolver.families import get_classifier
        classifier = get_classifier()
        assert classifier.is_range_family(family_id)
        assert classifier.decoder_for(family_id) is None
        assert not classifier.classify(family_id).has_decoder

    def test_unknown_family_has_no_decoder(self):
        from datlens.resolver.families import get_classifier
        assert get_classifier().decoder_for(0x7F000000) is None


class TestRangeBounds:

    def test_default_width_is_24_bits(self):
        from datlens.resolver.families import get_classifier
        assert get_classifier().classify(0x05000000).range_bounds() == (0x05000000, 0x05FFFFFF)

    def test_env_cells_width_is_16_bits_per_landblock(self):
        from datlens.resolver.families import get_classifier
        d = get_classifier().classify(0x00000001)
        assert d.name == "EnvCells"
        assert d.range_bounds(0xA9B40000) == (0xA9B40001, 0xA9B4FFFF)
        assert d.range_bounds(0xA9B4FFFF) == (0xA9B40001, 0xA9B4FFFF)

    def test_default_label(self):
        from datlens.resolver.families import get_classifier
        assert get_classifier().classify(0x05000000).format_label(0x05000001) == "File 0x05000001"


class TestIdentifiers:

    def test_family_ref_rejects_out_of_range(self):
        from datlens.resolver.models import FamilyRef
        with pytest.raises(ValueError):
            FamilyRef(family_id=0x1_0000_0000)
        with pytest.raises(ValueError):
            FamilyRef(family_id=-1)

    def test_family_ref_is_immutable(self):
        from dataclasses import FrozenInstanceError
        from datlens.resolver.models import FamilyRef
        ref = FamilyRef(0x0E00000E, session_id="s")
        with pytest.raises(FrozenInstanceError):
            ref.subtype = "Spells"

    def test_family_ref_str(self):
        from datlens.resolver.models import FamilyRef
        assert str(FamilyRef(0x0E000002, "StartingAreas")) == "0x0E000002/StartingAreas"
        assert str(FamilyRef(0x05000000)) == "0x05000000"

    def test_tag_ref_parse_with_session_suffix(self):
        from datlens.resolver.models import TagRef
        ref = TagRef.parse("LandBlocks_client_cell_1.db_abc123def456_RO")
        assert ref.tag == "LandBlocks"
        assert ref.session_id == "client_cell_1.db_abc123def456_RO"
        assert ref.node_id() == "LandBlocks_client_cell_1.db_abc123def456_RO"

    def test_tag_ref_parse_bare_tag(self):
        from datlens.resolver.models import TagRef
        assert TagRef.parse("EnvCells", session_id="s1") == TagRef("EnvCells", "s1")

    def test_tag_ref_parse_session_mismatch(self):
        from datlens.resolver.models import TagRef
        with pytest.raises(ValueError, match="belongs to session"):
            TagRef.parse("LandBlocks_a_000000000000_RO", session_id="b_111111111111_RO")


class TestRecordTypes:

    def test_type_name_is_the_class_name(self):
        from datlens.records import LandBlock, SpellTable
        assert SpellTable.type_name() == "SpellTable"
        assert LandBlock(id=0xA9B4FFFF).display_name == "LandBlock 0xA9B4FFFF"

    def test_every_decoder_is_a_record_class(self):
        from datlens.records import DatRecord
        from datlens.resolver.families import BUILTIN_FAMILIES
        for descriptor in BUILTIN_FAMILIES:
            if descriptor.has_decoder:
                assert issubclass(descriptor.record_type, DatRecord)
