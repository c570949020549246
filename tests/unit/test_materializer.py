"""
Unit tests for datlens/resolver/materializer.py and RangeEntry

Coverage plan
─────────────
decoder choice    → origin family picks the record class
idempotence       → two calls, one store read
cached entries    → already-materialized rows never touch the store
decode failure    → DecodeFailedError, entry left deferred, retry works
absent id         → DecodeFailedError
classification gap→ ClassificationGapError, logged distinctly
RangeEntry        → cannot revert to placeholder once set
"""

import sqlite3
from unittest.mock import patch

import pytest


@pytest.fixture
def materializer():
    from datlens.resolver.materializer import LazyMaterializer
    return LazyMaterializer()


def _placeholder(record_id, origin):
    from datlens.resolver.models import RangeEntry
    return RangeEntry(id=record_id, display_label=f"File 0x{record_id:08X}", origin_family_id=origin)


class TestMaterialize:

    def test_uses_origin_family_decoder(self, materializer, portal_session):
        from datlens.records import SurfaceTexture
        entry = _placeholder(0x05000001, 0x05000000)
        store = portal_session.store
        with patch.object(store, "try_read", wraps=store.try_read) as read:
            record = materializer.materialize(portal_session, entry, 0x05000000)
        read.assert_called_once_with(SurfaceTexture, 0x05000001)
        assert isinstance(record, SurfaceTexture)
        assert record.textures == [0x06000001]
        assert entry.materialized is record
        assert not entry.is_deferred

    def test_second_call_hits_cache(self, materializer, portal_session):
        entry = _placeholder(0x05000001, 0x05000000)
        store = portal_session.store
        with patch.object(store, "try_read", wraps=store.try_read) as read:
            first = materializer.materialize(portal_session, entry, 0x05000000)
            second = materializer.materialize(portal_session, entry, 0x05000000)
        assert read.call_count == 1
        assert first is second

    def test_origin_defaults_to_entry(self, materializer, portal_session):
        from datlens.records import GfxObj
        entry = _placeholder(0x01000001, 0x01000000)
        assert isinstance(materializer.materialize(portal_session, entry), GfxObj)

    def test_keyed_row_is_returned_without_read(self, materializer, portal_session):
        from datlens.records import SpellBase
        from datlens.resolver.models import RangeEntry
        spell = SpellBase(name="Flame Bolt I")
        entry = RangeEntry(id=1, display_label="1: Flame Bolt I",
                           origin_family_id=0x0E00000E, materialized=spell)
        with patch.object(portal_session.store, "try_read") as read:
            assert materializer.materialize(portal_session, entry) is spell
        read.assert_not_called()

    def test_decode_failure_leaves_entry_deferred(self, materializer, portal_session, tmp_path):
        from datlens.exceptions import DecodeFailedError
        conn = sqlite3.connect(str(tmp_path / "client_portal.db"))
        conn.execute("UPDATE records SET body='[' WHERE id=?", (0x05000002,))
        conn.commit()
        conn.close()

        entry = _placeholder(0x05000002, 0x05000000)
        with pytest.raises(DecodeFailedError) as excinfo:
            materializer.materialize(portal_session, entry, 0x05000000)
        assert excinfo.value.record_id == 0x05000002
        assert excinfo.value.expected_type == "SurfaceTexture"
        assert entry.is_deferred

        # repair and retry
        conn = sqlite3.connect(str(tmp_path / "client_portal.db"))
        conn.execute("UPDATE records SET body='{}' WHERE id=?", (0x05000002,))
        conn.commit()
        conn.close()
        assert materializer.materialize(portal_session, entry, 0x05000000) is not None
        assert not entry.is_deferred

    def test_absent_id_is_decode_failure(self, materializer, portal_session):
        from datlens.exceptions import DecodeFailedError
        entry = _placeholder(0x05000099, 0x05000000)
        with pytest.raises(DecodeFailedError, match="0x05000099"):
            materializer.materialize(portal_session, entry, 0x05000000)
        assert entry.is_deferred

    def test_wrong_origin_type_is_decode_failure(self, materializer, portal_session):
        from datlens.exceptions import DecodeFailedError
        # listed under GfxObjs but stored as a SurfaceTexture
        entry = _placeholder(0x05000001, 0x01000000)
        with pytest.raises(DecodeFailedError):
            materializer.materialize(portal_session, entry, 0x01000000)

    def test_gap_family_is_classification_gap(self, materializer, portal_session, caplog):
        from datlens.exceptions import ClassificationGapError, DecodeFailedError
        entry = _placeholder(0x16000001, 0x16000000)
        with patch.object(portal_session.store, "try_read") as read:
            with pytest.raises(ClassificationGapError) as excinfo:
                materializer.materialize(portal_session, entry, 0x16000000)
        read.assert_not_called()
        assert not isinstance(excinfo.value, DecodeFailedError)
        assert excinfo.value.family_id == 0x16000000
        assert "Classification gap" in caplog.text
        assert entry.is_deferred


class TestRangeEntry:

    def test_cannot_revert_to_placeholder(self):
        from datlens.records import GfxObj
        entry = _placeholder(0x01000001, 0x01000000)
        entry.cache(GfxObj(id=0x01000001))
        with pytest.raises(AttributeError):
            entry.materialized = None
        assert not entry.is_deferred

    def test_cache_keeps_first_value(self):
        from datlens.records import GfxObj
        entry = _placeholder(0x01000001, 0x01000000)
        first = entry.cache(GfxObj(id=0x01000001))
        assert entry.cache(GfxObj(id=0x01000001)) is first
