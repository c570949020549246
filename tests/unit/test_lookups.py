"""
Unit tests for datlens/lookups/builder.py

Coverage plan
─────────────
full build       → all four tables from a complete Portal store
unnamed entries  → excluded from their table
starting areas   → keyed by position 0, 1, 2 …
independence     → one unreadable / undecodable source, others intact
missing source   → key absent, logged at DEBUG
cell store       → empty context
enabled subset   → only configured sources are read
display_name     → falls back to the raw id
"""

import logging
import sqlite3
from unittest.mock import patch

import pytest


@pytest.fixture
def builder():
    from datlens.lookups.builder import LookupContextBuilder
    return LookupContextBuilder()


class TestBuild:

    def test_all_sources_load(self, builder, portal_session):
        context = builder.build(portal_session)
        assert set(context) == {"skills", "spells", "components", "starting-areas"}
        assert context["skills"] == {6: "Melee Defense", 15: "Magic Defense"}
        assert context["components"][5] == "Hyssop"

    def test_unnamed_entries_excluded(self, builder, portal_session):
        context = builder.build(portal_session)
        assert 99 not in context["skills"]
        assert 7 not in context["spells"]
        assert context["spells"][3] == "Strength Other I"

    def test_starting_areas_keyed_by_position(self, builder, portal_session):
        context = builder.build(portal_session)
        assert context["starting-areas"] == {0: "Holtburg", 1: "Shoushi", 2: "Yaraq"}

    def test_corrupt_source_does_not_block_others(self, builder, portal_session, tmp_path):
        conn = sqlite3.connect(str(tmp_path / "client_portal.db"))
        conn.execute("UPDATE records SET body='not json' WHERE id=?", (0x0E00000E,))
        conn.commit()
        conn.close()
        context = builder.build(portal_session)
        assert "spells" not in context
        assert context["skills"]
        assert context["components"]
        assert context["starting-areas"]

    def test_missing_source_is_logged_at_debug(self, builder, portal_session, tmp_path, caplog):
        conn = sqlite3.connect(str(tmp_path / "client_portal.db"))
        conn.execute("DELETE FROM records WHERE id=?", (0x0E000004,))
        conn.commit()
        conn.close()
        with caplog.at_level(logging.DEBUG, logger="datlens.lookups.builder"):
            context = builder.build(portal_session)
        assert "skills" not in context
        assert "spells" in context
        assert "'skills' unavailable" in caplog.text
        assert all(r.levelno == logging.DEBUG for r in caplog.records
                   if r.name == "datlens.lookups.builder")

    def test_store_error_is_contained(self, builder, portal_session):
        from datlens.exceptions import StoreError
        with patch.object(portal_session.store, "try_read", side_effect=StoreError("locked")):
            assert builder.build(portal_session) == {}

    def test_cell_store_has_no_lookups(self, builder, cell_session):
        with patch.object(cell_session.store, "try_read") as read:
            assert builder.build(cell_session) == {}
        read.assert_not_called()

    def test_enabled_subset(self, portal_session):
        from datlens.lookups.builder import LookupContextBuilder
        b = LookupContextBuilder(enabled=("components",))
        assert b.source_keys == ("components",)
        assert set(b.build(portal_session)) == {"components"}

    def test_each_build_is_fresh(self, builder, portal_session):
        first = builder.build(portal_session)
        first["skills"][6] = "tampered"
        assert builder.build(portal_session)["skills"][6] == "Melee Defense"


class TestDisplayName:

    def test_known_and_unknown_keys(self):
        from datlens.lookups.builder import display_name
        context = {"skills": {6: "Melee Defense"}}
        assert display_name(context, "skills", 6) == "Melee Defense"
        assert display_name(context, "skills", 7) == "7"
        assert display_name(context, "spells", 1) == "1"
