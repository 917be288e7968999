"""Tests pour le stockage SQLite."""

from datetime import datetime, timedelta, timezone

import pytest

from raidstats.db.store import RaidStore
from raidstats.models import RaidInput

T0 = datetime(2026, 2, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def store(tmp_path):
    return RaidStore(str(tmp_path / "raids.db"))


class TestRaids:
    """Tests pour le CRUD des raids."""

    def test_empty(self, store):
        assert store.get_raids() == []
        assert store.get_last_raid() is None

    def test_save_assigns_id_and_date(self, store):
        raid = store.save_raid(RaidInput(successful=True, map="Spaceport", extract_value=5000), now=T0)
        assert raid.id
        assert raid.created_at == T0
        assert store.get_raids() == [raid]

    def test_saved_raid_equals_stored_raid(self, store):
        """La date est ramenée à la milliseconde UTC, comme en base."""
        raid = store.save_raid(RaidInput(successful=True, map="Spaceport"))
        assert raid.created_at.microsecond % 1000 == 0
        assert raid == store.get_raids()[0]

    def test_naive_date_is_stored_as_utc(self, store):
        raid = store.save_raid(
            RaidInput(successful=True, map="Spaceport"), now=datetime(2026, 2, 1, 12, 0, 0, 123456)
        )
        assert raid.created_at == datetime(2026, 2, 1, 12, 0, 0, 123000, tzinfo=timezone.utc)
        assert store.get_raids() == [raid]

    def test_newest_first(self, store):
        first = store.save_raid(RaidInput(successful=True, map="Spaceport"), now=T0)
        second = store.save_raid(RaidInput(successful=False, map="Blue Gate"), now=T0 + timedelta(minutes=5))
        assert [r.id for r in store.get_raids()] == [second.id, first.id]
        assert store.get_last_raid() == second

    def test_ids_are_unique(self, store):
        ids = {store.save_raid(RaidInput(successful=True, map="Spaceport")).id for _ in range(5)}
        assert len(ids) == 5

    def test_update(self, store):
        raid = store.save_raid(RaidInput(successful=False, map="Spaceport", bring_in_value=1000), now=T0)
        updated = store.update_raid(raid.id, successful=True, extract_value=9000, teammates=["Amy"])
        assert updated.successful is True
        assert updated.extract_value == 9000
        assert updated.teammates == ("Amy",)
        assert updated.created_at == raid.created_at
        assert store.get_raids() == [updated]

    def test_update_unknown_id(self, store):
        assert store.update_raid("nope", successful=True) is None

    def test_update_forbidden_field(self, store):
        raid = store.save_raid(RaidInput(successful=True, map="Spaceport"))
        with pytest.raises(ValueError):
            store.update_raid(raid.id, id="other")

    def test_delete(self, store):
        raid = store.save_raid(RaidInput(successful=True, map="Spaceport"))
        assert store.delete_raid(raid.id) is True
        assert store.delete_raid(raid.id) is False
        assert store.get_raids() == []


class TestTeammates:
    """Tests pour les coéquipiers."""

    def test_save_raid_adds_teammates(self, store):
        store.save_raid(RaidInput(successful=True, map="Spaceport", teammates=("Amy", " Bob ")), now=T0)
        assert sorted(t.username for t in store.get_teammates()) == ["Amy", "Bob"]

    def test_case_insensitive_upsert(self, store):
        store.add_teammates(["Amy"], now=T0)
        store.add_teammates(["amy", "Bob"], now=T0 + timedelta(hours=1))
        teammates = store.get_teammates()
        assert [t.username for t in teammates] == ["Amy", "Bob"]
        assert teammates[0].last_played == T0 + timedelta(hours=1)

    def test_most_recent_first(self, store):
        store.add_teammates(["Old"], now=T0)
        store.add_teammates(["New"], now=T0 + timedelta(days=1))
        assert [t.username for t in store.get_teammates()] == ["New", "Old"]

    def test_blank_names_skipped(self, store):
        store.add_teammates(["", "   "])
        assert store.get_teammates() == []

    def test_add_teammate(self, store):
        t = store.add_teammate("Zed")
        assert t.username == "Zed"
        with pytest.raises(ValueError):
            store.add_teammate("  ")

    def test_delete_teammate(self, store):
        store.add_teammates(["Amy"])
        assert store.delete_teammate("AMY") is True
        assert store.delete_teammate("Amy") is False


class TestExportImport:
    """Tests pour l'export / import JSON."""

    def test_round_trip_keeps_legacy_field(self, store, tmp_path):
        store.save_raid(RaidInput(successful=False, map="Buried City", inventory_value=5000), now=T0)
        store.save_raid(
            RaidInput(successful=True, map="Spaceport", teammates=("Amy",), extract_value=1000),
            now=T0 + timedelta(hours=1),
        )
        data = store.export_data()
        assert data["raids"][1]["inventoryValue"] == 5000
        assert data["teammates"][0]["username"] == "Amy"

        other = RaidStore(str(tmp_path / "other.db"))
        assert other.import_data(data) == (2, 1)
        assert other.get_raids() == store.get_raids()
        assert other.export_data() == data

    def test_invalid_import_changes_nothing(self, store):
        raid = store.save_raid(RaidInput(successful=True, map="Spaceport"))
        with pytest.raises(ValueError):
            store.import_data({"raids": [{"id": "x"}], "teammates": []})
        assert store.get_raids() == [raid]

    @pytest.mark.parametrize(
        "payload",
        [
            {"raids": {"a": 1}},
            {"raids": ["pas un objet"]},
            {"raids": [], "teammates": [42]},
            [{"id": "x"}],
        ],
    )
    def test_malformed_export_raises_value_error(self, store, payload):
        raid = store.save_raid(RaidInput(successful=True, map="Spaceport"), now=T0)
        with pytest.raises(ValueError):
            store.import_data(payload)
        assert store.get_raids() == [raid]

    def test_clear_all_data(self, store):
        store.save_raid(RaidInput(successful=True, map="Spaceport", teammates=("Amy",)))
        store.clear_all_data()
        assert store.get_raids() == []
        assert store.get_teammates() == []


class TestDefaultPath:
    def test_env_override(self, tmp_path, monkeypatch):
        db_path = tmp_path / "env.db"
        monkeypatch.setenv("RAIDSTATS_DB", str(db_path))
        store = RaidStore()
        assert store.db_path == str(db_path)
        assert db_path.exists()
