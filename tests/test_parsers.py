"""Tests pour les fonctions de parsing."""

from datetime import datetime, timezone

import pytest

from raidstats.db.parsers import (
    coerce_int,
    coerce_number,
    coerce_teammates,
    format_iso_utc,
    parse_iso_utc,
    raid_from_payload,
    raid_to_payload,
    teammate_from_payload,
)


class TestParseIsoUtc:
    """Tests pour parse_iso_utc."""

    def test_z_suffix(self):
        dt = parse_iso_utc("2026-01-02T20:18:01.293Z")
        assert dt == datetime(2026, 1, 2, 20, 18, 1, 293000, tzinfo=timezone.utc)

    def test_offset_is_converted(self):
        dt = parse_iso_utc("2026-01-02T21:00:00+01:00")
        assert dt == datetime(2026, 1, 2, 20, 0, tzinfo=timezone.utc)

    def test_naive_is_utc(self):
        assert parse_iso_utc("2026-01-02T20:00:00").tzinfo == timezone.utc

    def test_invalid(self):
        with pytest.raises(ValueError):
            parse_iso_utc("pas une date")


class TestFormatIsoUtc:
    def test_milliseconds_and_z(self):
        dt = datetime(2026, 1, 2, 20, 18, 1, 293456, tzinfo=timezone.utc)
        assert format_iso_utc(dt) == "2026-01-02T20:18:01.293Z"

    def test_round_trip(self):
        s = "2026-05-17T08:03:09.120Z"
        assert format_iso_utc(parse_iso_utc(s)) == s


class TestCoerceNumber:
    """Tests pour coerce_number / coerce_int."""

    def test_numbers(self):
        assert coerce_number(5) == 5.0
        assert coerce_number(2.5) == 2.5
        assert coerce_number(" 75000 ") == 75000.0

    def test_invalid_is_absent(self):
        assert coerce_number(None) is None
        assert coerce_number(True) is None
        assert coerce_number("abc") is None
        assert coerce_number("") is None
        assert coerce_number(float("nan")) is None
        assert coerce_number({"Value": 3}) is None

    def test_int(self):
        assert coerce_int("3") == 3
        assert coerce_int(4.0) == 4
        assert coerce_int("x") is None
        assert coerce_int(float("inf")) is None


class TestCoerceTeammates:
    def test_list_and_json(self):
        assert coerce_teammates(["A", "B"]) == ("A", "B")
        assert coerce_teammates('["A", "B"]') == ("A", "B")

    def test_invalid(self):
        assert coerce_teammates(None) == ()
        assert coerce_teammates("not json") == ()
        assert coerce_teammates({"a": 1}) == ()


class TestRaidPayload:
    """Tests pour raid_from_payload / raid_to_payload."""

    def test_legacy_payload(self):
        """Ancien export : inventoryValue seul, sans bringInValue/extractValue."""
        raid = raid_from_payload({
            "id": "r1",
            "createdAt": "2025-11-03T18:30:00.000Z",
            "successful": False,
            "map": "Dam Battlegrounds",
            "mapCondition": None,
            "teammates": ["Amy"],
            "inventoryValue": 5000,
            "raidDurationMins": None,
            "raidStartMins": 22,
            "squadKills": 1,
        })
        assert raid.inventory_value == 5000.0
        assert raid.bring_in_value is None
        assert raid.extract_value is None
        assert raid.teammates == ("Amy",)
        assert raid.raid_start_mins == 22.0

    def test_malformed_numbers_are_absent(self):
        raid = raid_from_payload({
            "id": "r2",
            "createdAt": "2025-11-03T18:30:00.000Z",
            "successful": True,
            "map": "Spaceport",
            "bringInValue": "beaucoup",
            "squadKills": "?",
        })
        assert raid.bring_in_value is None
        assert raid.squad_kills is None

    def test_missing_required_field(self):
        with pytest.raises(ValueError):
            raid_from_payload({"id": "r3", "map": "Spaceport"})

    def test_not_an_object(self):
        with pytest.raises(ValueError):
            raid_from_payload("r4")
        with pytest.raises(ValueError):
            teammate_from_payload(["Amy"])

    def test_to_payload_keeps_legacy_field(self, make_raid):
        raid = make_raid(
            False,
            created_at=datetime(2026, 1, 1, 12, tzinfo=timezone.utc),
            inventory_value=4000,
            teammates=["A"],
        )
        payload = raid_to_payload(raid)
        assert payload["inventoryValue"] == 4000
        assert payload["createdAt"] == "2026-01-01T12:00:00.000Z"
        assert payload["teammates"] == ["A"]
        assert raid_from_payload(payload) == raid


class TestTeammatePayload:
    def test_valid(self):
        t = teammate_from_payload({"username": " Amy ", "lastPlayed": "2026-01-01T00:00:00.000Z"})
        assert t.username == "Amy"

    def test_invalid(self):
        with pytest.raises(ValueError):
            teammate_from_payload({"username": "", "lastPlayed": "2026-01-01T00:00:00.000Z"})
        with pytest.raises(ValueError):
            teammate_from_payload({"username": "Amy"})
