"""Tests for the syllable inventory and its bundled data."""

import json

import pytest

from phonver.core.errors import ConfigError, IndexOutOfRange, UnknownSyllable
from phonver.core.syllables import SyllableInventory, load_inventory


class TestBundledInventory:
    """The shipped 128-syllable set."""

    def test_size(self, context):
        assert context.inventory.base == 128
        assert len(context.inventory) == 128

    def test_prefix_free(self, context):
        assert context.inventory.is_prefix_free()

    def test_first_and_last(self, context):
        assert context.inventory[0] == "ba"
        assert context.inventory[127] == "ou"

    def test_lengths(self, context):
        assert context.inventory.min_length == 2
        assert context.inventory.max_length == 4

    def test_all_well_formed(self, context):
        ph = context.phonotactics
        bad = [s for s in context.inventory if not ph.is_well_formed(s)]
        assert bad == []

    def test_stats(self, context):
        stats = context.stats()
        assert stats["total_syllables"] == 128
        assert stats["bits_per_syllable"] == 7.0
        assert stats["distribution"] == {"CCVC": 25, "CV": 50, "CVC": 50, "VV": 3}
        assert stats["prefix_free"] is True


class TestMapping:
    """Digit <-> syllable lookups."""

    def test_to_syllables(self, context):
        assert context.inventory.to_syllables([75, 15, 4, 43]) == ["rit", "ga", "bu", "si"]

    def test_to_digits(self, context):
        assert context.inventory.to_digits(["rit", "ga", "bu", "si"]) == [75, 15, 4, 43]

    def test_to_digits_case_insensitive(self, context):
        assert context.inventory.to_digits(["BRAK", "Ai"]) == [100, 125]

    def test_digit_out_of_range(self, context):
        with pytest.raises(IndexOutOfRange, match="0-127") as exc:
            context.inventory.to_syllables([128])
        assert exc.value.digit == 128
        assert exc.value.base == 128

    def test_negative_digit(self, context):
        with pytest.raises(IndexOutOfRange):
            context.inventory.to_syllables([-1])

    def test_unknown_syllable(self, context):
        with pytest.raises(UnknownSyllable, match="xyz") as exc:
            context.inventory.to_digits(["ba", "xyz"])
        assert exc.value.syllable == "xyz"

    def test_index_of(self, small_inventory):
        assert small_inventory.index_of("lu") == 2
        assert small_inventory.index_of("zz") is None

    def test_contains(self, small_inventory):
        assert "brak" in small_inventory
        assert "bra" not in small_inventory


class TestValidation:
    """Inventories are checked when built."""

    def test_empty(self):
        with pytest.raises(ConfigError, match="empty"):
            SyllableInventory([])

    def test_duplicates(self):
        with pytest.raises(ConfigError, match="Duplicate"):
            SyllableInventory(["ba", "ko", "ba"])

    def test_uppercase_rejected(self):
        with pytest.raises(ConfigError, match="lowercase"):
            SyllableInventory(["ba", "Ko"])

    def test_prefix_detection(self):
        assert not SyllableInventory(["ba", "bak", "ko"]).is_prefix_free()
        assert SyllableInventory(["ba", "kob", "ko"]).is_prefix_free() is False
        assert SyllableInventory(["ba", "bo", "ko"]).is_prefix_free()


class TestLoadInventory:
    """Loading from JSON files and the environment."""

    def test_dict_format(self, tmp_path):
        path = tmp_path / "syl.json"
        path.write_text(json.dumps({"version": "v1", "syllables": ["ba", "ko"]}))
        inv = load_inventory(path)
        assert inv.version == "v1"
        assert inv.syllables == ("ba", "ko")

    def test_list_format(self, tmp_path):
        path = tmp_path / "syl.json"
        path.write_text(json.dumps(["ba", "ko", "lu"]))
        assert load_inventory(path).base == 3

    def test_environment_override(self, tmp_path, monkeypatch):
        path = tmp_path / "env.json"
        path.write_text(json.dumps(["mi", "ou"]))
        monkeypatch.setenv("PHONVER_SYLLABLES", str(path))
        assert load_inventory().syllables == ("mi", "ou")

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="Cannot read"):
            load_inventory(tmp_path / "nope.json")

    def test_bad_json(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("{not json")
        with pytest.raises(ConfigError, match="not valid JSON"):
            load_inventory(path)

    def test_missing_syllables_key(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"version": "v1"}))
        with pytest.raises(ConfigError, match="no 'syllables' list"):
            load_inventory(path)
