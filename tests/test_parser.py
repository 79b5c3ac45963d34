"""Tests for separator stripping and greedy segmentation."""

import pytest

from phonver.core.errors import UnparseableVersion
from phonver.engine.parser import parse_syllables, strip_separators


class TestStripSeparators:
    def test_all_kinds(self):
        assert strip_separators("ba. kat lan:tit~so-rit'ai") == "bakatlantitsoritai"

    def test_lowercases(self):
        assert strip_separators("Ba. Kat-LAN") == "bakatlan"

    def test_digits_and_symbols_dropped(self):
        assert strip_separators("v1.2 kat/lan!") == "vkatlan"

    def test_nothing_left(self):
        assert strip_separators(" .-~:' ") == ""


class TestParseSyllables:
    def test_plain(self, context):
        assert parse_syllables("ritgabusi", context.inventory) == ["rit", "ga", "bu", "si"]

    def test_decorated(self, context):
        assert parse_syllables("Rit-Ga bu~si", context.inventory) == ["rit", "ga", "bu", "si"]

    def test_longest_match(self, context):
        assert parse_syllables("brakstelai", context.inventory) == ["brak", "stel", "ai"]

    def test_separator_inside_syllable_ignored(self, context):
        assert parse_syllables("br-ak", context.inventory) == ["brak"]

    def test_unrecognized_remainder(self, context):
        with pytest.raises(UnparseableVersion) as exc:
            parse_syllables("bakatxyz", context.inventory)
        assert exc.value.remainder == "xyz"

    def test_trailing_fragment(self, context):
        with pytest.raises(UnparseableVersion, match="unrecognized syllable at 'k'"):
            parse_syllables("bak", context.inventory)

    def test_empty(self, context):
        with pytest.raises(UnparseableVersion, match="no syllable letters") as exc:
            parse_syllables("", context.inventory)
        assert exc.value.remainder == ""

    def test_only_separators(self, context):
        with pytest.raises(UnparseableVersion):
            parse_syllables("--. ~", context.inventory)

    def test_small_inventory(self, small_inventory):
        assert parse_syllables("brakouba", small_inventory) == ["brak", "ou", "ba"]
