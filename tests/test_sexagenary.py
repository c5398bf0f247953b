"""Stem/branch tables and Jiazi index tests"""

import pytest

from fourpillars.errors import InvalidCombination, InvalidInput
from fourpillars.sexagenary import (
    BRANCH_BY_PINYIN, EARTHLY_BRANCHES, HEAVENLY_STEMS, JIAZI, STEM_BY_PINYIN,
    from_index, normalize_index, to_index,
)


class TestTables:
    def test_sizes(self):
        assert len(HEAVENLY_STEMS) == 10
        assert len(EARTHLY_BRANCHES) == 12
        assert len(JIAZI) == 60

    def test_indices_match_positions(self):
        assert [s.index for s in HEAVENLY_STEMS] == list(range(10))
        assert [b.index for b in EARTHLY_BRANCHES] == list(range(12))

    def test_hidden_stems_resolve(self):
        for branch in EARTHLY_BRANCHES:
            assert 1 <= len(branch.hidden_stems) <= 3
            assert all(p in STEM_BY_PINYIN for p in branch.hidden_stems)

    def test_jiazi_ends(self):
        assert JIAZI[0] == "甲子"
        assert JIAZI[59] == "癸亥"

    def test_immutable(self):
        with pytest.raises(AttributeError):
            HEAVENLY_STEMS[0].index = 3


class TestFromIndex:
    @pytest.mark.parametrize("index,expected", [
        (0, "甲子"), (16, "庚辰"), (36, "庚子"), (54, "戊午"), (59, "癸亥"),
        (60, "甲子"), (-1, "癸亥"), (-60, "甲子"), (125, "己巳"),
    ])
    def test_pairs(self, index, expected):
        stem, branch = from_index(index)
        assert stem.chinese + branch.chinese == expected

    def test_normalize(self):
        assert normalize_index(-61) == 59
        assert normalize_index(120) == 0


class TestToIndex:
    def test_round_trip(self):
        for i in range(60):
            assert to_index(*from_index(i)) == i

    @pytest.mark.parametrize("stem,branch", [
        ("庚", "辰"), (6, 4), ("Geng", "Chen"),
        (STEM_BY_PINYIN["Geng"], BRANCH_BY_PINYIN["Chen"]),
    ])
    def test_accepts_symbols(self, stem, branch):
        assert to_index(stem, branch) == 16

    def test_wu_wu_pinyin(self):
        assert to_index("Wu", "Wu") == 54

    @pytest.mark.parametrize("stem,branch", [("甲", "丑"), (1, 0), ("Geng", "Mao")])
    def test_parity_mismatch(self, stem, branch):
        with pytest.raises(InvalidCombination):
            to_index(stem, branch)

    @pytest.mark.parametrize("stem,branch", [("X", "子"), (10, 0), (0, 12), ("甲", None), (True, 0)])
    def test_unknown_symbol(self, stem, branch):
        with pytest.raises(InvalidInput):
            to_index(stem, branch)
