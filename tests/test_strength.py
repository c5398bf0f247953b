"""Body strength scoring tests"""

import pytest

from fourpillars.bazi import Pillar, PillarSet, compute_pillars
from fourpillars.julian import to_julian_day
from fourpillars.sexagenary import Element
from fourpillars.strength import (
    Relation, SEASONAL_PHASES, SeasonalPhase, body_strength, element_relationship,
    score_breakdown, seasonal_phase,
)


def pillar_set(*names):
    return PillarSet(*(Pillar.from_symbols(n[0], n[1]) for n in names))


class TestRelations:
    @pytest.mark.parametrize("other,expected", [
        (Element.WOOD, Relation.SAME),
        (Element.WATER, Relation.GENERATES_DAY),
        (Element.FIRE, Relation.GENERATED_BY_DAY),
        (Element.EARTH, Relation.DAY_OVERCOMES),
        (Element.METAL, Relation.OVERCOMES_DAY),
    ])
    def test_wood_day_master(self, other, expected):
        assert element_relationship(Element.WOOD, other) == expected

    def test_every_pair_classified(self):
        for a in Element:
            relations = {element_relationship(a, b) for b in Element}
            assert relations == set(Relation)


class TestSeasonalPhase:
    def test_tables_cover_all_branches(self):
        for element, phases in SEASONAL_PHASES.items():
            covered = sorted(b for branches in phases.values() for b in branches)
            assert covered == list(range(12)), element

    @pytest.mark.parametrize("element,branch,phase", [
        (Element.WOOD, 2, SeasonalPhase.PROSPEROUS),
        (Element.WOOD, 9, SeasonalPhase.TRAPPED),
        (Element.FIRE, 0, SeasonalPhase.TRAPPED),
        (Element.WATER, 1, SeasonalPhase.SUPPORTED),
        (Element.EARTH, 7, SeasonalPhase.PROSPEROUS),
        (Element.METAL, 6, SeasonalPhase.DEAD),
    ])
    def test_lookup(self, element, branch, phase):
        assert seasonal_phase(element, branch) == phase


class TestBodyStrength:
    @pytest.mark.parametrize("name", ["壬子", "乙卯", "辛酉"])
    def test_single_element_chart_is_maximal(self, name):
        assert body_strength(pillar_set(name, name, name, name)) == 10

    def test_reference_chart_1949(self):
        breakdown = score_breakdown(pillar_set("己丑", "癸酉", "甲子", "辛未"))
        assert breakdown.support == pytest.approx(2.4)
        assert breakdown.opposition == pytest.approx(5.6)
        assert breakdown.phase == SeasonalPhase.TRAPPED
        assert breakdown.score == 3

    def test_surrounded_by_metal(self):
        breakdown = score_breakdown(pillar_set("庚申", "庚申", "甲申", "庚申"))
        assert breakdown.support == pytest.approx(1.25)
        assert breakdown.opposition == pytest.approx(6.75)
        assert breakdown.score == 2

    def test_dead_season_counts_against(self):
        # Fire Day Master in a Yin (Tiger) month
        breakdown = score_breakdown(pillar_set("丙寅", "丙寅", "丙寅", "丙寅"))
        assert breakdown.phase == SeasonalPhase.DEAD
        assert breakdown.support == pytest.approx(7.25)
        assert breakdown.opposition == pytest.approx(2.75)
        assert breakdown.score == 7

    def test_month_branch_weighted_double(self):
        breakdown = score_breakdown(pillar_set("甲子", "丙寅", "甲子", "甲子"))
        assert breakdown.phase == SeasonalPhase.PROSPEROUS
        assert breakdown.support == pytest.approx(11.2)
        assert breakdown.opposition == pytest.approx(1.8)
        assert breakdown.score == 9

    def test_bounded_integer(self):
        for day in range(60):
            for other in range(0, 60, 7):
                pillars = PillarSet(Pillar.from_index(other), Pillar.from_index(other + 1),
                                    Pillar.from_index(day), Pillar.from_index(other + 5))
                score = body_strength(pillars)
                assert isinstance(score, int)
                assert 0 <= score <= 10

    def test_deterministic_from_birth(self):
        jd = to_julian_day(1984, 3, 8, 1, 15)
        assert body_strength(compute_pillars(jd, 116.4)) == body_strength(compute_pillars(jd, 116.4))

    def test_to_dict(self):
        d = score_breakdown(pillar_set("己丑", "癸酉", "甲子", "辛未")).to_dict()
        assert d == {"support": 2.4, "opposition": 5.6, "seasonal_phase": "囚", "score": 3}
