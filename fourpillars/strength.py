"""
Body strength (身强身弱) scoring.

Scores how well the Day Master is supported by the rest of the chart on a
0-10 scale (0 = extremely weak, 10 = extremely strong). Visible stems,
weighted hidden stems and the seasonal phase of the month branch are
split into support (same element and resource) and opposition (output,
wealth and officer).
"""

from dataclasses import dataclass
from enum import Enum
import math

from fourpillars.bazi import PillarSet
from fourpillars.sexagenary import Element, STEM_BY_PINYIN


class Relation(Enum):
    SAME = "same"
    GENERATES_DAY = "generates_day"  # resource (印)
    GENERATED_BY_DAY = "generated_by_day"  # output (食伤)
    DAY_OVERCOMES = "day_overcomes"  # wealth (财)
    OVERCOMES_DAY = "overcomes_day"  # officer (官杀)


class SeasonalPhase(Enum):
    PROSPEROUS = "旺"
    SUPPORTED = "相"
    RESTING = "休"
    TRAPPED = "囚"
    DEAD = "死"


# Production cycle: Wood → Fire → Earth → Metal → Water → Wood
PRODUCTION_CYCLE = {
    Element.WOOD: Element.FIRE,
    Element.FIRE: Element.EARTH,
    Element.EARTH: Element.METAL,
    Element.METAL: Element.WATER,
    Element.WATER: Element.WOOD,
}

# Control cycle: Wood → Earth → Water → Fire → Metal → Wood
CONTROL_CYCLE = {
    Element.WOOD: Element.EARTH,
    Element.EARTH: Element.WATER,
    Element.WATER: Element.FIRE,
    Element.FIRE: Element.METAL,
    Element.METAL: Element.WOOD,
}

SUPPORTING = frozenset({Relation.SAME, Relation.GENERATES_DAY})

HIDDEN_STEM_WEIGHTS = {
    1: (1.0,),
    2: (0.7, 0.3),
    3: (0.6, 0.25, 0.15),
}

MONTH_BRANCH_MULTIPLIER = 2

# Branch indices per phase for each Day Master element.
# Earth is simplified to the four storage branches.
SEASONAL_PHASES = {
    Element.WOOD: {
        SeasonalPhase.PROSPEROUS: (2, 3), SeasonalPhase.SUPPORTED: (4,),
        SeasonalPhase.RESTING: (5, 6, 7), SeasonalPhase.TRAPPED: (8, 9, 10),
        SeasonalPhase.DEAD: (11, 0, 1),
    },
    Element.FIRE: {
        SeasonalPhase.PROSPEROUS: (5, 6), SeasonalPhase.SUPPORTED: (7,),
        SeasonalPhase.RESTING: (8, 9, 10), SeasonalPhase.TRAPPED: (11, 0, 1),
        SeasonalPhase.DEAD: (2, 3, 4),
    },
    Element.METAL: {
        SeasonalPhase.PROSPEROUS: (8, 9), SeasonalPhase.SUPPORTED: (10,),
        SeasonalPhase.RESTING: (11, 0, 1), SeasonalPhase.TRAPPED: (2, 3, 4),
        SeasonalPhase.DEAD: (5, 6, 7),
    },
    Element.WATER: {
        SeasonalPhase.PROSPEROUS: (11, 0), SeasonalPhase.SUPPORTED: (1,),
        SeasonalPhase.RESTING: (2, 3, 4), SeasonalPhase.TRAPPED: (5, 6, 7),
        SeasonalPhase.DEAD: (8, 9, 10),
    },
    Element.EARTH: {
        SeasonalPhase.PROSPEROUS: (4, 10, 1, 7), SeasonalPhase.SUPPORTED: (5, 6),
        SeasonalPhase.RESTING: (8, 9), SeasonalPhase.TRAPPED: (11, 0),
        SeasonalPhase.DEAD: (2, 3),
    },
}

SEASONAL_SCORES = {
    SeasonalPhase.PROSPEROUS: 5,
    SeasonalPhase.SUPPORTED: 3,
    SeasonalPhase.RESTING: 1,
    SeasonalPhase.TRAPPED: 0,
    SeasonalPhase.DEAD: -2,
}


def element_relationship(day_master_element: Element, other_element: Element) -> Relation:
    """Determine the elemental relationship from the Day Master's perspective."""
    if day_master_element == other_element:
        return Relation.SAME
    elif PRODUCTION_CYCLE[other_element] == day_master_element:
        return Relation.GENERATES_DAY
    elif PRODUCTION_CYCLE[day_master_element] == other_element:
        return Relation.GENERATED_BY_DAY
    elif CONTROL_CYCLE[day_master_element] == other_element:
        return Relation.DAY_OVERCOMES
    elif CONTROL_CYCLE[other_element] == day_master_element:
        return Relation.OVERCOMES_DAY
    else:
        raise ValueError(f"No valid relationship between {day_master_element} and {other_element}")


def seasonal_phase(day_master_element: Element, month_branch_index: int) -> SeasonalPhase:
    for phase, branches in SEASONAL_PHASES[day_master_element].items():
        if month_branch_index in branches:
            return phase
    raise ValueError(f"Branch {month_branch_index} missing from {day_master_element} phase table")


@dataclass(frozen=True)
class StrengthBreakdown:
    support: float
    opposition: float
    phase: SeasonalPhase
    score: int

    def to_dict(self):
        return {
            "support": round(self.support, 4),
            "opposition": round(self.opposition, 4),
            "seasonal_phase": self.phase.value,
            "score": self.score,
        }


def score_breakdown(pillars: PillarSet) -> StrengthBreakdown:
    day_element = pillars.day.stem.element
    support = 0.0
    opposition = 0.0

    # Visible stems, Day Master excluded
    for pillar in (pillars.year, pillars.month, pillars.hour):
        if element_relationship(day_element, pillar.stem.element) in SUPPORTING:
            support += 1.0
        else:
            opposition += 1.0

    # Hidden stems of every branch, month branch doubled
    for position, pillar in zip(PillarSet.POSITIONS, pillars):
        hidden = pillar.branch.hidden_stems
        multiplier = MONTH_BRANCH_MULTIPLIER if position == "month" else 1
        for pinyin, weight in zip(hidden, HIDDEN_STEM_WEIGHTS[len(hidden)]):
            relation = element_relationship(day_element, STEM_BY_PINYIN[pinyin].element)
            if relation in SUPPORTING:
                support += weight * multiplier
            else:
                opposition += weight * multiplier

    phase = seasonal_phase(day_element, pillars.month.branch.index)
    seasonal = SEASONAL_SCORES[phase]
    if seasonal > 0:
        support += seasonal
    else:
        opposition += abs(seasonal)

    total = support + opposition
    # round half up
    score = math.floor(10 * support / total + 0.5) if total > 0 else 0
    return StrengthBreakdown(support=support, opposition=opposition, phase=phase, score=score)


def body_strength(pillars: PillarSet) -> int:
    """Day Master strength as an integer in [0, 10]."""
    return score_breakdown(pillars).score
