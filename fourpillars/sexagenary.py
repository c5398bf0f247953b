"""
Heavenly Stems, Earthly Branches and the sexagenary (Jiazi) cycle.

The 60-cycle index is the canonical form of any pillar: stem = i % 10 and
branch = i % 12. Only the 60 same-parity pairs are valid, so a pair is
never built from a stem and a branch picked independently.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Union

from fourpillars.errors import InvalidCombination, InvalidInput


# ============================================================
# FUNDAMENTAL DATA STRUCTURES
# ============================================================

class Polarity(Enum):
    YANG = "yang"
    YIN = "yin"


class Element(Enum):
    WOOD = "wood"
    FIRE = "fire"
    EARTH = "earth"
    METAL = "metal"
    WATER = "water"


@dataclass(frozen=True)
class HeavenlyStem:
    chinese: str
    pinyin: str
    element: Element
    polarity: Polarity
    index: int  # 0-9 in the cycle

    def __str__(self):
        return f"{self.pinyin} ({self.polarity.value} {self.element.value})"


@dataclass(frozen=True)
class EarthlyBranch:
    chinese: str
    pinyin: str
    animal: str
    element: Element  # season element
    polarity: Polarity
    index: int  # 0-11 in the cycle
    hidden_stems: tuple  # pinyin of hidden stems [main_qi, middle_qi, residual_qi]

    def __str__(self):
        return f"{self.pinyin} ({self.animal})"


# ============================================================
# STEM AND BRANCH DEFINITIONS
# ============================================================

HEAVENLY_STEMS = (
    HeavenlyStem("甲", "Jia", Element.WOOD, Polarity.YANG, 0),
    HeavenlyStem("乙", "Yi", Element.WOOD, Polarity.YIN, 1),
    HeavenlyStem("丙", "Bing", Element.FIRE, Polarity.YANG, 2),
    HeavenlyStem("丁", "Ding", Element.FIRE, Polarity.YIN, 3),
    HeavenlyStem("戊", "Wu", Element.EARTH, Polarity.YANG, 4),
    HeavenlyStem("己", "Ji", Element.EARTH, Polarity.YIN, 5),
    HeavenlyStem("庚", "Geng", Element.METAL, Polarity.YANG, 6),
    HeavenlyStem("辛", "Xin", Element.METAL, Polarity.YIN, 7),
    HeavenlyStem("壬", "Ren", Element.WATER, Polarity.YANG, 8),
    HeavenlyStem("癸", "Gui", Element.WATER, Polarity.YIN, 9),
)

EARTHLY_BRANCHES = (
    EarthlyBranch("子", "Zi", "Rat", Element.WATER, Polarity.YANG, 0,
                  ("Gui",)),
    EarthlyBranch("丑", "Chou", "Ox", Element.EARTH, Polarity.YIN, 1,
                  ("Ji", "Gui", "Xin")),
    EarthlyBranch("寅", "Yin", "Tiger", Element.WOOD, Polarity.YANG, 2,
                  ("Jia", "Bing", "Wu")),
    EarthlyBranch("卯", "Mao", "Rabbit", Element.WOOD, Polarity.YIN, 3,
                  ("Yi",)),
    EarthlyBranch("辰", "Chen", "Dragon", Element.EARTH, Polarity.YANG, 4,
                  ("Wu", "Yi", "Gui")),
    EarthlyBranch("巳", "Si", "Snake", Element.FIRE, Polarity.YIN, 5,
                  ("Bing", "Geng", "Wu")),
    EarthlyBranch("午", "Wu", "Horse", Element.FIRE, Polarity.YANG, 6,
                  ("Ding", "Ji")),
    EarthlyBranch("未", "Wei", "Goat", Element.EARTH, Polarity.YIN, 7,
                  ("Ji", "Ding", "Yi")),
    EarthlyBranch("申", "Shen", "Monkey", Element.METAL, Polarity.YANG, 8,
                  ("Geng", "Ren", "Wu")),
    EarthlyBranch("酉", "You", "Rooster", Element.METAL, Polarity.YIN, 9,
                  ("Xin",)),
    EarthlyBranch("戌", "Xu", "Dog", Element.EARTH, Polarity.YANG, 10,
                  ("Wu", "Xin", "Ding")),
    EarthlyBranch("亥", "Hai", "Pig", Element.WATER, Polarity.YIN, 11,
                  ("Ren", "Jia")),
)

# Lookup helpers
STEM_BY_PINYIN = {s.pinyin: s for s in HEAVENLY_STEMS}
STEM_BY_CHINESE = {s.chinese: s for s in HEAVENLY_STEMS}
BRANCH_BY_PINYIN = {b.pinyin: b for b in EARTHLY_BRANCHES}
BRANCH_BY_CHINESE = {b.chinese: b for b in EARTHLY_BRANCHES}

# 甲子, 乙丑, ... 癸亥
JIAZI = tuple(HEAVENLY_STEMS[i % 10].chinese + EARTHLY_BRANCHES[i % 12].chinese
              for i in range(60))


# ============================================================
# INDEX <-> PAIR
# ============================================================

def normalize_index(index: int) -> int:
    """Fold any integer offset (negative included) into [0, 60)."""
    return ((index % 60) + 60) % 60


def from_index(index: int) -> tuple:
    """Return the (HeavenlyStem, EarthlyBranch) pair for a cycle index."""
    index = normalize_index(index)
    return HEAVENLY_STEMS[index % 10], EARTHLY_BRANCHES[index % 12]


def _resolve(value, table, by_chinese, by_pinyin, kind):
    if isinstance(value, int) and not isinstance(value, bool):
        if 0 <= value < len(table):
            return value
        raise InvalidInput(f"{kind} index out of range: {value}")
    if isinstance(value, (HeavenlyStem, EarthlyBranch)):
        return value.index
    if isinstance(value, str):
        found = by_chinese.get(value) or by_pinyin.get(value)
        if found is not None:
            return found.index
    raise InvalidInput(f"Unknown {kind}: {value!r}")


def to_index(stem: Union[int, str, HeavenlyStem],
             branch: Union[int, str, EarthlyBranch]) -> int:
    """
    Inverse of from_index.

    Args:
        stem: stem index (0-9), Chinese symbol, pinyin or HeavenlyStem
        branch: branch index (0-11), Chinese symbol, pinyin or EarthlyBranch

    Raises:
        InvalidCombination: stem and branch parities differ (e.g. 甲丑)
        InvalidInput: unknown symbol or index out of range
    """
    s = _resolve(stem, HEAVENLY_STEMS, STEM_BY_CHINESE, STEM_BY_PINYIN, "stem")
    b = _resolve(branch, EARTHLY_BRANCHES, BRANCH_BY_CHINESE, BRANCH_BY_PINYIN, "branch")
    if s % 2 != b % 2:
        raise InvalidCombination(
            f"{HEAVENLY_STEMS[s].chinese}{EARTHLY_BRANCHES[b].chinese} is not a sexagenary pair"
        )
    # Chinese remainder: i ≡ s (mod 10), i ≡ b (mod 12)
    return normalize_index(6 * s - 5 * b)
