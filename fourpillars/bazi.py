"""
BaZi (Four Pillars of Destiny) pillar assignment.

Handles:
- Day pillar from the true-solar day number
- Year pillar with the Li Chun (Start of Spring) boundary
- Month pillar from the Jie solar terms and the Five Tigers rule
- Hour pillar from the true-solar hour and the Five Rats rule

The pillars are computed in that order from one TrueSolarTime. Errors
from the solar-term solver propagate; no partial PillarSet is returned.
"""

from dataclasses import dataclass
from typing import Optional
import logging
import math

from fourpillars.astro_calendar import (
    DEFAULT_SOLVER, LI_CHUN, SolarTermSolver, TrueSolarTime, resolve_true_solar_time,
)
from fourpillars.errors import InvalidCombination
from fourpillars.sexagenary import (
    EarthlyBranch, HeavenlyStem, JIAZI, from_index, normalize_index, to_index,
)

logger = logging.getLogger(__name__)


# ============================================================
# PILLAR VALUE TYPES
# ============================================================

@dataclass(frozen=True)
class Pillar:
    stem: HeavenlyStem
    branch: EarthlyBranch
    index: int  # 0-59 in the Jiazi cycle

    def __post_init__(self):
        if (self.stem, self.branch) != from_index(self.index) or not 0 <= self.index < 60:
            raise InvalidCombination(
                f"{self.stem.chinese}{self.branch.chinese} does not match cycle index {self.index}"
            )

    @classmethod
    def from_index(cls, index: int) -> "Pillar":
        index = normalize_index(index)
        stem, branch = from_index(index)
        return cls(stem=stem, branch=branch, index=index)

    @classmethod
    def from_symbols(cls, stem, branch) -> "Pillar":
        return cls.from_index(to_index(stem, branch))

    @property
    def name(self) -> str:
        return JIAZI[self.index]

    def __str__(self):
        return f"{self.stem.pinyin} {self.branch.pinyin} ({self.stem.polarity.value} {self.stem.element.value} {self.branch.animal})"

    def to_dict(self):
        return {
            "index": self.index,
            "name": self.name,
            "stem": {
                "chinese": self.stem.chinese,
                "pinyin": self.stem.pinyin,
                "element": self.stem.element.value,
                "polarity": self.stem.polarity.value,
            },
            "branch": {
                "chinese": self.branch.chinese,
                "pinyin": self.branch.pinyin,
                "animal": self.branch.animal,
                "element": self.branch.element.value,
                "polarity": self.branch.polarity.value,
                "hidden_stems": list(self.branch.hidden_stems),
            },
            "description": str(self),
        }


@dataclass(frozen=True)
class PillarSet:
    year: Pillar
    month: Pillar
    day: Pillar
    hour: Pillar

    POSITIONS = ("year", "month", "day", "hour")

    def __iter__(self):
        return iter((self.year, self.month, self.day, self.hour))

    def sequence(self) -> list[str]:
        """[yearStem, yearBranch, monthStem, ..., hourBranch] as Chinese symbols."""
        return [symbol for p in self for symbol in (p.stem.chinese, p.branch.chinese)]

    def names(self) -> list[str]:
        """Four two-character pillar names, e.g. ['庚辰', '己卯', '戊午', '戊午']."""
        return [p.name for p in self]

    def to_dict(self):
        return {pos: p.to_dict() for pos, p in zip(self.POSITIONS, self)}


# ============================================================
# STEM DERIVATION TABLES
# ============================================================

# Five Tigers Escape (五虎遁): month stem of the Tiger month per year stem pair
#   Jia/Ji → Bing, Yi/Geng → Wu, Bing/Xin → Geng, Ding/Ren → Ren, Wu/Gui → Jia
# Columns run from Yin (寅) through Chou (丑).
FIVE_TIGERS = tuple(
    tuple((start + k) % 10 for k in range(12)) for start in (2, 4, 6, 8, 0)
)

# Five Rats Escape (五鼠遁): hour stem of the Zi hour per day stem pair
#   Jia/Ji → Jia, Yi/Geng → Bing, Bing/Xin → Wu, Ding/Ren → Geng, Wu/Gui → Ren
# Columns run from Zi (子) through Hai (亥).
FIVE_RATS = tuple(
    tuple((start + k) % 10 for k in range(12)) for start in (0, 2, 4, 6, 8)
)

# 1900-01-01 00:00 UT was a Jia Xu (甲戌) day
EPOCH_JD = 2415020.5
EPOCH_DAY_INDEX = 10

# 4 CE was a Jia Zi (甲子) year
EPOCH_YEAR = 4
EPOCH_YEAR_INDEX = 0


# ============================================================
# PILLAR COMPUTATION
# ============================================================

def day_pillar(tst: TrueSolarTime) -> Pillar:
    """
    Compute the Day Pillar.

    The day changes at true-solar midnight, so the day number is taken
    from the true-solar Julian Day shifted by half a day rather than from
    the noon-based integer JD.
    """
    day_number = math.floor(tst.julian_day - 0.5)
    epoch_day_number = math.floor(EPOCH_JD - 0.5)
    return Pillar.from_index(EPOCH_DAY_INDEX + (day_number - epoch_day_number))


def bazi_year(tst: TrueSolarTime, solver: SolarTermSolver) -> int:
    """
    The BaZi year starts at Li Chun (Sun at 315°), usually Feb 3-5.
    Births before Li Chun of their Gregorian year belong to the previous year.
    """
    year = tst.year
    li_chun = tst.to_local(solver.find_term_jd(year, LI_CHUN))
    return year - 1 if tst.julian_day < li_chun else year


def year_pillar(tst: TrueSolarTime, solver: SolarTermSolver) -> Pillar:
    """Compute the Year Pillar."""
    return Pillar.from_index(EPOCH_YEAR_INDEX + (bazi_year(tst, solver) - EPOCH_YEAR))


def month_branch_index(tst: TrueSolarTime, solver: SolarTermSolver) -> int:
    """
    Branch of the month: the latest Jie at or before the birth.

    Li Chun (315°) opens the Tiger month (branch 2); each following Jie,
    30° further on, advances one branch.
    """
    jie = solver.previous_jie(tst.universal_julian_day, tst.year)
    return (math.floor(((jie.longitude - LI_CHUN) % 360) / 30) + 2) % 12


def month_pillar(year_stem_index: int, month_branch: int) -> Pillar:
    """
    Compute the Month Pillar using the Five Tigers Escape (Wu Hu Dun) formula.

    Args:
        year_stem_index: index of the year's heavenly stem (0-9)
        month_branch: index of the month's earthly branch (0-11)
            Note: month 1 (Tiger/Yin) has branch index 2
    """
    stem_index = FIVE_TIGERS[year_stem_index % 5][(month_branch - 2) % 12]
    return Pillar.from_symbols(stem_index, month_branch)


def hour_branch_index(hour: int) -> int:
    """
    Map a true-solar hour to its branch.

    Chinese hours (shi chen) are 2-hour blocks centred on even hours:
    23:00-00:59 = Zi (Rat)      = branch 0
    01:00-02:59 = Chou (Ox)     = branch 1
    ...
    21:00-22:59 = Hai (Pig)     = branch 11
    """
    return math.floor((hour + 1) / 2) % 12


def hour_pillar(day_stem_index: int, hour: int) -> Pillar:
    """
    Compute the Hour Pillar using Five Rats Escape (Wu Shu Dun) formula.

    A 23:00 birth takes the Zi hour but keeps the current day's stem.

    Args:
        day_stem_index: index of the day's heavenly stem (0-9)
        hour: hour in 24h format (true solar time)
    """
    branch_index = hour_branch_index(hour)
    return Pillar.from_symbols(FIVE_RATS[day_stem_index % 5][branch_index], branch_index)


def assign_pillars(tst: TrueSolarTime, solver: Optional[SolarTermSolver] = None) -> PillarSet:
    """
    Assign the Four Pillars for an already resolved true-solar instant.

    Raises:
        TermResolutionError: a solar term boundary could not be located
    """
    solver = solver or DEFAULT_SOLVER

    dp = day_pillar(tst)
    yp = year_pillar(tst, solver)
    mp = month_pillar(yp.stem.index, month_branch_index(tst, solver))
    hp = hour_pillar(dp.stem.index, tst.hour)

    pillars = PillarSet(year=yp, month=mp, day=dp, hour=hp)
    logger.debug("pillars for true-solar JD %.5f: %s", tst.julian_day, " ".join(pillars.names()))
    return pillars


def compute_pillars(jd_ut: float, longitude: float,
                    solver: Optional[SolarTermSolver] = None,
                    reference_meridian: float = 0.0) -> PillarSet:
    """
    Compute the Four Pillars for a birth instant.

    Args:
        jd_ut: Julian Day of birth (UT)
        longitude: birth longitude in degrees, east positive
        solver: solar term solver (the process-wide one by default)
        reference_meridian: meridian the correction is taken against

    Raises:
        TermResolutionError: a solar term boundary could not be located
    """
    return assign_pillars(resolve_true_solar_time(jd_ut, longitude, reference_meridian), solver)
