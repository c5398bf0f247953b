"""
Calendar utilities for BaZi calculations.
Handles true solar time (longitude + equation of time correction)
and solar term computation.
"""

from dataclasses import dataclass
from typing import Callable, Optional
import logging
import math

from fourpillars.errors import TermResolutionError
from fourpillars.julian import from_julian_day, to_julian_day
from fourpillars.solar import ecliptic_longitude, equation_of_time_minutes, signed_degrees

logger = logging.getLogger(__name__)


# ============================================================
# TRUE SOLAR TIME
# ============================================================

MINUTES_PER_DAY = 1440.0


def longitude_correction(longitude: float, reference_meridian: float = 0.0) -> float:
    """
    Calculate the longitude part of the true solar time correction in minutes.

    The Sun crosses 1° of longitude every 4 minutes. With the default
    reference meridian of 0° the correction is taken against UT, which is
    what the pillar engine uses.

    Args:
        longitude: birth location longitude in degrees (east positive)
        reference_meridian: meridian the input clock time is referred to

    Returns:
        Correction in minutes (negative = subtract from clock time)

    Example:
        Beijing (116.4°E) against UT: 116.4 * 4 = +465.6 min
    """
    return (longitude - reference_meridian) * 4.0


@dataclass(frozen=True)
class TrueSolarTime:
    """
    A birth instant read on the observer's true-solar clock.

    julian_day is the UT instant shifted by the total correction, so its
    calendar components are the local apparent solar date and time. It is
    never reinterpreted through a timezone.
    """
    julian_day: float
    equation_of_time: float  # minutes
    longitude_correction: float  # minutes

    @property
    def correction_minutes(self) -> float:
        return self.equation_of_time + self.longitude_correction

    @property
    def universal_julian_day(self) -> float:
        return self.julian_day - self.correction_minutes / MINUTES_PER_DAY

    def to_local(self, jd: float) -> float:
        """Express another UT instant on this observer's true-solar clock."""
        return jd + self.correction_minutes / MINUTES_PER_DAY

    def components(self) -> tuple:
        """(year, month, day, hour, minute, second) of the true-solar clock."""
        return from_julian_day(self.julian_day)

    @property
    def year(self) -> int:
        return self.components()[0]

    @property
    def hour(self) -> int:
        # unrounded, so the hour turns over with the day number
        return math.floor(((self.julian_day + 0.5) % 1) * 24)

    def isoformat(self) -> str:
        """
        Clock reading as YYYY-MM-DDTHH:MM:SS.

        Built from the components rather than a datetime: the shift can
        carry a reading into year 0 or 10000.
        """
        y, m, d, h, mi, s = self.components()
        return f"{y:04d}-{m:02d}-{d:02d}T{h:02d}:{mi:02d}:{int(s):02d}"


def resolve_true_solar_time(jd_ut: float, longitude: float,
                            reference_meridian: float = 0.0) -> TrueSolarTime:
    """
    Convert a UT instant to true solar time at the given longitude.

    Total correction = equation of time + 4 min per degree of longitude
    east of the reference meridian.
    """
    eot = equation_of_time_minutes(jd_ut)
    lon = longitude_correction(longitude, reference_meridian)
    return TrueSolarTime(
        julian_day=jd_ut + (eot + lon) / MINUTES_PER_DAY,
        equation_of_time=eot,
        longitude_correction=lon,
    )


# ============================================================
# SOLAR TERM COMPUTATION
# ============================================================
#
# 24 solar terms, one every 15° of solar longitude. The odd ones
# (Jie 节) mark BaZi month boundaries:
#
# Li Chun (315°) → Tiger month (month 1)
# Jing Zhe (345°) → Rabbit month (month 2)
# Qing Ming (15°) → Dragon month (month 3)
# Li Xia (45°) → Snake month (month 4)
# Mang Zhong (75°) → Horse month (month 5)
# Xiao Shu (105°) → Goat month (month 6)
# Li Qiu (135°) → Monkey month (month 7)
# Bai Lu (165°) → Rooster month (month 8)
# Han Lu (195°) → Dog month (month 9)
# Li Dong (225°) → Pig month (month 10)
# Da Xue (255°) → Rat month (month 11)
# Xiao Han (285°) → Ox month (month 12)

# (longitude, term_name, chinese)
SOLAR_TERMS = (
    (315, "Li Chun", "立春"),
    (330, "Yu Shui", "雨水"),
    (345, "Jing Zhe", "惊蛰"),
    (0, "Chun Fen", "春分"),
    (15, "Qing Ming", "清明"),
    (30, "Gu Yu", "谷雨"),
    (45, "Li Xia", "立夏"),
    (60, "Xiao Man", "小满"),
    (75, "Mang Zhong", "芒种"),
    (90, "Xia Zhi", "夏至"),
    (105, "Xiao Shu", "小暑"),
    (120, "Da Shu", "大暑"),
    (135, "Li Qiu", "立秋"),
    (150, "Chu Shu", "处暑"),
    (165, "Bai Lu", "白露"),
    (180, "Qiu Fen", "秋分"),
    (195, "Han Lu", "寒露"),
    (210, "Shuang Jiang", "霜降"),
    (225, "Li Dong", "立冬"),
    (240, "Xiao Xue", "小雪"),
    (255, "Da Xue", "大雪"),
    (270, "Dong Zhi", "冬至"),
    (285, "Xiao Han", "小寒"),
    (300, "Da Han", "大寒"),
)

TERM_NAMES = {lon: (name, chinese) for lon, name, chinese in SOLAR_TERMS}

# Jie: 15° past each 30° sign boundary
JIE_LONGITUDES = tuple(lon for lon, _, _ in SOLAR_TERMS if lon % 30 == 15)

LI_CHUN = 315

# Mean daily motion of the Sun (degrees/day)
MEAN_SOLAR_MOTION = 0.9856
TERM_ITERATIONS = 5
TERM_TOLERANCE_DEG = 1e-3


@dataclass(frozen=True)
class SolarTermRecord:
    year: int
    longitude: float
    julian_day: float

    @property
    def name(self) -> str:
        return TERM_NAMES.get(self.longitude, (f"{self.longitude:g}°", ""))[0]

    @property
    def chinese(self) -> str:
        return TERM_NAMES.get(self.longitude, ("", ""))[1]

    @property
    def is_jie(self) -> bool:
        return self.longitude % 30 == 15

    def to_dict(self) -> dict:
        y, m, d, h, mi, s = from_julian_day(self.julian_day)
        return {
            "term_name": self.name,
            "chinese": self.chinese,
            "longitude": self.longitude,
            "jd": self.julian_day,
            "utc": f"{y:04d}-{m:02d}-{d:02d} {h:02d}:{mi:02d}:{int(s):02d}",
        }


class SolarTermSolver:
    """
    Finds the moment the Sun reaches a given ecliptic longitude.

    Results are memoized by (year, longitude) in a dict that is never
    invalidated. Concurrent callers may compute the same key twice; the
    value is deterministic so the last write wins.
    """

    def __init__(self, cache: Optional[dict] = None,
                 longitude_fn: Callable[[float], float] = ecliptic_longitude):
        self._cache = {} if cache is None else cache
        self._longitude = longitude_fn

    @property
    def cache(self) -> dict:
        return self._cache

    def find_term_jd(self, year: int, longitude: float) -> float:
        """
        Julian Day (UT) at which the Sun crosses `longitude` in Gregorian `year`.

        The seed is placed from 1 January of `year` at the mean solar motion,
        so the term found is the one falling inside that calendar year.
        The iteration count is fixed, not data dependent.

        Raises:
            TermResolutionError: residual still above TERM_TOLERANCE_DEG
        """
        target = longitude % 360
        key = (year, target)
        cached = self._cache.get(key)
        if cached is not None:
            return cached

        jan1 = to_julian_day(year, 1, 1)
        jd = jan1 + ((target - self._longitude(jan1)) % 360) / MEAN_SOLAR_MOTION
        for _ in range(TERM_ITERATIONS):
            jd += signed_degrees(target - self._longitude(jd)) / MEAN_SOLAR_MOTION

        residual = signed_degrees(target - self._longitude(jd)) if math.isfinite(jd) else math.nan
        if not abs(residual) <= TERM_TOLERANCE_DEG:
            raise TermResolutionError(
                f"Solar longitude {target}° in {year} unresolved after "
                f"{TERM_ITERATIONS} iterations (residual {residual}°)"
            )

        logger.debug("solar term %s° of %d solved: JD %.5f", target, year, jd)
        self._cache[key] = jd
        return jd

    def term(self, year: int, longitude: float) -> SolarTermRecord:
        return SolarTermRecord(year, longitude % 360, self.find_term_jd(year, longitude))

    def terms_for_year(self, year: int) -> list[SolarTermRecord]:
        """All 24 solar terms falling in a Gregorian year, in chronological order."""
        terms = [self.term(year, lon) for lon, _, _ in SOLAR_TERMS]
        terms.sort(key=lambda t: t.julian_day)
        return terms

    def jie_for_year(self, year: int) -> list[SolarTermRecord]:
        """The 12 Jie (month boundary) terms of a Gregorian year, chronological."""
        terms = [self.term(year, lon) for lon in JIE_LONGITUDES]
        terms.sort(key=lambda t: t.julian_day)
        return terms

    def previous_jie(self, jd: float, year: int) -> SolarTermRecord:
        """
        Latest Jie at or before a UT instant.

        Args:
            jd: Julian Day (UT)
            year: Gregorian year of the instant; the previous year's
                terms are searched as well to cover early January.
        """
        for term in reversed(self.jie_for_year(year - 1) + self.jie_for_year(year)):
            if term.julian_day <= jd:
                return term
        raise TermResolutionError(f"No Jie found at or before JD {jd}")


# Process-wide solver shared by charts that are not given one
DEFAULT_SOLVER = SolarTermSolver()


def find_jie_dates(year: int, solver: Optional[SolarTermSolver] = None) -> list[dict]:
    """
    Compute all 12 Jie solar term dates for a given Gregorian year.

    Returns:
        List of dicts with keys: term_name, chinese, longitude, jd, utc
    """
    solver = solver or DEFAULT_SOLVER
    return [term.to_dict() for term in solver.jie_for_year(year)]
