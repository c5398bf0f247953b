"""
Public entry point: one birth record in, Four Pillars and strength out.

Usage:
    from fourpillars.chart import BaziChart
    chart = BaziChart(1949, 10, 1, 6, 0, 0, longitude=116.4)
    chart.get_bazi()           # ['己丑', '癸酉', '甲子', '辛未']
    chart.get_body_strength()  # 3

Times are UT. Use fourpillars.create_chart for wall-clock input.
"""

from datetime import datetime, timezone
from typing import Optional
import math

from fourpillars.bazi import PillarSet, assign_pillars
from fourpillars.astro_calendar import SolarTermSolver, TrueSolarTime, resolve_true_solar_time
from fourpillars.errors import InvalidInput
from fourpillars.julian import to_julian_day
from fourpillars.strength import StrengthBreakdown, score_breakdown


def validate_birth_input(year, month, day, hour, minute, second, longitude) -> None:
    """
    Check civil components and longitude before any conversion.

    Raises:
        InvalidInput: anything outside the Gregorian calendar (years 1-9999),
            a time of day outside 00:00:00-23:59:59.999, or a longitude
            outside [-180, 180]
    """
    try:
        datetime(year, month, day, hour, minute)
    except (TypeError, ValueError) as e:
        raise InvalidInput(f"Invalid birth date/time: {e}") from e
    if not (isinstance(second, (int, float)) and 0 <= second < 60):
        raise InvalidInput(f"second must be in [0, 60), got {second}")
    if not (isinstance(longitude, (int, float)) and math.isfinite(longitude)
            and -180.0 <= longitude <= 180.0):
        raise InvalidInput(f"longitude must be in [-180, 180], got {longitude}")


class BaziChart:
    """
    Four Pillars computed from a UT birth instant and a longitude.

    Args:
        year, month, day, hour, minute, second: birth time in UT
        longitude: degrees, east positive, west negative
        gender: carried for downstream rules, not used here
        solver: solar term solver; the process-wide one by default
    """

    def __init__(self, year: int, month: int, day: int, hour: int, minute: int,
                 second: float = 0, longitude: float = 0.0, gender: Optional[str] = None,
                 *, solver: Optional[SolarTermSolver] = None):
        validate_birth_input(year, month, day, hour, minute, second, longitude)
        self.year = year
        self.month = month
        self.day = day
        self.hour = hour
        self.minute = minute
        self.second = second
        self.longitude = longitude
        self.gender = gender

        self.julian_day = to_julian_day(year, month, day, hour, minute, second)
        self.true_solar_time: TrueSolarTime = resolve_true_solar_time(self.julian_day, longitude)
        self._pillars = assign_pillars(self.true_solar_time, solver)
        self._strength: Optional[StrengthBreakdown] = None

    @classmethod
    def from_datetime(cls, moment: datetime, longitude: float,
                      gender: Optional[str] = None, **kwargs) -> "BaziChart":
        """Build from a datetime. Aware values are converted to UTC; naive ones are UT."""
        if moment.tzinfo is not None:
            moment = moment.astimezone(timezone.utc)
        return cls(moment.year, moment.month, moment.day, moment.hour, moment.minute,
                   moment.second + moment.microsecond / 1e6, longitude, gender, **kwargs)

    def get_pillars(self) -> PillarSet:
        return self._pillars

    def get_bazi_sequence(self) -> list[str]:
        """[yearStem, yearBranch, monthStem, monthBranch, dayStem, dayBranch, hourStem, hourBranch]"""
        return self._pillars.sequence()

    def get_bazi(self) -> list[str]:
        """Four pillar names [year, month, day, hour]."""
        return self._pillars.names()

    def get_strength_breakdown(self) -> StrengthBreakdown:
        if self._strength is None:
            self._strength = score_breakdown(self._pillars)
        return self._strength

    def get_body_strength(self) -> int:
        """Body strength 0-10: 0 extremely weak, 10 extremely strong."""
        return self.get_strength_breakdown().score

    def to_dict(self) -> dict:
        tst = self.true_solar_time
        return {
            "input": {
                "utc": f"{self.year:04d}-{self.month:02d}-{self.day:02d} "
                       f"{self.hour:02d}:{self.minute:02d}:{int(self.second):02d}",
                "longitude": self.longitude,
                "gender": self.gender,
                "jd": self.julian_day,
            },
            "true_solar_time": {
                "datetime": tst.isoformat(),
                "equation_of_time_min": round(tst.equation_of_time, 2),
                "longitude_correction_min": round(tst.longitude_correction, 2),
            },
            "bazi": self.get_bazi(),
            "pillars": self._pillars.to_dict(),
            "body_strength": self.get_strength_breakdown().to_dict(),
        }
