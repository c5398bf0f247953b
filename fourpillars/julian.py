"""
Civil date/time <-> Julian Day conversion.

Julian Days follow the astronomical convention: an integer value falls on
noon UT, so midnight is at .5. Dates are proleptic Gregorian throughout
unless `proleptic=False` is asked for on the way back.
"""

import math

# First Julian Day number of the Gregorian calendar (1582-10-15)
GREGORIAN_REFORM_JDN = 2299161


def to_julian_day(year: int, month: int, day: int,
                  hour: int = 0, minute: int = 0, second: float = 0) -> float:
    """
    Convert a proleptic Gregorian date/time (UT) to a Julian Day.

    Inputs are not validated: month=13 or day=40 give a defined but
    meaningless value. Validate before calling.

    Example:
        to_julian_day(2000, 1, 1, 12) → 2451545.0 (J2000.0)
    """
    if month <= 2:
        year -= 1
        month += 12

    # Century correction (always Gregorian)
    a = math.floor(year / 100)
    b = 2 - a + math.floor(a / 4)

    day_fraction = (hour + minute / 60.0 + second / 3600.0) / 24.0
    return (math.floor(365.25 * (year + 4716))
            + math.floor(30.6001 * (month + 1))
            + day + b - 1524.5 + day_fraction)


def from_julian_day(jd: float, utc_offset_hours: float = 0.0,
                    proleptic: bool = True) -> tuple:
    """
    Convert a Julian Day back to civil date/time components.

    Args:
        jd: Julian Day (UT)
        utc_offset_hours: components are returned as read in the zone UTC+offset
        proleptic: when False, days before JDN 2299161 come back in the
            Julian calendar (historical reckoning)

    Returns:
        (year, month, day, hour, minute, second) with second as a float
        rounded to the millisecond
    """
    jd = jd + utc_offset_hours / 24.0
    z = math.floor(jd + 0.5)
    seconds = round((jd + 0.5 - z) * 86400.0, 3)
    if seconds >= 86400.0:
        z += 1
        seconds -= 86400.0

    if proleptic or z >= GREGORIAN_REFORM_JDN:
        alpha = math.floor((z - 1867216.25) / 36524.25)
        a = z + 1 + alpha - math.floor(alpha / 4)
    else:
        a = z

    b = a + 1524
    c = math.floor((b - 122.1) / 365.25)
    d = math.floor(365.25 * c)
    e = math.floor((b - d) / 30.6001)

    day = b - d - math.floor(30.6001 * e)
    month = e - 1 if e < 14 else e - 13
    year = c - 4716 if month > 2 else c - 4715

    hour = int(seconds // 3600)
    minute = int((seconds % 3600) // 60)
    second = round(seconds - hour * 3600 - minute * 60, 3)
    return int(year), int(month), int(day), hour, minute, second
