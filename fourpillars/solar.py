"""
Low-order solar position and equation of time.

Mean elements are linear in days since J2000.0 with a two-term equation of
center, good to about 0.01° in longitude. That is enough to place solar
terms within a quarter hour; it is not an arcsecond ephemeris.
"""

import math

J2000 = 2451545.0

# Mean longitude and mean anomaly: value at J2000 and daily motion (degrees)
MEAN_LONGITUDE_J2000 = 280.460
MEAN_LONGITUDE_RATE = 0.9856474
MEAN_ANOMALY_J2000 = 357.528
MEAN_ANOMALY_RATE = 0.9856003

OBLIQUITY_J2000 = 23.439
OBLIQUITY_RATE = -0.0000004


def normalize_degrees(angle: float) -> float:
    """Map an angle into [0, 360)."""
    angle = angle % 360.0
    # -1e-15 % 360 rounds up to 360.0
    return 0.0 if angle >= 360.0 else angle


def signed_degrees(angle: float) -> float:
    """Map an angle into (-180, 180]."""
    angle = normalize_degrees(angle)
    return angle - 360.0 if angle > 180.0 else angle


def mean_longitude(jd: float) -> float:
    """Mean longitude of the Sun in degrees, [0, 360)."""
    return normalize_degrees(MEAN_LONGITUDE_J2000 + MEAN_LONGITUDE_RATE * (jd - J2000))


def mean_anomaly(jd: float) -> float:
    """Mean anomaly of the Sun in degrees, [0, 360)."""
    return normalize_degrees(MEAN_ANOMALY_J2000 + MEAN_ANOMALY_RATE * (jd - J2000))


def obliquity(jd: float) -> float:
    """Obliquity of the ecliptic in degrees."""
    return OBLIQUITY_J2000 + OBLIQUITY_RATE * (jd - J2000)


def ecliptic_longitude(jd: float) -> float:
    """
    Apparent ecliptic longitude of the Sun.

    Args:
        jd: Julian Day (UT)

    Returns:
        Longitude in degrees, [0, 360). 0° is the March equinox,
        315° is Li Chun.
    """
    g = math.radians(mean_anomaly(jd))
    lam = mean_longitude(jd) + 1.915 * math.sin(g) + 0.020 * math.sin(2 * g)
    return normalize_degrees(lam)


def right_ascension(jd: float) -> float:
    """Right ascension of the Sun in degrees, (-180, 180]."""
    lam = math.radians(ecliptic_longitude(jd))
    eps = math.radians(obliquity(jd))
    return math.degrees(math.atan2(math.cos(eps) * math.sin(lam), math.cos(lam)))


def equation_of_time_minutes(jd: float) -> float:
    """
    Equation of time in minutes: apparent minus mean solar time.

    Positive means the true Sun runs ahead of the clock (early November,
    about +16 min); negative means it lags (mid February, about -14 min).
    """
    return 4.0 * signed_degrees(mean_longitude(jd) - right_ascension(jd))
