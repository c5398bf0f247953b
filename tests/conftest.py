"""Shared fixtures for the fourpillars test suite."""

import pytest

from fourpillars.astro_calendar import SolarTermSolver
from fourpillars.julian import to_julian_day


@pytest.fixture
def solver():
    """A solver with its own empty cache."""
    return SolarTermSolver()


@pytest.fixture(scope="session")
def beijing_1949():
    """1949-10-01 14:00 Beijing clock = 06:00 UT, longitude 116.4°E."""
    return {"jd": to_julian_day(1949, 10, 1, 6, 0, 0), "longitude": 116.4,
            "bazi": ["己丑", "癸酉", "甲子", "辛未"]}
