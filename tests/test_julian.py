"""Julian Day conversion tests"""

import pytest
import swisseph as swe

from fourpillars.julian import from_julian_day, to_julian_day

ROUND_TRIP_YEARS = [1, 4, 100, 1582, 1600, 1899, 1900, 2000, 2024, 2400, 9999]
TIMES = [(0, 0, 0), (12, 30, 15), (23, 59, 59)]


class TestToJulianDay:
    def test_j2000(self):
        assert to_julian_day(2000, 1, 1, 12) == 2451545.0

    def test_epoch_1900(self):
        assert to_julian_day(1900, 1, 1) == 2415020.5

    def test_gregorian_reform_day(self):
        assert to_julian_day(1582, 10, 15) == 2299160.5

    def test_year_one(self):
        assert to_julian_day(1, 1, 1) == 1721425.5

    @pytest.mark.parametrize("y,m,d,h", [
        (1949, 10, 1, 6.0), (1986, 6, 19, 0.0), (2000, 2, 29, 18.5),
        (2024, 12, 31, 23.75), (1700, 3, 1, 1.25),
    ])
    def test_matches_swiss_ephemeris(self, y, m, d, h):
        hour = int(h)
        minute = int(round((h - hour) * 60))
        assert to_julian_day(y, m, d, hour, minute) == pytest.approx(swe.julday(y, m, d, h), abs=1e-8)

    def test_monotonic(self):
        a = to_julian_day(1999, 12, 31, 23, 59, 59)
        b = to_julian_day(2000, 1, 1, 0, 0, 0)
        assert b > a
        assert b - a == pytest.approx(1 / 86400, abs=1e-8)


class TestFromJulianDay:
    @pytest.mark.parametrize("year", ROUND_TRIP_YEARS)
    def test_round_trip(self, year):
        for month in range(1, 13):
            for day in (1, 28):
                for hour, minute, second in TIMES:
                    jd = to_julian_day(year, month, day, hour, minute, second)
                    result = from_julian_day(jd)
                    assert result[:5] == (year, month, day, hour, minute)
                    assert abs(result[5] - second) < 1

    def test_leap_day(self):
        assert from_julian_day(to_julian_day(2000, 2, 29, 6))[:4] == (2000, 2, 29, 6)

    def test_fractional_seconds(self):
        result = from_julian_day(to_julian_day(2024, 5, 17, 8, 15, 42.5))
        assert result[:5] == (2024, 5, 17, 8, 15)
        assert result[5] == pytest.approx(42.5, abs=0.01)

    def test_utc_offset(self):
        assert from_julian_day(2451545.0, 8) == (2000, 1, 1, 20, 0, 0.0)
        assert from_julian_day(2451545.0, -13)[:4] == (1999, 12, 31, 23)

    def test_julian_calendar_before_reform(self):
        assert from_julian_day(2299159.5, proleptic=False)[:3] == (1582, 10, 4)
        assert from_julian_day(2299159.5)[:3] == (1582, 10, 14)

    def test_after_reform_unaffected(self):
        jd = to_julian_day(1990, 3, 15, 10, 30)
        assert from_julian_day(jd, proleptic=False) == from_julian_day(jd)

    def test_matches_swiss_ephemeris_revjul(self):
        y, m, d, h = swe.revjul(2433190.75)
        assert from_julian_day(2433190.75)[:4] == (y, m, d, round(h))
