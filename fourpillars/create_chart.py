"""
Chart creation from wall-clock birth data.

The core engine works in UT. This module turns a local clock reading into
UT first (explicit offset, or the zone found from the coordinates), then
applies the longitude-only true solar time correction. The timezone
meridian is never added on top of the longitude.

Usage from Python:
    from fourpillars.create_chart import compute_chart_from_clock
    compute_chart_from_clock(
        birth_date="1990-03-15", birth_time="10:30",
        longitude=-122.4194, latitude=37.7749, gender="male",
        utc_offset=None  # optional: override auto-detected UTC offset
    )
"""

from datetime import datetime, timedelta, timezone
from typing import Optional
from zoneinfo import ZoneInfo
import logging

from timezonefinder import TimezoneFinder

from fourpillars.chart import BaziChart
from fourpillars.errors import InvalidInput

logger = logging.getLogger(__name__)

_tf = TimezoneFinder()


def parse_clock(birth_date: str, birth_time: str) -> datetime:
    """Parse 'YYYY-MM-DD' and 'HH:MM' or 'HH:MM:SS' into a naive datetime."""
    try:
        return datetime.fromisoformat(f"{birth_date}T{birth_time}")
    except ValueError as e:
        raise InvalidInput(f"Invalid birth date/time {birth_date!r} {birth_time!r}: {e}") from e


def utc_offset_for(latitude: float, longitude: float, clock: datetime) -> tuple:
    """
    Determine the UTC offset in force at a clock reading from coordinates.
    Historical DST is included (e.g., China 1986-1991), since the clock
    was actually set that way.

    Returns:
        (clock_offset_hours, timezone_name, dst_detected)
    """
    tz_name = _tf.timezone_at(lat=latitude, lng=longitude)
    if tz_name is None:
        raise InvalidInput(f"Could not determine timezone for ({latitude}, {longitude})")

    local_dt = clock.replace(tzinfo=ZoneInfo(tz_name))
    clock_offset = local_dt.utcoffset().total_seconds() / 3600
    dst = local_dt.dst()
    dst_detected = dst is not None and dst.total_seconds() > 0
    return clock_offset, tz_name, dst_detected


def clock_to_utc(clock: datetime, utc_offset: float) -> datetime:
    """Convert a naive clock reading at UTC+offset to an aware UTC datetime."""
    try:
        return (clock - timedelta(hours=utc_offset)).replace(tzinfo=timezone.utc)
    except OverflowError as e:
        raise InvalidInput(f"{clock.isoformat()} at UTC{utc_offset:+g} is outside years 1-9999 UT") from e


def compute_chart_from_clock(birth_date: str, birth_time: str, longitude: float,
                             latitude: Optional[float] = None,
                             utc_offset: Optional[float] = None,
                             gender: Optional[str] = None) -> dict:
    """
    Compute a BaZi chart from a local clock reading.

    The UTC offset is the explicit one if given, else detected from
    latitude/longitude, else the clock is taken as UT.

    Returns:
        Chart dict (see BaziChart.to_dict) with a "clock" section added
    """
    clock = parse_clock(birth_date, birth_time)
    tz_name = None
    dst_detected = False

    if utc_offset is None and latitude is not None:
        utc_offset, tz_name, dst_detected = utc_offset_for(latitude, longitude, clock)
        logger.info("Detected timezone %s (UTC%+.2f%s)", tz_name, utc_offset,
                    ", DST" if dst_detected else "")
    elif utc_offset is None:
        logger.info("No UTC offset or latitude given; treating %s %s as UT", birth_date, birth_time)
        utc_offset = 0.0

    moment = clock_to_utc(clock, utc_offset)
    chart = BaziChart.from_datetime(moment, longitude, gender)

    result = chart.to_dict()
    result["clock"] = {
        "local": clock.isoformat(timespec="seconds"),
        "utc_offset": utc_offset,
        "timezone": tz_name,
        "dst_detected": dst_detected,
    }
    return result
