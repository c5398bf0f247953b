"""
CLI wrapper for compute_chart_from_clock().

Usage:
    fourpillars --birth-date YYYY-MM-DD --birth-time HH:MM --longitude LON \
        [--latitude LAT] [--utc-offset OFFSET] [--gender GENDER] [--verbose]
"""

import argparse
import json
import logging
import sys

from fourpillars.create_chart import compute_chart_from_clock
from fourpillars.errors import BaziError


def main(argv=None):
    parser = argparse.ArgumentParser(description="Compute BaZi Four Pillars with true solar time.")
    parser.add_argument("--birth-date", required=True, dest="birth_date")
    parser.add_argument("--birth-time", required=True, dest="birth_time")
    parser.add_argument("--longitude", required=True, type=float)
    parser.add_argument("--latitude", type=float, default=None,
                        help="used to detect the timezone when --utc-offset is absent")
    parser.add_argument("--utc-offset", dest="utc_offset", type=float, default=None)
    parser.add_argument("--gender", choices=["male", "female"], default=None)
    parser.add_argument("--verbose", "-v", action="store_true")

    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="%(levelname)s %(name)s: %(message)s")

    try:
        result = compute_chart_from_clock(
            birth_date=args.birth_date,
            birth_time=args.birth_time,
            longitude=args.longitude,
            latitude=args.latitude,
            utc_offset=args.utc_offset,
            gender=args.gender,
        )
    except BaziError as e:
        logging.getLogger(__name__).error("%s", e)
        return 1

    print(json.dumps(result, indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
