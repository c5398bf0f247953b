"""
Exceptions raised by the BaZi engine.

Every error is raised where it is detected. A PillarSet is produced in full
or not at all.
"""


class BaziError(Exception):
    """Base class for all engine errors."""


class InvalidInput(BaziError, ValueError):
    """Civil date/time, longitude or symbol outside its valid range."""


class InvalidCombination(BaziError, ValueError):
    """Stem and branch whose parities disagree (not one of the 60 Jiazi pairs)."""


class TermResolutionError(BaziError, RuntimeError):
    """The solar-term solver did not converge within its fixed iteration budget."""
