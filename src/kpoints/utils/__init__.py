"""Utility functions for kpoints."""

from kpoints.utils.date_parser import parse_date, parse_month
from kpoints.utils.points_parser import parse_points
from kpoints.utils.clock import LedgerClock, FixedClock

__all__ = ["parse_date", "parse_month", "parse_points", "LedgerClock", "FixedClock"]
