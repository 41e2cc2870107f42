"""
mpegpts - Wrap-aware MPEG Presentation Time Stamp algebra

PTS values are 33-bit, 90kHz counters that wrap to zero about every
26.5 hours. This package orders, differences and offsets them across
the wrap without tracking a cycle count.

Modules:
    - PTS: Scalar timestamp value, +/- infinity sentinels and the
           After / GreaterOrEqual / RolledOver / DurationFrom / Add operations
    - PTSArray: The same algebra vectorized over numpy arrays
"""

__version__ = "0.1.0"
__author__ = "mpegpts Contributors"

from .PTS import (
    PTS, Bound,
    MAX_PTS, PTS_MODULUS, PTS_CLOCK_FREQ, ROLLOVER_WINDOW_SECONDS,
    LOWER_ROLLOVER_THRESHOLD, UPPER_ROLLOVER_THRESHOLD,
    after, greater_or_equal, rolled_over, duration_from, duration_seconds, add,
)
from .PTSArray import PTSArray

__all__ = [
    # Constants
    'MAX_PTS', 'PTS_MODULUS', 'PTS_CLOCK_FREQ', 'ROLLOVER_WINDOW_SECONDS',
    'LOWER_ROLLOVER_THRESHOLD', 'UPPER_ROLLOVER_THRESHOLD',

    # Types
    'PTS', 'Bound', 'PTSArray',

    # Operations
    'after', 'greater_or_equal', 'rolled_over', 'duration_from',
    'duration_seconds', 'add',
]
