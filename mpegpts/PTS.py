"""
MPEG Presentation Time Stamp (PTS)

PTS values are 33-bit samples of the 90kHz system clock carried in PES
packet headers. The counter wraps from 2^33 - 1 back to zero roughly
every 26.5 hours, so ordering and differencing timestamps must detect
the wrap or a long-running stream appears to jump backward in time.

No cycle count is stored alongside a timestamp. A wrap is inferred when
one value sits within 30 minutes of zero and the other within 30 minutes
of the maximum:

    0 ......... LOWER ................................ UPPER ......... MAX
    |<- 30 min ->|                                    |<- 30 min ->|
      post-wrap                                         pre-wrap

Known limitation: timestamps more than one rollover window apart are
misclassified. The result is a wrong answer, not an error.

Reference: ISO/IEC 13818-1 Section 2.4.3.7
"""

import logging
import numbers
from dataclasses import dataclass
from enum import Enum
from typing import Union


logger = logging.getLogger(__name__)

# 2^33 - 1
MAX_PTS = 8_589_934_591
PTS_MODULUS = MAX_PTS + 1

# PTS/DTS clock frequency: 90 kHz
PTS_CLOCK_FREQ = 90_000

ROLLOVER_WINDOW_SECONDS = 30 * 60

# 30 minutes of ticks above zero / below MAX_PTS: 162_000_000 / 8_427_934_591
LOWER_ROLLOVER_THRESHOLD = ROLLOVER_WINDOW_SECONDS * PTS_CLOCK_FREQ
UPPER_ROLLOVER_THRESHOLD = MAX_PTS - LOWER_ROLLOVER_THRESHOLD


class Bound(Enum):
    """Tag distinguishing stream timestamps from the unbounded sentinels."""
    FINITE = "finite"
    POSITIVE_INFINITY = "+inf"
    NEGATIVE_INFINITY = "-inf"


@dataclass(frozen=True)
class PTS:
    """
    Presentation Time Stamp value.

    Immutable and hashable. A finite PTS equals the int with the same
    raw value. Comparison operators follow the wrap-aware ordering, so
    ``a > b`` is true for a post-wrap ``a`` even when its raw value is
    smaller. The ordering is not transitive across a wrap; do not
    ``sorted()`` values that straddle one.

    Attributes:
        value: Raw 33-bit tick count (0 for sentinels)
        bound: FINITE for stream values, or one of the infinities

    Example:
        >>> before = PTS(8_589_900_000)
        >>> after = PTS(100)
        >>> after > before
        True
        >>> after.duration_from(before)
        34692
    """

    value: int = 0
    bound: Bound = Bound.FINITE

    def __post_init__(self):
        if self.bound is not Bound.FINITE and self.value != 0:
            raise ValueError(f"Sentinel PTS({self.bound.value}) cannot carry value {self.value}")

    @classmethod
    def coerce(cls, other: Union['PTS', int]) -> 'PTS':
        """Return ``other`` as a PTS, wrapping plain ints as finite values."""
        if isinstance(other, PTS):
            return other
        return cls(int(other))

    @classmethod
    def from_seconds(cls, seconds: float) -> 'PTS':
        """Convert time in seconds to a 90kHz PTS, folded into 33 bits."""
        return cls(int(seconds * PTS_CLOCK_FREQ) % PTS_MODULUS)

    def to_seconds(self) -> float:
        """Convert to seconds. Sentinels map to +/- float infinity."""
        if self.bound is Bound.POSITIVE_INFINITY:
            return float('inf')
        if self.bound is Bound.NEGATIVE_INFINITY:
            return float('-inf')
        return self.value / PTS_CLOCK_FREQ

    @property
    def is_finite(self) -> bool:
        return self.bound is Bound.FINITE

    @property
    def is_valid(self) -> bool:
        """Check that this is a finite value inside the 33-bit range."""
        return self.is_finite and 0 <= self.value <= MAX_PTS

    def after(self, other: Union['PTS', int]) -> bool:
        """
        Check if this PTS is strictly later than ``other``.

        Infinities are resolved first, then a detected wrap in either
        direction, and only then the plain numeric comparison.

        Args:
            other: PTS or raw tick count

        Returns:
            True if this timestamp comes after ``other``
        """
        other = PTS.coerce(other)

        if other.bound is Bound.POSITIVE_INFINITY:
            return False
        if other.bound is Bound.NEGATIVE_INFINITY:
            return self.bound is not Bound.NEGATIVE_INFINITY
        if self.bound is Bound.POSITIVE_INFINITY:
            return True
        if self.bound is Bound.NEGATIVE_INFINITY:
            return False

        if self.rolled_over(other):
            return True
        if other.rolled_over(self):
            return False
        return self.value > other.value

    def greater_or_equal(self, other: Union['PTS', int]) -> bool:
        """Check if this PTS equals or comes after ``other``."""
        other = PTS.coerce(other)
        if self == other:
            return True
        return self.after(other)

    def rolled_over(self, other: Union['PTS', int]) -> bool:
        """
        Check if this PTS just wrapped past zero relative to ``other``.

        Only recognizes the case where this value is shortly after a wrap
        and ``other`` is shortly before the same wrap. Sentinels never
        roll over.
        """
        other = PTS.coerce(other)
        if not (self.is_finite and other.is_finite):
            return False
        return (self.value < LOWER_ROLLOVER_THRESHOLD and
                other.value > UPPER_ROLLOVER_THRESHOLD)

    def duration_from(self, start: Union['PTS', int]) -> int:
        """
        Elapsed ticks between ``start`` and this PTS.

        The result is always a non-negative magnitude. Argument order does
        not matter; use after() when direction is needed.

        Args:
            start: PTS or raw tick count

        Returns:
            Duration in 90kHz ticks

        Raises:
            ValueError: If either timestamp is a sentinel
        """
        start = PTS.coerce(start)
        if not (self.is_finite and start.is_finite):
            raise ValueError(f"No finite duration between {start!r} and {self!r}")

        p, s = self.value, start.value

        if self.rolled_over(start):
            logger.debug("PTS wrap between %d and %d", s, p)
            return (PTS_MODULUS - s) + p
        if start.rolled_over(self):
            logger.debug("PTS wrap between %d and %d (reversed order)", p, s)
            return (PTS_MODULUS - p) + s
        if p < s:
            return s - p
        return p - s

    def add(self, offset: Union['PTS', int]) -> 'PTS':
        """
        Add an offset with 33-bit wraparound.

        Folds modulo 2^33, so ``PTS(MAX_PTS).add(1)`` is ``PTS(0)``.
        Negative offsets wrap backward. An infinity plus a finite offset
        stays infinite.

        Raises:
            ValueError: If adding opposite infinities
        """
        offset = PTS.coerce(offset)

        if self.is_finite and offset.is_finite:
            return PTS((self.value + offset.value) % PTS_MODULUS)
        if self.is_finite:
            return offset
        if offset.is_finite or offset.bound is self.bound:
            return self
        raise ValueError("Cannot add opposite PTS infinities")

    def __eq__(self, other) -> bool:
        if isinstance(other, PTS):
            return self.value == other.value and self.bound is other.bound
        if isinstance(other, numbers.Integral):
            return self.is_finite and self.value == int(other)
        return NotImplemented

    def __hash__(self) -> int:
        if self.is_finite:
            return hash(self.value)
        return hash(self.bound)

    def __gt__(self, other: Union['PTS', int]) -> bool:
        return self.after(other)

    def __ge__(self, other: Union['PTS', int]) -> bool:
        return self.greater_or_equal(other)

    def __lt__(self, other: Union['PTS', int]) -> bool:
        return PTS.coerce(other).after(self)

    def __le__(self, other: Union['PTS', int]) -> bool:
        return PTS.coerce(other).greater_or_equal(self)

    def __add__(self, offset: Union['PTS', int]) -> 'PTS':
        return self.add(offset)

    __radd__ = __add__

    def __int__(self) -> int:
        if not self.is_finite:
            raise ValueError(f"{self!r} has no integer value")
        return self.value

    def __repr__(self) -> str:
        if not self.is_finite:
            return f"PTS({self.bound.value})"
        return f"PTS({self.value}, {self.to_seconds():.3f}s)"


PTS.POSITIVE_INFINITY = PTS(bound=Bound.POSITIVE_INFINITY)
PTS.NEGATIVE_INFINITY = PTS(bound=Bound.NEGATIVE_INFINITY)


def after(a: Union[PTS, int], b: Union[PTS, int]) -> bool:
    """Check if ``a`` is strictly later than ``b``."""
    return PTS.coerce(a).after(b)


def greater_or_equal(a: Union[PTS, int], b: Union[PTS, int]) -> bool:
    """Check if ``a`` equals or is later than ``b``."""
    return PTS.coerce(a).greater_or_equal(b)


def rolled_over(a: Union[PTS, int], b: Union[PTS, int]) -> bool:
    """Check if ``a`` wrapped past zero relative to ``b``."""
    return PTS.coerce(a).rolled_over(b)


def duration_from(p: Union[PTS, int], start: Union[PTS, int]) -> int:
    """Non-negative ticks between ``start`` and ``p``."""
    return PTS.coerce(p).duration_from(start)


def duration_seconds(p: Union[PTS, int], start: Union[PTS, int]) -> float:
    """Non-negative seconds between ``start`` and ``p``."""
    return duration_from(p, start) / PTS_CLOCK_FREQ


def add(p: Union[PTS, int], offset: Union[PTS, int]) -> PTS:
    """Add ``offset`` ticks to ``p`` with 33-bit wraparound."""
    return PTS.coerce(p).add(offset)
