"""
Vectorized PTS Algebra

Applies the wrap-aware PTS comparisons and arithmetic to whole arrays of
raw timestamps at once, e.g. every PTS collected from one elementary
stream. Results match the scalar PTS methods element-wise.

Arrays hold finite 33-bit values only; the +/- infinity sentinels exist
for scalar bounds and are rejected here.
"""

import logging
from typing import Iterator, Union

import numpy as np

from .PTS import (
    PTS, PTS_MODULUS, PTS_CLOCK_FREQ,
    LOWER_ROLLOVER_THRESHOLD, UPPER_ROLLOVER_THRESHOLD,
)


logger = logging.getLogger(__name__)

Operand = Union['PTSArray', np.ndarray, PTS, int]


class PTSArray:
    """
    One-dimensional array of raw PTS values.

    Attributes:
        values: int64 numpy array of tick counts

    Example:
        >>> pts = PTSArray([8_589_930_000, 8_589_933_000, 1_408, 4_408])
        >>> pts.intervals()
        array([3000, 3000, 3000])
        >>> pts.rollover_indices()
        array([2])
    """

    def __init__(self, values):
        """
        Initialize from any 1-D sequence of ints.

        Args:
            values: Sequence or array of raw PTS tick counts

        Raises:
            ValueError: If values are not one-dimensional or contain
                        a sentinel PTS
        """
        if isinstance(values, PTSArray):
            values = values.values
        elif not isinstance(values, np.ndarray):
            values = [_finite(v) if isinstance(v, PTS) else v for v in values]

        self.values = np.asarray(values, dtype=np.int64)
        if self.values.ndim != 1:
            raise ValueError(f"PTSArray must be one-dimensional, got shape {self.values.shape}")

    def __len__(self) -> int:
        return len(self.values)

    def __iter__(self) -> Iterator[PTS]:
        for v in self.values:
            yield PTS(int(v))

    def __getitem__(self, index: int) -> PTS:
        return PTS(int(self.values[index]))

    def __repr__(self) -> str:
        return f"PTSArray({self.values.tolist()})"

    def rolled_over(self, other: Operand) -> np.ndarray:
        """Element-wise check that each value wrapped relative to ``other``."""
        return _rolled_over(self.values, _as_values(other))

    def after(self, other: Operand) -> np.ndarray:
        """Element-wise wrap-aware strict ordering against ``other``."""
        a = self.values
        b = _as_values(other)
        return np.where(_rolled_over(a, b), True,
                        np.where(_rolled_over(b, a), False, a > b))

    def greater_or_equal(self, other: Operand) -> np.ndarray:
        """Element-wise equality or wrap-aware ordering against ``other``."""
        return (self.values == _as_values(other)) | self.after(other)

    def duration_from(self, start: Operand) -> np.ndarray:
        """
        Element-wise non-negative tick distance from ``start``.

        Args:
            start: Array, PTS or int broadcast against this array

        Returns:
            int64 array of durations
        """
        return _duration(self.values, _as_values(start))

    def add(self, offset: Operand) -> 'PTSArray':
        """Add ``offset`` ticks with 33-bit wraparound (modulo 2^33)."""
        return PTSArray(np.mod(self.values + _as_values(offset), PTS_MODULUS))

    def intervals(self) -> np.ndarray:
        """
        Durations between consecutive samples.

        Returns:
            int64 array of length len(self) - 1
        """
        return _duration(self.values[1:], self.values[:-1])

    def rollover_indices(self) -> np.ndarray:
        """Indices of samples that wrapped past zero after their predecessor."""
        indices = np.flatnonzero(_rolled_over(self.values[1:], self.values[:-1])) + 1
        if len(indices):
            logger.debug("PTS wrap at sample(s) %s", indices.tolist())
        return indices

    def is_monotonic(self) -> bool:
        """Check that every sample equals or comes after its predecessor."""
        if len(self.values) < 2:
            return True
        current = PTSArray(self.values[1:])
        return bool(np.all(current.greater_or_equal(self.values[:-1])))

    def to_seconds(self) -> np.ndarray:
        """Convert to float seconds (raw values, no unwrapping)."""
        return self.values / PTS_CLOCK_FREQ


def _finite(pts: PTS) -> int:
    if not pts.is_finite:
        raise ValueError(f"PTSArray cannot hold {pts!r}")
    return pts.value


def _as_values(other: Operand) -> Union[np.ndarray, int]:
    """Normalize an operand to something numpy can broadcast."""
    if isinstance(other, PTSArray):
        return other.values
    if isinstance(other, PTS):
        return _finite(other)
    if isinstance(other, np.ndarray):
        return other.astype(np.int64, copy=False)
    return int(other)


def _rolled_over(a, b) -> np.ndarray:
    return (a < LOWER_ROLLOVER_THRESHOLD) & (b > UPPER_ROLLOVER_THRESHOLD)


def _duration(p, start) -> np.ndarray:
    p, start = np.broadcast_arrays(np.asarray(p, dtype=np.int64),
                                   np.asarray(start, dtype=np.int64))
    return np.select(
        [_rolled_over(p, start), _rolled_over(start, p), p < start],
        [(PTS_MODULUS - start) + p, (PTS_MODULUS - p) + start, start - p],
        default=p - start,
    )
