"""Super-dense time stamps for ordering simultaneous events."""

import math
import numbers
from dataclasses import dataclass


@dataclass(frozen=True, order=True)
class SuperDenseTime:
    """Totally ordered simulation time stamp.

    A time stamp is a pair (r, c): the c-th causal event at real time r.
    Ordering is lexicographic with the real coordinate first, so an
    unbounded cascade of zero-duration reactions at one instant still has
    a strict order.

    Attributes:
        r: Real-valued simulated time
        c: Causal index within the real time (non-negative)
    """
    r: float
    c: int = 0

    def __post_init__(self):
        """Validate the time stamp after initialization."""
        if isinstance(self.r, bool) or not isinstance(self.r, numbers.Real):
            raise TypeError(f"Real time must be a number, got {self.r!r}")
        if math.isnan(self.r):
            raise ValueError("Real time cannot be NaN")
        if isinstance(self.c, bool) or not isinstance(self.c, numbers.Integral):
            raise ValueError(f"Causal index must be an integer, got {self.c!r}")
        if self.c < 0:
            raise ValueError("Causal index cannot be negative")
        object.__setattr__(self, 'r', float(self.r))
        object.__setattr__(self, 'c', int(self.c))

    def next(self) -> "SuperDenseTime":
        """Return the following causal step at the same real time."""
        return SuperDenseTime(self.r, self.c + 1)

    def __str__(self) -> str:
        if self.c == 0:
            return f"{self.r:g}"
        return f"{self.r:g}[{self.c}]"
