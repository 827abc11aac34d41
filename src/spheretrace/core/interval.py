"""Closed numeric interval used to bound valid ray parameters.

Intersection queries only accept roots strictly inside the interval they are
given (see ``interval_surrounds``), which is how the integrator keeps
scattered rays from re-hitting the surface they leave.
"""

import taichi as ti
import taichi.math as tm


@ti.dataclass
class Interval:
    """A numeric range [lo, hi].

    Attributes:
        lo: Lower bound.
        hi: Upper bound. An interval with hi < lo is empty.
    """

    lo: ti.f32
    hi: ti.f32


@ti.func
def make_interval(lo: ti.f32, hi: ti.f32) -> Interval:
    """Create an interval from its bounds."""
    return Interval(lo=lo, hi=hi)


@ti.func
def empty_interval() -> Interval:
    """The interval containing nothing (+inf, -inf)."""
    return Interval(lo=tm.inf, hi=-tm.inf)


@ti.func
def universe_interval() -> Interval:
    """The interval containing every finite value (-inf, +inf)."""
    return Interval(lo=-tm.inf, hi=tm.inf)


@ti.func
def interval_size(interval: Interval) -> ti.f32:
    """Width of the interval (negative when empty)."""
    return interval.hi - interval.lo


@ti.func
def interval_contains(interval: Interval, x: ti.f32) -> ti.i32:
    """Return 1 if lo <= x <= hi."""
    return interval.lo <= x and x <= interval.hi


@ti.func
def interval_surrounds(interval: Interval, x: ti.f32) -> ti.i32:
    """Return 1 if lo < x < hi (strict on both ends)."""
    return interval.lo < x and x < interval.hi


@ti.func
def interval_clamp(interval: Interval, x: ti.f32) -> ti.f32:
    """Clamp x into [lo, hi]."""
    return tm.min(tm.max(x, interval.lo), interval.hi)
