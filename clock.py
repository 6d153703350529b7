"""
clock.py

Simulation clock. A scalar Time is a plain step counter with an optional
limit. A lattice Time also owns relative components, one bounded counter per
spatial dimension (outermost first), so a position reads as
(absolute, row, column, ...) and increasing it carries like an odometer:

    Time(3, relative=[Time(2)])  ->  (0,0) (0,1) (1,0) (1,1) (2,0) (2,1)
"""

from __future__ import annotations
from typing import Optional, Sequence, Tuple

from errors import ErrorKind, SimulationError


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


class Time:
    def __init__(self, limit: Optional[int] = None, relative: Optional[Sequence["Time"]] = None):
        if limit is not None and (not _is_int(limit) or limit <= 0):
            raise SimulationError(ErrorKind.INVALID_ABSOLUTE_TIME_LIMIT, f"limit must be a positive int, got {limit!r}")
        self._limit = limit
        self._absolute = 0
        self._relative: Optional[Tuple[Time, ...]] = None
        if relative is not None:
            self._relative = self._check_relative(relative)

    @staticmethod
    def _check_relative(relative: Sequence["Time"]) -> Tuple["Time", ...]:
        components = tuple(relative)
        if not components:
            raise SimulationError(ErrorKind.INVALID_RELATIVE_TIME_LIMIT, "relative time needs at least one component")
        for idx, component in enumerate(components):
            if not isinstance(component, Time):
                raise SimulationError(
                    ErrorKind.INVALID_RELATIVE_TIME_CLASS,
                    f"relative component {idx} is {type(component).__name__}, not Time",
                )
            if component.relative is not None:
                raise SimulationError(
                    ErrorKind.INVALID_RELATIVE_TIME_CLASS,
                    f"relative component {idx} must be a scalar Time",
                )
            if component.limit is None:
                raise SimulationError(ErrorKind.INVALID_RELATIVE_TIME_LIMIT, f"relative component {idx} is unbounded")
        return components

    @property
    def absolute(self) -> int:
        return self._absolute

    @property
    def limit(self) -> Optional[int]:
        return self._limit

    @property
    def relative(self) -> Optional[Tuple["Time", ...]]:
        return self._relative

    @property
    def dimensionality(self) -> int:
        return 0 if self._relative is None else len(self._relative)

    @property
    def coordinates(self) -> Tuple[int, ...]:
        """Position inside the current iteration, outermost dimension first."""
        if self._relative is None:
            return ()
        return tuple(t.absolute for t in self._relative)

    @property
    def shape(self) -> Tuple[int, ...]:
        if self._relative is None:
            return ()
        return tuple(t.limit for t in self._relative)

    def increase(self) -> None:
        """
        Advance the clock by one position. Raises TIME_LIMIT_REACHED (and
        leaves every counter untouched) when the limit would be passed.
        """
        if self._relative is None:
            if self._limit is not None and self._absolute + 1 > self._limit:
                raise SimulationError(ErrorKind.TIME_LIMIT_REACHED, f"absolute limit {self._limit} reached")
            self._absolute += 1
            return

        # innermost component that can still move without wrapping
        moving = None
        for idx in range(len(self._relative) - 1, -1, -1):
            component = self._relative[idx]
            if component.absolute + 1 < component.limit:
                moving = idx
                break

        if moving is None:
            # every component wraps; the carry lands on the iteration counter
            if self._limit is not None and self._absolute + 1 >= self._limit:
                raise SimulationError(ErrorKind.TIME_LIMIT_REACHED, f"iteration limit {self._limit} reached")
            for component in self._relative:
                component.reset()
            self._absolute += 1
            return

        self._relative[moving].increase()
        for component in self._relative[moving + 1:]:
            component.reset()

    def reset(self) -> None:
        """Set the absolute counter back to 0; limits and relative parts are kept."""
        self._absolute = 0

    def __repr__(self) -> str:
        if self._relative is None:
            return f"Time(absolute={self._absolute}, limit={self._limit})"
        return f"Time(absolute={self._absolute}, limit={self._limit}, coordinates={self.coordinates}, shape={self.shape})"


def build_time(limit: Optional[int], shape: Sequence[int] = ()) -> Time:
    """
    Build a Time from a shape descriptor: one bounded relative component per
    entry of `shape`. An empty shape gives a scalar Time.
    """
    shape = tuple(shape)
    for idx, size in enumerate(shape):
        if not _is_int(size) or size <= 0:
            raise SimulationError(
                ErrorKind.INVALID_RELATIVE_TIME_LIMIT,
                f"shape entry {idx} must be a positive int, got {size!r}",
            )
    if not shape:
        return Time(limit)
    return Time(limit, relative=[Time(size) for size in shape])
