"""
space.py

The lattice of cells. A generation is a nested sequence of Cells whose depth
equals the dimensionality (a 1-D generation is a list of cells, a 2-D one a
list of rows, ...). The space keeps the initial condition, the generation
being built (`current`) and, when asked to, every completed generation.

One call to `set_state` writes exactly one new Cell. Generations are built
position by position in the order the clock visits them; once the last
position of a generation is written the generation is frozen into nested
tuples and never changes again.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

import neighborhood
from ca import Combination, Transition
from cell import Cell
from clock import Time
from errors import ErrorKind, SimulationError


@dataclass
class SpaceEvents:
    """Counters describing how the space has been built so far."""
    iterations_started: int = 0
    cells_created: int = 0
    generations_completed: int = 0


def _is_sequence(obj) -> bool:
    return isinstance(obj, Sequence) and not isinstance(obj, (str, bytes))


def _measure(node, remaining: int, path: Tuple[int, ...] = ()) -> Tuple[int, ...]:
    """
    Shape of a uniformly nested block with `remaining` levels above the cells.
    Raises INVALID_DIMENSIONAL_SPACE on mixed, empty or ragged levels.
    """
    if remaining == 0:
        if not isinstance(node, Cell):
            raise SimulationError(ErrorKind.INVALID_DIMENSIONAL_SPACE, f"expected a Cell at {list(path)}, got {type(node).__name__}")
        return ()
    if not _is_sequence(node):
        raise SimulationError(ErrorKind.INVALID_DIMENSIONAL_SPACE, f"expected a sequence at {list(path)}, got {type(node).__name__}")
    if len(node) == 0:
        raise SimulationError(ErrorKind.INVALID_DIMENSIONAL_SPACE, f"empty sequence at {list(path)}")
    shapes = {_measure(child, remaining - 1, path + (idx,)) for idx, child in enumerate(node)}
    if len(shapes) != 1:
        raise SimulationError(ErrorKind.INVALID_DIMENSIONAL_SPACE, f"ragged sequences under {list(path)}")
    return (len(node),) + shapes.pop()


def _freeze(node):
    if isinstance(node, Cell):
        return node
    return tuple(_freeze(child) for child in node)


class Space:
    def __init__(
        self,
        time: Time,
        initial: Sequence,
        keep_history: bool = True,
        offsets: Optional[Sequence[Tuple[int, ...]]] = None,
    ):
        if time is None or time.dimensionality == 0:
            raise SimulationError(ErrorKind.INVALID_DIMENSIONAL_AMOUNT, "time has no relative dimensions to address cells")
        self._dimensionality = time.dimensionality

        if initial is None or not _is_sequence(initial) or len(initial) == 0:
            raise SimulationError(ErrorKind.INVALID_INITIAL_CONDITION, "initial condition must be a non-empty sequence")
        self._shape = _measure(initial, self._dimensionality)
        self._initial = _freeze(initial)

        if offsets is None:
            offsets = neighborhood.moore(self._dimensionality)
        offsets = [tuple(o) for o in offsets]
        if not offsets or any(len(o) != self._dimensionality for o in offsets):
            raise SimulationError(
                ErrorKind.INVALID_DIMENSIONAL_AMOUNT,
                f"neighborhood offsets must all have {self._dimensionality} components",
            )
        self._offsets = offsets

        self._keep_history = bool(keep_history)
        self._current: Sequence = []
        self._history: List[tuple] = []
        self._last: Optional[tuple] = None
        self.events = SpaceEvents()

    @property
    def initial(self) -> tuple:
        return self._initial

    @property
    def current(self) -> Sequence:
        return self._current

    @property
    def history(self) -> Tuple[tuple, ...]:
        return tuple(self._history)

    @property
    def last(self) -> tuple:
        """Most recently completed generation, or the initial condition before any."""
        return self._initial if self._last is None else self._last

    @property
    def keep_history(self) -> bool:
        return self._keep_history

    @property
    def dimensionality(self) -> int:
        return self._dimensionality

    @property
    def shape(self) -> Tuple[int, ...]:
        """Shape of the initial condition."""
        return self._shape

    @property
    def neighborhood(self) -> List[Tuple[int, ...]]:
        return list(self._offsets)

    def _check_time(self, time: Time) -> None:
        if time.dimensionality != self._dimensionality:
            raise SimulationError(
                ErrorKind.INVALID_DIMENSIONAL_AMOUNT,
                f"time has {time.dimensionality} dimensions, space has {self._dimensionality}",
            )

    def _source(self, time: Time) -> tuple:
        # independent of time.absolute, which reset() may rewind mid-generation
        return self.last

    @staticmethod
    def _cell_at(generation: Sequence, coordinates: Sequence[int]) -> Cell:
        # periodic boundary on every axis
        node = generation
        for c in coordinates:
            node = node[c % len(node)]
        return node

    def get_combination(self, time: Time) -> Combination:
        self._check_time(time)
        return self.combination_at(time, self._source(time))

    def combination_at(self, time: Time, generation: Sequence) -> Combination:
        """Neighborhood of `time`'s position, read from `generation`."""
        coords = time.coordinates
        states = []
        for offset in self._offsets:
            position = [c + o for c, o in zip(coords, offset)]
            states.append(self._cell_at(generation, position).state)
        return Combination(*states)

    def get_cell(self, time: Time) -> Cell:
        """The settled cell at `time`'s position whose rule table decides its successor."""
        self._check_time(time)
        return self._cell_at(self._source(time), time.coordinates)

    def set_state(self, time: Time, transition: Transition) -> None:
        self._check_time(time)
        if self._starts_iteration(time):
            self.create_new_iteration(time)
        self.create_new_cell(time, transition)

    def _starts_iteration(self, time: Time) -> bool:
        return len(self._current) > 0 and all(c == 0 for c in time.coordinates)

    def create_new_iteration(self, time: Time) -> None:
        if not isinstance(self._current, tuple):
            # the previous generation was left unfinished; settle it as it is
            self._complete()
        self._current = []
        self.events.iterations_started += 1

    def create_new_cell(self, time: Time, transition: Transition) -> None:
        cell = self.get_cell(time).clone(transition.state)
        level = self._current
        for c in time.coordinates[:-1]:
            if c == len(level):
                level.append([])
            level = level[c]
        level.append(cell)
        self.events.cells_created += 1

        if all(c == size - 1 for c, size in zip(time.coordinates, time.shape)):
            self._complete()

    def _complete(self) -> None:
        generation = _freeze(self._current)
        self._current = generation
        self._last = generation
        if self._keep_history:
            self._history.append(generation)
        self.events.generations_completed += 1
