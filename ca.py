from __future__ import annotations
from dataclasses import dataclass, field
from typing import Iterator, Tuple

from errors import ErrorKind, SimulationError


@dataclass(frozen=True)
class State:
    """
    A symbol a cell can hold, e.g. State("dead", 0). Two states are equal
    when their values are equal; the name is only a label.
    """
    name: str = field(compare=False)
    value: int

    def __post_init__(self):
        if not isinstance(self.name, str):
            raise SimulationError(ErrorKind.INVALID_STATE, f"state name must be str, got {self.name!r}")
        if not isinstance(self.value, int) or isinstance(self.value, bool):
            raise SimulationError(ErrorKind.INVALID_STATE, f"state value must be int, got {self.value!r}")


class Combination:
    '''
    Ordered neighborhood pattern, e.g. Combination(left, center, right).
    '''
    __slots__ = ("_states",)

    def __init__(self, *states: State):
        if not states:
            raise SimulationError(ErrorKind.INVALID_COMBINATION, "a combination needs at least one state")
        for idx, s in enumerate(states):
            if not isinstance(s, State):
                raise SimulationError(ErrorKind.INVALID_COMBINATION, f"member {idx} is {s!r}, not a State")
        self._states: Tuple[State, ...] = tuple(states)

    @property
    def states(self) -> Tuple[State, ...]:
        return self._states

    @property
    def values(self) -> Tuple[int, ...]:
        return tuple(s.value for s in self._states)

    def __len__(self) -> int:
        return len(self._states)

    def __iter__(self) -> Iterator[State]:
        return iter(self._states)

    def __getitem__(self, idx: int) -> State:
        return self._states[idx]

    def __eq__(self, other) -> bool:
        if not isinstance(other, Combination):
            return NotImplemented
        return self._states == other._states

    def __hash__(self) -> int:
        return hash(self.values)

    def __repr__(self) -> str:
        return f"Combination{self.values}"


@dataclass(frozen=True)
class Transition:
    """When a neighborhood matches `combination`, the cell becomes `state`."""
    combination: Combination
    state: State

    def __post_init__(self):
        if not isinstance(self.combination, Combination):
            raise SimulationError(ErrorKind.INVALID_TRANSITION, f"combination must be a Combination, got {self.combination!r}")
        if not isinstance(self.state, State):
            raise SimulationError(ErrorKind.INVALID_TRANSITION, f"resulting state must be a State, got {self.state!r}")

    @property
    def arity(self) -> int:
        return len(self.combination)
