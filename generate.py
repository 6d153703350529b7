from __future__ import annotations
from typing import Iterable, Sequence, Union

import numpy as np

from ca import State, Transition
from cell import Cell, RuleTable
from rules import BINARY_STATES

Rules = Union[RuleTable, Iterable[Transition]]


def from_values(values: Sequence, rules: Rules, states: Sequence[State] = BINARY_STATES) -> list:
    '''
    Turn a nested list of state values into a nested list of Cells that all
    share one rule table.
    '''
    table = rules if isinstance(rules, RuleTable) else RuleTable(rules)
    by_value = {s.value: s for s in states}

    def _build(node):
        if isinstance(node, (list, tuple)):
            return [_build(child) for child in node]
        if node not in by_value:
            raise ValueError(f"no state with value {node!r}")
        return Cell(by_value[node], table)

    return _build(values)


def single_seed(shape: Sequence[int], rules: Rules, states: Sequence[State] = BINARY_STATES) -> list:
    """
    All cells at value 0 except the centre one at value 1, the usual start
    for elementary automata.
    """
    shape = tuple(shape)
    grid = np.zeros(shape, dtype=int)
    grid[tuple(n // 2 for n in shape)] = 1
    return from_values(grid.tolist(), rules, states)


class InitialConditionGenerator:
    """
    Random binary initial conditions over a fixed lattice shape.
    Cells are alive with probability `density`.
    """
    def __init__(self, shape: Sequence[int], *, seed: int = 42, density: float = 0.5):
        self.shape = tuple(shape)
        if not self.shape or any(n <= 0 for n in self.shape):
            raise ValueError(f"shape must hold positive sizes, got {self.shape}")
        if not 0.0 <= density <= 1.0:
            raise ValueError(f"density must be in [0, 1], got {density}")
        self.density = density
        self.rng = np.random.default_rng(seed)

    def _make_values(self) -> list:
        '''
        Random 0/1 grid of the configured shape, ones with probability self.density.
        '''
        return (self.rng.random(self.shape) < self.density).astype(int).tolist()

    @staticmethod
    def is_trivial(values: Sequence) -> bool:
        """All dead or all alive."""
        flat = np.asarray(values).ravel()
        return bool(np.all(flat == 0) or np.all(flat == 1))

    def generate(self, rules: Rules, states: Sequence[State] = BINARY_STATES, trim_trivial: bool = False, max_attempts: int = 10) -> list:
        values = self._make_values()
        attempts = 1
        while trim_trivial and self.is_trivial(values):
            if attempts >= max_attempts:
                raise RuntimeError(f"Could not draw a nontrivial initial condition in {max_attempts} attempts.")
            values = self._make_values()
            attempts += 1
        return from_values(values, rules, states)
