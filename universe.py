from __future__ import annotations
import copy
from typing import Callable, Optional

from ca import Transition
from clock import Time
from errors import SimulationError
from space import Space


class Universe:
    """
    Binds one clock to one space. Each `step` fills exactly one cell:
    the clock moves to the next position, the neighborhood is read from the
    last settled generation and the source cell's rule table picks the state.
    """
    def __init__(self, time: Time, space: Space):
        self.time = time
        self.space = space
        self._started = False
        self._complete = False

    @property
    def complete(self) -> bool:
        """True once a bounded clock has run out."""
        return self._complete

    def _next_position(self) -> Time:
        if not self._started:
            return self.time
        upcoming = copy.deepcopy(self.time)
        try:
            upcoming.increase()
        except SimulationError as e:
            if e.is_time_limit:
                self._complete = True
            raise
        return upcoming

    def step(self) -> None:
        """
        Fill the next cell. Nothing moves unless the rule lookup succeeds, so
        a failed step can be retried at the same position.
        """
        position = self._next_position()
        combination = self.space.get_combination(position)
        state = self.space.get_cell(position).apply_rule(combination)
        if position is not self.time:
            self.time.increase()
        self.space.set_state(self.time, Transition(combination, state))
        self._started = True

    def iterate(self) -> None:
        '''
        Step until one more generation has been completed.
        '''
        target = self.space.events.generations_completed + 1
        while self.space.events.generations_completed < target:
            self.step()

    def run(self, until: Optional[Callable[["Universe"], bool]] = None) -> None:
        """
        Step until the clock reaches its limit. `until` is checked between
        steps and stops the run early when it returns True; without it an
        unbounded clock runs forever.
        """
        while until is None or not until(self):
            try:
                self.step()
            except SimulationError as e:
                if e.is_time_limit:
                    return
                raise
