from __future__ import annotations
from typing import Dict, Iterable, Tuple, Union

from ca import Combination, State, Transition
from errors import ErrorKind, SimulationError


class RuleTable:
    """
    Ordered, immutable sequence of transitions shared by every cell built
    from it. Lookup is first-match-wins on combination equality.
    """
    def __init__(self, transitions: Iterable[Transition]):
        if transitions is None:
            raise SimulationError(ErrorKind.INVALID_TRANSITION, "rule table is missing")
        self._transitions: Tuple[Transition, ...] = tuple(transitions)
        if not self._transitions:
            raise SimulationError(ErrorKind.INVALID_TRANSITION, "rule table is empty")
        for idx, t in enumerate(self._transitions):
            if not isinstance(t, Transition):
                raise SimulationError(ErrorKind.INVALID_TRANSITION, f"rule {idx} is {t!r}, not a Transition")

        arity = self._transitions[0].arity
        self._index: Dict[Combination, State] = {}
        for idx, t in enumerate(self._transitions):
            if t.arity != arity:
                raise SimulationError(
                    ErrorKind.INVALID_COMBINATION,
                    f"rule {idx} has arity {t.arity}, expected {arity}",
                )
            self._index.setdefault(t.combination, t.state)  # keep the first match
        self._arity = arity

    @property
    def transitions(self) -> Tuple[Transition, ...]:
        return self._transitions

    @property
    def arity(self) -> int:
        return self._arity

    def lookup(self, combination: Combination) -> State:
        try:
            return self._index[combination]
        except KeyError:
            raise SimulationError(
                ErrorKind.INCOMPLETE_RULE_TABLE,
                f"no transition matches {combination!r}",
            ) from None

    def __len__(self) -> int:
        return len(self._transitions)


class Cell:
    def __init__(self, state: State, rules: Union[RuleTable, Iterable[Transition]]):
        if not isinstance(state, State):
            raise SimulationError(ErrorKind.INVALID_STATE, f"cell state must be a State, got {state!r}")
        self._state = state
        self._rules = rules if isinstance(rules, RuleTable) else RuleTable(rules)

    @property
    def state(self) -> State:
        return self._state

    @property
    def rules(self) -> Tuple[Transition, ...]:
        return self._rules.transitions

    @property
    def rule_table(self) -> RuleTable:
        return self._rules

    def apply_rule(self, combination: Combination) -> State:
        """Resulting state for `combination`; a miss means the rule table is incomplete."""
        return self._rules.lookup(combination)

    def clone(self, state: State) -> "Cell":
        return Cell(state, self._rules)

    def __repr__(self) -> str:
        return f"Cell({self._state.name}={self._state.value})"
