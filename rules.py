from __future__ import annotations
from dataclasses import dataclass
from itertools import product
from typing import Callable, List, Sequence, Tuple

from ca import Combination, State, Transition
from neighborhood import Offset, center_index, elementary, moore, von_neumann

DEAD = State("dead", 0)
ALIVE = State("alive", 1)
BINARY_STATES: Tuple[State, ...] = (DEAD, ALIVE)


def _states_by_value(states: Sequence[State], num_states: int) -> dict:
    if len(states) != num_states:
        raise ValueError(f"rule needs {num_states} states, got {len(states)}")
    by_value = {s.value: s for s in states}
    if sorted(by_value) != list(range(num_states)):
        raise ValueError(f"state values must be 0..{num_states - 1}, got {sorted(by_value)}")
    return by_value


def _outer_totalistic_table(
    rule: Callable[[int, int], int],
    offsets: List[Offset],
    states: Sequence[State],
    num_states: int,
) -> List[Transition]:
    """
    Enumerate every neighborhood over `offsets` and ask `rule` for the
    outcome given the centre value and the sum of the other values.
    """
    by_value = _states_by_value(states, num_states)
    ordered = [by_value[v] for v in range(num_states)]
    centre = center_index(offsets)
    table = []
    for combo in product(ordered, repeat=len(offsets)):
        self_state = combo[centre].value
        neighbor_sum = sum(s.value for i, s in enumerate(combo) if i != centre)
        table.append(Transition(Combination(*combo), by_value[rule(self_state, neighbor_sum)]))
    return table


@dataclass(frozen=True)
class ElementaryRule:
    """
    Wolfram elementary rule 0..255. Bit k of the code is the next state of a
    cell whose (left, centre, right) neighborhood reads k in binary.
    """
    code: int

    def __post_init__(self):
        if not 0 <= self.code < 256:
            raise ValueError(f"elementary rule code must be in [0, 255], got {self.code}")

    def __call__(self, left: int, center: int, right: int) -> int:
        return (self.code >> (left * 4 + center * 2 + right)) & 1

    def transitions(self, states: Sequence[State] = BINARY_STATES) -> List[Transition]:
        """Rule table in the conventional order, 111 first and 000 last."""
        by_value = _states_by_value(states, 2)
        table = []
        for left, center, right in product((1, 0), repeat=3):
            combo = Combination(by_value[left], by_value[center], by_value[right])
            table.append(Transition(combo, by_value[self(left, center, right)]))
        return table


@dataclass(frozen=True)
class Rule1D:
    """
    Outer-totalistic 1D rule encoded as a flat bit-string:
    state 0 transitions: bits[0..N]
    state 1 transitions: bits[N+1..2N+1]
    ...
    state (S-1) transitions: bits[(S-1)*(N+1) .. S*(N+1)-1]
    where N = max number of neighbors (2 for ECA).
    """
    rule: str
    num_states: int = 2
    neighbor_count: int = 2

    def __post_init__(self):
        expected_length = self.num_states * (self.neighbor_count + 1)
        if len(self.rule) != expected_length:
            raise ValueError(f"rule string must be {expected_length} bits long, got {len(self.rule)}")
        if set(self.rule) - {"0", "1"}:
            raise ValueError("rule string may only contain 0 and 1")

    def __call__(self, self_state: int, neighbor_sum: int) -> int:
        if not (0 <= self_state < self.num_states):
            raise ValueError("invalid self_state")
        if not (0 <= neighbor_sum <= self.neighbor_count):
            raise ValueError("invalid neighbor sum")
        return int(self.rule[self_state * (self.neighbor_count + 1) + neighbor_sum])

    @classmethod
    def from_int(cls, code: int, num_states: int = 2, neighbor_count: int = 2) -> Rule1D:
        """Construct from integer code, e.g. 0..63 for 2-state ECA."""
        bits = f"{code:0{num_states*(neighbor_count+1)}b}"
        return cls(bits, num_states=num_states, neighbor_count=neighbor_count)

    def transitions(self, states: Sequence[State] = BINARY_STATES) -> List[Transition]:
        if self.neighbor_count == 2:
            offsets = elementary()
        elif self.neighbor_count > 0 and self.neighbor_count % 2 == 0:
            offsets = moore(1, radius=self.neighbor_count // 2)
        else:
            raise ValueError("a symmetric 1D neighborhood needs an even, positive neighbor_count")
        return _outer_totalistic_table(self, offsets, states, self.num_states)


@dataclass(frozen=True)
class Rule2D:
    """
    Outer-totalistic binary rule for a 2-D neighborhood: Moore (8 neighbors)
    or von Neumann (neighbor_count=4).
    Bitstring layout (length = num_states x (neighbor_count + 1)):
        state 0 outcomes: indices 0 .. 8   (sum = 0-8)
        state 1 outcomes: indices 9 .. 17
    """
    rule_bits: str
    num_states: int = 2
    neighbor_count: int = 8 # Moore neighborhood

    def __post_init__(self) -> None:
        expected = self.num_states * (self.neighbor_count + 1)
        if len(self.rule_bits) != expected:
            raise ValueError(
                f"rule_bits length {len(self.rule_bits)} "
                f"does not match expected {expected} "
                f"({self.num_states} states × {self.neighbor_count + 1} sums)."
            )
        if self.neighbor_count not in (4, 8):
            raise ValueError("Rule2D supports the 8-cell Moore or 4-cell von Neumann neighborhood")

    def __call__(self, self_state: int, neighbor_sum: int) -> int:
        """Return next-state bit (0/1) for given cell state & neighbor sum."""
        if not (0 <= self_state < self.num_states):
            raise ValueError("invalid self_state")
        if not (0 <= neighbor_sum <= self.neighbor_count):
            raise ValueError("invalid neighbor sum")

        idx = self_state * (self.neighbor_count + 1) + neighbor_sum
        return int(self.rule_bits[idx])

    @classmethod
    def from_int(cls,code: int, *, num_states: int = 2, neighbor_count: int = 8) -> "Rule2D":
        """
        Build a Rule2D from an integer in the range
            0 .. 2**(num_states*(neighbor_count+1)) - 1
        """
        bit_len = num_states * (neighbor_count + 1)
        rule_bits = f"{code:0{bit_len}b}"          # zero-padded binary
        return cls(rule_bits, num_states=num_states, neighbor_count=neighbor_count)

    @classmethod
    def from_birth_survival(cls, birth: Sequence[int], survival: Sequence[int]) -> "Rule2D":
        """Life-like notation, e.g. from_birth_survival([3], [2, 3]) for B3/S23."""
        bits = ["0"] * 18
        for n in birth:
            bits[n] = "1"
        for n in survival:
            bits[9 + n] = "1"
        return cls("".join(bits))

    def transitions(self, states: Sequence[State] = BINARY_STATES) -> List[Transition]:
        offsets = moore(2) if self.neighbor_count == 8 else von_neumann(2)
        return _outer_totalistic_table(self, offsets, states, self.num_states)
