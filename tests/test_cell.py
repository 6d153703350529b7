import pytest
from ca import Combination, State, Transition
from cell import Cell, RuleTable
from errors import ErrorKind, SimulationError

BLACK = State("black", 0)
WHITE = State("white", 1)


def test_state_equality_by_value():
    assert State("dead", 0) == State("zero", 0)
    assert State("dead", 0) != State("dead", 1)
    assert hash(State("a", 1)) == hash(State("b", 1))


def test_state_is_immutable():
    s = State("dead", 0)
    with pytest.raises(AttributeError):
        s.value = 1


@pytest.mark.parametrize("name,value", [(None, 0), ("x", None), ("x", "1"), ("x", True)])
def test_state_invalid(name, value):
    with pytest.raises(SimulationError) as exc:
        State(name, value)
    assert exc.value.kind is ErrorKind.INVALID_STATE


def test_combination_equality_is_ordered():
    assert Combination(WHITE, BLACK, BLACK) == Combination(State("w", 1), State("b", 0), State("b", 0))
    assert Combination(WHITE, BLACK, BLACK) != Combination(BLACK, BLACK, WHITE)
    assert Combination(WHITE, BLACK) != Combination(WHITE, BLACK, BLACK)
    assert len(Combination(WHITE, BLACK, BLACK)) == 3


def test_combination_null_member():
    with pytest.raises(SimulationError) as exc:
        Combination(WHITE, None, BLACK)
    assert exc.value.kind is ErrorKind.INVALID_COMBINATION


def test_combination_empty():
    with pytest.raises(SimulationError) as exc:
        Combination()
    assert exc.value.kind is ErrorKind.INVALID_COMBINATION


def test_transition_invalid():
    with pytest.raises(SimulationError) as exc:
        Transition(None, BLACK)
    assert exc.value.kind is ErrorKind.INVALID_TRANSITION
    with pytest.raises(SimulationError) as exc:
        Transition(Combination(WHITE), None)
    assert exc.value.kind is ErrorKind.INVALID_TRANSITION


def test_cell_invalid_state():
    t = Transition(Combination(WHITE, BLACK, BLACK), BLACK)
    with pytest.raises(SimulationError) as exc:
        Cell(None, [t])
    assert exc.value.kind is ErrorKind.INVALID_STATE


def test_cell_empty_rules():
    with pytest.raises(SimulationError) as exc:
        Cell(BLACK, [])
    assert exc.value.kind is ErrorKind.INVALID_TRANSITION


def test_cell_rules_must_be_transitions():
    with pytest.raises(SimulationError) as exc:
        Cell(BLACK, ["not a transition"])
    assert exc.value.kind is ErrorKind.INVALID_TRANSITION


def test_cell_mixed_arity():
    rules = [
        Transition(Combination(WHITE, BLACK, BLACK), BLACK),
        Transition(Combination(WHITE, BLACK), WHITE),
    ]
    with pytest.raises(SimulationError) as exc:
        Cell(BLACK, rules)
    assert exc.value.kind is ErrorKind.INVALID_COMBINATION


def test_apply_rule_matches_by_value_not_identity():
    cell = Cell(BLACK, [Transition(Combination(WHITE, BLACK, BLACK), WHITE)])
    query = Combination(State("other", 1), State("other", 0), State("other", 0))
    assert cell.apply_rule(query) == WHITE


def test_apply_rule_first_match_wins():
    combo = Combination(WHITE, WHITE, WHITE)
    cell = Cell(BLACK, [Transition(combo, BLACK), Transition(combo, WHITE)])
    assert cell.apply_rule(combo) == BLACK


def test_apply_rule_miss_is_fatal():
    cell = Cell(BLACK, [Transition(Combination(WHITE, BLACK, BLACK), WHITE)])
    with pytest.raises(SimulationError) as exc:
        cell.apply_rule(Combination(BLACK, BLACK, BLACK))
    assert exc.value.kind is ErrorKind.INCOMPLETE_RULE_TABLE


def test_clone_shares_rules_and_replaces_state():
    cell = Cell(BLACK, [Transition(Combination(WHITE, BLACK, BLACK), WHITE)])
    copy = cell.clone(WHITE)
    assert copy is not cell
    assert copy.state == WHITE
    assert cell.state == BLACK
    assert copy.rule_table is cell.rule_table
    assert copy.rules == cell.rules


def test_rule_table_reused_as_is():
    table = RuleTable([Transition(Combination(WHITE), BLACK)])
    assert Cell(WHITE, table).rule_table is table
    assert table.arity == 1
    assert len(table) == 1
