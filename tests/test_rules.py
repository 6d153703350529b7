from itertools import product

import pytest
from ca import Combination, State
from cell import Cell
from rules import ElementaryRule, Rule1D, Rule2D

def test_from_int_roundtrip():
    for code in (0, 1, 17, 42, 63):
        rule = Rule1D.from_int(code)
        assert int(rule.rule, 2) == code
        assert len(rule.rule) == 6

@pytest.mark.parametrize(
    "rule_bits,self_state,neigh,sum_expected",
    [
        ("000000", 0, 0, 0),
        ("000000", 1, 2, 0),
        ("111111", 0, 2, 1),
        ("110001", 1, 0, 0),
    ],
)
def test_rule_call(rule_bits, self_state, neigh, sum_expected):
    rule = Rule1D(rule_bits)
    assert rule(self_state, neigh) == sum_expected



def test_rule1d_invalid_rule_length():
    """Constructor should reject bit-strings that are not exactly 6 chars."""
    with pytest.raises(ValueError):
        Rule1D("00000")          # 5 bits
    with pytest.raises(ValueError):
        Rule1D("0" * 7)          # 7 bits


def test_rule1d_from_int_out_of_range():
    """Integer codes ≥ 2**6 must fail because they need > 6 bits."""
    with pytest.raises(ValueError):
        Rule1D.from_int(64)      # 0b1000000 → length 7

def test_rule2d_bits_length_validation():
    """Bit-strings shorter or longer than 18 should raise."""
    for bad_len in (17, 19):
        with pytest.raises(ValueError):
            Rule2D("0" * bad_len)


def test_rule2d_from_int_roundtrip():
    """`from_int` should faithfully encode and decode representative codes."""
    for code in (0, 1, 42, (1 << 18) - 1):
        rule = Rule2D.from_int(code)
        assert len(rule.rule_bits) == 18
        assert int(rule.rule_bits, 2) == code


def test_rule2d_call_all_zeros_ones():
    """All-zero and all-one rule strings act as constant functions."""
    zero_rule = Rule2D("0" * 18)
    one_rule  = Rule2D("1" * 18)

    for self_state in (0, 1):
        for neigh_sum in range(9):          # 0 … 8
            assert zero_rule(self_state, neigh_sum) == 0
            assert one_rule(self_state, neigh_sum)  == 1


def test_rule2d_call_invalid_args():
    """Out-of-range arguments must raise ValueError."""
    rule = Rule2D("0" * 18)

    with pytest.raises(ValueError):
        rule(2, 0)      # invalid self_state

    with pytest.raises(ValueError):
        rule(-1, 0)     # negative self_state

    with pytest.raises(ValueError):
        rule(0, 9)      # neighbor_sum too large

    with pytest.raises(ValueError):
        rule(0, -1)     # neighbor_sum negative

@pytest.mark.parametrize("code", [-1, 256])
def test_elementary_rule_out_of_range(code):
    with pytest.raises(ValueError):
        ElementaryRule(code)


def test_elementary_rule_call_reads_code_bits():
    rule = ElementaryRule(110)   # 01101110
    outcomes = [rule(l, c, r) for l, c, r in product((1, 0), repeat=3)]
    assert outcomes == [0, 1, 1, 0, 1, 1, 1, 0]


def test_elementary_transitions_cover_every_neighborhood():
    table = ElementaryRule(30).transitions()
    assert len(table) == 8
    assert {t.combination.values for t in table} == set(product((0, 1), repeat=3))
    assert [t.state.value for t in table] == [0, 0, 0, 1, 1, 1, 1, 0]


def test_elementary_transitions_custom_states():
    black, white = State("black", 1), State("white", 0)
    table = ElementaryRule(1).transitions([black, white])
    assert table[-1].state.name == "black"     # 000 -> 1
    assert table[0].combination[0].name == "black"


def test_elementary_transitions_need_binary_states():
    with pytest.raises(ValueError):
        ElementaryRule(30).transitions([State("a", 0), State("b", 2)])


def test_rule1d_transitions_match_call():
    rule = Rule1D("110001")
    table = rule.transitions()
    assert len(table) == 8
    for t in table:
        left, center, right = t.combination.values
        assert t.state.value == rule(center, left + right)


def test_rule1d_wider_radius():
    rule = Rule1D("0" * 5 + "1" * 5, neighbor_count=4)
    table = rule.transitions()
    assert len(table) == 2 ** 5
    assert all(t.state.value == t.combination.values[2] for t in table)


def test_rule1d_odd_neighbor_count_has_no_table():
    with pytest.raises(ValueError):
        Rule1D("0" * 4, neighbor_count=1).transitions()


def test_rule2d_life_table():
    life = Rule2D.from_birth_survival([3], [2, 3])
    table = life.transitions()
    assert len(table) == 2 ** 9
    cell = Cell(State("dead", 0), table)
    blinker_end = Combination(*(State("s", v) for v in (0, 0, 0, 1, 1, 1, 0, 0, 0)))
    assert cell.apply_rule(blinker_end).value == 1
    lonely = Combination(*(State("s", v) for v in (0, 0, 0, 0, 1, 0, 0, 0, 0)))
    assert cell.apply_rule(lonely).value == 0


def test_rule2d_von_neumann_table():
    rule = Rule2D.from_int(511, neighbor_count=4)
    assert rule.rule_bits == "0111111111"
    table = rule.transitions()
    assert len(table) == 2 ** 5
    assert all(len(t.combination) == 5 for t in table)
    alone = Combination(*(State("s", v) for v in (0, 0, 0, 0, 0)))
    assert Cell(State("dead", 0), table).apply_rule(alone).value == 0


def test_rule2d_rejects_other_neighbor_counts():
    with pytest.raises(ValueError):
        Rule2D("0" * 14, neighbor_count=6)
