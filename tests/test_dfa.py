import pytest

from computation.automata.dfa import DFA, DFADesign, DFARulebook
from computation.automata.equivalence import simulate
from computation.automata.fsa import (
    EPSILON,
    FARule,
    NoRuleError,
    format_state,
    sorted_states,
)
from computation.automata.nfa import NFADesign, NFARulebook


def _rulebook():
    # Accepts strings over {a, b} containing "ab"
    return DFARulebook(
        [
            FARule(1, "a", 2),
            FARule(1, "b", 1),
            FARule(2, "a", 2),
            FARule(2, "b", 3),
            FARule(3, "a", 3),
            FARule(3, "b", 3),
        ]
    )


def test_rule():
    rule = FARule(1, "a", 2)
    assert rule.applies_to(1, "a")
    assert not rule.applies_to(1, "b")
    assert not rule.applies_to(2, "a")
    assert rule.follow() == 2
    assert str(rule) == "1 -> a -> 2"
    assert repr(rule) == "FARule(1, 'a', 2)"


def test_rule_equality():
    assert FARule(1, "a", 2) == FARule(1, "a", 2)
    assert FARule(1, "a", 2) != FARule(1, "a", 3)
    assert len({FARule(1, "a", 2), FARule(1, "a", 2)}) == 1
    assert (FARule(1, "a", 2) == 0) is False
    assert (FARule(1, "a", 2) == None) is False  # noqa: E711
    assert (FARule(1, "a", 2) != None) is True  # noqa: E711


def test_set_valued_rule():
    rule = FARule({3, 1}, "b", {2})
    assert rule.state == frozenset([1, 3])
    assert rule.applies_to({1, 3}, "b")
    assert rule.applies_to(frozenset([3, 1]), "b")
    assert not rule.applies_to({1}, "b")
    assert rule.follow() == frozenset([2])
    assert str(rule) == "{1, 3} -> b -> {2}"
    assert str(FARule(frozenset(), "a", frozenset())) == "{} -> a -> {}"


def test_epsilon_rule_text():
    assert str(FARule(1, EPSILON, 2)) == "1 -> ε -> 2"
    assert repr(EPSILON) == "<EPSILON>"


def test_format_state():
    assert format_state(5) == "5"
    assert format_state(frozenset([10, 2, 1])) == "{1, 2, 10}"


def test_format_nested_states():
    nested = frozenset([frozenset([2]), frozenset([1]), frozenset([10])])
    assert format_state(nested) == "{{1}, {2}, {10}}"
    assert format_state(frozenset([frozenset([2, 3]), frozenset([1, 2, 3])])) == (
        "{{1, 2, 3}, {2, 3}}"
    )
    assert sorted_states([frozenset([10]), 3, frozenset()]) == [
        3,
        frozenset(),
        frozenset([10]),
    ]
    # Mixed scalar types fall back to their text
    assert sorted_states(["b", 2, "a", 1]) == [1, 2, "a", "b"]


def test_design_repr():
    design = DFADesign(frozenset([3]), [{3}, {1}, {2}], DFARulebook([]))
    assert repr(design) == "<DFADesign start={3} accept=[{1}, {2}, {3}] rules=0>"


def test_simulated_design_repr():
    rulebook = NFARulebook(
        [
            FARule(1, "a", 1),
            FARule(1, "a", 2),
            FARule(1, EPSILON, 2),
            FARule(2, "b", 3),
            FARule(3, "b", 1),
            FARule(3, EPSILON, 2),
        ]
    )
    dfa_design = simulate(NFADesign(1, [3], rulebook))
    assert repr(dfa_design) == (
        "<DFADesign start={1, 2} accept=[{1, 2, 3}, {2, 3}] rules=8>"
    )


def test_rulebook():
    rulebook = _rulebook()
    assert len(rulebook) == 6
    assert rulebook.next_state(1, "a") == 2
    assert rulebook.next_state(1, "b") == 1
    assert rulebook.next_state(2, "b") == 3
    assert rulebook.rule_for(3, "a") == FARule(3, "a", 3)
    assert rulebook.rule_for(3, "c") is None
    assert rulebook.alphabet == frozenset("ab")


def test_conflicting_rules():
    with pytest.raises(ValueError):
        DFARulebook([FARule(1, "a", 2), FARule(1, "a", 3)])

    # Repeating the same rule is still deterministic
    rulebook = DFARulebook([FARule(1, "a", 2), FARule(1, "a", 2)])
    assert rulebook.next_state(1, "a") == 2


def test_machine():
    dfa = DFA(1, [3], _rulebook())
    assert not dfa.accepting()
    dfa.read_character("b")
    assert not dfa.accepting()
    for _ in range(3):
        dfa.read_character("a")
    assert not dfa.accepting()
    dfa.read_character("b")
    assert dfa.accepting()
    assert dfa.current_state == 3


def test_read_string():
    dfa = DFA(1, [3], _rulebook())
    dfa.read_string("baaab")
    assert dfa.accepting()


def test_leave_and_reenter_accept_state():
    # Accepts strings with an even number of "a"s
    rulebook = DFARulebook([FARule(0, "a", 1), FARule(1, "a", 0)])
    dfa = DFA(0, [0], rulebook)
    dfa.read_string("aa")
    assert dfa.accepting()
    design = DFADesign(0, [0], rulebook)
    assert design.accepts("aaaa")
    assert not design.accepts("aaa")


def test_design():
    design = DFADesign(1, [3], _rulebook())
    assert not design.accepts("a")
    assert not design.accepts("baa")
    assert design.accepts("baba")
    assert design.accepts("ab")


def test_design_is_repeatable():
    design = DFADesign(1, [3], _rulebook())
    for string in ("", "ab", "ba", "bbbabaa"):
        results = {design.accepts(string) for _ in range(5)}
        assert len(results) == 1


def test_design_spawns_fresh_machines():
    design = DFADesign(1, [3], _rulebook())
    dfa1 = design.to_dfa()
    dfa1.read_string("ab")
    dfa2 = design.to_machine()
    assert dfa1.accepting()
    assert dfa2.current_state == 1
    assert not dfa2.accepting()
    assert dfa1.rulebook is dfa2.rulebook


def test_no_rule():
    design = DFADesign(1, [3], _rulebook())
    with pytest.raises(NoRuleError) as excinfo:
        design.accepts("abc")
    assert excinfo.value.state == 3
    assert excinfo.value.character == "c"
    assert str(excinfo.value) == "no rule for 3 -> c"

    dfa = design.to_dfa()
    dfa.read_character("a")
    with pytest.raises(NoRuleError):
        dfa.read_character("z")
    # A failed read does not move the machine
    assert dfa.current_state == 2


def test_partial_rulebook():
    rulebook = DFARulebook([FARule(0, "a", 1), FARule(0, "b", 0), FARule(1, "b", 2)])
    design = DFADesign(0, [2], rulebook)
    assert design.accepts("ab")
    assert design.accepts("bbab")
    with pytest.raises(NoRuleError):
        design.accepts("abb")
    with pytest.raises(NoRuleError):
        design.accepts("aa")
