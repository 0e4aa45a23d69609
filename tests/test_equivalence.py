from itertools import product

import pytest
from loguru import logger

from computation.automata.dfa import DFADesign
from computation.automata.equivalence import NFASimulation, simulate
from computation.automata.fsa import EPSILON, FARule, NoRuleError
from computation.automata.nfa import NFADesign, NFARulebook
from computation.automata.reg import Choose, Concatenate, Empty, Literal, Repeat


def _nfa_design():
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
    return NFADesign(1, [3], rulebook)


def _multiples_design():
    # Accepts runs of "a" whose length is a multiple of two or three
    rulebook = NFARulebook(
        [
            FARule(1, EPSILON, 2),
            FARule(1, EPSILON, 4),
            FARule(2, "a", 3),
            FARule(3, "a", 2),
            FARule(4, "a", 5),
            FARule(5, "a", 6),
            FARule(6, "a", 4),
        ]
    )
    return NFADesign(1, [2, 4], rulebook)


def test_next_state():
    simulation = NFASimulation(_nfa_design())
    assert simulation.next_state(frozenset([1, 2]), "a") == frozenset([1, 2])
    assert simulation.next_state(frozenset([1, 2]), "b") == frozenset([3, 2])
    assert simulation.next_state(frozenset([3, 2]), "b") == frozenset([1, 3, 2])
    assert simulation.next_state(frozenset([1, 3, 2]), "b") == frozenset([1, 3, 2])
    assert simulation.next_state(frozenset([1, 3, 2]), "a") == frozenset([1, 2])
    assert simulation.next_state(frozenset([3, 2]), "a") == frozenset()
    assert simulation.next_state(frozenset(), "a") == frozenset()


def test_rules_for():
    simulation = NFASimulation(_nfa_design())
    assert simulation.rules_for(frozenset([1, 2])) == [
        FARule({1, 2}, "a", {1, 2}),
        FARule({1, 2}, "b", {2, 3}),
    ]


def test_discover_states_and_rules():
    simulation = NFASimulation(_nfa_design())
    start = _nfa_design().to_nfa().current_states
    assert start == frozenset([1, 2])
    states, rules = simulation.discover_states_and_rules([start])
    assert states == [
        frozenset([1, 2]),
        frozenset([2, 3]),
        frozenset(),
        frozenset([1, 2, 3]),
    ]
    assert len(rules) == 8
    assert [str(rule) for rule in rules[:2]] == [
        "{1, 2} -> a -> {1, 2}",
        "{1, 2} -> b -> {2, 3}",
    ]


def test_discover_deduplicates_by_value():
    simulation = NFASimulation(_nfa_design())
    states, _ = simulation.discover_states_and_rules(
        [{1, 2}, frozenset([2, 1]), frozenset([1, 2])]
    )
    assert len(states) == 4


def test_to_dfa_design():
    dfa_design = NFASimulation(_nfa_design()).to_dfa_design()
    assert isinstance(dfa_design, DFADesign)
    assert dfa_design.start_state == frozenset([1, 2])
    assert dfa_design.accept_states == frozenset(
        [frozenset([2, 3]), frozenset([1, 2, 3])]
    )
    assert not dfa_design.accepts("aaa")
    assert dfa_design.accepts("aab")
    assert dfa_design.accepts("bbbabb")


def test_language_is_preserved():
    nfa_design = _multiples_design()
    dfa_design = simulate(nfa_design)
    for length in range(13):
        string = "a" * length
        assert dfa_design.accepts(string) == nfa_design.accepts(string)
        assert dfa_design.accepts(string) == (length % 2 == 0 or length % 3 == 0)

    assert dfa_design.accepts("aa")
    assert dfa_design.accepts("aaa")
    assert dfa_design.accepts("aaaa")
    assert not dfa_design.accepts("aaaaa")


def test_pattern_language_is_preserved():
    pattern = Repeat(Concatenate(Literal("a"), Choose(Empty(), Literal("b"))))
    nfa_design = pattern.to_nfa_design()
    dfa_design = simulate(nfa_design)
    for length in range(7):
        for chars in product("ab", repeat=length):
            string = "".join(chars)
            assert dfa_design.accepts(string) == pattern.matches(string)


def test_empty_macro_state_is_a_sink():
    dfa_design = simulate(_nfa_design())
    sink = frozenset()
    rulebook = dfa_design.rulebook
    for character in "ab":
        assert rulebook.next_state(sink, character) == sink
    assert sink not in dfa_design.accept_states

    dfa = dfa_design.to_dfa()
    dfa.read_string("aba")
    assert dfa.current_state == sink
    dfa.read_string("abbab")
    assert dfa.current_state == sink
    assert not dfa.accepting()


def test_dfa_is_total_over_alphabet():
    dfa_design = simulate(_nfa_design())
    states = {dfa_design.start_state}
    for rule in dfa_design.rulebook:
        states.add(rule.follow())
    for state in states:
        for character in "ab":
            assert dfa_design.rulebook.rule_for(state, character) is not None


def test_out_of_alphabet():
    dfa_design = simulate(_nfa_design())
    with pytest.raises(NoRuleError):
        dfa_design.accepts("abc")


def test_empty_alphabet():
    nfa_design = NFADesign(1, [2], NFARulebook([FARule(1, EPSILON, 2)]))
    dfa_design = simulate(nfa_design)
    assert dfa_design.start_state == frozenset([1, 2])
    assert len(dfa_design.rulebook) == 0
    assert dfa_design.accepts("")
    with pytest.raises(NoRuleError):
        dfa_design.accepts("a")

    dfa_design = simulate(NFADesign(1, [], NFARulebook([])))
    assert dfa_design.start_state == frozenset([1])
    assert not dfa_design.accepts("")


def test_reproducible():
    first = simulate(_multiples_design())
    second = simulate(_multiples_design())
    assert list(first.rulebook) == list(second.rulebook)
    assert first.accept_states == second.accept_states


def test_nfa_design_to_dfa_design():
    nfa_design = _nfa_design()
    dfa_design = nfa_design.to_dfa_design()
    assert list(dfa_design.rulebook) == list(simulate(nfa_design).rulebook)


def test_logging():
    messages = []
    logger.enable("computation")
    handler_id = logger.add(messages.append, level="DEBUG", format="{message}")
    try:
        simulate(_nfa_design())
    finally:
        logger.remove(handler_id)
        logger.disable("computation")

    assert any("Round 1: 1 new macro-states {2, 3}" in m for m in messages)
    assert any(
        "Subset construction found 4 macro-states (2 accepting) and 8 rules" in m
        for m in messages
    )


def test_logging_disabled_by_default():
    messages = []
    handler_id = logger.add(messages.append, level="DEBUG", format="{message}")
    try:
        simulate(_nfa_design())
    finally:
        logger.remove(handler_id)
    assert messages == []
