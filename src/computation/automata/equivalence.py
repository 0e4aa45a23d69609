# Copyright 2026 The Computation-Machines Authors. All rights reserved.
#
# Redistribution and use in source and binary forms, with or without
# modification, are permitted provided that the following conditions are met:
#
#    1. Redistributions of source code must retain the above copyright notice,
#       this list of conditions and the following disclaimer.
#
#    2. Redistributions in binary form must reproduce the above copyright
#       notice, this list of conditions and the following disclaimer in the
#       documentation and/or other materials provided with the distribution.
#
# THIS SOFTWARE IS PROVIDED BY THE AUTHORS ``AS IS'' AND ANY EXPRESS OR
# IMPLIED WARRANTIES, INCLUDING, BUT NOT LIMITED TO, THE IMPLIED WARRANTIES OF
# MERCHANTABILITY AND FITNESS FOR A PARTICULAR PURPOSE ARE DISCLAIMED. IN NO
# EVENT SHALL THE AUTHORS OR CONTRIBUTORS BE LIABLE FOR ANY DIRECT, INDIRECT,
# INCIDENTAL, SPECIAL, EXEMPLARY, OR CONSEQUENTIAL DAMAGES (INCLUDING, BUT NOT
# LIMITED TO, PROCUREMENT OF SUBSTITUTE GOODS OR SERVICES; LOSS OF USE, DATA,
# OR PROFITS; OR BUSINESS INTERRUPTION) HOWEVER CAUSED AND ON ANY THEORY OF
# LIABILITY, WHETHER IN CONTRACT, STRICT LIABILITY, OR TORT (INCLUDING
# NEGLIGENCE OR OTHERWISE) ARISING IN ANY WAY OUT OF THE USE OF THIS SOFTWARE,
# EVEN IF ADVISED OF THE POSSIBILITY OF SUCH DAMAGE.
#
# The views and conclusions contained in the software and documentation are
# those of the authors and should not be interpreted as representing official
# policies, either expressed or implied, of the Computation-Machines Authors.

"""
Converting NFAs to equivalent DFAs with the subset (powerset) construction.

Each state of the resulting DFA is a macro-state: the frozenset of NFA states
the NFA could be in at once. Frozensets compare and hash by their members, so
two macro-states with the same members are the same DFA state.
"""

from loguru import logger

from computation.automata.dfa import DFADesign, DFARulebook
from computation.automata.fsa import FARule, format_state, sorted_states


class NFASimulation:
    """
    Simulates an NFA design to discover the DFA that accepts the same
    language.

    Args:
        nfa_design (NFADesign): The automaton to convert.

    Methods:
        next_state(state, character): Returns the macro-state reached from a
            macro-state by reading a character.
        rules_for(state): Returns the DFA rules leaving a macro-state.
        discover_states_and_rules(states): Finds every macro-state reachable
            from the given ones, and the rules between them.
        to_dfa_design(): Returns the equivalent DFA design.
    """

    def __init__(self, nfa_design):
        self.nfa_design = nfa_design

    def alphabet(self):
        # Sorted so the discovered states and rules come out in a stable order
        return sorted_states(self.nfa_design.rulebook.alphabet)

    def next_state(self, state, character):
        """
        Returns the macro-state the NFA reaches by reading ``character`` from
        the macro-state ``state``.

        The result is epsilon-closed. It may be the empty set, which is a
        proper macro-state in its own right: the sink that accepts nothing.

        Args:
            state (frozenset): The macro-state to start from.
            character (str): The character to read.

        Returns:
            frozenset: The macro-state reached.
        """
        nfa = self.nfa_design.to_nfa(state)
        nfa.read_character(character)
        return nfa.current_states

    def rules_for(self, state):
        """Returns one DFA rule per alphabet character leaving ``state``."""
        return [
            FARule(state, character, self.next_state(state, character))
            for character in self.alphabet()
        ]

    def discover_states_and_rules(self, states):
        """
        Finds every macro-state reachable from ``states`` and the rules that
        connect them.

        Rounds are repeated until one discovers no macro-state that had not
        been seen before. There are finitely many sets of NFA states, so this
        always finishes.

        Args:
            states (iterable): The macro-states to start from.

        Returns:
            tuple: ``(states, rules)``, where ``states`` lists every macro-state
            in the order it was discovered and ``rules`` lists the rules in
            the same order.
        """
        discovered = []
        seen = set()
        for state in states:
            state = frozenset(state)
            if state not in seen:
                seen.add(state)
                discovered.append(state)

        rules = []
        frontier = list(discovered)
        roundnum = 0
        while frontier:
            roundnum += 1
            new_states = []
            for state in frontier:
                for rule in self.rules_for(state):
                    rules.append(rule)
                    next_state = rule.follow()
                    if next_state not in seen:
                        seen.add(next_state)
                        discovered.append(next_state)
                        new_states.append(next_state)
            logger.opt(lazy=True).debug(
                "Round {}: {} new macro-states {}",
                lambda: roundnum,
                lambda: len(new_states),
                lambda: ", ".join(format_state(s) for s in new_states),
            )
            frontier = new_states
        return discovered, rules

    def to_dfa_design(self):
        """
        Returns a DFA design accepting the same strings as the NFA design.

        The DFA's start state is the epsilon-closure of the NFA's start state,
        and its accept states are the macro-states containing an NFA accept
        state.
        """
        start_state = self.nfa_design.to_nfa().current_states
        states, rules = self.discover_states_and_rules([start_state])
        accept_states = [
            state for state in states if self.nfa_design.to_nfa(state).accepting()
        ]
        logger.debug(
            "Subset construction found {} macro-states ({} accepting) and {} rules",
            len(states),
            len(accept_states),
            len(rules),
        )
        return DFADesign(start_state, accept_states, DFARulebook(rules))


def simulate(nfa_design):
    """
    Returns a :class:`~computation.automata.dfa.DFADesign` accepting exactly
    the strings ``nfa_design`` accepts.

    If the NFA's rules use no characters at all, the DFA has no rules and
    never leaves its start state.

    Example:
        >>> dfa_design = simulate(nfa_design)
        >>> dfa_design.accepts("aaa") == nfa_design.accepts("aaa")
        True
    """
    return NFASimulation(nfa_design).to_dfa_design()
