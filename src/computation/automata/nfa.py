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

from cached_property import cached_property

from computation.automata.fsa import EPSILON, format_state, freeze, sorted_states


class NFARulebook:
    """
    The rules of a nondeterministic finite automaton.

    Unlike :class:`~computation.automata.dfa.DFARulebook`, any number of rules
    may share a state and character, and rules may be labelled
    :data:`~computation.automata.fsa.EPSILON` to move without reading input.

    Attributes:
        rules (tuple): The rules, in the order they were given.

    Methods:
        rules_for(state, character): Returns the rules for a state and character.
        follow_rules_for(state, character): Returns the states those rules lead to.
        next_states(states, character): Returns every state reachable from a
            set of states by reading a character.
        follow_free_moves(states): Returns the epsilon-closure of a set of states.
        alphabet: The characters used by the rules, without EPSILON.
    """

    def __init__(self, rules):
        self.rules = tuple(rules)
        self._index = {}
        for rule in self.rules:
            self._index.setdefault(rule.key(), []).append(rule)

    def __len__(self):
        return len(self.rules)

    def __iter__(self):
        return iter(self.rules)

    def __repr__(self):
        return f"{self.__class__.__name__}({list(self.rules)!r})"

    @cached_property
    def alphabet(self):
        """
        The set of characters that appear in any rule, excluding EPSILON.

        The rulebook never changes, so this is only computed once.
        """
        return frozenset(
            rule.character for rule in self.rules if rule.character is not EPSILON
        )

    def rules_for(self, state, character):
        """
        Returns all the rules that apply to the given state and character.

        Args:
            state (object): The state.
            character (str): The character, or EPSILON.

        Returns:
            list: The matching rules, possibly empty.
        """
        return list(self._index.get((freeze(state), character), ()))

    def follow_rules_for(self, state, character):
        return [rule.follow() for rule in self.rules_for(state, character)]

    def next_states(self, states, character):
        """
        Returns the set of states reachable from any of ``states`` by reading
        ``character``.

        No free moves are followed. Reading from an empty set, or reading a
        character no rule covers, gives an empty set.

        Args:
            states (iterable): The states to read from.
            character (str): The character to read, or EPSILON.

        Returns:
            frozenset: The states reached.
        """
        reached = set()
        for state in states:
            reached.update(self.follow_rules_for(state, character))
        return frozenset(reached)

    def follow_free_moves(self, states):
        """
        Returns the epsilon-closure of ``states``: the given states plus every
        state reachable from them through EPSILON rules alone.

        Free moves are followed until a pass adds no new state. The set of
        states only grows and is bounded by the states in the rulebook, so
        this also terminates on epsilon cycles.

        Example:
            >>> rulebook = NFARulebook([
            ...     FARule(1, EPSILON, 2), FARule(2, EPSILON, 1),
            ...     FARule(2, "a", 3),
            ... ])
            >>> sorted(rulebook.follow_free_moves({1}))
            [1, 2]
        """
        states = frozenset(states)
        while True:
            more_states = self.next_states(states, EPSILON)
            if more_states <= states:
                return states
            states = states | more_states


class NFA:
    """
    A running nondeterministic finite automaton.

    The machine tracks a set of possible states. Free moves are implicit:
    :attr:`current_states` always reports the epsilon-closure of the raw
    states, computed when it is read.

    Reading a character that no current state has a rule for leaves the
    machine with no states at all. That is a normal, non-accepting outcome
    rather than an error: it means no interpretation of the input so far can
    still succeed.
    """

    def __init__(self, current_states, accept_states, rulebook):
        self._current_states = frozenset(freeze(s) for s in current_states)
        self.accept_states = frozenset(freeze(s) for s in accept_states)
        self.rulebook = rulebook

    def __repr__(self):
        return (
            f"<{self.__class__.__name__} {format_state(self.current_states)}"
            f"{' accepting' if self.accepting() else ''}>"
        )

    @property
    def current_states(self):
        return self.rulebook.follow_free_moves(self._current_states)

    def accepting(self):
        """Returns True if any current state is an accept state."""
        return not self.current_states.isdisjoint(self.accept_states)

    def read_character(self, character):
        """Moves to every state reachable by reading ``character``."""
        self._current_states = self.rulebook.next_states(
            self.current_states, character
        )

    def read_string(self, string):
        for character in string:
            self.read_character(character)


class NFADesign:
    """
    The blueprint of an NFA: a start state, the accept states and a rulebook.

    Args:
        start_state (object): The state every new machine starts in.
        accept_states (iterable): The accept states.
        rulebook (NFARulebook): The rules, shared by every machine.

    Example:
        >>> rulebook = NFARulebook([
        ...     FARule(1, "a", 1), FARule(1, "b", 1), FARule(1, "b", 2),
        ...     FARule(2, "a", 3), FARule(2, "b", 3),
        ...     FARule(3, "a", 4), FARule(3, "b", 4),
        ... ])
        >>> design = NFADesign(1, [4], rulebook)
        >>> design.accepts("bab")
        True
        >>> design.accepts("bbabb")
        False
    """

    def __init__(self, start_state, accept_states, rulebook):
        self.start_state = freeze(start_state)
        self.accept_states = frozenset(freeze(s) for s in accept_states)
        self.rulebook = rulebook

    def __repr__(self):
        accepts = ", ".join(
            format_state(s) for s in sorted_states(self.accept_states)
        )
        return (
            f"<{self.__class__.__name__} start={format_state(self.start_state)}"
            f" accept=[{accepts}] rules={len(self.rulebook)}>"
        )

    def to_nfa(self, current_states=None):
        """
        Returns a new machine.

        Args:
            current_states (iterable, optional): The states the machine starts
                in. Defaults to the start state alone.

        Returns:
            NFA: The new machine.
        """
        if current_states is None:
            current_states = {self.start_state}
        return NFA(current_states, self.accept_states, self.rulebook)

    to_machine = to_nfa

    def accepts(self, string):
        """Returns True if any path through the automaton accepts ``string``."""
        nfa = self.to_nfa()
        nfa.read_string(string)
        return nfa.accepting()

    def to_dfa_design(self):
        """
        Returns an equivalent :class:`~computation.automata.dfa.DFADesign`
        built by subset construction.
        """
        from computation.automata.equivalence import simulate

        return simulate(self)
