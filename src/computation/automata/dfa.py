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

from computation.automata.fsa import (
    NoRuleError,
    format_state,
    freeze,
    sorted_states,
)


class DFARulebook:
    """
    The rules of a deterministic finite automaton.

    Each ``(state, character)`` pair has at most one rule. The rulebook is
    only defined over the pairs its rules cover: asking for the next state of
    any other pair raises :class:`~computation.automata.fsa.NoRuleError`.

    Args:
        rules (iterable): The :class:`~computation.automata.fsa.FARule`
            objects, in order.

    Raises:
        ValueError: If two rules share a state and character but lead to
            different states.

    Example:
        >>> rulebook = DFARulebook([FARule(0, "a", 1), FARule(1, "b", 0)])
        >>> rulebook.next_state(0, "a")
        1
    """

    def __init__(self, rules):
        self.rules = tuple(rules)
        self._index = {}
        for rule in self.rules:
            existing = self._index.setdefault(rule.key(), rule)
            if existing.follow() != rule.follow():
                raise ValueError(f"Conflicting rules {existing} and {rule}")

    def __len__(self):
        return len(self.rules)

    def __iter__(self):
        return iter(self.rules)

    def __repr__(self):
        return f"{self.__class__.__name__}({list(self.rules)!r})"

    @property
    def alphabet(self):
        """The set of characters the rules are defined for."""
        return frozenset(rule.character for rule in self.rules)

    def rule_for(self, state, character):
        """
        Returns the rule for the given state and character, or None if the
        rulebook does not cover them.
        """
        return self._index.get((freeze(state), character))

    def next_state(self, state, character):
        """
        Returns the state reached by reading ``character`` in ``state``.

        Args:
            state (object): The current state.
            character (str): The character to read.

        Returns:
            object: The next state.

        Raises:
            NoRuleError: If no rule applies to the state and character.
        """
        rule = self.rule_for(state, character)
        if rule is None:
            raise NoRuleError(state, character)
        return rule.follow()


class DFA:
    """
    A running deterministic finite automaton.

    The machine's only mutable field is ``current_state``. The accept states
    and the rulebook are shared with the design that created it.
    """

    def __init__(self, current_state, accept_states, rulebook):
        self.current_state = freeze(current_state)
        self.accept_states = frozenset(freeze(s) for s in accept_states)
        self.rulebook = rulebook

    def __repr__(self):
        return (
            f"<{self.__class__.__name__} {format_state(self.current_state)}"
            f"{' accepting' if self.accepting() else ''}>"
        )

    def accepting(self):
        """Returns True if the current state is an accept state."""
        return self.current_state in self.accept_states

    def read_character(self, character):
        """
        Moves to the next state for ``character``.

        Raises:
            NoRuleError: If the rulebook has no rule for the current state
                and character.
        """
        self.current_state = self.rulebook.next_state(self.current_state, character)

    def read_string(self, string):
        # No early exit: a DFA can leave and re-enter its accept states
        for character in string:
            self.read_character(character)


class DFADesign:
    """
    The blueprint of a DFA: a start state, the accept states and a rulebook.

    A design never changes, and every call to :meth:`to_dfa` returns a fresh
    machine, so :meth:`accepts` always gives the same answer for the same
    input.

    Example:
        >>> rulebook = DFARulebook([
        ...     FARule(1, "a", 2), FARule(1, "b", 1),
        ...     FARule(2, "a", 2), FARule(2, "b", 3),
        ...     FARule(3, "a", 3), FARule(3, "b", 3),
        ... ])
        >>> design = DFADesign(1, [3], rulebook)
        >>> design.accepts("baab")
        True
        >>> design.accepts("baa")
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

    def to_dfa(self):
        """Returns a new machine in the start state."""
        return DFA(self.start_state, self.accept_states, self.rulebook)

    to_machine = to_dfa

    def accepts(self, string):
        """
        Returns True if the automaton accepts ``string``.

        Raises:
            NoRuleError: If the string contains a character the rulebook
                does not cover from the state it is read in.
        """
        dfa = self.to_dfa()
        dfa.read_string(string)
        return dfa.accepting()
