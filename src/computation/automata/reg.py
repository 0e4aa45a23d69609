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
Regular expressions built from pattern objects and compiled to NFAs.

Patterns are put together programmatically; there is no parser::

    pattern = Repeat(Concatenate(Literal("a"), Choose(Empty(), Literal("b"))))
    str(pattern)  # "(a(|b))*"
    pattern.matches("abaab")  # True
"""

from loguru import logger

from computation.automata.fsa import EPSILON, FARule
from computation.automata.nfa import NFADesign, NFARulebook

# Operator precedence, loosest to tightest
CHOOSE = 0
CONCATENATE = 1
REPEAT = 2
ATOM = 3


class StateCounter:
    """
    Hands out state numbers for a compilation.

    Sub-patterns are compiled separately and then merged into one rulebook,
    so every state created during one compilation must come from the same
    counter. Independent compilations use independent counters.

    Args:
        start (int, optional): The first state number. Defaults to 0.
    """

    def __init__(self, start=0):
        self.statenum = start

    def new_state(self):
        """
        Generate a new state number.

        Returns:
        int: The new state number.
        """
        state = self.statenum
        self.statenum += 1
        return state


# Construction functions


def empty_nfa(counter):
    """Returns an NFA design accepting only the empty string."""
    state = counter.new_state()
    return NFADesign(state, [state], NFARulebook([]))


def literal_nfa(character, counter):
    """Returns an NFA design accepting only the one-character ``character``."""
    start = counter.new_state()
    accept = counter.new_state()
    rulebook = NFARulebook([FARule(start, character, accept)])
    return NFADesign(start, [accept], rulebook)


def concatenate_nfa(first, second):
    """
    Returns an NFA design accepting a string accepted by ``first`` followed by
    a string accepted by ``second``.

    Every accept state of ``first`` gets a free move to the start of
    ``second``. The two designs must not share any state.
    """
    rules = list(first.rulebook.rules)
    for state in first.accept_states:
        rules.append(FARule(state, EPSILON, second.start_state))
    rules.extend(second.rulebook.rules)
    return NFADesign(first.start_state, second.accept_states, NFARulebook(rules))


def choose_nfa(first, second, counter):
    """
    Returns an NFA design accepting anything accepted by ``first`` or by
    ``second``.
    """
    start = counter.new_state()
    rules = list(first.rulebook.rules)
    rules.extend(second.rulebook.rules)
    rules.append(FARule(start, EPSILON, first.start_state))
    rules.append(FARule(start, EPSILON, second.start_state))
    accept_states = first.accept_states | second.accept_states
    return NFADesign(start, accept_states, NFARulebook(rules))


def repeat_nfa(design, counter):
    """
    Returns an NFA design accepting zero or more strings accepted by
    ``design``, one after another (the Kleene star).

    A new start state, which is also an accept state, leads into the
    original automaton, and every original accept state loops back to the
    original start.
    """
    start = counter.new_state()
    rules = list(design.rulebook.rules)
    rules.append(FARule(start, EPSILON, design.start_state))
    for state in design.accept_states:
        rules.append(FARule(state, EPSILON, design.start_state))
    accept_states = design.accept_states | {start}
    return NFADesign(start, accept_states, NFARulebook(rules))


def compile_pattern(pattern, counter):
    """
    Compiles a pattern tree to an NFA design, taking every state from
    ``counter``.

    Raises:
        TypeError: If ``pattern`` (or a sub-pattern) is not one of
            :class:`Empty`, :class:`Literal`, :class:`Concatenate`,
            :class:`Choose` or :class:`Repeat`.
    """
    if isinstance(pattern, Empty):
        return empty_nfa(counter)
    elif isinstance(pattern, Literal):
        return literal_nfa(pattern.character, counter)
    elif isinstance(pattern, Concatenate):
        first = compile_pattern(pattern.first, counter)
        second = compile_pattern(pattern.second, counter)
        return concatenate_nfa(first, second)
    elif isinstance(pattern, Choose):
        first = compile_pattern(pattern.first, counter)
        second = compile_pattern(pattern.second, counter)
        return choose_nfa(first, second, counter)
    elif isinstance(pattern, Repeat):
        return repeat_nfa(compile_pattern(pattern.pattern, counter), counter)
    raise TypeError(f"Not a pattern: {pattern!r}")


# Patterns


class Pattern:
    """
    Base class for the regular expression patterns.

    The subclasses are a closed set: :class:`Empty`, :class:`Literal`,
    :class:`Concatenate`, :class:`Choose` and :class:`Repeat`. Patterns are
    immutable and compare equal when they have the same structure.

    Attributes:
        precedence (int): How tightly the pattern binds when printed.
    """

    precedence = None

    def _fields(self):
        return ()

    def __eq__(self, other):
        return (
            self.__class__ is other.__class__
            and self._fields() == other._fields()
        )

    def __ne__(self, other):
        return not self.__eq__(other)

    def __hash__(self):
        return hash((self.__class__.__name__,) + self._fields())

    def __repr__(self):
        return f"/{self}/"

    def bracket(self, outer_precedence):
        """
        Returns this pattern's text, in parentheses if it binds more loosely
        than the surrounding operator.

        Args:
            outer_precedence (int): The precedence of the enclosing pattern.

        Returns:
            str: The (possibly parenthesized) text.
        """
        if self.precedence < outer_precedence:
            return f"({self})"
        return str(self)

    def to_nfa_design(self, counter=None):
        """
        Compiles this pattern to an NFA design.

        Args:
            counter (StateCounter, optional): Where to take state numbers
                from. A new counter is used if this is not given.

        Returns:
            NFADesign: An NFA accepting exactly the strings this pattern
            matches.
        """
        if counter is None:
            counter = StateCounter()
        design = compile_pattern(self, counter)
        logger.debug(
            "Compiled {!r} to an NFA with {} rules", self, len(design.rulebook)
        )
        return design

    def matches(self, string):
        """Returns True if the whole of ``string`` matches this pattern."""
        return self.to_nfa_design().accepts(string)


class Empty(Pattern):
    """Matches only the empty string."""

    precedence = ATOM

    def __str__(self):
        return ""


class Literal(Pattern):
    """
    Matches a single character.

    Raises:
        ValueError: If ``character`` is not exactly one character long.
    """

    precedence = ATOM

    def __init__(self, character):
        if len(character) != 1:
            raise ValueError(f"Literal takes a single character, not {character!r}")
        self.character = character

    def _fields(self):
        return (self.character,)

    def __str__(self):
        return self.character


class Concatenate(Pattern):
    """Matches ``first`` followed by ``second``."""

    precedence = CONCATENATE

    def __init__(self, first, second):
        self.first = first
        self.second = second

    def _fields(self):
        return self.first, self.second

    def __str__(self):
        return "".join(p.bracket(self.precedence) for p in (self.first, self.second))


class Choose(Pattern):
    """Matches either ``first`` or ``second``."""

    precedence = CHOOSE

    def __init__(self, first, second):
        self.first = first
        self.second = second

    def _fields(self):
        return self.first, self.second

    def __str__(self):
        return "|".join(p.bracket(self.precedence) for p in (self.first, self.second))


class Repeat(Pattern):
    """Matches zero or more repetitions of ``pattern``."""

    precedence = REPEAT

    def __init__(self, pattern):
        self.pattern = pattern

    def _fields(self):
        return (self.pattern,)

    def __str__(self):
        return self.pattern.bracket(self.precedence) + "*"
