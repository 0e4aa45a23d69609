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
Building blocks shared by the deterministic and nondeterministic automata:
the EPSILON marker, transition rules and the automaton errors.
"""


# Marker constants


class Marker:
    """
    Represents a marker object.

    Markers are used for reserved labels that must never compare equal to an
    input character, such as the EPSILON label of a free move.

    Attributes:
        name (str): The name of the marker.
        text (str): How the marker is written in diagnostics.

    Example:
        >>> marker = Marker("EPSILON", "ε")
        >>> repr(marker)
        '<EPSILON>'
        >>> str(marker)
        'ε'
    """

    def __init__(self, name, text=None):
        self.name = name
        self.text = name if text is None else text

    def __repr__(self):
        return f"<{self.name}>"

    def __str__(self):
        return self.text


EPSILON = Marker("EPSILON", "ε")


# Errors


class AutomatonError(Exception):
    """Base class for errors raised while running an automaton."""


class NoRuleError(AutomatonError):
    """
    Raised when a deterministic rulebook has no rule for a state and
    character.

    A DFA rulebook is only defined over the states and characters its rules
    cover, so reading anything else is a mistake by the caller.

    Attributes:
        state (object): The state the machine was in.
        character (str): The character that could not be read.
    """

    def __init__(self, state, character):
        self.state = state
        self.character = character
        super().__init__(
            f"no rule for {format_state(state)} -> {format_state(character)}"
        )


# Formatting


def format_state(state):
    """
    Returns the diagnostic text for a state, a macro-state or a label.

    Set-valued states are written as ``{m1, m2}`` with their members sorted,
    so equal macro-states always print the same way.

    Example:
        >>> format_state(frozenset([3, 1, 2]))
        '{1, 2, 3}'
        >>> format_state(frozenset())
        '{}'
    """
    if isinstance(state, (set, frozenset)):
        return "{" + ", ".join(format_state(m) for m in sorted_states(state)) + "}"
    return str(state)


def state_key(state):
    """
    Returns a sort key for a state.

    Sets compare by the subset relation, which is not a total order, so a
    set-valued state is keyed by the keys of its sorted members instead.
    Scalars sort before sets.
    """
    if isinstance(state, (set, frozenset)):
        return 1, tuple(state_key(m) for m in sorted_states(state))
    return 0, state


def sorted_states(states):
    """
    Returns the given states as a sorted list.

    Scalars are ordered by value and set-valued states by their sorted
    members. States of mixed types cannot be ordered that way, in which case
    they are ordered by their diagnostic text so the result is still
    reproducible.

    Example:
        >>> sorted_states([frozenset([10]), frozenset([2]), frozenset([1, 5])])
        [frozenset({1, 5}), frozenset({2}), frozenset({10})]
    """
    try:
        return sorted(states, key=state_key)
    except TypeError:
        return sorted(states, key=format_state)


def freeze(state):
    # Set-valued states must be hashable and compare by value
    if isinstance(state, set):
        return frozenset(state)
    return state


# Rules


class FARule:
    """
    A single transition of a finite automaton: in ``state``, reading
    ``character`` moves the machine to ``next_state``.

    ``character`` may be :data:`EPSILON` for a free move. States may be
    scalars or sets of states (macro-states); a mutable ``set`` is frozen on
    the way in, so two rules over equal sets are equal.

    Rules are value objects and are not changed after construction.

    Example:
        >>> rule = FARule(1, "a", 2)
        >>> rule.applies_to(1, "a")
        True
        >>> rule.follow()
        2
        >>> str(rule)
        '1 -> a -> 2'
    """

    __slots__ = ("state", "character", "next_state")

    def __init__(self, state, character, next_state):
        self.state = freeze(state)
        self.character = character
        self.next_state = freeze(next_state)

    def applies_to(self, state, character):
        """
        Returns True if this rule is for the given state and character.

        Args:
            state (object): The current state, scalar or set-valued.
            character (str): The character being read, or EPSILON.

        Returns:
            bool: True if both fields are equal to this rule's.
        """
        return self.state == freeze(state) and self.character == character

    def follow(self):
        """Returns the state this rule moves to."""
        return self.next_state

    def key(self):
        return self.state, self.character

    def __eq__(self, other):
        return (
            self.__class__ is other.__class__
            and self.state == other.state
            and self.character == other.character
            and self.next_state == other.next_state
        )

    def __ne__(self, other):
        return not self.__eq__(other)

    def __hash__(self):
        return hash((self.state, self.character, self.next_state))

    def __repr__(self):
        return (
            f"{self.__class__.__name__}"
            f"({self.state!r}, {self.character!r}, {self.next_state!r})"
        )

    def __str__(self):
        return (
            f"{format_state(self.state)} -> {format_state(self.character)} -> "
            f"{format_state(self.next_state)}"
        )
