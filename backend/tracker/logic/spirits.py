"""Order-agnostic comparison of the spirits used in a game."""

from collections.abc import Sequence

COMBO_KEY_SEPARATOR = ","


def are_spirits_same(spirits_a: Sequence[str], spirits_b: Sequence[str]) -> bool:
    """True when both lists hold the same spirits, ignoring order.

    Duplicates count literally: ["a"] and ["a", "a"] differ.
    """
    if len(spirits_a) != len(spirits_b):
        return False
    return sorted(spirits_a) == sorted(spirits_b)


def spirit_combo_key(spirits: Sequence[str]) -> str:
    """Canonical grouping key for a spirit combination."""
    return COMBO_KEY_SEPARATOR.join(sorted(spirits))
