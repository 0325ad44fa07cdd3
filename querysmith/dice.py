"""Dice rolls and random choice used to drive query generation."""

from __future__ import annotations

import random
from collections.abc import Sequence
from typing import TypeVar

T = TypeVar("T")


def _roll(sides: int) -> int:
    return random.randrange(sides) + 1


def d6() -> int:
    """Roll a six-sided die."""
    return _roll(6)


def d9() -> int:
    """Roll a nine-sided die."""
    return _roll(9)


def d12() -> int:
    """Roll a twelve-sided die."""
    return _roll(12)


def d20() -> int:
    """Roll a twenty-sided die."""
    return _roll(20)


def d42() -> int:
    """Roll a forty-two-sided die."""
    return _roll(42)


def d100() -> int:
    """Roll a hundred-sided die."""
    return _roll(100)


def random_pick(items: Sequence[T]) -> T:
    """Return a uniformly chosen element of ``items``.

    Raises IndexError when ``items`` is empty.
    """
    if not items:
        raise IndexError("no items to pick from")
    return items[random.randrange(len(items))]