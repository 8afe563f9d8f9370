"""
Availability policies.

An availability function answers "can this version supply `count` copies?".
Policies are stateless: a supply is fixed at construction and never
decremented, so one policy can be reused across candidates and cards.
"""

from collections.abc import Callable, Mapping
from typing import TypeVar

T = TypeVar("T")

Availability = Callable[[T, int], bool]


def unlimited_availability() -> Availability[object]:
    """Every version can supply any count."""

    def check(_value: object, _count: int) -> bool:
        return True

    return check


def unlimited_availability_if(predicate: Callable[[T], bool]) -> Availability[T]:
    """Versions matching the predicate supply any count; others supply none."""
    if predicate is None:
        raise TypeError("predicate must not be None")

    def check(value: T, _count: int) -> bool:
        return predicate(value)

    return check


def from_multiset(supply: Mapping[T, int]) -> Availability[T]:
    """
    Versions are available up to their count in a fixed supply.

    Args:
        supply: Version -> copies owned (e.g., a Counter of a collection)
    """
    if supply is None:
        raise TypeError("supply must not be None")

    def check(value: T, count: int) -> bool:
        return supply.get(value, 0) >= count

    return check


def from_count(count_function: Callable[[T], int]) -> Availability[T]:
    """Versions are available up to the count reported by a lookup."""
    if count_function is None:
        raise TypeError("count_function must not be None")

    def check(value: T, count: int) -> bool:
        return count_function(value) >= count

    return check
