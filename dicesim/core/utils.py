"""
Utilities module for the simulator.

Provides the helpers shared by every distribution in the simulator: maps from
an integer outcome (damage, number of successes) to a probability or a raw
count.
"""

from __future__ import annotations

from typing import Any

from typing_extensions import TypeVar

from .constants import DamageReceiver

_K = TypeVar("_K")

# Map from an integer damage value to its probability.
DamageMap = dict[int, float]


def add_to_map_value(values: dict[_K, Any], key: _K, delta: Any) -> None:
    """
    Adds `delta` to the value stored under `key`, starting from zero.

    Args:
        values (dict): The map to update in place.
        key: The key to update.
        delta: The amount to add.

    """
    values[key] = values.get(key, 0) + delta


def normalize_map_values(values: dict[_K, Any], divisor: int | float) -> None:
    """
    Divides every value of the map in place.

    Args:
        values (dict): The map to update in place.
        divisor (int | float): The value every entry is divided by.

    """
    for key in values:
        values[key] /= divisor


def total_probability(probs: dict[int, float]) -> float:
    """Returns the total probability mass of the map."""
    return sum(probs.values(), 0.0)


def expected_value(probs: dict[int, float]) -> float:
    """
    Computes the probability-weighted mean of the keys.

    Args:
        probs (dict[int, float]): Map from outcome to probability.

    Returns:
        float: The expected outcome, 0.0 for an empty map.

    """
    return sum((key * prob for key, prob in probs.items()), 0.0)


def probability_by_receiver(dmg_probs: DamageMap) -> dict[DamageReceiver, float]:
    """
    Folds a signed damage map into the probability mass per receiver.

    Args:
        dmg_probs (DamageMap): Map from signed damage to probability.

    Returns:
        dict[DamageReceiver, float]: Mass of every receiver, zero included.

    """
    by_receiver = {receiver: 0.0 for receiver in DamageReceiver}
    for damage, prob in dmg_probs.items():
        add_to_map_value(by_receiver, DamageReceiver.from_damage(damage), prob)
    return by_receiver
