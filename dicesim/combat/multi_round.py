"""
Multi-round damage module for the simulator.

Extends a single round damage distribution to several independent rounds.
"""

from ..core.error_handling import require_int_in_range
from ..core.logging import log_debug
from ..core.utils import DamageMap, add_to_map_value


def calc_multi_round_damage(
    single_round_dmg_probs: DamageMap, num_rounds: int
) -> DamageMap:
    """
    Computes the distribution of the total damage over `num_rounds` rounds.

    Rounds are independent and identically distributed, so the result is the
    `num_rounds`-fold convolution of the single round distribution with
    itself. Two maps are swapped between rounds instead of allocating a new
    one every time.

    Args:
        single_round_dmg_probs (DamageMap): Damage distribution of one round.
        num_rounds (int): Number of rounds, at least 1.

    Returns:
        DamageMap: Distribution of the damage summed over all rounds.

    """
    require_int_in_range(num_rounds, "num_rounds", 1)

    latest_round_dmg_probs: DamageMap = dict(single_round_dmg_probs)
    prev_round_dmg_probs: DamageMap = {}

    for _ in range(2, num_rounds + 1):
        prev_round_dmg_probs, latest_round_dmg_probs = (
            latest_round_dmg_probs,
            prev_round_dmg_probs,
        )
        latest_round_dmg_probs.clear()

        for prev_rounds_dmg, prev_rounds_prob in prev_round_dmg_probs.items():
            for single_round_dmg, single_round_prob in single_round_dmg_probs.items():
                add_to_map_value(
                    latest_round_dmg_probs,
                    prev_rounds_dmg + single_round_dmg,
                    prev_rounds_prob * single_round_prob,
                )

    log_debug(
        "Convolved damage over rounds",
        {"num_rounds": num_rounds, "outcomes": len(latest_round_dmg_probs)},
    )
    return latest_round_dmg_probs
