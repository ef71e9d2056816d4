"""
Damage module for the simulator.

Turns the success distributions of an attacker and a defender into the
distribution of the damage dealt, applying shields, armor and toxic damage.

Keys of the resulting map are signed: a positive key is damage taken by the
defender, a negative key is damage taken by the attacker and zero means
nobody was hurt. The sign is the only place where the receiver is recorded.
"""

import logging
import random
from typing import Optional

from ..core.combinatorics import binomial_pmf
from ..core.constants import SINGLE_SHIELD_PROB
from ..core.error_handling import log_warning
from ..core.logging import log_debug, logger
from ..core.utils import (
    DamageMap,
    add_to_map_value,
    expected_value,
    probability_by_receiver,
    total_probability,
)
from .models import Model, Options
from .multi_round import calc_multi_round_damage
from .success_simulator import make_success_probs

# Allowed drift of the total probability mass before a warning is logged.
PROBABILITY_TOLERANCE = 1e-6


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


def combine_success_probs(
    attacker: Model,
    defender: Model,
    atk_success_probs: dict[int, float],
    def_success_probs: dict[int, float],
    attacker_can_be_damaged: bool = True,
) -> DamageMap:
    """
    Combines two success distributions into a single round damage distribution.

    For every pair of outcomes, the side with more successes deals the
    difference to the other. The receiver rolls its shield dice (unless the
    exchange is a tie), each success blocking one damage, then its armor,
    reduced by the giver's armor penetration, absorbs more. The giver's toxic
    damage is added last.

    Args:
        attacker (Model): The attacking model.
        defender (Model): The defending model.
        atk_success_probs (dict[int, float]): Success distribution of the attacker.
        def_success_probs (dict[int, float]): Success distribution of the defender.
        attacker_can_be_damaged (bool): When False, exchanges won by the
            defender count as ties.

    Returns:
        DamageMap: Map from signed damage to probability.

    """
    dmg_probs: DamageMap = {}

    for atk_successes, atk_prob in atk_success_probs.items():
        for def_successes, def_prob in def_success_probs.items():
            orig_dmg = atk_successes - def_successes
            if not attacker_can_be_damaged:
                orig_dmg = max(0, orig_dmg)

            if orig_dmg >= 0:
                dmg_giver, dmg_receiver = attacker, defender
            else:
                dmg_giver, dmg_receiver = defender, attacker
            net_armor = max(0, dmg_receiver.armor - dmg_giver.ap)
            # Nothing to block on a tie.
            num_shield_dice = 0 if orig_dmg == 0 else dmg_receiver.num_shield_dice
            atk_and_def_prob = atk_prob * def_prob

            for shield_successes in range(num_shield_dice + 1):
                if num_shield_dice == 0:
                    shield_prob = 1.0
                else:
                    shield_prob = binomial_pmf(
                        num_shield_dice, shield_successes, SINGLE_SHIELD_PROB
                    )
                post_shield_dmg = max(0, abs(orig_dmg) - shield_successes)
                post_armor_dmg = max(0, post_shield_dmg - net_armor)
                post_toxic_dmg = post_armor_dmg + dmg_giver.toxic_dmg
                add_to_map_value(
                    dmg_probs,
                    _sign(orig_dmg) * post_toxic_dmg,
                    atk_and_def_prob * shield_prob,
                )

    return dmg_probs


def calc_dmg_probs(
    attacker: Model,
    defender: Model,
    options: Optional[Options] = None,
    rng: Optional[random.Random] = None,
) -> DamageMap:
    """
    Computes the distribution of the damage dealt between two models.

    Args:
        attacker (Model): The attacking model.
        defender (Model): The defending model.
        options (Optional[Options]): Computation options. Defaults to Options().
        rng (Optional[random.Random]): The random source. Defaults to one
            seeded with `options.seed`.

    Returns:
        DamageMap: Map from signed damage, summed over all rounds, to probability.

    """
    options = options or Options()
    if rng is None:
        rng = random.Random(options.seed)

    atk_success_probs = make_success_probs(attacker, options.num_simulations, rng)
    def_success_probs = make_success_probs(defender, options.num_simulations, rng)

    dmg_probs = combine_success_probs(
        attacker,
        defender,
        atk_success_probs,
        def_success_probs,
        options.attacker_can_be_damaged,
    )

    total = total_probability(dmg_probs)
    if abs(total - 1.0) > PROBABILITY_TOLERANCE:
        log_warning(
            f"Single round damage probabilities sum to {total}, expected 1.0",
            {"outcomes": len(dmg_probs), "tolerance": PROBABILITY_TOLERANCE},
        )

    if options.num_rounds > 1:
        dmg_probs = calc_multi_round_damage(dmg_probs, options.num_rounds)

    if logger.isEnabledFor(logging.DEBUG):
        log_debug(
            "Computed damage distribution",
            {
                "num_rounds": options.num_rounds,
                "outcomes": len(dmg_probs),
                "mean_damage": round(expected_value(dmg_probs), 4),
                **{
                    str(receiver).lower(): round(prob, 4)
                    for receiver, prob in probability_by_receiver(dmg_probs).items()
                },
            },
        )
    return dmg_probs
