"""
Success simulator for the simulator.

Estimates, by Monte-Carlo sampling, how many successes a pool of open-ended
dice produces once explosions and rerolls are taken into account. Rerolls and
explosions interact in ways that make a closed form impractical, so this is
the only source of statistical error in the whole computation.
"""

import random
from dataclasses import dataclass
from typing import Optional

from ..core.constants import PIP_HI, PIP_LO
from ..core.error_handling import require_int_in_range
from ..core.logging import log_debug
from ..core.utils import add_to_map_value, normalize_map_values
from .models import Model


@dataclass
class Sf:
    """Successes and failures tallied while rolling one pool."""

    s: int = 0
    f: int = 0

    def add(self, other: "Sf") -> None:
        self.s += other.s
        self.f += other.f


def simulated_sf_from_single_roll(
    dice_stat: int,
    rng: random.Random,
    die_low: int = PIP_LO,
    die_high: int = PIP_HI,
) -> Sf:
    """
    Rolls a single open-ended die.

    Every face at or above `dice_stat` is a success, anything else a failure.
    Rolling `die_high` explodes the die: it is rolled again and the new result
    goes into the same tally, until a lower face comes up.

    Args:
        dice_stat (int): Lowest face that counts as a success.
        rng (random.Random): The random source.
        die_low (int): Lowest face of the die.
        die_high (int): Highest face of the die, the one that explodes.

    Returns:
        Sf: The successes and failures of this die and its explosions.

    Raises:
        OutOfContractError: If `die_high` is not above `die_low`.

    """
    # A die without a face below the top one would explode forever.
    require_int_in_range(die_high, "die_high", die_low + 1, context={"die_low": die_low})
    sf = Sf()
    while True:
        pip_outcome = rng.randint(die_low, die_high)
        if pip_outcome >= dice_stat:
            sf.s += 1
        else:
            sf.f += 1
        if pip_outcome != die_high:
            return sf


def simulated_num_successes_from_multi_roll(
    num_dice: int,
    dice_stat: int,
    num_rerolls: int,
    rng: random.Random,
) -> int:
    """
    Rolls a pool of dice, then rerolls up to `num_rerolls` of its failures.

    Rerolled dice can explode but are never rerolled again.

    Args:
        num_dice (int): Size of the pool.
        dice_stat (int): Lowest face that counts as a success.
        num_rerolls (int): Maximum number of failures to reroll.
        rng (random.Random): The random source.

    Returns:
        int: Successes of the original and rerolled dice.

    """
    sf = Sf()
    for _ in range(num_dice):
        sf.add(simulated_sf_from_single_roll(dice_stat, rng))

    num_rerolled_successes = 0
    if num_rerolls > 0:
        num_rerolled_successes = simulated_num_successes_from_multi_roll(
            min(num_rerolls, sf.f), dice_stat, 0, rng
        )
    return sf.s + num_rerolled_successes


def make_success_probs(
    model: Model,
    num_simulations: int,
    rng: Optional[random.Random] = None,
) -> dict[int, float]:
    """
    Estimates the distribution of the number of successes of a model.

    Args:
        model (Model): The rolling model.
        num_simulations (int): Number of simulated pools.
        rng (Optional[random.Random]): The random source. Defaults to an
            unseeded one.

    Returns:
        dict[int, float]: Map from number of successes to its frequency.

    """
    if rng is None:
        rng = random.Random()
    success_counts: dict[int, float] = {}
    for _ in range(num_simulations):
        num_successes = simulated_num_successes_from_multi_roll(
            model.num_dice,
            model.dice_stat,
            model.num_rerolls,
            rng,
        )
        add_to_map_value(success_counts, num_successes, 1)

    normalize_map_values(success_counts, num_simulations)
    log_debug(
        "Simulated success distribution",
        {
            "num_dice": model.num_dice,
            "dice_stat": model.dice_stat,
            "num_rerolls": model.num_rerolls,
            "num_simulations": num_simulations,
            "outcomes": len(success_counts),
        },
    )
    return success_counts
