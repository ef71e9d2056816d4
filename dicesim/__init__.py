"""
Dice combat simulator.

Computes the probability distribution of the damage exchanged between an
attacker and a defender rolling open-ended dice, over one or more rounds.
"""

from .combat import (
    Model,
    Options,
    Sf,
    calc_dmg_probs,
    calc_multi_round_damage,
    combine_success_probs,
    make_success_probs,
)
from .core import (
    DamageReceiver,
    DiceSimError,
    OutOfContractError,
    add_to_map_value,
    binomial_pmf,
    expected_value,
    n_choose_k,
    normalize_map_values,
    probability_by_receiver,
    setup_logging,
    total_probability,
)

__version__ = "0.1.0"

__all__ = [
    "Model",
    "Options",
    "Sf",
    "calc_dmg_probs",
    "calc_multi_round_damage",
    "combine_success_probs",
    "make_success_probs",
    "DamageReceiver",
    "DiceSimError",
    "OutOfContractError",
    "add_to_map_value",
    "binomial_pmf",
    "expected_value",
    "n_choose_k",
    "normalize_map_values",
    "probability_by_receiver",
    "setup_logging",
    "total_probability",
    "__version__",
]
