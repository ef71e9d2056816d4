"""
Combat system module for the dice combat simulator.

This module handles the combat mechanics: the combatant models, the
Monte-Carlo success simulator, the damage rules and the multi-round
convolution.
"""

from .damage import calc_dmg_probs, combine_success_probs
from .models import Model, Options
from .multi_round import calc_multi_round_damage
from .success_simulator import (
    Sf,
    make_success_probs,
    simulated_num_successes_from_multi_roll,
    simulated_sf_from_single_roll,
)

__all__ = [
    "calc_dmg_probs",
    "combine_success_probs",
    "Model",
    "Options",
    "calc_multi_round_damage",
    "Sf",
    "make_success_probs",
    "simulated_num_successes_from_multi_roll",
    "simulated_sf_from_single_roll",
]
