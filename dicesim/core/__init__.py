"""
Core system module for the dice combat simulator.

This module contains the fundamental components shared by the combat engine,
including game constants, logging and error handling, exact combinatorics and
the helpers used to build probability maps.
"""

from .combinatorics import (
    binomial_pmf,
    n_choose_k,
)
from .constants import (
    MAX_NUM_TRIALS,
    PIP_HI,
    PIP_LO,
    SINGLE_SHIELD_PROB,
    DamageReceiver,
)
from .error_handling import (
    ERROR_HANDLER,
    DiceSimError,
    ErrorSeverity,
    OutOfContractError,
)
from .logging import (
    get_logger,
    setup_logging,
)
from .utils import (
    DamageMap,
    add_to_map_value,
    expected_value,
    normalize_map_values,
    probability_by_receiver,
    total_probability,
)

__all__ = [
    # Import from combinatorics.py
    "binomial_pmf",
    "n_choose_k",
    # Import from constants.py
    "MAX_NUM_TRIALS",
    "PIP_HI",
    "PIP_LO",
    "SINGLE_SHIELD_PROB",
    "DamageReceiver",
    # Import from error_handling.py
    "ERROR_HANDLER",
    "DiceSimError",
    "ErrorSeverity",
    "OutOfContractError",
    # Import from logging.py
    "get_logger",
    "setup_logging",
    # Import from utils.py
    "DamageMap",
    "add_to_map_value",
    "expected_value",
    "normalize_map_values",
    "probability_by_receiver",
    "total_probability",
]
