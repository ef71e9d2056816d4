"""
Combinatorics module for the simulator.

Provides the exact binomial coefficient, memoized in a process-wide lookup
table, and the binomial probability mass function built on top of it.
"""

import threading

from .constants import MAX_NUM_TRIALS
from .error_handling import require_int_in_range, require_probability

# Indexed [n - 1][k]. Zero marks an entry that has not been computed yet,
# which is safe because C(n, k) >= 1 for every in-contract (n, k).
_LOOKUP_TABLE: list[list[int]] = [
    [0] * (MAX_NUM_TRIALS + 1) for _ in range(MAX_NUM_TRIALS)
]
_LOOKUP_LOCK = threading.Lock()


def n_choose_k(n: int, k: int) -> int:
    """
    Computes the binomial coefficient C(n, k).

    With s = min(k, n - k) this does 2*s - 1 multiplications and a single
    exact division: the product of any s consecutive integers is divisible
    by s!.

    Args:
        n (int): Number of trials, between 1 and MAX_NUM_TRIALS.
        k (int): Number of successes, between 0 and n.

    Returns:
        int: The binomial coefficient.

    Raises:
        OutOfContractError: If n or k is out of range.

    """
    require_int_in_range(n, "n", 1, MAX_NUM_TRIALS)
    require_int_in_range(k, "k", 0, n, {"n": n})

    with _LOOKUP_LOCK:
        cached = _LOOKUP_TABLE[n - 1][k]
    if cached != 0:
        return cached

    n_minus_k = n - k
    smaller_divisor, bigger_divisor = (k, n_minus_k) if k < n_minus_k else (n_minus_k, k)

    numerator = 1
    for numerator_factor in range(bigger_divisor + 1, n + 1):
        numerator *= numerator_factor

    denominator = 1
    for denominator_factor in range(2, smaller_divisor + 1):
        denominator *= denominator_factor

    result = numerator // denominator
    with _LOOKUP_LOCK:
        _LOOKUP_TABLE[n - 1][k] = result
    return result


def binomial_pmf(num_trials: int, num_successes: int, prob_success: float) -> float:
    """
    Probability of exactly `num_successes` successes in `num_trials` trials.

    Args:
        num_trials (int): Number of independent trials.
        num_successes (int): Number of successes.
        prob_success (float): Probability of success of a single trial.

    Returns:
        float: The binomial probability mass.

    """
    require_probability(prob_success, "prob_success")
    return (
        n_choose_k(num_trials, num_successes)
        * prob_success**num_successes
        * (1.0 - prob_success) ** (num_trials - num_successes)
    )
