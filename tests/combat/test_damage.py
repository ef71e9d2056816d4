"""
Tests for the damage rules and the damage distribution engine.
"""

import logging
import random

import pytest
from dicesim.combat.damage import calc_dmg_probs, combine_success_probs
from dicesim.combat.models import Model, Options
from dicesim.combat.multi_round import calc_multi_round_damage
from dicesim.core.combinatorics import binomial_pmf
from dicesim.core.constants import SINGLE_SHIELD_PROB
from dicesim.core.utils import total_probability


@pytest.fixture
def attacker():
    return Model(num_dice=4, dice_stat=5)


@pytest.fixture
def defender():
    return Model(num_dice=4, dice_stat=5)


# ---- Combination rules ----


def test_attacker_wins(attacker, defender):
    result = combine_success_probs(attacker, defender, {3: 1.0}, {1: 1.0})
    assert result == {2: 1.0}


def test_defender_wins_with_negative_key(attacker, defender):
    result = combine_success_probs(attacker, defender, {0: 1.0}, {2: 1.0})
    assert result == {-2: 1.0}


def test_tie_deals_no_damage(attacker, defender):
    result = combine_success_probs(attacker, defender, {2: 1.0}, {2: 1.0})
    assert result == {0: 1.0}


def test_joint_probabilities_multiply(attacker, defender):
    result = combine_success_probs(
        attacker, defender, {1: 0.5, 2: 0.5}, {0: 0.25, 1: 0.75}
    )
    assert result == pytest.approx({1: 0.125 + 0.375, 2: 0.125, 0: 0.375})


def test_armor_reduces_damage():
    attacker = Model(num_dice=4, dice_stat=5)
    defender = Model(num_dice=4, dice_stat=5, armor=1)
    assert combine_success_probs(attacker, defender, {3: 1.0}, {0: 1.0}) == {2: 1.0}


def test_armor_cannot_make_damage_negative():
    attacker = Model(num_dice=4, dice_stat=5)
    defender = Model(num_dice=4, dice_stat=5, armor=5)
    assert combine_success_probs(attacker, defender, {3: 1.0}, {1: 1.0}) == {0: 1.0}


@pytest.mark.parametrize("ap, expected", [(0, 1), (1, 2), (2, 3), (4, 3)])
def test_armor_penetration_reduces_armor(ap, expected):
    attacker = Model(num_dice=4, dice_stat=5, ap=ap)
    defender = Model(num_dice=4, dice_stat=5, armor=2)
    result = combine_success_probs(attacker, defender, {3: 1.0}, {0: 1.0})
    assert result == {expected: 1.0}


def test_attacker_armor_protects_against_defender():
    attacker = Model(num_dice=4, dice_stat=5, armor=1)
    defender = Model(num_dice=4, dice_stat=5)
    assert combine_success_probs(attacker, defender, {0: 1.0}, {3: 1.0}) == {-2: 1.0}


def test_toxic_damage_is_added_after_armor():
    attacker = Model(num_dice=4, dice_stat=5, toxic_dmg=2)
    defender = Model(num_dice=4, dice_stat=5, armor=5)
    assert combine_success_probs(attacker, defender, {2: 1.0}, {0: 1.0}) == {2: 1.0}


def test_toxic_damage_of_defender_hits_attacker():
    attacker = Model(num_dice=4, dice_stat=5, toxic_dmg=4)
    defender = Model(num_dice=4, dice_stat=5, toxic_dmg=1)
    assert combine_success_probs(attacker, defender, {0: 1.0}, {2: 1.0}) == {-3: 1.0}


def test_toxic_damage_collapses_to_zero_on_tie():
    attacker = Model(num_dice=4, dice_stat=5, toxic_dmg=3)
    defender = Model(num_dice=4, dice_stat=5, toxic_dmg=3)
    assert combine_success_probs(attacker, defender, {1: 1.0}, {1: 1.0}) == {0: 1.0}


def test_shield_dice_block_damage():
    attacker = Model(num_dice=4, dice_stat=5)
    defender = Model(num_dice=4, dice_stat=5, num_shield_dice=2)
    result = combine_success_probs(attacker, defender, {3: 1.0}, {0: 1.0})
    assert result == pytest.approx(
        {
            3: binomial_pmf(2, 0, SINGLE_SHIELD_PROB),
            2: binomial_pmf(2, 1, SINGLE_SHIELD_PROB),
            1: binomial_pmf(2, 2, SINGLE_SHIELD_PROB),
        }
    )
    assert result[3] == pytest.approx(0.390625)


def test_shield_successes_beyond_damage_are_wasted():
    attacker = Model(num_dice=4, dice_stat=5)
    defender = Model(num_dice=4, dice_stat=5, num_shield_dice=2)
    result = combine_success_probs(attacker, defender, {1: 1.0}, {0: 1.0})
    assert result == pytest.approx({1: 0.390625, 0: 0.609375})


def test_shields_are_not_rolled_on_tie():
    attacker = Model(num_dice=4, dice_stat=5, num_shield_dice=3)
    defender = Model(num_dice=4, dice_stat=5, num_shield_dice=3)
    assert combine_success_probs(attacker, defender, {2: 1.0}, {2: 1.0}) == {0: 1.0}


def test_receiver_rolls_the_shields():
    """Only the side taking the damage uses its shield dice."""
    attacker = Model(num_dice=4, dice_stat=5, num_shield_dice=5)
    defender = Model(num_dice=4, dice_stat=5)
    assert combine_success_probs(attacker, defender, {2: 1.0}, {0: 1.0}) == {2: 1.0}


def test_shields_then_armor_then_toxic():
    attacker = Model(num_dice=4, dice_stat=5, ap=1, toxic_dmg=1)
    defender = Model(num_dice=4, dice_stat=5, armor=2, num_shield_dice=1)
    result = combine_success_probs(attacker, defender, {4: 1.0}, {0: 1.0})
    # No block: 4 - (2 - 1) + 1 = 4; one block: 3 - 1 + 1 = 3.
    assert result == pytest.approx({4: 0.625, 3: 0.375})


def test_attacker_cannot_be_damaged():
    attacker = Model(num_dice=4, dice_stat=5)
    defender = Model(num_dice=4, dice_stat=5, toxic_dmg=2)
    result = combine_success_probs(
        attacker,
        defender,
        {0: 0.5, 3: 0.5},
        {1: 1.0},
        attacker_can_be_damaged=False,
    )
    assert result == pytest.approx({0: 0.5, 2: 0.5})


# ---- Engine ----


def test_no_dice_means_no_damage():
    nobody = Model(num_dice=0, dice_stat=5)
    options = Options(num_simulations=50, seed=1)
    assert calc_dmg_probs(nobody, nobody, options) == {0: 1.0}


def test_damage_probabilities_sum_to_one(attacker, defender):
    options = Options(num_simulations=5_000, seed=11)
    result = calc_dmg_probs(attacker, defender, options)
    assert total_probability(result) == pytest.approx(1.0, abs=1e-9)
    assert all(prob >= 0 for prob in result.values())


def test_identical_models_are_symmetric(attacker, defender):
    options = Options(num_simulations=50_000, seed=3)
    result = calc_dmg_probs(attacker, defender, options)
    for damage in range(1, 6):
        assert result.get(damage, 0.0) == pytest.approx(
            result.get(-damage, 0.0), abs=0.02
        )


def test_seed_makes_results_reproducible(attacker, defender):
    options = Options(num_simulations=2_000, seed=42)
    assert calc_dmg_probs(attacker, defender, options) == calc_dmg_probs(
        attacker, defender, options
    )


def test_injected_rng_takes_precedence_over_seed(attacker, defender):
    first = calc_dmg_probs(
        attacker, defender, Options(num_simulations=1_000, seed=1), random.Random(5)
    )
    second = calc_dmg_probs(
        attacker, defender, Options(num_simulations=1_000, seed=2), random.Random(5)
    )
    assert first == second


def test_multiple_rounds_convolve_single_round(attacker, defender):
    single = calc_dmg_probs(
        attacker, defender, Options(num_simulations=2_000, seed=5)
    )
    triple = calc_dmg_probs(
        attacker, defender, Options(num_simulations=2_000, num_rounds=3, seed=5)
    )
    assert triple == pytest.approx(calc_multi_round_damage(single, 3))
    assert total_probability(triple) == pytest.approx(1.0, abs=1e-9)


def test_one_directional_damage_has_no_negative_keys(attacker):
    defender = Model(num_dice=6, dice_stat=3)
    options = Options(num_simulations=2_000, attacker_can_be_damaged=False, seed=8)
    result = calc_dmg_probs(attacker, defender, options)
    assert min(result) >= 0
    assert total_probability(result) == pytest.approx(1.0, abs=1e-9)


def test_stronger_attacker_deals_more_damage():
    strong = Model(num_dice=8, dice_stat=3, ap=1)
    weak = Model(num_dice=2, dice_stat=6, armor=1)
    result = calc_dmg_probs(strong, weak, Options(num_simulations=5_000, seed=13))
    positive = sum(prob for damage, prob in result.items() if damage > 0)
    negative = sum(prob for damage, prob in result.items() if damage < 0)
    assert positive > 0.9
    assert negative < 0.05


def test_engine_logs_summary(attacker, defender, caplog):
    with caplog.at_level(logging.DEBUG, logger="dicesim"):
        calc_dmg_probs(attacker, defender, Options(num_simulations=200, seed=6))
    assert "Computed damage distribution" in caplog.text
    assert "Simulated success distribution" in caplog.text


def test_engine_skips_summary_when_debug_is_off(attacker, defender, caplog, monkeypatch):
    def fail(*args, **kwargs):
        raise AssertionError("summary computed with debug logging disabled")

    monkeypatch.setattr("dicesim.combat.damage.probability_by_receiver", fail)
    monkeypatch.setattr("dicesim.combat.damage.expected_value", fail)
    with caplog.at_level(logging.INFO, logger="dicesim"):
        result = calc_dmg_probs(attacker, defender, Options(num_simulations=200, seed=6))
    assert total_probability(result) == pytest.approx(1.0, abs=1e-9)
    assert "Computed damage distribution" not in caplog.text
