"""
Combatant and option models for the simulator.

Both models are immutable for the duration of a computation; pydantic rejects
out-of-range values when they are built.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from ..core.constants import PIP_HI


class Model(BaseModel):
    """One side of the exchange, described by its dice and its defences."""

    model_config = ConfigDict(frozen=True)

    num_dice: int = Field(
        ge=0,
        description="Number of dice rolled per attack.",
    )
    dice_stat: int = Field(
        ge=1,
        le=PIP_HI + 1,
        description="Lowest face that counts as a success.",
    )
    num_rerolls: int = Field(
        0,
        ge=0,
        description="Maximum number of failed dice that may be rerolled once.",
    )
    armor: int = Field(
        0,
        ge=0,
        description="Damage reduction applied to incoming damage.",
    )
    ap: int = Field(
        0,
        ge=0,
        description="Armor penetration, subtracted from the opponent's armor.",
    )
    num_shield_dice: int = Field(
        0,
        ge=0,
        description="Dice rolled to block damage when this model is hit.",
    )
    toxic_dmg: int = Field(
        0,
        ge=0,
        description="Flat damage added after armor and shields.",
    )


class Options(BaseModel):
    """Knobs of one damage distribution computation."""

    model_config = ConfigDict(frozen=True)

    num_simulations: int = Field(
        10_000,
        ge=1,
        description="Monte-Carlo sample count per combatant.",
    )
    num_rounds: int = Field(
        1,
        ge=1,
        description="Number of independent rounds to convolve.",
    )
    attacker_can_be_damaged: bool = Field(
        True,
        description="Whether the defender can deal damage back to the attacker.",
    )
    seed: Optional[int] = Field(
        None,
        description="Seed of the random source; None draws from system entropy.",
    )
