"""
Constants and enumerations for the simulator.

Defines the die geometry, the shield roll probability, the limits of the
binomial lookup table and the enumeration used to tell who received damage.
"""

from enum import Enum

# Lowest and highest face of the open-ended die. Rolling PIP_HI explodes the
# die, granting another roll into the same pool.
PIP_LO = 1
PIP_HI = 8

# Probability that a single shield die blocks one point of damage (3 in 8).
SINGLE_SHIELD_PROB = 0.375

# Largest number of trials the binomial coefficient table can hold without
# overflowing a signed 64-bit product (29*28*..*16 < 2**63 < 30*29*..*16).
MAX_NUM_TRIALS = 29


class NiceEnum(Enum):
    """An enumeration that provides a nicer string representation."""

    def __str__(self) -> str:
        return self.name


class DamageReceiver(NiceEnum):
    """Defines which side of the exchange took the damage."""

    ATTACKER = "ATTACKER"
    DEFENDER = "DEFENDER"
    NOBODY = "NOBODY"

    @staticmethod
    def from_damage(damage: int) -> "DamageReceiver":
        """
        Decodes the receiver from the sign of a damage key.

        Args:
            damage (int): A key of a signed damage map.

        Returns:
            DamageReceiver: DEFENDER for positive keys, ATTACKER for negative
            keys, NOBODY for zero.

        """
        if damage > 0:
            return DamageReceiver.DEFENDER
        if damage < 0:
            return DamageReceiver.ATTACKER
        return DamageReceiver.NOBODY
