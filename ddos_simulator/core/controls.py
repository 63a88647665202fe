"""
Control Inputs Module

The operator-facing knobs read by the engine every tick. Values coming
from a control surface are tolerated rather than rejected: intensities
are clamped and unknown enum values fall back to the most conservative
choice.
"""

import warnings
from dataclasses import dataclass, replace

from .infrastructure import CapacityTier
from .traffic import AttackType, clamp_intensity


@dataclass
class ControlInputs:
    """
    Simulation controls

    Attributes:
        attack_enabled: Attacker is sending traffic
        attack_intensity: Botnet size slider (1-100)
        attack_type: Attack vector
        legit_enabled: Real users are sending traffic
        legit_intensity: User population slider (1-100)
        mitigation_enabled: WAF / scrubbing layer is on
        capacity_tier: Provisioned infrastructure scale
    """
    attack_enabled: bool = False
    attack_intensity: int = 50
    attack_type: AttackType = AttackType.VOLUMETRIC
    legit_enabled: bool = True
    legit_intensity: int = 30
    mitigation_enabled: bool = False
    capacity_tier: CapacityTier = CapacityTier.OFF

    def copy(self) -> "ControlInputs":
        return replace(self)

    def normalized(self) -> "ControlInputs":
        """
        Return a copy with every field coerced into its valid domain

        Issues a UserWarning for each value that had to be changed.
        """
        attack_intensity = clamp_intensity(self.attack_intensity)
        if attack_intensity != self.attack_intensity:
            warnings.warn(
                f"attack_intensity {self.attack_intensity!r} clamped to {attack_intensity}",
                UserWarning
            )

        legit_intensity = clamp_intensity(self.legit_intensity)
        if legit_intensity != self.legit_intensity:
            warnings.warn(
                f"legit_intensity {self.legit_intensity!r} clamped to {legit_intensity}",
                UserWarning
            )

        attack_type = AttackType.parse(self.attack_type)
        if attack_type is None:
            warnings.warn(
                f"Unknown attack type {self.attack_type!r}, falling back to volumetric",
                UserWarning
            )
            attack_type = AttackType.VOLUMETRIC

        capacity_tier = CapacityTier.parse(self.capacity_tier)
        if capacity_tier is None:
            warnings.warn(
                f"Unknown capacity tier {self.capacity_tier!r}, falling back to off",
                UserWarning
            )
            capacity_tier = CapacityTier.OFF

        return ControlInputs(
            attack_enabled=bool(self.attack_enabled),
            attack_intensity=attack_intensity,
            attack_type=attack_type,
            legit_enabled=bool(self.legit_enabled),
            legit_intensity=legit_intensity,
            mitigation_enabled=bool(self.mitigation_enabled),
            capacity_tier=capacity_tier
        )
