"""
Mitigation Module

Models the WAF / scrubbing layer in front of the origin. Filtering
efficiency depends on how recognizable the attack vector is and
degrades, without collapsing, once the attack dwarfs the origin.
"""

import math
from dataclasses import dataclass
from typing import Dict

from .traffic import AttackType


BASE_FILTER_EFFICIENCY: Dict[AttackType, float] = {
    AttackType.VOLUMETRIC: 0.99,    # Easy to signature / rate-limit
    AttackType.APPLICATION: 0.90,   # Mimics legitimate requests
}

SATURATION_THRESHOLD = 5.0
SATURATION_PENALTY = 0.02
MIN_FILTER_EFFICIENCY = 0.5


@dataclass
class MitigationResult:
    """
    Outcome of passing attack traffic through the WAF

    Attributes:
        attack_rps: Raw attack rate offered to the WAF
        allowed_rps: Attack rate reaching the origin
        blocked_rps: Attack rate filtered out
        efficiency: Filtering efficiency (1.0 when inactive)
        active: Whether mitigation was enabled
    """
    attack_rps: float = 0.0
    allowed_rps: float = 0.0
    blocked_rps: float = 0.0
    efficiency: float = 1.0
    active: bool = False

    @property
    def integrity_percent(self) -> int:
        return int(math.floor(self.efficiency * 100))


def filter_efficiency(attack_type: AttackType, attack_rps: float, capacity: float) -> float:
    """
    WAF efficiency under the current attack

    Args:
        attack_type: Attack vector
        attack_rps: Raw attack rate
        capacity: Origin capacity (requests/s)

    Returns:
        Fraction of attack traffic blocked, never below 0.5
    """
    base = BASE_FILTER_EFFICIENCY[attack_type]
    saturation_ratio = attack_rps / capacity
    penalty = max(0.0, (saturation_ratio - SATURATION_THRESHOLD) * SATURATION_PENALTY)
    return max(MIN_FILTER_EFFICIENCY, base - penalty)


class WAF:
    """Web application firewall / scrubbing center"""

    def filter(
        self,
        attack_rps: float,
        attack_type: AttackType,
        capacity: float,
        enabled: bool = True
    ) -> MitigationResult:
        """
        Split attack traffic into blocked and allowed parts

        Args:
            attack_rps: Raw attack rate
            attack_type: Attack vector
            capacity: Origin capacity (requests/s)
            enabled: Whether mitigation is switched on

        Returns:
            Mitigation result
        """
        if not enabled:
            return MitigationResult(
                attack_rps=attack_rps,
                allowed_rps=attack_rps,
                blocked_rps=0.0,
                efficiency=1.0,
                active=False
            )

        efficiency = filter_efficiency(attack_type, attack_rps, capacity)
        blocked = attack_rps * efficiency
        return MitigationResult(
            attack_rps=attack_rps,
            allowed_rps=attack_rps - blocked,
            blocked_rps=blocked,
            efficiency=efficiency,
            active=True
        )
