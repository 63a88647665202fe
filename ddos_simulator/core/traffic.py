"""
Traffic Generation Module

This module turns the intensity controls into request rates for the two
competing traffic sources: legitimate users and the attacker's botnet.
"""

import math
from dataclasses import dataclass
from typing import Optional
from enum import Enum


class AttackType(Enum):
    """Type of DDoS attack"""
    VOLUMETRIC = "volumetric"     # L3/L4 floods (UDP, SYN)
    APPLICATION = "application"   # L7 HTTP floods

    @property
    def resource_weight(self) -> float:
        """Origin compute cost of one attack request relative to a raw packet"""
        return 4.0 if self is AttackType.APPLICATION else 1.0

    @classmethod
    def parse(cls, value) -> Optional["AttackType"]:
        """Resolve an attack type from an enum member or its string value, None if unknown"""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().lower()
            for attack_type in cls:
                if attack_type.value == key or attack_type.name.lower() == key:
                    return attack_type
        return None


MIN_INTENSITY = 1
MAX_INTENSITY = 100

# Botnet output range covered by the attack intensity slider (requests/s)
MIN_ATTACK_RPS = 1_000.0
MAX_ATTACK_RPS = 20_000_000.0

# Share of provisioned capacity that a 100% user population demands
LEGIT_CAPACITY_SHARE = 0.6


def clamp_intensity(intensity: float) -> int:
    """Clamp an intensity control value to an integer in [1, 100]"""
    value = float(intensity)
    if math.isnan(value):
        return MIN_INTENSITY
    value = max(float(MIN_INTENSITY), min(float(MAX_INTENSITY), value))
    return int(round(value))


def calculate_attack_traffic(intensity: float) -> float:
    """
    Map attack intensity onto botnet output

    The scale is logarithmic: each step of intensity multiplies the
    rate by the same factor, from 1k req/s up to 20M req/s at 100.

    Args:
        intensity: Attack intensity (clamped to 1-100)

    Returns:
        Attack rate in requests per second
    """
    intensity = clamp_intensity(intensity)
    return MIN_ATTACK_RPS * (MAX_ATTACK_RPS / MIN_ATTACK_RPS) ** (intensity / 100.0)


def calculate_legit_traffic(capacity: float, intensity: float, enabled: bool = True) -> float:
    """
    Legitimate request rate for the current capacity tier

    User demand scales with provisioned infrastructure, unlike attack
    demand which ignores the defender's scale.

    Args:
        capacity: Current capacity (requests/s)
        intensity: User population as a percentage (clamped to 1-100)
        enabled: Whether legitimate traffic is flowing

    Returns:
        Legitimate rate in requests per second
    """
    if not enabled:
        return 0.0
    return capacity * (clamp_intensity(intensity) / 100.0) * LEGIT_CAPACITY_SHARE


@dataclass
class TrafficSnapshot:
    """
    Incoming request rates for one tick

    Attributes:
        legit_rps: Legitimate request rate
        attack_rps: Raw attack request rate (before mitigation)
        attack_type: Attack vector in use
    """
    legit_rps: float = 0.0
    attack_rps: float = 0.0
    attack_type: AttackType = AttackType.VOLUMETRIC

    @property
    def total_rps(self) -> float:
        return self.legit_rps + self.attack_rps

    @property
    def legit_share(self) -> float:
        """Fraction of incoming traffic that is legitimate"""
        total = self.total_rps
        if total <= 0:
            return 0.0
        return self.legit_rps / total


class TrafficGenerator:
    """
    Traffic generator for the simulation

    Reads the current control inputs and produces the legitimate and
    attack request rates offered to the origin.
    """

    def generate(self, inputs: "ControlInputs", capacity: float) -> TrafficSnapshot:
        """
        Generate request rates for the current tick

        Args:
            inputs: Normalized control inputs
            capacity: Current capacity (requests/s)

        Returns:
            Traffic snapshot
        """
        legit_rps = calculate_legit_traffic(
            capacity, inputs.legit_intensity, inputs.legit_enabled
        )
        attack_rps = 0.0
        if inputs.attack_enabled:
            attack_rps = calculate_attack_traffic(inputs.attack_intensity)

        return TrafficSnapshot(
            legit_rps=legit_rps,
            attack_rps=attack_rps,
            attack_type=inputs.attack_type
        )
