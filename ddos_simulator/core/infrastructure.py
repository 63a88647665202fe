"""
Origin Server Infrastructure Module

This module models the defended origin: the provisioned capacity tiers,
the server's smoothed health/latency state and the equilibrium targets
that state is pulled toward every tick.
"""

from dataclasses import dataclass, replace
from typing import Dict, Mapping, Optional
from enum import Enum


class CapacityTier(Enum):
    """Provisioned infrastructure scale"""
    OFF = "off"              # Single optimized NGINX/Apache server
    STANDARD = "standard"    # Enterprise load balancer / small cluster
    ULTRA = "ultra"          # Global anycast edge network

    @property
    def label(self) -> str:
        return _TIER_LABELS[self][0]

    @property
    def description(self) -> str:
        return _TIER_LABELS[self][1]

    @classmethod
    def parse(cls, value) -> Optional["CapacityTier"]:
        """Resolve a tier from an enum member or its string value, None if unknown"""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().lower()
            for tier in cls:
                if tier.value == key or tier.name.lower() == key:
                    return tier
        return None


_TIER_LABELS = {
    CapacityTier.OFF: ("Single VPS", "Single optimized NGINX/Apache server"),
    CapacityTier.STANDARD: ("Cluster", "Enterprise load balancer / small cluster"),
    CapacityTier.ULTRA: ("Edge Net", "Global anycast edge network"),
}

# Sustainable throughput per tier (requests/s)
DEFAULT_CAPACITIES: Dict[CapacityTier, float] = {
    CapacityTier.OFF: 50_000.0,
    CapacityTier.STANDARD: 500_000.0,
    CapacityTier.ULTRA: 10_000_000.0,
}

BASELINE_LATENCY_MS = 24.0
MAX_LATENCY_MS = 9999.0
LATENCY_KNEE = 0.8


class ServerStatus(Enum):
    """Externally visible server status"""
    ONLINE = "ONLINE"
    DEGRADED = "DEGRADED"
    CRITICAL = "CRITICAL"
    OFFLINE = "OFFLINE"


# Status thresholds
OFFLINE_HEALTH = 5.0
CRITICAL_HEALTH = 60.0
DEGRADED_LATENCY_MS = 500.0


@dataclass
class SimulationState:
    """
    Smoothed origin state carried between ticks

    Attributes:
        health: Share of demand being served (0-100)
        latency_ms: Response latency in milliseconds
    """
    health: float = 100.0
    latency_ms: float = BASELINE_LATENCY_MS

    def copy(self) -> "SimulationState":
        return replace(self)


def resolve_capacity(
    tier: CapacityTier,
    capacities: Optional[Mapping[CapacityTier, float]] = None
) -> float:
    """
    Look up the capacity of a tier

    Args:
        tier: Capacity tier
        capacities: Capacity table (default: DEFAULT_CAPACITIES)

    Returns:
        Capacity in requests per second

    Raises:
        ValueError: If the tier has no entry or a non-positive capacity
    """
    table = DEFAULT_CAPACITIES if capacities is None else capacities
    capacity = table.get(tier)
    if capacity is None:
        raise ValueError(f"No capacity configured for tier '{tier.value}'")
    if not capacity > 0:
        raise ValueError(
            f"Capacity for tier '{tier.value}' must be positive, got {capacity}"
        )
    return float(capacity)


def target_availability(load_ratio: float) -> float:
    """
    Availability the server settles at for a given load ratio

    Full service up to capacity; past it the server sheds load
    proportionally and serves capacity / demand of requests.
    """
    if load_ratio > 1.0:
        return (1.0 / load_ratio) * 100.0
    return 100.0


def target_latency(
    load_ratio: float,
    baseline_ms: float = BASELINE_LATENCY_MS,
    knee: float = LATENCY_KNEE,
    max_ms: float = MAX_LATENCY_MS
) -> float:
    """
    Latency the server settles at for a given load ratio

    Flat at the baseline until the knee, then grows with the 2.5th power
    of the congestion past the knee.

    Args:
        load_ratio: Weighted demand / capacity
        baseline_ms: Idle latency
        knee: Utilization where queuing delay starts to build
        max_ms: Latency ceiling

    Returns:
        Target latency in milliseconds
    """
    latency = baseline_ms
    if load_ratio > knee:
        congestion = max(0.0, load_ratio - knee)
        latency = baseline_ms + ((congestion * 10.0) ** 2.5) * 10.0
    return min(max_ms, latency)


def derive_status(health: float, latency_ms: float) -> ServerStatus:
    """Map the current health and latency to a status (no memory of prior status)"""
    if health < OFFLINE_HEALTH:
        return ServerStatus.OFFLINE
    if health < CRITICAL_HEALTH:
        return ServerStatus.CRITICAL
    if latency_ms > DEGRADED_LATENCY_MS:
        return ServerStatus.DEGRADED
    return ServerStatus.ONLINE
