"""Pytest fixtures for ddos_simulator tests."""

import matplotlib

matplotlib.use("Agg")

import pytest

from ddos_simulator import (
    AttackType,
    CapacityTier,
    ControlInputs,
    EngineConfig,
    Simulator,
)


@pytest.fixture
def idle_inputs() -> ControlInputs:
    """No traffic at all."""
    return ControlInputs(attack_enabled=False, legit_enabled=False)

@pytest.fixture
def normal_inputs() -> ControlInputs:
    """Default user traffic on a single server, no attack."""
    return ControlInputs(legit_enabled=True, legit_intensity=30)

@pytest.fixture
def max_flood_inputs() -> ControlInputs:
    """Maximum volumetric flood against an unprotected single server."""
    return ControlInputs(
        attack_enabled=True,
        attack_intensity=100,
        attack_type=AttackType.VOLUMETRIC,
        legit_enabled=True,
        legit_intensity=30,
        mitigation_enabled=False,
        capacity_tier=CapacityTier.OFF,
    )

@pytest.fixture
def simulator() -> Simulator:
    """Engine with default inputs and configuration."""
    return Simulator()

@pytest.fixture
def make_simulator():
    """Factory for engines with custom inputs/config."""

    def _make(inputs=None, **config_kwargs) -> Simulator:
        config = EngineConfig(**config_kwargs) if config_kwargs else None
        return Simulator(inputs=inputs, config=config)

    return _make
