"""Tests for legitimate and attack traffic generation."""

import math

import pytest

from ddos_simulator import AttackType, CapacityTier, ControlInputs
from ddos_simulator.core.traffic import (
    TrafficGenerator,
    TrafficSnapshot,
    calculate_attack_traffic,
    calculate_legit_traffic,
    clamp_intensity,
)


class TestClampIntensity:
    """Tests for intensity clamping."""

    def test_in_range_values_unchanged(self):
        assert clamp_intensity(1) == 1
        assert clamp_intensity(50) == 50
        assert clamp_intensity(100) == 100

    def test_out_of_range_values_clamped(self):
        assert clamp_intensity(0) == 1
        assert clamp_intensity(-20) == 1
        assert clamp_intensity(101) == 100
        assert clamp_intensity(1e9) == 100

    def test_non_finite_values(self):
        assert clamp_intensity(float("nan")) == 1
        assert clamp_intensity(float("inf")) == 100
        assert clamp_intensity(float("-inf")) == 1

    def test_float_rounded_to_int(self):
        result = clamp_intensity(42.7)
        assert result == 43
        assert isinstance(result, int)


class TestAttackTraffic:
    """Tests for the logarithmic attack scale."""

    def test_lowest_intensity(self):
        # 1000 * 20000 ** 0.01
        assert calculate_attack_traffic(1) == pytest.approx(1104.1, abs=0.5)

    def test_highest_intensity_is_exact(self):
        assert calculate_attack_traffic(100) == 20_000_000

    def test_midpoint_is_geometric_mean(self):
        assert calculate_attack_traffic(50) == pytest.approx(1000 * math.sqrt(20000))

    def test_monotonic_increasing(self):
        rates = [calculate_attack_traffic(i) for i in range(1, 101)]
        assert all(b > a for a, b in zip(rates, rates[1:]))

    def test_constant_ratio_between_steps(self):
        ratio = calculate_attack_traffic(11) / calculate_attack_traffic(10)
        assert calculate_attack_traffic(81) / calculate_attack_traffic(80) == pytest.approx(ratio)

    def test_out_of_range_intensity_clamped(self):
        assert calculate_attack_traffic(0) == calculate_attack_traffic(1)
        assert calculate_attack_traffic(250) == calculate_attack_traffic(100)


class TestLegitTraffic:
    """Tests for legitimate demand."""

    def test_scales_with_capacity(self):
        assert calculate_legit_traffic(50_000, 30) == pytest.approx(9_000)
        assert calculate_legit_traffic(10_000_000, 30) == pytest.approx(1_800_000)

    def test_full_population_is_sixty_percent_of_capacity(self):
        assert calculate_legit_traffic(500_000, 100) == pytest.approx(300_000)

    def test_disabled_is_zero(self):
        assert calculate_legit_traffic(500_000, 100, enabled=False) == 0.0


class TestAttackType:
    """Tests for attack type helpers."""

    def test_resource_weight(self):
        assert AttackType.VOLUMETRIC.resource_weight == 1.0
        assert AttackType.APPLICATION.resource_weight == 4.0

    def test_parse(self):
        assert AttackType.parse("application") is AttackType.APPLICATION
        assert AttackType.parse(" Volumetric ") is AttackType.VOLUMETRIC
        assert AttackType.parse("APPLICATION") is AttackType.APPLICATION
        assert AttackType.parse(AttackType.VOLUMETRIC) is AttackType.VOLUMETRIC

    def test_parse_unknown(self):
        assert AttackType.parse("smurf") is None
        assert AttackType.parse(3) is None
        assert AttackType.parse(None) is None


class TestTrafficGenerator:
    """Tests for per-tick traffic snapshots."""

    def test_attack_disabled(self):
        inputs = ControlInputs(attack_enabled=False, legit_intensity=50)
        snapshot = TrafficGenerator().generate(inputs, 50_000)
        assert snapshot.attack_rps == 0.0
        assert snapshot.legit_rps == pytest.approx(15_000)
        assert snapshot.legit_share == 1.0

    def test_attack_ignores_capacity(self):
        inputs = ControlInputs(
            attack_enabled=True,
            attack_intensity=70,
            capacity_tier=CapacityTier.ULTRA,
        )
        generator = TrafficGenerator()
        small = generator.generate(inputs, 50_000)
        large = generator.generate(inputs, 10_000_000)
        assert small.attack_rps == large.attack_rps
        assert large.legit_rps > small.legit_rps

    def test_carries_attack_type(self):
        inputs = ControlInputs(attack_enabled=True, attack_type=AttackType.APPLICATION)
        snapshot = TrafficGenerator().generate(inputs, 50_000)
        assert snapshot.attack_type is AttackType.APPLICATION

    def test_snapshot_totals(self):
        snapshot = TrafficSnapshot(legit_rps=250.0, attack_rps=750.0)
        assert snapshot.total_rps == 1000.0
        assert snapshot.legit_share == pytest.approx(0.25)

    def test_empty_snapshot_share(self):
        assert TrafficSnapshot().legit_share == 0.0
