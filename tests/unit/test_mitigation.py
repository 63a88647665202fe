"""Tests for the WAF filtering model."""

import pytest

from ddos_simulator import WAF, AttackType
from ddos_simulator.core.mitigation import MitigationResult, filter_efficiency


class TestFilterEfficiency:
    """Tests for efficiency under saturation."""

    def test_volumetric_base(self):
        assert filter_efficiency(AttackType.VOLUMETRIC, 100_000, 500_000) == pytest.approx(0.99)

    def test_application_base(self):
        assert filter_efficiency(AttackType.APPLICATION, 100_000, 500_000) == pytest.approx(0.90)

    def test_no_penalty_up_to_five_times_capacity(self):
        assert filter_efficiency(AttackType.VOLUMETRIC, 250_000, 50_000) == pytest.approx(0.99)

    def test_penalty_past_five_times_capacity(self):
        # saturation 10 -> penalty 0.1
        assert filter_efficiency(AttackType.VOLUMETRIC, 500_000, 50_000) == pytest.approx(0.89)
        assert filter_efficiency(AttackType.APPLICATION, 500_000, 50_000) == pytest.approx(0.80)

    def test_floor_at_half(self):
        assert filter_efficiency(AttackType.VOLUMETRIC, 20_000_000, 50_000) == 0.5
        assert filter_efficiency(AttackType.APPLICATION, 20_000_000, 50_000) == 0.5

    def test_non_increasing_with_attack_rate(self):
        rates = [10 ** e for e in range(3, 8)]
        effs = [filter_efficiency(AttackType.VOLUMETRIC, r, 50_000) for r in rates]
        assert all(b <= a for a, b in zip(effs, effs[1:]))


class TestWAF:
    """Tests for the WAF filter split."""

    def test_disabled_passes_everything(self):
        result = WAF().filter(120_000, AttackType.VOLUMETRIC, 50_000, enabled=False)
        assert result.allowed_rps == 120_000
        assert result.blocked_rps == 0.0
        assert result.active is False
        assert result.integrity_percent == 100

    def test_enabled_split(self):
        result = WAF().filter(100_000, AttackType.VOLUMETRIC, 500_000)
        assert result.active is True
        assert result.blocked_rps == pytest.approx(99_000)
        assert result.allowed_rps == pytest.approx(1_000)
        assert result.allowed_rps + result.blocked_rps == pytest.approx(100_000)

    def test_integrity_percent(self):
        waf = WAF()
        assert waf.filter(100_000, AttackType.VOLUMETRIC, 500_000).integrity_percent == 99
        assert waf.filter(100_000, AttackType.APPLICATION, 500_000).integrity_percent == 90
        assert waf.filter(20_000_000, AttackType.VOLUMETRIC, 50_000).integrity_percent == 50

    def test_zero_attack(self):
        result = WAF().filter(0.0, AttackType.APPLICATION, 50_000)
        assert result.allowed_rps == 0.0
        assert result.blocked_rps == 0.0

    def test_result_default_integrity(self):
        assert MitigationResult().integrity_percent == 100
