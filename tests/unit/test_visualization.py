"""Tests for plotting helpers."""

import matplotlib.pyplot as plt
import pytest

from ddos_simulator import (
    AttackType,
    CapacityTier,
    EngineConfig,
    plot_attack_traffic_curve,
    plot_equilibrium_curves,
    plot_intensity_sweep,
    save_all_plots,
    sweep_attack_intensity,
)


@pytest.fixture
def small_sweep():
    return sweep_attack_intensity(
        intensities=[20, 60, 100],
        tiers=[CapacityTier.OFF, CapacityTier.STANDARD],
        attack_types=[AttackType.APPLICATION],
        num_ticks=30,
    )


class TestVisualization:
    """Tests for the model plots and save_all_plots()."""

    def test_attack_traffic_curve(self):
        fig = plot_attack_traffic_curve()
        assert isinstance(fig, plt.Figure)
        ax = fig.axes[0]
        assert ax.get_yscale() == "log"
        # One curve + one reference line per tier
        assert len(ax.lines) == 1 + len(CapacityTier)
        plt.close(fig)

    def test_attack_traffic_curve_without_capacities(self):
        fig = plot_attack_traffic_curve(show_capacities=False)
        assert len(fig.axes[0].lines) == 1
        plt.close(fig)

    def test_equilibrium_curves(self):
        fig = plot_equilibrium_curves(EngineConfig(latency_knee=0.7))
        assert len(fig.axes) == 2
        plt.close(fig)

    def test_intensity_sweep(self, small_sweep):
        fig = plot_intensity_sweep(small_sweep)
        # One line per (tier, attack type) group on each axis
        assert len(fig.axes[0].lines) == 2
        assert len(fig.axes[1].lines) == 2
        plt.close(fig)

    def test_save_all_plots(self, tmp_path, small_sweep, capsys):
        save_all_plots(output_dir=str(tmp_path), prefix="t", sweep=small_sweep)
        assert (tmp_path / "t_attack_traffic.png").exists()
        assert (tmp_path / "t_equilibrium.png").exists()
        assert (tmp_path / "t_sweep.png").exists()
        assert "Plots saved" in capsys.readouterr().out

    def test_save_all_plots_without_sweep(self, tmp_path):
        save_all_plots(output_dir=str(tmp_path / "out"))
        assert (tmp_path / "out" / "sim_equilibrium.png").exists()
        assert not (tmp_path / "out" / "sim_sweep.png").exists()
