"""
Visualization Module

Provides functions for plotting the simulation model: the attack
traffic scale, the equilibrium curves the server converges to, and
steady-state sweeps over attack intensity.
"""

import os
from typing import Optional, Tuple

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd

from .infrastructure import (
    DEFAULT_CAPACITIES,
    CRITICAL_HEALTH,
    DEGRADED_LATENCY_MS,
    OFFLINE_HEALTH,
    target_availability,
    target_latency
)
from .simulator import EngineConfig
from .traffic import calculate_attack_traffic


def plot_attack_traffic_curve(
    figsize: Tuple[int, int] = (10, 6),
    show_capacities: bool = True,
    title: str = "Attack Traffic vs Intensity"
) -> plt.Figure:
    """
    Plot botnet output over the intensity range (log scale)

    Args:
        figsize: Figure size
        show_capacities: Draw the capacity of each tier as a reference line
        title: Plot title

    Returns:
        Matplotlib figure
    """
    intensities = np.arange(1, 101)
    rates = [calculate_attack_traffic(i) for i in intensities]

    fig, ax = plt.subplots(figsize=figsize)
    ax.plot(intensities, rates, 'r-', linewidth=2, label="Attack RPS")

    if show_capacities:
        colors = plt.cm.Set2(np.linspace(0, 1, len(DEFAULT_CAPACITIES)))
        for (tier, capacity), color in zip(DEFAULT_CAPACITIES.items(), colors):
            ax.axhline(capacity, color=color, linestyle='--', linewidth=1.5,
                       label=f"{tier.label} capacity")

    ax.set_yscale('log')
    ax.set_xlabel("Attack Intensity")
    ax.set_ylabel("Requests / s")
    ax.set_title(title)
    ax.grid(True, alpha=0.3, which='both')
    ax.legend()

    plt.tight_layout()
    return fig


def plot_equilibrium_curves(
    config: Optional[EngineConfig] = None,
    max_load_ratio: float = 3.0,
    figsize: Tuple[int, int] = (14, 5),
    title: str = "Equilibrium Targets vs Load"
) -> plt.Figure:
    """
    Plot target availability and target latency against load ratio

    Args:
        config: Engine parameters (default: EngineConfig())
        max_load_ratio: Right edge of the x axis
        figsize: Figure size
        title: Plot title

    Returns:
        Matplotlib figure
    """
    cfg = config if config is not None else EngineConfig()
    ratios = np.linspace(0.0, max_load_ratio, 301)
    availability = [target_availability(r) for r in ratios]
    latency = [
        target_latency(r, cfg.baseline_latency_ms, cfg.latency_knee, cfg.max_latency_ms)
        for r in ratios
    ]

    fig, axes = plt.subplots(1, 2, figsize=figsize)

    ax = axes[0]
    ax.plot(ratios * 100, availability, 'g-', linewidth=2)
    ax.axhline(CRITICAL_HEALTH, color='orange', linestyle='--', linewidth=1, label="CRITICAL")
    ax.axhline(OFFLINE_HEALTH, color='red', linestyle='--', linewidth=1, label="OFFLINE")
    ax.set_xlabel("Load (%)")
    ax.set_ylabel("Availability (%)")
    ax.set_title("Target Availability")
    ax.grid(True, alpha=0.3)
    ax.legend()

    ax = axes[1]
    ax.plot(ratios * 100, latency, 'b-', linewidth=2)
    ax.axhline(DEGRADED_LATENCY_MS, color='gold', linestyle='--', linewidth=1, label="DEGRADED")
    ax.axvline(cfg.latency_knee * 100, color='gray', linestyle=':', linewidth=1, label="Knee")
    ax.set_yscale('log')
    ax.set_xlabel("Load (%)")
    ax.set_ylabel("Latency (ms)")
    ax.set_title("Target Latency")
    ax.grid(True, alpha=0.3, which='both')
    ax.legend()

    fig.suptitle(title, fontsize=14, fontweight='bold')
    plt.tight_layout()
    return fig


def plot_intensity_sweep(
    sweep: pd.DataFrame,
    figsize: Tuple[int, int] = (14, 5),
    title: str = "Steady State vs Attack Intensity"
) -> plt.Figure:
    """
    Plot steady-state health and latency from sweep_attack_intensity()

    One line per (capacity tier, attack type) group.

    Args:
        sweep: DataFrame returned by sweep_attack_intensity()
        figsize: Figure size
        title: Plot title

    Returns:
        Matplotlib figure
    """
    fig, axes = plt.subplots(1, 2, figsize=figsize)

    for (tier, attack_type), group in sweep.groupby(["capacity_tier", "attack_type"]):
        group = group.sort_values("attack_intensity")
        label = f"{tier} / {attack_type}"
        axes[0].plot(group["attack_intensity"], group["health"], marker='o',
                     markersize=3, label=label)
        axes[1].plot(group["attack_intensity"], group["latency_ms"], marker='o',
                     markersize=3, label=label)

    axes[0].set_xlabel("Attack Intensity")
    axes[0].set_ylabel("Availability (%)")
    axes[0].set_title("Availability")
    axes[0].grid(True, alpha=0.3)
    axes[0].legend()

    axes[1].set_yscale('log')
    axes[1].set_xlabel("Attack Intensity")
    axes[1].set_ylabel("Latency (ms)")
    axes[1].set_title("Latency")
    axes[1].grid(True, alpha=0.3, which='both')
    axes[1].legend()

    fig.suptitle(title, fontsize=14, fontweight='bold')
    plt.tight_layout()
    return fig


def save_all_plots(
    output_dir: str = ".",
    prefix: str = "sim",
    sweep: Optional[pd.DataFrame] = None,
    config: Optional[EngineConfig] = None
):
    """
    Save all standard plots to files

    Args:
        output_dir: Output directory
        prefix: Filename prefix
        sweep: Optional sweep DataFrame to plot as well
        config: Engine parameters
    """
    os.makedirs(output_dir, exist_ok=True)

    fig = plot_attack_traffic_curve()
    fig.savefig(os.path.join(output_dir, f"{prefix}_attack_traffic.png"), dpi=150)
    plt.close(fig)

    fig = plot_equilibrium_curves(config)
    fig.savefig(os.path.join(output_dir, f"{prefix}_equilibrium.png"), dpi=150)
    plt.close(fig)

    if sweep is not None and not sweep.empty:
        fig = plot_intensity_sweep(sweep)
        fig.savefig(os.path.join(output_dir, f"{prefix}_sweep.png"), dpi=150)
        plt.close(fig)

    print(f"Plots saved to {output_dir}/")
