"""
DDoS Server Simulator

An educational real-time simulation of a web server under combined
legitimate and DDoS load, with WAF mitigation and capacity scaling.

Modules:
- core: Traffic, mitigation, equilibrium engine, statistics and plots
"""

from .core import (
    # Infrastructure
    CapacityTier,
    ServerStatus,
    SimulationState,
    # Traffic
    AttackType,
    calculate_attack_traffic,
    calculate_legit_traffic,
    # Mitigation
    WAF,
    MitigationResult,
    # Controls
    ControlInputs,
    # Statistics
    CumulativeStats,
    StatisticsCollector,
    format_number,
    # Simulator
    EngineConfig,
    TickMetrics,
    Simulator,
    run_steady_state,
    sweep_attack_intensity,
    # Visualization
    plot_attack_traffic_curve,
    plot_equilibrium_curves,
    plot_intensity_sweep,
    save_all_plots
)

__version__ = "0.1.0"

__all__ = [
    # Infrastructure
    'CapacityTier',
    'ServerStatus',
    'SimulationState',
    # Traffic
    'AttackType',
    'calculate_attack_traffic',
    'calculate_legit_traffic',
    # Mitigation
    'WAF',
    'MitigationResult',
    # Controls
    'ControlInputs',
    # Statistics
    'CumulativeStats',
    'StatisticsCollector',
    'format_number',
    # Simulator
    'EngineConfig',
    'TickMetrics',
    'Simulator',
    'run_steady_state',
    'sweep_attack_intensity',
    # Visualization
    'plot_attack_traffic_curve',
    'plot_equilibrium_curves',
    'plot_intensity_sweep',
    'save_all_plots'
]
