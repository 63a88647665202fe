"""
DDoS Simulator - Core Module

This module contains the core components of the simulation:
- Infrastructure: Capacity tiers, server state and equilibrium targets
- Traffic: Legitimate and attack request rates
- Mitigation: WAF filtering model
- Controls: Operator inputs
- Statistics: Cumulative counters and summaries
- Simulator: Tick-driven simulation engine
- Visualization: Plotting tools
"""

from .infrastructure import (
    CapacityTier,
    ServerStatus,
    SimulationState,
    DEFAULT_CAPACITIES,
    resolve_capacity,
    target_availability,
    target_latency,
    derive_status
)

from .traffic import (
    AttackType,
    TrafficSnapshot,
    TrafficGenerator,
    clamp_intensity,
    calculate_attack_traffic,
    calculate_legit_traffic
)

from .mitigation import (
    WAF,
    MitigationResult,
    filter_efficiency
)

from .controls import ControlInputs

from .statistics import (
    CumulativeStats,
    StatisticsCollector,
    format_number
)

from .simulator import (
    EngineConfig,
    TickMetrics,
    Simulator,
    run_steady_state,
    sweep_attack_intensity
)

from .visualization import (
    plot_attack_traffic_curve,
    plot_equilibrium_curves,
    plot_intensity_sweep,
    save_all_plots
)

__all__ = [
    # Infrastructure
    'CapacityTier',
    'ServerStatus',
    'SimulationState',
    'DEFAULT_CAPACITIES',
    'resolve_capacity',
    'target_availability',
    'target_latency',
    'derive_status',
    # Traffic
    'AttackType',
    'TrafficSnapshot',
    'TrafficGenerator',
    'clamp_intensity',
    'calculate_attack_traffic',
    'calculate_legit_traffic',
    # Mitigation
    'WAF',
    'MitigationResult',
    'filter_efficiency',
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
