"""
Simulation Engine Module

This module provides the tick-driven engine that evolves the origin
server's state under competing legitimate and attack demand. The host
(a render loop, a test, a notebook) owns the engine instance and calls
tick() at its own cadence; the engine performs no timing of its own.
"""

import math
from dataclasses import dataclass, field, asdict
from typing import Dict, Iterable, List, Optional

import numpy as np
import pandas as pd
from tqdm import tqdm

from .controls import ControlInputs
from .infrastructure import (
    CapacityTier,
    ServerStatus,
    SimulationState,
    DEFAULT_CAPACITIES,
    BASELINE_LATENCY_MS,
    MAX_LATENCY_MS,
    LATENCY_KNEE,
    resolve_capacity,
    target_availability,
    target_latency,
    derive_status
)
from .mitigation import WAF
from .statistics import CumulativeStats, StatisticsCollector, format_number
from .traffic import AttackType, TrafficGenerator


@dataclass
class EngineConfig:
    """
    Engine tuning parameters

    Attributes:
        tick_rate: Nominal ticks per second, used to turn rates into counts
        health_inertia: Fraction of the health gap closed per tick
        latency_inertia: Fraction of the latency gap closed per tick
        baseline_latency_ms: Idle latency
        max_latency_ms: Latency ceiling
        latency_knee: Load ratio where latency starts to climb
        capacities: Requests/s per capacity tier
        status_debounce_ticks: Ticks a new status must persist before it is
            reported. 0 reports the raw per-tick status, which can flicker
            near a threshold.
    """
    tick_rate: float = 60.0
    health_inertia: float = 0.1
    latency_inertia: float = 0.05
    baseline_latency_ms: float = BASELINE_LATENCY_MS
    max_latency_ms: float = MAX_LATENCY_MS
    latency_knee: float = LATENCY_KNEE
    capacities: Dict[CapacityTier, float] = field(
        default_factory=lambda: dict(DEFAULT_CAPACITIES)
    )
    status_debounce_ticks: int = 0

    def __post_init__(self):
        if not self.tick_rate > 0:
            raise ValueError(f"tick_rate must be positive, got {self.tick_rate}")
        for name in ("health_inertia", "latency_inertia"):
            value = getattr(self, name)
            if not 0.0 < value <= 1.0:
                raise ValueError(f"{name} must be in (0, 1], got {value}")
        if not 0.0 <= self.baseline_latency_ms <= self.max_latency_ms:
            raise ValueError(
                "baseline_latency_ms must be non-negative and not above max_latency_ms"
            )
        if not self.latency_knee > 0:
            raise ValueError(f"latency_knee must be positive, got {self.latency_knee}")
        if self.status_debounce_ticks < 0:
            raise ValueError(
                f"status_debounce_ticks must be >= 0, got {self.status_debounce_ticks}"
            )


@dataclass
class TickMetrics:
    """
    Metrics derived by one tick

    Attributes:
        tick: Tick index (1-based)
        current_rps: Total incoming rate, floored
        current_legit_rps: Legitimate rate, floored
        current_attack_rps: Raw attack rate, floored
        load_percent: Weighted demand as % of capacity (not clamped)
        waf_integrity_percent: WAF efficiency as a whole percentage
        status: Server status
        health: Smoothed health after this tick
        latency_ms: Smoothed latency after this tick
        load_ratio: Weighted demand / capacity
        total_demand: Weighted demand reaching the origin
        allowed_attack_rps: Attack rate passed through the WAF
        blocked_attack_rps: Attack rate blocked by the WAF
        target_availability: Health the server is converging to
        target_latency_ms: Latency the server is converging to
        mitigation_active: Whether the WAF was filtering
        legit_share: Fraction of incoming traffic that is legitimate
    """
    tick: int
    current_rps: int
    current_legit_rps: int
    current_attack_rps: int
    load_percent: float
    waf_integrity_percent: int
    status: ServerStatus
    health: float
    latency_ms: float
    load_ratio: float
    total_demand: float
    allowed_attack_rps: float
    blocked_attack_rps: float
    target_availability: float
    target_latency_ms: float
    mitigation_active: bool
    legit_share: float

    @property
    def is_overloaded(self) -> bool:
        return self.load_percent > 100.0

    def to_dict(self) -> Dict:
        data = asdict(self)
        data["status"] = self.status.value
        return data


class Simulator:
    """
    Simulation engine for a web origin under DDoS

    Each tick generates traffic from the control inputs, filters attack
    traffic through the WAF, computes the load equilibrium and moves the
    server's health and latency toward it.
    """

    def __init__(
        self,
        inputs: Optional[ControlInputs] = None,
        config: Optional[EngineConfig] = None,
        verbose: bool = False
    ):
        """
        Initialize simulator

        Args:
            inputs: Initial control inputs (default: ControlInputs())
            config: Engine parameters (default: EngineConfig())
            verbose: Print configuration changes and run headers
        """
        self.config = config if config is not None else EngineConfig()
        self.verbose = verbose

        self.traffic_generator = TrafficGenerator()
        self.waf = WAF()
        self.stats = StatisticsCollector(tick_rate=self.config.tick_rate)

        self._state = SimulationState(
            health=100.0, latency_ms=self.config.baseline_latency_ms
        )
        self._status = derive_status(self._state.health, self._state.latency_ms)
        self._pending_status: Optional[ServerStatus] = None
        self._pending_count: int = 0

        self.current_tick: int = 0
        self.last_metrics: Optional[TickMetrics] = None

        # Sets _inputs and _capacity
        self.configure(inputs if inputs is not None else ControlInputs())

    @property
    def inputs(self) -> ControlInputs:
        return self._inputs.copy()

    @property
    def state(self) -> SimulationState:
        return self._state.copy()

    @property
    def capacity(self) -> float:
        """Capacity of the configured tier (requests/s)"""
        return self._capacity

    @property
    def status(self) -> ServerStatus:
        return self._status

    def configure(self, inputs: ControlInputs):
        """
        Replace the control inputs

        Out-of-range intensities are clamped and unknown enum values fall
        back to volumetric / off, with a UserWarning.

        Args:
            inputs: New control inputs

        Raises:
            ValueError: If the selected tier has no positive capacity
        """
        normalized = inputs.normalized()
        capacity = resolve_capacity(normalized.capacity_tier, self.config.capacities)

        self._inputs = normalized
        self._capacity = capacity

        if self.verbose:
            print(
                f"[configure] tier={normalized.capacity_tier.label} "
                f"({format_number(capacity)} req/s), "
                f"attack={'on' if normalized.attack_enabled else 'off'} "
                f"({normalized.attack_type.value}, {normalized.attack_intensity}), "
                f"users={'on' if normalized.legit_enabled else 'off'} "
                f"({normalized.legit_intensity}), "
                f"waf={'on' if normalized.mitigation_enabled else 'off'}"
            )

    def tick(self, elapsed: Optional[float] = None) -> TickMetrics:
        """
        Advance the simulation by one tick

        All derived values are computed first; state, counters and status
        are committed together at the end.

        Args:
            elapsed: Real time covered by this tick in seconds, for hosts
                that cannot guarantee the nominal tick rate
                (default: 1 / tick_rate). Must be positive and finite;
                otherwise ValueError is raised before any state changes.

        Returns:
            Metrics for this tick
        """
        if elapsed is not None and not (math.isfinite(elapsed) and elapsed > 0):
            raise ValueError(f"elapsed must be a positive finite number, got {elapsed}")

        cfg = self.config
        inputs = self._inputs
        capacity = self._capacity

        # Traffic generation
        traffic = self.traffic_generator.generate(inputs, capacity)

        # Mitigation
        mitigation = self.waf.filter(
            traffic.attack_rps,
            traffic.attack_type,
            capacity,
            enabled=inputs.mitigation_enabled
        )

        # Equilibrium
        attack_weight = traffic.attack_type.resource_weight
        total_demand = traffic.legit_rps + mitigation.allowed_rps * attack_weight
        load_ratio = total_demand / capacity
        load_percent = load_ratio * 100.0

        availability = target_availability(load_ratio)
        latency_target = target_latency(
            load_ratio,
            baseline_ms=cfg.baseline_latency_ms,
            knee=cfg.latency_knee,
            max_ms=cfg.max_latency_ms
        )

        health = self._state.health + (availability - self._state.health) * cfg.health_inertia
        latency = self._state.latency_ms + (latency_target - self._state.latency_ms) * cfg.latency_inertia
        health = min(100.0, max(0.0, health))
        latency = min(cfg.max_latency_ms, max(cfg.baseline_latency_ms, latency))

        status, pending_status, pending_count = self._next_status(
            derive_status(health, latency)
        )

        increments = self.stats.compute_increments(
            total_demand=total_demand,
            blocked_rps=mitigation.blocked_rps,
            legit_rps=traffic.legit_rps,
            health=health,
            elapsed=elapsed
        )

        metrics = TickMetrics(
            tick=self.current_tick + 1,
            current_rps=int(math.floor(traffic.total_rps)),
            current_legit_rps=int(math.floor(traffic.legit_rps)),
            current_attack_rps=int(math.floor(traffic.attack_rps)),
            load_percent=load_percent,
            waf_integrity_percent=mitigation.integrity_percent,
            status=status,
            health=health,
            latency_ms=latency,
            load_ratio=load_ratio,
            total_demand=total_demand,
            allowed_attack_rps=mitigation.allowed_rps,
            blocked_attack_rps=mitigation.blocked_rps,
            target_availability=availability,
            target_latency_ms=latency_target,
            mitigation_active=mitigation.active,
            legit_share=traffic.legit_share
        )

        # Commit
        self._state.health = health
        self._state.latency_ms = latency
        self._status = status
        self._pending_status = pending_status
        self._pending_count = pending_count
        self.stats.accumulate(increments, elapsed)
        self.current_tick += 1
        self.last_metrics = metrics

        return metrics

    def _next_status(self, derived: ServerStatus):
        """Apply the optional debounce to a freshly derived status"""
        debounce = self.config.status_debounce_ticks
        if debounce == 0 or derived == self._status:
            return derived, None, 0

        count = self._pending_count + 1 if derived == self._pending_status else 1
        if count >= debounce:
            return derived, None, 0
        return self._status, derived, count

    def snapshot_stats(self) -> CumulativeStats:
        """Read-only copy of the cumulative counters"""
        return self.stats.snapshot()

    def run(
        self,
        num_ticks: int,
        progress_bar: bool = False,
        elapsed: Optional[float] = None
    ) -> Optional[TickMetrics]:
        """
        Drive the engine headlessly for a number of ticks

        Args:
            num_ticks: Number of ticks to run
            progress_bar: Show progress bar
            elapsed: Duration of each tick (default: 1 / tick_rate)

        Returns:
            Metrics of the last tick (None if num_ticks is 0)
        """
        if self.verbose:
            print(f"Starting run: {num_ticks} ticks "
                  f"({num_ticks / self.config.tick_rate:.1f}s at {self.config.tick_rate:g} Hz)")
            print(f"Capacity: {format_number(self._capacity)} req/s "
                  f"[{self._inputs.capacity_tier.label}]")

        iterator = range(num_ticks)
        if progress_bar:
            iterator = tqdm(iterator, desc="Simulating", unit="tick")

        metrics = None
        for _ in iterator:
            metrics = self.tick(elapsed)
        return metrics

    def get_results(self) -> Dict:
        """Get current engine state, last tick metrics and session statistics"""
        inputs = self._inputs
        return {
            "inputs": {
                "attack_enabled": inputs.attack_enabled,
                "attack_intensity": inputs.attack_intensity,
                "attack_type": inputs.attack_type.value,
                "legit_enabled": inputs.legit_enabled,
                "legit_intensity": inputs.legit_intensity,
                "mitigation_enabled": inputs.mitigation_enabled,
                "capacity_tier": inputs.capacity_tier.value,
                "capacity_rps": self._capacity,
            },
            "state": {
                "tick": self.current_tick,
                "health": self._state.health,
                "latency_ms": self._state.latency_ms,
                "status": self._status.value,
            },
            "metrics": self.last_metrics.to_dict() if self.last_metrics else None,
            "statistics": self.stats.get_summary(),
        }

    def print_results(self):
        """Print simulation results"""
        print("\n" + "="*70)
        print("SIMULATION RESULTS")
        print("="*70)

        inputs = self._inputs
        print("\n--- Controls ---")
        print(f"  Infrastructure: {inputs.capacity_tier.label} "
              f"(cap {format_number(self._capacity)} req/s)")
        if inputs.attack_enabled:
            print(f"  Attack: {inputs.attack_type.value}, intensity {inputs.attack_intensity}")
        else:
            print("  Attack: off")
        if inputs.legit_enabled:
            print(f"  Users: {inputs.legit_intensity}% load")
        else:
            print("  Users: off")
        print(f"  WAF: {'on' if inputs.mitigation_enabled else 'off'}")

        print("\n--- Server ---")
        print(f"  Status: {self._status.value}")
        print(f"  Availability: {round(self._state.health)}%")
        print(f"  Latency: {round(self._state.latency_ms)} ms")

        m = self.last_metrics
        if m is not None:
            print("\n--- Traffic ---")
            print(f"  Incoming: {format_number(m.current_rps)} req/s "
                  f"({format_number(m.current_legit_rps)} legit / "
                  f"{format_number(m.current_attack_rps)} attack)")
            print(f"  Load saturation: {round(m.load_percent)}%"
                  f"{' [OVERLOADED]' if m.is_overloaded else ''}")
            if m.mitigation_active:
                print(f"  Filtration efficiency: {m.waf_integrity_percent}%")

        self.stats.print_summary()


def run_steady_state(
    inputs: ControlInputs,
    num_ticks: int = 600,
    config: Optional[EngineConfig] = None
) -> TickMetrics:
    """
    Convenience function to run a fresh engine until it settles

    Args:
        inputs: Control inputs held for the whole run
        num_ticks: Number of ticks (600 = 10 s at 60 Hz)
        config: Engine parameters

    Returns:
        Metrics of the last tick
    """
    sim = Simulator(inputs=inputs, config=config)
    return sim.run(num_ticks)


def sweep_attack_intensity(
    base_inputs: Optional[ControlInputs] = None,
    intensities: Optional[Iterable[int]] = None,
    tiers: Optional[List[CapacityTier]] = None,
    attack_types: Optional[List[AttackType]] = None,
    num_ticks: int = 600,
    config: Optional[EngineConfig] = None,
    progress_bar: bool = False
) -> pd.DataFrame:
    """
    Steady-state metrics over a grid of attack intensities

    Every combination of intensity, tier and attack type runs on a fresh
    engine with the attack switched on.

    Args:
        base_inputs: Inputs for everything not swept (default: ControlInputs())
        intensities: Attack intensities (default: 1-100 in steps of 5, plus 100)
        tiers: Capacity tiers (default: the tier of base_inputs)
        attack_types: Attack vectors (default: the type of base_inputs)
        num_ticks: Ticks per run
        config: Engine parameters
        progress_bar: Show progress bar

    Returns:
        DataFrame with one row per run
    """
    base = base_inputs if base_inputs is not None else ControlInputs()
    if intensities is None:
        intensities = np.unique(np.append(np.arange(1, 101, 5), 100))
    tiers = tiers if tiers is not None else [base.capacity_tier]
    attack_types = attack_types if attack_types is not None else [base.attack_type]

    grid = [
        (tier, attack_type, int(intensity))
        for tier in tiers
        for attack_type in attack_types
        for intensity in intensities
    ]
    if progress_bar:
        grid = tqdm(grid, desc="Sweeping", unit="run")

    rows = []
    for tier, attack_type, intensity in grid:
        inputs = base.copy()
        inputs.attack_enabled = True
        inputs.attack_intensity = intensity
        inputs.attack_type = attack_type
        inputs.capacity_tier = tier

        sim = Simulator(inputs=inputs, config=config)
        m = sim.run(num_ticks)
        rows.append({
            "capacity_tier": tier.value,
            "attack_type": attack_type.value,
            "attack_intensity": intensity,
            "mitigation_enabled": inputs.mitigation_enabled,
            "attack_rps": m.current_attack_rps,
            "load_percent": m.load_percent,
            "health": m.health,
            "latency_ms": m.latency_ms,
            "waf_integrity_percent": m.waf_integrity_percent,
            "status": m.status.value,
        })

    return pd.DataFrame(rows)
