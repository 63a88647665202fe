"""
Statistics Collection Module

This module accumulates the cumulative request counters of a simulation
session and provides summaries, DataFrame conversion and JSON export.
"""

import json
import math
from dataclasses import dataclass, asdict, replace
from typing import Dict, Optional

import pandas as pd


@dataclass
class CumulativeStats:
    """
    Session-wide request counters (never decrease)

    Attributes:
        total_requests: Requests offered to the edge, filtered or not
        blocked_requests: Attack requests stopped by the WAF
        dropped_legitimate: Legitimate requests the origin failed to serve
        successful_legitimate: Legitimate requests served
    """
    total_requests: int = 0
    blocked_requests: int = 0
    dropped_legitimate: int = 0
    successful_legitimate: int = 0

    def copy(self) -> "CumulativeStats":
        return replace(self)

    def to_dict(self) -> Dict[str, int]:
        return asdict(self)


def format_number(value: float) -> str:
    """Render a count or rate compactly: 1.2M, 50k, 999"""
    if value >= 1_000_000:
        return f"{value / 1_000_000:.1f}M"
    if value >= 1_000:
        return f"{value / 1_000:.0f}k"
    return f"{int(math.floor(value)):,}"


class StatisticsCollector:
    """
    Accumulates cumulative request counters

    Rates (requests/s) are converted into per-tick counts using the
    elapsed time of each tick, which defaults to 1 / tick_rate.
    """

    def __init__(self, tick_rate: float = 60.0):
        """
        Initialize statistics collector

        Args:
            tick_rate: Nominal ticks per second
        """
        self.tick_rate = tick_rate
        self._stats = CumulativeStats()
        self.ticks_recorded: int = 0
        self.elapsed_time: float = 0.0

    def _per_tick(self, rate: float, elapsed: Optional[float]) -> int:
        if elapsed is None:
            count = math.floor(rate / self.tick_rate)
        else:
            count = rate * elapsed
            if not math.isfinite(count):
                raise ValueError(f"elapsed={elapsed} overflows the request counters")
            count = math.floor(count)
        return max(0, int(count))

    def compute_increments(
        self,
        total_demand: float,
        blocked_rps: float,
        legit_rps: float,
        health: float,
        elapsed: Optional[float] = None
    ) -> CumulativeStats:
        """
        Counter increments for one tick, without applying them

        Args:
            total_demand: Weighted demand reaching the origin (requests/s)
            blocked_rps: Attack rate blocked by the WAF
            legit_rps: Legitimate request rate
            health: Server health after this tick's update (0-100)
            elapsed: Tick duration in seconds (default: 1 / tick_rate)

        Returns:
            Increments as a CumulativeStats
        """
        drop_rate = 1.0 - (health / 100.0)
        legit_drops = legit_rps * drop_rate
        legit_success = legit_rps - legit_drops

        return CumulativeStats(
            total_requests=self._per_tick(total_demand + blocked_rps, elapsed),
            blocked_requests=self._per_tick(blocked_rps, elapsed),
            dropped_legitimate=self._per_tick(legit_drops, elapsed),
            successful_legitimate=self._per_tick(legit_success, elapsed)
        )

    def accumulate(self, increments: CumulativeStats, elapsed: Optional[float] = None):
        """Apply one tick's increments"""
        self._stats.total_requests += increments.total_requests
        self._stats.blocked_requests += increments.blocked_requests
        self._stats.dropped_legitimate += increments.dropped_legitimate
        self._stats.successful_legitimate += increments.successful_legitimate
        self.ticks_recorded += 1
        self.elapsed_time += (1.0 / self.tick_rate) if elapsed is None else elapsed

    def record_tick(
        self,
        total_demand: float,
        blocked_rps: float,
        legit_rps: float,
        health: float,
        elapsed: Optional[float] = None
    ) -> CumulativeStats:
        """Compute and apply one tick's increments"""
        increments = self.compute_increments(
            total_demand, blocked_rps, legit_rps, health, elapsed
        )
        self.accumulate(increments, elapsed)
        return increments

    def snapshot(self) -> CumulativeStats:
        """Read-only copy of the counters"""
        return self._stats.copy()

    def get_block_rate(self) -> float:
        """Fraction of all requests blocked by the WAF"""
        if self._stats.total_requests == 0:
            return 0.0
        return self._stats.blocked_requests / self._stats.total_requests

    def get_legit_success_rate(self) -> float:
        """Fraction of legitimate requests that were served"""
        legit_total = self._stats.dropped_legitimate + self._stats.successful_legitimate
        if legit_total == 0:
            return 0.0
        return self._stats.successful_legitimate / legit_total

    def get_average_rps(self) -> float:
        """Average offered request rate over the session"""
        if self.elapsed_time <= 0:
            return 0.0
        return self._stats.total_requests / self.elapsed_time

    def get_summary(self) -> Dict:
        """Get statistics summary"""
        return {
            "counters": self._stats.to_dict(),
            "session": {
                "ticks": self.ticks_recorded,
                "elapsed_s": self.elapsed_time,
                "avg_rps": self.get_average_rps(),
            },
            "rates": {
                "block_rate": self.get_block_rate(),
                "legit_success_rate": self.get_legit_success_rate(),
            },
        }

    def to_dataframe(self) -> pd.DataFrame:
        """Convert the current counters and rates to a one-row DataFrame"""
        summary = self.get_summary()
        row = {}
        for section in summary.values():
            row.update(section)
        return pd.DataFrame([row])

    def save_to_json(self, filepath: str):
        """Save statistics summary to a JSON file"""
        with open(filepath, 'w') as f:
            json.dump(self.get_summary(), f, indent=2)

    def print_summary(self):
        """Print formatted statistics summary"""
        summary = self.get_summary()
        counters = summary["counters"]

        print("\n" + "="*60)
        print("SESSION STATISTICS SUMMARY")
        print("="*60)

        print("\n--- Counters ---")
        print(f"  Total requests:        {format_number(counters['total_requests'])}")
        print(f"  Blocked (WAF):         {format_number(counters['blocked_requests'])}")
        print(f"  Dropped legitimate:    {format_number(counters['dropped_legitimate'])}")
        print(f"  Served legitimate:     {format_number(counters['successful_legitimate'])}")

        print("\n--- Session ---")
        print(f"  Ticks: {summary['session']['ticks']}")
        print(f"  Elapsed: {summary['session']['elapsed_s']:.2f} s")
        print(f"  Average offered rate: {format_number(summary['session']['avg_rps'])} req/s")

        print("\n--- Rates ---")
        print(f"  Block rate: {summary['rates']['block_rate']:.4f}")
        print(f"  Legitimate success rate: {summary['rates']['legit_success_rate']:.4f}")
