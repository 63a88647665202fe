#!/usr/bin/env python3
"""
Example: Basic DDoS Simulation

This script demonstrates the basic usage of the DDoS server simulator,
including:
- Running the engine with normal user traffic
- Launching volumetric and application-layer attacks
- Switching on the WAF and scaling infrastructure
- Sweeping attack intensity and saving plots
"""

import sys
import os

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from ddos_simulator import (
    AttackType,
    CapacityTier,
    ControlInputs,
    Simulator,
    format_number,
    sweep_attack_intensity,
    save_all_plots
)

SETTLE_TICKS = 600  # 10 s at 60 Hz


def report(label: str, sim: Simulator):
    m = sim.last_metrics
    print(f"  {label:<32} {m.status.value:<9} "
          f"avail={m.health:6.1f}%  latency={m.latency_ms:7.0f} ms  "
          f"load={m.load_percent:9.1f}%  in={format_number(m.current_rps)} req/s")


def main():
    print("="*70)
    print("DDoS Server Simulation - Basic Example")
    print("="*70)

    # =====================================================
    # Step 1: Normal operation
    # =====================================================
    print("\n[1] Normal operation (single VPS, 30% users)...")
    sim = Simulator(ControlInputs(legit_intensity=30), verbose=True)
    sim.run(SETTLE_TICKS)
    report("baseline", sim)

    # =====================================================
    # Step 2: Volumetric attack
    # =====================================================
    print("\n[2] Volumetric flood against the single VPS...")
    inputs = sim.inputs
    inputs.attack_enabled = True
    inputs.attack_intensity = 60
    sim.configure(inputs)
    sim.run(SETTLE_TICKS)
    report("volumetric, no WAF", sim)

    inputs.mitigation_enabled = True
    sim.configure(inputs)
    sim.run(SETTLE_TICKS)
    report("volumetric, WAF", sim)

    # =====================================================
    # Step 3: Application-layer attack
    # =====================================================
    print("\n[3] L7 application attack...")
    inputs.attack_type = AttackType.APPLICATION
    sim.configure(inputs)
    sim.run(SETTLE_TICKS)
    report("application, WAF", sim)

    inputs.capacity_tier = CapacityTier.STANDARD
    sim.configure(inputs)
    sim.run(SETTLE_TICKS)
    report("application, WAF, cluster", sim)

    inputs.capacity_tier = CapacityTier.ULTRA
    sim.configure(inputs)
    sim.run(SETTLE_TICKS, progress_bar=True)
    report("application, WAF, edge net", sim)

    sim.print_results()

    # =====================================================
    # Step 4: Intensity sweep
    # =====================================================
    print("\n[4] Sweeping attack intensity...")
    sweep = sweep_attack_intensity(
        base_inputs=ControlInputs(mitigation_enabled=True),
        tiers=list(CapacityTier),
        attack_types=list(AttackType),
        progress_bar=True
    )
    offline = sweep[sweep["status"] == "OFFLINE"]
    print(offline.groupby(["capacity_tier", "attack_type"])["attack_intensity"].min()
          .rename("first_offline_intensity").to_string())

    output_dir = os.path.join(os.path.dirname(os.path.abspath(__file__)), "output")
    save_all_plots(output_dir=output_dir, prefix="basic", sweep=sweep)


if __name__ == "__main__":
    main()
