"""Demo script: fly the reference four-engine ascent and size the vehicle."""
from ssto_sim import (
    EngineMode, FlightPlan, SizingOptimizer, Waypoint, create_default_config,
    simulate_mission,
)

plan = FlightPlan([
    Waypoint.from_metric(20000.0, 3.1, EngineMode.EJECTOR_RAMJET),
    Waypoint.from_metric(40000.0, 6.0, EngineMode.RAMJET),
    Waypoint.from_metric(70000.0, 15.0, EngineMode.SCRAMJET),
    Waypoint.from_metric(200000.0, 24.0, EngineMode.ROCKET),
])
print(plan.summary())

config = create_default_config()
result = simulate_mission(plan, volume=1200.0, dry_mass=60000.0, config=config)

print("\n===== ENGINE TIMELINE =====")
previous = None
for point in result.complete_trajectory():
    if point.engine_mode is not previous:
        print(f"  t={point.time:8.1f}s | Alt={point.altitude:10,.0f} ft | "
              f"Mach={point.speed:6.2f} | Fuel={point.fuel_remaining:10,.0f} kg | "
              f"{point.engine_mode.value}")
        previous = point.engine_mode

sizing = SizingOptimizer(plan, config=config).optimize_length(100.0)
print()
print(sizing.summary())
