"""
SSTO Ascent Simulation - Leading-Edge Design

PlaneDesign holds the three leading-edge shape parameters chosen by the
designer and derives the drag and thermal multipliers that the rest of the
simulation consumes. All methods are pure functions of the three fields.
"""

from dataclasses import dataclass

from . import constants as C


@dataclass(frozen=True)
class PlaneDesign:
    """
    Leading-edge shape parameters.

    Attributes:
        tilt_angle: Leading-edge tilt (deg, -45 to 45)
        sweep_angle: Leading-edge sweep (deg, 45 to 135)
        position: Apex position relative to the cone midpoint (-150 to 150)
    """
    tilt_angle: float = C.DEFAULT_TILT_DEG
    sweep_angle: float = C.DEFAULT_SWEEP_DEG
    position: float = C.DEFAULT_POSITION

    def thermal_limit_multiplier(self) -> float:
        """
        Multiplier on the 600 °C structural limit (higher is better).

        Blunter edges (low sweep) tolerate more heat; sharper edges and
        any tilt away from the symmetry plane tolerate less.
        """
        multiplier = 1.0

        if C.SWEEP_NEUTRAL_MIN_DEG <= self.sweep_angle <= C.SWEEP_NEUTRAL_MAX_DEG:
            normalized = ((self.sweep_angle - C.SWEEP_NEUTRAL_MIN_DEG)
                          / (C.SWEEP_NEUTRAL_MAX_DEG - C.SWEEP_NEUTRAL_MIN_DEG))
            multiplier -= normalized * 0.15
        elif self.sweep_angle < C.SWEEP_NEUTRAL_MIN_DEG:
            deviation = C.SWEEP_NEUTRAL_MIN_DEG - self.sweep_angle
            multiplier += deviation / 25.0 * 0.2
        else:
            deviation = self.sweep_angle - C.SWEEP_NEUTRAL_MAX_DEG
            multiplier -= deviation / 40.0 * 0.25

        multiplier -= abs(self.tilt_angle) / 45.0 * 0.1

        return max(C.THERMAL_MULTIPLIER_MIN, min(C.THERMAL_MULTIPLIER_MAX, multiplier))

    def heating_rate_multiplier(self) -> float:
        """Heating-rate multiplier (lower is better), reciprocal of the thermal limit."""
        return 1.0 / self.thermal_limit_multiplier()

    def drag_multiplier(self) -> float:
        """Drag coefficient multiplier relative to the baseline lifting body."""
        multiplier = 1.0

        multiplier += abs(self.position - C.OPTIMAL_POSITION) / 150.0 * 0.3

        if self.sweep_angle < C.SWEEP_NEUTRAL_MIN_DEG:
            multiplier += (C.SWEEP_NEUTRAL_MIN_DEG - self.sweep_angle) / 25.0 * 0.4
        elif self.sweep_angle > C.SWEEP_NEUTRAL_MAX_DEG:
            multiplier += (self.sweep_angle - C.SWEEP_NEUTRAL_MAX_DEG) / 40.0 * 0.4
        else:
            normalized = ((self.sweep_angle - C.SWEEP_NEUTRAL_MIN_DEG)
                          / (C.SWEEP_NEUTRAL_MAX_DEG - C.SWEEP_NEUTRAL_MIN_DEG))
            multiplier += normalized * 0.1

        multiplier += abs(self.tilt_angle) / 45.0 * 0.15

        return max(C.DRAG_MULTIPLIER_MIN, min(C.DRAG_MULTIPLIER_MAX, multiplier))

    def score(self) -> int:
        """Design score 0-100 weighting low drag (60%) and thermal margin (40%)."""
        drag_score = max(0.0, 100.0 - (self.drag_multiplier() - 0.7) * 100.0 / 1.3)
        thermal_score = (self.thermal_limit_multiplier() - 0.6) * 100.0 / 0.7
        return int(drag_score * 0.6 + thermal_score * 0.4)

    def summary(self) -> str:
        """One-line description of the drag / thermal trade."""
        drag_pct = int((self.drag_multiplier() - 1.0) * 100)
        thermal_pct = int((self.thermal_limit_multiplier() - 1.0) * 100)
        return f"Drag: {drag_pct:+d}%, Thermal Limit: {thermal_pct:+d}%"


DEFAULT_DESIGN = PlaneDesign()
OPTIMAL_DESIGN = PlaneDesign(
    tilt_angle=C.OPTIMAL_TILT_DEG,
    sweep_angle=C.OPTIMAL_SWEEP_DEG,
    position=C.OPTIMAL_POSITION,
)
