"""
SSTO Ascent Simulation - Propulsion Manager

Two-state machine over an ordered engine registry:

  AUTO            engine re-selected on every update() by maximum efficiency
  MANUAL(mode)    engine fixed until enable_auto_mode()

The registry is an explicit list of (EngineMode, engine) pairs, so the
maximum-efficiency choice has a reproducible tie-break: the earliest
registered engine wins. When no engine has positive efficiency the
fallback mode (rocket) is kept.
"""

from enum import Enum, auto
import logging
from typing import List, Optional, Sequence, Tuple

from .config import SimulationConfig
from .engines import EnginePerformance, PropulsionSystem, create_engines
from .flight_plan import EngineMode

logger = logging.getLogger(__name__)


class ControlState(Enum):
    AUTO = auto()
    MANUAL = auto()


class PropulsionManager:
    """
    Selects and delegates to one engine from an ordered registry.
    """

    def __init__(self, engines: Optional[Sequence[Tuple[EngineMode, PropulsionSystem]]] = None,
                 config: SimulationConfig = None,
                 fallback_mode: EngineMode = EngineMode.ROCKET):
        registry = list(engines) if engines is not None else create_engines(config)
        if not registry:
            raise ValueError("PropulsionManager needs at least one engine")
        modes = [mode for mode, _ in registry]
        if EngineMode.AUTO in modes:
            raise ValueError("AUTO is a selection policy, not an engine mode")
        if len(set(modes)) != len(modes):
            raise ValueError(f"Duplicate engine modes in registry: {modes}")

        self._engines: List[Tuple[EngineMode, PropulsionSystem]] = registry
        self.fallback_mode = fallback_mode if fallback_mode in modes else modes[-1]
        self.current_mode = self.fallback_mode
        self.control_state = ControlState.AUTO

    @property
    def engines(self) -> Tuple[Tuple[EngineMode, PropulsionSystem], ...]:
        return tuple(self._engines)

    @property
    def modes(self) -> Tuple[EngineMode, ...]:
        return tuple(mode for mode, _ in self._engines)

    @property
    def is_auto(self) -> bool:
        return self.control_state is ControlState.AUTO

    def engine(self, mode: EngineMode) -> PropulsionSystem:
        for registered, engine in self._engines:
            if registered is mode:
                return engine
        raise KeyError(f"No engine registered for {mode}")

    @property
    def current_engine(self) -> PropulsionSystem:
        return self.engine(self.current_mode)

    def set_manual_engine(self, mode: EngineMode) -> None:
        """Fix the engine; AUTO re-enables automatic selection."""
        if mode is EngineMode.AUTO:
            self.enable_auto_mode()
            return
        self.engine(mode)
        if self.current_mode is not mode or self.is_auto:
            logger.debug(f"Manual engine: {mode.value}")
        self.current_mode = mode
        self.control_state = ControlState.MANUAL

    def enable_auto_mode(self) -> None:
        self.control_state = ControlState.AUTO

    def efficiencies(self, altitude_ft: float, mach: float) -> List[Tuple[EngineMode, float]]:
        """Efficiency of every registered engine, in registry order."""
        return [(mode, engine.efficiency(altitude_ft, mach)) for mode, engine in self._engines]

    def select_best(self, altitude_ft: float, mach: float) -> EngineMode:
        """Most efficient engine at a condition, without changing state."""
        best_mode = None
        best = 0.0
        for mode, eff in self.efficiencies(altitude_ft, mach):
            if eff > best:
                best_mode, best = mode, eff
        return best_mode if best_mode is not None else self.fallback_mode

    def update(self, altitude_ft: float, mach: float) -> EngineMode:
        """Re-select in AUTO; no-op in MANUAL. Returns the active mode."""
        if not self.is_auto:
            return self.current_mode
        mode = self.select_best(altitude_ft, mach)
        if mode is not self.current_mode:
            logger.debug(f"Auto engine switch {self.current_mode.value} -> {mode.value} "
                         f"at {altitude_ft:,.0f} ft, Mach {mach:.2f}")
            self.current_mode = mode
        return mode

    def get_performance(self, altitude_ft: float, mach: float) -> EnginePerformance:
        return self.current_engine.performance(altitude_ft, mach)

    def get_thrust(self, altitude_ft: float, mach: float) -> float:
        return self.current_engine.thrust(altitude_ft, mach)

    def get_fuel_consumption(self, altitude_ft: float, mach: float) -> float:
        return self.current_engine.fuel_consumption(altitude_ft, mach)

    def status(self) -> str:
        state = "Auto" if self.is_auto else "Manual"
        return f"{state}: {self.current_mode.value}"
