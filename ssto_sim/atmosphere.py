"""
SSTO Ascent Simulation - Standard Atmosphere

Seven-layer US Standard Atmosphere 1976 giving temperature, pressure,
density, speed of sound and dynamic viscosity at a geometric altitude.

Below sea level the model clamps to sea-level values; above the last
tabulated breakpoint (84.852 km) it continues isothermally with
exponential pressure decay anchored at that breakpoint.
"""

from typing import NamedTuple

import numpy as np

from . import constants as C


class AtmosphereProperties(NamedTuple):
    """Atmospheric state at one altitude (SI units)."""
    temperature: float
    pressure: float
    density: float
    speed_of_sound: float


def _build_us76_tables():
    """Precompute layer-base temperatures and pressures for US-76."""
    tb = [C.ATM_T0]
    pb = [C.ATM_P0]
    for i, lapse in enumerate(C.US76_LAPSE_RATES):
        dh = C.US76_ALTITUDES[i + 1] - C.US76_ALTITUDES[i]
        T0 = tb[-1]
        P0 = pb[-1]
        if abs(lapse) > 1e-12:
            T1 = T0 + lapse * dh
            P1 = P0 * (T1 / T0) ** (-C.G0 / (lapse * C.R_GAS))
        else:
            T1 = T0
            P1 = P0 * np.exp(-C.G0 * dh / (C.R_GAS * T0))
        tb.append(float(T1))
        pb.append(float(P1))
    return np.array(tb), np.array(pb)


# Read-only after import, safe to share between threads.
BASE_TEMPERATURES, BASE_PRESSURES = _build_us76_tables()


def compute_atmosphere_properties(altitude: float) -> AtmosphereProperties:
    """
    Compute temperature, pressure, density and speed of sound.

    Args:
        altitude: Geometric altitude above sea level (m). Negative values
            are clamped to sea level.

    Returns:
        AtmosphereProperties with T in K, P in Pa, rho in kg/m^3, a in m/s
    """
    h = max(0.0, float(altitude))

    if h <= C.US76_ALTITUDES[-1]:
        idx = int(np.searchsorted(C.US76_ALTITUDES, h, side='right') - 1)
        idx = max(0, min(idx, len(C.US76_LAPSE_RATES) - 1))
        lapse = C.US76_LAPSE_RATES[idx]
        T0 = BASE_TEMPERATURES[idx]
        P0 = BASE_PRESSURES[idx]
        dh = h - C.US76_ALTITUDES[idx]

        if abs(lapse) > 1e-12:
            T = T0 + lapse * dh
            P = P0 * (T / T0) ** (-C.G0 / (lapse * C.R_GAS))
        else:
            T = T0
            P = P0 * np.exp(-C.G0 * dh / (C.R_GAS * T0))
    else:
        T = BASE_TEMPERATURES[-1]
        P = BASE_PRESSURES[-1] * np.exp(
            -C.G0 * (h - C.US76_ALTITUDES[-1]) / (C.R_GAS * T)
        )

    rho = P / (C.R_GAS * T)
    a = np.sqrt(C.GAMMA * C.R_GAS * T)
    return AtmosphereProperties(float(T), float(P), float(rho), float(a))


def temperature(altitude: float) -> float:
    """Ambient temperature (K)."""
    return compute_atmosphere_properties(altitude).temperature


def pressure(altitude: float) -> float:
    """Ambient static pressure (Pa)."""
    return compute_atmosphere_properties(altitude).pressure


def density(altitude: float) -> float:
    """Ambient density (kg/m^3)."""
    return compute_atmosphere_properties(altitude).density


def speed_of_sound(altitude: float) -> float:
    """Local speed of sound (m/s)."""
    return compute_atmosphere_properties(altitude).speed_of_sound


def dynamic_viscosity(altitude: float) -> float:
    """
    Dynamic viscosity from Sutherland's law (Pa·s).

    mu = mu_ref * (T/T_ref)^1.5 * (T_ref + S) / (T + S)
    """
    T = temperature(altitude)
    return float(
        C.SUTHERLAND_MU_REF
        * (T / C.SUTHERLAND_T_REF) ** 1.5
        * (C.SUTHERLAND_T_REF + C.SUTHERLAND_S) / (T + C.SUTHERLAND_S)
    )


def density_ratio(altitude: float) -> float:
    """Density relative to sea level (sigma)."""
    return density(altitude) / C.ATM_RHO0


def pressure_ratio(altitude: float) -> float:
    """Static pressure relative to sea level (delta)."""
    return pressure(altitude) / C.ATM_P0


def mach_number(altitude: float, velocity: float) -> float:
    """Mach number of a (non-negative) speed at altitude."""
    return max(0.0, float(velocity)) / speed_of_sound(altitude)
