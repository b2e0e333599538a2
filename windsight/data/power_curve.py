"""
WindSight - Power Curve Generator
Expected power curve (cut-in / rated / cut-out) and synthetic actual-power
observations around it for each behaviour profile.
"""

import math
from dataclasses import dataclass, asdict
from datetime import datetime, timedelta
from typing import Optional

import numpy as np

from windsight.data.unit_registry import BehaviorProfile, resolve_profile


CUT_IN_SPEED = 3.0      # m/s, turbine starts producing
RATED_SPEED = 12.0      # m/s, rated power reached
CUT_OUT_SPEED = 25.0    # m/s, safety shutdown
RATED_POWER_KW = 2000.0

# NBM baseline band around the expected curve
MIN_POWER_RATIO = 0.85
MAX_POWER_RATIO = 1.05

RAMP_START = 4.0
RAMP_END = 11.0

# Faulted units: recovery attempts along the sweep
SPIKE_POSITIONS = (6.5, 10.0, 13.5, 17.0, 20.5)
SPIKE_HALF_WIDTH = 1.2
FAULT_BASELINE_RATIO = 0.45

SAMPLE_INTERVAL = timedelta(minutes=5)


@dataclass(frozen=True)
class PowerCurveSample:
    wind_speed: float
    actual_power: Optional[float]
    min_power: float
    max_power: float
    expected_power: float
    timestamp: str

    def to_dict(self) -> dict:
        return asdict(self)


def expected_power(wind_speed: float) -> float:
    """Expected output in kW for a wind speed in m/s."""
    if wind_speed < CUT_IN_SPEED:
        return 0.0
    if wind_speed >= CUT_OUT_SPEED:
        return 0.0
    if wind_speed >= RATED_SPEED:
        return RATED_POWER_KW

    normalized = (wind_speed - CUT_IN_SPEED) / (RATED_SPEED - CUT_IN_SPEED)
    return RATED_POWER_KW * normalized ** 3


def _zone(start_tenths: int, stop_tenths: int, step_tenths: int) -> np.ndarray:
    # Built from integer tenths so the endpoints are exact
    return np.arange(start_tenths, stop_tenths + 1, step_tenths) / 10.0


def wind_speed_sweep() -> np.ndarray:
    """
    Non-uniform wind-speed sweep used for every power curve.

    Coarse 0.5 m/s steps outside the ramp, 0.1 m/s steps inside 4.1-11 m/s
    where the profiles diverge.
    """
    return np.concatenate([
        _zone(0, 40, 5),      # startup
        _zone(41, 110, 1),    # ramp-up
        _zone(115, 250, 5),   # rated plateau
    ])


def _faulted_power(wind_speed: float, min_power: float, rng: np.random.Generator) -> float:
    baseline = min_power * FAULT_BASELINE_RATIO

    for position in SPIKE_POSITIONS:
        distance = abs(wind_speed - position)
        if distance < SPIKE_HALF_WIDTH:
            strength = math.exp(-8 * (distance / SPIKE_HALF_WIDTH) ** 2)
            peak = min_power * (0.70 + rng.uniform(0, 0.15))
            return baseline + (peak - baseline) * strength

    return baseline * (0.85 + rng.uniform(0, 0.30))


def _ramp_power(
    wind_speed: float,
    expected: float,
    min_power: float,
    max_power: float,
    profile: BehaviorProfile,
    rng: np.random.Generator,
) -> float:
    progress = (wind_speed - RAMP_START) / (RAMP_END - RAMP_START)
    dip = math.sin(progress * math.pi)  # 0 -> 1 -> 0 across the ramp
    noise = rng.uniform(0, 0.03)

    if profile is BehaviorProfile.WARNING:
        # Deep dip below the band, then a sharp recovery
        power = expected * (0.75 + 0.20 * (1 - dip) + noise)
        power = min(power, max_power * 0.98)
        if dip > 0.5:
            power = min(power, min_power * 0.88)
        if progress > 0.7:
            recovery = (progress - 0.7) / 0.3
            power = max(power, expected * (0.80 + recovery * 0.15))
        return power

    power = expected * (0.88 + 0.07 * (1 - dip) + noise)
    power = min(power, max_power * 0.98)
    if dip > 0.5:
        power = min(power, min_power * 1.02)
    return power


def actual_power(
    wind_speed: float,
    profile: BehaviorProfile,
    rng: np.random.Generator,
) -> Optional[float]:
    """
    Synthesize one actual-power observation, or None outside [cut-in, cut-out).

    Args:
        wind_speed: Wind speed in m/s
        profile: Behaviour profile of the unit
        rng: Source of the noise terms

    Returns:
        Power in kW, never above 98% of the band's upper bound
    """
    if not CUT_IN_SPEED <= wind_speed < CUT_OUT_SPEED:
        return None

    expected = expected_power(wind_speed)
    min_power = expected * MIN_POWER_RATIO
    max_power = expected * MAX_POWER_RATIO

    if profile is BehaviorProfile.CRITICAL:
        power = _faulted_power(wind_speed, min_power, rng)
    elif wind_speed > RAMP_END:
        # Rated plateau: locked at 98-100% of expected
        power = min(expected * (0.98 + rng.uniform(0, 0.02)), expected)
    elif wind_speed >= RAMP_START:
        power = _ramp_power(wind_speed, expected, min_power, max_power, profile, rng)
    else:
        power = expected * (0.85 + rng.uniform(0, 0.10))

    return min(power, max_power * 0.98)


def generate_power_curve_samples(
    unit_id: int,
    point_hint: int = 200,
    rng: Optional[np.random.Generator] = None,
    now: Optional[datetime] = None,
) -> list[PowerCurveSample]:
    """
    Generate the power curve sweep for one unit.

    Args:
        unit_id: Registry id of the unit
        point_hint: Advisory point count; only shifts the sample timestamps,
            the sweep itself is fixed
        rng: numpy Generator for the noise terms
        now: Reference time for the timestamps (defaults to local now)

    Returns:
        Samples ordered by wind speed
    """
    profile = resolve_profile(unit_id)
    rng = rng if rng is not None else np.random.default_rng()
    now = now or datetime.now()

    samples = []
    for wind_speed in wind_speed_sweep():
        wind_speed = float(wind_speed)
        expected = expected_power(wind_speed)
        actual = actual_power(wind_speed, profile, rng)
        timestamp = now - (point_hint - wind_speed * 4) * SAMPLE_INTERVAL

        samples.append(PowerCurveSample(
            wind_speed=round(wind_speed, 2),
            actual_power=None if actual is None else round(actual, 1),
            min_power=round(expected * MIN_POWER_RATIO, 1),
            max_power=round(expected * MAX_POWER_RATIO, 1),
            expected_power=round(expected, 1),
            timestamp=timestamp.isoformat(),
        ))

    return samples


def generate_theoretical_power_curve(now: Optional[datetime] = None) -> list[PowerCurveSample]:
    """Smooth expected curve with its NBM band and no observations."""
    timestamp = (now or datetime.now()).isoformat()
    samples = []
    for wind_speed in _zone(0, 250, 2):
        expected = expected_power(float(wind_speed))
        samples.append(PowerCurveSample(
            wind_speed=round(float(wind_speed), 1),
            actual_power=None,
            min_power=round(expected * MIN_POWER_RATIO, 1),
            max_power=round(expected * MAX_POWER_RATIO, 1),
            expected_power=expected,
            timestamp=timestamp,
        ))
    return samples


def performance_ratio(samples: list[PowerCurveSample]) -> float:
    """Mean actual/expected ratio over samples that have both values."""
    ratios = [
        s.actual_power / s.expected_power
        for s in samples
        if s.expected_power > 0 and s.actual_power is not None
    ]
    return sum(ratios) / (len(ratios) or 1)
