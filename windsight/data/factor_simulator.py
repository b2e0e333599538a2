"""
WindSight - Correlation Factor Simulator
Rolling histories for pitch angle, rotor speed, generator temperature and
wind speed, scored against each factor's normal operating range.

Every draw is independent; histories are illustrative, not a physically
continuous trajectory.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime, timedelta
from typing import Optional

import numpy as np

from windsight.data.unit_registry import BehaviorProfile, resolve_profile


TICK_SECONDS = 5
INITIAL_HISTORY_POINTS = 30
MAX_HISTORY_POINTS = 20
ANOMALY_CHANCE = 0.3

TIME_FORMAT = "%H:%M:%S"


@dataclass(frozen=True)
class NormalRange:
    min: float
    max: float

    @property
    def width(self) -> float:
        return self.max - self.min

    @property
    def midpoint(self) -> float:
        return (self.min + self.max) / 2

    def __contains__(self, value: float) -> bool:
        return self.min <= value <= self.max


@dataclass(frozen=True)
class FactorSpec:
    """Fixed configuration and draw table for one correlation factor."""

    id: str
    name: str
    unit: str
    normal_range: NormalRange
    nominal: tuple            # (base, span)
    critical: tuple           # (base, span)
    critical_anomaly: Optional[tuple] = None


FACTOR_SPECS = (
    FactorSpec("pitch", "Pitch Angle", "°", NormalRange(0, 5),
               nominal=(2, 3), critical=(12, 8), critical_anomaly=(20, 8)),
    FactorSpec("rotor", "Rotor Speed", "RPM", NormalRange(14, 18),
               nominal=(14, 4), critical=(11, 4), critical_anomaly=(6, 3)),
    FactorSpec("generator", "Generator Temp", "°C", NormalRange(65, 75),
               nominal=(68, 6), critical=(85, 10)),
    FactorSpec("windSpeed", "Wind Speed", "m/s", NormalRange(8, 14),
               nominal=(9, 4), critical=(6, 3), critical_anomaly=(5, 2)),
)

FACTOR_SPECS_BY_ID = {spec.id: spec for spec in FACTOR_SPECS}


@dataclass(frozen=True)
class HistoryPoint:
    time: str
    value: float


@dataclass(frozen=True)
class CorrelationFactor:
    id: str
    name: str
    value: float
    deviation: float
    deviation_score: float   # percent, 0-100
    unit: str
    normal_range: NormalRange
    history: tuple = field(default_factory=tuple)


def compute_deviation(value: float, normal_range: NormalRange) -> tuple[float, float]:
    """
    Signed distance outside the normal range and its normalised score.

    Returns:
        (deviation, deviation_score) where deviation is negative below the
        range, positive above it and 0 inside; the score is
        min(100, |deviation| / width * 100).
    """
    if normal_range.width <= 0:
        raise ValueError(f"Normal range must have positive width, got {normal_range}")

    if value < normal_range.min:
        deviation = value - normal_range.min
    elif value > normal_range.max:
        deviation = value - normal_range.max
    else:
        deviation = 0.0

    score = min(100.0, abs(deviation) / normal_range.width * 100)
    return deviation, score


def draw_value(spec: FactorSpec, profile: BehaviorProfile, rng: np.random.Generator) -> float:
    """One sample from the profile's distribution for this factor, rounded to 0.1."""
    # WARNING units draw like NOMINAL here; their signature is in the power curve
    if profile is BehaviorProfile.CRITICAL:
        base, span = spec.critical
        if rng.random() < ANOMALY_CHANCE and spec.critical_anomaly is not None:
            base, span = spec.critical_anomaly
    else:
        base, span = spec.nominal

    return round(base + rng.uniform(0, span), 1)


def _scored(factor_id: str, value: float, history: tuple) -> CorrelationFactor:
    spec = FACTOR_SPECS_BY_ID[factor_id]
    deviation, score = compute_deviation(value, spec.normal_range)
    return CorrelationFactor(
        id=spec.id,
        name=spec.name,
        value=value,
        deviation=round(deviation, 1),
        deviation_score=round(score, 1),
        unit=spec.unit,
        normal_range=spec.normal_range,
        history=history,
    )


def sort_factors_by_deviation(factors) -> list[CorrelationFactor]:
    """Highest deviation first; equal scores keep their prior order."""
    return sorted(factors, key=lambda f: f.deviation_score, reverse=True)


def initialize_factors(
    unit_id: int,
    rng: Optional[np.random.Generator] = None,
    now: Optional[datetime] = None,
) -> list[CorrelationFactor]:
    """
    Fresh factor set for a newly selected unit.

    Each factor gets a current value and a backfilled history of
    INITIAL_HISTORY_POINTS independent draws spaced TICK_SECONDS apart.
    """
    profile = resolve_profile(unit_id)
    rng = rng if rng is not None else np.random.default_rng()
    now = now or datetime.now()

    factors = []
    for spec in FACTOR_SPECS:
        history = tuple(
            HistoryPoint(
                time=(now - timedelta(seconds=(INITIAL_HISTORY_POINTS - i) * TICK_SECONDS)).strftime(TIME_FORMAT),
                value=draw_value(spec, profile, rng),
            )
            for i in range(INITIAL_HISTORY_POINTS)
        )
        factors.append(_scored(spec.id, draw_value(spec, profile, rng), history))

    return sort_factors_by_deviation(factors)


def advance_factors(
    unit_id: int,
    tick: int,
    factors,
    rng: Optional[np.random.Generator] = None,
    started_at: Optional[datetime] = None,
) -> list[CorrelationFactor]:
    """
    Draw one new reading per factor and return the updated, re-sorted set.

    Args:
        unit_id: Registry id of the unit that owns the factors
        tick: Index of this tick since the unit was selected
        factors: Current factor set (left untouched)
        rng: numpy Generator for the draws
        started_at: When tick 0 happened; history times become
            started_at + tick * TICK_SECONDS. Wall clock if omitted.

    Returns:
        New CorrelationFactor instances, histories capped at MAX_HISTORY_POINTS
    """
    profile = resolve_profile(unit_id)
    rng = rng if rng is not None else np.random.default_rng()
    if started_at is not None:
        stamp = started_at + timedelta(seconds=tick * TICK_SECONDS)
    else:
        stamp = datetime.now()
    time_label = stamp.strftime(TIME_FORMAT)

    updated = []
    for factor in factors:
        value = draw_value(FACTOR_SPECS_BY_ID[factor.id], profile, rng)
        history = (factor.history + (HistoryPoint(time_label, value),))[-MAX_HISTORY_POINTS:]
        updated.append(_scored(factor.id, value, history))

    return sort_factors_by_deviation(updated)


def with_value(factor: CorrelationFactor, value: float) -> CorrelationFactor:
    """Copy of a factor re-scored at a different value (history unchanged)."""
    deviation, score = compute_deviation(value, factor.normal_range)
    return replace(factor, value=value, deviation=round(deviation, 1), deviation_score=round(score, 1))
