"""
WindSight - Distribution Synthesizer
Reference (NBM) vs actual Gaussian density curves for a correlation factor.
"""

from dataclasses import dataclass
from typing import Optional

import numpy as np

from windsight.data.factor_simulator import CorrelationFactor
from windsight.data.unit_registry import BehaviorProfile, resolve_profile


CURVE_POINTS = 100        # intervals, so CURVE_POINTS + 1 samples
TAIL_FRACTION = 0.5       # plot range extends this much of the width past each bound

# profile -> (mean shift as a fraction of range width, std dev multiplier)
SHIFTED_PROFILES = {
    BehaviorProfile.CRITICAL: (0.40, 2.0),
    BehaviorProfile.WARNING: (0.25, 1.4),
}
NOMINAL_STD_MULTIPLIER = 1.1
NOMINAL_JITTER = 0.5      # total jitter span in reference std devs

CRITICAL_SCORE = 50
WARNING_SCORE = 25

INTERPRETATIONS = {
    "critical": (
        "Critical Deviation: The actual distribution is heavily shifted from the "
        "baseline. This indicates severe performance degradation requiring "
        "immediate attention."
    ),
    "warning": (
        "Warning: The actual distribution shows moderate deviation from the "
        "baseline. This suggests optimization in progress or a recoverable fault."
    ),
    "normal": (
        "Normal Operation: The actual distribution closely matches the baseline. "
        "The turbine is operating within expected parameters."
    ),
}


@dataclass(frozen=True)
class BellCurvePoint:
    value: float
    density: float


@dataclass(frozen=True)
class DistributionSnapshot:
    reference: list
    actual: list
    reference_mean: float
    reference_std_dev: float
    actual_mean: float
    actual_std_dev: float


def gaussian_pdf(x, mean: float, std_dev: float):
    """f(x) = 1 / (σ√(2π)) · exp(-(x-μ)² / (2σ²)), elementwise over arrays."""
    x = np.asarray(x, dtype=float)
    coefficient = 1.0 / (std_dev * np.sqrt(2 * np.pi))
    return coefficient * np.exp(-((x - mean) ** 2) / (2 * std_dev ** 2))


def bell_curve(
    mean: float,
    std_dev: float,
    range_min: float,
    range_max: float,
    n_points: int = CURVE_POINTS,
) -> list[BellCurvePoint]:
    xs = np.linspace(range_min, range_max, n_points + 1)
    densities = gaussian_pdf(xs, mean, std_dev)
    return [
        BellCurvePoint(value=round(float(x), 2), density=round(float(d), 3))
        for x, d in zip(xs, densities)
    ]


def compute_distribution(
    factor: CorrelationFactor,
    unit_id: int,
    rng: Optional[np.random.Generator] = None,
) -> DistributionSnapshot:
    """
    Derive the reference and actual distributions for one factor.

    The reference is centred on the normal range with the range spanning
    about ±3σ. The actual curve is shifted away from the reference (toward
    the side the current value leans) and widened according to the unit's
    behaviour profile.
    """
    profile = resolve_profile(unit_id)
    normal_range = factor.normal_range
    width = normal_range.width

    reference_mean = normal_range.midpoint
    reference_std_dev = width / 6

    if profile in SHIFTED_PROFILES:
        shift_fraction, std_multiplier = SHIFTED_PROFILES[profile]
        shift = width * shift_fraction
        actual_mean = reference_mean - shift if factor.value < reference_mean else reference_mean + shift
        actual_std_dev = reference_std_dev * std_multiplier
    else:
        rng = rng if rng is not None else np.random.default_rng()
        actual_mean = reference_mean + (rng.random() - 0.5) * reference_std_dev * NOMINAL_JITTER
        actual_std_dev = reference_std_dev * NOMINAL_STD_MULTIPLIER

    range_min = normal_range.min - width * TAIL_FRACTION
    range_max = normal_range.max + width * TAIL_FRACTION

    return DistributionSnapshot(
        reference=bell_curve(reference_mean, reference_std_dev, range_min, range_max),
        actual=bell_curve(actual_mean, actual_std_dev, range_min, range_max),
        reference_mean=reference_mean,
        reference_std_dev=reference_std_dev,
        actual_mean=actual_mean,
        actual_std_dev=actual_std_dev,
    )


def deviation_severity(deviation_score: float) -> str:
    if deviation_score > CRITICAL_SCORE:
        return "critical"
    if deviation_score > WARNING_SCORE:
        return "warning"
    return "normal"


def interpret(factor: CorrelationFactor) -> str:
    return INTERPRETATIONS[deviation_severity(factor.deviation_score)]
