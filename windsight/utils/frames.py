"""
WindSight - DataFrame Utilities
Tabular views of generator output for charting and CSV export.
"""

from dataclasses import asdict

import pandas as pd

from windsight.data.factor_simulator import CorrelationFactor
from windsight.data.power_curve import PowerCurveSample
from windsight.models.distribution import DistributionSnapshot


POWER_CURVE_COLS = [
    "wind_speed", "actual_power", "min_power", "max_power", "expected_power", "timestamp",
]
FACTOR_COLS = [
    "id", "name", "value", "deviation", "deviation_score", "unit", "range_min", "range_max",
]


def power_curve_frame(samples: list[PowerCurveSample]) -> pd.DataFrame:
    """One row per sample; missing actual power becomes NaN."""
    df = pd.DataFrame([s.to_dict() for s in samples], columns=POWER_CURVE_COLS)
    df["actual_power"] = df["actual_power"].astype(float)
    return df


def factors_frame(factors: list[CorrelationFactor]) -> pd.DataFrame:
    rows = [
        {
            "id": f.id,
            "name": f.name,
            "value": f.value,
            "deviation": f.deviation,
            "deviation_score": f.deviation_score,
            "unit": f.unit,
            "range_min": f.normal_range.min,
            "range_max": f.normal_range.max,
        }
        for f in factors
    ]
    return pd.DataFrame(rows, columns=FACTOR_COLS)


def history_frame(factors: list[CorrelationFactor]) -> pd.DataFrame:
    """
    Wide history table: one row per time label, one column per factor id.

    Factors are ticked together, so histories are aligned by position and
    share the first factor's time labels.
    """
    if not factors:
        return pd.DataFrame(columns=["time"])
    df = pd.DataFrame({"time": [p.time for p in factors[0].history]})
    for f in factors:
        df[f.id] = [p.value for p in f.history]
    return df


def distribution_frame(snapshot: DistributionSnapshot) -> pd.DataFrame:
    """Reference and actual densities merged on the shared value grid."""
    reference = pd.DataFrame([asdict(p) for p in snapshot.reference])
    actual = pd.DataFrame([asdict(p) for p in snapshot.actual])
    return pd.DataFrame({
        "value": reference["value"],
        "reference_density": reference["density"],
        "actual_density": actual["density"],
    })
