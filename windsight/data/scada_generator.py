"""
WindSight - Synthetic SCADA Time-Series Generator
Simulates 5-minute operating history for the monitored units.
"""

from datetime import datetime, timedelta
from typing import Optional

import numpy as np
import pandas as pd

from windsight.data.unit_registry import BehaviorProfile, list_units, resolve_profile


POINTS_PER_HOUR = 12  # 5-min intervals
INTERVAL = timedelta(minutes=5)

# profile -> column -> (base, span) of a uniform draw
PROFILE_RANGES = {
    BehaviorProfile.CRITICAL: {
        "rotor_speed": (8, 3),
        "pitch_angle": (15, 10),
        "generator_temp": (85, 5),
        "wind_speed": (6, 3),
    },
    BehaviorProfile.WARNING: {
        "rotor_speed": (14, 3),
        "pitch_angle": (5, 5),
        "generator_temp": (78, 4),
        "wind_speed": (8, 4),
    },
    BehaviorProfile.NOMINAL: {
        "rotor_speed": (16, 4),
        "pitch_angle": (2, 3),
        "generator_temp": (70, 5),
        "wind_speed": (8, 6),
    },
}

SIGNAL_COLS = ["rotor_speed", "pitch_angle", "generator_temp", "wind_speed"]


def generate_time_series(
    unit_id: int,
    hours: int = 24,
    seed: Optional[int] = None,
    now: Optional[datetime] = None,
) -> pd.DataFrame:
    """
    Generate operating history for one unit.

    Columns (one row per 5-min interval, oldest first):
        - timestamp       : Interval end time
        - time            : Interval index from 0
        - rotor_speed     : Rotor speed (RPM)
        - pitch_angle     : Blade pitch angle (deg)
        - generator_temp  : Generator temperature (C)
        - wind_speed      : Wind speed (m/s)
    """
    profile = resolve_profile(unit_id)
    rng = np.random.default_rng(seed)
    now = now or datetime.now()
    n_points = hours * POINTS_PER_HOUR

    data = {
        "timestamp": [now - (n_points - i) * INTERVAL for i in range(n_points)],
        "time": np.arange(n_points),
    }
    for col in SIGNAL_COLS:
        base, span = PROFILE_RANGES[profile][col]
        data[col] = np.round(base + rng.uniform(0, span, n_points), 1)

    return pd.DataFrame(data)


def generate_fleet_time_series(
    hours: int = 24,
    seed: int = 42,
    now: Optional[datetime] = None,
) -> pd.DataFrame:
    """Operating history for every registered unit, stacked with a unit_id column."""
    now = now or datetime.now()
    frames = []
    for offset, unit in enumerate(list_units()):
        df = generate_time_series(unit.id, hours=hours, seed=seed + offset, now=now)
        df.insert(1, "unit_id", unit.id)
        frames.append(df)

    df = pd.concat(frames, ignore_index=True)
    print(f"[DataGen] Generated {len(df):,} records | {len(frames)} units | "
          f"{hours}h at 5-min intervals")
    return df


if __name__ == "__main__":
    df = generate_fleet_time_series(hours=24)
    df.to_csv("scada_time_series.csv", index=False)
    print(df.head())
    print(df.groupby("unit_id")[SIGNAL_COLS].mean().round(1))
