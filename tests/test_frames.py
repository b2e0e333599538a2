from windsight.data.factor_simulator import advance_factors, initialize_factors
from windsight.data.power_curve import generate_power_curve_samples
from windsight.models.distribution import compute_distribution
from windsight.utils.frames import (
    FACTOR_COLS,
    POWER_CURVE_COLS,
    distribution_frame,
    factors_frame,
    history_frame,
    power_curve_frame,
)


def test_power_curve_frame(rng, now):
    samples = generate_power_curve_samples(4, rng=rng, now=now)
    df = power_curve_frame(samples)
    assert list(df.columns) == POWER_CURVE_COLS
    assert len(df) == len(samples)
    assert df["actual_power"].isna().sum() == sum(s.actual_power is None for s in samples)
    assert df["wind_speed"].is_monotonic_increasing


def test_factors_frame_keeps_order(rng, now):
    factors = initialize_factors(6, rng=rng, now=now)
    df = factors_frame(factors)
    assert list(df.columns) == FACTOR_COLS
    assert df["id"].tolist() == [f.id for f in factors]
    assert df["deviation_score"].is_monotonic_decreasing


def test_history_frame(rng, now):
    factors = initialize_factors(1, rng=rng, now=now)
    factors = advance_factors(1, 1, factors, rng=rng, started_at=now)
    df = history_frame(factors)
    assert df.shape == (20, 5)
    assert set(df.columns) == {"time", "pitch", "rotor", "generator", "windSpeed"}
    pitch = next(f for f in factors if f.id == "pitch")
    assert df["pitch"].iloc[-1] == pitch.value


def test_history_frame_empty():
    assert list(history_frame([]).columns) == ["time"]


def test_distribution_frame(rng, now, factor_factory):
    snapshot = compute_distribution(factor_factory("generator", 88.0), 6)
    df = distribution_frame(snapshot)
    assert list(df.columns) == ["value", "reference_density", "actual_density"]
    assert len(df) == 101
    assert df["reference_density"].idxmax() < df["actual_density"].idxmax()
