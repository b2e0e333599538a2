"""
WindSight - Monitoring Pipeline
Command-line front end for the synthetic telemetry and anomaly-scoring generator.

Usage:
    python main.py --mode curve --unit 4
    python main.py --mode live --unit 6 --ticks 3 --interval 1
    python main.py --mode distribution --unit 6 --factor generator
"""

import argparse
import asyncio

from windsight.data.factor_simulator import FACTOR_SPECS_BY_ID, initialize_factors, with_value
from windsight.data.power_curve import generate_power_curve_samples, performance_ratio
from windsight.data.unit_registry import get_unit, list_units
from windsight.models.distribution import compute_distribution, deviation_severity, interpret
from windsight.models.llm_explainer import DEFAULT_MODEL, FactorExplainer
from windsight.utils.frames import distribution_frame, factors_frame, power_curve_frame
from windsight.utils.session import MonitoringSession


CONFIG = {
    "unit_id": 1,
    "point_hint": 200,
    "tick_interval": 5.0,   # seconds between factor updates
    "ticks": 6,
    "factor": "generator",
    "seed": None,
    "llm_model": DEFAULT_MODEL,
}


def show_units():
    print("=" * 60)
    print("MONITORED UNITS")
    print("=" * 60)
    for unit in list_units():
        print(f"  {unit.name:<8} {unit.status.upper():<9} yield {unit.current_yield:5.1f}%")


def show_power_curve(unit_id):
    unit = get_unit(unit_id)
    samples = generate_power_curve_samples(unit.id, CONFIG["point_hint"])
    df = power_curve_frame(samples)

    print(f"[PowerCurve] {unit.name}: {len(df)} samples | "
          f"{df['actual_power'].notna().sum()} with actual power")
    print(f"[PowerCurve] Performance ratio: {performance_ratio(samples):.1%}")
    below = (df["actual_power"] < df["min_power"]).sum()
    print(f"[PowerCurve] Samples below NBM band: {below}")
    print(df[["wind_speed", "expected_power", "min_power", "max_power", "actual_power"]]
          .iloc[::8].to_string(index=False))


def print_factors(session):
    print(f"\n[Session] {session.unit.name} tick {session.tick_index}")
    print(factors_frame(session.factors)[["name", "value", "unit", "deviation", "deviation_score"]]
          .to_string(index=False))


def show_factors(unit_id):
    factors = initialize_factors(unit_id)
    print(factors_frame(factors).to_string(index=False))


async def run_live(unit_id):
    session = MonitoringSession(
        unit_id,
        interval=CONFIG["tick_interval"],
        seed=CONFIG["seed"],
        point_hint=CONFIG["point_hint"],
        on_tick=print_factors,
    )
    print_factors(session)
    await session.run_for(CONFIG["ticks"])
    return session


def build_distribution(unit_id, factor_id, value=None):
    unit = get_unit(unit_id)
    factor = next(f for f in initialize_factors(unit.id) if f.id == factor_id)
    if value is not None:
        factor = with_value(factor, value)
    return unit, factor, compute_distribution(factor, unit.id)


def show_distribution(unit_id, factor_id, value=None):
    unit, factor, snapshot = build_distribution(unit_id, factor_id, value)

    print("=" * 60)
    print(f"DISTRIBUTION ANALYSIS: {factor.name} ({unit.name})")
    print("=" * 60)
    print(f"  Value: {factor.value:.1f} {factor.unit} | score {factor.deviation_score:.1f}% "
          f"({deviation_severity(factor.deviation_score)})")
    print(f"  Reference (NBM): mean {snapshot.reference_mean:.2f} | std {snapshot.reference_std_dev:.2f}")
    print(f"  Actual:          mean {snapshot.actual_mean:.2f} | std {snapshot.actual_std_dev:.2f}")
    print(f"  {interpret(factor)}")
    print(distribution_frame(snapshot).iloc[::10].to_string(index=False))


def explain(unit_id, factor_id, value=None):
    unit, factor, snapshot = build_distribution(unit_id, factor_id, value)
    explainer = FactorExplainer(model=CONFIG["llm_model"])

    print("[LLM] Generating distribution explanation...")
    print(explainer.explain_distribution(unit, factor, snapshot))

    print("\n[LLM] Generating fleet summary...")
    units = list_units()
    factor_sets = {u.id: initialize_factors(u.id) for u in units}
    print(explainer.fleet_summary(units, factor_sets))


def main():
    parser = argparse.ArgumentParser()
    parser.add_argument("--mode", choices=["units", "curve", "factors", "live", "distribution", "explain"],
                        default="live")
    parser.add_argument("--unit", type=int, default=CONFIG["unit_id"])
    parser.add_argument("--factor", choices=sorted(FACTOR_SPECS_BY_ID), default=CONFIG["factor"])
    parser.add_argument("--value", type=float, default=None, help="Override the factor's current value")
    parser.add_argument("--ticks", type=int, default=CONFIG["ticks"])
    parser.add_argument("--interval", type=float, default=CONFIG["tick_interval"])
    parser.add_argument("--seed", type=int, default=CONFIG["seed"])
    parser.add_argument("--model", type=str, default=CONFIG["llm_model"])
    args = parser.parse_args()

    CONFIG["unit_id"] = args.unit
    CONFIG["ticks"] = args.ticks
    CONFIG["tick_interval"] = args.interval
    CONFIG["seed"] = args.seed
    CONFIG["llm_model"] = args.model

    print("=" * 60)
    print("  WindSight - Wind Turbine Monitoring")
    print("  Synthetic Telemetry + NBM Deviation Scoring")
    print("=" * 60)

    if args.mode == "units":
        show_units()
    elif args.mode == "curve":
        show_power_curve(args.unit)
    elif args.mode == "factors":
        show_factors(args.unit)
    elif args.mode == "live":
        asyncio.run(run_live(args.unit))
    elif args.mode == "distribution":
        show_distribution(args.unit, args.factor, args.value)
    elif args.mode == "explain":
        explain(args.unit, args.factor, args.value)

    print("\n✅ WindSight run complete.")


if __name__ == "__main__":
    main()
