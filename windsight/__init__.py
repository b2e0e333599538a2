"""
WindSight - synthetic wind-turbine telemetry and NBM deviation scoring.
"""

from windsight.data.factor_simulator import advance_factors, initialize_factors
from windsight.data.power_curve import expected_power, generate_power_curve_samples
from windsight.data.unit_registry import BehaviorProfile, UnknownUnitError, list_units
from windsight.models.distribution import compute_distribution

__version__ = "0.1.0"

__all__ = [
    "BehaviorProfile",
    "UnknownUnitError",
    "advance_factors",
    "compute_distribution",
    "expected_power",
    "generate_power_curve_samples",
    "initialize_factors",
    "list_units",
]
