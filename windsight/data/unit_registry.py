"""
WindSight - Unit Registry
Static catalogue of the monitored turbines and their behaviour profiles.
"""

from dataclasses import dataclass
from enum import Enum


class BehaviorProfile(str, Enum):
    """Which synthetic distribution a unit draws its telemetry from."""

    NOMINAL = "nominal"
    WARNING = "warning"
    CRITICAL = "critical"


STATUS_PROFILES = {
    "normal": BehaviorProfile.NOMINAL,
    "warning": BehaviorProfile.WARNING,
    "critical": BehaviorProfile.CRITICAL,
}

STATUS_COLORS = {
    "critical": "rgb(239, 68, 68)",
    "warning": "rgb(251, 191, 36)",
    "normal": "rgb(34, 197, 94)",
}
DEFAULT_STATUS_COLOR = "rgb(148, 163, 184)"


class UnknownUnitError(KeyError):
    """Raised when a unit id is not part of the registry."""

    def __init__(self, unit_id):
        super().__init__(unit_id)
        self.unit_id = unit_id

    def __str__(self) -> str:
        return f"Unknown unit: {self.unit_id!r}"


@dataclass(frozen=True)
class Unit:
    id: int
    name: str
    current_yield: float  # percent
    status: str

    @property
    def profile(self) -> BehaviorProfile:
        return STATUS_PROFILES[self.status]


UNITS = (
    Unit(1, "Unit 1", 97.2, "normal"),
    Unit(2, "Unit 2", 98.5, "normal"),
    Unit(3, "Unit 3", 95.8, "normal"),
    Unit(4, "Unit 4", 91.3, "warning"),
    Unit(5, "Unit 5", 96.7, "normal"),
    Unit(6, "Unit 6", 80.0, "critical"),
)

_UNITS_BY_ID = {unit.id: unit for unit in UNITS}


def list_units() -> list[Unit]:
    """Return the fixed catalogue in display order."""
    return list(UNITS)


def get_unit(unit_id: int) -> Unit:
    # True and 1.0 hash like 1, so only genuine integers may match
    if isinstance(unit_id, bool) or not isinstance(unit_id, int):
        raise UnknownUnitError(unit_id)
    try:
        return _UNITS_BY_ID[unit_id]
    except KeyError:
        raise UnknownUnitError(unit_id) from None


def resolve_profile(unit_id: int) -> BehaviorProfile:
    """Look up the behaviour profile for a unit id, raising UnknownUnitError if absent."""
    return get_unit(unit_id).profile


def status_color(status: str) -> str:
    return STATUS_COLORS.get(status, DEFAULT_STATUS_COLOR)
