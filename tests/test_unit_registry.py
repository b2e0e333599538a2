import pytest

from windsight.data.unit_registry import (
    DEFAULT_STATUS_COLOR,
    BehaviorProfile,
    UnknownUnitError,
    get_unit,
    list_units,
    resolve_profile,
    status_color,
)


def test_catalogue_has_six_units_in_order():
    units = list_units()
    assert [u.id for u in units] == [1, 2, 3, 4, 5, 6]
    assert [u.name for u in units] == [f"Unit {i}" for i in range(1, 7)]


def test_static_yield_and_status():
    unit4 = get_unit(4)
    unit6 = get_unit(6)
    assert unit4.status == "warning"
    assert unit4.current_yield == 91.3
    assert unit6.status == "critical"
    assert unit6.current_yield == 80.0


@pytest.mark.parametrize("unit_id,profile", [
    (1, BehaviorProfile.NOMINAL),
    (2, BehaviorProfile.NOMINAL),
    (3, BehaviorProfile.NOMINAL),
    (4, BehaviorProfile.WARNING),
    (5, BehaviorProfile.NOMINAL),
    (6, BehaviorProfile.CRITICAL),
])
def test_resolve_profile(unit_id, profile):
    assert resolve_profile(unit_id) is profile


@pytest.mark.parametrize("bad_id", [0, 7, -1, "1", None, True, 1.0])
def test_unknown_unit_is_signalled(bad_id):
    with pytest.raises(UnknownUnitError) as excinfo:
        resolve_profile(bad_id)
    assert excinfo.value.unit_id == bad_id
    assert "Unknown unit" in str(excinfo.value)


def test_unknown_unit_error_is_a_key_error():
    with pytest.raises(KeyError):
        get_unit(42)


def test_list_units_returns_a_fresh_list():
    units = list_units()
    units.clear()
    assert len(list_units()) == 6


def test_units_are_immutable():
    unit = get_unit(1)
    with pytest.raises(AttributeError):
        unit.status = "critical"


def test_status_color():
    assert status_color("critical") == "rgb(239, 68, 68)"
    assert status_color("normal") == "rgb(34, 197, 94)"
    assert status_color("offline") == DEFAULT_STATUS_COLOR


@pytest.mark.parametrize("bad_id", [True, 1.0, 6.0])
def test_lookalike_ids_do_not_resolve(bad_id):
    with pytest.raises(UnknownUnitError):
        get_unit(bad_id)
