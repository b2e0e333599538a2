from datetime import datetime

import numpy as np
import pytest

from windsight.data.factor_simulator import FACTOR_SPECS_BY_ID, CorrelationFactor, compute_deviation


FIXED_NOW = datetime(2024, 6, 1, 12, 0, 0)


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


@pytest.fixture
def now():
    return FIXED_NOW


def make_factor(factor_id, value, history=()):
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
        history=tuple(history),
    )


@pytest.fixture
def factor_factory():
    return make_factor
