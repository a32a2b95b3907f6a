import math

import numpy as np
import pytest

from predict_sidecar.domain.entities.errors import DegenerateWindowError
from predict_sidecar.domain.services.scaler import ScaleParameters, Scaler
from tests.conftest import make_points


def test_scaler_derives_parameters_from_window():
    scaler = Scaler(make_points([10, 20, 30]))

    assert scaler.min == 10.0
    assert scaler.max == 30.0
    assert scaler.scale == pytest.approx(0.05)
    assert scaler.offset == pytest.approx(-0.5)


def test_normalize_maps_window_to_unit_range():
    scaler = Scaler(make_points([10, 20, 30]))

    np.testing.assert_allclose(scaler.normalize(), [0.0, 0.5, 1.0])


def test_denormalize_inverts_normalize():
    values = [6512.5, 6514.0, 6509.25, 6520.75]
    scaler = Scaler(make_points(values))

    restored = [scaler.denormalize(v) for v in scaler.normalize()]

    for original, value in zip(values, restored):
        assert math.isclose(original, value, rel_tol=1e-9)
    assert scaler.denormalize(0.5) == pytest.approx(6515.0)


def test_denormalize_extrapolates_outside_window():
    scaler = Scaler(make_points([10, 20, 30]))

    assert scaler.denormalize(1.5) == pytest.approx(40.0)
    assert scaler.denormalize(-0.5) == pytest.approx(0.0)


def test_constant_window_is_degenerate():
    with pytest.raises(DegenerateWindowError) as exc:
        Scaler(make_points([5, 5, 5]))

    assert exc.value.details == {"min": 5.0, "max": 5.0}


def test_empty_window_is_degenerate():
    with pytest.raises(DegenerateWindowError):
        Scaler([])


def test_non_finite_window_is_degenerate():
    with pytest.raises(DegenerateWindowError):
        ScaleParameters.from_values(np.array([1.0, float("inf")]))
