import math

import pytest

from primgen import config
from primgen.errors import ParameterError
from primgen.params import (
    BoxParams,
    ConeParams,
    PlaneParams,
    SphereParams,
    ValidationPolicy,
    validate,
)


def test_radius_zero_rejected() -> None:
    with pytest.raises(ParameterError) as exc:
        validate(SphereParams(0.0, 8, 4))
    assert exc.value.shape == "sphere"
    assert exc.value.parameter == "radius"
    assert exc.value.value == 0.0


def test_radius_minimum_is_inclusive() -> None:
    params = SphereParams(0.01, 8, 4)
    assert validate(params) is params


def test_radius_below_minimum_names_bound_and_value() -> None:
    with pytest.raises(ParameterError) as exc:
        validate(ConeParams(0.005, 1.0, 8, 2))
    assert str(exc.value) == "cone: radius must be >= 0.01 (got 0.005)"
    assert exc.value.bound == ">= 0.01"


def test_divisions_boundary() -> None:
    with pytest.raises(ParameterError) as exc:
        validate(BoxParams(1.0, 0))
    assert exc.value.parameter == "divisions"
    validate(BoxParams(1.0, 1))
    validate(PlaneParams(1.0, 1))


@pytest.mark.parametrize("params, name", [
    (BoxParams(-1.0, 2), "length"),
    (PlaneParams(0.0, 2), "length"),
    (ConeParams(1.0, 0.0, 8, 2), "height"),
    (ConeParams(1.0, 2.0, 0, 2), "slices"),
    (SphereParams(1.0, 8, -3), "stacks"),
    (SphereParams(math.inf, 8, 4), "radius"),
    (SphereParams(math.nan, 8, 4), "radius"),
])
def test_invalid_parameter_is_named(params, name) -> None:
    with pytest.raises(ParameterError) as exc:
        validate(params)
    assert exc.value.parameter == name


def test_counts_must_be_integers() -> None:
    with pytest.raises(ParameterError, match="an integer"):
        validate(SphereParams(1.0, 8.5, 4))
    with pytest.raises(ParameterError):
        validate(BoxParams(1.0, True))


def test_parameter_error_is_value_error() -> None:
    with pytest.raises(ValueError):
        validate(BoxParams("big", 1))


def test_custom_policy() -> None:
    strict = ValidationPolicy(min_magnitudes={"radius": 0.5, "height": 1.0}, min_count=3)
    with pytest.raises(ParameterError):
        validate(SphereParams(0.4, 8, 4), strict)
    with pytest.raises(ParameterError):
        validate(ConeParams(1.0, 0.5, 8, 4), strict)
    with pytest.raises(ParameterError, match=">= 3"):
        validate(SphereParams(1.0, 2, 4), strict)
    validate(ConeParams(0.5, 1.0, 3, 3), strict)


def test_policy_count_never_below_one() -> None:
    with pytest.raises(ParameterError):
        validate(BoxParams(1.0, 0), ValidationPolicy(min_count=0))


def test_default_policy_reads_config(monkeypatch) -> None:
    monkeypatch.setattr(config, "MIN_RADIUS", 0.5)
    with pytest.raises(ParameterError, match=">= 0.5"):
        validate(SphereParams(0.2, 8, 4))


def test_double_sided_must_be_bool() -> None:
    validate(PlaneParams(1.0, 1, True))
    with pytest.raises(ParameterError, match="True or False"):
        validate(PlaneParams(1.0, 1, 1))


def test_bad_environment_numbers_fall_back(monkeypatch) -> None:
    monkeypatch.setenv("PRIMGEN_MIN_RADIUS", "abc")
    monkeypatch.setenv("PRIMGEN_MIN_COUNT", "2.5")
    assert config.env_number("PRIMGEN_MIN_RADIUS", 0.01, float) == 0.01
    assert config.env_number("PRIMGEN_MIN_COUNT", 1, int) == 1
    monkeypatch.setenv("PRIMGEN_MIN_RADIUS", " 0.25 ")
    assert config.env_number("PRIMGEN_MIN_RADIUS", 0.01, float) == 0.25
    monkeypatch.delenv("PRIMGEN_MIN_COUNT")
    assert config.env_number("PRIMGEN_MIN_COUNT", 1, int) == 1
