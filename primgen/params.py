"""
Shape parameters and the validation policy applied to them.

Each shape has a small frozen dataclass. Fields are tagged through their
metadata: a *magnitude* is a length in world units (positive finite
float), a *count* is a number of subdivisions (positive integer) and a
*flag* is an optional switch (bool). The validator walks those tags, so
adding a parameter to a shape only needs the tag.
"""
from __future__ import annotations

import math
import numbers
from dataclasses import dataclass, field, fields
from typing import Any, Dict, Mapping, Optional

from . import config
from .errors import ParameterError

MAGNITUDE = "magnitude"
COUNT = "count"
FLAG = "flag"


def magnitude(**kw) -> Any:
    return field(metadata={"kind": MAGNITUDE}, **kw)


def count(**kw) -> Any:
    return field(metadata={"kind": COUNT}, **kw)


def flag(default: bool = False) -> Any:
    return field(default=default, metadata={"kind": FLAG})


@dataclass(frozen=True)
class BoxParams:
    length: float = magnitude()
    divisions: int = count()


@dataclass(frozen=True)
class PlaneParams:
    length: float = magnitude()
    divisions: int = count()
    double_sided: bool = flag()


@dataclass(frozen=True)
class SphereParams:
    radius: float = magnitude()
    slices: int = count()
    stacks: int = count()


@dataclass(frozen=True)
class ConeParams:
    radius: float = magnitude()
    height: float = magnitude()
    slices: int = count()
    stacks: int = count()


# --------------
# Policy
# --------------

def _default_minimums() -> Dict[str, float]:
    return {"radius": config.MIN_RADIUS}


@dataclass(frozen=True)
class ValidationPolicy:
    """Lower bounds applied on top of the hard "strictly positive" rule.

    ``min_magnitudes`` maps a parameter name (``radius``, ``length``,
    ``height``) to an inclusive minimum; names not listed only need to be
    greater than zero. ``min_count`` is the inclusive minimum for every
    subdivision count.
    """
    min_magnitudes: Mapping[str, float] = field(default_factory=_default_minimums)
    min_count: int = field(default_factory=lambda: config.MIN_COUNT)


def default_policy() -> ValidationPolicy:
    return ValidationPolicy()


# --------------
# Validation
# --------------

def shape_name(params) -> str:
    name = type(params).__name__
    return name[:-len("Params")].lower() if name.endswith("Params") else name.lower()


def _check_magnitude(shape: str, name: str, value, minimum: Optional[float]) -> None:
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise ParameterError(shape, name, "a number", value)
    if not math.isfinite(value):
        raise ParameterError(shape, name, "finite", value)
    if value <= 0:
        raise ParameterError(shape, name, "> 0", value)
    if minimum is not None and value < minimum:
        raise ParameterError(shape, name, f">= {minimum:g}", value)


def _check_count(shape: str, name: str, value, minimum: int) -> None:
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise ParameterError(shape, name, "an integer", value)
    minimum = max(minimum, 1)
    if value < minimum:
        raise ParameterError(shape, name, f">= {minimum}", value)


def validate(params, policy: Optional[ValidationPolicy] = None):
    """Raise ParameterError for the first field outside its allowed range.

    Fields are checked in declaration order, which is also the order the
    command line takes them in. Returns ``params`` unchanged on success.
    """
    if policy is None:
        policy = default_policy()
    shape = shape_name(params)
    for f in fields(params):
        kind = f.metadata.get("kind")
        value = getattr(params, f.name)
        if kind == MAGNITUDE:
            _check_magnitude(shape, f.name, value, policy.min_magnitudes.get(f.name))
        elif kind == COUNT:
            _check_count(shape, f.name, value, policy.min_count)
        elif kind == FLAG and not isinstance(value, bool):
            raise ParameterError(shape, f.name, "True or False", value)
    return params
