"""
Procedural primitives: box, plane, sphere and cone.

Every generator returns a fresh, immutable Mesh whose triangles are wound
counter-clockwise when seen from outside the solid (from +Y for the plane).
All of them build on ``emit_quad``; the sphere poles and the cone apex
collapse one edge of their cells to a single point, and there one triangle
per cell is emitted instead of a quad.

Conventions: +Y is up. Angles around the Y axis start on +Z and grow
towards +X, so seen from outside with +Y up the angle increases to the
right.
"""
from __future__ import annotations

import logging
import math
from abc import ABC, abstractmethod
from dataclasses import fields
from typing import Callable, Dict, List, Optional, Sequence, Tuple, Type

from .errors import ParameterError, UnknownShapeError
from .mesh import Mesh, Triangle, Vertex, emit_quad
from .params import (
    COUNT,
    MAGNITUDE,
    BoxParams,
    ConeParams,
    PlaneParams,
    SphereParams,
    ValidationPolicy,
    validate,
)

logger = logging.getLogger(__name__)


def _grid(length: float, divisions: int) -> List[float]:
    """Cell edges from -length/2 to +length/2, both ends exact."""
    half = length / 2.0
    step = length / divisions
    edges = [-half + i * step for i in range(divisions)]
    edges.append(half)
    return edges


def _ring(radius: float, y: float, slices: int) -> List[Vertex]:
    """``slices + 1`` points on a horizontal circle; the last repeats the first."""
    step = 2.0 * math.pi / slices
    pts = [
        Vertex(radius * math.sin(j * step), y, radius * math.cos(j * step))
        for j in range(slices)
    ]
    pts.append(pts[0])
    return pts


# -----------------------
# Generator interface
# -----------------------

class ShapeGenerator(ABC):
    """One primitive: knows its parameters and how to tessellate them."""

    name: str = ""
    params_type: Type

    @property
    def parameter_names(self) -> Tuple[str, ...]:
        """Required parameters, in command-line order."""
        return tuple(f.name for f in fields(self.params_type)
                     if f.metadata.get("kind") in (MAGNITUDE, COUNT))

    def parse(self, values: Sequence[str], **options) -> object:
        """Build the parameter object from positional string values."""
        names = self.parameter_names
        if len(values) != len(names):
            raise ParameterError(
                self.name, "parameters",
                f"exactly {len(names)} values ({' '.join(names)})",
                list(values))
        kinds = {f.name: f.metadata.get("kind") for f in fields(self.params_type)}
        kw = {}
        for name, raw in zip(names, values):
            kw[name] = _convert(self.name, name, raw, int if kinds[name] == COUNT else float)
        kw.update(options)
        return self.params_type(**kw)

    def generate(self, params, policy: Optional[ValidationPolicy] = None) -> Mesh:
        if not isinstance(params, self.params_type):
            raise TypeError(
                f"{self.name} expects {self.params_type.__name__}, "
                f"got {type(params).__name__}")
        validate(params, policy)
        out: List[Triangle] = []
        self.build(params, out)
        logger.debug("%s %s: %d triangles", self.name, params, len(out))
        return Mesh(tuple(out), self.name)

    @abstractmethod
    def build(self, params, out: List[Triangle]) -> None:
        """Append the triangles of an already validated shape to ``out``."""

    @abstractmethod
    def expected_triangles(self, params) -> int:
        """Triangle count ``build`` emits for ``params``."""


def _convert(shape: str, name: str, raw, kind: Callable):
    if not isinstance(raw, str):
        return raw
    try:
        return kind(raw)
    except ValueError:
        expected = "an integer" if kind is int else "a number"
        raise ParameterError(shape, name, expected, raw) from None


# -----------------------
# Box
# -----------------------

# Each face maps local (u, v) to 3D. With u to the right and v up as seen
# from outside, u x v points along the outward normal.
_BOX_FACES: Tuple[Tuple[str, Callable[[float, float, float], Vertex]], ...] = (
    ("front", lambda u, v, h: Vertex(u, v, h)),      # +Z
    ("back", lambda u, v, h: Vertex(-u, v, -h)),     # -Z
    ("right", lambda u, v, h: Vertex(h, v, -u)),     # +X
    ("left", lambda u, v, h: Vertex(-h, v, u)),      # -X
    ("top", lambda u, v, h: Vertex(u, h, -v)),       # +Y
    ("bottom", lambda u, v, h: Vertex(u, -h, v)),    # -Y
)


class BoxGenerator(ShapeGenerator):
    """Axis-aligned cube of side ``length`` centred at the origin.

    Faces are emitted one after another (front, back, right, left, top,
    bottom), each as a ``divisions`` x ``divisions`` grid of quads, rows of
    cells from bottom to top.
    """

    name = "box"
    params_type = BoxParams

    def build(self, params: BoxParams, out: List[Triangle]) -> None:
        edges = _grid(params.length, params.divisions)
        half = params.length / 2.0
        n = params.divisions
        for _face, corner in _BOX_FACES:
            for j in range(n):
                v0, v1 = edges[j], edges[j + 1]
                for i in range(n):
                    u0, u1 = edges[i], edges[i + 1]
                    emit_quad(out,
                              corner(u0, v0, half), corner(u1, v0, half),
                              corner(u0, v1, half), corner(u1, v1, half))

    def expected_triangles(self, params: BoxParams) -> int:
        return 12 * params.divisions ** 2


# -----------------------
# Plane
# -----------------------

class PlaneGenerator(ShapeGenerator):
    """Square on the XZ plane (y = 0), front side facing +Y."""

    name = "plane"
    params_type = PlaneParams

    def build(self, params: PlaneParams, out: List[Triangle]) -> None:
        edges = _grid(params.length, params.divisions)
        n = params.divisions
        for j in range(n):
            # -Z is "up" when looking down from +Y with +X to the right
            z0, z1 = -edges[j], -edges[j + 1]
            for i in range(n):
                x0, x1 = edges[i], edges[i + 1]
                p1 = Vertex(x0, 0.0, z0)
                p2 = Vertex(x1, 0.0, z0)
                p3 = Vertex(x0, 0.0, z1)
                p4 = Vertex(x1, 0.0, z1)
                emit_quad(out, p1, p2, p3, p4)
                if params.double_sided:
                    # swapping p2/p3 mirrors both triangles
                    emit_quad(out, p1, p3, p2, p4)

    def expected_triangles(self, params: PlaneParams) -> int:
        per_side = 2 * params.divisions ** 2
        return 2 * per_side if params.double_sided else per_side


# -----------------------
# Sphere
# -----------------------

class SphereGenerator(ShapeGenerator):
    """UV sphere centred at the origin with its poles on the Y axis.

    Stack ``i`` spans latitudes ``pi/2 - i*pi/stacks`` down to
    ``pi/2 - (i+1)*pi/stacks``. The first and last stacks touch a pole, so
    their upper (resp. lower) edge has zero length; each of their cells is
    a single triangle fanning from the pole. Interior stacks are quads.
    """

    name = "sphere"
    params_type = SphereParams

    def build(self, params: SphereParams, out: List[Triangle]) -> None:
        r, slices, stacks = params.radius, params.slices, params.stacks
        if stacks < 2:
            logger.warning("sphere with %d stack has no non-degenerate cells; "
                           "emitting an empty mesh", stacks)
            return
        north = Vertex(0.0, r, 0.0)
        south = Vertex(0.0, -r, 0.0)
        step = math.pi / stacks
        # rings[i] is the circle at the top edge of stack i; rings 0 and
        # `stacks` are the poles and never built.
        rings: Dict[int, List[Vertex]] = {}
        for i in range(1, stacks):
            phi = math.pi / 2.0 - i * step
            rings[i] = _ring(r * math.cos(phi), r * math.sin(phi), slices)

        for i in range(stacks):
            for j in range(slices):
                if i == 0:
                    lower = rings[1]
                    out.append(Triangle(lower[j], lower[j + 1], north))
                elif i == stacks - 1:
                    upper = rings[i]
                    out.append(Triangle(south, upper[j + 1], upper[j]))
                else:
                    upper, lower = rings[i], rings[i + 1]
                    emit_quad(out, lower[j], lower[j + 1], upper[j], upper[j + 1])

    def expected_triangles(self, params: SphereParams) -> int:
        if params.stacks < 2:
            return 0
        return 2 * params.slices * (params.stacks - 2) + 2 * params.slices


# -----------------------
# Cone
# -----------------------

class ConeGenerator(ShapeGenerator):
    """Right circular cone, base disc on y = 0 and apex at (0, height, 0).

    The base cap is emitted first as a fan around the base centre, then the
    lateral surface band by band from the base up. The radius shrinks
    linearly with height; the top band ends in the apex and is emitted as
    one triangle per slice.
    """

    name = "cone"
    params_type = ConeParams

    def build(self, params: ConeParams, out: List[Triangle]) -> None:
        r, h = params.radius, params.height
        slices, stacks = params.slices, params.stacks
        centre = Vertex(0.0, 0.0, 0.0)
        apex = Vertex(0.0, h, 0.0)
        rings = [
            _ring(r * (1.0 - k / stacks), k * h / stacks, slices)
            for k in range(stacks)
        ]

        base = rings[0]
        for j in range(slices):
            # reversed so the cap faces -Y
            out.append(Triangle(centre, base[j + 1], base[j]))

        for k in range(stacks):
            lower = rings[k]
            for j in range(slices):
                if k == stacks - 1:
                    out.append(Triangle(lower[j], lower[j + 1], apex))
                else:
                    upper = rings[k + 1]
                    emit_quad(out, lower[j], lower[j + 1], upper[j], upper[j + 1])

    def expected_triangles(self, params: ConeParams) -> int:
        s = params.slices
        return s + 2 * s * (params.stacks - 1) + s


# -----------------------
# Registry
# -----------------------

GENERATORS: Dict[str, ShapeGenerator] = {
    g.name: g for g in (BoxGenerator(), PlaneGenerator(), SphereGenerator(), ConeGenerator())
}


def get_generator(name: str) -> ShapeGenerator:
    try:
        return GENERATORS[name.lower()]
    except KeyError:
        raise UnknownShapeError(name, sorted(GENERATORS)) from None


def generate(shape: str, values: Sequence, policy: Optional[ValidationPolicy] = None,
             **options) -> Mesh:
    """Parse positional ``values`` for ``shape``, validate, and tessellate."""
    gen = get_generator(shape)
    return gen.generate(gen.parse(values, **options), policy)


def box(length: float = 1.0, divisions: int = 1, policy: Optional[ValidationPolicy] = None) -> Mesh:
    return GENERATORS["box"].generate(BoxParams(length, divisions), policy)


def plane(length: float = 1.0, divisions: int = 1, double_sided: bool = False,
          policy: Optional[ValidationPolicy] = None) -> Mesh:
    return GENERATORS["plane"].generate(PlaneParams(length, divisions, double_sided), policy)


def sphere(radius: float = 1.0, slices: int = 16, stacks: int = 8,
           policy: Optional[ValidationPolicy] = None) -> Mesh:
    return GENERATORS["sphere"].generate(SphereParams(radius, slices, stacks), policy)


def cone(radius: float = 1.0, height: float = 2.0, slices: int = 16, stacks: int = 4,
         policy: Optional[ValidationPolicy] = None) -> Mesh:
    return GENERATORS["cone"].generate(ConeParams(radius, height, slices, stacks), policy)
