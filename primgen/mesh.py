"""
Value types for flat triangle-soup meshes.

A Mesh here is deliberately simple: an ordered tuple of triangles, each one
holding its three corner positions by value. There is no vertex sharing and
no index buffer, so the emission order of triangles *is* the data, and the
order of the three corners inside a triangle is its winding.

The quad emitter at the bottom of this module is the single place where a
four-corner cell is split into triangles; every shape generator goes
through it.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterator, List, Sequence, Tuple

import numpy as np

Vec3 = Tuple[float, float, float]

# -----------------------------
# Small vector utilities
# -----------------------------

def v_sub(a: Sequence[float], b: Sequence[float]) -> Vec3:
    return (a[0] - b[0], a[1] - b[1], a[2] - b[2])


def v_dot(a: Sequence[float], b: Sequence[float]) -> float:
    return a[0] * b[0] + a[1] * b[1] + a[2] * b[2]


def v_cross(a: Sequence[float], b: Sequence[float]) -> Vec3:
    return (
        a[1] * b[2] - a[2] * b[1],
        a[2] * b[0] - a[0] * b[2],
        a[0] * b[1] - a[1] * b[0],
    )


def v_len(a: Sequence[float]) -> float:
    return math.sqrt(v_dot(a, a))


# --------------
# Value types
# --------------

@dataclass(frozen=True)
class Vertex:
    x: float
    y: float
    z: float

    def __iter__(self) -> Iterator[float]:
        return iter((self.x, self.y, self.z))

    def __getitem__(self, i: int) -> float:
        return (self.x, self.y, self.z)[i]

    def astuple(self) -> Vec3:
        return (self.x, self.y, self.z)


@dataclass(frozen=True)
class Triangle:
    """Three corners in winding order (CCW seen from the front side)."""
    a: Vertex
    b: Vertex
    c: Vertex

    def __iter__(self) -> Iterator[Vertex]:
        return iter((self.a, self.b, self.c))

    def normal(self) -> Vec3:
        """Unnormalized right-hand normal; its length is twice the area."""
        return v_cross(v_sub(self.b, self.a), v_sub(self.c, self.a))

    def area(self) -> float:
        return 0.5 * v_len(self.normal())

    def reversed(self) -> "Triangle":
        return Triangle(self.a, self.c, self.b)


@dataclass(frozen=True)
class Mesh:
    triangles: Tuple[Triangle, ...] = ()
    name: str = "mesh"

    def __post_init__(self):
        # accept any sequence from callers, store it frozen
        if not isinstance(self.triangles, tuple):
            object.__setattr__(self, "triangles", tuple(self.triangles))

    def __len__(self) -> int:
        return len(self.triangles)

    def __iter__(self) -> Iterator[Triangle]:
        return iter(self.triangles)

    @property
    def triangle_count(self) -> int:
        return len(self.triangles)

    @property
    def vertex_count(self) -> int:
        return 3 * len(self.triangles)

    def vertices(self) -> Iterator[Vertex]:
        """All corners in emission order; every 3 consecutive form a triangle."""
        for tri in self.triangles:
            yield tri.a
            yield tri.b
            yield tri.c

    def bounds(self) -> Tuple[Vec3, Vec3]:
        if not self.triangles:
            raise ValueError(f"mesh {self.name!r} is empty and has no bounds")
        pts = self.as_array().reshape(-1, 3)
        lo, hi = pts.min(axis=0), pts.max(axis=0)
        return tuple(float(v) for v in lo), tuple(float(v) for v in hi)

    def as_array(self) -> np.ndarray:
        """Positions as a float array of shape (triangle_count, 3, 3)."""
        if not self.triangles:
            return np.zeros((0, 3, 3), dtype=float)
        return np.array(
            [[tuple(v) for v in tri] for tri in self.triangles], dtype=float
        )

    @classmethod
    def from_vertices(cls, vertices: Sequence[Vertex], name: str = "mesh") -> "Mesh":
        """Group a flat vertex sequence into triangles, three at a time."""
        if len(vertices) % 3:
            raise ValueError(
                f"vertex count {len(vertices)} is not a multiple of 3")
        tris = [
            Triangle(vertices[i], vertices[i + 1], vertices[i + 2])
            for i in range(0, len(vertices), 3)
        ]
        return cls(tuple(tris), name)


# -----------------------
# Quad emitter
# -----------------------

def emit_quad(out: List[Triangle], p1: Vertex, p2: Vertex, p3: Vertex, p4: Vertex) -> None:
    """Append the two triangles of the quad p1-p2-p4-p3 to ``out``.

        p3 --- p4
        |    / |
        |   /  |
        p1 --- p2

    The diagonal is always p1-p4, giving (p1, p2, p4) and (p1, p4, p3).
    Seen from the side where the picture above reads as drawn, both come out
    counter-clockwise, so callers pick the corner order that puts that side
    outward. Nothing is checked: collinear or non-planar corners yield
    degenerate or twisted triangles.
    """
    out.append(Triangle(p1, p2, p4))
    out.append(Triangle(p1, p4, p3))
