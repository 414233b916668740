"""Mesh inspection: normals, area, volume and winding checks."""
from __future__ import annotations

from typing import Sequence

import numpy as np

from .mesh import Mesh


def face_normals(mesh: Mesh, normalize: bool = False) -> np.ndarray:
    """Right-hand normals (b - a) x (c - a), shape (n, 3).

    Unnormalized normals have length twice the triangle area. With
    ``normalize=True`` degenerate triangles keep a zero normal.
    """
    tris = mesh.as_array()
    n = np.cross(tris[:, 1] - tris[:, 0], tris[:, 2] - tris[:, 0])
    if normalize:
        lengths = np.linalg.norm(n, axis=1, keepdims=True)
        n = np.divide(n, lengths, out=np.zeros_like(n), where=lengths > 0)
    return n


def triangle_areas(mesh: Mesh) -> np.ndarray:
    return 0.5 * np.linalg.norm(face_normals(mesh), axis=1)


def surface_area(mesh: Mesh) -> float:
    return float(triangle_areas(mesh).sum())


def signed_volume(mesh: Mesh) -> float:
    """
    Signed volume for a closed, consistently oriented triangle mesh.
    Uses origin-based tetrahedron summation: V = sum(dot(a, cross(b,c))) / 6
    Positive when the triangles face outward.
    """
    tris = mesh.as_array()
    if not len(tris):
        return 0.0
    vol6 = np.einsum("ij,ij->i", tris[:, 0], np.cross(tris[:, 1], tris[:, 2]))
    return float(vol6.sum() / 6.0)


def degenerate_triangles(mesh: Mesh, eps: float = 1e-12) -> np.ndarray:
    """Indices of triangles whose area is at most ``eps``."""
    return np.flatnonzero(triangle_areas(mesh) <= eps)


def outward_facing(mesh: Mesh, interior_point: Sequence[float] = (0.0, 0.0, 0.0)) -> np.ndarray:
    """Per-triangle flag: the normal points away from ``interior_point``.

    For a convex solid containing the point this is the same as the triangle
    being counter-clockwise when viewed from outside.
    """
    tris = mesh.as_array()
    centroids = tris.mean(axis=1)
    offsets = centroids - np.asarray(interior_point, dtype=float)
    return np.einsum("ij,ij->i", face_normals(mesh), offsets) > 0


def touching(mesh: Mesh, point: Sequence[float], tol: float = 1e-9) -> np.ndarray:
    """Indices of triangles with at least one corner at ``point``."""
    tris = mesh.as_array()
    dist = np.linalg.norm(tris - np.asarray(point, dtype=float), axis=2)
    return np.flatnonzero((dist <= tol).any(axis=1))
