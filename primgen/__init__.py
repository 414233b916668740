"""
primgen: procedural triangle meshes for simple primitives.

Box, plane, sphere and cone generators producing flat triangle soups with
counter-clockwise outward winding, plus a reader/writer for the plain-text
``.3d`` vertex format.

    >>> from primgen import sphere, write_mesh
    >>> mesh = sphere(radius=1.0, slices=16, stacks=8)
    >>> mesh.triangle_count
    224
    >>> write_mesh(mesh, "sphere.3d")
"""
from .errors import (
    MeshFormatError,
    MeshWriteError,
    ParameterError,
    PrimgenError,
    UnknownShapeError,
)
from .io3d import dumps, loads, read_mesh, write_mesh
from .mesh import Mesh, Triangle, Vertex, emit_quad
from .params import (
    BoxParams,
    ConeParams,
    PlaneParams,
    SphereParams,
    ValidationPolicy,
    validate,
)
from .shapes import (
    GENERATORS,
    BoxGenerator,
    ConeGenerator,
    PlaneGenerator,
    ShapeGenerator,
    SphereGenerator,
    box,
    cone,
    generate,
    get_generator,
    plane,
    sphere,
)

__version__ = "0.1.0"
