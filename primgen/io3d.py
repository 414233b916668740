"""
Reading and writing the ``.3d`` vertex format.

    36                <- optional: total number of vertex lines
    -1.0 -1.0 1.0     <- one vertex per line, "x y z"
    1.0 -1.0 1.0
    1.0 1.0 1.0       <- every 3 consecutive lines are one triangle
    ...

Vertices are written in the mesh's emission order and with Python's default
float formatting, so reading a file back gives the same triangles in the
same order and with the same winding.
"""
from __future__ import annotations

import logging
import os
import pathlib
from typing import Iterable, Iterator, List, Optional, Union

from . import config
from .errors import MeshFormatError, MeshWriteError
from .mesh import Mesh, Vertex

logger = logging.getLogger(__name__)

PathLike = Union[str, pathlib.Path]


# ---------------
# Writer
# ---------------

def format_vertex(v: Vertex) -> str:
    return f"{float(v.x)!r} {float(v.y)!r} {float(v.z)!r}"


def iter_lines(mesh: Mesh, header: bool = True) -> Iterator[str]:
    if header:
        yield str(mesh.vertex_count)
    for v in mesh.vertices():
        yield format_vertex(v)


def dumps(mesh: Mesh, header: bool = True) -> str:
    return "".join(line + "\n" for line in iter_lines(mesh, header))


def resolve_output(path: PathLike) -> pathlib.Path:
    """Place relative paths under ``config.OUTPUT_DIR`` when it is set."""
    p = pathlib.Path(path)
    if config.OUTPUT_DIR is not None and not p.is_absolute():
        p = config.OUTPUT_DIR / p
    return p


def write_mesh(mesh: Mesh, path: PathLike, header: Optional[bool] = None) -> pathlib.Path:
    """Serialize ``mesh`` to ``path`` and return the path written.

    The text is built completely, written to a sibling ``.part`` file and
    moved over ``path`` only once it is whole. Failure to open or write
    raises MeshWriteError chained to the underlying OSError and leaves
    ``path`` untouched.
    """
    if header is None:
        header = config.WRITE_COUNT_HEADER
    out = resolve_output(path)
    text = dumps(mesh, header)
    tmp = out.with_name(out.name + ".part")
    try:
        with open(tmp, "w", encoding="utf-8") as f:
            f.write(text)
        os.replace(tmp, out)
    except OSError as e:
        # never leave a truncated file behind
        tmp.unlink(missing_ok=True)
        raise MeshWriteError(out, e.strerror or str(e)) from e
    logger.info("Figure generated: %s (%d vertices, %d triangles)",
                out, mesh.vertex_count, mesh.triangle_count)
    return out


# ---------------
# Reader
# ---------------

def _parse_vertex(tokens: List[str], lineno: int) -> Vertex:
    if len(tokens) != 3:
        raise MeshFormatError(f"expected 3 coordinates, found {len(tokens)}", lineno)
    try:
        x, y, z = (float(t) for t in tokens)
    except ValueError:
        raise MeshFormatError(f"invalid coordinate in {' '.join(tokens)!r}", lineno) from None
    return Vertex(x, y, z)


def parse_lines(lines: Iterable[str], name: str = "mesh") -> Mesh:
    """Build a Mesh from ``.3d`` lines. The count line may be absent."""
    declared = None
    vertices: List[Vertex] = []
    first = True
    for lineno, line in enumerate(lines, 1):
        tokens = line.split()
        if not tokens:
            continue
        if first and len(tokens) == 1:
            try:
                declared = int(tokens[0])
            except ValueError:
                raise MeshFormatError(f"invalid vertex count {tokens[0]!r}", lineno) from None
            if declared < 0:
                raise MeshFormatError(f"negative vertex count {declared}", lineno)
        else:
            vertices.append(_parse_vertex(tokens, lineno))
        first = False

    if declared is not None and declared != len(vertices):
        raise MeshFormatError(
            f"header declares {declared} vertices but {len(vertices)} were read")
    if len(vertices) % 3:
        raise MeshFormatError(
            f"{len(vertices)} vertices do not form whole triangles")
    return Mesh.from_vertices(vertices, name)


def loads(text: str, name: str = "mesh") -> Mesh:
    return parse_lines(text.splitlines(), name)


def read_mesh(path: PathLike) -> Mesh:
    p = pathlib.Path(path)
    with open(p, "r", encoding="utf-8") as f:
        try:
            mesh = parse_lines(f, p.stem)
        except UnicodeDecodeError as e:
            raise MeshFormatError(f"{p}: not a UTF-8 text file") from e
    logger.info("Loaded model: %s (%d vertices)", p, mesh.vertex_count)
    return mesh
