"""Command line for generating .3d primitive files."""
from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from . import analysis, config
from .errors import PrimgenError
from .io3d import read_mesh, write_mesh
from .params import ValidationPolicy
from .shapes import GENERATORS, get_generator

logger = logging.getLogger(__name__)

_DEF_HELP = """
Examples:
  primgen box 2 1 box.3d
  primgen plane 4 8 plane.3d --double-sided
  primgen sphere 1 16 8 sphere.3d
  primgen cone 1 2 16 4 cone.3d
  primgen info sphere.3d
"""


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="primgen", description="primgen: primitive mesh generator",
                                epilog=_DEF_HELP, formatter_class=argparse.RawTextHelpFormatter)
    p.add_argument("-v", "--verbose", action="count", default=0,
                   help="Log more (-v info, -vv debug)")
    sub = p.add_subparsers(dest="command", metavar="<shape>")
    sub.required = True

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--no-count", action="store_true",
                        help="Omit the leading vertex-count line")
    common.add_argument("--min-radius", type=float, default=None,
                        help=f"Smallest accepted radius (default {config.MIN_RADIUS:g})")

    for name, gen in GENERATORS.items():
        sp = sub.add_parser(name, parents=[common], help=f"{name} {' '.join(gen.parameter_names)} <output>")
        for pname in gen.parameter_names:
            sp.add_argument(pname)
        sp.add_argument("output", help="Output .3d path")
        if name == "plane":
            sp.add_argument("--double-sided", action="store_true",
                            help="Also emit the back side of every cell")

    ip = sub.add_parser("info", help="Summarise an existing .3d file")
    ip.add_argument("path")
    return p


def _configure_logging(verbose: int) -> None:
    if verbose >= 2:
        level = logging.DEBUG
    elif verbose == 1:
        level = logging.INFO
    else:
        level = getattr(logging, config.LOG_LEVEL, logging.WARNING)
    logging.basicConfig(level=level, format=config.LOG_FORMAT)


def _policy(args) -> Optional[ValidationPolicy]:
    if args.min_radius is None:
        return None
    return ValidationPolicy(min_magnitudes={"radius": args.min_radius})


def _run_shape(args) -> int:
    gen = get_generator(args.command)
    options = {"double_sided": True} if getattr(args, "double_sided", False) else {}
    params = gen.parse([getattr(args, n) for n in gen.parameter_names], **options)
    mesh = gen.generate(params, _policy(args))
    header = False if args.no_count else None
    path = write_mesh(mesh, args.output, header=header)
    print(f"Figure generated successfully: {path}")
    print(f"Total: {mesh.vertex_count} vertices ({mesh.triangle_count} triangles)")
    return 0


def _run_info(args) -> int:
    mesh = read_mesh(args.path)
    print(f"{args.path}: {mesh.vertex_count} vertices ({mesh.triangle_count} triangles)")
    if mesh.triangle_count:
        lo, hi = mesh.bounds()
        print("bounds: ({:g}, {:g}, {:g}) - ({:g}, {:g}, {:g})".format(*lo, *hi))
        print(f"surface area: {analysis.surface_area(mesh):.6g}")
        print(f"signed volume: {analysis.signed_volume(mesh):.6g}")
        bad = analysis.degenerate_triangles(mesh)
        if len(bad):
            print(f"degenerate triangles: {len(bad)}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    _configure_logging(args.verbose)
    try:
        if args.command == "info":
            return _run_info(args)
        return _run_shape(args)
    except (PrimgenError, OSError) as e:
        logger.debug("%s failed", args.command, exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
