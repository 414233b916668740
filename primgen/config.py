import logging
import os
import pathlib

logger = logging.getLogger(__name__)


def _env_flag(name: str) -> bool:
    return os.environ.get(name, "").strip().lower() in ("1", "true", "yes")


def env_number(name: str, default, kind=float):
    """Read ``name`` as ``kind``; unset or unparsable values give ``default``."""
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return kind(raw)
    except ValueError:
        logger.warning("ignoring %s=%r: not %s, using %r",
                       name, raw, "an integer" if kind is int else "a number", default)
        return default


# Relative output paths are resolved against this directory when it is set
_output_dir = os.environ.get("PRIMGEN_OUTPUT_DIR", "").strip()
OUTPUT_DIR = pathlib.Path(_output_dir) if _output_dir else None

# Set PRIMGEN_NO_COUNT=1 to omit the leading vertex-count line of .3d files
WRITE_COUNT_HEADER = not _env_flag("PRIMGEN_NO_COUNT")

MIN_RADIUS = env_number("PRIMGEN_MIN_RADIUS", 0.01, float)
MIN_COUNT = env_number("PRIMGEN_MIN_COUNT", 1, int)

LOG_LEVEL = os.environ.get("PRIMGEN_LOG_LEVEL", "WARNING").strip().upper()
LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"
