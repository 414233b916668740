"""Exception types raised by primgen."""


class PrimgenError(Exception):
    """Base class for every error primgen raises on purpose."""


class ParameterError(PrimgenError, ValueError):
    """A shape parameter is outside its allowed range."""

    def __init__(self, shape: str, parameter: str, bound: str, value):
        self.shape = shape
        self.parameter = parameter
        self.bound = bound
        self.value = value
        super().__init__(f"{shape}: {parameter} must be {bound} (got {value!r})")


class UnknownShapeError(PrimgenError, ValueError):
    def __init__(self, name: str, known):
        self.name = name
        super().__init__(
            f"unknown shape {name!r}; available shapes: {', '.join(known)}")


class MeshFormatError(PrimgenError, ValueError):
    """A .3d file could not be parsed."""

    def __init__(self, message: str, line: int = None):
        self.line = line
        if line is not None:
            message = f"line {line}: {message}"
        super().__init__(message)


class MeshWriteError(PrimgenError):
    """The output file could not be written."""

    def __init__(self, path, reason: str):
        self.path = path
        super().__init__(f"could not write {path}: {reason}")
