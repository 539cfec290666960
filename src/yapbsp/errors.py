"""
Exceptions raised by the yapBSP region engine.

Everything derives from ``BSPError`` so callers can catch the whole family
at once.  Argument errors also derive from ``ValueError``.
"""


class BSPError(Exception):
    """Base class for all yapBSP errors."""


class MathInternalError(BSPError, RuntimeError):
    """An algorithm reached a state that should be unreachable."""

    def __init__(self, message="internal error, please report a bug"):
        super().__init__(message)


class DimensionMismatchError(BSPError, ValueError):
    """A point or vector does not have the dimension of the space."""

    def __init__(self, got, expected):
        self.got = got
        self.expected = expected
        super().__init__(f"dimension mismatch: {got} != {expected}")


class NumberIsTooLargeError(BSPError, ValueError):
    """Interval endpoints given in the wrong order."""

    def __init__(self, value, bound):
        self.value = value
        self.bound = bound
        super().__init__(f"endpoints do not specify an interval: [{bound}, {value}]")


class InconsistentStateAt2PiWrapping(BSPError, ValueError):
    """An arcs tree whose first and last leaves disagree at the 0/2pi seam."""

    def __init__(self):
        super().__init__("inconsistent state at 2π wrapping")


class NonInvertibleTransformError(BSPError, ValueError):
    """An affine transform with a singular linear part."""

    def __init__(self, determinant):
        self.determinant = determinant
        super().__init__(f"non-invertible affine transform, determinant {determinant}")


class RegionFormatError(BSPError, ValueError):
    """A persisted region document is malformed."""
