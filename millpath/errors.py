"""Exception types raised by the toolpath engine.

Every error here is recoverable at the operation level: the generator
catches ToolpathError, records the message as a warning and moves on to the
next contour or operation.
"""


class ToolpathError(Exception):
    """Base class for errors raised while building a toolpath."""
    pass


class DegenerateGeometryError(ToolpathError):
    """Raised when the tool offset consumes the whole shape."""
    pass


class InvalidContourError(ToolpathError):
    """Raised when an arbitrary contour is open, too short or collapses."""
    pass


class NumericalDegeneracyError(ToolpathError):
    """Raised when offset or intersection math has no usable direction."""
    pass


class InvalidParametersError(ToolpathError, ValueError):
    """Raised for machining parameters or shape sizes that make no sense."""
    pass
