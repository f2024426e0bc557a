"""
Errors raised by the triangulation pipeline. All of them are fatal for
the current job and are surfaced to the caller unchanged.
"""


class TrimosaicError(ValueError):
    """Base class for every error raised by the core pipeline"""


class DegenerateInputError(TrimosaicError):
    """
    Fewer than three usable points, or a point set whose points are all
    collinear, so no triangle can be formed
    """


class DuplicatePointError(TrimosaicError):
    """The same coordinate appears twice in a point set"""


class InvalidRasterError(TrimosaicError):
    """A raster with a zero dimension or an unsupported shape/dtype"""
