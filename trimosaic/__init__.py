"""
trimosaic - turn a photograph into a mosaic of Delaunay triangles whose
vertices follow the edges of the image
"""
from .colorize import colorize
from .config import RenderConfig, parse_color
from .delaunay import Triangle, Triangulation, triangulate
from .drawer import draw
from .edges import extract, neighbourhood_mean
from .errors import (DegenerateInputError, DuplicatePointError,
                     InvalidRasterError, TrimosaicError)
from .pipeline import generate, run
from .raster import read_image, save_image
from .sampling import sample

__version__ = "0.1.0"
__all__ = (
    "RenderConfig", "parse_color",
    "extract", "neighbourhood_mean", "sample", "triangulate", "colorize", "draw",
    "generate", "run", "read_image", "save_image",
    "Triangle", "Triangulation",
    "TrimosaicError", "DegenerateInputError", "DuplicatePointError",
    "InvalidRasterError",
)
