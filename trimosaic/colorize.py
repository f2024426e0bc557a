"""
Pick the fill color of every triangle from the source image
"""
import logging

import numpy as np

from .raster import LUMA_WEIGHTS, as_raster

logger = logging.getLogger(__name__)


def to_gray(colors):
    """
    Luminance-preserving gray version of 8-bit RGB colors

    Parameters
    ----------
    colors: ndarray(M, 3)

    Returns
    -------
    ndarray(M, 3)
        uint8 colors with three equal channels
    """
    colors = np.asarray(colors, dtype=float).reshape(-1, 3)
    gray = np.clip(np.round(colors @ LUMA_WEIGHTS), 0, 255)
    return np.array(np.repeat(gray[:, None], 3, axis=1), dtype=np.uint8)


def sample_centroids(centroids, source):
    """
    Colors of the source pixels under a set of points, truncated to
    integer pixel coordinates and clamped to the image
    """
    height, width = source.shape[0:2]
    centroids = np.asarray(centroids, dtype=float).reshape(-1, 2)
    cols = np.clip(np.trunc(centroids[:, 0]), 0, width-1).astype(int)
    rows = np.clip(np.trunc(centroids[:, 1]), 0, height-1).astype(int)
    return np.array(source[rows, cols, 0:3], dtype=np.uint8)


def colorize(triangulation, source, grayscale=False):
    """
    Color every triangle with the source pixel under its centroid

    Parameters
    ----------
    triangulation: Triangulation
        Enriched in place
    source: ndarray(M, N, 3|4)
        The image the triangulation was sampled from
    grayscale: bool
        Convert the sampled colors to gray

    Returns
    -------
    Triangulation
        The same object, with colors and canvas_shape set
    """
    source = as_raster(source)
    colors = sample_centroids(triangulation.centroids, source)
    if grayscale:
        colors = to_gray(colors)
    triangulation.colors = colors
    triangulation.canvas_shape = source.shape[0:2]
    logger.debug("Colored %d triangles%s", len(colors), " in grayscale" if grayscale else "")
    return triangulation
