"""
Selection of the triangulation vertices from an edge-strength field
"""
import logging

import numpy as np

from .errors import DegenerateInputError

logger = logging.getLogger(__name__)


def make_rng(rng=None):
    """
    Normalize a random source: a Generator is used as is, anything else
    (None or an integer seed) seeds a new one
    """
    if isinstance(rng, np.random.Generator):
        return rng
    return np.random.default_rng(rng)


def corner_points(width, height):
    """
    The four canvas corners, without repeats for 1-pixel wide or tall
    canvases

    Returns
    -------
    ndarray(K, 2)
        x coordinates along the first column, y along the second
    """
    corners = []
    for c in [(0, 0), (width-1, 0), (0, height-1), (width-1, height-1)]:
        if c not in corners:
            corners.append(c)
    return np.array(corners, dtype=float)


def sample(field, threshold, rate, max_points, rng=None):
    """
    Pick a random subset of the strong-edge pixels, plus the canvas corners

    Parameters
    ----------
    field: ndarray(M, N)
        Edge strength of every pixel
    threshold: float
        Pixels whose strength is strictly above this are candidates
    rate: float
        Fraction of the candidates to keep
    max_points: int
        Upper bound on the number of returned points, corners included
    rng: numpy.random.Generator or int or None
        Random source; an integer makes the selection reproducible

    Returns
    -------
    ndarray(K, 2)
        Unique points, with x coordinates along the first column and y
        coordinates along the second. Interior samples come first, then
        the corners.
    """
    field = np.asarray(field)
    height, width = field.shape
    rng = make_rng(rng)
    corners = corner_points(width, height)

    candidates = np.argwhere(field > threshold)
    # Corners are added unconditionally below
    on_corner = np.zeros(len(candidates), dtype=bool)
    for x, y in corners:
        on_corner |= (candidates[:, 1] == x) & (candidates[:, 0] == y)
    candidates = candidates[~on_corner]

    target = int(rate*len(candidates))
    target = max(0, min(target, len(candidates), max_points - len(corners)))
    if target > 0:
        choices = rng.choice(len(candidates), size=target, replace=False)
        choices.sort()
        X = np.array(candidates[choices][:, ::-1], dtype=float)
    else:
        X = np.zeros((0, 2))

    # Only reached when max_points < len(corners)
    corners = corners[:max(0, max_points)]
    X = np.concatenate((X, corners), axis=0)
    logger.debug("%d candidates above %s, kept %d points (%d corners)",
                 len(candidates), threshold, len(X), len(corners))
    if len(X) < 3:
        raise DegenerateInputError(
            "need at least 3 points to triangulate, sampled {}".format(len(X)))
    return X
