"""
Rasterize a colored triangulation: flat fills, then anti-aliased strokes
on top, over an optional solid background
"""
import logging

import numpy as np
from numba import jit

from .config import RenderConfig

logger = logging.getLogger(__name__)


@jit(nopython=True)
def fill_triangles(canvas, points, simplices, colors, inclusive, painted):
    """
    Scan-convert triangles with the edge-function test. Pixel (x, y) is
    sampled at its integer coordinates. A pixel exactly on an edge passes
    only when that edge is inclusive, and a pixel already marked in
    painted is left alone, so no pixel is painted twice.

    Parameters
    ----------
    canvas: ndarray(M, N, 4)
        float RGBA canvas, painted in place
    points: ndarray(P, 2)
        Vertex coordinates
    simplices: ndarray(T, 3)
        Positively oriented vertex indices
    colors: ndarray(T, 3)
        float RGB fill colors
    inclusive: ndarray(T, 3)
        Whether the edge from vertex k to vertex k+1 owns the pixels on it
    painted: ndarray(M, N)
        bool mask of the pixels filled so far, updated in place
    """
    height = canvas.shape[0]
    width = canvas.shape[1]
    for t in range(simplices.shape[0]):
        ax = points[simplices[t, 0], 0]
        ay = points[simplices[t, 0], 1]
        bx = points[simplices[t, 1], 0]
        by = points[simplices[t, 1], 1]
        cx = points[simplices[t, 2], 0]
        cy = points[simplices[t, 2], 1]
        min_x = max(int(np.floor(min(ax, min(bx, cx)))), 0)
        max_x = min(int(np.ceil(max(ax, max(bx, cx)))), width-1)
        min_y = max(int(np.floor(min(ay, min(by, cy)))), 0)
        max_y = min(int(np.ceil(max(ay, max(by, cy)))), height-1)
        for y in range(min_y, max_y+1):
            py = float(y)
            for x in range(min_x, max_x+1):
                if painted[y, x]:
                    continue
                px = float(x)
                w0 = (bx-ax)*(py-ay) - (by-ay)*(px-ax)
                if w0 < 0 or (w0 == 0 and not inclusive[t, 0]):
                    continue
                w1 = (cx-bx)*(py-by) - (cy-by)*(px-bx)
                if w1 < 0 or (w1 == 0 and not inclusive[t, 1]):
                    continue
                w2 = (ax-cx)*(py-cy) - (ay-cy)*(px-cx)
                if w2 < 0 or (w2 == 0 and not inclusive[t, 2]):
                    continue
                canvas[y, x, 0] = colors[t, 0]
                canvas[y, x, 1] = colors[t, 1]
                canvas[y, x, 2] = colors[t, 2]
                canvas[y, x, 3] = 255.0
                painted[y, x] = True


@jit(nopython=True)
def stroke_segments(canvas, segments, width, color):
    """
    Draw line segments with round caps. The coverage of a pixel is the
    overlap of the unit pixel footprint with the line's cross-section,
    measured along the direction to the nearest point of the segment.

    Parameters
    ----------
    canvas: ndarray(M, N, 4)
        float RGBA canvas, blended in place
    segments: ndarray(S, 4)
        x0, y0, x1, y1 of every segment
    width: float
        Line width in pixels
    color: ndarray(3)
        float RGB stroke color
    """
    height = canvas.shape[0]
    cwidth = canvas.shape[1]
    half = width/2.0
    reach = half + 0.5
    for s in range(segments.shape[0]):
        x0 = segments[s, 0]
        y0 = segments[s, 1]
        x1 = segments[s, 2]
        y1 = segments[s, 3]
        dx = x1 - x0
        dy = y1 - y0
        length_sq = dx*dx + dy*dy
        min_x = max(int(np.floor(min(x0, x1) - reach)), 0)
        max_x = min(int(np.ceil(max(x0, x1) + reach)), cwidth-1)
        min_y = max(int(np.floor(min(y0, y1) - reach)), 0)
        max_y = min(int(np.ceil(max(y0, y1) + reach)), height-1)
        for y in range(min_y, max_y+1):
            for x in range(min_x, max_x+1):
                u = 0.0
                if length_sq > 0:
                    u = ((x - x0)*dx + (y - y0)*dy)/length_sq
                    if u < 0.0:
                        u = 0.0
                    elif u > 1.0:
                        u = 1.0
                qx = x0 + u*dx - x
                qy = y0 + u*dy - y
                dist = np.sqrt(qx*qx + qy*qy)
                coverage = min(dist + 0.5, half) - max(dist - 0.5, -half)
                if coverage <= 0.0:
                    continue
                if coverage > 1.0:
                    coverage = 1.0
                # Straight-alpha "over": a transparent canvas keeps the stroke color
                below = canvas[y, x, 3]/255.0*(1.0 - coverage)
                alpha = coverage + below
                for k in range(3):
                    canvas[y, x, k] = (color[k]*coverage + canvas[y, x, k]*below)/alpha
                canvas[y, x, 3] = 255.0*alpha


def owns_edge(points, simplices):
    """
    Top-left fill rule: of the two directed copies of an interior edge,
    the one going down the image (or left, if horizontal) owns it.

    Returns
    -------
    ndarray(T, 3)
        One flag per (vertex k -> vertex k+1) edge of every triangle
    """
    P = points[simplices]
    d = P[:, [1, 2, 0], :] - P
    return (d[:, :, 1] > 0) | ((d[:, :, 1] == 0) & (d[:, :, 0] < 0))


def canvas_shape_of(triangulation):
    """(height, width) to render a triangulation at"""
    if triangulation.canvas_shape is not None:
        return tuple(triangulation.canvas_shape)
    top = np.max(triangulation.points, axis=0)
    return int(np.floor(top[1])) + 1, int(np.floor(top[0])) + 1


def draw(triangulation, config=None):
    """
    Render a colored triangulation

    Parameters
    ----------
    triangulation: Triangulation
        Triangles with colors assigned (required unless wireframe_only)
    config: RenderConfig
        Fill, stroke and background options

    Returns
    -------
    ndarray(M, N, 4)
        An 8-bit RGBA image. Without a background, pixels that no fill
        or stroke reaches stay fully transparent.
    """
    if config is None:
        config = RenderConfig()
    height, width = canvas_shape_of(triangulation)
    canvas = np.empty((height, width, 4))
    canvas[:, :] = config.background_rgba()

    points = triangulation.points
    simplices = triangulation.simplices
    if not config.wireframe_only and len(simplices) > 0:
        if triangulation.colors is None:
            raise ValueError("triangulation has no colors, colorize it first")
        colors = np.asarray(triangulation.colors, dtype=float)
        painted = np.zeros((height, width), dtype=np.bool_)
        fill_triangles(canvas, points, simplices, colors,
                       owns_edge(points, simplices), painted)
        # The top-left rule leaves some pixels on the convex hull unowned
        fill_triangles(canvas, points, simplices, colors,
                       np.ones(simplices.shape, dtype=np.bool_), painted)

    if config.stroke_width > 0 and len(simplices) > 0:
        E = triangulation.edges()
        segments = np.concatenate((points[E[:, 0]], points[E[:, 1]]), axis=1)
        stroke_segments(canvas, segments, float(config.stroke_width),
                        np.array(config.stroke_color, dtype=float))
        logger.debug("Stroked %d edges at width %s", len(E), config.stroke_width)

    return np.array(np.clip(np.round(canvas), 0, 255), dtype=np.uint8)
