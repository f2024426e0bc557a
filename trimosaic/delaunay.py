"""
Incremental (Bowyer-Watson) Delaunay triangulation.

The mesh is kept as a map from directed edges to the triangle that owns
them. Every convex hull edge is closed off by a "ghost" triangle whose
third vertex is the symbolic point at infinity, so inserting a point
outside the current hull is handled by the same cavity-and-fan step as
an interior point, and no finite super-triangle ever has to be removed.

Point location walks from the last created triangle towards the new
point. Worst case cost is O(n^2) for n points, which is fine for the few
thousand points sampled from an image.
"""
import logging
from collections import namedtuple

import numpy as np

from .errors import DegenerateInputError, DuplicatePointError
from .predicates import incircle, on_open_segment, orient2d

logger = logging.getLogger(__name__)

GHOST = -1

Triangle = namedtuple("Triangle", ["indices", "vertices", "centroid", "color"])


class Triangulation:
    """
    A triangulation over an owned array of points. Triangles are stored as
    index triples into that array (like scipy.spatial.Delaunay).

    Attributes
    ----------
    points: ndarray(N, 2)
        Vertex coordinates, x along the first column
    simplices: ndarray(M, 3)
        Vertex indices of each triangle, positively oriented
    neighbors: ndarray(M, 3)
        neighbors[t, k] is the triangle across the edge opposite vertex k
        of triangle t, or -1 on the convex hull
    colors: ndarray(M, 3) or None
        Fill color of every triangle, set by the colorizer
    canvas_shape: (int, int) or None
        (height, width) of the image the triangulation covers
    """
    def __init__(self, points, simplices, neighbors=None):
        self.points = np.asarray(points, dtype=float)
        self.simplices = np.asarray(simplices, dtype=np.int64).reshape(-1, 3)
        if neighbors is None:
            neighbors = compute_neighbors(self.simplices)
        self.neighbors = np.asarray(neighbors, dtype=np.int64).reshape(-1, 3)
        self.colors = None
        self.canvas_shape = None
        self._centroids = None

    def __len__(self):
        return len(self.simplices)

    def __iter__(self):
        for t in range(len(self.simplices)):
            yield self.triangle(t)

    def triangle(self, t):
        idx = self.simplices[t]
        color = None if self.colors is None else tuple(int(c) for c in self.colors[t])
        return Triangle(tuple(int(i) for i in idx), self.points[idx],
                        tuple(self.centroids[t]), color)

    @property
    def centroids(self):
        """Arithmetic mean of the three vertices of every triangle"""
        if self._centroids is None:
            self._centroids = np.mean(self.points[self.simplices], axis=1)
        return self._centroids

    def areas(self):
        """Unsigned area of every triangle"""
        P = self.points[self.simplices]
        d1 = P[:, 1, :] - P[:, 0, :]
        d2 = P[:, 2, :] - P[:, 0, :]
        return 0.5*np.abs(d1[:, 0]*d2[:, 1] - d1[:, 1]*d2[:, 0])

    def edges(self):
        """
        Every edge of the triangulation once, as sorted index pairs

        Returns
        -------
        ndarray(E, 2)
        """
        E = np.concatenate((self.simplices[:, [0, 1]],
                            self.simplices[:, [1, 2]],
                            self.simplices[:, [2, 0]]), axis=0)
        E = np.sort(E, axis=1)
        if len(E) == 0:
            return E
        return np.unique(E, axis=0)

    def hull_edges(self):
        """
        Boolean mask over the (vertex k -> vertex k+1) edges of each
        triangle, true where the edge lies on the convex hull

        Returns
        -------
        ndarray(M, 3)
        """
        # The edge k -> k+1 is opposite vertex k+2
        return self.neighbors[:, [2, 0, 1]] == -1


def compute_neighbors(simplices):
    """
    Triangle adjacency for a set of positively oriented simplices
    """
    owner = {}
    for t, (a, b, c) in enumerate(simplices):
        owner[(a, b)] = t
        owner[(b, c)] = t
        owner[(c, a)] = t
    neighbors = np.full((len(simplices), 3), -1, dtype=np.int64)
    for t, (a, b, c) in enumerate(simplices):
        neighbors[t, 0] = owner.get((c, b), -1)
        neighbors[t, 1] = owner.get((a, c), -1)
        neighbors[t, 2] = owner.get((b, a), -1)
    return neighbors


def _edges_of(tri):
    a, b, c = tri
    return ((a, b), (b, c), (c, a))


class BowyerWatson:
    """
    Delaunay triangulation built one point at a time

    Parameters
    ----------
    points: ndarray(N, 2)
        Distinct points; at least three of them must not be collinear
    """
    def __init__(self, points):
        self.points = [(float(x), float(y)) for x, y in np.asarray(points, dtype=float)]
        self.triangles = {}  # Triangle id -> (a, b, c), c is GHOST for ghosts
        self.edge_owner = {}  # Directed edge -> id of the triangle it belongs to
        self.next_id = 0
        self.last = None
        self.fallback_scans = 0

    def add_triangle(self, a, b, c):
        t = self.next_id
        self.next_id += 1
        self.triangles[t] = (a, b, c)
        for e in _edges_of((a, b, c)):
            self.edge_owner[e] = t
        if c != GHOST:
            self.last = t
        return t

    def remove_triangle(self, t):
        for e in _edges_of(self.triangles.pop(t)):
            del self.edge_owner[e]

    def conflicts(self, t, p):
        """
        Whether p is strictly inside the circumcircle of triangle t. The
        "circumcircle" of a ghost triangle is the open half-plane beyond
        its hull edge, plus the open edge itself.
        """
        a, b, c = self.triangles[t]
        P = self.points
        if c == GHOST:
            o = orient2d(P[a], P[b], p)
            return o > 0 or (o == 0 and on_open_segment(P[a], P[b], p))
        return incircle(P[a], P[b], P[c], p) > 0

    def locate(self, p):
        """
        Find a triangle in conflict with p: the triangle containing it, or
        a ghost triangle whose hull edge sees it
        """
        P = self.points
        t = self.last
        max_steps = 4*len(self.triangles) + 16
        for _ in range(max_steps):
            for u, v in _edges_of(self.triangles[t]):
                if orient2d(P[u], P[v], p) < 0:
                    t = self.edge_owner[(v, u)]
                    if self.triangles[t][2] == GHOST:
                        return t
                    break
            else:
                return t
        self.fallback_scans += 1
        for t in sorted(self.triangles):
            if self.conflicts(t, p):
                return t
        raise RuntimeError("no triangle in conflict with {}".format(p))

    def start(self):
        """
        Seed the mesh with the first non-degenerate triangle and its three
        ghosts

        Returns
        -------
        list of int
            Indices of the points still to insert, in input order
        """
        P = self.points
        n = len(P)
        if n < 3:
            raise DegenerateInputError("need at least 3 points, got {}".format(n))
        a, b = 0, 1
        c = None
        for k in range(2, n):
            if orient2d(P[a], P[b], P[k]) != 0:
                c = k
                break
        if c is None:
            raise DegenerateInputError("all {} points are collinear".format(n))
        if orient2d(P[a], P[b], P[c]) < 0:
            b, c = c, b
        self.add_triangle(a, b, c)
        self.add_triangle(b, a, GHOST)
        self.add_triangle(c, b, GHOST)
        self.add_triangle(a, c, GHOST)
        return [i for i in range(n) if i not in (a, b, c)]

    def insert(self, i):
        """
        Insert point i: carve out every triangle whose circumcircle
        contains it, then fan the star-shaped hole from the new point
        """
        p = self.points[i]
        first = self.locate(p)
        cavity = {first}
        stack = [first]
        while stack:
            t = stack.pop()
            for u, v in _edges_of(self.triangles[t]):
                n = self.edge_owner[(v, u)]
                if n not in cavity and self.conflicts(n, p):
                    cavity.add(n)
                    stack.append(n)

        boundary = []
        for t in sorted(cavity):
            for u, v in _edges_of(self.triangles[t]):
                if self.edge_owner[(v, u)] not in cavity:
                    boundary.append((u, v))
        for t in cavity:
            self.remove_triangle(t)
        for u, v in boundary:
            if u == GHOST:
                self.add_triangle(v, i, GHOST)
            elif v == GHOST:
                self.add_triangle(i, u, GHOST)
            else:
                self.add_triangle(u, v, i)

    def run(self):
        for i in self.start():
            self.insert(i)
        if self.fallback_scans:
            logger.debug("Point location fell back to a linear scan %d times", self.fallback_scans)
        return self

    def to_triangulation(self):
        P = self.points
        ids = sorted(t for t, tri in self.triangles.items() if tri[2] != GHOST)
        simplices = []
        for t in ids:
            a, b, c = self.triangles[t]
            if orient2d(P[a], P[b], P[c]) <= 0:
                logger.warning("Dropping zero-area triangle (%d, %d, %d)", a, b, c)
                continue
            simplices.append((a, b, c))
        return Triangulation(np.array(P), np.array(simplices, dtype=np.int64).reshape(-1, 3))


def check_unique(points):
    """
    Raise DuplicatePointError if two rows of points are equal
    """
    seen = {}
    for i, (x, y) in enumerate(np.asarray(points, dtype=float)):
        key = (float(x), float(y))
        if key in seen:
            raise DuplicatePointError(
                "points {} and {} are both at ({}, {})".format(seen[key], i, key[0], key[1]))
        seen[key] = i


def triangulate(points):
    """
    Compute the Delaunay triangulation of a point set

    Parameters
    ----------
    points: ndarray(N, 2)
        Distinct points with x coordinates along the first column and y
        coordinates along the second

    Returns
    -------
    Triangulation
        Triangles covering the convex hull of the points, none of which
        has an input point strictly inside its circumcircle
    """
    points = np.asarray(points, dtype=float).reshape(-1, 2)
    if not np.all(np.isfinite(points)):
        raise DegenerateInputError("point set contains non-finite coordinates")
    check_unique(points)
    builder = BowyerWatson(points).run()
    tri = builder.to_triangulation()
    logger.debug("Triangulated %d points into %d triangles", len(points), len(tri))
    return tri
