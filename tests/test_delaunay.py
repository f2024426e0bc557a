import numpy as np
import pytest
from scipy.spatial import ConvexHull, Delaunay

from trimosaic.delaunay import Triangulation, compute_neighbors, triangulate
from trimosaic.errors import DegenerateInputError, DuplicatePointError
from trimosaic.predicates import incircle, orient2d


def as_sets(simplices):
    return {frozenset(int(i) for i in s) for s in simplices}


def check_delaunay(tri):
    """Positive orientation, empty circumcircles, every point used"""
    P = [tuple(p) for p in tri.points]
    for a, b, c in tri.simplices:
        assert orient2d(P[a], P[b], P[c]) > 0
        for i, p in enumerate(P):
            if i in (a, b, c):
                continue
            assert incircle(P[a], P[b], P[c], p) <= 0
    assert set(np.unique(tri.simplices)) == set(range(len(P)))


def test_square_with_center():
    X = np.array([[0, 0], [10, 0], [0, 10], [10, 10], [5, 5]], dtype=float)
    tri = triangulate(X)
    assert len(tri) == 4
    for s in tri.simplices:
        assert 4 in s
    assert np.isclose(np.sum(tri.areas()), 100)


def test_square_corners_only():
    X = np.array([[0, 0], [9, 0], [0, 9], [9, 9]], dtype=float)
    tri = triangulate(X)
    assert len(tri) == 2
    assert np.isclose(np.sum(tri.areas()), 81)
    check_delaunay(tri)


def test_single_triangle_is_positively_oriented():
    # Given clockwise
    tri = triangulate([[0, 0], [0, 5], [5, 0]])
    assert len(tri) == 1
    a, b, c = tri.simplices[0]
    assert orient2d(tri.points[a], tri.points[b], tri.points[c]) > 0
    assert np.all(tri.neighbors == -1)


def test_matches_scipy_in_general_position():
    rng = np.random.default_rng(42)
    X = rng.random((200, 2))*100
    tri = triangulate(X)
    expected = Delaunay(X)
    assert as_sets(tri.simplices) == as_sets(expected.simplices)


def test_lattice_with_cocircular_points():
    xs, ys = np.meshgrid(np.arange(5), np.arange(5))
    X = np.array([xs.flatten(), ys.flatten()], dtype=float).T
    tri = triangulate(X)
    # 2n - h - 2 triangles, h = 16 points on the hull boundary
    assert len(tri) == 32
    assert np.all(tri.areas() > 0)
    assert np.isclose(np.sum(tri.areas()), 16)
    check_delaunay(tri)


def test_random_integer_points_cover_hull():
    rng = np.random.default_rng(7)
    X = np.unique(rng.integers(0, 30, (150, 2)), axis=0).astype(float)
    rng.shuffle(X)
    tri = triangulate(X)
    check_delaunay(tri)
    assert np.all(tri.areas() > 0)
    assert np.isclose(np.sum(tri.areas()), ConvexHull(X).volume)


def test_points_collinear_with_hull_edges():
    # Later points extend and split the bottom hull edge
    X = np.array([[0, 0], [2, 0], [1, 1], [4, 0], [3, 0]], dtype=float)
    tri = triangulate(X)
    assert len(tri) == 3
    assert np.isclose(np.sum(tri.areas()), 2)
    check_delaunay(tri)


def test_initial_collinear_points_are_inserted_later():
    X = np.array([[0, 0], [1, 0], [2, 0], [3, 0], [1, 2]], dtype=float)
    tri = triangulate(X)
    assert len(tri) == 3
    assert np.isclose(np.sum(tri.areas()), 3)
    check_delaunay(tri)


def test_image_like_point_set():
    rng = np.random.default_rng(3)
    w, h = 120, 80
    interior = np.unique(np.array([rng.integers(1, w-1, 600), rng.integers(1, h-1, 600)]).T, axis=0)
    corners = np.array([[0, 0], [w-1, 0], [0, h-1], [w-1, h-1]])
    X = np.concatenate((interior, corners)).astype(float)
    tri = triangulate(X)
    assert np.isclose(np.sum(tri.areas()), (w-1)*(h-1))
    assert set(np.unique(tri.simplices)) == set(range(len(X)))


def test_neighbors_share_an_edge():
    rng = np.random.default_rng(1)
    tri = triangulate(rng.random((60, 2)))
    for t in range(len(tri)):
        for k in range(3):
            n = tri.neighbors[t, k]
            edge = set(tri.simplices[t]) - {tri.simplices[t, k]}
            if n == -1:
                continue
            assert edge <= set(tri.simplices[n])
            assert t in tri.neighbors[n]
    # Hull edges are the ones without neighbor
    assert np.sum(tri.hull_edges()) == len(ConvexHull(tri.points).vertices)


def test_edges_are_unique():
    tri = triangulate([[0, 0], [10, 0], [0, 10], [10, 10], [5, 5]])
    E = tri.edges()
    assert len(E) == 8
    assert np.all(E[:, 0] < E[:, 1])


def test_iteration_yields_triangles():
    tri = triangulate([[0, 0], [6, 0], [0, 9]])
    (t,) = list(tri)
    assert sorted(t.indices) == [0, 1, 2]
    assert np.allclose(t.centroid, (2, 3))
    assert t.color is None


def test_compute_neighbors_matches_builder():
    rng = np.random.default_rng(5)
    tri = triangulate(rng.random((40, 2)))
    assert np.array_equal(compute_neighbors(tri.simplices), tri.neighbors)
    copy = Triangulation(tri.points, tri.simplices)
    assert np.array_equal(copy.neighbors, tri.neighbors)


def test_duplicate_points_rejected():
    with pytest.raises(DuplicatePointError):
        triangulate([[0, 0], [1, 0], [0, 1], [1, 0]])


def test_too_few_points():
    with pytest.raises(DegenerateInputError):
        triangulate([[0, 0], [1, 1]])


def test_all_collinear():
    with pytest.raises(DegenerateInputError):
        triangulate([[0, 0], [1, 1], [2, 2], [5, 5]])
