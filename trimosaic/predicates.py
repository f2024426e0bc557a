"""
Geometric predicates for the triangulator.

Both predicates are evaluated in floating point first. When the result is
too close to zero for its sign to be trusted (static error bounds from
Shewchuk, "Adaptive Precision Floating-Point Arithmetic and Fast Robust
Geometric Predicates", 1997), they are evaluated again exactly with
rational arithmetic. The sign of the result is therefore always exact.
"""
from fractions import Fraction

EPSILON = 2.0**-53
CCW_ERRBOUND = (3.0 + 16.0*EPSILON)*EPSILON
ICC_ERRBOUND = (10.0 + 96.0*EPSILON)*EPSILON


def _orient2d_exact(ax, ay, bx, by, cx, cy):
    ax, ay, bx, by, cx, cy = (Fraction(v) for v in (ax, ay, bx, by, cx, cy))
    return (bx - ax)*(cy - ay) - (by - ay)*(cx - ax)


def orient2d(a, b, c):
    """
    Twice the signed area of the triangle abc: positive when c lies to
    the left of the directed line ab, negative to the right, zero when
    the three points are collinear

    Parameters
    ----------
    a, b, c: (float, float)
        Points as (x, y)
    """
    ax, ay = a
    bx, by = b
    cx, cy = c
    detleft = (bx - ax)*(cy - ay)
    detright = (by - ay)*(cx - ax)
    det = detleft - detright
    errbound = CCW_ERRBOUND*(abs(detleft) + abs(detright))
    if det > errbound or -det > errbound:
        return det
    return _orient2d_exact(ax, ay, bx, by, cx, cy)


def _incircle_exact(ax, ay, bx, by, cx, cy, dx, dy):
    ax, ay, bx, by, cx, cy, dx, dy = (
        Fraction(v) for v in (ax, ay, bx, by, cx, cy, dx, dy))
    adx, ady = ax - dx, ay - dy
    bdx, bdy = bx - dx, by - dy
    cdx, cdy = cx - dx, cy - dy
    alift = adx*adx + ady*ady
    blift = bdx*bdx + bdy*bdy
    clift = cdx*cdx + cdy*cdy
    det = (alift*(bdx*cdy - cdx*bdy)
           + blift*(cdx*ady - adx*cdy)
           + clift*(adx*bdy - bdx*ady))
    return det


def incircle(a, b, c, d):
    """
    Lifted-paraboloid in-circle determinant. For a positively oriented
    triangle abc (orient2d(a, b, c) > 0) the result is positive when d is
    strictly inside the circumcircle, negative outside, zero on it.

    Parameters
    ----------
    a, b, c, d: (float, float)
        Points as (x, y)
    """
    ax, ay = a
    bx, by = b
    cx, cy = c
    dx, dy = d
    adx, ady = ax - dx, ay - dy
    bdx, bdy = bx - dx, by - dy
    cdx, cdy = cx - dx, cy - dy

    bdxcdy = bdx*cdy
    cdxbdy = cdx*bdy
    alift = adx*adx + ady*ady
    cdxady = cdx*ady
    adxcdy = adx*cdy
    blift = bdx*bdx + bdy*bdy
    adxbdy = adx*bdy
    bdxady = bdx*ady
    clift = cdx*cdx + cdy*cdy

    det = (alift*(bdxcdy - cdxbdy)
           + blift*(cdxady - adxcdy)
           + clift*(adxbdy - bdxady))
    permanent = ((abs(bdxcdy) + abs(cdxbdy))*alift
                 + (abs(cdxady) + abs(adxcdy))*blift
                 + (abs(adxbdy) + abs(bdxady))*clift)
    errbound = ICC_ERRBOUND*permanent
    if det > errbound or -det > errbound:
        return det
    return _incircle_exact(ax, ay, bx, by, cx, cy, dx, dy)


def on_open_segment(a, b, p):
    """
    Whether p, known to be collinear with a and b, lies strictly between
    them
    """
    if a[0] != b[0]:
        return min(a[0], b[0]) < p[0] < max(a[0], b[0])
    return min(a[1], b[1]) < p[1] < max(a[1], b[1])
