## planarKit intersection engine
## Copyright (c) 2020 Richard W. DeVaul
## Copyright (c) 2020 yapCAD contributors
## All rights reserved

# Permission is hereby granted, free of charge, to any person
# obtaining a copy of this software and associated documentation files
# (the "Software"), to deal in the Software without restriction,
# including without limitation the rights to use, copy, modify, merge,
# publish, distribute, sublicense, and/or sell copies of the Software,
# and to permit persons to whom the Software is furnished to do so,
# subject to the following conditions:
# 
# The above copyright notice and this permission notice shall be
# included in all copies or substantial portions of the Software.
# 
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND,
# EXPRESS OR IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF
# MERCHANTABILITY, FITNESS FOR A PARTICULAR PURPOSE AND
# NONINFRINGEMENT. IN NO EVENT SHALL THE AUTHORS OR COPYRIGHT HOLDERS
# BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER LIABILITY, WHETHER IN AN
# ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM, OUT OF OR IN
# CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.

"""pairwise path intersection for **planarKit**

``intersect(a, b)`` computes the points where two paths cross: none,
one or two of them.  Every pair of path kinds is handled:

- line/line: parametric solution; parallel lines never intersect, but
  collinear lines that share part of their span are reported as
  ``overlapped``.
- line/circle and line/arc: the foot of the perpendicular from the
  center onto the line, then the half chord.  The half chord is taken
  with ``mpmath`` so nearly tangent lines don't lose their roots to
  cancellation.
- circle/circle, arc/arc and arc/circle: center distance compared with
  the sum and difference of the radii.  Two paths on the same circle
  are reported as ``overlapped`` (arcs only if their sweeps overlap).

Candidate points on an arc are kept only if their angle lies within
the arc's sweep.  With ``exclude_tangents`` a tangent contact, and any
point at an endpoint of either path, is dropped; the containment test
depends on this.

Tolerances scale with the magnitude of the coordinates involved (see
``planarkit.geom.tolerance()``).

Points are ordered along the first path: from origin to end for a
line, by ascending angle from 0 degrees for a circle, and by ascending
angle from ``start_angle`` for an arc.

"""

import math
from dataclasses import dataclass, field
from typing import List, Optional

import mpmath as mpm

from planarkit import paths as pth
from planarkit.geom import (add, angle_of_point, cross, dist, dot,
                            frompolar, mag, no_revolutions, scale, sub,
                            to_degrees, to_radians, tolerance)
from planarkit.measure import (is_between_arc_angles, is_line_overlapping,
                               is_arc_overlapping, is_slope_equal,
                               is_slope_parallel, line_slope)
from planarkit.paths import Point


@dataclass
class PathIntersection:
    """Points where two paths meet.  ``angles_a`` and ``angles_b`` hold
    the polar angle of each point on the corresponding path, and are
    None for lines.  ``overlapped`` is set when the paths coincide over
    a range instead of crossing at points."""

    points: List[Point] = field(default_factory=list)
    angles_a: Optional[List[float]] = None
    angles_b: Optional[List[float]] = None
    overlapped: bool = False

    def __bool__(self):
        return len(self.points) > 0


def _circular(p):
    return pth.iscircle(p) or pth.isarc(p)

def _path_tolerance(*ps):
    vals = []
    for p in ps:
        vals.extend(p.origin)
        if pth.isline(p):
            vals.extend(p.end)
        else:
            vals.append(p.radius)
    return tolerance(*vals)

def _on_arc(angle,p,exclusive,tol):
    """Is ``angle`` within the sweep of ``p``?  Circles contain every
    angle.  Angles within ``tol`` (a distance along the curve) of an
    arc end count as being at that end, so that float noise can neither
    add nor drop an endpoint hit."""
    if pth.iscircle(p):
        return True
    slack = to_degrees(tol/p.radius)
    near_end = False
    for a in (p.start_angle,pth.arc_end_angle(p)):
        d = no_revolutions(angle-a)
        if min(d,360.0-d) <= slack:
            near_end = True
    if near_end:
        return not exclusive
    return is_between_arc_angles(angle,p,exclusive)

def _in_span(t,length,exclusive,tol):
    """ is distance ``t`` along a line of ``length`` within the segment """
    if exclusive:
        return tol < t < length-tol
    return -tol <= t <= length+tol

## line/line
## ---------

def _line_line(a,b,exclude_tangents):
    result = PathIntersection()
    sa = line_slope(a)
    sb = line_slope(b)
    if is_slope_parallel(sa,sb):
        if is_slope_equal(sa,sb):
            result.overlapped = is_line_overlapping(a,b,exclude_tangents)
        return result
    da = sub(a.end,a.origin)
    db = sub(b.end,b.origin)
    denom = cross(da,db)
    if denom == 0:
        return result
    w = sub(b.origin,a.origin)
    ta = cross(w,db)/denom
    tb = cross(w,da)/denom
    tol = _path_tolerance(a,b)
    la = mag(da)
    lb = mag(db)
    if (_in_span(ta*la,la,exclude_tangents,tol) and
        _in_span(tb*lb,lb,exclude_tangents,tol)):
        result.points.append(add(a.origin,scale(da,ta)))
    return result

def slope_intersection_point(a,b):
    """ point where the infinite extensions of two lines cross, or None
    if they are parallel """
    if is_slope_parallel(line_slope(a),line_slope(b)):
        return None
    da = sub(a.end,a.origin)
    db = sub(b.end,b.origin)
    denom = cross(da,db)
    if denom == 0:
        return None
    t = cross(sub(b.origin,a.origin),db)/denom
    return add(a.origin,scale(da,t))

## line/circle
## -----------

def _line_circle(l,c,exclude_tangents):
    """intersection of line ``l`` and circle or arc ``c``, ordered along
    the line, with angles on ``c`` in ``angles_b``"""
    result = PathIntersection(angles_b=[])
    d = sub(l.end,l.origin)
    length = mag(d)
    u = scale(d,1.0/length)
    tol = _path_tolerance(l,c)

    ## foot of the perpendicular from the center onto the line
    s = dot(sub(c.origin,l.origin),u)
    foot = add(l.origin,scale(u,s))
    h = dist(foot,c.origin)
    r = c.radius

    if h > r + tol:
        return result
    if abs(h-r) <= tol:
        if exclude_tangents:
            return result
        candidates = [s]
    else:
        mpr = mpm.mpf(r)
        mph = mpm.mpf(h)
        half = float(mpm.sqrt(mpr*mpr - mph*mph))
        candidates = [s-half,s+half]

    for t in candidates:
        if not _in_span(t,length,exclude_tangents,tol):
            continue
        p = add(l.origin,scale(u,t))
        angle = angle_of_point(c.origin,p)
        if not _on_arc(angle,c,exclude_tangents,tol):
            continue
        result.points.append(p)
        result.angles_b.append(angle)
    return result

## circle/circle
## -------------

def _circle_circle(a,b,exclude_tangents):
    """intersection of two circles or arcs, with angles on each"""
    result = PathIntersection(angles_a=[],angles_b=[])
    tol = _path_tolerance(a,b)
    ra = a.radius
    rb = b.radius
    d = dist(a.origin,b.origin)

    if d <= tol:
        if abs(ra-rb) <= tol:
            if pth.isarc(a) and pth.isarc(b):
                result.overlapped = is_arc_overlapping(a,b,exclude_tangents)
            else:
                result.overlapped = True
        return result
    if d > ra + rb + tol or d < abs(ra-rb) - tol:
        return result

    base = angle_of_point(a.origin,b.origin)
    if abs(d-(ra+rb)) <= tol or abs(d-abs(ra-rb)) <= tol:
        ## tangent, externally or internally
        if exclude_tangents:
            return result
        if abs(d-(ra+rb)) <= tol or ra > rb:
            angles = [base]
        else:
            angles = [base+180.0]
    else:
        x = (d*d + ra*ra - rb*rb)/(2.0*d)
        mpra = mpm.mpf(ra)
        mpx = mpm.mpf(x)
        y = float(mpm.sqrt(mpra*mpra - mpx*mpx))
        alpha = to_degrees(math.atan2(y,x))
        angles = [base-alpha,base+alpha]

    for angle in angles:
        angle = no_revolutions(angle)
        p = add(a.origin,frompolar(to_radians(angle),ra))
        angle_b = angle_of_point(b.origin,p)
        if not (_on_arc(angle,a,exclude_tangents,tol) and
                _on_arc(angle_b,b,exclude_tangents,tol)):
            continue
        result.points.append(p)
        result.angles_a.append(angle)
        result.angles_b.append(angle_b)
    return result

## ordering and dispatch
## ---------------------

def _swap(result):
    return PathIntersection(list(result.points),result.angles_b,
                            result.angles_a,result.overlapped)

def _order(result,a):
    """ sort the points of ``result`` along path ``a`` """
    if len(result.points) < 2:
        return result
    idx = list(range(len(result.points)))
    if pth.isline(a):
        d = sub(a.end,a.origin)
        idx.sort(key=lambda i: dot(sub(result.points[i],a.origin),d))
    elif pth.iscircle(a):
        idx.sort(key=lambda i: no_revolutions(result.angles_a[i]))
    elif pth.isarc(a):
        idx.sort(key=lambda i: no_revolutions(result.angles_a[i]-a.start_angle))
    else:
        raise pth._unknown(a)
    result.points = [result.points[i] for i in idx]
    if result.angles_a is not None:
        result.angles_a = [result.angles_a[i] for i in idx]
    if result.angles_b is not None:
        result.angles_b = [result.angles_b[i] for i in idx]
    return result

def intersection_details(a,b,offset_a=None,offset_b=None,
                         exclude_tangents=False) -> PathIntersection:
    """Intersect paths ``a`` and ``b``, translated by ``offset_a`` and
    ``offset_b`` if given.  Always returns a ``PathIntersection``, with
    an empty point list if the paths don't cross, so the caller can
    inspect ``overlapped``.  Raises ``ValueError`` for malformed paths."""
    pth.validate_path(a)
    pth.validate_path(b)
    if offset_a:
        a = pth.clone(a,offset_a)
    if offset_b:
        b = pth.clone(b,offset_b)

    if pth.isline(a) and pth.isline(b):
        result = _line_line(a,b,exclude_tangents)
    elif pth.isline(a):
        result = _line_circle(a,b,exclude_tangents)
    elif pth.isline(b):
        result = _swap(_line_circle(b,a,exclude_tangents))
    else:
        result = _circle_circle(a,b,exclude_tangents)
    return _order(result,a)

def intersect(a,b,offset_a=None,offset_b=None,exclude_tangents=False):
    """ like ``intersection_details()``, but None when there are no points """
    result = intersection_details(a,b,offset_a,offset_b,exclude_tangents)
    if not result.points:
        return None
    return result
