## planarKit path primitives: lines, circles and arcs
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

"""path primitives for **planarKit**

A path is the atomic curve of the kernel.  There are exactly three
kinds of path, distinguished by the ``type`` tag:

- ``'line'``: a straight segment from ``origin`` to ``end``.
- ``'circle'``: a full circle with center ``origin`` and ``radius``.
- ``'arc'``: a counter-clockwise arc of a circle with center ``origin``
  and ``radius``, from ``start_angle`` to ``end_angle`` degrees.  The end
  angle may be smaller than the start angle when the arc crosses 0
  degrees; ``arc_end_angle()`` returns the end angle normalized to
  exceed the start angle.

Every function that has to treat the kinds differently does so with an
``if isline(...)/elif iscircle(...)/elif isarc(...)/else`` chain that
raises ``ValueError`` for an unknown tag.

Transformations (``move()``, ``rotate()``, ``scale()``, ``mirror()``)
modify a path in place and return ``None``.

"""

import copy
import math
from dataclasses import dataclass
from typing import Optional, Tuple

from planarkit import geom
from planarkit.geom import (add, angle_of_point, dist, epsilon, frompolar,
                            isgoodnum, mirror_angle, no_revolutions, pi2,
                            point, round_to, sub, to_radians)

Point = Tuple[float, float]

PATH_LINE = 'line'
PATH_CIRCLE = 'circle'
PATH_ARC = 'arc'
PATH_TYPES = (PATH_LINE, PATH_CIRCLE, PATH_ARC)


@dataclass(eq=False)
class Path:
    """A line, circle or arc.  Paths compare by identity: two paths with
    the same coordinates are still two different paths."""

    type: str
    origin: Point
    end: Optional[Point] = None
    radius: Optional[float] = None
    start_angle: Optional[float] = None
    end_angle: Optional[float] = None
    layer: Optional[str] = None

    def __repr__(self):
        if self.type == PATH_LINE:
            body = f"{self.origin} -> {self.end}"
        elif self.type == PATH_CIRCLE:
            body = f"{self.origin} r={self.radius}"
        else:
            body = f"{self.origin} r={self.radius} {self.start_angle}..{self.end_angle}"
        layer = f" layer={self.layer!r}" if self.layer else ""
        return f"Path({self.type} {body}{layer})"


def _unknown(p):
    return ValueError('unknown path type: {!r}'.format(getattr(p,'type',p)))

## constructors
## ------------

def line(origin,end,layer=None):
    """ make a line from ``origin`` to ``end`` """
    o = point(origin)
    e = point(end)
    if dist(o,e) < epsilon:
        raise ValueError('zero-length line: {} -> {}'.format(o,e))
    return Path(PATH_LINE,o,end=e,layer=layer)

def circle(origin,radius,layer=None):
    """ make a circle with center ``origin`` and ``radius`` """
    if not isgoodnum(radius) or radius <= 0:
        raise ValueError('circle radius must be positive, got {}'.format(radius))
    return Path(PATH_CIRCLE,point(origin),radius=float(radius),layer=layer)

def arc(origin,radius,start,end,layer=None):
    """ make a counter-clockwise arc from ``start`` to ``end`` degrees """
    if not isgoodnum(radius) or radius <= 0:
        raise ValueError('arc radius must be positive, got {}'.format(radius))
    if not (isgoodnum(start) and isgoodnum(end)):
        raise ValueError('bad arc angles: {}, {}'.format(start,end))
    return Path(PATH_ARC,point(origin),radius=float(radius),
                start_angle=float(start),end_angle=float(end),layer=layer)

## predicates
## ----------

def ispath(x):
    return isinstance(x,Path)

def isline(x):
    return isinstance(x,Path) and x.type == PATH_LINE

def iscircle(x):
    return isinstance(x,Path) and x.type == PATH_CIRCLE

def isarc(x):
    return isinstance(x,Path) and x.type == PATH_ARC

def is_full_circle(p):
    """ true for circles and for arcs that sweep a complete revolution """
    if iscircle(p):
        return True
    if isarc(p):
        return round_to(arc_span(p)-360.0) == 0
    return False

def validate_path(p):
    """raise ``ValueError`` if ``p`` is not a well-formed path.  Unknown
    tags, zero-length lines and non-positive radii are all contract
    violations."""
    if not isinstance(p,Path):
        raise ValueError('not a path: {!r}'.format(p))
    if p.type == PATH_LINE:
        if p.end is None or dist(p.origin,p.end) < epsilon:
            raise ValueError('zero-length line: {!r}'.format(p))
    elif p.type in (PATH_CIRCLE,PATH_ARC):
        if p.radius is None or p.radius <= 0:
            raise ValueError('non-positive radius: {!r}'.format(p))
        if p.type == PATH_ARC and (p.start_angle is None or p.end_angle is None):
            raise ValueError('arc without angles: {!r}'.format(p))
    else:
        raise _unknown(p)

## arc angles
## ----------

def arc_end_angle(a):
    """ end angle of an arc, ensured to be greater than its start angle """
    if a.end_angle < a.start_angle:
        revolutions = math.ceil((a.start_angle-a.end_angle)/360.0)
        return revolutions*360.0 + a.end_angle
    return a.end_angle

def arc_span(a):
    """ total angle swept by an arc, in degrees """
    span = arc_end_angle(a) - a.start_angle
    if round_to(span) > 360.0:
        span = no_revolutions(span)
    return span

def arc_middle_angle(a,ratio=0.5):
    return a.start_angle + arc_span(a)*ratio

def point_on_circle(angle,c):
    """ point at ``angle`` degrees on the circle (or arc) ``c`` """
    return add(c.origin,frompolar(to_radians(angle),c.radius))

def arc_ends(a):
    return (point_on_circle(a.start_angle,a),point_on_circle(a.end_angle,a))

def line_angle(l):
    """ angle of a line in degrees, from origin towards end """
    return angle_of_point(l.origin,l.end)

## queries
## -------

def path_ends(p,offset=None):
    """return the two endpoints of a line or arc, translated by
    ``offset`` if given.  Circles have no endpoints, so return None."""
    if isline(p):
        ends = (p.origin,p.end)
    elif isarc(p):
        ends = arc_ends(p)
    elif iscircle(p):
        return None
    else:
        raise _unknown(p)
    if offset:
        ends = (add(ends[0],offset),add(ends[1],offset))
    return ends

def path_middle(p,ratio=0.5):
    """ point part way along a path, halfway by default """
    if isline(p):
        return (p.origin[0]+(p.end[0]-p.origin[0])*ratio,
                p.origin[1]+(p.end[1]-p.origin[1])*ratio)
    elif isarc(p):
        return point_on_circle(arc_middle_angle(p,ratio),p)
    elif iscircle(p):
        return point_on_circle(360.0*ratio,p)
    raise _unknown(p)

def path_length(p):
    """ length of a path """
    if isline(p):
        return dist(p.origin,p.end)
    elif iscircle(p):
        return pi2*p.radius
    elif isarc(p):
        return to_radians(arc_span(p))*p.radius
    raise _unknown(p)

## copying
## -------

def clone(p,offset=None):
    """ independent copy of a path, translated by ``offset`` if given """
    c = copy.copy(p)
    if offset:
        move_relative(c,offset)
    return c

def copy_geometry(src,dest):
    """ copy the kind and the geometric fields of ``src`` onto ``dest``,
    leaving ``dest.layer`` alone """
    dest.type = src.type
    dest.origin = src.origin
    dest.end = src.end
    dest.radius = src.radius
    dest.start_angle = src.start_angle
    dest.end_angle = src.end_angle

## transformations, all in place
## -----------------------------

def move(p,origin):
    """ move a path so that its origin is at ``origin`` """
    o = point(origin)
    if isline(p):
        p.end = add(p.end,sub(o,p.origin))
        p.origin = o
    elif iscircle(p) or isarc(p):
        p.origin = o
    else:
        raise _unknown(p)

def move_relative(p,delta,subtract=False):
    """ move a path by ``delta`` (or by ``-delta`` if ``subtract``) """
    if subtract:
        delta = geom.scale(delta,-1.0)
    if isline(p):
        p.origin = add(p.origin,delta)
        p.end = add(p.end,delta)
    elif iscircle(p) or isarc(p):
        p.origin = add(p.origin,delta)
    else:
        raise _unknown(p)

def rotate(p,angle,about=(0.0,0.0)):
    """ rotate a path counter-clockwise by ``angle`` degrees around ``about`` """
    if isline(p):
        p.origin = geom.rotate(p.origin,angle,about)
        p.end = geom.rotate(p.end,angle,about)
    elif iscircle(p):
        p.origin = geom.rotate(p.origin,angle,about)
    elif isarc(p):
        p.origin = geom.rotate(p.origin,angle,about)
        p.start_angle += angle
        p.end_angle += angle
    else:
        raise _unknown(p)

def scale(p,factor):
    """ scale a path about the point (0, 0) """
    if factor <= 0:
        raise ValueError('scale factor must be positive, got {}'.format(factor))
    if isline(p):
        p.origin = geom.scale(p.origin,factor)
        p.end = geom.scale(p.end,factor)
    elif iscircle(p) or isarc(p):
        p.origin = geom.scale(p.origin,factor)
        p.radius *= factor
    else:
        raise _unknown(p)

def mirror(p,mirror_x,mirror_y):
    """ mirror a path about the y axis (``mirror_x``) and/or the x axis
    (``mirror_y``)  """
    if isline(p):
        p.origin = geom.mirror(p.origin,mirror_x,mirror_y)
        p.end = geom.mirror(p.end,mirror_x,mirror_y)
    elif iscircle(p):
        p.origin = geom.mirror(p.origin,mirror_x,mirror_y)
    elif isarc(p):
        p.origin = geom.mirror(p.origin,mirror_x,mirror_y)
        start = mirror_angle(p.start_angle,mirror_x,mirror_y)
        end = mirror_angle(arc_end_angle(p),mirror_x,mirror_y)
        ## a single reflection reverses the direction of sweep
        if mirror_x != mirror_y:
            start, end = end, start
        p.start_angle = start
        p.end_angle = end
    else:
        raise _unknown(p)
