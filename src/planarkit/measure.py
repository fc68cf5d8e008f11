## planarKit measurement atlas and tolerant predicates
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

"""measurement and tolerant comparison for **planarKit**

Bounding boxes
==============

A ``Measure`` is an axis-aligned box given by its ``low`` and ``high``
corners.  ``path_extents()`` measures a single path, ``model_extents()``
a whole tree in absolute coordinates.

An ``Atlas`` caches measures for one tree, keyed by route key (see
``planarkit.model.route_key()``).  An atlas belongs to a single
operation and is stale as soon as its model is mutated; call
``invalidate()`` or build a new one.

Predicates
==========

Points, angles, slopes and paths are compared to a tolerance, never
exactly.  Point equality rounds the coordinate difference to
``epsilon`` unless an explicit matching distance is given, in which
case true Euclidean distance is used.

"""

import logging
import math
from dataclasses import dataclass
from typing import Dict, Optional

from planarkit import paths as pth
from planarkit.geom import (add, average, cross, dist,
                            no_revolutions, round_to, sub, to_degrees)
from planarkit.model import Model, route_key, walk
from planarkit.paths import Point

logger = logging.getLogger(__name__)


@dataclass
class Measure:
    low: Point
    high: Point

    @property
    def width(self):
        return self.high[0] - self.low[0]

    @property
    def height(self):
        return self.high[1] - self.low[1]


def increase(base,addition):
    """ grow ``base`` in place to enclose ``addition``; returns ``base`` """
    if addition is not None:
        base.low = (min(base.low[0],addition.low[0]),
                    min(base.low[1],addition.low[1]))
        base.high = (max(base.high[0],addition.high[0]),
                     max(base.high[1],addition.high[1]))
    return base

def is_measurement_overlapping(a,b):
    """ true if two boxes overlap or touch """
    for i in range(2):
        if not (round_to(a.low[i]-b.high[i]) <= 0 and
                round_to(a.high[i]-b.low[i]) >= 0):
            return False
    return True

def measure_center(m):
    return average(m.low,m.high)

def point_distance(a,b):
    return dist(a,b)

## point, scalar and angle equality
## --------------------------------

def is_point_equal(a,b,within=None):
    """Are two points the same?  Without ``within`` the coordinates are
    compared after rounding to ``epsilon``; with it, the points must be
    no further apart than ``within``."""
    if within is None:
        return (round_to(a[0]-b[0]) == 0 and
                round_to(a[1]-b[1]) == 0)
    return dist(a,b) <= within

def is_angle_equal(a,b,accuracy=1e-4):
    """ are two angles the same direction, to within ``accuracy`` degrees? """
    d = no_revolutions(round_to(no_revolutions(b)-no_revolutions(a),accuracy))
    return d == 0

def is_between(v,a,b,exclusive=False):
    lo = min(a,b)
    hi = max(a,b)
    if exclusive:
        return lo < v < hi
    return lo <= v <= hi

def is_between_arc_angles(angle,arc,exclusive=False):
    """Is ``angle`` within the sweep of ``arc``?  The test is made against
    the arc one revolution back and forward as well, so arcs specified
    with negative or large angles behave."""
    start = no_revolutions(arc.start_angle)
    end = start + pth.arc_span(arc)
    angle = no_revolutions(angle)
    return (is_between(angle,start,end,exclusive) or
            is_between(angle,start+360.0,end+360.0,exclusive) or
            is_between(angle,start-360.0,end-360.0,exclusive))

def is_between_points(p,line,exclusive=False):
    """Is ``p``, assumed to lie on the infinite extension of ``line``,
    within the span of the segment?  Each axis is checked independently;
    an axis along which the line does not vary is skipped."""
    one_dimension = False
    for i in (1,0):
        if round_to(line.origin[i]-line.end[i],1e-6) == 0:
            if one_dimension:
                return False
            one_dimension = True
            continue
        if not is_between(round_to(p[i]),round_to(line.origin[i]),
                          round_to(line.end[i]),exclusive):
            return False
    return True

## slopes
## ------

@dataclass
class Slope:
    line: pth.Path
    has_slope: bool
    slope: Optional[float] = None
    y_intercept: Optional[float] = None

def line_slope(line):
    """ slope and y intercept of a line; vertical lines have no slope """
    dx = line.end[0]-line.origin[0]
    if round_to(dx,1e-6) == 0:
        return Slope(line,False)
    dy = line.end[1]-line.origin[1]
    slope = dy/dx
    return Slope(line,True,slope,line.origin[1]-slope*line.origin[0])

def is_slope_parallel(a,b):
    if not a.has_slope and not b.has_slope:
        return True
    if a.has_slope and b.has_slope:
        return round_to(a.slope-b.slope,1e-5) == 0
    return False

def is_slope_equal(a,b):
    """ true if two slopes describe the same infinite line """
    if not is_slope_parallel(a,b):
        return False
    if not a.has_slope and not b.has_slope:
        return round_to(a.line.origin[0]-b.line.origin[0]) == 0

    ## rotate both lines flat about the same point and compare heights
    pivot = a.line.origin
    heights = []
    for s in (a,b):
        l = pth.clone(s.line)
        pth.rotate(l,-to_degrees(math.atan(s.slope)),pivot)
        heights.append((l.origin[1]+l.end[1])/2.0)
    return round_to(heights[0]-heights[1],1e-5) == 0

## overlap of paths already known to share a line or circle
## ---------------------------------------------------------

def is_line_overlapping(a,b,exclude_tangents=False):
    """ do two collinear lines share part of their span? """
    def check(x,y):
        return (is_between_points(y.origin,x,exclude_tangents) or
                is_between_points(y.end,x,exclude_tangents))
    return check(a,b) or check(b,a)

def is_arc_overlapping(a,b,exclude_tangents=False):
    """ do two arcs of the same circle share part of their sweep? """
    def check(x,y):
        return (is_between_arc_angles(y.start_angle,x,exclude_tangents) or
                is_between_arc_angles(y.end_angle,x,exclude_tangents))
    return (check(a,b) or check(b,a) or
            (is_angle_equal(a.start_angle,b.start_angle) and
             is_angle_equal(a.end_angle,b.end_angle)))

def is_arc_concave_towards_point(arc,p):
    """ does the hollow side of ``arc`` face point ``p``? """
    if dist(arc.origin,p) <= arc.radius:
        return True
    ## otherwise p is beyond the chord iff the segment from the middle
    ## of the arc to p crosses it
    mid = pth.path_middle(arc)
    c0, c1 = pth.arc_ends(arc)
    d1 = cross(sub(c1,c0),sub(mid,c0))
    d2 = cross(sub(c1,c0),sub(p,c0))
    d3 = cross(sub(p,mid),sub(c0,mid))
    d4 = cross(sub(p,mid),sub(c1,mid))
    return d1*d2 <= 0 and d3*d4 <= 0

## path equality
## -------------

def _circles_equal(a,b,within):
    return (is_point_equal(a.origin,b.origin,within) and
            round_to(a.radius-b.radius) == 0)

def is_path_equal(a,b,within=None,offset_a=None,offset_b=None):
    """Are two paths geometrically the same?  Lines match in either
    direction; arcs must also share their start and end angles."""
    if a.type != b.type:
        return False
    if offset_a:
        a = pth.clone(a,offset_a)
    if offset_b:
        b = pth.clone(b,offset_b)
    if pth.isline(a):
        return ((is_point_equal(a.origin,b.origin,within) and
                 is_point_equal(a.end,b.end,within)) or
                (is_point_equal(a.origin,b.end,within) and
                 is_point_equal(a.end,b.origin,within)))
    elif pth.iscircle(a):
        return _circles_equal(a,b,within)
    elif pth.isarc(a):
        return (_circles_equal(a,b,within) and
                is_angle_equal(a.start_angle,b.start_angle) and
                is_angle_equal(a.end_angle,b.end_angle))
    raise pth._unknown(a)

## extents
## -------

def path_extents(p,offset=None):
    """ bounding box of a path, translated by ``offset`` if given """
    if pth.isline(p):
        low = (min(p.origin[0],p.end[0]),min(p.origin[1],p.end[1]))
        high = (max(p.origin[0],p.end[0]),max(p.origin[1],p.end[1]))
    elif pth.iscircle(p):
        r = p.radius
        low = (p.origin[0]-r,p.origin[1]-r)
        high = (p.origin[0]+r,p.origin[1]+r)
    elif pth.isarc(p):
        r = p.radius
        e0, e1 = pth.arc_ends(p)
        low = [min(e0[0],e1[0]),min(e0[1],e1[1])]
        high = [max(e0[0],e1[0]),max(e0[1],e1[1])]
        ## cardinal extremes swept by the arc
        for i, angle in enumerate((180.0,270.0)):
            if is_between_arc_angles(angle,p):
                low[i] = p.origin[i]-r
        for i, angle in enumerate((0.0,90.0)):
            if is_between_arc_angles(angle,p):
                high[i] = p.origin[i]+r
        low = tuple(low)
        high = tuple(high)
    else:
        raise pth._unknown(p)
    if offset:
        low = add(low,offset)
        high = add(high,offset)
    return Measure(low,high)


class Atlas:
    """A cache of measures for one model tree.

    ``path_map`` and ``model_map`` map route keys to ``Measure``
    instances in absolute coordinates.  The root model's key is ``''``.
    Path measures are computed on demand; model measures all at once by
    ``measure_models()``.
    """

    def __init__(self, model: Model):
        self.model = model
        self.path_map: Dict[str, Measure] = {}
        self.model_map: Dict[str, Measure] = {}
        self.models_measured = False

    def __repr__(self):
        return (f"Atlas({len(self.path_map)} paths, "
                f"{len(self.model_map)} models, measured={self.models_measured})")

    def invalidate(self):
        self.path_map.clear()
        self.model_map.clear()
        self.models_measured = False

    def path_measure(self, walked) -> Measure:
        m = self.path_map.get(walked.route_key)
        if m is None:
            m = path_extents(walked.path,walked.offset)
            self.path_map[walked.route_key] = m
        return m

    def _grow(self, key, m):
        if m is None:
            return
        base = self.model_map.get(key)
        if base is None:
            self.model_map[key] = Measure(m.low,m.high)
        else:
            increase(base,m)

    def measure_models(self):
        """ measure every model of the tree, bottom up """
        if self.models_measured:
            return

        def on_path(walked):
            self._grow(route_key(walked.route[:-2]),self.path_measure(walked))

        def after_child(walked):
            self._grow(route_key(walked.route[:-2]),
                       self.model_map.get(walked.route_key))

        walk(self.model,on_path=on_path,after_child=after_child)
        self.models_measured = True
        logger.debug('measured %d paths in %d models',
                     len(self.path_map),len(self.model_map))

    def model_measure(self, key='') -> Optional[Measure]:
        """ measure of the model at route key ``key``; None if it is empty """
        self.measure_models()
        return self.model_map.get(key)


def model_extents(model,atlas=None):
    """ bounding box of every path in a model tree, or None if it has none """
    if atlas is None:
        atlas = Atlas(model)
    return atlas.model_measure('')
