## planarKit fillets and dogbones
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

"""fillets and dogbones for **planarKit**

``fillet(a, b, radius)`` rounds the corner where two paths (lines or
arcs) meet.  The fillet arc is tangent to both paths, both paths are
trimmed back to the tangent points, and the arc is returned so the
caller can add it to a model.

``dogbone(a, b, radius)`` cuts a round relief into the corner between
two lines instead, so that a round tool can clear the corner of a
pocket completely.  The relief arc passes through the corner point and
its center lies on the bisector of the corner.

Both return None, and leave the paths alone, when the paths don't meet
or the radius doesn't fit.

"""

import logging
import math

from planarkit import paths as pth
from planarkit.geom import (POINT_MATCHING_DISTANCE, add, angle_of_point,
                            cross, dist, dot, mag, no_revolutions,
                            perp, scale, sub, to_radians, unit)
from planarkit.intersect import intersection_details
from planarkit.measure import is_between_arc_angles, is_between_points

logger = logging.getLogger(__name__)


def _common_end(a,b,distance):
    """``(index_a, index_b)`` of the ends at which ``a`` and ``b`` meet,
    or None"""
    ends_a = pth.path_ends(a)
    ends_b = pth.path_ends(b)
    if ends_a is None or ends_b is None:
        return None
    best = None
    for i in (0,1):
        for j in (0,1):
            d = dist(ends_a[i],ends_b[j])
            if d <= distance and (best is None or d < best[0]):
                best = (d,i,j)
    if best is None:
        return None
    return best[1], best[2]

def _direction_away(p,end):
    """ unit direction of travel along ``p`` leaving its end ``end`` """
    if pth.isline(p):
        if end == 0:
            return unit(sub(p.end,p.origin))
        return unit(sub(p.origin,p.end))
    angle = to_radians(p.start_angle if end == 0 else p.end_angle)
    ccw = (-math.sin(angle),math.cos(angle))
    return ccw if end == 0 else scale(ccw,-1.0)

def _guide(p,normal,radius,corner):
    """the curve at ``radius`` from ``p`` on the side of ``normal``, on
    which the center of the fillet must lie, or None"""
    if pth.isline(p):
        reach = 4.0*(pth.path_length(p) + radius)
        d = unit(sub(p.end,p.origin))
        shift = scale(normal,radius)
        return pth.line(add(sub(p.origin,scale(d,reach)),shift),
                        add(add(p.end,scale(d,reach)),shift))
    if dot(normal,sub(corner,p.origin)) > 0:
        r = p.radius + radius
    else:
        r = p.radius - radius
    if r <= 0:
        return None
    return pth.circle(p.origin,r)

def _tangent_point(p,center):
    """ point of ``p`` nearest ``center``, if it lies on ``p`` """
    if pth.isline(p):
        d = unit(sub(p.end,p.origin))
        t = add(p.origin,scale(d,dot(sub(center,p.origin),d)))
        return t if is_between_points(t,p) else None
    t = add(p.origin,scale(unit(sub(center,p.origin)),p.radius))
    return t if is_between_arc_angles(angle_of_point(p.origin,t),p) else None

def _trim(p,end,pt):
    """ move end ``end`` of ``p`` to the point ``pt`` on it """
    if pth.isline(p):
        if end == 0:
            p.origin = pt
        else:
            p.end = pt
        return
    angle = angle_of_point(p.origin,pt)
    if end == 0:
        p.start_angle = p.start_angle + no_revolutions(angle - p.start_angle)
    else:
        p.end_angle = pth.arc_end_angle(p) - no_revolutions(pth.arc_end_angle(p) - angle)

def _arc_between(center,radius,pa,pb,through=None):
    """Arc of the circle at ``center`` from ``pa`` to ``pb``.  The sweep
    is the one containing ``through`` if given, else the shorter one."""
    aa = angle_of_point(center,pa)
    ab = angle_of_point(center,pb)
    if through is not None:
        at = angle_of_point(center,through)
        forward = no_revolutions(at - aa) < no_revolutions(ab - aa)
    else:
        forward = no_revolutions(ab - aa) < 180.0
    if forward:
        return pth.arc(center,radius,aa,ab)
    return pth.arc(center,radius,ab,aa)

def fillet(a,b,radius,point_matching_distance=POINT_MATCHING_DISTANCE):
    """Round the corner between paths ``a`` and ``b`` with an arc of
    ``radius``.  Both paths are trimmed in place and the fillet arc is
    returned; None if the paths don't share an end or the fillet
    doesn't fit."""
    for p in (a,b):
        pth.validate_path(p)
        if not (pth.isline(p) or pth.isarc(p)):
            return None
    if radius <= 0:
        raise ValueError('fillet radius must be positive, got {}'.format(radius))

    common = _common_end(a,b,point_matching_distance)
    if common is None:
        return None
    ia, ib = common
    corner = pth.path_ends(a)[ia]
    da = _direction_away(a,ia)
    db = _direction_away(b,ib)
    turn = cross(da,db)
    if abs(turn) < 1e-9:
        return None

    ## inward normals point from each path towards the other
    na = perp(da) if turn > 0 else scale(perp(da),-1.0)
    nb = perp(db) if turn < 0 else scale(perp(db),-1.0)
    ga = _guide(a,na,radius,corner)
    gb = _guide(b,nb,radius,corner)
    if ga is None or gb is None:
        return None

    best = None
    for center in intersection_details(ga,gb).points:
        ta = _tangent_point(a,center)
        tb = _tangent_point(b,center)
        if ta is None or tb is None:
            continue
        d = dist(center,corner)
        if best is None or d < best[0]:
            best = (d,center,ta,tb)
    if best is None:
        logger.debug('fillet of radius %s does not fit at %s',radius,corner)
        return None

    _, center, ta, tb = best
    _trim(a,ia,ta)
    _trim(b,ib,tb)
    return _arc_between(center,radius,ta,tb)

def dogbone(a,b,radius,point_matching_distance=POINT_MATCHING_DISTANCE):
    """Cut a round relief of ``radius`` into the corner between lines
    ``a`` and ``b``.  The relief arc passes through the corner; both
    lines are trimmed to where it meets them and the arc is returned.
    None if the lines don't share an end or are too short."""
    for p in (a,b):
        pth.validate_path(p)
        if not pth.isline(p):
            return None
    if radius <= 0:
        raise ValueError('dogbone radius must be positive, got {}'.format(radius))

    common = _common_end(a,b,point_matching_distance)
    if common is None:
        return None
    ia, ib = common
    corner = pth.path_ends(a)[ia]
    da = _direction_away(a,ia)
    db = _direction_away(b,ib)
    bisector = add(da,db)
    if mag(bisector) < 1e-9 or abs(cross(da,db)) < 1e-9:
        return None
    bisector = unit(bisector)

    ## the circle through the corner cuts each line at a chord's length
    chord = 2.0*radius*dot(bisector,da)
    if chord >= pth.path_length(a) or chord >= pth.path_length(b):
        return None
    center = add(corner,scale(bisector,radius))
    pa = add(corner,scale(da,chord))
    pb = add(corner,scale(db,chord))
    _trim(a,ia,pa)
    _trim(b,ib,pb)
    return _arc_between(center,radius,pa,pb,through=corner)
