## planarKit path breaking
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

"""breaking paths into fragments for **planarKit**

``break_at_point()`` splits one path at one point.  A line or an arc is
truncated in place to end at the point, and the remainder, running from
the point to the old end, is returned as a new path.  A circle has no
ends to truncate: it is turned in place into a 360 degree arc that
starts and ends at the point, and None is returned.  A point that does
not lie strictly inside the path is left alone and None is returned.

``path_fragments()`` splits a copy of a path at any number of points,
and ``break_paths_at_intersections()`` replaces every path of a model
by its fragments wherever it crosses another path.

"""

import logging

from planarkit import paths as pth
from planarkit.geom import (ON_PATH_DISTANCE, angle_of_point, cross, dist,
                            mag, no_revolutions, round_to, sub)
from planarkit.intersect import intersection_details
from planarkit.measure import is_between, is_between_points
from planarkit.model import get_similar_path_id, iter_paths

logger = logging.getLogger(__name__)


def _near_ends(p,pt,within):
    ends = pth.path_ends(p)
    return ends is not None and (dist(ends[0],pt) <= within or
                                 dist(ends[1],pt) <= within)

def is_point_inside_path(p,pt,within=ON_PATH_DISTANCE):
    """ does ``pt`` lie on ``p``, and not at either of its ends? """
    if pth.isline(p):
        d = sub(p.end,p.origin)
        if abs(cross(d,sub(pt,p.origin)))/mag(d) > within:
            return False
        return (is_between_points(pt,p,True) and
                not _near_ends(p,pt,within))
    elif pth.iscircle(p):
        return abs(dist(p.origin,pt)-p.radius) <= within
    elif pth.isarc(p):
        if abs(dist(p.origin,pt)-p.radius) > within:
            return False
        return _arc_break_angle(p,angle_of_point(p.origin,pt)) is not None \
            and not _near_ends(p,pt,within)
    raise pth._unknown(p)

def points_on_path(points,p,within=ON_PATH_DISTANCE):
    """ the points that lie strictly inside ``p`` """
    return [pt for pt in points if is_point_inside_path(p,pt,within)]

def _arc_break_angle(a,angle):
    """``angle`` expressed in the frame of the arc's own start angle, if
    it lies strictly inside the sweep, else None"""
    start = no_revolutions(a.start_angle)
    end = start + pth.arc_span(a)
    for turns in (0,1,-1):
        candidate = angle + 360.0*turns
        if is_between(candidate,start,end,True):
            return a.start_angle + candidate - start
    return None

def break_at_point(p,pt,within=ON_PATH_DISTANCE):
    """Break path ``p`` at point ``pt``.

    Lines and arcs are truncated in place to end at ``pt`` and the
    remainder is returned.  Circles become a full arc anchored at
    ``pt`` and None is returned.  If ``pt`` does not lie strictly inside
    the path, nothing changes and None is returned.
    """
    if not is_point_inside_path(p,pt,within):
        return None
    if pth.isline(p):
        rest = pth.clone(p)
        rest.origin = pt
        p.end = pt
        return rest
    elif pth.iscircle(p):
        start = angle_of_point(p.origin,pt)
        p.type = pth.PATH_ARC
        p.start_angle = start
        p.end_angle = start + 360.0
        return None
    elif pth.isarc(p):
        angle = _arc_break_angle(p,angle_of_point(p.origin,pt))
        rest = pth.clone(p)
        rest.start_angle = angle
        p.end_angle = angle
        return rest
    raise pth._unknown(p)

def path_fragments(p,points,within=ON_PATH_DISTANCE):
    """Split a copy of ``p`` at every one of ``points`` that lies strictly
    inside it.  Returns the fragments in order along the path; fragments
    of zero length are dropped.  ``p`` itself is not modified."""
    frags = [pth.clone(p)]
    for pt in points:
        for i, f in enumerate(frags):
            if pth.iscircle(f):
                break_at_point(f,pt,within)
                break
            rest = break_at_point(f,pt,within)
            if rest is not None:
                frags.insert(i+1,rest)
                break
    return [f for f in frags if round_to(pth.path_length(f),1e-4) != 0]

def break_points(p,others,offset=None,skip=None):
    """Points where ``p`` (translated by ``offset``) meets any of the
    walked paths ``others``, in absolute coordinates.  Where the two
    paths overlap, the ends of the other path are included.  A walked
    path whose path is ``skip`` is ignored."""
    pts = []
    for other in others:
        if other.path is skip or other.path is p:
            continue
        result = intersection_details(p,other.path,offset,other.offset)
        pts.extend(result.points)
        if result.overlapped:
            ends = pth.path_ends(other.path,other.offset)
            if ends is not None:
                pts.extend(ends)
    return pts

def break_paths_at_intersections(model,other=None,within=ON_PATH_DISTANCE):
    """Replace every path of ``model`` that crosses a path of ``other``
    by its fragments.  Without ``other`` the paths of ``model`` are
    broken where they cross each other.  Fragment ids are derived from
    the original id.  Returns the number of paths broken."""
    targets = list(iter_paths(other if other is not None else model))
    walked = list(iter_paths(model))

    replacements = []
    for w in walked:
        pts = break_points(w.path,targets,w.offset)
        if not pts:
            continue
        frags = path_fragments(pth.clone(w.path,w.offset),pts,within)
        if len(frags) == 1 and frags[0].type == w.path.type:
            continue
        replacements.append((w,frags))

    for w, frags in replacements:
        del w.model.paths[w.path_id]
        for f in frags:
            pth.move_relative(f,w.offset,subtract=True)
            w.model.paths[get_similar_path_id(w.model,w.path_id)] = f
    logger.debug('broke %d of %d paths',len(replacements),len(walked))
    return len(replacements)
