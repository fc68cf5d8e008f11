## planarKit path deduplication and merging
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

"""removal of redundant paths for **planarKit**

After a combine, or after building a drawing from overlapping pieces,
a model often holds several paths that trace the same curve.
``simplify()`` merges them:

- arcs on the same circle that overlap or touch are merged into one
  arc, or into a circle if together they sweep all the way round;
- circles with the same center and radius, including those just made
  from arcs, are reduced to one, and arcs lying on a kept circle are
  deleted;
- lines on the same infinite line that overlap or touch are merged
  into one line spanning all of them.

Paths are only compared with paths of the same layer.  The model must
be originated first (see ``planarkit.model.originate()``), since path
coordinates are compared as they stand.

"""

import logging

from planarkit import paths as pth
from planarkit.collector import Collector
from planarkit.geom import (POINT_MATCHING_DISTANCE, SCALAR_MATCHING_DISTANCE,
                            dist, no_revolutions, round_to)
from planarkit.measure import (increase, is_arc_overlapping,
                               is_line_overlapping, is_slope_equal,
                               line_slope, path_extents)
from planarkit.model import iter_paths, remove_path

logger = logging.getLogger(__name__)


def _arcs_overlap(a,b):
    ## a may already have grown into a full circle
    if pth.iscircle(a):
        return True
    return is_arc_overlapping(a,b,False)

def _merge_arcs(a,b):
    """ grow arc ``a`` to cover the sweep of arc ``b`` too """
    if pth.iscircle(a):
        return
    span_a = pth.arc_span(a)
    span_b = pth.arc_span(b)
    ## b's start, measured from a's start
    d = no_revolutions(b.start_angle - a.start_angle)
    if round_to(d - span_a,1e-4) <= 0:
        start = 0.0
        end = max(span_a,d+span_b)
    else:
        ## b starts after a ends, so it must wrap round onto a's start
        start = d
        end = max(d+span_b,360.0+span_a)
    if round_to(end - start,1e-4) >= 360.0:
        a.type = pth.PATH_CIRCLE
        a.start_angle = None
        a.end_angle = None
        return
    base = a.start_angle
    a.start_angle = base + start
    a.end_angle = base + end

def _merge_lines(a,b):
    """ stretch line ``a`` over the span of collinear line ``b`` """
    box = increase(path_extents(a),path_extents(b))
    slope = line_slope(a)
    if not slope.has_slope:
        a.origin = (a.origin[0],box.low[1])
        a.end = (a.end[0],box.high[1])
    elif round_to(slope.slope,1e-5) == 0:
        a.origin = (box.low[0],a.origin[1])
        a.end = (box.high[0],a.end[1])
    elif slope.slope < 0:
        a.origin = (box.low[0],box.high[1])
        a.end = (box.high[0],box.low[1])
    else:
        a.origin = box.low
        a.end = box.high

def _absorb_overlaps(walked,is_overlapping,merge):
    """Merge every path of ``walked`` that overlaps an earlier one into
    it and delete it.  Returns the number deleted."""
    removed = 0
    i = 0
    while i < len(walked):
        root = walked[i].path
        merged = True
        while merged:
            merged = False
            for j in range(i+1,len(walked)):
                other = walked[j]
                if is_overlapping(root,other.path):
                    merge(root,other.path)
                    if remove_path(other):
                        removed += 1
                    del walked[j]
                    merged = True
                    break
        i += 1
    return removed

def simplify(model,*,point_matching_distance=POINT_MATCHING_DISTANCE,
             scalar_matching_distance=SCALAR_MATCHING_DISTANCE):
    """Merge duplicate and overlapping paths of an originated model.
    Returns the number of paths removed."""
    def same_circle(a,b):
        return (abs(a.radius-b.radius) <= scalar_matching_distance and
                dist(a.origin,b.origin) <= point_matching_distance)

    layers = {}
    for w in iter_paths(model):
        pth.validate_path(w.path)
        group = layers.get(w.layer)
        if group is None:
            group = layers[w.layer] = (Collector(same_circle),
                                       Collector(same_circle),
                                       Collector(is_slope_equal))
        arcs, circles, lines = group
        p = w.path
        if pth.isline(p):
            lines.add_item_to_collection(line_slope(p),w)
        elif pth.iscircle(p):
            circles.add_item_to_collection(p,w)
        elif pth.isarc(p):
            arcs.add_item_to_collection(p,w)
        else:
            raise pth._unknown(p)

    removed = 0
    for arcs, circles, lines in layers.values():
        for _, walked in arcs.get_collections_of_multiple():
            removed += _absorb_overlaps(
                walked,_arcs_overlap,_merge_arcs)
        ## arcs merged all the way round are circles now
        for c in arcs.collections:
            for w in c.items:
                if pth.iscircle(w.path):
                    circles.add_item_to_collection(w.path,w)
            c.items[:] = [w for w in c.items if not pth.iscircle(w.path)]
        for c in circles.collections:
            for w in c.items[1:]:
                if remove_path(w):
                    removed += 1
            ## arcs lying on a circle that is kept
            on_circle = arcs.find_collection(c.key) or []
            for w in on_circle:
                if remove_path(w):
                    removed += 1
            del on_circle[:]
        for _, walked in lines.get_collections_of_multiple():
            removed += _absorb_overlaps(
                walked,lambda a, b: is_line_overlapping(a,b,False),_merge_lines)
    logger.debug('simplify removed %d paths',removed)
    return removed
