## planarKit path expansion and outlining
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

"""expansion and outlining for **planarKit**

``expand_path(p, distance)`` returns the closed outline of every point
within ``distance`` of path ``p``: a slot around a line, a ring around
a circle, and a rounded band around an arc.  ``expand_paths()`` unions
the expansions of every path of a model, and ``outline()`` picks out
of that union the loops that lie outside (or inside) the original
shape, which is how a cutting path is offset for the width of the cut.

"""

import logging

from planarkit import paths as pth
from planarkit.combine import combine_union
from planarkit.geom import (POINT_MATCHING_DISTANCE, add, perp,
                            scale, sub, unit)
from planarkit.loops import find_loops
from planarkit.model import Model, get_similar_model_id, iter_paths

logger = logging.getLogger(__name__)


def _check_distance(distance):
    if distance <= 0:
        raise ValueError('expansion distance must be positive, got {}'.format(distance))

def expand_path(p,distance):
    """Closed outline at ``distance`` around path ``p``, as a new model.
    Raises ``ValueError`` if ``distance`` is not positive, or if it is
    not smaller than the radius of an arc."""
    _check_distance(distance)
    pth.validate_path(p)
    result = Model()
    if pth.isline(p):
        n = scale(perp(unit(sub(p.end,p.origin))),distance)
        angle = pth.line_angle(p)
        result.paths['left'] = pth.line(add(p.origin,n),add(p.end,n))
        result.paths['right'] = pth.line(sub(p.origin,n),sub(p.end,n))
        result.paths['end_cap'] = pth.arc(p.end,distance,angle-90.0,angle+90.0)
        result.paths['origin_cap'] = pth.arc(p.origin,distance,angle+90.0,angle+270.0)
    elif pth.iscircle(p):
        result.paths['outer'] = pth.circle(p.origin,p.radius+distance)
        if p.radius > distance:
            result.paths['inner'] = pth.circle(p.origin,p.radius-distance)
    elif pth.isarc(p):
        if distance >= p.radius:
            raise ValueError('cannot expand arc of radius {} by {}'.format(p.radius,distance))
        start = p.start_angle
        end = pth.arc_end_angle(p)
        result.paths['outer'] = pth.arc(p.origin,p.radius+distance,start,end)
        result.paths['inner'] = pth.arc(p.origin,p.radius-distance,start,end)
        s, e = pth.arc_ends(p)
        result.paths['start_cap'] = pth.arc(s,distance,start+180.0,start+360.0)
        result.paths['end_cap'] = pth.arc(e,distance,end,end+180.0)
    else:
        raise pth._unknown(p)
    if p.layer is not None:
        for q in result.paths.values():
            q.layer = p.layer
    return result

def expand_paths(model,distance,**combine_options):
    """The union of the expansions of every path of ``model``, in
    absolute coordinates.  Each expansion is a child model named after
    its path.  ``combine_options`` are passed on to ``combine()``."""
    _check_distance(distance)
    result = Model()
    for w in iter_paths(model):
        expanded = expand_path(pth.clone(w.path,w.offset),distance)
        if result.models:
            combine_union(result,expanded,**combine_options)
        result.models[get_similar_model_id(result,w.path_id)] = expanded
    logger.debug('expanded %d paths',len(result.models))
    return result

def outline(model,distance,inside=False,
            point_matching_distance=POINT_MATCHING_DISTANCE,**combine_options):
    """Offset the closed shapes of ``model`` by ``distance``, outwards
    or, with ``inside``, inwards.  Returns a model with one child per
    resulting loop."""
    expanded = expand_paths(model,distance,
                            point_matching_distance=point_matching_distance,
                            **combine_options)
    loops = find_loops(expanded,point_matching_distance=point_matching_distance)
    wanted = 1 if inside else 0
    result = Model()

    def collect(m,depth):
        for loop_id, loop in m.models.items():
            if depth % 2 == wanted:
                result.models[get_similar_model_id(result,loop_id)] = \
                    Model(paths=dict(loop.paths))
            collect(loop,depth+1)

    collect(loops,0)
    return result
