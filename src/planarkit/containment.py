## planarKit ray-cast containment test
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

"""inside/outside tests for **planarKit**

A point is inside a model if a ray from the point to a far point
outside the model crosses the model's paths an odd number of times.

Crossings are counted with tangents excluded.  A ray that grazes a
path, runs through a vertex, or runs along a path can't be counted
reliably either way, so when the count with tangents excluded differs
from the count with them included, or the ray overlaps a path, the
ray is cast again in another direction.  A point that is ambiguous in
every direction lies on (or within tolerance of) the model's boundary;
its result is whatever the last cast counted, and a warning is logged.

"""

import logging

from planarkit import paths as pth
from planarkit.geom import add, dist, frompolar, to_radians
from planarkit.intersect import intersection_details
from planarkit.measure import Atlas, is_measurement_overlapping, path_extents
from planarkit.model import iter_paths

logger = logging.getLogger(__name__)

## directions tried, in degrees, when the first ray is ambiguous.
## Irregular so that a ray is unlikely to line up with a grid of
## vertices twice in a row.
RECAST_ANGLES = (37.0, 113.0, 211.0, 293.0, 163.0, 347.0, 59.0, 257.0,
                 13.0, 139.0)


def _count_crossings(ray,walked_paths,atlas,exclude):
    """ crossings of ``ray`` with the walked paths, and whether any of
    them was ambiguous """
    box = path_extents(ray)
    count = 0
    ambiguous = False
    for w in walked_paths:
        if w.path is exclude:
            continue
        if not is_measurement_overlapping(box,atlas.path_measure(w)):
            continue
        strict = intersection_details(ray,w.path,None,w.offset,True)
        loose = intersection_details(ray,w.path,None,w.offset,False)
        count += len(strict.points)
        if (strict.overlapped or loose.overlapped or
            len(loose.points) != len(strict.points)):
            ambiguous = True
    return count, ambiguous


def is_point_inside_model(p,model,far_point=None,atlas=None,exclude=None):
    """Is point ``p`` inside the closed shapes of ``model``?

    ``far_point`` must lie outside the model; by default it is just
    beyond the top right corner of the model's extents.  ``atlas`` may
    be shared between calls on the same, unchanged, model.  A path
    identical to ``exclude`` is not counted.
    """
    if atlas is None:
        atlas = Atlas(model)
    m = atlas.model_measure('')
    if m is None:
        return False
    if not (m.low[0] <= p[0] <= m.high[0] and m.low[1] <= p[1] <= m.high[1]):
        return False

    walked = list(iter_paths(model))
    if far_point is None:
        far_point = add(m.high,(1.0,1.0))
    count, ambiguous = _count_crossings(pth.line(p,far_point),walked,
                                        atlas,exclude)
    if not ambiguous:
        return count % 2 == 1

    reach = 1.0 + max(dist(p,c) for c in (m.low,m.high,(m.low[0],m.high[1]),
                                          (m.high[0],m.low[1])))
    for angle in RECAST_ANGLES:
        far = add(p,frompolar(to_radians(angle),reach))
        logger.debug('ambiguous ray from %s, casting again at %s degrees',
                     p,angle)
        count, ambiguous = _count_crossings(pth.line(p,far),walked,
                                            atlas,exclude)
        if not ambiguous:
            return count % 2 == 1

    logger.warning('point %s is on or too close to the boundary of the '
                   'model; containment is ambiguous',p)
    return count % 2 == 1


def is_path_inside_model(p,model,offset=None,far_point=None,atlas=None):
    """Is path ``p`` inside ``model``?  The middle of the path is tested,
    so a path that shares its ends with the model's boundary still
    gives a clear answer.  If ``p`` is itself a path of ``model`` it is
    not counted."""
    mid = pth.path_middle(p)
    if offset:
        mid = add(mid,offset)
    return is_point_inside_model(mid,model,far_point,atlas,exclude=p)
