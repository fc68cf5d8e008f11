## planarKit boolean combine of models
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

"""boolean operations on models for **planarKit**

``combine(a, b, ...)`` performs a set operation on the closed shapes of
two models.  Both models are broken into fragments wherever they cross
or touch each other.  Each fragment is then either kept or deleted,
according to whether it lies inside or outside the other model and to
the four ``include_*`` flags:

========================  =========  ============  =========
flag                      union      intersection  a minus b
========================  =========  ============  =========
``include_a_inside_b``    False      True          False
``include_a_outside_b``   True       False         True
``include_b_inside_a``    False      True          True
``include_b_outside_a``   True       False         False
========================  =========  ============  =========

A fragment of ``a`` that coincides with a fragment of ``b`` is neither
inside nor outside.  Such pairs are settled once, by looking at which
side of the shared edge each model's region lies.  If both regions lie
on the same side, the edge is kept when ``include_a_inside_b`` equals
``include_b_inside_a``.  If they lie on opposite sides, it is kept when
``include_a_outside_b`` differs from ``include_b_outside_a``.  A kept
edge stays in ``a``; the copy in ``b`` is kept only with
``keep_duplicates``.

Both models are modified in place.  The result is a new model holding
the two of them as children ``a`` and ``b``.

"""

import logging

from planarkit import paths as pth
from planarkit.breaking import break_points, path_fragments
from planarkit.containment import is_path_inside_model, is_point_inside_model
from planarkit.geom import POINT_MATCHING_DISTANCE, add, perp, scale, sub, unit
from planarkit.loops import remove_dead_ends
from planarkit.measure import (Atlas, is_measurement_overlapping,
                               is_path_equal, path_extents)
from planarkit.model import Model, get_similar_path_id, iter_paths

logger = logging.getLogger(__name__)


class _Fragments:
    """ the fragments of one walked path, in absolute coordinates """

    def __init__(self, walked, frags):
        self.walked = walked
        self.frags = frags
        self.keep = [True]*len(frags)
        ## index of the coincident fragment of the other model, if any
        self.twin = [None]*len(frags)

    @property
    def unbroken(self):
        return len(self.frags) == 1 and self.frags[0].type == self.walked.path.type


def _candidates(box,model,atlas):
    """ walked paths of ``model`` whose extents overlap ``box`` """
    atlas.measure_models()

    def before_child(wm):
        m = atlas.model_map.get(wm.route_key)
        return m is not None and is_measurement_overlapping(box,m)

    return [w for w in iter_paths(model,before_child=before_child)
            if is_measurement_overlapping(box,atlas.path_measure(w))]

def _fragment_all(walked,own_atlas,other,other_atlas):
    result = []
    for w in walked:
        targets = _candidates(own_atlas.path_measure(w),other,other_atlas)
        pts = break_points(w.path,targets,w.offset)
        whole = pth.clone(w.path,w.offset)
        frags = path_fragments(whole,pts) if pts else [whole]
        result.append(_Fragments(w,frags))
    return result

def _tangent(p,at_ratio=0.5):
    """ unit direction of travel along ``p`` at its middle """
    if pth.isline(p):
        return unit(sub(p.end,p.origin))
    mid = pth.path_middle(p,at_ratio)
    ## counter-clockwise around the center
    return unit(perp(sub(mid,p.origin)))

def _region_side(p,model,atlas,delta):
    """+1 if the region of ``model`` lies to the left of ``p`` at its
    middle, -1 if to the right, 0 if it can't be told"""
    mid = pth.path_middle(p)
    n = scale(perp(_tangent(p)),delta)
    left = is_point_inside_model(add(mid,n),model,atlas=atlas)
    right = is_point_inside_model(sub(mid,n),model,atlas=atlas)
    if left and not right:
        return 1
    if right and not left:
        return -1
    return 0

def _pair_coincident(frags_a,frags_b,distance):
    pairs = []
    for fa in frags_a:
        for i, pa in enumerate(fa.frags):
            box = path_extents(pa)
            for fb in frags_b:
                for j, pb in enumerate(fb.frags):
                    if fb.twin[j] is not None:
                        continue
                    if not is_measurement_overlapping(box,path_extents(pb)):
                        continue
                    if is_path_equal(pa,pb,distance):
                        fa.twin[i] = (fb,j)
                        fb.twin[j] = (fa,i)
                        pairs.append((fa,i,fb,j))
                        break
                if fa.twin[i] is not None:
                    break
    return pairs

def _replace(fragments):
    """put the kept fragments back in place of their original paths,
    in local coordinates.  Returns the number of paths deleted."""
    deleted = 0
    changed = []
    for f in fragments:
        if f.unbroken and f.keep[0]:
            continue
        del f.walked.model.paths[f.walked.path_id]
        deleted += 1
        changed.append(f)
    for f in changed:
        w = f.walked
        for p, keep in zip(f.frags,f.keep):
            if not keep:
                continue
            pth.move_relative(p,w.offset,subtract=True)
            w.model.paths[get_similar_path_id(w.model,w.path_id)] = p
    return deleted

def combine(a: Model, b: Model,
            include_a_inside_b=False, include_a_outside_b=True,
            include_b_inside_a=False, include_b_outside_a=True, *,
            trim_dead_ends=True,
            point_matching_distance=POINT_MATCHING_DISTANCE,
            far_point=None, measure_a=None, measure_b=None,
            keep_duplicates=False) -> Model:
    """Combine models ``a`` and ``b`` with a boolean operation chosen by
    the four ``include_*`` flags.  ``measure_a`` and ``measure_b`` are
    optional atlases of the unmodified models.  Every path is validated
    before anything is changed, so a malformed path raises
    ``ValueError`` and leaves both models as they were."""
    walked_a = list(iter_paths(a))
    walked_b = list(iter_paths(b))
    for w in walked_a + walked_b:
        pth.validate_path(w.path)

    if measure_a is None:
        measure_a = Atlas(a)
    if measure_b is None:
        measure_b = Atlas(b)

    frags_a = _fragment_all(walked_a,measure_a,b,measure_b)
    frags_b = _fragment_all(walked_b,measure_b,a,measure_a)

    ## edges shared by both models
    for fa, i, fb, j in _pair_coincident(frags_a,frags_b,point_matching_distance):
        side_a = _region_side(fa.frags[i],a,measure_a,point_matching_distance)
        side_b = _region_side(fa.frags[i],b,measure_b,point_matching_distance)
        if side_a == side_b:
            keep = include_a_inside_b == include_b_inside_a
        else:
            keep = include_a_outside_b != include_b_outside_a
        fa.keep[i] = keep
        fb.keep[j] = keep and keep_duplicates

    ## everything else is inside or outside the other model
    for frags, other, atlas, inside_flag, outside_flag in (
            (frags_a,b,measure_b,include_a_inside_b,include_a_outside_b),
            (frags_b,a,measure_a,include_b_inside_a,include_b_outside_a)):
        for f in frags:
            for i, p in enumerate(f.frags):
                if f.twin[i] is not None:
                    continue
                inside = is_path_inside_model(p,other,far_point=far_point,
                                              atlas=atlas)
                f.keep[i] = inside_flag if inside else outside_flag

    deleted = _replace(frags_a) + _replace(frags_b)
    measure_a.invalidate()
    measure_b.invalidate()
    logger.debug('combine: %d and %d fragments, %d paths replaced',
                 sum(len(f.frags) for f in frags_a),
                 sum(len(f.frags) for f in frags_b),deleted)

    result = Model(models={'a': a, 'b': b})
    ## the pieces of a and b only close up together
    if trim_dead_ends:
        remove_dead_ends(result,point_matching_distance)
    return result

def combine_union(a,b,**options):
    """ the union of ``a`` and ``b`` """
    return combine(a,b,False,True,False,True,**options)

def combine_intersection(a,b,**options):
    """ the region common to ``a`` and ``b`` """
    return combine(a,b,True,False,True,False,**options)

def combine_subtraction(a,b,**options):
    """ ``a`` with ``b`` cut away from it """
    return combine(a,b,False,True,True,False,**options)
