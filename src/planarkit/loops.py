## planarKit loop finder and dead end removal
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

"""closed loops, their nesting, and dead ends for **planarKit**

``find_loops()`` collects the endless chains of a model and returns
them as a tree of ``Loop`` models mirroring their geometric nesting: a
hole sits inside the shape it is cut from, an island inside the hole,
and so on.  The depth of a loop is the number of other loops that
contain it.  Even depths are outlines, odd depths are holes.

``remove_dead_ends()`` strips paths that dangle, which is what a
boolean combine leaves behind around its result.

"""

import logging
from dataclasses import dataclass
from typing import Optional

from planarkit import paths as pth
from planarkit.chain import Chain, find_chains
from planarkit.collector import Collector
from planarkit.containment import is_path_inside_model
from planarkit.geom import POINT_MATCHING_DISTANCE
from planarkit.measure import Atlas, is_point_equal
from planarkit.model import Model, get_similar_path_id, iter_paths, remove_path

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class Loop(Model):
    """A closed loop: copies of the chain's paths in absolute coordinates,
    plus the chain itself, which still refers to the original paths.
    Loops nested inside this one are its child models."""

    chain: Optional[Chain] = None


def _make_loop(chain):
    loop = Loop(origin=(0.0,0.0),chain=chain)
    for link in chain.links:
        w = link.walked_path
        loop.paths[get_similar_path_id(loop,w.path_id)] = pth.clone(w.path,w.offset)
    return loop

def find_loops(model,*,point_matching_distance=POINT_MATCHING_DISTANCE,
               remove_from_original=False):
    """Find the closed loops of ``model`` and nest them by containment.

    Returns a new model whose children ``loop_0``, ``loop_1``, ... are the
    outermost loops.  Each loop holds the loops directly inside it as
    its own children.  With ``remove_from_original`` the paths that
    make up the loops are deleted from ``model``.
    """
    chains = find_chains(model,point_matching_distance=point_matching_distance)
    loops = [_make_loop(c) for c in chains if c.endless]
    atlases = [Atlas(lp) for lp in loops]

    ## which loops contain which, measured before any nesting
    containers = []
    for i, lp in enumerate(loops):
        first = next(iter(lp.paths.values()))
        containers.append([j for j in range(len(loops))
                           if j != i and is_path_inside_model(first,loops[j],
                                                              atlas=atlases[j])])
    depth = [len(c) for c in containers]

    result = Model()
    count = 0
    for i in sorted(range(len(loops)),key=lambda i: depth[i]):
        parent = result
        for j in containers[i]:
            if depth[j] == depth[i]-1:
                parent = loops[j]
                break
        parent.models['loop_{}'.format(count)] = loops[i]
        count += 1

    if remove_from_original:
        for lp in loops:
            detach_loop(lp)
    logger.debug('found %d loops, %d outermost',len(loops),
                 sum(1 for d in depth if d == 0))
    return result

def detach_loop(loop):
    """ delete the paths the loop was made of from their original models """
    for link in loop.chain.links:
        remove_path(link.walked_path)

def remove_dead_ends(model,point_matching_distance=POINT_MATCHING_DISTANCE,
                     keep=None):
    """Delete every path with an end that meets no other path, repeating
    until none is left, since each deletion may leave a new dead end.
    Paths for which ``keep(walked_path)`` is true are never deleted.
    Circles have no ends and always stay.  Returns the number of paths
    deleted."""
    collector = Collector(lambda a, b: is_point_equal(a,b,point_matching_distance))
    ends_of = {}
    for w in iter_paths(model):
        ends = pth.path_ends(w.path,w.offset)
        if ends is None:
            continue
        ends_of[id(w)] = ends
        for pt in ends:
            collector.add_item_to_collection(pt,w)

    removed = 0
    changed = True
    while changed:
        changed = False
        for c in collector.collections:
            if len(c.items) != 1:
                continue
            w = c.items[0]
            if keep is not None and keep(w):
                continue
            if remove_path(w):
                removed += 1
            for pt in ends_of[id(w)]:
                collector.remove_item_from_collection(pt,w)
            changed = True
    logger.debug('removed %d dead ends',removed)
    return removed
