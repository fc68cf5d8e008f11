## planarKit chain finder
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

"""chains of connected paths for **planarKit**

A chain is a sequence of paths connected end to end, each traversed
either forwards (origin to end) or reversed.  A chain whose last path
ends where its first path begins is **endless**.  Circles, and arcs
that sweep a full revolution, are endless chains of a single link.

``find_chains()`` assembles chains from the unordered paths of a model
tree.  Path ends are matched by distance, within
``point_matching_distance``.  A chain grows from a path's trailing end
as long as exactly one other unused path meets it there, then grows
backwards from the leading end of its first path the same way.  A
path that connects to nothing is reported as loose rather than as a
chain of one.

Chains refer to walked paths; they never modify the model, and they
are stale as soon as the model is changed.

"""

import logging
import math
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Tuple

from planarkit import paths as pth
from planarkit.collector import Collector
from planarkit.geom import POINT_MATCHING_DISTANCE
from planarkit.measure import is_point_equal
from planarkit.model import Model, WalkPath, iter_paths
from planarkit.paths import Point

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class ChainLink:
    """A walked path in a chain.  ``endpoints`` are the absolute ends of
    the path in its own direction, None for a circle."""

    walked_path: WalkPath
    reversed: bool
    endpoints: Optional[Tuple[Point, Point]]

    @property
    def path(self):
        return self.walked_path.path

    @property
    def leading(self):
        if self.endpoints is None:
            return None
        return self.endpoints[1] if self.reversed else self.endpoints[0]

    @property
    def trailing(self):
        if self.endpoints is None:
            return None
        return self.endpoints[0] if self.reversed else self.endpoints[1]


@dataclass(eq=False)
class Chain:
    links: List[ChainLink] = field(default_factory=list)
    endless: bool = False

    def __len__(self):
        return len(self.links)

    def __repr__(self):
        kind = 'endless' if self.endless else 'open'
        return f"Chain({kind}, {len(self.links)} links)"


def chain_length(chain):
    return sum(pth.path_length(link.path) for link in chain.links)

def chain_points(chain,distance=None):
    """Absolute points along a chain, in traversal order.  Each line
    contributes its leading point.  Arcs and circles contribute points
    no more than ``distance`` apart along the curve, or only their
    leading point (0 degrees for a circle) without ``distance``.  An
    open chain ends with the trailing point of its last link."""
    pts = []
    for link in chain.links:
        p = pth.clone(link.path,link.walked_path.offset)
        if pth.isline(p):
            pts.append(link.leading)
            continue
        n = 1
        if distance:
            n = max(1,int(math.ceil(pth.path_length(p)/distance)))
        ratios = [k/float(n) for k in range(n)]
        if link.reversed:
            ratios = [1.0-r for r in ratios]
        pts.extend(pth.path_middle(p,r) for r in ratios)
    if not chain.endless and chain.links:
        pts.append(chain.links[-1].trailing)
    return pts


class _LayerGraph:
    """ the path ends of one layer, gathered by position """

    def __init__(self, distance):
        self.collector = Collector(lambda a, b: is_point_equal(a,b,distance))
        self.ends = []
        self.endless = []
        self.loose = []

    def add(self, walked, ends):
        idx = len(self.ends)
        self.ends.append((walked,ends))
        for i in (0,1):
            self.collector.add_item_to_collection(ends[i],(idx,i))

    def _partner(self, pt, current, used):
        items = self.collector.find_collection(pt) or []
        others = [it for it in items if it[0] != current and it[0] not in used]
        if len(others) == 1:
            return others[0]
        return None

    def _link(self, idx, reversed_):
        walked, ends = self.ends[idx]
        return ChainLink(walked,reversed_,ends)

    def follow(self, distance):
        chains = []
        used = set()
        for idx in range(len(self.ends)):
            if idx in used:
                continue
            used.add(idx)
            links = [self._link(idx,False)]
            indices = [idx]

            while True:
                found = self._partner(links[-1].trailing,indices[-1],used)
                if found is None:
                    break
                used.add(found[0])
                indices.append(found[0])
                links.append(self._link(found[0],found[1] == 1))

            closed = (len(links) > 1 and
                      is_point_equal(links[-1].trailing,links[0].leading,distance))
            if not closed:
                while True:
                    found = self._partner(links[0].leading,indices[0],used)
                    if found is None:
                        break
                    used.add(found[0])
                    indices.insert(0,found[0])
                    links.insert(0,self._link(found[0],found[1] == 0))
                closed = (len(links) > 1 and
                          is_point_equal(links[-1].trailing,links[0].leading,distance))

            if len(links) == 1 and not closed:
                self.loose.append(links[0].walked_path)
            else:
                chains.append(Chain(links,closed))
        return chains


def find_chains(model: Model,
                callback: Optional[Callable[[List[Chain], List[WalkPath], str], None]] = None,
                *, by_layers: bool = False,
                point_matching_distance: float = POINT_MATCHING_DISTANCE
                ) -> List[Chain]:
    """Find the chains of connected paths in ``model``.

    With ``by_layers`` only paths of the same layer are linked, and
    ``callback(chains, loose, layer)`` is called once per layer.
    Otherwise it is called once, with layer ``''``, even for a model
    with no paths.  Returns every chain found, longest first within
    each layer.  Paths much shorter than
    ``point_matching_distance`` can't be linked reliably and are
    reported as loose.  Raises ``ValueError`` for malformed paths.
    """
    graphs = {}
    for walked in iter_paths(model):
        pth.validate_path(walked.path)
        layer = walked.layer if by_layers else ''
        g = graphs.get(layer)
        if g is None:
            g = graphs[layer] = _LayerGraph(point_matching_distance)
        p = walked.path
        if pth.is_full_circle(p):
            g.endless.append(Chain([ChainLink(walked,False,None)],True))
        elif pth.path_length(p) < point_matching_distance/5.0:
            g.loose.append(walked)
        else:
            g.add(walked,pth.path_ends(p,walked.offset))

    if not by_layers and not graphs:
        graphs[''] = _LayerGraph(point_matching_distance)

    result = []
    for layer, g in graphs.items():
        chains = g.endless + g.follow(point_matching_distance)
        chains.sort(key=chain_length,reverse=True)
        logger.debug('layer %r: %d chains (%d endless), %d loose',layer,
                     len(chains),sum(1 for c in chains if c.endless),len(g.loose))
        if callback is not None:
            callback(chains,g.loose,layer)
        result.extend(chains)
    return result
