# -*- coding: utf-8 -*-
"""planarKit, a 2D constructive geometry kernel.

Modules, from the bottom up:

- ``planarkit.geom``: points, vectors, angles and rounding
- ``planarkit.paths``: lines, circles and arcs
- ``planarkit.model``: model trees, walking and routes
- ``planarkit.measure``: bounding boxes, the measurement atlas and
  tolerant comparison
- ``planarkit.intersect``: pairwise path intersection
- ``planarkit.breaking``: splitting paths at points
- ``planarkit.collector``, ``planarkit.chain``: chains of connected paths
- ``planarkit.containment``: ray-cast inside/outside tests
- ``planarkit.loops``: closed loops, nesting and dead ends
- ``planarkit.combine``: union, intersection and subtraction
- ``planarkit.simplify``: merging duplicate paths
- ``planarkit.fillet``, ``planarkit.expand``: fillets, dogbones,
  expansion and outlines
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("planarKit")
except PackageNotFoundError:  # pragma: no cover - handled when package not installed
    __version__ = "unknown"
