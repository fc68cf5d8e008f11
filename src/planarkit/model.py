## planarKit model tree, walk and route infrastructure
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

"""model tree, walking and routes for **planarKit**

A ``Model`` is a recursive container: a map of named paths, a map of
named child models, and an optional ``origin`` that translates
everything beneath it.  The tree must not contain cycles; walking a
model that references one of its own ancestors raises ``ValueError``.

Every path and model in a tree has a **route**, the tuple of keys that
leads to it from the root, alternating the container selector
(``'paths'`` or ``'models'``) and the identifier::

    ('models', 'gear', 'paths', 'hub')

``route_key()`` renders a route as a stable string,
``models["gear"].paths["hub"]``, which the measurement atlas and the
chain finder use as a dictionary key.

``walk()`` visits every path of a tree, depth first and in insertion
order, with its absolute offset (the sum of every ancestor origin),
its resolved layer, and its route.  ``iter_paths()`` yields the same
records as a generator, so a consumer can stop early with ``break``.
Walk callbacks and loop bodies must not add or remove entries of the
maps being walked; collect what you need first and mutate afterwards.

"""

import copy
import json
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterator, Optional, Tuple

from planarkit import geom
from planarkit import paths as pth
from planarkit.geom import add, point, sub
from planarkit.paths import Path, Point

Route = Tuple[str, ...]


@dataclass(eq=False)
class Model:
    """A named collection of paths and child models"""

    origin: Optional[Point] = None
    paths: Dict[str, Path] = field(default_factory=dict)
    models: Dict[str, 'Model'] = field(default_factory=dict)
    units: Optional[str] = None
    layer: Optional[str] = None
    notes: Optional[str] = None


def route_key(route):
    """ render a route tuple as a stable string key; the root is ``''`` """
    if len(route) % 2:
        raise ValueError('malformed route: {!r}'.format(route))
    parts = []
    for i in range(0,len(route),2):
        parts.append('{}[{}]'.format(route[i],json.dumps(route[i+1])))
    return '.'.join(parts)


@dataclass(frozen=True, eq=False)
class WalkPath:
    """a path found by walking, with everything needed to locate it
    again: its owner, its id, its absolute offset, its resolved layer
    and its route"""

    model: Model
    path_id: str
    path: Path
    offset: Point
    layer: str
    route: Route
    route_key: str


@dataclass(frozen=True, eq=False)
class WalkModel:
    """a child model found by walking.  ``offset`` is the accumulated
    offset of the parent, so the child's own paths lie at ``offset +
    child.origin``."""

    parent: Model
    child_id: str
    child: Model
    offset: Point
    layer: str
    route: Route
    route_key: str


def _model_origin(m):
    return m.origin if m.origin is not None else (0.0,0.0)

def _check_child(child,ancestors,route):
    if not isinstance(child,Model):
        raise ValueError('not a model at {}: {!r}'.format(route_key(route),child))
    if id(child) in ancestors:
        raise ValueError('cyclic model reference at {}'.format(route_key(route)))


def _walk(model,offset,layer,route,ancestors,before_child,after_child):
    here = add(offset,_model_origin(model))
    for path_id, p in model.paths.items():
        proute = route + ('paths',path_id)
        yield WalkPath(model,path_id,p,here,p.layer or layer,
                       proute,route_key(proute))
    for child_id, child in model.models.items():
        croute = route + ('models',child_id)
        _check_child(child,ancestors,croute)
        walked = WalkModel(model,child_id,child,here,child.layer or layer,
                           croute,route_key(croute))
        if before_child is not None and before_child(walked) is False:
            continue
        yield from _walk(child,here,walked.layer,croute,
                         ancestors | {id(child)},before_child,after_child)
        if after_child is not None:
            after_child(walked)


def walk(model: Model,
         on_path: Optional[Callable[[WalkPath], None]] = None,
         before_child: Optional[Callable[[WalkModel], Optional[bool]]] = None,
         after_child: Optional[Callable[[WalkModel], None]] = None) -> None:
    """Walk ``model`` depth first.

    ``on_path(walked_path)`` is called for every path, the paths of a
    model before those of its children.  ``before_child(walked_model)``
    is called before descending into a child model; returning ``False``
    skips that child's subtree and nothing else.  ``after_child`` is
    called once a child's subtree has been walked.

    Raises ``ValueError`` if a model references one of its ancestors.
    """
    for walked in _walk(model,(0.0,0.0),model.layer or '',(),
                        frozenset([id(model)]),before_child,after_child):
        if on_path is not None:
            on_path(walked)


def iter_paths(model: Model,
               before_child: Optional[Callable[[WalkModel], Optional[bool]]] = None
               ) -> Iterator[WalkPath]:
    """ generator of ``WalkPath`` records, in ``walk()`` order """
    return _walk(model,(0.0,0.0),model.layer or '',(),
                 frozenset([id(model)]),before_child,None)


def _children(model,ancestors):
    for child_id, child in model.models.items():
        _check_child(child,ancestors,('models',child_id))
        yield child


## ids
## ---

def count_child_models(model):
    return len(model.models)

def get_similar_path_id(model,path_id):
    """ ``path_id`` if it is unused in ``model.paths``, else the first
    free ``path_id_1``, ``path_id_2``, ... """
    new_id = path_id
    i = 0
    while new_id in model.paths:
        i += 1
        new_id = '{}_{}'.format(path_id,i)
    return new_id

def get_similar_model_id(model,model_id):
    new_id = model_id
    i = 0
    while new_id in model.models:
        i += 1
        new_id = '{}_{}'.format(model_id,i)
    return new_id

def add_path(model,p,path_id,override=False):
    """add a path to a model under ``path_id``, or under a similar free
    id unless ``override`` is set.  Returns the id used."""
    pth.validate_path(p)
    if not override:
        path_id = get_similar_path_id(model,path_id)
    model.paths[path_id] = p
    return path_id

def add_model(model,child,child_id,override=False):
    if not isinstance(child,Model):
        raise ValueError('not a model: {!r}'.format(child))
    if not override:
        child_id = get_similar_model_id(model,child_id)
    model.models[child_id] = child
    return child_id

def prefix_path_ids(model,prefix):
    """ prepend ``prefix`` to the id of every path in the tree """
    walked = list(iter_paths(model))
    for w in walked:
        del w.model.paths[w.path_id]
    for w in walked:
        w.model.paths[prefix + w.path_id] = w.path

def remove_path(walked):
    """remove a walked path from its model.  The entry is removed only
    if it still holds the very same path object; returns ``True`` if it
    did."""
    if walked.model.paths.get(walked.path_id) is walked.path:
        del walked.model.paths[walked.path_id]
        return True
    return False

## transformations
## ---------------

def originate(model,origin=None):
    """Flatten every origin of the tree into path coordinates, so that
    all paths are expressed relative to ``origin`` (the point (0, 0)
    if not given).  Afterwards every model origin is (0, 0) except the
    root's, which is set to ``origin`` when one is given."""
    def inner(m,o,ancestors):
        new_origin = add(_model_origin(m),o)
        for p in m.paths.values():
            pth.move_relative(p,new_origin)
        for child in _children(m,ancestors):
            inner(child,new_origin,ancestors | {id(child)})
        m.origin = (0.0,0.0)

    start = geom.scale(point(origin),-1.0) if origin is not None else (0.0,0.0)
    inner(model,start,frozenset([id(model)]))
    if origin is not None:
        model.origin = point(origin)

def move(model,origin):
    """ place the model's origin at ``origin`` """
    model.origin = point(origin)

def move_relative(model,delta):
    model.origin = add(_model_origin(model),delta)

def rotate(model,angle,about=(0.0,0.0)):
    """rotate a model counter-clockwise by ``angle`` degrees around
    ``about``, expressed in the coordinates of the model's parent.
    Origins stay where they are; the paths beneath them turn."""
    def inner(m,about,ancestors):
        local = sub(about,_model_origin(m))
        for p in m.paths.values():
            pth.rotate(p,angle,local)
        for child in _children(m,ancestors):
            inner(child,local,ancestors | {id(child)})

    if angle:
        inner(model,point(about),frozenset([id(model)]))

def scale(model,factor,scale_origin=False):
    """scale every path of a model by ``factor``.  The model's own
    origin is scaled only if ``scale_origin`` is set; child origins
    always are."""
    def inner(m,scale_origin,ancestors):
        if scale_origin and m.origin is not None:
            m.origin = geom.scale(m.origin,factor)
        for p in m.paths.values():
            pth.scale(p,factor)
        for child in _children(m,ancestors):
            inner(child,True,ancestors | {id(child)})

    if factor <= 0:
        raise ValueError('scale factor must be positive, got {}'.format(factor))
    inner(model,scale_origin,frozenset([id(model)]))

def clone(model):
    """ deep copy of a model tree """
    return copy.deepcopy(model)

def mirror(model,mirror_x,mirror_y):
    """ return a mirrored copy of ``model``; the original is untouched """
    def inner(m,ancestors):
        if m.origin is not None:
            m.origin = geom.mirror(m.origin,mirror_x,mirror_y)
        for p in m.paths.values():
            pth.mirror(p,mirror_x,mirror_y)
        for child in _children(m,ancestors):
            inner(child,ancestors | {id(child)})

    new = clone(model)
    if mirror_x or mirror_y:
        inner(new,frozenset([id(new)]))
    return new
