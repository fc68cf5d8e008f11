## planarKit key to collection multimap
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

"""a multimap from keys to lists of items, where keys are matched by
an arbitrary comparer rather than by hashing.

The chain finder uses it to gather path ends that lie within a
matching distance of each other::

    c = Collector(lambda a, b: is_point_equal(a, b, 0.005))
    c.add_item_to_collection((0, 0), link_a)
    c.add_item_to_collection((0.001, 0), link_b)
    c.find_collection((0, 0))    # [link_a, link_b]

A new key is compared against the key of each existing collection in
turn, and joins the first that matches.  Lookups are linear in the
number of collections.

"""

from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional


@dataclass(eq=False)
class Collection:
    key: Any
    items: List[Any] = field(default_factory=list)


class Collector:
    """ key to collection multimap with a custom key comparer """

    def __init__(self, comparer: Optional[Callable[[Any, Any], bool]] = None):
        self.comparer = comparer
        self.collections: List[Collection] = []

    def __len__(self):
        return len(self.collections)

    def __iter__(self):
        return iter(self.collections)

    def _match(self, a, b):
        if self.comparer is None:
            return a == b
        return self.comparer(a,b)

    def _index(self, key):
        for i, c in enumerate(self.collections):
            if self._match(key,c.key):
                return i
        return None

    def add_item_to_collection(self, key, item):
        i = self._index(key)
        if i is None:
            self.collections.append(Collection(key,[item]))
        else:
            self.collections[i].items.append(item)

    def find_collection(self, key):
        """ the items collected under ``key``, or None """
        i = self._index(key)
        if i is None:
            return None
        return self.collections[i].items

    def remove_collection(self, key):
        i = self._index(key)
        if i is None:
            return False
        del self.collections[i]
        return True

    def remove_item_from_collection(self, key, item):
        """remove ``item``, matched by identity, from the collection of
        ``key``.  Returns True if it was there."""
        items = self.find_collection(key)
        if items is None:
            return False
        for i, x in enumerate(items):
            if x is item:
                del items[i]
                return True
        return False

    def get_collections_of_multiple(self):
        """ generate ``(key, items)`` for every collection of two or more """
        for c in self.collections:
            if len(c.items) > 1:
                yield c.key, c.items
