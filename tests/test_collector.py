import pytest
from planarkit.collector import Collector
from planarkit.measure import is_point_equal
## unit tests for planarKit collector.py

class TestCollector:
    def test_default_comparer(self):
        c = Collector()
        c.add_item_to_collection('a',1)
        c.add_item_to_collection('b',2)
        c.add_item_to_collection('a',3)
        assert len(c) == 2
        assert c.find_collection('a') == [1,3]
        assert c.find_collection('z') is None

    def test_point_keys(self):
        c = Collector(lambda a, b: is_point_equal(a,b,0.005))
        c.add_item_to_collection((0,0),'x')
        c.add_item_to_collection((0.001,0),'y')
        c.add_item_to_collection((1,0),'z')
        assert c.find_collection((0,0.002)) == ['x','y']
        assert list(c.get_collections_of_multiple()) == [((0,0),['x','y'])]

    def test_remove(self):
        c = Collector()
        item = [1]
        twin = [1]
        c.add_item_to_collection('k',item)
        c.add_item_to_collection('k',twin)
        ## removal is by identity, not equality
        assert c.remove_item_from_collection('k',twin)
        assert c.find_collection('k')[0] is item
        assert not c.remove_item_from_collection('k',[1])
        assert not c.remove_item_from_collection('q',item)
        assert c.remove_collection('k')
        assert not c.remove_collection('k')
        assert len(c) == 0
