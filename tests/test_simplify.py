import pytest
from planarkit.geom import close, point, vclose
from planarkit import paths as pth
from planarkit.model import Model
from planarkit.simplify import simplify
## unit tests for planarKit simplify.py

class TestCircles:
    def test_duplicates(self):
        m = Model(paths={'a': pth.circle((0,0),2),'b': pth.circle((0.001,0),2.0001),
                         'c': pth.circle((0,0),3)})
        assert simplify(m) == 1
        assert sorted(m.paths) == ['a','c']

    def test_nested_models(self):
        m = Model(paths={'a': pth.circle((0,0),2)},
                  models={'k': Model(paths={'b': pth.circle((0,0),2)})})
        assert simplify(m) == 1
        assert m.models['k'].paths == {}

class TestArcs:
    def test_overlapping(self):
        m = Model(paths={'a': pth.arc((0,0),1,0,90),'b': pth.arc((0,0),1,45,180)})
        assert simplify(m) == 1
        a = m.paths['a']
        assert close(a.start_angle,0) and close(pth.arc_end_angle(a),180)

    def test_contained(self):
        m = Model(paths={'a': pth.arc((0,0),1,0,180),'b': pth.arc((0,0),1,30,60)})
        assert simplify(m) == 1
        assert close(pth.arc_span(m.paths['a']),180)

    def test_wraps_onto_start(self):
        m = Model(paths={'a': pth.arc((0,0),1,0,90),'b': pth.arc((0,0),1,300,30)})
        assert simplify(m) == 1
        a = m.paths['a']
        assert close(pth.arc_span(a),150)
        s, e = pth.path_ends(a)
        assert vclose(s,point(0.5,-(3**0.5)/2))
        assert vclose(e,point(0,1))

    def test_becomes_circle(self):
        m = Model(paths={'a': pth.arc((0,0),1,0,180),'b': pth.arc((0,0),1,180,360)})
        assert simplify(m) == 1
        assert pth.iscircle(m.paths['a'])

    def test_chain_of_arcs(self):
        m = Model(paths={'a': pth.arc((0,0),1,0,90),'c': pth.arc((0,0),1,180,270),
                         'b': pth.arc((0,0),1,90,180)})
        assert simplify(m) == 2
        assert close(pth.arc_span(m.paths['a']),270)

    def test_apart(self):
        m = Model(paths={'a': pth.arc((0,0),1,0,90),'b': pth.arc((0,0),1,120,180),
                         'c': pth.arc((0,0),2,45,180)})
        assert simplify(m) == 0


class TestArcsAndCircles:
    def test_merged_arcs_match_circle(self):
        m = Model(paths={'a': pth.arc((0,0),1,0,180),'b': pth.arc((0,0),1,180,360),
                         'c': pth.circle((0,0),1)})
        assert simplify(m) == 2
        assert list(m.paths) == ['c']
        assert pth.iscircle(m.paths['c'])

    def test_arc_on_circle(self):
        m = Model(paths={'c': pth.circle((0,0),1),'a': pth.arc((0,0),1,0,90),
                         'other': pth.arc((0,0),2,0,90)})
        assert simplify(m) == 1
        assert sorted(m.paths) == ['c','other']

class TestLines:
    def test_overlapping(self):
        m = Model(paths={'a': pth.line((0,0),(5,0)),'b': pth.line((3,0),(10,0)),
                         'c': pth.line((10,0),(12,0))})
        assert simplify(m) == 2
        assert m.paths['a'].origin == (0.0,0.0)
        assert m.paths['a'].end == (12.0,0.0)

    def test_vertical(self):
        m = Model(paths={'a': pth.line((2,0),(2,5)),'b': pth.line((2,9),(2,3))})
        assert simplify(m) == 1
        assert m.paths['a'].origin == (2.0,0.0) and m.paths['a'].end == (2.0,9.0)

    def test_sloped(self):
        m = Model(paths={'a': pth.line((0,10),(5,5)),'b': pth.line((4,6),(10,0))})
        assert simplify(m) == 1
        assert vclose(m.paths['a'].origin,point(0,10))
        assert vclose(m.paths['a'].end,point(10,0))
        m = Model(paths={'a': pth.line((0,0),(5,5)),'b': pth.line((10,10),(4,4))})
        simplify(m)
        assert vclose(m.paths['a'].end,point(10,10))

    def test_not_merged(self):
        m = Model(paths={'a': pth.line((0,0),(1,0)),'b': pth.line((5,0),(6,0)),
                         'c': pth.line((0,1),(6,1)),'d': pth.line((0,0),(0,1))})
        assert simplify(m) == 0
        assert len(m.paths) == 4

class TestLayers:
    def test_layers_kept_apart(self):
        m = Model(paths={'a': pth.line((0,0),(5,0),layer='cut'),
                         'b': pth.line((3,0),(10,0),layer='etch'),
                         'c': pth.line((4,0),(8,0),layer='cut')})
        assert simplify(m) == 1
        assert sorted(m.paths) == ['a','b']
        assert m.paths['a'].end == (8.0,0.0)

    def test_bad_path(self):
        m = Model(paths={'x': pth.Path('blob',(0,0))})
        with pytest.raises(ValueError):
            simplify(m)
