import pytest
from planarkit.geom import close, point, vclose
from planarkit import paths as pth
from planarkit.breaking import *
from planarkit.model import Model, iter_paths
## unit tests for planarKit breaking.py

class TestBreakAtPoint:
    def test_line(self):
        l = pth.line((0,0),(10,0),layer='x')
        rest = break_at_point(l,(4,0))
        assert rest is not None and rest is not l
        assert l.origin == (0.0,0.0) and l.end == (4.0,0.0)
        assert rest.origin == (4.0,0.0) and rest.end == (10.0,0.0)
        assert rest.layer == 'x'

    @pytest.mark.parametrize('p,x',[
        (pth.line((1,2),(7,-4)),(3,0)),
        (pth.arc((0,0),5,30,300),(-5,0)),
        (pth.arc((1,1),2,300,60),(3,1)),
    ])
    def test_reconstructs_ends(self,p,x):
        start, end = pth.path_ends(p)
        rest = break_at_point(p,x)
        assert rest is not None
        s1, e1 = pth.path_ends(p)
        s2, e2 = pth.path_ends(rest)
        assert vclose(s1,start)
        assert vclose(e2,end)
        assert vclose(e1,x,1e-6) and vclose(s2,x,1e-6)
        assert vclose(e1,s2)

    def test_arc_spans(self):
        a = pth.arc((0,0),1,300,60)
        rest = break_at_point(a,(1,0))
        assert close(pth.arc_span(a),60)
        assert close(pth.arc_span(rest),60)

    def test_circle(self):
        c = pth.circle((0,0),2)
        assert break_at_point(c,(0,2)) is None
        assert pth.isarc(c)
        assert close(c.start_angle,90)
        assert close(c.end_angle,450)
        assert close(pth.arc_span(c),360)

    def test_not_on_path(self):
        l = pth.line((0,0),(10,0))
        assert break_at_point(l,(5,1)) is None
        assert break_at_point(l,(0,0)) is None
        assert break_at_point(l,(10,0)) is None
        assert break_at_point(l,(12,0)) is None
        assert l.end == (10.0,0.0)
        a = pth.arc((0,0),1,0,90)
        assert break_at_point(a,(0,-1)) is None
        assert break_at_point(a,(2,0)) is None
        assert a.end_angle == 90.0
        c = pth.circle((0,0),1)
        assert break_at_point(c,(5,5)) is None
        assert pth.iscircle(c)

    def test_full_arc(self):
        a = pth.arc((0,0),1,90,450)
        rest = break_at_point(a,(0,-1))
        assert rest is not None
        assert close(pth.arc_span(a),180)
        assert close(pth.arc_span(rest),180)

class TestFragments:
    def test_points_on_path(self):
        l = pth.line((0,0),(10,0))
        pts = [(0,0),(3,0),(5,5),(10,0),(7,0)]
        assert points_on_path(pts,l) == [(3,0),(7,0)]

    def test_line_fragments(self):
        l = pth.line((0,0),(10,0))
        frags = path_fragments(l,[(7,0),(3,0),(3,0)])
        assert len(frags) == 3
        assert [f.origin[0] for f in frags] == [0.0,3.0,7.0]
        assert l.end == (10.0,0.0)

    def test_circle_fragments(self):
        c = pth.circle((0,0),1)
        frags = path_fragments(c,[(1,0),(-1,0)])
        assert len(frags) == 2
        assert all(pth.isarc(f) for f in frags)
        assert close(sum(pth.arc_span(f) for f in frags),360)
        assert pth.iscircle(c)

    def test_tiny_fragments_dropped(self):
        l = pth.line((0,0),(10,0))
        frags = path_fragments(l,[(5,0),(5.00001,0)],within=1e-6)
        assert len(frags) == 2

    def test_break_points_overlap(self):
        l = pth.line((0,0),(10,0))
        other = Model(paths={'o': pth.line((5,0),(15,0))})
        pts = break_points(l,list(iter_paths(other)))
        assert any(vclose(p,point(5,0)) for p in pts)

class TestBreakModel:
    def test_cross(self):
        a = Model(paths={'h': pth.line((0,0),(10,0))})
        b = Model(origin=(5,-5),paths={'v': pth.line((0,0),(0,10))})
        assert break_paths_at_intersections(a,b) == 1
        assert sorted(a.paths) == ['h','h_1']
        assert a.paths['h'].end == (5.0,0.0)
        assert a.paths['h_1'].origin == (5.0,0.0)
        ## the other model is untouched
        assert list(b.paths) == ['v']

    def test_local_coordinates(self):
        a = Model(origin=(100,0),paths={'h': pth.line((0,0),(10,0))})
        b = Model(paths={'v': pth.line((105,-5),(105,5))})
        break_paths_at_intersections(a,b)
        assert a.paths['h'].end == (5.0,0.0)

    def test_self(self):
        m = Model(paths={'h': pth.line((0,0),(10,0)),'v': pth.line((5,-5),(5,5))})
        assert break_paths_at_intersections(m) == 2
        assert len(m.paths) == 4

    def test_no_crossing(self):
        m = Model(paths={'h': pth.line((0,0),(10,0))})
        other = Model(paths={'c': pth.circle((50,50),1)})
        assert break_paths_at_intersections(m,other) == 0
        assert list(m.paths) == ['h']
