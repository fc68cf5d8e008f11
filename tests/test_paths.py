import math
import pytest
from planarkit.geom import close, point, vclose
from planarkit import paths as pth
## unit tests for planarKit paths.py

class TestConstruct:
    """path constructors and validation"""

    def test_line(self):
        l = pth.line((0,0),(3,4),layer='cut')
        assert pth.isline(l) and pth.ispath(l)
        assert not pth.iscircle(l) and not pth.isarc(l)
        assert l.origin == (0.0,0.0) and l.end == (3.0,4.0)
        assert l.layer == 'cut'
        assert close(pth.path_length(l),5.0)

    def test_bad_paths(self):
        with pytest.raises(ValueError):
            pth.line((1,1),(1,1))
        with pytest.raises(ValueError):
            pth.circle((0,0),0)
        with pytest.raises(ValueError):
            pth.circle((0,0),-2)
        with pytest.raises(ValueError):
            pth.arc((0,0),-1,0,90)

    def test_validate(self):
        pth.validate_path(pth.arc((0,0),1,0,90))
        bad = pth.Path('spline',(0,0))
        with pytest.raises(ValueError):
            pth.validate_path(bad)
        with pytest.raises(ValueError):
            pth.path_length(bad)
        with pytest.raises(ValueError):
            pth.validate_path('not a path')
        degenerate = pth.Path(pth.PATH_LINE,(1,1),end=(1,1))
        with pytest.raises(ValueError):
            pth.validate_path(degenerate)

    def test_identity(self):
        a = pth.line((0,0),(1,0))
        b = pth.line((0,0),(1,0))
        assert a != b
        assert a == a

class TestArcAngles:
    def test_end_angle(self):
        assert pth.arc_end_angle(pth.arc((0,0),1,0,90)) == 90
        assert pth.arc_end_angle(pth.arc((0,0),1,270,90)) == 450
        assert pth.arc_end_angle(pth.arc((0,0),1,10,-10)) == 350

    def test_span(self):
        assert close(pth.arc_span(pth.arc((0,0),1,0,90)),90)
        assert close(pth.arc_span(pth.arc((0,0),1,270,90)),180)
        assert close(pth.arc_span(pth.arc((0,0),1,30,390)),360)
        assert close(pth.arc_span(pth.arc((0,0),1,0,450)),90)

    def test_full_circle(self):
        assert pth.is_full_circle(pth.circle((0,0),1))
        assert pth.is_full_circle(pth.arc((0,0),1,45,405))
        assert not pth.is_full_circle(pth.arc((0,0),1,45,300))
        assert not pth.is_full_circle(pth.line((0,0),(1,0)))

    def test_ends_and_middle(self):
        a = pth.arc((1,1),2,0,90)
        s, e = pth.path_ends(a)
        assert vclose(s,point(3,1))
        assert vclose(e,point(1,3))
        m = pth.path_middle(a)
        assert vclose(m,point(1+math.sqrt(2),1+math.sqrt(2)))
        assert close(pth.path_length(a),math.pi)
        assert pth.path_ends(pth.circle((0,0),1)) is None

    def test_ends_offset(self):
        l = pth.line((0,0),(1,0))
        assert pth.path_ends(l,(2,3)) == ((2.0,3.0),(3.0,3.0))

class TestTransforms:
    def test_move(self):
        l = pth.line((0,0),(1,1))
        assert pth.move(l,(5,5)) is None
        assert l.origin == (5.0,5.0) and l.end == (6.0,6.0)
        pth.move_relative(l,(1,0),subtract=True)
        assert l.origin == (4.0,5.0) and l.end == (5.0,6.0)

    def test_rotate(self):
        l = pth.line((1,0),(2,0))
        pth.rotate(l,90)
        assert vclose(l.origin,point(0,1))
        assert vclose(l.end,point(0,2))
        a = pth.arc((1,0),1,0,90)
        pth.rotate(a,90)
        assert vclose(a.origin,point(0,1))
        assert close(a.start_angle,90) and close(a.end_angle,180)

    def test_scale(self):
        c = pth.circle((1,2),3)
        pth.scale(c,2)
        assert c.origin == (2.0,4.0) and c.radius == 6.0
        with pytest.raises(ValueError):
            pth.scale(c,0)

    def test_mirror_arc(self):
        a = pth.arc((0,0),1,0,90)
        pth.mirror(a,True,False)
        ## now sweeps the second quadrant
        s, e = pth.path_ends(a)
        assert vclose(s,point(0,1))
        assert vclose(e,point(-1,0))
        assert close(pth.arc_span(a),90)

    def test_clone(self):
        l = pth.line((0,0),(1,0),layer='x')
        c = pth.clone(l,(1,1))
        assert c is not l
        assert c.origin == (1.0,1.0) and c.layer == 'x'
        assert l.origin == (0.0,0.0)
