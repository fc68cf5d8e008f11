import math
import pytest
from planarkit.geom import close, dist, point, vclose
from planarkit import paths as pth
from planarkit.fillet import dogbone, fillet
## unit tests for planarKit fillet.py

def endsMeet(arc,*points):
    """ every point is one of the ends of the arc """
    ends = pth.path_ends(arc)
    return all(vclose(p,ends[0],1e-6) or vclose(p,ends[1],1e-6) for p in points)

class TestFillet:
    def test_right_angle(self):
        a = pth.line((0,0),(10,0))
        b = pth.line((0,0),(0,10))
        f = fillet(a,b,2)
        assert pth.isarc(f)
        assert vclose(f.origin,point(2,2)) and close(f.radius,2)
        assert close(pth.arc_span(f),90)
        assert vclose(a.origin,point(2,0))
        assert vclose(b.origin,point(0,2))
        assert endsMeet(f,a.origin,b.origin)
        ## the arc bulges towards the corner
        assert vclose(pth.path_middle(f),point(2-math.sqrt(2),2-math.sqrt(2)))

    def test_end_to_start(self):
        a = pth.line((0,0),(10,0))
        b = pth.line((10,0),(10,10))
        f = fillet(a,b,2)
        assert vclose(f.origin,point(8,2))
        assert vclose(a.end,point(8,0))
        assert vclose(b.origin,point(10,2))
        assert endsMeet(f,a.end,b.origin)

    def test_obtuse(self):
        a = pth.line((0,0),(10,0))
        b = pth.line((0,0),(-10,10))
        f = fillet(a,b,1)
        assert f is not None
        ## the center is equidistant from both lines
        assert close(f.origin[1],1)
        assert close(pth.arc_span(f),45)
        assert endsMeet(f,a.origin,b.origin)

    def test_line_and_arc(self):
        a = pth.line((10,0),(20,0))
        b = pth.arc((0,0),10,0,90)
        f = fillet(a,b,2)
        assert f is not None
        assert close(f.radius,2)
        assert close(dist(f.origin,(0,0)),12)
        assert close(f.origin[1],2)
        assert close(a.origin[0],math.sqrt(140))
        assert b.start_angle > 0 and close(pth.arc_end_angle(b),90)
        assert endsMeet(f,a.origin,pth.path_ends(b)[0])

    def test_does_not_fit(self):
        a = pth.line((0,0),(1,0))
        b = pth.line((0,0),(0,1))
        assert fillet(a,b,5) is None
        assert a.origin == (0.0,0.0) and b.origin == (0.0,0.0)

    def test_no_corner(self):
        assert fillet(pth.line((0,0),(1,0)),pth.line((5,5),(6,6)),1) is None
        assert fillet(pth.line((0,0),(1,0)),pth.line((1,0),(2,0)),1) is None
        assert fillet(pth.line((0,0),(1,0)),pth.circle((5,5),1),1) is None

    def test_bad_radius(self):
        with pytest.raises(ValueError):
            fillet(pth.line((0,0),(1,0)),pth.line((0,0),(0,1)),0)

class TestDogbone:
    def test_right_angle(self):
        a = pth.line((0,0),(10,0))
        b = pth.line((0,0),(0,10))
        d = dogbone(a,b,1)
        r2 = math.sqrt(2)
        assert vclose(d.origin,point(r2/2,r2/2))
        assert vclose(a.origin,point(r2,0))
        assert vclose(b.origin,point(0,r2))
        assert close(pth.arc_span(d),180)
        ## the relief passes through the old corner
        assert vclose(pth.path_middle(d),point(0,0))
        assert endsMeet(d,a.origin,b.origin)

    def test_end_to_end(self):
        a = pth.line((10,0),(0,0))
        b = pth.line((0,10),(0,0))
        d = dogbone(a,b,1)
        assert d is not None
        assert vclose(a.end,point(math.sqrt(2),0))
        assert vclose(pth.path_middle(d),point(0,0))

    def test_too_short(self):
        a = pth.line((0,0),(1,0))
        b = pth.line((0,0),(0,1))
        assert dogbone(a,b,1) is None
        assert a.origin == (0.0,0.0)

    def test_not_lines(self):
        assert dogbone(pth.line((0,0),(1,0)),pth.arc((0,1),1,270,360),0.1) is None
        assert dogbone(pth.line((0,0),(1,0)),pth.line((1,0),(2,0)),0.1) is None
        with pytest.raises(ValueError):
            dogbone(pth.line((0,0),(1,0)),pth.line((0,0),(0,1)),-1)
