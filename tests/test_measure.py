import pytest
from planarkit.geom import close, point, vclose
from planarkit import paths as pth
from planarkit.model import Model, iter_paths
from planarkit.measure import *
## unit tests for planarKit measure.py

class TestExtents:
    def test_line(self):
        m = path_extents(pth.line((3,-1),(0,2)))
        assert m.low == (0.0,-1.0) and m.high == (3.0,2.0)
        assert close(m.width,3) and close(m.height,3)

    def test_circle_offset(self):
        m = path_extents(pth.circle((1,1),2),offset=(10,0))
        assert m.low == (9.0,-1.0) and m.high == (13.0,3.0)

    def test_arc_quadrant(self):
        m = path_extents(pth.arc((0,0),1,0,90))
        assert vclose(m.low,point(0,0))
        assert vclose(m.high,point(1,1))

    def test_arc_through_cardinals(self):
        ## sweeps through 90 and 180 degrees
        m = path_extents(pth.arc((0,0),2,45,225))
        assert close(m.high[1],2.0)
        assert close(m.low[0],-2.0)
        assert close(m.high[0],2**0.5)
        assert close(m.low[1],-(2**0.5))

    def test_arc_across_zero(self):
        m = path_extents(pth.arc((0,0),1,300,60))
        assert close(m.high[0],1.0)
        assert close(m.low[0],0.5)

    def test_model_extents(self):
        child = Model(origin=(10,10),paths={'c': pth.circle((0,0),1)})
        root = Model(paths={'l': pth.line((0,0),(1,1))},models={'k': child})
        m = model_extents(root)
        assert m.low == (0.0,0.0) and m.high == (11.0,11.0)
        assert model_extents(Model()) is None
        assert model_extents(Model(models={'empty': Model()})) is None

class TestAtlas:
    def test_models_measured(self):
        child = Model(origin=(5,0),paths={'l': pth.line((0,0),(1,0))})
        root = Model(paths={'c': pth.circle((0,0),1)},models={'k': child})
        atlas = Atlas(root)
        assert not atlas.models_measured
        atlas.measure_models()
        assert atlas.models_measured
        assert atlas.model_map['models["k"]'].low == (5.0,0.0)
        assert atlas.model_map[''].low == (-1.0,-1.0)
        assert atlas.model_map[''].high == (6.0,1.0)
        assert set(atlas.path_map) == {'paths["c"]','models["k"].paths["l"]'}

    def test_path_measure_cached(self):
        root = Model(paths={'l': pth.line((0,0),(1,0))})
        atlas = Atlas(root)
        w = next(iter_paths(root))
        m1 = atlas.path_measure(w)
        ## a stale atlas keeps returning the cached value
        root.paths['l'].end = (5.0,0.0)
        assert atlas.path_measure(w) is m1
        atlas.invalidate()
        assert atlas.path_measure(w).high == (5.0,0.0)

    def test_overlap(self):
        a = Measure((0,0),(1,1))
        b = Measure((1,0),(2,1))
        c = Measure((1.5,1.5),(3,3))
        assert is_measurement_overlapping(a,b)
        assert not is_measurement_overlapping(a,c)
        increase(a,c)
        assert a.high == (3,3)
        assert vclose(measure_center(a),point(1.5,1.5))

class TestPredicates:
    def test_point_equal(self):
        assert is_point_equal((1,1),(1+1e-9,1))
        assert not is_point_equal((1,1),(1.001,1))
        assert is_point_equal((1,1),(1.001,1),0.005)
        assert not is_point_equal((1,1),(1.004,1.004),0.005)

    def test_angle_equal(self):
        assert is_angle_equal(0,360)
        assert is_angle_equal(-90,270.00001)
        assert not is_angle_equal(10,10.01)

    def test_between(self):
        assert is_between(1,0,1)
        assert not is_between(1,0,1,True)
        assert is_between(0.5,1,0,True)

    def test_between_arc_angles(self):
        a = pth.arc((0,0),1,350,10)
        assert is_between_arc_angles(0,a)
        assert is_between_arc_angles(355,a)
        assert not is_between_arc_angles(180,a)
        assert is_between_arc_angles(10,a)
        assert not is_between_arc_angles(10,a,True)
        neg = pth.arc((0,0),1,-45,45)
        assert is_between_arc_angles(330,neg)

    def test_between_points(self):
        l = pth.line((0,0),(10,0))
        assert is_between_points((5,0),l)
        assert is_between_points((10,0),l)
        assert not is_between_points((10,0),l,True)
        assert not is_between_points((11,0),l)
        d = pth.line((0,0),(4,4))
        assert is_between_points((2,2),d,True)

    def test_slopes(self):
        h1 = line_slope(pth.line((0,0),(1,0)))
        h2 = line_slope(pth.line((5,0),(7,0)))
        h3 = line_slope(pth.line((0,1),(1,1)))
        v1 = line_slope(pth.line((2,0),(2,5)))
        v2 = line_slope(pth.line((2,7),(2,9)))
        d1 = line_slope(pth.line((0,0),(1,1)))
        d2 = line_slope(pth.line((3,3),(2,2)))
        assert not v1.has_slope
        assert close(d1.slope,1.0) and close(d1.y_intercept,0.0)
        assert is_slope_equal(h1,h2)
        assert is_slope_parallel(h1,h3) and not is_slope_equal(h1,h3)
        assert is_slope_equal(v1,v2)
        assert is_slope_equal(d1,d2)
        assert not is_slope_parallel(h1,v1)

    def test_line_overlap(self):
        a = pth.line((0,0),(10,0))
        assert is_line_overlapping(a,pth.line((5,0),(15,0)))
        assert is_line_overlapping(a,pth.line((10,0),(15,0)))
        assert not is_line_overlapping(a,pth.line((10,0),(15,0)),True)
        assert not is_line_overlapping(a,pth.line((11,0),(15,0)))

    def test_arc_overlap(self):
        a = pth.arc((0,0),1,0,90)
        assert is_arc_overlapping(a,pth.arc((0,0),1,45,180))
        assert is_arc_overlapping(a,pth.arc((0,0),1,90,180))
        assert not is_arc_overlapping(a,pth.arc((0,0),1,90,180),True)
        assert not is_arc_overlapping(a,pth.arc((0,0),1,100,180))

    def test_concave(self):
        a = pth.arc((0,0),1,0,180)
        assert is_arc_concave_towards_point(a,(0,0.5))
        assert is_arc_concave_towards_point(a,(0,-5))
        assert not is_arc_concave_towards_point(a,(0,5))

    def test_path_equal(self):
        l = pth.line((0,0),(1,1))
        assert is_path_equal(l,pth.line((1,1),(0,0)))
        assert is_path_equal(l,pth.line((5,5),(6,6)),offset_b=(-5,-5))
        assert not is_path_equal(l,pth.line((0,0),(1,2)))
        assert not is_path_equal(l,pth.circle((0,0),1))
        assert is_path_equal(pth.circle((0,0),1),pth.circle((0.001,0),1),0.005)
        assert is_path_equal(pth.arc((0,0),1,0,90),pth.arc((0,0),1,360,450))
        assert not is_path_equal(pth.arc((0,0),1,0,90),pth.arc((0,0),1,0,91))

    def test_point_distance(self):
        assert close(point_distance((0,0),(3,4)),5)
