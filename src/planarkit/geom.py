## foundational point, vector and angle arithmetic for planarKit
## Born on 29 July, 2020
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

"""foundational point and angle arithmetic for **planarKit**

====================
OVERVIEW
====================

The planarkit.geom module provides the scalar, point and angle
operations that every other planarKit module is built on: addition,
subtraction, scaling, rotation, distance, polar conversion and
rounding to a tolerance.

constants
=========

planarkit.geom provides the "constants" ``epsilon`` and ``pi2`` (2*pi),
along with the default matching distances used by chain finding,
combine and simplify.  These are defaults only: every operation that
depends on a tolerance accepts an explicit keyword argument.

points
======

Points are immutable Python tuples of two floats, ``(x, y)``.  None of
the functions below modify their arguments; all of them return new
tuples.  ::

   p1 = point(0,0)
   p2 = point(2.5,-1)
   p3 = add(p1,p2)

angles
======

Angles are specified in degrees and are right-handed, which is to say
a positive angle specifies a counter-clockwise sweep.  Functions that
take or return radians say so in their names.

"""

import math

## constants
epsilon = 1e-7
pi2 = 2.0*math.pi

## default distance under which two points are considered the same
## when linking paths end-to-end
POINT_MATCHING_DISTANCE = 0.005

## default difference under which two radii are considered the same
SCALAR_MATCHING_DISTANCE = 0.001

## default distance under which a point is taken to lie on a path
## when breaking it
ON_PATH_DISTANCE = 1e-4

## operations on scalars
## -----------------------

def isgoodnum(n):
    """ determine if an argument is actually a scalar number, and not boolean
    """
    return (not isinstance(n,bool)) and isinstance(n,(int,float))

def round_to(n, accuracy=epsilon):
    """round ``n`` to the nearest multiple of ``accuracy``, with halves
    rounded away from zero.  Rounding an already rounded value with the
    same accuracy returns it unchanged.

    """
    if accuracy <= 0:
        raise ValueError('rounding accuracy must be positive')
    places = 1.0/accuracy
    whole = round(places)
    ## 1/1e-7 is not exactly 1e7 in floating point
    if whole > 0 and abs(places-whole) < 1e-9*places:
        places = whole
    r = math.floor(abs(n)*places + 0.5)/places
    return -r if n < 0 else r

def close(a,b,tol=epsilon):
    """ are two scalars the same within ``tol``
    """
    return abs(a-b) <= tol

def tolerance(*values):
    """ ``epsilon`` scaled to the magnitude of the supplied values, never
    smaller than ``epsilon`` itself
    """
    m = 1.0
    for v in values:
        m = max(m,abs(v))
    return epsilon*m


## operations on points
## ---------------------

def point(x=0.0,y=0.0):
    """make a point from two numbers, or copy an existing point-like
    sequence"""
    if isinstance(x,(tuple,list)):
        if len(x) < 2:
            raise ValueError('bad point: {}'.format(x))
        return (float(x[0]),float(x[1]))
    if not (isgoodnum(x) and isgoodnum(y)):
        raise ValueError('bad point coordinates: {}, {}'.format(x,y))
    return (float(x),float(y))

def ispoint(x):
    """ is it a point? """
    return isinstance(x,tuple) and len(x) == 2 and isgoodnum(x[0]) \
        and isgoodnum(x[1])

def zero():
    return (0.0,0.0)

def add(a,b):
    """ `a + b`"""
    return (a[0]+b[0],a[1]+b[1])

def sub(a,b):
    """ `a - b`"""
    return (a[0]-b[0],a[1]-b[1])

def scale(a,c):
    """ point ``a`` times scalar ``c``"""
    return (a[0]*c,a[1]*c)

def average(a,b):
    """ point halfway between ``a`` and ``b`` """
    return ((a[0]+b[0])/2.0,(a[1]+b[1])/2.0)

def dot(a,b):
    return a[0]*b[0]+a[1]*b[1]

## z component of the 3D cross product of two vectors lying in the
## x,y plane.  Positive when b is counter-clockwise from a.
def cross(a,b):
    return a[0]*b[1]-a[1]*b[0]

def mag(a):
    """ magnitude of vector ``a``"""
    return math.hypot(a[0],a[1])

def dist(a,b):
    """ euclidean distance between points ``a`` and ``b``"""
    return math.hypot(a[0]-b[0],a[1]-b[1])

def vclose(a,b,tol=epsilon):
    """ are two points the same within ``tol`` """
    return dist(a,b) <= tol

def unit(v):
    """ unit vector in the direction of ``v``"""
    m = mag(v)
    if m < epsilon:
        raise ValueError('cannot normalize zero-length vector')
    return (v[0]/m,v[1]/m)

def perp(v):
    """ ``v`` rotated counter-clockwise by 90 degrees"""
    return (-v[1],v[0])

def frompolar(angle,r):
    """ point at ``angle`` radians and distance ``r`` from the origin"""
    return (r*math.cos(angle),r*math.sin(angle))

def rotate(p,angle,about=(0.0,0.0)):
    """rotate point ``p`` counter-clockwise by ``angle`` degrees around
    point ``about``"""
    rad = math.radians(angle)
    c = math.cos(rad)
    s = math.sin(rad)
    dx = p[0]-about[0]
    dy = p[1]-about[1]
    return (about[0]+dx*c-dy*s,about[1]+dx*s+dy*c)

def mirror(p,mirror_x,mirror_y):
    """ mirror a point.  ``mirror_x`` flips the sign of the x coordinate,
    ``mirror_y`` flips the sign of the y coordinate """
    return (-p[0] if mirror_x else p[0],-p[1] if mirror_y else p[1])

def rounded(p,accuracy=epsilon):
    """ point with both coordinates rounded to ``accuracy``"""
    return (round_to(p[0],accuracy),round_to(p[1],accuracy))

def closest(ref,candidates):
    """ the candidate point nearest to ``ref``, or None if there are no
    candidates """
    best = None
    bestd = None
    for c in candidates:
        d = dist(ref,c)
        if bestd is None or d < bestd:
            best = c
            bestd = d
    return best


## operations on angles
## ---------------------

def to_radians(a):
    return a*math.pi/180.0

def to_degrees(a):
    return a*180.0/math.pi

def no_revolutions(a):
    """ the same polar angle, in the interval [0, 360) """
    r = a - 360.0*math.floor(a/360.0)
    if r >= 360.0:
        r -= 360.0
    return r

def angle_of_point(origin,p):
    """ angle in degrees, in the interval [0, 360), of the ray from
    ``origin`` through ``p`` """
    a = math.degrees(math.atan2(p[1]-origin[1],p[0]-origin[0]))
    if a < 0:
        a += 360.0
    if a >= 360.0:
        a -= 360.0
    return a

def mirror_angle(a,mirror_x,mirror_y):
    """ angle of a ray after mirroring, see ``mirror()`` """
    if mirror_y:
        a = 360.0 - a
    if mirror_x:
        a = (180.0 if a < 180.0 else 540.0) - a
    return a
