'''
Point masses and the aggregate mechanical quantities of a system of point masses.

A body configuration is an ordered list of PointMass objects, the same index always denotes the same particle.
A trajectory is a function: time -> body configuration, with the same length and ordering at every time.
'''

import numpy as np

from DeformableBodies.Errors import DimensionError, DomainError
from DeformableBodies.Motion.quaternion import rotate

__all__ = [ "PointMass", "masses", "positions", "centerOfMass", "centralize", "inertiaTensor", "angularMomentum",
    "velocity", "rotatePointMass", "combineTrajectories", "rigidTrajectory" ]

class PointMass():
    ''' Immutable (mass, position) pair. Mass must be positive, position must be a 3-vector '''
    __slots__ = [ "_mass", "_position" ]

    def __init__(self, mass, position):
        mass = float(mass)
        if not mass > 0:
            raise DomainError("Point masses must have positive mass. Mass given: {}".format(mass))

        position = np.array(position, dtype=float).reshape(-1)
        if position.shape[0] != 3:
            raise DimensionError("Point mass positions must be three-dimensional. Dimension given: {}".format(position.shape[0]))
        position.setflags(write=False)

        self._mass = mass
        self._position = position

    @property
    def mass(self) -> float:
        return self._mass

    @property
    def position(self):
        return self._position

    def translated(self, offset):
        return PointMass(self._mass, self._position + np.asarray(offset, dtype=float))

    def __eq__(self, point2):
        try:
            return self._mass == point2.mass and bool(np.array_equal(self._position, point2.position))
        except AttributeError:
            return False

    __hash__ = None

    def __repr__(self):
        return "PointMass({}, [{}, {}, {}])".format(self._mass, *[ float(x) for x in self._position ])

#### Stacked views of a body configuration ####
def masses(points):
    ''' Returns the masses of a list of PointMasses as an (N,) numpy array '''
    return np.array([ p.mass for p in points ], dtype=float)

def positions(points):
    ''' Returns the positions of a list of PointMasses as an (N,3) numpy array '''
    if len(points) == 0:
        return np.zeros((0,3))
    return np.array([ p.position for p in points ], dtype=float)

#### Aggregate quantities ####
def centerOfMass(points):
    ''' (sum of m_i*x_i) / (sum of m_i) '''
    if len(points) == 0:
        raise DomainError("An empty body configuration has no center of mass")

    m = masses(points)
    return m.dot(positions(points)) / m.sum()

def centralize(points):
    ''' Returns a new list of PointMasses, translated so that their center of mass lies on the origin '''
    cm = centerOfMass(points)
    return [ PointMass(p.mass, p.position - cm) for p in points ]

def inertiaTensor(points):
    '''
        Inertia tensor about the origin: sum of m_i*( <x_i,x_i>*I - x_i (outer) x_i )
        Symmetric and positive semi-definite. Singular if all points are colinear or coincident.
    '''
    m = masses(points)
    x = positions(points)

    radiusSquared = np.einsum("i,ij,ij->", m, x, x)
    return radiusSquared*np.eye(3) - np.einsum("i,ij,ik->jk", m, x, x)

def angularMomentum(points, velocities):
    ''' Sum of m_i*(x_i cross v_i), points and velocities are matched by index '''
    velocities = np.asarray(velocities, dtype=float).reshape(-1, 3)
    if velocities.shape[0] != len(points):
        raise DimensionError("Got {} velocities for {} points".format(velocities.shape[0], len(points)))

    if len(points) == 0:
        return np.zeros(3)

    return masses(points).dot(np.cross(positions(points), velocities))

def velocity(trajectory, time, epsilon=1e-6):
    '''
        Central finite difference of each particle's position: (x(t+epsilon) - x(t-epsilon)) / (2*epsilon)
        Truncation error is O(epsilon^2), round-off error grows like 1/epsilon.
        The trajectory must be evaluable at time +/- epsilon, even at the ends of a simulated interval.

        Returns an (N,3) numpy array
    '''
    if not epsilon > 0:
        raise DomainError("Finite difference step must be positive. Step given: {}".format(epsilon))

    forward = positions(trajectory(time + epsilon))
    backward = positions(trajectory(time - epsilon))
    if forward.shape != backward.shape:
        raise DimensionError("Trajectory changed its number of points between t={} and t={}".format(time - epsilon, time + epsilon))

    return (forward - backward) / (2*epsilon)

#### Moving point masses ####
def rotatePointMass(point, rotation, center=None):
    ''' Rotates a point mass's position by rotation (a Quaternion), about center if given. Mass is unchanged '''
    return PointMass(point.mass, rotate(point.position, rotation, center))

def combineTrajectories(trajectories):
    ''' Combines a list of single-particle trajectories (functions: time -> PointMass) into one trajectory: time -> [ PointMass ] '''
    trajectories = list(trajectories)

    def bodyFrame(time):
        return [ particleTrajectory(time) for particleTrajectory in trajectories ]

    return bodyFrame

def rigidTrajectory(points):
    ''' Trajectory of a body that never changes shape '''
    points = list(points)

    def bodyFrame(time):
        return list(points)

    return bodyFrame
