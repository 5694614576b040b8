'''
Equation of motion of a deformable body with no external torques.

State vector (7 components):
    [ q (4 components), Pi (3 components) ]
        q:  attitude quaternion, rotates body-frame vectors into the inertial frame
        Pi: angular momentum variable, in body-frame coordinates

At each time t, given the body-frame trajectory chi:
    r(t)  = chi(t), translated so that its center of mass is at the origin
    v(t)  = finite-difference velocity of the raw (not centralized) chi
    I(t)  = inertia tensor of r(t)
    L(t)  = angular momentum of r(t), v(t) (generated purely by the shape change)
    w(t)  = I(t)^-1 (Pi - L(t))               angular velocity of the body frame

    dq/dt  = 0.5 * q * (0, w)
    dPi/dt = Pi x w
'''

import numpy as np

from DeformableBodies.Errors import DimensionError, DomainError
from DeformableBodies.Motion.pointMasses import (angularMomentum, centralize,
                                                 inertiaTensor, velocity)
from DeformableBodies.Motion.quaternion import Quaternion, rotate

__all__ = [ "EquationOfMotion", "initialState", "getInertiaAndShapeMomentum" ]

def getInertiaAndShapeMomentum(bodyFrame, time, velocityStep=1e-6):
    '''
        Returns the inertia tensor I(t) of the centralized body configuration, and the shape angular momentum L(t).

        Velocities are differenced on the raw trajectory. Any center of mass velocity contributes nothing to L,
            because the positions it multiplies have been centralized (sum of m_i*r_i = 0).

        Raises DomainError if I(t) is singular (all points colinear or coincident)
    '''
    r = centralize(bodyFrame(time))
    v = velocity(bodyFrame, time, velocityStep)
    if v.shape[0] != len(r):
        raise DimensionError("Trajectory changed its number of points near t={}".format(time))

    inertia = inertiaTensor(r)
    if np.linalg.matrix_rank(inertia) < 3:
        raise DomainError("Singular inertia tensor at t={}: body configuration is degenerate (colinear or coincident points)".format(time))

    return inertia, angularMomentum(r, v)

def initialState(initialRotation, angularMomentum_inertial):
    '''
        Assembles the initial state vector.
            q(t_min)  = normalized initial rotation
            Pi(t_min) = inertial-frame angular momentum, expressed in body-frame coordinates (rotated by the conjugate of q)
    '''
    q = initialRotation.normalize()
    Pi = rotate(angularMomentum_inertial, q.conjugate())
    return np.concatenate((q.components, Pi))

class EquationOfMotion():
    '''
        Callable vector field for an ODE solver: equationOfMotion(time, state) -> stateDerivative

        bodyFrame is called three times per evaluation (at t and t +/- velocityStep), it must be a pure function of time
    '''
    def __init__(self, bodyFrame, velocityStep=1e-6):
        self.bodyFrame = bodyFrame
        self.velocityStep = velocityStep

    def angularVelocity(self, time, state):
        ''' Angular velocity of the body frame relative to the inertial frame, in body-frame coordinates '''
        inertia, L = getInertiaAndShapeMomentum(self.bodyFrame, time, self.velocityStep)
        Pi = np.asarray(state[4:7], dtype=float)
        return np.linalg.solve(inertia, Pi - L)

    def getStateDerivative(self, time, state):
        q = Quaternion(components=state[0:4])
        Pi = np.asarray(state[4:7], dtype=float)
        w = self.angularVelocity(time, state)

        dq = q * Quaternion(0.0, w) * 0.5
        dPi = np.cross(Pi, w)

        return np.concatenate((dq.components, dPi))

    def __call__(self, time, state):
        return self.getStateDerivative(time, state)
