'''
Deformable body problems (inputs), their solutions (outputs), and the solve function joining them.
Both records are immutable: solving again produces a new DeformableBodySolution, nothing is modified in place.
'''

import math
from collections import namedtuple

import numpy as np

from DeformableBodies.Errors import DimensionError, DomainError, IntegrationFailure
from DeformableBodies.Motion import (EquationOfMotion, Quaternion, centerOfMass,
                                     centralize, combineTrajectories,
                                     initialState, integrationMethods,
                                     integratorFactory, masses, positions,
                                     rotatePointMass)
from DeformableBodies.Utilities import cacheLastResult

__all__ = [ "DeformableBodyProblem", "SolverSettings", "DeformableBodySolution", "solve" ]

_ProblemFields = namedtuple("DeformableBodyProblem", [ "bodyFrame", "timeSpan", "initialRotation", "angularMomentum" ])

class DeformableBodyProblem(_ProblemFields):
    '''
        Immutable description of a deformable body problem:
            bodyFrame:          Function: time -> [ PointMass ]. Trajectory of the body in its own (deforming) frame of reference.
                                    A list of single-particle functions (time -> PointMass) is also accepted
            timeSpan:           (startTime, endTime)
            initialRotation:    Quaternion rotating body-frame vectors into the inertial frame at startTime. Normalized on construction
            angularMomentum:    Angular momentum about the center of mass, in the inertial frame (numpy array)
    '''
    __slots__ = ()

    def __new__(cls, bodyFrame, timeSpan, initialRotation=Quaternion(1,0,0,0), angularMomentum=(0,0,0)):
        if not callable(bodyFrame):
            bodyFrame = combineTrajectories(bodyFrame)

        if len(timeSpan) != 2:
            raise DimensionError("timeSpan must contain exactly two values: (startTime, endTime)")
        startTime, endTime = float(timeSpan[0]), float(timeSpan[1])
        if not (math.isfinite(startTime) and math.isfinite(endTime)) or startTime >= endTime:
            raise DomainError("timeSpan must be finite and increasing. timeSpan given: {}".format(timeSpan))

        if not isinstance(initialRotation, Quaternion):
            initialRotation = Quaternion(components=initialRotation)
        initialRotation = initialRotation.normalize()

        angularMomentum = np.array(angularMomentum, dtype=float).reshape(-1)
        if angularMomentum.shape[0] != 3:
            raise DimensionError("Angular momentum must be three-dimensional. Dimension given: {}".format(angularMomentum.shape[0]))
        angularMomentum.setflags(write=False)

        if len(bodyFrame(startTime)) == 0:
            raise DomainError("The body frame trajectory must contain at least one point")

        return super().__new__(cls, bodyFrame, (startTime, endTime), initialRotation, angularMomentum)

    @property
    def startTime(self) -> float:
        return self.timeSpan[0]

    @property
    def endTime(self) -> float:
        return self.timeSpan[1]

    def getInitialState(self):
        return initialState(self.initialRotation, self.angularMomentum)

    def __str__(self):
        return "\n".join([
            "Deformable Body Model",
            "Initial Time: {}".format(self.startTime),
            "Final Time  : {}".format(self.endTime),
            "Initial Data are",
            "    Rotation: {}".format(self.initialRotation),
            "    Angular Momentum: {}".format(self.angularMomentum),
            "Number of points: {}".format(len(self.bodyFrame(self.startTime)))
        ])

_SettingsFields = namedtuple("SolverSettings", [ "integrationMethod", "absoluteTolerance", "relativeTolerance", "velocityStep", "maxTimeStep" ])

class SolverSettings(_SettingsFields):
    '''
        integrationMethod:  See `DeformableBodies.Motion.Integration.integratorFactory`
        absoluteTolerance:  ODE solver absolute error tolerance
        relativeTolerance:  ODE solver relative error tolerance
        velocityStep:       Time step used to compute finite-difference velocities. Trades truncation error against round-off error
        maxTimeStep:        Upper limit on the ODE solver's time step
    '''
    __slots__ = ()

    def __new__(cls, integrationMethod="RK45Adaptive", absoluteTolerance=1e-8, relativeTolerance=1e-8, velocityStep=1e-6, maxTimeStep=math.inf):
        if integrationMethod not in integrationMethods:
            raise DomainError("Integration method: {} not implemented. Try one of: {}".format(integrationMethod, ", ".join(integrationMethods)))

        values = [ float(absoluteTolerance), float(relativeTolerance), float(velocityStep), float(maxTimeStep) ]
        for name, value in zip(cls._fields[1:], values):
            if not value > 0:
                raise DomainError("{} must be positive. Value given: {}".format(name, value))

        return super().__new__(cls, integrationMethod, *values)

    def createIntegrator(self):
        return integratorFactory(
            integrationMethod=self.integrationMethod,
            absoluteTolerance=self.absoluteTolerance,
            relativeTolerance=self.relativeTolerance,
            maxTimeStep=self.maxTimeStep
        )

class DeformableBodySolution():
    '''
        Result of solving a DeformableBodyProblem. All time-dependent quantities are functions of time, defined over problem.timeSpan:

            rotation(t):                Quaternion rotating body-frame vectors into the inertial frame (not renormalized)
            momentum(t):                Angular momentum variable (Pi), in body-frame coordinates
            inertialFrame(t):           [ PointMass ], the body as seen from the inertial frame
            bodyFrame(t):               [ PointMass ], the input trajectory
            inertialAngularMomentum(t): Total angular momentum, rebuilt in the inertial frame from rotation(t) and the body-frame motion

        Times outside problem.timeSpan raise DomainError
    '''
    __slots__ = [ "problem", "settings", "odeSolution", "nEvaluations", "nSteps", "_bodyFrame" ]

    def __init__(self, problem, settings, odeSolution, nEvaluations=0, nSteps=0):
        self.problem = problem
        self.settings = settings
        self.odeSolution = odeSolution
        self.nEvaluations = nEvaluations
        self.nSteps = nSteps
        # inertialFrame(t) and bodyFrame(t) are often requested in pairs
        self._bodyFrame = cacheLastResult(problem.bodyFrame)

    @property
    def timeSpan(self):
        return self.problem.timeSpan

    def _checkTime(self, time):
        startTime, endTime = self.problem.timeSpan
        if not startTime <= time <= endTime:
            raise DomainError("Time {} is outside of the solved interval [{}, {}]".format(time, startTime, endTime))

    def _state(self, time):
        self._checkTime(time)
        return self.odeSolution(time)

    def rotation(self, time):
        return Quaternion(components=self._state(time)[0:4])

    def momentum(self, time):
        return self._state(time)[4:7]

    def bodyFrame(self, time):
        self._checkTime(time)
        return list(self._bodyFrame(time))

    def inertialFrame(self, time):
        ''' Each body-frame point, rotated by rotation(t) about the body's own center of mass '''
        rotation = self.rotation(time)
        points = self._bodyFrame(time)
        cm = centerOfMass(points)
        return [ rotatePointMass(p, rotation, cm) for p in points ]

    def _centeredInertialFrame(self, time):
        # Evaluates the interpolant directly, it extrapolates slightly past either end of the time span
        rotation = Quaternion(components=self.odeSolution(time)[0:4])
        return [ rotatePointMass(p, rotation) for p in centralize(self.problem.bodyFrame(time)) ]

    def inertialAngularMomentum(self, time):
        '''
            Total angular momentum about the center of mass, in the inertial frame: sum of m_i*(x_i cross v_i)
            x_i are the inertial-frame positions relative to the center of mass, v_i are their central differences in time (step: settings.velocityStep)
            Uses only rotation(t) and the body-frame trajectory. Without external torques, this should remain equal to problem.angularMomentum
        '''
        self._checkTime(time)
        h = self.settings.velocityStep

        points = self._centeredInertialFrame(time)
        forward = positions(self._centeredInertialFrame(time + h))
        backward = positions(self._centeredInertialFrame(time - h))
        velocities = (forward - backward) / (2*h)

        return masses(points).dot(np.cross(positions(points), velocities))

def solve(problem, settings=None, silent=True):
    '''
        Integrates the equation of motion of problem, and returns a DeformableBodySolution.

        Inputs:
            * problem:  (DeformableBodyProblem)
            * settings: (SolverSettings) defaults to SolverSettings()
            * silent:   (bool) if False, prints a summary of the integration to the console

        Raises:
            * IntegrationFailure if the solver could not reach the end of problem.timeSpan within the requested tolerances
            * DomainError if the body's inertia tensor becomes singular during integration
    '''
    if settings == None:
        settings = SolverSettings()

    integrate = settings.createIntegrator()
    equationOfMotion = EquationOfMotion(problem.bodyFrame, settings.velocityStep)

    if not silent:
        print("Solving deformable body model over t = [{}, {}] using {}, absolute/relative tolerance: {}/{}".format(
            problem.startTime, problem.endTime, settings.integrationMethod, settings.absoluteTolerance, settings.relativeTolerance))

    integrationResult = integrate(equationOfMotion, problem.getInitialState(), problem.timeSpan)

    if not integrationResult.success:
        if not silent:
            print("ERROR: Integration failed after {} steps: {}".format(integrationResult.nSteps, integrationResult.message))
        raise IntegrationFailure("Integration failed: {}".format(integrationResult.message), status=integrationResult.status)

    if not silent:
        print("Integration complete: {} steps, {} derivative evaluations".format(integrationResult.nSteps, integrationResult.nEvaluations))

    return DeformableBodySolution(
        problem,
        settings,
        integrationResult.solution,
        nEvaluations=integrationResult.nEvaluations,
        nSteps=integrationResult.nSteps
    )
