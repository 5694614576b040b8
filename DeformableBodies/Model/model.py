'''
Stateful wrapper around `DeformableBodies.Model.problem.solve`: constructed with a problem's inputs, holds the latest successful solution.
'''

from DeformableBodies.Errors import PreconditionError
from DeformableBodies.Model.problem import DeformableBodyProblem, SolverSettings, solve
from DeformableBodies.Motion import Quaternion

__all__ = [ "Model" ]

class Model():
    '''
        Lifecycle: Constructed -> Solved

        Inputs are validated on construction. After solve(), rotation(t), momentum(t) and inertialFrame(t) become available.
        Calling solve() again recomputes everything from scratch, the previous solution is only replaced if the new integration succeeds.

        Ex:
            model = Model(bodyFrame, (0, 10), angularMomentum=[ 0, 0, 1 ])
            inertialFrame, rotation, momentum = model.solve()
            rotation(5.0)
    '''

    def __init__(self, bodyFrame, timeSpan, initialRotation=Quaternion(1,0,0,0), angularMomentum=(0,0,0), settings=None):
        '''
            Inputs:
                * bodyFrame:        Function: time -> [ PointMass ], or a list of functions: time -> PointMass
                * timeSpan:         (startTime, endTime)
                * initialRotation:  (Quaternion) Orientation of the body frame at startTime, normalized here
                * angularMomentum:  Angular momentum about the center of mass, in the inertial frame
                * settings:         (SolverSettings) used by solve() unless other settings are passed to it
        '''
        self.problem = DeformableBodyProblem(bodyFrame, timeSpan, initialRotation, angularMomentum)
        self.settings = settings if settings != None else SolverSettings()
        self._solution = None

    #### Inputs ####
    @property
    def bodyFrame(self):
        return self.problem.bodyFrame

    @property
    def timeSpan(self):
        return self.problem.timeSpan

    @property
    def initialRotation(self) -> Quaternion:
        return self.problem.initialRotation

    @property
    def angularMomentum(self):
        return self.problem.angularMomentum

    #### Solving ####
    def solve(self, settings=None, silent=True):
        '''
            Integrates the equation of motion over the whole time span.
            Returns (inertialFrame, rotation, momentum), the same functions afterwards available as methods of the model

            Raises IntegrationFailure (or DomainError for degenerate bodies) without modifying the model
        '''
        if settings == None:
            settings = self.settings

        solution = solve(self.problem, settings, silent=silent)

        # Only reached if the integration succeeded
        self._solution = solution
        self.settings = settings

        return solution.inertialFrame, solution.rotation, solution.momentum

    @property
    def isSolved(self) -> bool:
        return self._solution != None

    @property
    def solution(self):
        ''' The latest DeformableBodySolution '''
        if self._solution == None:
            raise PreconditionError("Model has not been solved yet. Call Model.solve() first")
        return self._solution

    #### Outputs ####
    def rotation(self, time) -> Quaternion:
        return self.solution.rotation(time)

    def momentum(self, time):
        return self.solution.momentum(time)

    def inertialFrame(self, time):
        return self.solution.inertialFrame(time)

    def inertialAngularMomentum(self, time):
        return self.solution.inertialAngularMomentum(time)

    def __str__(self):
        return str(self.problem)
