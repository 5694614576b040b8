'''
    Boundary between the equation of motion and the ODE integration service (scipy.integrate.solve_ivp).

    The integrator returned by integratorFactory is callable, meaning it can be called like a function once instantiated
        This is facilitated by its __call__ method

    See `DeformableBodies.Model.problem.solve` for an example use of these Integrators

    Available methods (all explicit, adaptive, embedded Runge-Kutta pairs - the system is not stiff):
        "RK23Adaptive": Bogacki-Shampine 3(2) method
        "RK45Adaptive": Dormand-Prince RK5(4)7FM method
        "RK78Adaptive": Dormand-Prince 8(5,3) method (scipy's DOP853)

    The step size controller, error estimation and dense output interpolants are provided by scipy.
    Learn about embedded Runge-Kutta methods here: https://en.wikipedia.org/wiki/Runge%E2%80%93Kutta_methods#Adaptive_Runge%E2%80%93Kutta_methods
'''
import math
from typing import Callable

import numpy as np
from scipy.integrate import solve_ivp

from DeformableBodies.Errors import DomainError

__all__ = [ "integratorFactory", "AdaptiveIntegrator", "IntegrationResult", "integrationMethods" ]

integrationMethods = {
    "RK23Adaptive": "RK23",
    "RK45Adaptive": "RK45",
    "RK78Adaptive": "DOP853",
}
''' Maps integration method names to scipy.integrate.solve_ivp method names '''

def integratorFactory(integrationMethod="RK45Adaptive", absoluteTolerance=1e-8, relativeTolerance=1e-8, maxTimeStep=math.inf):
    '''
        Returns a callable integrator object

        Inputs:
            * integrationMethod: (str) Name of integration method: "RK23Adaptive", "RK45Adaptive", or "RK78Adaptive"
            * absoluteTolerance: (float) Per-component absolute error tolerance
            * relativeTolerance: (float) Per-component relative error tolerance
            * maxTimeStep: (float) Upper limit on the time step size. Defaults to no limit
    '''
    if integrationMethod not in integrationMethods:
        raise DomainError("Integration method: {} not implemented. Try one of: {}".format(integrationMethod, ", ".join(integrationMethods)))

    for name, value in [ ("absoluteTolerance", absoluteTolerance), ("relativeTolerance", relativeTolerance), ("maxTimeStep", maxTimeStep) ]:
        if not value > 0:
            raise DomainError("{} must be positive. Value given: {}".format(name, value))

    return AdaptiveIntegrator(
        method=integrationMethod,
        absoluteTolerance=absoluteTolerance,
        relativeTolerance=relativeTolerance,
        maxTimeStep=maxTimeStep
    )

class IntegrationResult():
    __slots__ = [ 'solution', 'success', 'status', 'message', 'nEvaluations', 'nSteps', 'times' ]

    def __init__(self, solution, success, status, message, nEvaluations=0, times=None):
        '''
            solution:       Continuous interpolant (scipy OdeSolution), callable at any time in the integrated interval. None if integration failed
            success:        (bool) True if the solver reached the end of the interval within tolerance
            status:         solve_ivp status code. Negative values indicate failure
            message:        Solver's description of the termination reason
            nEvaluations:   Number of derivative function evaluations
            times:          Times at which steps ended (numpy array)
        '''
        self.solution = solution
        self.success = success
        self.status = status
        self.message = message
        self.nEvaluations = nEvaluations
        self.times = times
        self.nSteps = 0 if times is None else max(0, len(times) - 1)

class AdaptiveIntegrator():
    ''' Callable class for error-limited adaptive-dt ODE integration over a whole time interval '''

    def __init__(self, method="RK45Adaptive", absoluteTolerance=1e-8, relativeTolerance=1e-8, maxTimeStep=math.inf):
        self.method = method
        self.scipyMethod = integrationMethods[method]
        self.absoluteTolerance = absoluteTolerance
        self.relativeTolerance = relativeTolerance
        self.maxTimeStep = maxTimeStep

    def __call__(self, derivativeFunc:Callable, initVal, timeSpan) -> IntegrationResult:
        '''
            Inputs:
                derivativeFunc: function accepting (time, state), returning the state's time derivative as a numpy array
                initVal: initial state (array-like)
                timeSpan: (startTime, endTime)

            Returns:
                An object of type IntegrationResult. Failures are reported through IntegrationResult.success, not raised
                Exceptions raised by derivativeFunc propagate to the caller
        '''
        startTime, endTime = float(timeSpan[0]), float(timeSpan[1])

        result = solve_ivp(
            derivativeFunc,
            (startTime, endTime),
            np.asarray(initVal, dtype=float),
            method=self.scipyMethod,
            rtol=self.relativeTolerance,
            atol=self.absoluteTolerance,
            max_step=self.maxTimeStep,
            dense_output=True
        )

        success = result.status == 0
        message = result.message

        if success and not np.all(np.isfinite(result.y)):
            # Divergent solutions are failures, even if the step size controller did not notice
            success = False
            message = "Non-finite values in the integrated state"

        return IntegrationResult(
            solution=result.sol if success else None,
            success=success,
            status=result.status if success or result.status < 0 else -1,
            message=message,
            nEvaluations=result.nfev,
            times=result.t
        )
