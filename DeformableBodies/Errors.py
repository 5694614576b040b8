'''
Exceptions raised by DeformableBodies.
Structural problems (wrong dimensions, non-physical values) are raised eagerly, when objects are constructed.
'''

__all__ = [ "DeformableBodyError", "DimensionError", "DomainError", "IntegrationFailure", "PreconditionError" ]

class DeformableBodyError(Exception):
    ''' Base class for all errors raised by this package '''
    pass

class DimensionError(DeformableBodyError, ValueError):
    ''' A quaternion, vector, or position with the wrong number of components '''
    pass

class DomainError(DeformableBodyError, ValueError):
    ''' 
        A value outside the domain of an operation:
            non-positive masses, singular inertia tensors (degenerate shapes), unrecognized configuration options, times outside a solved interval
    '''
    pass

class IntegrationFailure(DeformableBodyError, RuntimeError):
    ''' The ODE solver could not meet the requested tolerances, or its time step collapsed '''
    def __init__(self, message, status=-1):
        super().__init__(message)
        self.message = message
        self.status = status

class PreconditionError(DeformableBodyError, RuntimeError):
    ''' A solution accessor was used before a model was successfully solved '''
    pass
