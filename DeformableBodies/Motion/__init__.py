'''
Fundamental types and the equation of motion of a deformable body.

* `Quaternion` - represents orientation (and general quaternion algebra)
* `PointMass` - a mass at a point, body configurations are lists of these
* `pointMasses` - center of mass, inertia tensor, angular momentum, finite-difference velocities
* `EquationOfMotion` - the vector field integrated to recover the body's rotation

Adaptive time stepping integrators (wrapping scipy) are defined in `Integration`
'''
# Make the classes and functions in all submodules importable directly from DeformableBodies.Motion
from .quaternion import *
from .pointMasses import *
from .equationOfMotion import *
from .Integration import *

subModules = [ quaternion, pointMasses, equationOfMotion, Integration ]

__all__ = []

for subModule in subModules:
    __all__ += subModule.__all__
