'''
Solves for the rotation of a deformable body, given its motion in its own frame of reference.

* `DeformableBodyProblem` / `DeformableBodySolution` - immutable inputs and outputs, joined by `solve`
* `Model` - keeps the latest solution of a problem, re-solvable with new settings
* `Simulation` - loads solver settings and initial conditions from a simulation definition file
* `sampleFrames` - samples body / inertial frame point positions for animations
'''
# Make the classes and functions in all submodules importable directly from DeformableBodies.Model
from .problem import *
from .model import *
from .frames import *
from .simulation import *

subModules = [ problem, model, frames, simulation ]

__all__ = []

for subModule in subModules:
    __all__ += subModule.__all__
