'''
Reconstructs the rotation of a shape-changing body (the "falling cat" problem) from its motion in its own, deforming, frame of reference.

Entry points:

* `DeformableBodies.Model.Model` - holds a body-frame trajectory and its initial conditions, solves for the inertial-frame motion
* `DeformableBodies.Model.solve` - the same calculation, as a pure function from a `DeformableBodyProblem` to a `DeformableBodySolution`
* `DeformableBodies.Model.Simulation` - runs a problem whose solver settings and initial conditions are stored in a definition (.dbody) file

Fundamental types (quaternions, point masses) and the equation of motion are defined in `DeformableBodies.Motion`.
Definition file parsing and log capture live in `DeformableBodies.IO`.
'''

__version__ = "0.1.0"
