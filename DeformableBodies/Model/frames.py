'''
Selection and sampling of the body / inertial frame trajectories of a solved model, in the form a renderer or exporter consumes them
'''

import math
from enum import Enum

import numpy as np

from DeformableBodies.Errors import DomainError
from DeformableBodies.Motion import positions

__all__ = [ "ReferenceFrame", "getAnimationTimes", "sampleFrames" ]

class ReferenceFrame(Enum):
    BODY = "body"
    INERTIAL = "inertial"
    BOTH = "both"

    @classmethod
    def fromString(cls, name: str):
        ''' Case-insensitive, ex: "Inertial" -> ReferenceFrame.INERTIAL '''
        try:
            return cls(name.strip().lower())
        except ValueError:
            raise DomainError("Unknown reference frame: {}. Try one of: {}".format(name, ", ".join(f.value for f in cls))) from None

    def includes(self, frame) -> bool:
        return self == ReferenceFrame.BOTH or self == frame

def getAnimationTimes(timeSpan, fps=15, duration=5.0):
    '''
        Returns ceil(fps*duration) equally spaced times covering timeSpan, both ends included.
        The whole time span is played back over duration seconds, regardless of its length.
    '''
    if not fps > 0 or not duration > 0:
        raise DomainError("fps and duration must be positive. Values given: {}, {}".format(fps, duration))

    nFrames = max(1, math.ceil(fps*duration))
    return np.linspace(timeSpan[0], timeSpan[1], nFrames)

def sampleFrames(solution, frame=ReferenceFrame.BOTH, times=None):
    '''
        Samples the point positions of a DeformableBodySolution at each of times.

        Inputs:
            * solution: (DeformableBodySolution)
            * frame:    (ReferenceFrame or str) which frame(s) to sample
            * times:    times to sample at, defaults to getAnimationTimes(solution.timeSpan)

        Returns:
            dict mapping "body" and/or "inertial" to numpy arrays of shape (nTimes, nPoints, 3)
    '''
    if isinstance(frame, str):
        frame = ReferenceFrame.fromString(frame)

    if times is None:
        times = getAnimationTimes(solution.timeSpan)

    trajectories = []
    if frame.includes(ReferenceFrame.BODY):
        trajectories.append((ReferenceFrame.BODY.value, solution.bodyFrame))
    if frame.includes(ReferenceFrame.INERTIAL):
        trajectories.append((ReferenceFrame.INERTIAL.value, solution.inertialFrame))

    result = {}
    for name, trajectory in trajectories:
        result[name] = np.array([ positions(trajectory(t)) for t in times ])

    return result
