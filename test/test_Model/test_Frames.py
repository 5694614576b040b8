import unittest

import numpy as np

from DeformableBodies.Errors import DomainError
from DeformableBodies.Model import (DeformableBodyProblem, ReferenceFrame,
                                    getAnimationTimes, sampleFrames, solve)
from DeformableBodies.Motion import rigidTrajectory
from test.testUtilities import (assertIterablesAlmostEqual,
                                randomPointMassesOnSphere)

class TestReferenceFrame(unittest.TestCase):

    def test_fromString(self):
        self.assertEqual(ReferenceFrame.fromString("body"), ReferenceFrame.BODY)
        self.assertEqual(ReferenceFrame.fromString("Inertial"), ReferenceFrame.INERTIAL)
        self.assertEqual(ReferenceFrame.fromString(" BOTH "), ReferenceFrame.BOTH)

        with self.assertRaises(DomainError):
            ReferenceFrame.fromString("world")

    def test_includes(self):
        self.assertTrue(ReferenceFrame.BOTH.includes(ReferenceFrame.BODY))
        self.assertTrue(ReferenceFrame.BOTH.includes(ReferenceFrame.INERTIAL))
        self.assertTrue(ReferenceFrame.BODY.includes(ReferenceFrame.BODY))
        self.assertFalse(ReferenceFrame.BODY.includes(ReferenceFrame.INERTIAL))

class TestAnimationTimes(unittest.TestCase):

    def test_getAnimationTimes(self):
        times = getAnimationTimes((0, 2), fps=15, duration=5)
        self.assertEqual(len(times), 75)
        self.assertEqual(times[0], 0)
        self.assertEqual(times[-1], 2)
        assertIterablesAlmostEqual(self, np.diff(times), [ 2/74 ]*74)

        # Frame counts are rounded up
        self.assertEqual(len(getAnimationTimes((0, 1), fps=10, duration=0.25)), 3)

    def test_invalidInputs(self):
        with self.assertRaises(DomainError):
            getAnimationTimes((0, 1), fps=0)
        with self.assertRaises(DomainError):
            getAnimationTimes((0, 1), duration=-1)

class TestSampleFrames(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        points = randomPointMassesOnSphere(np.random.default_rng(1), nPoints=6)
        cls.solution = solve(DeformableBodyProblem(rigidTrajectory(points), (0, 1), angularMomentum=[ 0, 0, 2 ]))

    def test_both(self):
        frames = sampleFrames(self.solution, ReferenceFrame.BOTH, times=[ 0, 0.5, 1 ])
        self.assertEqual(set(frames.keys()), { "body", "inertial" })
        self.assertEqual(frames["body"].shape, (3, 6, 3))
        self.assertEqual(frames["inertial"].shape, (3, 6, 3))

        # Identity initial rotation -> frames coincide at the start time
        assertIterablesAlmostEqual(self, frames["body"][0].reshape(-1), frames["inertial"][0].reshape(-1))

    def test_singleFrame(self):
        frames = sampleFrames(self.solution, "inertial", times=[ 0.25 ])
        self.assertEqual(list(frames.keys()), [ "inertial" ])

        frames = sampleFrames(self.solution, ReferenceFrame.BODY)
        self.assertEqual(list(frames.keys()), [ "body" ])
        self.assertEqual(frames["body"].shape, (75, 6, 3))

    def test_outOfRange(self):
        with self.assertRaises(DomainError):
            sampleFrames(self.solution, ReferenceFrame.INERTIAL, times=[ 0, 2 ])

#If this file is run by itself, run the tests above
if __name__ == '__main__':
    unittest.main()
