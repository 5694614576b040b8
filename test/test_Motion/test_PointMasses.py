import unittest
from math import cos, pi, sin

import numpy as np

from DeformableBodies.Errors import DimensionError, DomainError
from DeformableBodies.Motion import (PointMass, Quaternion, angularMomentum,
                                     centerOfMass, centralize,
                                     combineTrajectories, inertiaTensor,
                                     masses, positions, rigidTrajectory,
                                     rotatePointMass, velocity)
from test.testUtilities import (assertIterablesAlmostEqual,
                                assertVectorsAlmostEqual)

class TestPointMass(unittest.TestCase):

    def test_constructor(self):
        p = PointMass(2, [ 1, 2, 3 ])
        self.assertEqual(p.mass, 2.0)
        assertVectorsAlmostEqual(self, p.position, [ 1, 2, 3 ])

    def test_invalidMass(self):
        with self.assertRaises(DomainError):
            PointMass(0, [ 0, 0, 0 ])
        with self.assertRaises(DomainError):
            PointMass(-1, [ 0, 0, 0 ])

    def test_invalidPosition(self):
        with self.assertRaises(DimensionError):
            PointMass(1, [ 1, 2 ])
        with self.assertRaises(DimensionError):
            PointMass(1, [ 1, 2, 3, 4 ])

    def test_immutable(self):
        p = PointMass(1, [ 1, 2, 3 ])
        with self.assertRaises(ValueError):
            p.position[0] = 5
        with self.assertRaises(AttributeError):
            p.mass = 3

    def test_equality(self):
        self.assertEqual(PointMass(1, [ 1, 2, 3 ]), PointMass(1.0, (1.0, 2.0, 3.0)))
        self.assertNotEqual(PointMass(1, [ 1, 2, 3 ]), PointMass(2, [ 1, 2, 3 ]))
        self.assertNotEqual(PointMass(1, [ 1, 2, 3 ]), PointMass(1, [ 1, 2, 4 ]))
        self.assertFalse(PointMass(1, [ 1, 2, 3 ]) == "PointMass")

    def test_repr(self):
        self.assertEqual(repr(PointMass(1, [ 1, 2, 3 ])), "PointMass(1.0, [1.0, 2.0, 3.0])")

    def test_translated(self):
        p = PointMass(2, [ 1, 2, 3 ]).translated([ 1, 1, 1 ])
        self.assertEqual(p, PointMass(2, [ 2, 3, 4 ]))

class TestAggregateQuantities(unittest.TestCase):
    def setUp(self):
        self.twoPoints = [ PointMass(1, [ 0, 0, 0 ]), PointMass(3, [ 4, 0, 0 ]) ]
        # Unit masses on each of the coordinate axes
        self.sixPoints = [ PointMass(1, direction) for direction in np.vstack((np.eye(3), -np.eye(3))) ]

    def test_stackedViews(self):
        assertIterablesAlmostEqual(self, masses(self.twoPoints), [ 1, 3 ])
        self.assertEqual(positions(self.twoPoints).shape, (2,3))
        self.assertEqual(positions([]).shape, (0,3))

    def test_centerOfMass(self):
        assertVectorsAlmostEqual(self, centerOfMass(self.twoPoints), [ 3, 0, 0 ])
        assertVectorsAlmostEqual(self, centerOfMass(self.sixPoints), [ 0, 0, 0 ])

    def test_centerOfMassEmpty(self):
        with self.assertRaises(DomainError):
            centerOfMass([])

    def test_centralize(self):
        centralized = centralize(self.twoPoints)
        assertVectorsAlmostEqual(self, centerOfMass(centralized), [ 0, 0, 0 ])
        assertVectorsAlmostEqual(self, centralized[0].position, [ -3, 0, 0 ])
        assertVectorsAlmostEqual(self, centralized[1].position, [ 1, 0, 0 ])
        self.assertEqual(centralized[1].mass, 3)

    def test_inertiaTensor(self):
        # Single point: m*(|x|^2 I - x x^T)
        inertia = inertiaTensor([ PointMass(2, [ 1, 0, 0 ]) ])
        assertIterablesAlmostEqual(self, inertia.reshape(-1), np.diag([ 0, 2, 2 ]).reshape(-1))

        inertia = inertiaTensor(self.sixPoints)
        assertIterablesAlmostEqual(self, inertia.reshape(-1), np.diag([ 4, 4, 4 ]).reshape(-1))

        # Off-diagonal terms
        inertia = inertiaTensor([ PointMass(1, [ 1, 1, 0 ]) ])
        expected = np.array([[ 1, -1, 0 ],
                             [ -1, 1, 0 ],
                             [ 0,  0, 2 ]])
        assertIterablesAlmostEqual(self, inertia.reshape(-1), expected.reshape(-1))

    def test_inertiaTensorSymmetric(self):
        rng = np.random.default_rng(5)
        points = [ PointMass(m, x) for m, x in zip(rng.uniform(0.1, 2, size=10), rng.normal(size=(10,3))) ]
        inertia = inertiaTensor(points)
        assertIterablesAlmostEqual(self, inertia.reshape(-1), inertia.T.reshape(-1))
        self.assertTrue(np.all(np.linalg.eigvalsh(inertia) > 0))

    def test_angularMomentum(self):
        L = angularMomentum([ PointMass(2, [ 1, 0, 0 ]) ], [[ 0, 3, 0 ]])
        assertVectorsAlmostEqual(self, L, [ 0, 0, 6 ])

        assertVectorsAlmostEqual(self, angularMomentum([], np.zeros((0,3))), [ 0, 0, 0 ])

    def test_angularMomentumDimensionError(self):
        with self.assertRaises(DimensionError):
            angularMomentum(self.twoPoints, [[ 0, 1, 0 ]])

class TestVelocity(unittest.TestCase):

    def test_velocity(self):
        def trajectory(t):
            return [ PointMass(1, [ t**2, sin(t), 3*t ]), PointMass(2, [ 1, 1, 1 ]) ]

        v = velocity(trajectory, 1.0)
        self.assertEqual(v.shape, (2,3))
        assertVectorsAlmostEqual(self, v[0], [ 2, cos(1.0), 3 ], 6)
        assertVectorsAlmostEqual(self, v[1], [ 0, 0, 0 ])

    def test_invalidStep(self):
        trajectory = rigidTrajectory([ PointMass(1, [ 1, 0, 0 ]) ])
        with self.assertRaises(DomainError):
            velocity(trajectory, 0, epsilon=0)
        with self.assertRaises(DomainError):
            velocity(trajectory, 0, epsilon=-1e-6)

    def test_changingNumberOfPoints(self):
        def trajectory(t):
            nPoints = 1 if t < 0 else 2
            return [ PointMass(1, [ i, 0, 0 ]) for i in range(nPoints) ]

        with self.assertRaises(DimensionError):
            velocity(trajectory, 0)

class TestMovingPointMasses(unittest.TestCase):

    def test_rotatePointMass(self):
        q = Quaternion(axisOfRotation=[ 0, 0, 1 ], angle=pi/2)
        p = rotatePointMass(PointMass(3, [ 1, 0, 0 ]), q)
        self.assertEqual(p.mass, 3)
        assertVectorsAlmostEqual(self, p.position, [ 0, 1, 0 ])

        p = rotatePointMass(PointMass(3, [ 2, 0, 0 ]), q, center=[ 1, 0, 0 ])
        assertVectorsAlmostEqual(self, p.position, [ 1, 1, 0 ])

    def test_combineTrajectories(self):
        trajectory = combineTrajectories([
            lambda t: PointMass(1, [ t, 0, 0 ]),
            lambda t: PointMass(2, [ 0, 2*t, 0 ]),
        ])
        points = trajectory(1.5)
        self.assertEqual(points, [ PointMass(1, [ 1.5, 0, 0 ]), PointMass(2, [ 0, 3, 0 ]) ])

    def test_rigidTrajectory(self):
        points = [ PointMass(1, [ 1, 0, 0 ]), PointMass(1, [ -1, 0, 0 ]) ]
        trajectory = rigidTrajectory(points)
        self.assertEqual(trajectory(0), points)
        self.assertEqual(trajectory(10), points)

        # Modifying a returned configuration does not modify the trajectory
        trajectory(0).pop()
        self.assertEqual(len(trajectory(0)), 2)

        velocities = velocity(trajectory, 5.0)
        assertIterablesAlmostEqual(self, velocities.reshape(-1), np.zeros(6))

#If this file is run by itself, run the tests above
if __name__ == '__main__':
    unittest.main()
