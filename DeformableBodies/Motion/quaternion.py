'''
Quaternion algebra, used to represent rotations without gimbal lock.

Conventions:
    Components are ordered (scalar, x, y, z)
    Unit quaternions rotate vectors actively: rotate(v, q) = imag(q * (0,v) * conjugate(q))
    Rotating by q1 and then by q2 is the same as rotating by the product q2*q1 (rotations apply right to left)
'''

import math

import numpy as np

from DeformableBodies.Errors import DimensionError, DomainError

__all__ = [ "Quaternion", "rotate", "axisAngleToQuaternion", "quaternionToMatrix", "matrixToQuaternion" ]

def _vector3(vector, name="Vector"):
    ''' Converts an iterable to a float numpy array, checking that it has exactly 3 components '''
    vector = np.asarray(vector, dtype=float).reshape(-1)
    if vector.shape[0] != 3:
        raise DimensionError("{} must be three-dimensional. Dimension given: {}".format(name, vector.shape[0]))
    return vector

class Quaternion():
    '''
        Quaternion made up of a scalar part and a 3-vector (imaginary) part.
        Used both as a general algebraic number and, when it has unit norm, to represent a rotation.

        Construction:
            Quaternion(1, 0, 0, 0)                                  (scalar, x, y, z)
            Quaternion(0.5, [ 1, 2, 3 ])                            (scalar, vector)
            Quaternion(components=[ 1, 0, 0, 0 ])
            Quaternion(axisOfRotation=[ 0, 0, 1 ], angle=pi/2)

        Instances are immutable: every operation returns a new Quaternion
    '''
    __slots__ = [ "_components" ]
    __array_ufunc__ = None # Makes numpy scalars defer to Quaternion.__rmul__ instead of treating quaternions as arrays

    def __init__(self, *args, components=None, axisOfRotation=None, angle=None):
        if axisOfRotation is not None:
            if angle == None:
                raise ValueError("An angle is required to construct a Quaternion from an axis of rotation")
            components = axisAngleToQuaternion(axisOfRotation, angle).components

        elif components is None:
            if len(args) == 2 and np.ndim(args[1]) > 0:
                # (scalar, vector) form
                components = np.concatenate(([ float(args[0]) ], _vector3(args[1], "Quaternion vector part")))
            elif len(args) == 1 and np.ndim(args[0]) > 0:
                components = args[0]
            elif len(args) in [ 1, 4 ]:
                # Scalar-only quaternions are padded with zeros
                components = list(args) + [ 0.0 ]*(4 - len(args))
            else:
                raise DimensionError("Quaternions are four-dimensional. Dimension given: {}".format(len(args)))

        components = np.array(components, dtype=float).reshape(-1)
        if components.shape[0] != 4:
            raise DimensionError("Quaternions are four-dimensional. Dimension given: {}".format(components.shape[0]))

        components.setflags(write=False)
        self._components = components

    #### Components ####
    @property
    def components(self):
        ''' Read-only numpy array: (scalar, x, y, z) '''
        return self._components

    @property
    def scalar(self) -> float:
        return self._components[0]

    @property
    def vector(self):
        ''' Imaginary part, as a 3-vector '''
        return self._components[1:]

    def __getitem__(self, i):
        return self._components[i]

    def __iter__(self):
        return iter(self._components)

    def __len__(self):
        return 4

    #### Vector space operations ####
    def __add__(self, q2):
        return Quaternion(components=self._components + q2.components)

    def __sub__(self, q2):
        return Quaternion(components=self._components - q2.components)

    def __neg__(self):
        return Quaternion(components=-self._components)

    def __pos__(self):
        return self

    def __mul__(self, other):
        if isinstance(other, Quaternion):
            # Hamilton product: (a0 b0 - a.b, a0 b + b0 a + a x b)
            a0, a = self.scalar, self.vector
            b0, b = other.scalar, other.vector
            scalar = a0*b0 - np.dot(a, b)
            vector = a0*b + b0*a + np.cross(a, b)
            return Quaternion(components=np.concatenate(([ scalar ], vector)))

        return Quaternion(components=self._components * float(other))

    def __rmul__(self, scalar):
        # Only called for scalar * quaternion
        return Quaternion(components=self._components * float(scalar))

    def __truediv__(self, other):
        if isinstance(other, Quaternion):
            return self * other.inverse()

        return Quaternion(components=self._components / float(other))

    #### Norms, conjugate, inverse ####
    def normSquared(self) -> float:
        return float(np.dot(self._components, self._components))

    def norm(self) -> float:
        return math.sqrt(self.normSquared())

    def __abs__(self):
        return self.norm()

    def conjugate(self):
        return Quaternion(self.scalar, -self.vector)

    def inverse(self):
        return self.conjugate() / self.normSquared()

    def normalize(self, tolerance=1e-8):
        '''
            Returns a unit Quaternion in the direction of self.
            If the squared norm is already within tolerance of 1, self is returned unchanged, to avoid accumulating rounding error
        '''
        normSquared = self.normSquared()
        if normSquared == 0:
            raise DomainError("The zero quaternion can not be normalized")
        if abs(normSquared - 1.0) > tolerance:
            return self / math.sqrt(normSquared)
        return self

    #### Rotations ####
    def rotationAngle(self) -> float:
        return 2*math.atan2(np.linalg.norm(self.vector), self.scalar)

    def rotationAxis(self):
        ''' Unit vector along the imaginary part. The axis of a real quaternion is arbitrary, (1, 0, 0) is returned '''
        vectorNorm = np.linalg.norm(self.vector)
        if vectorNorm == 0:
            return np.array([ 1.0, 0.0, 0.0 ])
        return self.vector / vectorNorm

    def rotate(self, vector, center=None):
        ''' Rotates vector by this quaternion (normalized first). If a center is given, the rotation is about that point '''
        return rotate(vector, self, center)

    def toMatrix(self):
        return quaternionToMatrix(self)

    #### Exponential / Logarithm ####
    def exp(self):
        vectorNorm = np.linalg.norm(self.vector)
        if vectorNorm == 0:
            return Quaternion(math.exp(self.scalar))

        return math.exp(self.scalar) * Quaternion(math.cos(vectorNorm), math.sin(vectorNorm) * self.vector / vectorNorm)

    def log(self):
        norm = self.norm()
        if norm == 0:
            raise DomainError("The logarithm of the zero quaternion is undefined")

        vectorNorm = np.linalg.norm(self.vector)
        if vectorNorm == 0:
            return Quaternion(math.log(norm))

        cosAngle = min(1.0, max(-1.0, self.scalar / norm))
        return Quaternion(math.log(norm), math.acos(cosAngle) * self.vector / vectorNorm)

    #### Comparisons / Strings ####
    def __eq__(self, q2):
        if not isinstance(q2, Quaternion):
            return False
        return bool(np.array_equal(self._components, q2.components))

    def __ne__(self, q2):
        return not self == q2

    __hash__ = None

    def __str__(self):
        return "<{}, {}, {}, {}>".format(*[ float(x) for x in self._components ])

    def __repr__(self):
        return "Quaternion({}, {}, {}, {})".format(*[ float(x) for x in self._components ])

def rotate(vector, quaternion, center=None):
    '''
        Rotates a 3-vector by quaternion (which is normalized first).
        If center is provided, the rotation is performed about that point instead of the origin.

        Returns a numpy array
    '''
    vector = _vector3(vector)
    q = quaternion.normalize()

    if center is not None:
        center = _vector3(center, "Center of rotation")
        return center + rotate(vector - center, q)

    return (q * Quaternion(0.0, vector) * q.conjugate()).vector.copy()

def axisAngleToQuaternion(axis, angle):
    ''' Returns cos(angle/2) + sin(angle/2)*axis, after normalizing axis '''
    axis = _vector3(axis, "Axis of rotation")
    axisNorm = np.linalg.norm(axis)
    if axisNorm == 0:
        raise DomainError("Axis of rotation must be non-zero")

    return Quaternion(math.cos(angle/2), math.sin(angle/2) * axis / axisNorm)

def _crossMatrix(v):
    ''' Skew-symmetric matrix equivalent to taking the cross product with v from the left '''
    return np.array([   [ 0.0,   -v[2],  v[1] ],
                        [ v[2],   0.0,  -v[0] ],
                        [ -v[1],  v[0],  0.0  ] ])

def quaternionToMatrix(quaternion):
    ''' Returns the 3x3 rotation matrix R such that R.dot(v) == rotate(v, quaternion) '''
    q = quaternion.normalize()
    t = q.scalar
    v = q.vector
    vCross = _crossMatrix(v)
    return np.outer(v, v) + t*t*np.eye(3) + 2*t*vCross + vCross.dot(vCross)

def matrixToQuaternion(matrix):
    '''
        Returns a quaternion q such that rotate(v, q) == matrix.dot(v) for all v.

        The matrix is assumed to be orthogonal, this is not checked.
        q and -q represent the same rotation, so this function picks one of them:
            matrixToQuaternion(quaternionToMatrix(q)) is not guaranteed to equal q, ex: q = (-1, 0, 0, 0) comes back as (1, 0, 0, 0)

        Branches chosen to keep the square root argument large: https://arxiv.org/pdf/math/0701759.pdf
    '''
    r = np.asarray(matrix, dtype=float)
    if r.shape != (3,3):
        raise DimensionError("Rotation matrices must be 3x3. Shape given: {}".format(r.shape))

    # Branch on the largest of the trace and the diagonal entries (Shepperd's method)
    pivots = [ r[0,0] + r[1,1] + r[2,2], r[0,0], r[1,1], r[2,2] ]
    largestPivot = int(np.argmax(pivots))

    if largestPivot == 0:
        z = 1 + r[0,0] + r[1,1] + r[2,2]
        components = [ z, r[2,1] - r[1,2], r[0,2] - r[2,0], r[1,0] - r[0,1] ]
    elif largestPivot == 1:
        z = 1 + r[0,0] - r[1,1] - r[2,2]
        components = [ r[2,1] - r[1,2], z, r[1,0] + r[0,1], r[2,0] + r[0,2] ]
    elif largestPivot == 2:
        z = 1 - r[0,0] + r[1,1] - r[2,2]
        components = [ r[0,2] - r[2,0], r[1,0] + r[0,1], z, r[2,1] + r[1,2] ]
    else:
        z = 1 - r[0,0] - r[1,1] + r[2,2]
        components = [ r[1,0] - r[0,1], r[2,0] + r[0,2], r[2,1] + r[1,2], z ]

    return Quaternion(components=components) * (0.5 / math.sqrt(z))
