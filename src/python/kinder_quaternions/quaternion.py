"""
===============================================================================
KINDER QUATERNIONS - General Quaternion Value Type
===============================================================================

A 4-component quaternion stored as a numpy array. numpy is the "implementation"
layer: every arithmetic primitive (norm, conjugate, inverse, normalization)
is a numpy array operation on the stored coefficients.

Convention
----------
Hamiltonian convention with the scalar first:

    q = [w, x, y, z] = w + x*i + y*j + z*k,    i*i = j*j = k*k = i*j*k = -1

Precision
---------
The precision is fixed per class:

    Quaternion / QuaternionD   float64
    QuaternionF                float32

Unlike UnitQuaternion, a Quaternion carries no invariant. Any four values are
valid, including the zero quaternion produced by the default constructor.
Degenerate operations (inverting or normalizing the zero quaternion) are not
guarded and yield non-finite coefficients.
===============================================================================
"""

import numbers
from typing import Iterator, Union

import numpy as np

from kinder_quaternions.constants import (
    SCALAR_TYPE_DOUBLE, SCALAR_TYPE_FLOAT, resolve_scalar_type,
)
from kinder_quaternions import traits


def coefficients_from_args(args: tuple, scalar_type) -> np.ndarray:
    """
    Parse the constructor arguments shared by all quaternion types.

    Accepted forms:
        (w, x, y, z)            four scalars
        (w, imaginary)          scalar and 3-vector [x, y, z]
        (vector4,)              4-vector [w, x, y, z]
        (quaternion,)           any object exposing to_implementation()

    Returns
    -------
    np.ndarray
        New array [w, x, y, z] of the requested scalar type.

    Raises
    ------
    ValueError
        If the arguments match none of the forms above.
    """
    if len(args) == 4:
        return np.array(args, dtype=scalar_type)

    if len(args) == 2:
        imaginary = np.asarray(args[1])
        if imaginary.shape != (3,):
            raise ValueError(
                f"Imaginary part must be a 3-vector, got shape {imaginary.shape}"
            )
        return np.array([args[0], imaginary[0], imaginary[1], imaginary[2]],
                        dtype=scalar_type)

    if len(args) == 1:
        source = args[0]
        if hasattr(source, 'to_implementation'):
            source = source.to_implementation()
        vector4 = np.asarray(source)
        if vector4.shape != (4,):
            raise ValueError(f"Expected a 4-vector [w, x, y, z], got shape {vector4.shape}")
        with np.errstate(over='ignore'):
            return vector4.astype(scalar_type, copy=True)

    raise ValueError(
        f"Quaternion takes 0, 1, 2 or 4 arguments ({len(args)} given)"
    )


class Quaternion:
    """
    General quaternion q = w + x*i + y*j + z*k.

    Construction
    ------------
    >>> Quaternion()                          # zero quaternion
    >>> Quaternion(1.0, 0.0, 0.0, 0.0)        # from coefficients
    >>> Quaternion(1.0, np.zeros(3))          # from real part and imaginary part
    >>> Quaternion(np.array([1.0, 0, 0, 0]))  # from a 4-vector [w, x, y, z]
    >>> Quaternion(unit_quaternion)           # copy, no invariant

    Attributes
    ----------
    w, x, y, z : float
        Read/write coefficients. Writing does not validate anything.
    """

    scalar_type = SCALAR_TYPE_DOUBLE

    def __init__(self, *args) -> None:
        if args:
            self._q = coefficients_from_args(args, self.scalar_type)
        else:
            self._q = np.zeros(4, dtype=self.scalar_type)

    @classmethod
    def from_implementation(cls, implementation: np.ndarray) -> 'Quaternion':
        """Create from the implementation representation, a [w, x, y, z] array."""
        return cls(np.asarray(implementation))

    @classmethod
    def identity(cls) -> 'Quaternion':
        """The multiplicative identity [1, 0, 0, 0]."""
        return cls(1.0, 0.0, 0.0, 0.0)

    # =========================================================================
    # COEFFICIENT ACCESS
    # =========================================================================

    @property
    def w(self) -> float:
        """Real part."""
        return float(self._q[0])

    @w.setter
    def w(self, value: float) -> None:
        self._q[0] = value

    @property
    def x(self) -> float:
        """i-component."""
        return float(self._q[1])

    @x.setter
    def x(self, value: float) -> None:
        self._q[1] = value

    @property
    def y(self) -> float:
        """j-component."""
        return float(self._q[2])

    @y.setter
    def y(self, value: float) -> None:
        self._q[2] = value

    @property
    def z(self) -> float:
        """k-component."""
        return float(self._q[3])

    @z.setter
    def z(self, value: float) -> None:
        self._q[3] = value

    def get_real(self) -> float:
        return float(self._q[0])

    def get_imaginary(self) -> np.ndarray:
        """Imaginary part [x, y, z] as a new 3-vector."""
        return self._q[1:4].copy()

    def get_vector4(self) -> np.ndarray:
        """All coefficients [w, x, y, z] as a new 4-vector."""
        return self._q.copy()

    def to_implementation(self) -> np.ndarray:
        """
        The backing numpy array [w, x, y, z].

        This is the live storage, not a copy: writes to the returned array
        change the quaternion.
        """
        return self._q

    def norm(self) -> float:
        """Euclidean norm sqrt(w^2 + x^2 + y^2 + z^2)."""
        return float(np.linalg.norm(self._q))

    # =========================================================================
    # ALGEBRA
    # =========================================================================

    def _inverse_coefficients(self) -> np.ndarray:
        # q^-1 = q* / |q|^2; zero input gives non-finite values
        conjugate = self._conjugate_coefficients()
        with np.errstate(divide='ignore', invalid='ignore'):
            return conjugate / np.dot(self._q, self._q)

    def _conjugate_coefficients(self) -> np.ndarray:
        return self._q * np.array([1, -1, -1, -1], dtype=self.scalar_type)

    def _normalized_coefficients(self) -> np.ndarray:
        with np.errstate(divide='ignore', invalid='ignore'):
            return self._q / np.linalg.norm(self._q)

    def inverted(self) -> 'Quaternion':
        """
        Return the multiplicative inverse q^-1 = q* / |q|^2.

        The zero quaternion has no inverse; its result is non-finite.
        """
        return type(self)(self._inverse_coefficients())

    def invert(self) -> 'Quaternion':
        """Invert in place and return self."""
        self._q[:] = self._inverse_coefficients()
        return self

    def conjugated(self) -> 'Quaternion':
        """Return the conjugate [w, -x, -y, -z]."""
        return type(self)(self._conjugate_coefficients())

    def conjugate(self) -> 'Quaternion':
        """Conjugate in place and return self."""
        self._q[:] = self._conjugate_coefficients()
        return self

    def normalized(self) -> 'Quaternion':
        """
        Return q / |q|.

        The zero quaternion has no direction; its result is non-finite.
        """
        return type(self)(self._normalized_coefficients())

    def normalize(self) -> 'Quaternion':
        """Normalize in place and return self."""
        self._q[:] = self._normalized_coefficients()
        return self

    def set_zero(self) -> 'Quaternion':
        """Reset all four coefficients to zero and return self."""
        self._q[:] = 0.0
        return self

    # =========================================================================
    # CONVERSIONS
    # =========================================================================

    def to_unit_quaternion(self):
        """
        Return the unit quaternion q / |q| with the same precision.

        The result always satisfies the unit-norm invariant unless self is
        the zero quaternion.
        """
        from kinder_quaternions.unit_quaternion import unit_quaternion_type_for
        unit_type = unit_quaternion_type_for(self.scalar_type)
        return unit_type(self._normalized_coefficients())

    def assign(self, other) -> 'Quaternion':
        """
        Copy the coefficients of ``other`` into self and return self.

        ``other`` may be a Quaternion or UnitQuaternion of any precision. The
        values are cast element-wise to this precision without range checks,
        so narrowing a large float64 to float32 can overflow to inf.
        """
        if not traits.is_quaternion_like(other):
            raise TypeError(f"Cannot assign {type(other).__name__} to {type(self).__name__}")
        with np.errstate(over='ignore'):
            self._q[:] = np.asarray(other.to_implementation()).astype(self.scalar_type)
        return self

    def cast(self, target_type: type):
        """Convert to another quaternion class, e.g. ``q.cast(QuaternionF)``."""
        return target_type(self)

    def copy(self) -> 'Quaternion':
        return type(self)(self._q)

    # =========================================================================
    # OPERATORS
    # =========================================================================

    def __mul__(self, other) -> 'Quaternion':
        """
        Quaternion * Quaternion / UnitQuaternion -> Hamilton product
        Quaternion * scalar -> component-wise scaling
        """
        if isinstance(other, numbers.Real):
            return type(self)(self._q * other)
        if traits.is_quaternion_like(other):
            return traits.multiply(self, other)
        return NotImplemented

    def __rmul__(self, other) -> 'Quaternion':
        if isinstance(other, numbers.Real):
            return type(self)(other * self._q)
        if traits.is_quaternion_like(other):
            return traits.multiply(other, self)
        return NotImplemented

    def __neg__(self) -> 'Quaternion':
        return type(self)(-self._q)

    def __eq__(self, other: object) -> bool:
        """Exact coefficient equality, also against a UnitQuaternion."""
        if not traits.is_quaternion_like(other):
            return NotImplemented
        return traits.is_equal(self, other)

    # mutable value type
    __hash__ = None

    def __iter__(self) -> Iterator[float]:
        return iter((self.w, self.x, self.y, self.z))

    def __copy__(self) -> 'Quaternion':
        return self.copy()

    def __repr__(self) -> str:
        return (f"{type(self).__name__}(w={self.w:+.8f}, x={self.x:+.8f}, "
                f"y={self.y:+.8f}, z={self.z:+.8f})")


class QuaternionF(Quaternion):
    """Single-precision (float32) quaternion."""

    scalar_type = SCALAR_TYPE_FLOAT


#: Quaternion using double
QuaternionD = Quaternion

_QUATERNION_TYPES = {
    np.dtype(SCALAR_TYPE_DOUBLE): Quaternion,
    np.dtype(SCALAR_TYPE_FLOAT): QuaternionF,
}


def quaternion_type_for(scalar_type) -> type:
    """Return the Quaternion class with the given precision."""
    return _QUATERNION_TYPES[resolve_scalar_type(scalar_type)]


traits.register_comparison(Quaternion)
