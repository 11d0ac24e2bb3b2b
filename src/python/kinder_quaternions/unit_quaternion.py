"""
===============================================================================
KINDER QUATERNIONS - Unit Quaternion Value Type
===============================================================================

A unit quaternion owns one Quaternion of the same precision and keeps its
norm within UNIT_NORM_TOLERANCE (1e-4) of one.

The norm is checked whenever coefficients enter from outside:

    - every constructor form (scalars, scalar + 3-vector, 4-vector,
      Quaternion, implementation array)
    - assign() from a general Quaternion
    - replace()

Constructor and assign() checks are debug assertions: they run only while
the debug assertions of the active configuration are enabled (the default
unless Python runs with -O). replace() always validates.

There are no coefficient setters. The coefficients change only through
norm-preserving operations (conjugate, invert), assign() and replace().

Precision
---------
    UnitQuaternion / UnitQuaternionD   float64
    UnitQuaternionF                    float32
===============================================================================
"""

from typing import Iterator, Optional

import numpy as np

from kinder_quaternions import traits
from kinder_quaternions.assertions import (
    UnitNormError, assert_scalar_near, check_scalar_near,
)
from kinder_quaternions.config import get_config
from kinder_quaternions.constants import (
    SCALAR_TYPE_DOUBLE, SCALAR_TYPE_FLOAT, UNIT_NORM_MESSAGE, resolve_scalar_type,
)
from kinder_quaternions.quaternion import Quaternion, QuaternionF, quaternion_type_for


class UnitQuaternion:
    """
    Quaternion with unit norm, q = w + x*i + y*j + z*k with |q| = 1.

    Construction
    ------------
    >>> UnitQuaternion()                             # identity [1, 0, 0, 0]
    >>> UnitQuaternion(0.0, 1.0, 0.0, 0.0)           # from coefficients
    >>> UnitQuaternion(0.0, np.array([0, 1.0, 0]))   # real part + imaginary part
    >>> UnitQuaternion(np.array([0, 0, 0, 1.0]))     # from a 4-vector
    >>> UnitQuaternion(Quaternion(1.0, 0, 0, 0))     # explicit, checked conversion

    Raises
    ------
    UnitNormError
        If the coefficients are not of unit length (debug assertions only).
    """

    scalar_type = SCALAR_TYPE_DOUBLE
    quaternion_type = Quaternion

    def __init__(self, *args) -> None:
        if args:
            self._quaternion = self.quaternion_type(*args)
            self._assert_unit_norm()
        else:
            self._quaternion = self.quaternion_type.identity()

    @classmethod
    def from_implementation(cls, implementation: np.ndarray) -> 'UnitQuaternion':
        """Create from the implementation representation, a [w, x, y, z] array."""
        return cls(np.asarray(implementation))

    @classmethod
    def identity(cls) -> 'UnitQuaternion':
        return cls()

    def _assert_unit_norm(self) -> None:
        assert_scalar_near(UnitNormError, self.norm(), 1.0,
                           get_config().unit_norm_tolerance, UNIT_NORM_MESSAGE)

    # =========================================================================
    # COEFFICIENT ACCESS (read-only)
    # =========================================================================

    @property
    def w(self) -> float:
        return self._quaternion.w

    @property
    def x(self) -> float:
        return self._quaternion.x

    @property
    def y(self) -> float:
        return self._quaternion.y

    @property
    def z(self) -> float:
        return self._quaternion.z

    def get_real(self) -> float:
        return self._quaternion.get_real()

    def get_imaginary(self) -> np.ndarray:
        return self._quaternion.get_imaginary()

    def get_vector4(self) -> np.ndarray:
        return self._quaternion.get_vector4()

    def to_implementation(self) -> np.ndarray:
        """
        Read-only view of the backing array [w, x, y, z].

        The view tracks later changes of this unit quaternion but cannot be
        written to, so it cannot break the unit-norm invariant.
        """
        view = self._quaternion.to_implementation().view()
        view.flags.writeable = False
        return view

    def norm(self) -> float:
        return self._quaternion.norm()

    # =========================================================================
    # ALGEBRA
    # =========================================================================

    def conjugated(self) -> 'UnitQuaternion':
        """Return the conjugate. The norm is unchanged, so it stays a unit quaternion."""
        return type(self)(self._quaternion.conjugated())

    def conjugate(self) -> 'UnitQuaternion':
        """Conjugate in place and return self."""
        self._quaternion.conjugate()
        return self

    def inverted(self) -> 'UnitQuaternion':
        """
        Return the inverse, which for a unit quaternion is its conjugate.

        q^-1 = q* / |q|^2 = q*  when |q| = 1
        """
        return self.conjugated()

    def invert(self) -> 'UnitQuaternion':
        """Invert (conjugate) in place and return self."""
        return self.conjugate()

    # =========================================================================
    # VALIDATED MUTATION
    # =========================================================================

    def replace(self, w: Optional[float] = None, x: Optional[float] = None,
                y: Optional[float] = None, z: Optional[float] = None,
                renormalize: bool = False) -> 'UnitQuaternion':
        """
        Replace some coefficients in place and return self.

        The coefficients left as None keep their current value. The new
        coefficients are then either renormalized (``renormalize=True``) or
        must already have unit norm. Rejected values leave self unchanged.
        Unlike the constructor checks this validation is always active.

        Raises
        ------
        UnitNormError
            If the new coefficients are not of unit length, or if they are
            all zero and cannot be renormalized.
        """
        candidate = self.quaternion_type(self._quaternion)
        for index, value in enumerate((w, x, y, z)):
            if value is not None:
                candidate.to_implementation()[index] = value

        if renormalize:
            candidate.normalize()

        check_scalar_near(UnitNormError, candidate.norm(), 1.0,
                          get_config().unit_norm_tolerance, UNIT_NORM_MESSAGE)
        self._quaternion.assign(candidate)
        return self

    def assign(self, other) -> 'UnitQuaternion':
        """
        Copy the coefficients of ``other`` into self and return self.

        Values are cast element-wise to this precision. A UnitQuaternion
        source is taken as is; a general Quaternion source is checked for
        unit norm, and on failure self keeps its previous coefficients.
        """
        if isinstance(other, UnitQuaternion):
            self._quaternion.assign(other)
            return self
        if not isinstance(other, Quaternion):
            raise TypeError(f"Cannot assign {type(other).__name__} to {type(self).__name__}")

        previous = self._quaternion.get_vector4()
        self._quaternion.assign(other)
        try:
            self._assert_unit_norm()
        except UnitNormError:
            self._quaternion.to_implementation()[:] = previous
            raise
        return self

    # =========================================================================
    # CONVERSIONS
    # =========================================================================

    def to_quaternion(self) -> Quaternion:
        """Return a general Quaternion copy (no invariant)."""
        return self.quaternion_type(self._quaternion)

    def cast(self, target_type: type):
        """Convert to another quaternion class, e.g. ``u.cast(UnitQuaternionF)``."""
        return target_type(self)

    def copy(self) -> 'UnitQuaternion':
        result = type(self)()
        result._quaternion.assign(self._quaternion)
        return result

    # =========================================================================
    # OPERATORS
    # =========================================================================

    def __mul__(self, other):
        if traits.is_quaternion_like(other):
            return traits.multiply(self, other)
        return NotImplemented

    def __eq__(self, other: object) -> bool:
        if not traits.is_quaternion_like(other):
            return NotImplemented
        return traits.is_equal(self, other)

    __hash__ = None

    def __iter__(self) -> Iterator[float]:
        return iter(self._quaternion)

    def __copy__(self) -> 'UnitQuaternion':
        return self.copy()

    def __repr__(self) -> str:
        return (f"{type(self).__name__}(w={self.w:+.8f}, x={self.x:+.8f}, "
                f"y={self.y:+.8f}, z={self.z:+.8f})")


class UnitQuaternionF(UnitQuaternion):
    """Single-precision (float32) unit quaternion."""

    scalar_type = SCALAR_TYPE_FLOAT
    quaternion_type = QuaternionF


#: Unit quaternion using double
UnitQuaternionD = UnitQuaternion

_UNIT_QUATERNION_TYPES = {
    np.dtype(SCALAR_TYPE_DOUBLE): UnitQuaternion,
    np.dtype(SCALAR_TYPE_FLOAT): UnitQuaternionF,
}


def unit_quaternion_type_for(scalar_type) -> type:
    """Return the UnitQuaternion class with the given precision."""
    return _UNIT_QUATERNION_TYPES[resolve_scalar_type(scalar_type)]


traits.register_comparison(UnitQuaternion)
traits.register_multiplication(Quaternion, Quaternion, quaternion_type_for)
traits.register_multiplication(Quaternion, UnitQuaternion, quaternion_type_for)
traits.register_multiplication(UnitQuaternion, Quaternion, quaternion_type_for)
traits.register_multiplication(UnitQuaternion, UnitQuaternion, unit_quaternion_type_for)
