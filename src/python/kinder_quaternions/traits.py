"""
===============================================================================
KINDER QUATERNIONS - Multiplication and Comparison Traits
===============================================================================
Free functions for the {equality, multiplication} capability set shared by
the quaternion value types.

Each quaternion class registers itself here instead of inheriting the
operators from a common base class. Multiplication is resolved through a
table keyed by the (left, right) operand classes; the entry names the family
of the result, and the precision of the result is the wider of the two
operands:

    left            right           result
    Quaternion      Quaternion      Quaternion
    Quaternion      UnitQuaternion  Quaternion
    UnitQuaternion  Quaternion      Quaternion
    UnitQuaternion  UnitQuaternion  UnitQuaternion (unit norm checked)

Lookups walk the MRO of both operands, so subclasses such as QuaternionF
share the entries of their base class.
===============================================================================
"""

import logging
from typing import Callable, Dict, Optional, Tuple

import numpy as np

from kinder_quaternions.config import get_config

logger = logging.getLogger(__name__)

# (left type, right type) -> callable(scalar_type) returning the result class
_MULTIPLICATION_TRAITS: Dict[Tuple[type, type], Callable[[np.dtype], type]] = {}
_COMPARABLE_TYPES: Tuple[type, ...] = ()


def register_comparison(quaternion_type: type) -> None:
    """Declare ``quaternion_type`` comparable with every other registered type."""
    global _COMPARABLE_TYPES
    if quaternion_type not in _COMPARABLE_TYPES:
        _COMPARABLE_TYPES = _COMPARABLE_TYPES + (quaternion_type,)


def register_multiplication(left_type: type, right_type: type,
                            result_family: Callable[[np.dtype], type]) -> None:
    """
    Add an entry to the multiplication table.

    Args:
        left_type: Class of the left operand.
        right_type: Class of the right operand.
        result_family: Maps the promoted scalar type to the result class,
                       e.g. quaternion_type_for.
    """
    _MULTIPLICATION_TRAITS[(left_type, right_type)] = result_family
    logger.debug("Registered multiplication %s * %s",
                 left_type.__name__, right_type.__name__)


def is_quaternion_like(value: object) -> bool:
    return isinstance(value, _COMPARABLE_TYPES)


def _lookup_multiplication(left_type: type,
                           right_type: type) -> Optional[Callable[[np.dtype], type]]:
    for left in left_type.__mro__:
        for right in right_type.__mro__:
            result_family = _MULTIPLICATION_TRAITS.get((left, right))
            if result_family is not None:
                return result_family
    return None


def hamilton_product(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    """
    Hamilton product of two [w, x, y, z] arrays.

        (a1 + b1 i + c1 j + d1 k)(a2 + b2 i + c2 j + d2 k) =
            (a1 a2 - b1 b2 - c1 c2 - d1 d2)
          + (a1 b2 + b1 a2 + c1 d2 - d1 c2) i
          + (a1 c2 - b1 d2 + c1 a2 + d1 b2) j
          + (a1 d2 + b1 c2 - c1 b2 + d1 a2) k
    """
    a1, b1, c1, d1 = a
    a2, b2, c2, d2 = b
    return np.array([
        a1 * a2 - b1 * b2 - c1 * c2 - d1 * d2,
        a1 * b2 + b1 * a2 + c1 * d2 - d1 * c2,
        a1 * c2 - b1 * d2 + c1 * a2 + d1 * b2,
        a1 * d2 + b1 * c2 - c1 * b2 + d1 * a2,
    ], dtype=np.result_type(a, b))


def multiply(a, b):
    """
    Multiply two quaternions, a * b.

    The result class comes from the multiplication table. Mixing float32
    and float64 operands promotes to float64.

    Raises:
        TypeError: If no table entry covers the operand classes.
        UnitNormError: If a unit quaternion result fails the unit-norm check.
    """
    result_family = _lookup_multiplication(type(a), type(b))
    if result_family is None:
        raise TypeError(
            f"No multiplication defined for {type(a).__name__} * {type(b).__name__}"
        )
    scalar_type = np.result_type(a.scalar_type, b.scalar_type)
    product = hamilton_product(a.to_implementation(), b.to_implementation())
    return result_family(scalar_type)(product)


def is_equal(a, b) -> bool:
    """Exact coefficient-wise equality of two quaternions of any kind."""
    if not (is_quaternion_like(a) and is_quaternion_like(b)):
        raise TypeError(
            f"Cannot compare {type(a).__name__} with {type(b).__name__}"
        )
    return bool(np.array_equal(a.to_implementation(), b.to_implementation()))


def is_near(a, b, tolerance: Optional[float] = None) -> bool:
    """
    True when every coefficient of ``a`` and ``b`` differs by at most
    ``tolerance`` (default: comparison_tolerance of the active config).
    """
    if not (is_quaternion_like(a) and is_quaternion_like(b)):
        raise TypeError(
            f"Cannot compare {type(a).__name__} with {type(b).__name__}"
        )
    if tolerance is None:
        tolerance = get_config().comparison_tolerance
    difference = np.abs(np.asarray(a.to_implementation(), dtype=np.float64)
                        - np.asarray(b.to_implementation(), dtype=np.float64))
    return bool(np.all(difference <= tolerance))
