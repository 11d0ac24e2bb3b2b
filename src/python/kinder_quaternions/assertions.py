"""
===============================================================================
KINDER QUATERNIONS - Error Types and Numeric Assertions
===============================================================================
"""

import logging
import math

from kinder_quaternions.config import get_config

logger = logging.getLogger(__name__)


class QuaternionError(Exception):
    """Base class for all errors raised by the quaternion package."""


class UnitNormError(QuaternionError, RuntimeError):
    """A unit quaternion was built from coefficients whose norm is not 1."""


def assertions_enabled() -> bool:
    """True when the debug assertions of the active configuration are on."""
    return get_config().debug_assertions


def check_scalar_near(error_type, value: float, expected: float,
                      tolerance: float, message: str) -> None:
    """
    Raise ``error_type`` unless |value - expected| <= tolerance.

    Always active. NaN values never compare near and therefore raise.
    """
    value = float(value)
    if math.isnan(value) or abs(value - expected) > tolerance:
        full_message = (f"{message} Value {value!r} differs from expected "
                        f"{expected!r} by more than {tolerance:g}.")
        logger.error(full_message)
        raise error_type(full_message)


def assert_scalar_near(error_type, value: float, expected: float,
                       tolerance: float, message: str) -> None:
    """
    Debug-only variant of check_scalar_near().

    Does nothing when the debug assertions are disabled, so callers must not
    rely on it for correctness.
    """
    if not assertions_enabled():
        logger.debug("Debug assertions disabled, skipping check: %s", message)
        return
    check_scalar_near(error_type, value, expected, tolerance, message)
