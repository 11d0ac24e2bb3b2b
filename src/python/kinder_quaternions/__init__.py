"""
===============================================================================
KINDER QUATERNIONS
===============================================================================
Quaternion value types on top of numpy, Hamiltonian convention
(q = w + x*i + y*j + z*k, i*i = j*j = k*k = i*j*k = -1).

Modules:
    quaternion       -- general Quaternion (no invariant), float64 / float32
    unit_quaternion  -- UnitQuaternion enforcing |q| = 1 within 1e-4
    traits           -- multiply / is_equal / is_near free functions
    assertions       -- error types and the debug-only numeric assertion
    config           -- YAML-backed runtime configuration
    constants        -- tolerances and scalar types
===============================================================================
"""

from kinder_quaternions.assertions import QuaternionError, UnitNormError
from kinder_quaternions.config import (
    QuaternionConfig, configure_logging, debug_assertions, get_config,
    load_config, set_config,
)
from kinder_quaternions.quaternion import Quaternion, QuaternionD, QuaternionF
from kinder_quaternions.unit_quaternion import (
    UnitQuaternion, UnitQuaternionD, UnitQuaternionF,
)
from kinder_quaternions.traits import is_equal, is_near, multiply

__version__ = "0.1.0"

__all__ = [
    "Quaternion", "QuaternionD", "QuaternionF",
    "UnitQuaternion", "UnitQuaternionD", "UnitQuaternionF",
    "multiply", "is_equal", "is_near",
    "QuaternionError", "UnitNormError",
    "QuaternionConfig", "load_config", "get_config", "set_config",
    "debug_assertions", "configure_logging",
]
