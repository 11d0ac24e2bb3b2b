"""
===============================================================================
KINDER QUATERNIONS - Numerical Constants
===============================================================================
Central repository for the tolerances, scalar types and fixed strings used
throughout the quaternion value types.
===============================================================================
"""

import numpy as np


# =============================================================================
# SCALAR TYPES
# =============================================================================
SCALAR_TYPE_DOUBLE = np.float64
SCALAR_TYPE_FLOAT = np.float32
SUPPORTED_SCALAR_TYPES = (SCALAR_TYPE_FLOAT, SCALAR_TYPE_DOUBLE)

# =============================================================================
# TOLERANCES
# =============================================================================
UNIT_NORM_TOLERANCE = 1e-4             # |norm - 1| allowed for unit quaternions
COMPARISON_TOLERANCE = 1e-9            # default for is_near()

# =============================================================================
# MESSAGES
# =============================================================================
UNIT_NORM_MESSAGE = "Input quaternion has not unit length."

# =============================================================================
# CONFIGURATION / LOGGING
# =============================================================================
CONFIG_ENV_VAR = "KINDER_QUATERNIONS_CONFIG"
CONFIG_SECTION = "quaternions"
LOG_FORMAT = '%(asctime)s [%(levelname)s] %(name)s: %(message)s'


def resolve_scalar_type(scalar_type) -> np.dtype:
    """
    Normalize a scalar type specification to a numpy dtype.

    Args:
        scalar_type: numpy type, dtype, or name such as 'float32'

    Returns:
        The matching numpy dtype

    Raises:
        ValueError: If the type is not a supported floating-point precision
    """
    dtype = np.dtype(scalar_type)
    if dtype not in [np.dtype(t) for t in SUPPORTED_SCALAR_TYPES]:
        valid = [np.dtype(t).name for t in SUPPORTED_SCALAR_TYPES]
        raise ValueError(f"Unsupported scalar type: {dtype.name}. Valid: {valid}")
    return dtype
