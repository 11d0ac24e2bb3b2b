"""
===============================================================================
KINDER QUATERNIONS - Runtime Configuration
===============================================================================
YAML-backed configuration for the quaternion package. The settings control
whether the unit-norm debug assertions run, the tolerances they use, and the
level of the package logger.

Lookup order for the configuration file:
    1. explicit ``path`` argument of load_config()
    2. the file named by the KINDER_QUATERNIONS_CONFIG environment variable
    3. config/quaternions.yaml at the project root

A missing default file is not an error: the built-in defaults are used.

Example file::

    quaternions:
      debug_assertions: true
      unit_norm_tolerance: 1.0e-4
      comparison_tolerance: 1.0e-9
      log_level: WARNING
===============================================================================
"""

import os
import logging
import dataclasses
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

import yaml

from kinder_quaternions.constants import (
    CONFIG_ENV_VAR, CONFIG_SECTION, COMPARISON_TOLERANCE, LOG_FORMAT,
    UNIT_NORM_TOLERANCE,
)

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parent
DEFAULT_CONFIG_PATH = PROJECT_ROOT.parent.parent.parent / 'config' / 'quaternions.yaml'


def _as_float(name: str, value) -> float:
    """Coerce a tolerance read from YAML, e.g. the string '1e-4', to float."""
    if isinstance(value, bool):
        raise ValueError(f"{name} must be a number, got {value!r}")
    try:
        return float(value)
    except (TypeError, ValueError) as e:
        raise ValueError(f"{name} must be a number, got {value!r}") from e


@dataclass
class QuaternionConfig:
    """
    Settings shared by all quaternion value types.

    Attributes:
        debug_assertions: Run the unit-norm checks. Defaults to ``__debug__``,
                          so the checks disappear under ``python -O``.
        unit_norm_tolerance: Allowed |norm - 1| for a unit quaternion.
        comparison_tolerance: Default absolute tolerance of is_near().
        log_level: Level name or number applied to the package logger by
                   configure_logging().
    """
    debug_assertions: bool = __debug__
    unit_norm_tolerance: float = UNIT_NORM_TOLERANCE
    comparison_tolerance: float = COMPARISON_TOLERANCE
    log_level: Union[str, int] = "WARNING"

    def __post_init__(self) -> None:
        if not isinstance(self.debug_assertions, bool):
            raise ValueError(
                f"debug_assertions must be true or false, got {self.debug_assertions!r}"
            )
        self.unit_norm_tolerance = _as_float('unit_norm_tolerance', self.unit_norm_tolerance)
        self.comparison_tolerance = _as_float('comparison_tolerance', self.comparison_tolerance)
        if self.unit_norm_tolerance <= 0.0:
            raise ValueError(
                f"unit_norm_tolerance must be positive, got {self.unit_norm_tolerance}"
            )
        if self.comparison_tolerance < 0.0:
            raise ValueError(
                f"comparison_tolerance must be non-negative, got {self.comparison_tolerance}"
            )
        if isinstance(self.log_level, bool) or not isinstance(self.log_level, (str, int)):
            raise ValueError(f"log_level must be a name or a number, got {self.log_level!r}")
        if isinstance(self.log_level, str):
            self.log_level = self.log_level.upper()
            if not isinstance(logging.getLevelName(self.log_level), int):
                raise ValueError(f"Unknown log level: {self.log_level}")

    @classmethod
    def from_dict(cls, data: dict) -> 'QuaternionConfig':
        """Build a config from a mapping, rejecting unknown keys."""
        known = {f.name for f in dataclasses.fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(
                f"Unknown configuration keys: {sorted(unknown)}. Valid: {sorted(known)}"
            )
        return cls(**data)


_active_config: Optional[QuaternionConfig] = None


def load_config(path: Union[str, Path, None] = None) -> QuaternionConfig:
    """
    Load the quaternion configuration from YAML.

    Args:
        path: Path to a YAML file. When omitted, the environment variable and
              then the default project file are tried.

    Returns:
        The parsed configuration (not activated; see set_config()).

    Raises:
        FileNotFoundError: If an explicitly requested file does not exist.
        ValueError: If the file content is not a valid configuration.
    """
    explicit = path is not None or CONFIG_ENV_VAR in os.environ
    if path is None:
        path = os.environ.get(CONFIG_ENV_VAR, DEFAULT_CONFIG_PATH)
    path = Path(path)

    if not path.is_file():
        if explicit:
            raise FileNotFoundError(f"Configuration file not found: {path}")
        logger.debug("No configuration file at %s, using defaults", path)
        return QuaternionConfig()

    logger.info("Loading configuration from: %s", path)
    with open(path, 'r') as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise ValueError(f"Configuration in {path} must be a mapping")
    section = data.get(CONFIG_SECTION, data)
    if section is None:
        section = {}
    if not isinstance(section, dict):
        raise ValueError(f"Section '{CONFIG_SECTION}' in {path} must be a mapping")
    return QuaternionConfig.from_dict(section)


def get_config() -> QuaternionConfig:
    """Return the active configuration, loading it on first use."""
    global _active_config
    if _active_config is None:
        _active_config = load_config()
    return _active_config


def set_config(config: Optional[QuaternionConfig]) -> None:
    """Activate ``config``. Passing None forces a reload on next access."""
    global _active_config
    _active_config = config


@contextmanager
def debug_assertions(enabled: bool = True):
    """
    Temporarily switch the unit-norm debug assertions on or off.

    Example:
        with debug_assertions(False):
            UnitQuaternion(1.0, 1.0, 1.0, 1.0)  # accepted
    """
    previous = get_config()
    set_config(dataclasses.replace(previous, debug_assertions=enabled))
    try:
        yield
    finally:
        set_config(previous)


def configure_logging(config: Optional[QuaternionConfig] = None) -> logging.Logger:
    """
    Set up logging for applications using the package.

    Installs a basic stream handler with the project log format and applies
    the configured level to the package logger.
    """
    if config is None:
        config = get_config()
    logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)
    package_logger = logging.getLogger('kinder_quaternions')
    package_logger.setLevel(config.log_level)
    return package_logger
