"""fallible: computations that may fail, as values.

Public API:
    - Outcome.of(): Run a producer (or a function over a closable resource)
    - Succeeded / Failed: The two Outcome variants
    - capture: Decorator turning a raising function into an Outcome-returning one
    - lift / min_by / max_by: Binary operators over Outcomes
    - config_scope / resolve_config: Fatal-error and release-logging configuration

Example:
    from fallible import Outcome

    parsed = Outcome.of(lambda: int(user_input))
    doubled = parsed.map(lambda n: n * 2).get_or_else(0)
"""

from __future__ import annotations

import logging

from fallible.config import FrozenConfig, config_scope, current_config, resolve_config
from fallible.errors import (
    ConfigurationError,
    FallibleError,
    GetOfFailureError,
    MisuseError,
    NoSuchValueError,
    UnsupportedOperationError,
)
from fallible.operators import lift, max_by, min_by
from fallible.outcome import Failed, Outcome, Succeeded, capture
from fallible.producer import Closable, FallibleFunction, FallibleProducer
from fallible.resource import released

try:
    from importlib.metadata import PackageNotFoundError, version

    __version__ = version("fallible")
except PackageNotFoundError:
    __version__ = "0.0.0+unknown"

# Library-level NullHandler: stay silent unless the consumer configures logging.
logging.getLogger("fallible").addHandler(logging.NullHandler())

__all__ = [
    "Closable",
    "ConfigurationError",
    "Failed",
    "FallibleError",
    "FallibleFunction",
    "FallibleProducer",
    "FrozenConfig",
    "GetOfFailureError",
    "MisuseError",
    "NoSuchValueError",
    "Outcome",
    "Succeeded",
    "UnsupportedOperationError",
    "capture",
    "config_scope",
    "current_config",
    "lift",
    "max_by",
    "min_by",
    "released",
    "resolve_config",
]
