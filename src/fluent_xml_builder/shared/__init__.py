"""Shared utilities for fluent XML building.

This module provides the configuration objects, exception hierarchy and
logging helpers used across the grammar, tree and serializer layers.
"""

from .config import (
    BuilderConfig,
    ConfigError,
    ConfigValidationError,
    RenderConfig,
)
from .errors import (
    GrammarError,
    InvalidNameError,
    InvalidValueError,
    MissingArgumentError,
    NoParentError,
    XMLBuilderError,
)
from .logging import (
    CorrelationLogger,
    get_logger,
    new_correlation_id,
)

__all__ = [
    "BuilderConfig",
    "ConfigError",
    "ConfigValidationError",
    "RenderConfig",
    "GrammarError",
    "InvalidNameError",
    "InvalidValueError",
    "MissingArgumentError",
    "NoParentError",
    "XMLBuilderError",
    "CorrelationLogger",
    "get_logger",
    "new_correlation_id",
]
