#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Utility exports for papercut-rpc core.
"""

from .logger import ModernLogger, resolve_log_level
from .exceptions import (
    ConfigurationError,
    DescriptionFormatError,
    MethodNotFoundError,
    PaperCutError,
    ParameterValidationError,
    ValidationFailure,
)

__all__ = [
    "ModernLogger",
    "resolve_log_level",
    "PaperCutError",
    "ParameterValidationError",
    "ValidationFailure",
    "DescriptionFormatError",
    "MethodNotFoundError",
    "ConfigurationError",
]
