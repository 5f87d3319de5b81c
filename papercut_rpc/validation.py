#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Client-side parameter validation for generated API methods.

Every declared parameter type has one rule:

- ``array``  -- the argument must already be a list/tuple
- ``double`` -- parsed as a float and rounded to two decimal places
- ``int``    -- parsed as a base-10 integer (fraction truncated)
- anything else -- the argument's runtime type name must equal the tag

Numeric parsing is lenient and reads the numeric prefix of strings
(``"42.9"`` is the integer ``42``, ``"3.5kg"`` is the float ``3.5``).
"""

import datetime
import math
import re
import xmlrpc.client
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence

from .core.utils.exceptions import ParameterValidationError, ValidationFailure
from .descriptors.models import MethodDescriptor, ParameterDescriptor, ParameterType

_FLOAT_PREFIX_RE = re.compile(
    r"[+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)",
    re.ASCII,
)
_INT_PREFIX_RE = re.compile(r"[+-]?\d+", re.ASCII)

_CENTS = Decimal("0.01")
# Beyond this magnitude fixed-point rendering is skipped and the value is kept.
_FIXED_POINT_LIMIT = 1e21

Validator = Callable[[Any, ParameterDescriptor, Optional[str]], Any]


def parse_float(value: Any) -> float:
    """
    Parse ``value`` as a float; returns NaN when nothing numeric is found.
    """
    if isinstance(value, bool):
        return math.nan
    if isinstance(value, (int, float, Decimal)):
        try:
            return float(value)
        except OverflowError:
            return math.inf if value > 0 else -math.inf
    if isinstance(value, str):
        match = _FLOAT_PREFIX_RE.match(value.lstrip())
        if match is None:
            return math.nan
        return float(match.group(0))
    return math.nan


def parse_int(value: Any) -> Optional[int]:
    """
    Parse ``value`` as a base-10 integer; returns ``None`` when not numeric.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, (float, Decimal)):
        if not math.isfinite(value):
            return None
        return int(value)
    if isinstance(value, str):
        match = _INT_PREFIX_RE.match(value.lstrip())
        if match is None:
            return None
        return int(match.group(0))
    return None


def round_to_cents(value: float) -> float:
    """
    Round to two decimal places, half away from zero on the exact binary value.

    ``1.005`` is stored as ``1.00499999...`` and so rounds to ``1.0``, while
    ``0.125`` is exact and rounds to ``0.13``.
    """
    if not math.isfinite(value) or abs(value) >= _FIXED_POINT_LIMIT:
        return value
    return float(Decimal(value).quantize(_CENTS, rounding=ROUND_HALF_UP))


def runtime_type_name(value: Any) -> str:
    """
    Name of the value's type in the vocabulary used by API type tags.
    """
    if value is None:
        return "nil"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, str):
        return "string"
    if isinstance(value, (int, float, Decimal)):
        return "number"
    if isinstance(value, (list, tuple)):
        return "array"
    if isinstance(value, Mapping):
        return "struct"
    if isinstance(value, (bytes, bytearray, xmlrpc.client.Binary)):
        return "base64"
    if isinstance(value, (datetime.datetime, xmlrpc.client.DateTime)):
        return "dateTime.iso8601"
    return type(value).__name__


def _check_array(
    value: Any, parameter: ParameterDescriptor, method_name: Optional[str]
) -> Any:
    if not isinstance(value, (list, tuple)):
        raise ParameterValidationError(
            message="{0} is not an array".format(parameter.name),
            parameter_name=parameter.name,
            parameter_type=parameter.type,
            failure=ValidationFailure.NOT_ARRAY,
            method_name=method_name,
            value=value,
        )
    return value


def _coerce_double(
    value: Any, parameter: ParameterDescriptor, method_name: Optional[str]
) -> float:
    parsed = parse_float(value)
    if math.isnan(parsed):
        raise ParameterValidationError(
            message="{0} is not a float".format(parameter.name),
            parameter_name=parameter.name,
            parameter_type=parameter.type,
            failure=ValidationFailure.NOT_NUMERIC,
            method_name=method_name,
            value=value,
        )
    return round_to_cents(parsed)


def _coerce_int(
    value: Any, parameter: ParameterDescriptor, method_name: Optional[str]
) -> int:
    parsed = parse_int(value)
    if parsed is None:
        raise ParameterValidationError(
            message="{0} is not an integer".format(parameter.name),
            parameter_name=parameter.name,
            parameter_type=parameter.type,
            failure=ValidationFailure.NOT_NUMERIC,
            method_name=method_name,
            value=value,
        )
    return parsed


def _check_exact_type(
    value: Any, parameter: ParameterDescriptor, method_name: Optional[str]
) -> Any:
    if runtime_type_name(value) != parameter.type:
        raise ParameterValidationError(
            message="{0} must be {1}".format(parameter.name, parameter.type),
            parameter_name=parameter.name,
            parameter_type=parameter.type,
            failure=ValidationFailure.TYPE_MISMATCH,
            method_name=method_name,
            value=value,
        )
    return value


_VALIDATORS: Dict[ParameterType, Validator] = {
    ParameterType.ARRAY: _check_array,
    ParameterType.DOUBLE: _coerce_double,
    ParameterType.INT: _coerce_int,
    ParameterType.BOOLEAN: _check_exact_type,
    ParameterType.STRING: _check_exact_type,
    ParameterType.STRUCT: _check_exact_type,
    ParameterType.BASE64: _check_exact_type,
    ParameterType.DATETIME: _check_exact_type,
}


def validate_parameter(
    value: Any,
    parameter: ParameterDescriptor,
    method_name: Optional[str] = None,
) -> Any:
    """
    Validate one argument and return the value to send.
    """
    parameter_type = parameter.parameter_type
    if parameter_type is None:
        return _check_exact_type(value, parameter, method_name)
    return _VALIDATORS[parameter_type](value, parameter, method_name)


def validate_arguments(descriptor: MethodDescriptor, args: Sequence[Any]) -> List[Any]:
    """
    Validate positional arguments against a method's parameter contract.

    Parameters are checked left to right and the first failure raises
    ``ParameterValidationError``. Arguments beyond the declared parameters
    are passed through untouched. The input is never modified; a new list
    with coerced values is returned.
    """
    validated = list(args)
    for index, parameter in enumerate(descriptor.parameters):
        if index >= len(args):
            raise ParameterValidationError(
                message="Parameter {0} {1} missing".format(parameter.name, parameter.type),
                parameter_name=parameter.name,
                parameter_type=parameter.type,
                failure=ValidationFailure.MISSING,
                method_name=descriptor.name,
            )
        validated[index] = validate_parameter(args[index], parameter, descriptor.name)
    return validated
