#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Exception hierarchy for papercut-rpc.

Local failures (bad descriptions, bad arguments, bad configuration) are raised
as subclasses of ``PaperCutError``. Transport failures coming back from the
XML-RPC server are never wrapped and reach the caller unchanged.
"""

from enum import Enum
from typing import Any, Dict, Optional


class PaperCutError(Exception):
    """
    Base error for everything raised by papercut-rpc itself.
    """

    default_error_code = "PAPERCUT_ERROR"

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.default_error_code
        self.details: Dict[str, Any] = dict(details or {})
        self.cause = cause

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "error_type": self.__class__.__name__,
            "error_code": self.error_code,
            "message": self.message,
            "details": dict(self.details),
        }
        if self.cause is not None:
            payload["cause"] = "{0}: {1}".format(
                self.cause.__class__.__name__, self.cause
            )
        return payload

    def __str__(self) -> str:
        return self.message


class ValidationFailure(str, Enum):
    """
    Reason a positional argument was rejected before the remote call.
    """

    MISSING = "missing"
    NOT_ARRAY = "not_array"
    NOT_NUMERIC = "not_numeric"
    TYPE_MISMATCH = "type_mismatch"


class ParameterValidationError(PaperCutError, ValueError):
    """
    Argument rejected by a generated method's parameter contract.
    """

    default_error_code = "PARAMETER_INVALID"

    def __init__(
        self,
        message: str,
        parameter_name: str,
        parameter_type: str,
        failure: ValidationFailure,
        method_name: Optional[str] = None,
        value: Any = None,
    ) -> None:
        super().__init__(
            message=message,
            details={
                "method_name": method_name,
                "parameter_name": parameter_name,
                "parameter_type": parameter_type,
                "failure": failure.value,
            },
        )
        self.parameter_name = parameter_name
        self.parameter_type = parameter_type
        self.failure = failure
        self.method_name = method_name
        self.value = value


class DescriptionFormatError(PaperCutError, ValueError):
    """
    API description payload does not match the descriptor schema.
    """

    default_error_code = "DESCRIPTION_INVALID"

    def __init__(
        self,
        message: str,
        field_name: Optional[str] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(
            message=message,
            details={"field_name": field_name},
            cause=cause,
        )
        self.field_name = field_name


class MethodNotFoundError(PaperCutError, AttributeError):
    """
    Requested method is not part of the loaded API description.
    """

    default_error_code = "METHOD_NOT_FOUND"

    def __init__(self, method_name: str) -> None:
        super().__init__(
            message="Method '{0}' is not defined by the API description".format(
                method_name
            ),
            details={"method_name": method_name},
        )
        self.method_name = method_name


class ConfigurationError(PaperCutError, ValueError):
    """
    Client configuration is missing or invalid.
    """

    default_error_code = "CONFIGURATION_INVALID"
