#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Descriptor models for the PaperCut API description.

A description is an ordered list of method records, each naming a remote
method and its ordered, typed positional parameters.

Author-facing JSON shape::

    [
      {"name": "getUserAccountBalance",
       "parameters": [{"name": "username", "type": "string"},
                      {"name": "accountName", "type": "string"}]}
    ]
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Tuple

from ..core.utils.exceptions import DescriptionFormatError

API_NAMESPACE = "api"


class ParameterType(str, Enum):
    """
    Parameter type tags understood by the validator.
    """

    ARRAY = "array"
    DOUBLE = "double"
    INT = "int"
    BOOLEAN = "boolean"
    STRING = "string"
    STRUCT = "struct"
    BASE64 = "base64"
    DATETIME = "dateTime.iso8601"

    @classmethod
    def from_value(cls, value: str) -> Optional["ParameterType"]:
        """
        Parse a tag; unrecognized tags return ``None``.
        """
        try:
            return cls(str(value).strip())
        except ValueError:
            return None


def _non_empty_str(value: Any, field_name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise DescriptionFormatError(
            message="{0} must be a non-empty string".format(field_name),
            field_name=field_name,
        )
    return value.strip()


@dataclass(frozen=True)
class ParameterDescriptor:
    """
    One positional parameter: its name and declared type tag.
    """

    name: str
    type: str

    @property
    def parameter_type(self) -> Optional[ParameterType]:
        return ParameterType.from_value(self.type)

    def to_dict(self) -> Dict[str, str]:
        return {"name": self.name, "type": self.type}

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "ParameterDescriptor":
        if not isinstance(payload, Mapping):
            raise DescriptionFormatError(
                message="parameter entry must be an object",
                field_name="parameters",
            )
        return cls(
            name=_non_empty_str(payload.get("name"), "parameter.name"),
            type=_non_empty_str(payload.get("type"), "parameter.type"),
        )


@dataclass(frozen=True)
class MethodDescriptor:
    """
    One remote method: bare name plus ordered parameter contract.
    """

    name: str
    parameters: Tuple[ParameterDescriptor, ...] = field(default_factory=tuple)
    description: str = ""

    @property
    def qualified_name(self) -> str:
        return "{0}.{1}".format(API_NAMESPACE, self.name)

    @property
    def arity(self) -> int:
        return len(self.parameters)

    def signature(self) -> str:
        rendered = ", ".join(
            "{0}: {1}".format(parameter.name, parameter.type)
            for parameter in self.parameters
        )
        return "{0}({1})".format(self.name, rendered)

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "name": self.name,
            "parameters": [parameter.to_dict() for parameter in self.parameters],
        }
        if self.description:
            payload["description"] = self.description
        return payload

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "MethodDescriptor":
        if not isinstance(payload, Mapping):
            raise DescriptionFormatError(
                message="method entry must be an object",
                field_name="method",
            )

        name = _non_empty_str(payload.get("name"), "name")
        raw_parameters = payload.get("parameters", [])
        if raw_parameters is None:
            raw_parameters = []
        if not isinstance(raw_parameters, (list, tuple)):
            raise DescriptionFormatError(
                message="parameters of '{0}' must be a list".format(name),
                field_name="parameters",
            )

        description = payload.get("description") or ""
        if not isinstance(description, str):
            raise DescriptionFormatError(
                message="description of '{0}' must be a string".format(name),
                field_name="description",
            )

        return cls(
            name=name,
            parameters=tuple(
                ParameterDescriptor.from_dict(item) for item in raw_parameters
            ),
            description=description.strip(),
        )
