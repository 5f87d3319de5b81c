#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
papercut-rpc public API with lazy imports.

Importing the package stays cheap; the client, descriptor loaders and the
bundled API description are only loaded when first requested.
"""

from importlib import import_module
from typing import Any, Dict, Tuple

from ._version import __version__

_EXPORT_MAP: Dict[str, Tuple[str, str]] = {
    "PaperCut": ("papercut_rpc.client", "PaperCut"),
    "RemoteMethod": ("papercut_rpc.client", "RemoteMethod"),
    "RemoteTransport": ("papercut_rpc.transport", "RemoteTransport"),
    "XmlRpcTransport": ("papercut_rpc.transport", "XmlRpcTransport"),
    "MethodDescriptor": ("papercut_rpc.descriptors", "MethodDescriptor"),
    "ParameterDescriptor": ("papercut_rpc.descriptors", "ParameterDescriptor"),
    "ParameterType": ("papercut_rpc.descriptors", "ParameterType"),
    "load_description": ("papercut_rpc.descriptors", "load_description"),
    "load_description_file": ("papercut_rpc.descriptors", "load_description_file"),
    "load_bundled_description": ("papercut_rpc.descriptors", "load_bundled_description"),
    "validate_arguments": ("papercut_rpc.validation", "validate_arguments"),
    "PaperCutConfig": ("papercut_rpc.core.config", "PaperCutConfig"),
    "get_config": ("papercut_rpc.core.config", "get_config"),
    "create_config": ("papercut_rpc.core.config", "create_config"),
    "PaperCutError": ("papercut_rpc.core.utils.exceptions", "PaperCutError"),
    "ParameterValidationError": ("papercut_rpc.core.utils.exceptions", "ParameterValidationError"),
    "ValidationFailure": ("papercut_rpc.core.utils.exceptions", "ValidationFailure"),
    "DescriptionFormatError": ("papercut_rpc.core.utils.exceptions", "DescriptionFormatError"),
    "MethodNotFoundError": ("papercut_rpc.core.utils.exceptions", "MethodNotFoundError"),
    "ConfigurationError": ("papercut_rpc.core.utils.exceptions", "ConfigurationError"),
}

__all__ = ["__version__", *sorted(_EXPORT_MAP.keys())]


def __getattr__(name: str) -> Any:
    """
    Resolve public API symbols lazily.
    """
    if name not in _EXPORT_MAP:
        raise AttributeError("module 'papercut_rpc' has no attribute '{0}'".format(name))

    module_name, attr_name = _EXPORT_MAP[name]
    module = import_module(module_name)
    value = getattr(module, attr_name)
    globals()[name] = value
    return value
