#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
papercut-rpc core module exports (lazy-loaded).
"""

from importlib import import_module
from typing import Any, Dict, Tuple

_EXPORT_MAP: Dict[str, Tuple[str, str]] = {
    "PaperCutConfig": ("papercut_rpc.core.config", "PaperCutConfig"),
    "get_config": ("papercut_rpc.core.config", "get_config"),
    "create_config": ("papercut_rpc.core.config", "create_config"),
    "set_config": ("papercut_rpc.core.config", "set_config"),
    "ModernLogger": ("papercut_rpc.core.utils.logger", "ModernLogger"),
}

__all__ = sorted(_EXPORT_MAP.keys())


def __getattr__(name: str) -> Any:
    if name not in _EXPORT_MAP:
        raise AttributeError("module 'papercut_rpc.core' has no attribute '{0}'".format(name))

    module_name, attr_name = _EXPORT_MAP[name]
    module = import_module(module_name)
    value = getattr(module, attr_name)
    globals()[name] = value
    return value
