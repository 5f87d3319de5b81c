#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
API description models and loaders.
"""

from .models import API_NAMESPACE, MethodDescriptor, ParameterDescriptor, ParameterType
from .loader import load_bundled_description, load_description, load_description_file

__all__ = [
    "API_NAMESPACE",
    "MethodDescriptor",
    "ParameterDescriptor",
    "ParameterType",
    "load_description",
    "load_description_file",
    "load_bundled_description",
]
