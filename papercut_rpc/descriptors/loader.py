#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Load PaperCut API descriptions into ``MethodDescriptor`` sequences.
"""

import functools
import json
from importlib import resources
from pathlib import Path
from typing import Any, Iterable, List, Mapping, Tuple, Union

from ..core.utils.exceptions import DescriptionFormatError
from .models import MethodDescriptor

BUNDLED_PACKAGE = "papercut_rpc.data"
BUNDLED_RESOURCE = "papercut_api.json"

DescriptionSource = Union[
    str,
    bytes,
    Iterable[Union[Mapping[str, Any], MethodDescriptor]],
]


def _parse_description_payload(payload: Union[str, bytes]) -> Any:
    if isinstance(payload, bytes):
        try:
            payload = payload.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise DescriptionFormatError(
                message="API description must be utf-8 encoded",
                cause=exc,
            ) from exc

    try:
        return json.loads(payload)
    except json.JSONDecodeError as exc:
        raise DescriptionFormatError(
            message="API description is not valid JSON: {0}".format(exc.msg),
            cause=exc,
        ) from exc


def load_description(source: DescriptionSource) -> Tuple[MethodDescriptor, ...]:
    """
    Build method descriptors from a description payload.

    Accepted sources:
    - JSON text or utf-8 bytes holding a list of method records
    - an iterable of method records (mappings)
    - an iterable of ``MethodDescriptor`` objects (passed through)

    Order is preserved and duplicate names are kept; which duplicate is
    exposed is decided by the client.
    """
    if isinstance(source, (str, bytes)):
        parsed = _parse_description_payload(source)
    else:
        parsed = source

    if isinstance(parsed, Mapping) or not isinstance(parsed, Iterable):
        raise DescriptionFormatError(
            message="API description must be a list of method records",
        )

    descriptors: List[MethodDescriptor] = []
    for index, item in enumerate(parsed):
        if isinstance(item, MethodDescriptor):
            descriptors.append(item)
            continue
        try:
            descriptors.append(MethodDescriptor.from_dict(item))
        except DescriptionFormatError as exc:
            raise DescriptionFormatError(
                message="Invalid method record at index {0}: {1}".format(
                    index, exc.message
                ),
                field_name=exc.field_name,
                cause=exc,
            ) from exc
    return tuple(descriptors)


def load_description_file(path: Union[str, Path]) -> Tuple[MethodDescriptor, ...]:
    """
    Read and parse a JSON description file.
    """
    return load_description(Path(path).read_bytes())


@functools.lru_cache(maxsize=1)
def load_bundled_description() -> Tuple[MethodDescriptor, ...]:
    """
    Load the PaperCut description shipped with the package.
    """
    payload = resources.files(BUNDLED_PACKAGE).joinpath(BUNDLED_RESOURCE).read_bytes()
    return load_description(payload)
