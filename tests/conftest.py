#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Pytest bootstrap for local package imports and shared fakes.
"""

import sys
from pathlib import Path
from typing import Any, List, Optional, Sequence, Tuple

import pytest


PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from papercut_rpc.transport import RemoteTransport  # noqa: E402


class FakeTransport(RemoteTransport):
    """
    Records every invocation and answers with a fixed result or error.
    """

    def __init__(self, result: Any = None, error: Optional[BaseException] = None) -> None:
        self.result = result
        self.error = error
        self.calls: List[Tuple[str, List[Any]]] = []

    async def invoke(self, method_name: str, params: Sequence[Any]) -> Any:
        self.calls.append((method_name, list(params)))
        if self.error is not None:
            raise self.error
        return self.result


@pytest.fixture
def fake_transport() -> FakeTransport:
    return FakeTransport(result="ok")
