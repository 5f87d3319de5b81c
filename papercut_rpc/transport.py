#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Transport capability used by the PaperCut client.

The client only needs one asynchronous operation: invoke a remote method by
name with a positional argument list. ``XmlRpcTransport`` provides it on top
of ``xmlrpc.client``.
"""

import asyncio
import ssl
import xmlrpc.client
from abc import ABC, abstractmethod
from typing import Any, Optional, Sequence

from .core.config import DEFAULT_PATH


class RemoteTransport(ABC):
    """
    Contract for issuing one remote call.
    """

    @abstractmethod
    async def invoke(self, method_name: str, params: Sequence[Any]) -> Any:
        """
        Call ``method_name`` with ``params`` and return the raw result.

        Failures propagate as whatever exception the transport raised.
        """


class XmlRpcTransport(RemoteTransport):
    """
    XML-RPC transport over HTTP or HTTPS.

    ``xmlrpc.client.ServerProxy`` is synchronous and keeps per-instance
    connection state, so each call builds its own proxy and runs it in a worker
    thread via ``asyncio.to_thread``.
    """

    def __init__(
        self,
        host: str,
        port: int,
        path: str = DEFAULT_PATH,
        security: bool = True,
        ssl_context: Optional[ssl.SSLContext] = None,
        allow_none: bool = False,
    ) -> None:
        self.host = host
        self.port = port
        self.path = path if path.startswith("/") else "/" + path
        self.security = security
        self.ssl_context = ssl_context
        self.allow_none = allow_none

    @property
    def url(self) -> str:
        scheme = "https" if self.security else "http"
        return "{0}://{1}:{2}{3}".format(scheme, self.host, self.port, self.path)

    def _new_proxy(self) -> xmlrpc.client.ServerProxy:
        kwargs: dict = {"allow_none": self.allow_none}
        if self.security and self.ssl_context is not None:
            kwargs["context"] = self.ssl_context
        return xmlrpc.client.ServerProxy(self.url, **kwargs)

    def _call(self, method_name: str, params: Sequence[Any]) -> Any:
        with self._new_proxy() as proxy:
            return getattr(proxy, method_name)(*params)

    async def invoke(self, method_name: str, params: Sequence[Any]) -> Any:
        return await asyncio.to_thread(self._call, method_name, list(params))

    def __repr__(self) -> str:
        return "XmlRpcTransport(url={0!r})".format(self.url)


def create_transport(
    host: str,
    port: int,
    path: str = DEFAULT_PATH,
    security: bool = True,
) -> RemoteTransport:
    """
    Build the default transport for a PaperCut server.
    """
    return XmlRpcTransport(host=host, port=port, path=path, security=security)
