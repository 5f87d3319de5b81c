#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
PaperCut XML-RPC client facade.

``PaperCut`` exposes every method of the loaded API description as a
callable attribute. Calls validate their arguments locally and then go out as
``api.<method>`` with the auth token prepended:

    papercut = PaperCut("print.example.edu", 9192, token="secret")
    balance = papercut.getUserAccountBalance("alice", "")

When the API description declares the same method name more than once (the
server API has overloads such as ``adjustUserAccountBalance``), only the
first declaration is exposed.
"""

import asyncio
from typing import Any, Dict, List, Optional

from .core.config import DEFAULT_PATH, PaperCutConfig, get_config
from .core.utils.exceptions import MethodNotFoundError
from .core.utils.logger import ModernLogger
from .descriptors.loader import DescriptionSource, load_bundled_description, load_description
from .descriptors.models import API_NAMESPACE, MethodDescriptor
from .transport import RemoteTransport, create_transport
from .validation import validate_arguments


def _run_or_defer(coroutine: Any) -> Any:
    """
    Run to completion without a loop; hand back the coroutine inside one.
    """
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return asyncio.run(coroutine)
    return coroutine


def _build_docstring(descriptor: MethodDescriptor) -> str:
    lines = [descriptor.description or "Call {0} on the PaperCut server.".format(
        descriptor.qualified_name
    )]
    if descriptor.parameters:
        lines.append("")
        lines.append("Parameters:")
        for parameter in descriptor.parameters:
            lines.append("    {0} ({1})".format(parameter.name, parameter.type))
    return "\n".join(lines)


class RemoteMethod:
    """
    Callable bound to one method descriptor of one client.
    """

    def __init__(self, client: "PaperCut", descriptor: MethodDescriptor) -> None:
        self._client = client
        self.descriptor = descriptor
        self.__name__ = descriptor.name
        self.__qualname__ = "{0}.{1}".format(type(client).__name__, descriptor.name)
        self.__doc__ = _build_docstring(descriptor)

    def __call__(self, *args: Any) -> Any:
        """
        Validate ``args`` now, then perform the remote call.

        Behavior:
        - No running loop: blocks until the server answers and returns the value.
        - Running loop: returns a coroutine for the caller to await.
        """
        return self._client.invoke(self.descriptor.name, *args)

    def __repr__(self) -> str:
        return "<RemoteMethod {0}>".format(self.descriptor.signature())


class PaperCut(ModernLogger):
    """
    Client for the PaperCut XML web services API.
    """

    def __init__(
        self,
        host: str,
        port: int,
        token: str,
        path: str = DEFAULT_PATH,
        security: bool = True,
        *,
        methods: Optional[DescriptionSource] = None,
        transport: Optional[RemoteTransport] = None,
        log_level: str = "warning",
    ) -> None:
        """
        Args:
            host: The PaperCut server's address.
            port: Port of the XML web service.
            token: API auth token, sent as the first argument of every call.
            path: Path of the XML web service.
            security: Use HTTPS when True, plain HTTP otherwise.
            methods: API description to expose; defaults to the bundled one.
            transport: Replacement transport, mainly for tests.
            log_level: Level for this client's logger.
        """
        ModernLogger.__init__(self, name="PaperCut", level=log_level)

        self.host = host
        self.port = port
        self.path = path
        self.security = security
        self._token = token
        self._transport = transport if transport is not None else create_transport(
            host=host, port=port, path=path, security=security
        )
        self._methods: Dict[str, MethodDescriptor] = {}

        descriptors = (
            load_bundled_description() if methods is None else load_description(methods)
        )
        self._attach_methods(descriptors)

    @classmethod
    def from_config(
        cls, config: Optional[PaperCutConfig] = None, **kwargs: Any
    ) -> "PaperCut":
        """
        Build a client from a config (the process default when omitted).
        """
        resolved = config.ensure_valid() if config is not None else get_config()
        return cls(
            resolved.host,
            resolved.port,
            resolved.token,
            path=resolved.path,
            security=resolved.security,
            log_level=kwargs.pop("log_level", resolved.log_level),
            **kwargs,
        )

    def _attach_methods(self, descriptors: Any) -> None:
        for descriptor in descriptors:
            if hasattr(self, descriptor.name):
                self.debug(
                    "Skipping %s: name already bound on client", descriptor.signature()
                )
                continue
            setattr(self, descriptor.name, RemoteMethod(self, descriptor))
            self._methods[descriptor.name] = descriptor
        self.debug("Bound %d API methods", len(self._methods))

    @property
    def transport(self) -> RemoteTransport:
        return self._transport

    def method_names(self) -> List[str]:
        """
        Names of the generated methods, in description order.
        """
        return list(self._methods.keys())

    def describe(self, method: str) -> MethodDescriptor:
        """
        Return the descriptor bound to a generated method.
        """
        try:
            return self._methods[method]
        except KeyError:
            raise MethodNotFoundError(method) from None

    def validate(self, method: str, *args: Any) -> List[Any]:
        """
        Check ``args`` against a method's contract and return the values to send.
        """
        return validate_arguments(self.describe(method), args)

    def invoke(self, method: str, *args: Any) -> Any:
        """
        Validate and call a generated method by name.

        Validation errors are raised immediately; the remote call itself
        follows the same sync/async behavior as ``RemoteMethod.__call__``.
        """
        params = self.validate(method, *args)
        return _run_or_defer(self.call_api(method, *params))

    async def call_api(self, method: str, *params: Any) -> Any:
        """
        Call an arbitrary method on the API without validation.

        Args:
            method: Bare method name, e.g. ``"getUserAccountBalance"``.
            *params: Parameters following the auth token.

        Returns:
            The server's response. Transport and server errors are re-raised
            unchanged.
        """
        qualified = "{0}.{1}".format(API_NAMESPACE, method)
        self.debug("Calling %s with %d parameter(s)", qualified, len(params))
        try:
            return await self._transport.invoke(qualified, [self._token, *params])
        except Exception as exc:
            self.warning("Remote call %s failed: %s", qualified, exc)
            raise

    def __repr__(self) -> str:
        return "PaperCut(host={0!r}, port={1!r}, path={2!r}, security={3!r})".format(
            self.host, self.port, self.path, self.security
        )
