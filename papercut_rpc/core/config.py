#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Connection configuration for the PaperCut client.

Values come from keyword arguments or ``PAPERCUT_*`` environment variables.
"""

import os
import threading
from dataclasses import dataclass, fields, replace
from typing import Any, List, Mapping, Optional

from .utils.exceptions import ConfigurationError
from .utils.logger import resolve_log_level

DEFAULT_PATH = "/rpc/api/xmlrpc"
DEFAULT_PORT = 9191

ENV_HOST = "PAPERCUT_HOST"
ENV_PORT = "PAPERCUT_PORT"
ENV_TOKEN = "PAPERCUT_TOKEN"
ENV_PATH = "PAPERCUT_PATH"
ENV_SECURITY = "PAPERCUT_SECURITY"
ENV_LOG_LEVEL = "PAPERCUT_LOG_LEVEL"

_TRUE_VALUES = ("1", "true", "yes", "on")
_FALSE_VALUES = ("0", "false", "no", "off")


def _parse_bool(value: str, field_name: str) -> bool:
    normalized = value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise ConfigurationError(
        message="{0} must be a boolean flag, got {1!r}".format(field_name, value),
        details={"field_name": field_name},
    )


def _parse_port(value: str, field_name: str) -> int:
    try:
        return int(value.strip())
    except ValueError as exc:
        raise ConfigurationError(
            message="{0} must be an integer, got {1!r}".format(field_name, value),
            details={"field_name": field_name},
            cause=exc,
        ) from exc


@dataclass
class PaperCutConfig:
    """
    Connection coordinates and credential for one PaperCut server.
    """

    host: str = "localhost"
    port: int = DEFAULT_PORT
    token: str = ""
    path: str = DEFAULT_PATH
    security: bool = True
    log_level: str = "warning"

    @classmethod
    def from_env(
        cls, environ: Optional[Mapping[str, str]] = None, **overrides: Any
    ) -> "PaperCutConfig":
        """
        Build a config from ``PAPERCUT_*`` variables; keyword overrides win.
        """
        env = os.environ if environ is None else environ
        values: dict = {}

        if env.get(ENV_HOST):
            values["host"] = env[ENV_HOST].strip()
        if env.get(ENV_PORT):
            values["port"] = _parse_port(env[ENV_PORT], ENV_PORT)
        if env.get(ENV_TOKEN):
            values["token"] = env[ENV_TOKEN]
        if env.get(ENV_PATH):
            values["path"] = env[ENV_PATH].strip()
        if env.get(ENV_SECURITY):
            values["security"] = _parse_bool(env[ENV_SECURITY], ENV_SECURITY)
        if env.get(ENV_LOG_LEVEL):
            values["log_level"] = env[ENV_LOG_LEVEL].strip().lower()

        known = {item.name for item in fields(cls)}
        unknown = sorted(set(overrides) - known)
        if unknown:
            raise ConfigurationError(
                message="Unknown configuration fields: {0}".format(", ".join(unknown))
            )
        values.update(overrides)
        return cls(**values)

    def validate(self) -> List[str]:
        """Return a list of problems; empty when the config is usable."""
        errors: List[str] = []

        if not str(self.host).strip():
            errors.append("host cannot be empty")
        if isinstance(self.port, bool) or not isinstance(self.port, int):
            errors.append("port must be an integer")
        elif not 0 < self.port < 65536:
            errors.append("port must be between 1 and 65535")
        if not str(self.token):
            errors.append("token cannot be empty")
        if not str(self.path).startswith("/"):
            errors.append("path must start with '/'")
        try:
            resolve_log_level(self.log_level)
        except ValueError:
            errors.append("unknown log level: {0}".format(self.log_level))

        return errors

    def ensure_valid(self) -> "PaperCutConfig":
        errors = self.validate()
        if errors:
            raise ConfigurationError(
                message="Invalid PaperCut configuration: {0}".format("; ".join(errors)),
                details={"errors": errors},
            )
        return self

    def with_overrides(self, **overrides: Any) -> "PaperCutConfig":
        return replace(self, **overrides)


_default_config: Optional[PaperCutConfig] = None
_default_config_lock = threading.Lock()


def create_config(**kwargs: Any) -> PaperCutConfig:
    """
    Create and validate a config from environment plus keyword overrides.
    """
    return PaperCutConfig.from_env(**kwargs).ensure_valid()


def get_config() -> PaperCutConfig:
    """
    Return the process-wide default config, created from the environment.
    """
    global _default_config

    if _default_config is not None:
        return _default_config

    with _default_config_lock:
        if _default_config is None:
            _default_config = create_config()
        return _default_config


def set_config(config: Optional[PaperCutConfig]) -> None:
    """
    Replace (or clear, with ``None``) the process-wide default config.
    """
    global _default_config

    with _default_config_lock:
        _default_config = config.ensure_valid() if config is not None else None
