#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Tests for the PaperCut client facade and its generated methods.
"""

import asyncio
import logging
import xmlrpc.client

import pytest

from conftest import FakeTransport
from papercut_rpc.client import PaperCut, RemoteMethod
from papercut_rpc.core.config import PaperCutConfig
from papercut_rpc.core.utils.exceptions import (
    MethodNotFoundError,
    ParameterValidationError,
    ValidationFailure,
)
from papercut_rpc.transport import XmlRpcTransport


BALANCE_METHODS = [
    {
        "name": "getUserAccountBalance",
        "parameters": [{"name": "username", "type": "string"}],
    },
    {
        "name": "adjustUserAccountBalance",
        "parameters": [
            {"name": "userName", "type": "string"},
            {"name": "adjustment", "type": "double"},
        ],
    },
    {
        "name": "listUserAccounts",
        "parameters": [
            {"name": "offset", "type": "int"},
            {"name": "limit", "type": "int"},
        ],
    },
    {
        "name": "getUserProperties",
        "parameters": [
            {"name": "username", "type": "string"},
            {"name": "propertyNames", "type": "array"},
        ],
    },
    {
        "name": "deleteExistingUser",
        "parameters": [
            {"name": "username", "type": "string"},
            {"name": "redactUserData", "type": "boolean"},
        ],
    },
]


def _client(transport, methods=BALANCE_METHODS, token="T"):
    return PaperCut("papercut.local", 9192, token, methods=methods, transport=transport)


def test_one_generated_method_per_descriptor_name(fake_transport):
    client = _client(fake_transport)

    assert client.method_names() == [item["name"] for item in BALANCE_METHODS]
    for name in client.method_names():
        method = getattr(client, name)
        assert isinstance(method, RemoteMethod)
        assert method.descriptor is client.describe(name)


def test_successful_call_is_framed_with_prefix_and_token(fake_transport):
    client = _client(fake_transport)

    async def run_case():
        return await client.getUserAccountBalance("alice")

    assert asyncio.run(run_case()) == "ok"
    assert fake_transport.calls == [("api.getUserAccountBalance", ["T", "alice"])]


def test_call_without_running_loop_blocks_and_returns_value():
    transport = FakeTransport(result=12.5)
    client = _client(transport)

    assert client.getUserAccountBalance("alice") == 12.5
    assert transport.calls == [("api.getUserAccountBalance", ["T", "alice"])]


def test_missing_first_parameter_fails_before_transport(fake_transport):
    client = _client(fake_transport)

    with pytest.raises(ParameterValidationError) as exc_info:
        client.adjustUserAccountBalance()

    assert "userName" in str(exc_info.value)
    assert exc_info.value.parameter_name == "userName"
    assert exc_info.value.parameter_type == "string"
    assert exc_info.value.failure is ValidationFailure.MISSING
    assert exc_info.value.method_name == "adjustUserAccountBalance"
    assert fake_transport.calls == []


def test_validation_error_is_raised_synchronously_inside_event_loop(fake_transport):
    client = _client(fake_transport)

    async def run_case():
        with pytest.raises(ParameterValidationError, match="adjustment is not a float"):
            client.adjustUserAccountBalance("alice", "lots")

    asyncio.run(run_case())
    assert fake_transport.calls == []


def test_int_parameter_is_coerced_before_sending(fake_transport):
    client = _client(fake_transport)

    client.listUserAccounts("42.9", 10.7)

    assert fake_transport.calls == [("api.listUserAccounts", ["T", 42, 10])]


def test_int_parameter_rejects_non_numeric_string(fake_transport):
    client = _client(fake_transport)

    with pytest.raises(ParameterValidationError, match="offset is not an integer"):
        client.listUserAccounts("abc", 10)
    assert fake_transport.calls == []


def test_double_parameter_is_rounded_to_cents(fake_transport):
    client = _client(fake_transport)

    client.adjustUserAccountBalance("alice", "2.499")
    client.adjustUserAccountBalance("alice", 1.005)

    assert fake_transport.calls == [
        ("api.adjustUserAccountBalance", ["T", "alice", 2.5]),
        ("api.adjustUserAccountBalance", ["T", "alice", 1.0]),
    ]


def test_array_parameter_accepts_empty_list_and_rejects_scalar(fake_transport):
    client = _client(fake_transport)

    client.getUserProperties("alice", [])
    assert fake_transport.calls == [("api.getUserProperties", ["T", "alice", []])]

    with pytest.raises(ParameterValidationError, match="propertyNames is not an array"):
        client.getUserProperties("alice", 5)
    assert len(fake_transport.calls) == 1


def test_boolean_parameter_rejects_truthy_number(fake_transport):
    client = _client(fake_transport)

    with pytest.raises(ParameterValidationError, match="redactUserData must be boolean"):
        client.deleteExistingUser("alice", 1)

    client.deleteExistingUser("alice", True)
    assert fake_transport.calls == [("api.deleteExistingUser", ["T", "alice", True])]


def test_first_failing_parameter_wins(fake_transport):
    client = _client(fake_transport)

    with pytest.raises(ParameterValidationError) as exc_info:
        client.listUserAccounts("x", "y")

    assert exc_info.value.parameter_name == "offset"


def test_extra_arguments_are_forwarded_unvalidated(fake_transport):
    client = _client(fake_transport)

    client.getUserAccountBalance("alice", "shared-account", 3)

    assert fake_transport.calls == [
        ("api.getUserAccountBalance", ["T", "alice", "shared-account", 3])
    ]


def test_caller_arguments_are_not_mutated(fake_transport):
    client = _client(fake_transport)
    args = ["alice", "1.239"]

    client.adjustUserAccountBalance(*args)

    assert args == ["alice", "1.239"]
    assert fake_transport.calls[0][1] == ["T", "alice", 1.24]


def test_duplicate_descriptor_names_expose_first_contract_only(fake_transport):
    methods = [
        {
            "name": "adjustUserAccountBalance",
            "parameters": [
                {"name": "username", "type": "string"},
                {"name": "adjustment", "type": "double"},
            ],
        },
        {
            "name": "adjustUserAccountBalance",
            "parameters": [
                {"name": "username", "type": "string"},
                {"name": "adjustment", "type": "double"},
                {"name": "comment", "type": "string"},
                {"name": "accountName", "type": "string"},
            ],
        },
    ]
    client = _client(fake_transport, methods=methods)

    assert client.method_names() == ["adjustUserAccountBalance"]
    assert client.describe("adjustUserAccountBalance").arity == 2

    client.adjustUserAccountBalance("alice", 3)
    assert fake_transport.calls == [("api.adjustUserAccountBalance", ["T", "alice", 3.0])]


def test_descriptor_cannot_replace_client_api(fake_transport):
    methods = [
        {"name": "call_api", "parameters": [{"name": "flag", "type": "boolean"}]},
        {"name": "isUserExists", "parameters": [{"name": "username", "type": "string"}]},
    ]
    client = _client(fake_transport, methods=methods)

    assert client.method_names() == ["isUserExists"]
    assert not isinstance(client.call_api, RemoteMethod)


@pytest.mark.parametrize(
    "reserved", ["info", "debug", "logger", "validate", "describe", "host", "path", "transport"]
)
def test_descriptor_named_after_client_attribute_is_skipped_and_logged(
    fake_transport, caplog, reserved
):
    methods = [
        {"name": reserved, "parameters": []},
        {"name": "isUserExists", "parameters": [{"name": "username", "type": "string"}]},
    ]

    with caplog.at_level(logging.DEBUG, logger="papercut_rpc.PaperCut"):
        client = _client(fake_transport, methods=methods)

    assert client.method_names() == ["isUserExists"]
    assert not isinstance(getattr(client, reserved), RemoteMethod)
    assert any(
        record.getMessage().startswith("Skipping {0}(".format(reserved))
        for record in caplog.records
    )


def test_transport_error_propagates_unchanged():
    fault = xmlrpc.client.Fault(1, "User does not exist")
    transport = FakeTransport(error=fault)
    client = _client(transport)

    async def run_case():
        await client.getUserAccountBalance("nobody")

    with pytest.raises(xmlrpc.client.Fault) as exc_info:
        asyncio.run(run_case())

    assert exc_info.value is fault
    assert transport.calls == [("api.getUserAccountBalance", ["T", "nobody"])]


def test_call_api_skips_validation(fake_transport):
    client = _client(fake_transport)

    asyncio.run(client.call_api("getUserAccountBalance"))

    assert fake_transport.calls == [("api.getUserAccountBalance", ["T"])]


def test_concurrent_calls_are_independent(fake_transport):
    client = _client(fake_transport)

    async def run_case():
        return await asyncio.gather(
            client.getUserAccountBalance("alice"),
            client.getUserAccountBalance("bob"),
            client.listUserAccounts(0, 100),
        )

    assert asyncio.run(run_case()) == ["ok", "ok", "ok"]
    assert sorted(fake_transport.calls) == [
        ("api.getUserAccountBalance", ["T", "alice"]),
        ("api.getUserAccountBalance", ["T", "bob"]),
        ("api.listUserAccounts", ["T", 0, 100]),
    ]


def test_invoke_and_describe_reject_unknown_method(fake_transport):
    client = _client(fake_transport)

    with pytest.raises(MethodNotFoundError):
        client.invoke("performOnlineBackup")
    with pytest.raises(AttributeError):
        client.describe("performOnlineBackup")


def test_generated_method_carries_descriptor_metadata(fake_transport):
    client = _client(fake_transport)
    method = client.adjustUserAccountBalance

    assert method.__name__ == "adjustUserAccountBalance"
    assert method.__qualname__ == "PaperCut.adjustUserAccountBalance"
    assert "userName (string)" in method.__doc__
    assert "adjustment: double" in repr(method)


def test_default_client_uses_bundled_description_and_xmlrpc_transport():
    client = PaperCut("papercut.local", 9192, "T")

    assert isinstance(client.transport, XmlRpcTransport)
    assert client.transport.url == "https://papercut.local:9192/rpc/api/xmlrpc"
    assert "getUserAccountBalance" in client.method_names()
    assert client.describe("adjustUserAccountBalance").arity == 4


def test_plain_transport_when_security_disabled():
    client = PaperCut("papercut.local", 9191, "T", path="/rpc/api/xmlrpc", security=False)

    assert client.transport.url == "http://papercut.local:9191/rpc/api/xmlrpc"


def test_from_config_builds_client(fake_transport):
    config = PaperCutConfig(host="print.example.edu", port=9192, token="T")

    client = PaperCut.from_config(config, methods=BALANCE_METHODS, transport=fake_transport)
    client.getUserAccountBalance("alice")

    assert client.host == "print.example.edu"
    assert fake_transport.calls == [("api.getUserAccountBalance", ["T", "alice"])]


def test_repr_does_not_leak_token(fake_transport):
    client = _client(fake_transport, token="super-secret")

    assert "super-secret" not in repr(client)
