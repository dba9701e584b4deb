import socket

import pytest

from instancemap.instances import address as mod
from instancemap.instances.address import validate_address
from instancemap.instances.errors import (
    AddressError,
    AddressResolutionError,
    EmptyResolutionError,
    UnsupportedAddressError,
)


def _never_called(host):
    raise AssertionError(f"resolver should not be called for {host}")


def test_ipv4_literal_is_valid_without_lookup():
    validate_address("127.0.0.1", resolver=_never_called)
    validate_address("10.0.0.5", resolver=_never_called)


def test_ipv6_literal_is_rejected():
    with pytest.raises(UnsupportedAddressError) as ei:
        validate_address("::1")
    assert "ipv6 is not supported" in str(ei.value)
    assert ei.value.address == "::1"


def test_ipv4_mapped_ipv6_counts_as_ipv4():
    validate_address("::ffff:10.0.0.5", resolver=_never_called)


def test_unresolvable_name_fails():
    with pytest.raises(AddressResolutionError):
        validate_address("this.name.does.not.resolve.invalid")


def test_resolution_error_keeps_cause():
    def broken(host):
        raise socket.gaierror(socket.EAI_NONAME, "Name or service not known")

    with pytest.raises(AddressResolutionError) as ei:
        validate_address("winhost.example.com", resolver=broken)
    assert isinstance(ei.value.__cause__, socket.gaierror)
    assert "error looking up DNS" in str(ei.value)


def test_empty_resolution_fails():
    with pytest.raises(EmptyResolutionError) as ei:
        validate_address("winhost.example.com", resolver=lambda h: [])
    assert isinstance(ei.value, AddressError)


def test_resolving_name_is_valid():
    calls = []

    def resolver(host):
        calls.append(host)
        return ["192.168.1.20"]

    validate_address("winhost.example.com", resolver=resolver)
    validate_address("winhost.example.com", resolver=resolver)
    # no caching between calls
    assert calls == ["winhost.example.com", "winhost.example.com"]


def test_lookup_host_dedupes_getaddrinfo(monkeypatch):
    def fake_getaddrinfo(host, port):
        return [
            (socket.AF_INET, socket.SOCK_STREAM, 6, "", ("10.1.1.1", 0)),
            (socket.AF_INET, socket.SOCK_DGRAM, 17, "", ("10.1.1.1", 0)),
            (socket.AF_INET6, socket.SOCK_STREAM, 6, "", ("fd00::1", 0, 0, 0)),
        ]

    monkeypatch.setattr(mod.socket, "getaddrinfo", fake_getaddrinfo)
    assert mod.lookup_host("winhost") == ["10.1.1.1", "fd00::1"]


def test_default_resolver_is_lookup_host(monkeypatch):
    monkeypatch.setattr(mod, "lookup_host", lambda host: [])
    with pytest.raises(EmptyResolutionError):
        validate_address("winhost.example.com")


def test_empty_label_is_a_resolution_error():
    with pytest.raises(AddressResolutionError) as ei:
        validate_address("a..b")
    assert isinstance(ei.value.__cause__, UnicodeError)


def test_overlong_label_is_a_resolution_error():
    with pytest.raises(AddressResolutionError) as ei:
        validate_address("a" * 64 + ".example.com")
    assert isinstance(ei.value.__cause__, UnicodeError)
