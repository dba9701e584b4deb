# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/instancemap/instances/address.py
from __future__ import annotations

import ipaddress
import logging
import socket
from typing import Callable, List, Optional

from .errors import AddressResolutionError, EmptyResolutionError, UnsupportedAddressError

log = logging.getLogger("instancemap")

Resolver = Callable[[str], List[str]]


def lookup_host(host: str) -> List[str]:
    """
    Return the distinct addresses `host` resolves to, in resolver order.
    Raises OSError (socket.gaierror) when the lookup fails.
    """
    seen: List[str] = []
    for _family, _type, _proto, _canon, sockaddr in socket.getaddrinfo(host, None):
        ip = sockaddr[0]
        if ip not in seen:
            seen.append(ip)
    return seen


def validate_address(address: str, resolver: Optional[Resolver] = None) -> None:
    """
    Accept an IPv4 literal or a hostname that resolves to at least one address.
    IPv6 literals are rejected. Resolved addresses are not kept.
    """
    try:
        ip = ipaddress.ip_address(address)
    except ValueError:
        ip = None

    if ip is not None:
        if ip.version == 4:
            return
        # ::ffff:a.b.c.d is still an IPv4 address
        if ip.ipv4_mapped is not None:
            return
        raise UnsupportedAddressError("ipv6 is not supported", address=address)

    resolve = resolver or lookup_host
    try:
        addresses = resolve(address)
    except (OSError, UnicodeError) as e:
        # UnicodeError: idna encoding rejects empty or overlong labels
        raise AddressResolutionError(f"error looking up DNS: {e}", address=address) from e

    if not addresses:
        raise EmptyResolutionError("DNS did not resolve to an address", address=address)
    log.debug("%s resolved to %s", address, addresses)
