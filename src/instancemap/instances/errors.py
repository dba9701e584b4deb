# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/instancemap/instances/errors.py
from __future__ import annotations

from typing import List, Optional


class InstanceError(RuntimeError):
    """Base class for instance parsing failures."""


class AddressError(InstanceError):
    """Raised when an instance address is not acceptable."""

    def __init__(self, message: str, address: Optional[str] = None):
        super().__init__(message)
        self.address = address


class UnsupportedAddressError(AddressError):
    """Raised for IP literals other than IPv4."""


class AddressResolutionError(AddressError):
    """Raised when the DNS lookup for a hostname fails."""


class EmptyResolutionError(AddressError):
    """Raised when a hostname resolves to no addresses."""


class DirectiveError(InstanceError):
    """
    Raised when a directive payload is not in the form username=<value>.

    When raised while parsing a batch, `instances` holds what was built
    before the failing entry.
    """

    def __init__(self, message: str, address: Optional[str] = None, instances: Optional[List] = None):
        super().__init__(message)
        self.address = address
        self.instances = list(instances) if instances else []


class MissingNodeListError(InstanceError):
    """Raised when no node list is given to the parser."""


class NilNodeError(InstanceError):
    """Raised when the reverse lookup is called without a node."""


class NoMatchingInstanceError(InstanceError):
    """Raised when none of a node's addresses has a directive."""

    def __init__(self, node_name: str):
        super().__init__(f"unable to find instance associated with node {node_name}")
        self.node_name = node_name
