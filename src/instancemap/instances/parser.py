# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/instancemap/instances/parser.py
from __future__ import annotations

import logging
from typing import List, Mapping, Optional, Sequence

from instancemap.observers.dispatcher import EventBus
from instancemap.observers.events import InstancesParseFailed, InstancesParsed

from .address import Resolver, validate_address
from .directive import extract_username
from .errors import (
    AddressError,
    DirectiveError,
    MissingNodeListError,
    NilNodeError,
    NoMatchingInstanceError,
)
from .models import Instance, Node
from .nodes import find_node_by_address

log = logging.getLogger("instancemap")


def parse_instances(
    instances_data: Mapping[str, str],
    nodes: Optional[Sequence[Node]],
    *,
    resolver: Optional[Resolver] = None,
    bus: Optional[EventBus] = None,
) -> List[Instance]:
    """
    Build the instances described by `instances_data`, where each entry is
    `<address>: username=<username>`.

    Each instance refers to the node in `nodes` that reports its address, or
    None if no node does.

    Raises:
        MissingNodeListError: `nodes` is None.
        AddressError: an address is invalid. Nothing is returned for the batch.
        DirectiveError: a payload is malformed. `.instances` holds the
            instances built before the failing entry.
    """
    if nodes is None:
        raise MissingNodeListError("nodes cannot be nil")

    instances: List[Instance] = []
    try:
        for address, data in instances_data.items():
            try:
                validate_address(address, resolver=resolver)
            except AddressError as e:
                log.error("invalid address %s: %s", address, e)
                raise

            try:
                username = extract_username(data)
            except DirectiveError as e:
                raise DirectiveError(
                    f"unable to get username for {address}: {e}",
                    address=address,
                    instances=instances,
                ) from e

            node = find_node_by_address(address, nodes)
            log.debug(
                "instance %s user=%s node=%s",
                address, username, node.name if node is not None else "-",
            )
            instances.append(Instance(address=address, username=username, node=node))
    except (AddressError, DirectiveError) as e:
        if bus is not None:
            partial = len(e.instances) if isinstance(e, DirectiveError) else 0
            bus.emit(InstancesParseFailed(**bus.ctx(), error=str(e), partial=partial))
        raise

    if bus is not None:
        bus.emit(InstancesParsed(**bus.ctx(), count=len(instances), addresses=[i.address for i in instances]))
    return instances


def get_node_username(instances_data: Mapping[str, str], node: Optional[Node]) -> str:
    """Return the username of the instance entry matching one of `node`'s addresses."""
    if node is None:
        raise NilNodeError("cannot get username for nil node")
    for a in node.addresses:
        if a.address in instances_data:
            return extract_username(instances_data[a.address])
    raise NoMatchingInstanceError(node.name)
