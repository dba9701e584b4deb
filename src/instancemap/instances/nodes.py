# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/instancemap/instances/nodes.py
from __future__ import annotations

from typing import Iterable, Optional

from .models import Node


def find_node_by_address(address: str, nodes: Iterable[Node]) -> Optional[Node]:
    """Return the first node reporting `address` in its status addresses."""
    for node in nodes:
        for a in node.addresses:
            if a.address == address:
                return node
    return None
