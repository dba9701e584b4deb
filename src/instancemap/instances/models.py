# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/instancemap/instances/models.py

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional


@dataclass(frozen=True)
class NodeAddress:
    type: str        # InternalIP | ExternalIP | Hostname
    address: str


@dataclass
class Node:
    """
    Read-only view of a cluster node: its name and status addresses.
    """
    name: str
    addresses: List[NodeAddress] = field(default_factory=list)

    def address_values(self) -> List[str]:
        return [a.address for a in self.addresses]

    @classmethod
    def from_dict(cls, item: Dict[str, Any]) -> "Node":
        """
        Build from one item of `kubectl get nodes -o json`.
        """
        name = item.get("metadata", {}).get("name", "")
        addrs = item.get("status", {}).get("addresses", []) or []
        return cls(
            name=name,
            addresses=[NodeAddress(type=a.get("type", ""), address=a.get("address", "")) for a in addrs],
        )

    @classmethod
    def from_k8s(cls, node: Any) -> "Node":
        """
        Build from a kubernetes client V1Node.
        """
        status = getattr(node, "status", None)
        addrs = (getattr(status, "addresses", None) or []) if status is not None else []
        return cls(
            name=node.metadata.name,
            addresses=[NodeAddress(type=a.type, address=a.address) for a in addrs],
        )


def nodes_from_list(data: Any) -> List[Node]:
    """
    Accepts a V1NodeList, a `kubectl get nodes -o json` document, or an
    iterable of either V1Node objects or node dicts.
    """
    if isinstance(data, dict):
        items: Iterable[Any] = data.get("items", [])
    elif hasattr(data, "items") and not callable(data.items):
        items = data.items or []
    else:
        items = data

    out: List[Node] = []
    for item in items:
        if isinstance(item, Node):
            out.append(item)
        elif isinstance(item, dict):
            out.append(Node.from_dict(item))
        else:
            out.append(Node.from_k8s(item))
    return out


@dataclass
class Instance:
    """
    An external machine to configure. `node` refers to the caller's Node
    object when the address belongs to a known node.
    """
    address: str
    username: str
    node: Optional[Node] = None

    @property
    def node_name(self) -> Optional[str]:
        return self.node.name if self.node is not None else None
