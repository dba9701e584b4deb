# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/instancemap/k8s/client.py
from __future__ import annotations

import logging
from typing import Dict, List, Optional

from kubernetes import client, config
from kubernetes.client.exceptions import ApiException
from kubernetes.config.config_exception import ConfigException

from instancemap.instances import parser
from instancemap.instances.address import Resolver
from instancemap.instances.models import Instance, Node, nodes_from_list
from instancemap.observers.dispatcher import EventBus
from instancemap.observers.events import ConfigMapMissing, NodesListed

log = logging.getLogger("instancemap")

# ConfigMap where the instances to be configured are described
INSTANCE_CONFIG_MAP = "windows-instances"
NODE_LABEL_SELECTOR = "kubernetes.io/os=windows"


class ClusterSourceError(RuntimeError):
    """Raised when the instance ConfigMap or the node list cannot be read."""


def load_kube(kube_context: Optional[str] = None, kubeconfig: Optional[str] = None) -> client.CoreV1Api:
    """
    Load kubeconfig (optionally a specific file/context) and return a CoreV1Api.
    Falls back to the in-cluster service account when no kubeconfig is usable.
    """
    try:
        config.load_kube_config(config_file=kubeconfig, context=kube_context)
    except ConfigException:
        if kubeconfig or kube_context:
            raise
        log.debug("No usable kubeconfig, trying in-cluster config")
        config.load_incluster_config()
    return client.CoreV1Api()


def read_instance_data(
    api: client.CoreV1Api,
    namespace: str,
    name: str = INSTANCE_CONFIG_MAP,
    bus: Optional[EventBus] = None,
) -> Dict[str, str]:
    """
    Return the data of the instance ConfigMap. A missing ConfigMap means no
    instances are described and yields an empty dict.
    """
    try:
        cm = api.read_namespaced_config_map(name=name, namespace=namespace)
    except ApiException as e:
        if e.status == 404:
            log.warning("ConfigMap %s/%s not found, no instances described", namespace, name)
            if bus is not None:
                bus.emit(ConfigMapMissing(**bus.ctx(), name=name))
            return {}
        raise ClusterSourceError(
            f"could not retrieve instance ConfigMap {name} in namespace {namespace}: {e.reason}"
        ) from e
    return dict(cm.data or {})


def list_nodes(
    api: client.CoreV1Api,
    label_selector: str = NODE_LABEL_SELECTOR,
    bus: Optional[EventBus] = None,
) -> List[Node]:
    try:
        resp = api.list_node(label_selector=label_selector)
    except ApiException as e:
        raise ClusterSourceError(f"error listing nodes: {e.reason}") from e
    nodes = nodes_from_list(resp)
    log.debug("listed %d nodes matching %s", len(nodes), label_selector)
    if bus is not None:
        bus.emit(NodesListed(**bus.ctx(), selector=label_selector, count=len(nodes)))
    return nodes


def get_instances(
    api: client.CoreV1Api,
    namespace: str,
    *,
    config_map: str = INSTANCE_CONFIG_MAP,
    label_selector: str = NODE_LABEL_SELECTOR,
    resolver: Optional[Resolver] = None,
    bus: Optional[EventBus] = None,
) -> List[Instance]:
    """
    Read the instance ConfigMap and the cluster nodes, then parse the
    instances described in the ConfigMap.
    """
    data = read_instance_data(api, namespace, config_map, bus=bus)
    nodes = list_nodes(api, label_selector, bus=bus)
    return parser.parse_instances(data, nodes, resolver=resolver, bus=bus)


def get_node_username(
    api: client.CoreV1Api,
    namespace: str,
    node: Optional[Node],
    *,
    config_map: str = INSTANCE_CONFIG_MAP,
) -> str:
    data = read_instance_data(api, namespace, config_map)
    return parser.get_node_username(data, node)


def find_node(api: client.CoreV1Api, name: str, label_selector: str = NODE_LABEL_SELECTOR) -> Optional[Node]:
    for node in list_nodes(api, label_selector):
        if node.name == name:
            return node
    return None
