# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/instancemap/config/models.py

from typing import Optional
from pydantic import BaseModel

from instancemap.k8s.client import INSTANCE_CONFIG_MAP, NODE_LABEL_SELECTOR


class InstanceMapConfig(BaseModel):
    """Where the instance ConfigMap and the candidate nodes live."""

    namespace: str = "openshift-windows-machine-config-operator"
    config_map: str = INSTANCE_CONFIG_MAP
    node_label_selector: str = NODE_LABEL_SELECTOR
    context: Optional[str] = None       # Kubernetes context to use
    kubeconfig: Optional[str] = None    # default kubeconfig when unset
