# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/instancemap/config/loader.py

import json
import logging
import os
import yaml
from pathlib import Path
from typing import Dict, List

from instancemap.instances.models import Node, nodes_from_list
from .models import InstanceMapConfig

log = logging.getLogger("instancemap")


def _load_yaml(path: Path) -> dict:
    """Load a YAML file, expanding ${ENV_VAR} references."""
    raw = path.read_text()
    expanded = os.path.expandvars(raw)
    return yaml.safe_load(expanded) or {}


def load_config(path: str | Path | None = None) -> InstanceMapConfig:
    """
    Load and validate an instancemap YAML config.

    With no path, defaults are used. ``INSTANCEMAP_NAMESPACE`` overrides the
    namespace from the file.
    """
    data: dict = {}
    if path is not None:
        path = Path(path)
        data = _load_yaml(path)
        log.debug("Loaded config from %s", path)

    ns = os.environ.get("INSTANCEMAP_NAMESPACE")
    if ns:
        log.debug("Namespace overridden by INSTANCEMAP_NAMESPACE=%s", ns)
        data["namespace"] = ns

    return InstanceMapConfig.model_validate(data)


def load_directives(path: str | Path) -> Dict[str, str]:
    """
    Load an offline instance description: a YAML mapping of
    ``<address>: username=<username>``.
    """
    data = yaml.safe_load(Path(path).read_text()) or {}
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a mapping of address to directive")
    # ConfigMap style documents keep the entries under .data
    if isinstance(data.get("data"), dict) and data.get("kind") == "ConfigMap":
        data = data["data"]
    out: Dict[str, str] = {}
    for k, v in data.items():
        if not isinstance(k, str) or not isinstance(v, str):
            raise ValueError(f"{path}: entry {k!r} must map a string address to a string directive")
        out[k] = v
    return out


def load_nodes(path: str | Path) -> List[Node]:
    """Load the output of ``kubectl get nodes -o json``."""
    return nodes_from_list(json.loads(Path(path).read_text() or "{}"))
