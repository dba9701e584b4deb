# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/instancemap/cli/app.py
from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import typer
import yaml
from kubernetes.config.config_exception import ConfigException
from pydantic import ValidationError

from instancemap.config.loader import load_config, load_directives, load_nodes
from instancemap.config.models import InstanceMapConfig
from instancemap.instances.errors import InstanceError
from instancemap.instances.models import Instance
from instancemap.instances.parser import parse_instances
from instancemap.k8s import client as k8s
from instancemap.logging.log import init_logging
from instancemap.observers.dispatcher import EventBus
from instancemap.observers.logger import LoggerObserver


# unreadable config file, bad config content, unusable kubeconfig/context
CONFIG_ERRORS = (OSError, yaml.YAMLError, ValidationError, ConfigException)


# ------------------------------------------------------------------------------
# CLI setup
# ------------------------------------------------------------------------------

app = typer.Typer(help="Inspect the external instances described for a cluster")


def _fail(msg: str) -> None:
    typer.secho(msg, fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1)


def _echo_instances(instances: List[Instance]) -> None:
    if not instances:
        typer.echo("no instances described")
        return
    for inst in sorted(instances, key=lambda i: i.address):
        typer.echo(f"{inst.address}  {inst.username}  {inst.node_name or '-'}")


def _resolve_config(
    config: Optional[Path],
    namespace: Optional[str],
    context: Optional[str],
) -> InstanceMapConfig:
    cfg = load_config(config)
    if namespace:
        cfg.namespace = namespace
    if context:
        cfg.context = context
    return cfg


# ------------------------------------------------------------------------------
# Commands
# ------------------------------------------------------------------------------

@app.command("list")
def list_instances(
    config: Optional[Path] = typer.Option(None, "--config", help="instancemap config YAML"),
    namespace: Optional[str] = typer.Option(None, "--namespace", "-n"),
    context: Optional[str] = typer.Option(None, "--context"),
    log_dir: Optional[Path] = typer.Option(None, "--log-dir"),
    debug: bool = typer.Option(False, "--debug"),
):
    """List the instances described in the cluster's instance ConfigMap."""
    logger, run_id, _ = init_logging(base_dir=log_dir, verbose=debug)

    try:
        cfg = _resolve_config(config, namespace, context)
        bus = EventBus([LoggerObserver(logger)], namespace=cfg.namespace, context=cfg.context, run_id=run_id)
        api = k8s.load_kube(kube_context=cfg.context, kubeconfig=cfg.kubeconfig)
        instances = k8s.get_instances(
            api,
            cfg.namespace,
            config_map=cfg.config_map,
            label_selector=cfg.node_label_selector,
            bus=bus,
        )
    except CONFIG_ERRORS as e:
        _fail(f"[config] {e}")
    except (InstanceError, k8s.ClusterSourceError) as e:
        _fail(f"[instances] {e}")
    _echo_instances(instances)


@app.command("parse")
def parse(
    directives: Path = typer.Argument(..., help="YAML mapping of <address>: username=<username>"),
    nodes: Optional[Path] = typer.Option(None, "--nodes", help="Output of `kubectl get nodes -o json`"),
    log_dir: Optional[Path] = typer.Option(None, "--log-dir"),
    debug: bool = typer.Option(False, "--debug"),
):
    """Parse an instance description offline, without contacting a cluster."""
    logger, run_id, _ = init_logging(base_dir=log_dir, verbose=debug)
    bus = EventBus([LoggerObserver(logger)], run_id=run_id)

    try:
        data = load_directives(directives)
        node_list = load_nodes(nodes) if nodes else []
        instances = parse_instances(data, node_list, bus=bus)
    except InstanceError as e:
        _fail(f"[parse] {e}")
    except (OSError, ValueError) as e:
        _fail(f"[parse] cannot read input: {e}")
    _echo_instances(instances)


@app.command("username")
def username(
    node_name: str = typer.Argument(..., help="Cluster node name"),
    config: Optional[Path] = typer.Option(None, "--config", help="instancemap config YAML"),
    namespace: Optional[str] = typer.Option(None, "--namespace", "-n"),
    context: Optional[str] = typer.Option(None, "--context"),
    log_dir: Optional[Path] = typer.Option(None, "--log-dir"),
    debug: bool = typer.Option(False, "--debug"),
):
    """Print the login username configured for a node."""
    init_logging(base_dir=log_dir, verbose=debug)

    try:
        cfg = _resolve_config(config, namespace, context)
        api = k8s.load_kube(kube_context=cfg.context, kubeconfig=cfg.kubeconfig)
        node = k8s.find_node(api, node_name, cfg.node_label_selector)
        if node is None:
            _fail(f"[username] node {node_name} not found")
        user = k8s.get_node_username(api, cfg.namespace, node, config_map=cfg.config_map)
    except CONFIG_ERRORS as e:
        _fail(f"[config] {e}")
    except (InstanceError, k8s.ClusterSourceError) as e:
        _fail(f"[username] {e}")
    typer.echo(user)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
