# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/instancemap/observers/events.py

from __future__ import annotations
from dataclasses import dataclass, asdict
from typing import List, Dict, Any, Optional
from datetime import datetime, timezone
import uuid


# ---------------------------------------------------------------------
# Base context and helper
# ---------------------------------------------------------------------
@dataclass(frozen=True)
class BaseEvent:
    ts: str                 # ISO timestamp
    run_id: str             # correlates all events of one invocation
    namespace: Optional[str]
    context: Optional[str]  # kube-context

    def dict(self) -> Dict[str, Any]:
        return asdict(self)


def new_ctx(namespace: Optional[str] = None, context: Optional[str] = None, run_id: Optional[str] = None) -> Dict[str, Any]:
    return {
        "ts": datetime.now(timezone.utc).isoformat(timespec="seconds").replace("+00:00", "Z"),
        "run_id": run_id or str(uuid.uuid4()),
        "namespace": namespace,
        "context": context,
    }


# ---------------------------------------------------------------------
# Instance parsing
# ---------------------------------------------------------------------
@dataclass(frozen=True)
class InstancesParsed(BaseEvent):
    count: int
    addresses: List[str]

@dataclass(frozen=True)
class InstancesParseFailed(BaseEvent):
    error: str
    partial: int = 0


# ---------------------------------------------------------------------
# Cluster reads
# ---------------------------------------------------------------------
@dataclass(frozen=True)
class ConfigMapMissing(BaseEvent):
    name: str

@dataclass(frozen=True)
class NodesListed(BaseEvent):
    selector: str
    count: int
