# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/instancemap/observers/dispatcher.py
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from .events import BaseEvent, new_ctx
from .interface import Observer

log = logging.getLogger("instancemap")


class EventBus:
    def __init__(self, observers: Optional[List[Observer]] = None, **ctx: Any):
        self._observers = observers or []
        self._ctx: Dict[str, Any] = new_ctx(**ctx)

    def ctx(self) -> Dict[str, Any]:
        """Base event fields with a fresh timestamp and this bus's run_id."""
        return new_ctx(
            namespace=self._ctx["namespace"],
            context=self._ctx["context"],
            run_id=self._ctx["run_id"],
        )

    def emit(self, event: BaseEvent) -> None:
        for ob in self._observers:
            try:
                ob.notify(event)
            except Exception:
                # observers must not break parsing
                log.debug("observer %r failed on %s", ob, type(event).__name__, exc_info=True)
