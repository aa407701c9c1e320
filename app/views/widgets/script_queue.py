"""Ordered JavaScript call queue for a page that may not have loaded yet."""

from __future__ import annotations

from collections.abc import Callable
import json

from loguru import logger


def js_call(function: str, *args: object) -> str:
    """Build `function(arg, ...);` with every argument JSON-encoded."""
    return f"{function}({', '.join(json.dumps(a) for a in args)});"


class ScriptQueue:
    """Runs scripts immediately once the page is ready, queues them before.

    A failed load drops the queue and every later script until a load
    succeeds, so calls never pile up against a page that will not run them.
    """

    def __init__(self, runner: Callable[[str], None]) -> None:
        self._runner = runner
        self._ready = False
        self._failed = False
        self._pending: list[str] = []

    @property
    def ready(self) -> bool:
        return self._ready

    @property
    def failed(self) -> bool:
        return self._failed

    @property
    def pending(self) -> list[str]:
        return list(self._pending)

    def run(self, script: str) -> None:
        if self._ready:
            self._runner(script)
        elif self._failed:
            logger.debug("Map page unavailable, dropped: {}", script[:40])
        else:
            self._pending.append(script)

    def page_loaded(self, ok: bool) -> None:
        """Flush queued scripts in order on success; drop them on failure."""
        pending, self._pending = self._pending, []
        if not ok:
            self._ready = False
            self._failed = True
            logger.error("Map page failed to load, {} queued calls dropped", len(pending))
            return
        self._ready = True
        self._failed = False
        logger.debug("Map page loaded, flushing {} queued calls", len(pending))
        for script in pending:
            self._runner(script)
