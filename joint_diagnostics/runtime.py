"""Fixed-rate driver around the joint health reporter."""

from __future__ import annotations

import logging
import threading
import time
from typing import Dict, Optional

from joint_diagnostics.errors import PublishError
from joint_diagnostics.health import SeverityLevel
from joint_diagnostics.reporter import JointHealthReporter

logger = logging.getLogger(__name__)


class DiagnosticsRuntime:
    """
    Drives the reporter at a fixed rate.

    Responsibilities:
    - Invoke one publish cycle per tick, never overlapping
    - Keep the result of the last tick for the health endpoint
    """

    def __init__(self, reporter: JointHealthReporter, rate_hz: float = 1.0) -> None:
        if rate_hz <= 0:
            raise ValueError("rate_hz must be positive")
        self._reporter = reporter
        self._period = 1.0 / rate_hz
        self._tick_lock = threading.Lock()
        self._last_ok: Optional[bool] = None
        self._ticks = 0

    @property
    def period(self) -> float:
        return self._period

    def tick(self) -> bool:
        """Run one diagnostics cycle and return the health signal."""
        with self._tick_lock:
            try:
                ok = self._reporter.publish()
            except PublishError as exc:
                logger.error("Report could not be published: %s", exc)
                ok = self._reporter.sticky_status.level < SeverityLevel.ERROR
            self._ticks += 1
            self._last_ok = ok
            if not ok:
                logger.warning("Joint diagnostics degraded: %s", self._reporter.status_message())
            return ok

    def run(self, stop_event: threading.Event) -> None:
        """Tick at the configured rate until ``stop_event`` is set."""
        logger.info("diagnostics runtime started, period %.3fs", self._period)
        next_tick = time.monotonic()
        while not stop_event.is_set():
            self.tick()
            next_tick += self._period
            delay = next_tick - time.monotonic()
            if delay < 0:
                next_tick = time.monotonic()
                delay = 0
            stop_event.wait(delay)
        logger.info("diagnostics runtime stopped after %d ticks", self._ticks)

    def health_snapshot(self) -> Dict[str, object]:
        """Return aggregated health snapshot for the reporter."""
        status = "healthy" if self._last_ok else "degraded"
        return {
            "status": status,
            "ticks": self._ticks,
            "reporter": self._reporter.status_snapshot(),
        }
