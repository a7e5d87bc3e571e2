"""Joint health reporter: fetch, classify, aggregate and publish joint diagnostics."""

from __future__ import annotations

import logging
import threading
from datetime import datetime, timezone
from typing import Dict, List, Sequence

from joint_diagnostics.errors import DataSourceError, IncompleteSensorDataError
from joint_diagnostics.health import (
    JointExtrema,
    JointReading,
    JointStatus,
    Report,
    SeverityLevel,
    StickyStatus,
    classify_temperature,
)
from joint_diagnostics.memory import VALUES_PER_JOINT, MemorySource, build_joint_keys
from joint_diagnostics.sink import ReportSink

logger = logging.getLogger(__name__)

TEMPERATURE_WARN_LEVEL = 68.0
DEFAULT_TEMPERATURE_ERROR_LEVEL = 70.0


class JointHealthReporter:
    """
    Publishes one joint health report per call to ``publish()``.

    Lifecycle hooks follow connect → poll → transform → publish:
    ``connect`` resolves the memory service (failures leave the reporter
    degraded), ``poll`` reads every joint in one batch, ``transform`` turns
    the readings into a report and ``publish`` runs the whole cycle.
    """

    def __init__(
        self,
        source: MemorySource,
        sink: ReportSink,
        joints: Sequence[str],
        temperature_error_level: float = DEFAULT_TEMPERATURE_ERROR_LEVEL,
    ) -> None:
        self._source = source
        self._sink = sink
        self._joints = tuple(joints)
        self._temperature_warn_level = TEMPERATURE_WARN_LEVEL
        self._temperature_error_level = float(temperature_error_level)
        self._keys = build_joint_keys(self._joints)
        self._status = StickyStatus()
        self._lock = threading.Lock()
        self.connect()

    @property
    def joints(self) -> tuple:
        return self._joints

    @property
    def keys(self) -> tuple:
        return self._keys

    @property
    def sticky_status(self) -> StickyStatus:
        return self._status

    def connect(self) -> bool:
        """Resolve the memory service. Returns False and logs when it cannot be reached."""
        try:
            self._source.connect()
        except DataSourceError as exc:
            logger.error("Failed to connect to memory proxy: %s", exc)
            return False
        return True

    def poll(self) -> List[JointReading]:
        """Fetch temperature, stiffness and current for every joint in one call."""
        values = self._source.fetch_values(self._keys)
        if len(values) != len(self._keys):
            raise IncompleteSensorDataError(expected=len(self._keys), received=len(values))

        readings = []
        for index, joint in enumerate(self._joints):
            temperature, stiffness, current = values[index * VALUES_PER_JOINT:(index + 1) * VALUES_PER_JOINT]
            readings.append(JointReading(joint, temperature, stiffness, current))
        return readings

    def transform(self, readings: Sequence[JointReading]) -> Report:
        """Classify each reading, update the sticky status and build the report."""
        statuses = []
        extrema = JointExtrema()

        for reading in readings:
            level, message = classify_temperature(
                reading.joint,
                reading.temperature,
                self._temperature_warn_level,
                self._temperature_error_level,
            )
            status = JointStatus.from_reading(reading, level, message)
            statuses.append(status)
            self._status.observe(status.level, status.message)
            extrema.add(reading, level)

        statuses.append(extrema.to_status())
        return Report(stamp=datetime.now(timezone.utc), status=tuple(statuses))

    def publish(self) -> bool:
        """
        Run one diagnostics cycle and publish the report.

        Returns False when the joints could not be read (nothing is published)
        or when any joint is at ERROR level.
        """
        with self._lock:
            self._status.reset()

            try:
                readings = self.poll()
            except DataSourceError as exc:
                logger.error("Could not get joint data from the robot: %s", exc)
                return False

            report = self.transform(readings)
            self._sink.publish(report)
            logger.debug("Published joint report: %s", self._status.message)

            return self._status.level < SeverityLevel.ERROR

    def status_message(self) -> str:
        """Return the message of the last dominant joint status, waiting for a running cycle to finish."""
        with self._lock:
            return self._status.message

    def status_snapshot(self) -> Dict[str, object]:
        """Return the sticky level and message with joint count and connection state."""
        with self._lock:
            level, message = self._status.level, self._status.message
        return {
            "level": level.name,
            "message": message,
            "joints": len(self._joints),
            "connected": self._source.connected,
        }
