"""Report sinks: where joint health reports are published."""

from __future__ import annotations

import logging
from collections import deque
from typing import Deque, List, Optional, Protocol

from joint_diagnostics.errors import PublishError
from joint_diagnostics.health import Report
from joint_diagnostics.schema import SchemaManager

logger = logging.getLogger(__name__)


class ReportSink(Protocol):
    """Anything that accepts a finished report."""

    def publish(self, report: Report) -> None:
        ...


class KafkaReportSink:
    """
    Publishes reports to a Kafka topic.

    The producer is created on first publish.
    """

    def __init__(self, bootstrap: str, topic: str, schema: Optional[SchemaManager] = None, producer=None) -> None:
        self._bootstrap = bootstrap
        self._topic = topic
        self._schema = schema or SchemaManager()
        self._producer = producer

    @property
    def topic(self) -> str:
        return self._topic

    def publish(self, report: Report) -> None:
        """Send the report and wait for the producer to flush it."""
        producer = self._ensure_producer()
        try:
            producer.send(self._topic, report)
            producer.flush()
        except Exception as exc:
            raise PublishError(f"Failed to publish report to {self._topic}: {exc}") from exc

    def close(self) -> None:
        """Close the producer if one was created."""
        if self._producer is not None:
            self._producer.close()
            self._producer = None

    def _ensure_producer(self):
        if self._producer is not None:
            return self._producer

        try:
            from kafka import KafkaProducer  # type: ignore
        except ModuleNotFoundError as exc:
            raise PublishError("kafka-python is required for KafkaReportSink") from exc

        try:
            self._producer = KafkaProducer(
                bootstrap_servers=self._bootstrap,
                value_serializer=self._schema.encode,
            )
        except Exception as exc:
            raise PublishError(f"Unable to create Kafka producer for {self._bootstrap}: {exc}") from exc

        logger.info("Kafka producer ready on %s, topic %s", self._bootstrap, self._topic)
        return self._producer


class MemoryReportSink:
    """Keeps the most recent reports in memory."""

    def __init__(self, maxlen: int = 100) -> None:
        self._reports: Deque[Report] = deque(maxlen=maxlen)

    def publish(self, report: Report) -> None:
        self._reports.append(report)

    @property
    def reports(self) -> List[Report]:
        return list(self._reports)

    @property
    def last(self) -> Optional[Report]:
        return self._reports[-1] if self._reports else None
