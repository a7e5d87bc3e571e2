"""Tests for report sinks and the JSON encoding."""

from __future__ import annotations

import json
import sys
from datetime import datetime, timezone

import pytest

from joint_diagnostics.errors import PublishError
from joint_diagnostics.health import JointExtrema, JointReading, JointStatus, Report, SeverityLevel
from joint_diagnostics.schema import SchemaManager
from joint_diagnostics.sink import KafkaReportSink, MemoryReportSink

from conftest import FakeProducer


@pytest.fixture
def report() -> Report:
    reading = JointReading("LHand", 75.0, 0.9, 0.4)
    extrema = JointExtrema()
    extrema.add(reading, SeverityLevel.ERROR)
    return Report(
        stamp=datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc),
        status=(
            JointStatus.from_reading(reading, SeverityLevel.ERROR, "HIGH JOINT TEMPERATURE : LHand"),
            extrema.to_status(),
        ),
    )


def test_schema_encodes_report_as_utf8_json(report: Report) -> None:
    payload = json.loads(SchemaManager().encode(report).decode("utf-8"))

    assert payload["stamp"] == "2024-05-01T12:00:00+00:00"
    joint, aggregate = payload["status"]
    assert joint == {
        "name": "joints:LHand",
        "hardware_id": "LHand",
        "level": 2,
        "message": "HIGH JOINT TEMPERATURE : LHand",
        "values": [
            {"key": "Temperature", "value": 75.0},
            {"key": "Stiffness", "value": 0.9},
            {"key": "ElectricCurrent", "value": 0.4},
        ],
    }
    assert aggregate["name"] == "joints:Status"
    assert aggregate["values"][-1] == {"key": "Hot Joints", "value": "\nLHand: 75°C"}


def test_kafka_sink_sends_and_flushes(report: Report) -> None:
    producer = FakeProducer()
    sink = KafkaReportSink("localhost:9092", "diagnostics", producer=producer)

    sink.publish(report)

    assert producer.sent == [("diagnostics", report)]
    assert producer.flushes == 1


def test_kafka_sink_wraps_send_failure(report: Report) -> None:
    sink = KafkaReportSink("localhost:9092", "diagnostics", producer=FakeProducer(fail_on_send=True))
    with pytest.raises(PublishError, match="broker unavailable"):
        sink.publish(report)


def test_kafka_sink_creates_producer_with_json_serializer(report: Report, monkeypatch) -> None:
    created = {}

    class RecordingProducer(FakeProducer):
        def __init__(self, **kwargs) -> None:
            super().__init__()
            created.update(kwargs)

    fake_kafka = type(sys)("kafka")
    fake_kafka.KafkaProducer = RecordingProducer
    monkeypatch.setitem(sys.modules, "kafka", fake_kafka)

    sink = KafkaReportSink("broker:9092", "robot.diagnostics")
    sink.publish(report)

    assert created["bootstrap_servers"] == "broker:9092"
    assert json.loads(created["value_serializer"](report))["status"][0]["hardware_id"] == "LHand"


def test_kafka_sink_without_kafka_python(report: Report, monkeypatch) -> None:
    monkeypatch.setitem(sys.modules, "kafka", None)
    with pytest.raises(PublishError, match="kafka-python is required"):
        KafkaReportSink("localhost:9092", "diagnostics").publish(report)


def test_kafka_sink_close() -> None:
    producer = FakeProducer()
    sink = KafkaReportSink("localhost:9092", "diagnostics", producer=producer)
    sink.close()
    assert producer.closed


def test_memory_sink_is_bounded(report: Report) -> None:
    sink = MemoryReportSink(maxlen=2)
    assert sink.last is None
    for _ in range(3):
        sink.publish(report)
    assert len(sink.reports) == 2
    assert sink.last is report
