"""Shared fakes for the robot session, memory service and Kafka producer."""

from __future__ import annotations

from typing import List, Sequence

import pytest

from joint_diagnostics.memory import MemorySource
from joint_diagnostics.reporter import JointHealthReporter
from joint_diagnostics.sink import MemoryReportSink


class FakeMemoryProxy:
    """Stands in for ALMemory; returns queued value lists from getListData."""

    def __init__(self, values: Sequence[object] = ()) -> None:
        self.values = list(values)
        self.error: Exception | None = None
        self.calls: List[List[str]] = []

    def getListData(self, keys):  # noqa: N802
        self.calls.append(list(keys))
        if self.error is not None:
            raise self.error
        return list(self.values)


class FakeSession:
    def __init__(self, proxy: FakeMemoryProxy | None = None, error: Exception | None = None) -> None:
        self.proxy = proxy or FakeMemoryProxy()
        self.error = error
        self.requested: List[str] = []

    def service(self, name: str):
        self.requested.append(name)
        if self.error is not None:
            raise self.error
        return self.proxy


class FakeProducer:
    def __init__(self, fail_on_send: bool = False) -> None:
        self.sent = []
        self.flushes = 0
        self.closed = False
        self.fail_on_send = fail_on_send

    def send(self, topic, value):
        if self.fail_on_send:
            raise RuntimeError("broker unavailable")
        self.sent.append((topic, value))

    def flush(self):
        self.flushes += 1

    def close(self):
        self.closed = True


@pytest.fixture
def proxy() -> FakeMemoryProxy:
    return FakeMemoryProxy()


@pytest.fixture
def session(proxy: FakeMemoryProxy) -> FakeSession:
    return FakeSession(proxy)


@pytest.fixture
def sink() -> MemoryReportSink:
    return MemoryReportSink()


@pytest.fixture
def make_reporter(session: FakeSession, sink: MemoryReportSink):
    def _make(joints: Sequence[str], temperature_error_level: float = 70.0) -> JointHealthReporter:
        return JointHealthReporter(MemorySource(session), sink, joints, temperature_error_level)

    return _make
