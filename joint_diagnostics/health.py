"""Severity levels and status records for joint health reports."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from functools import total_ordering
from typing import Dict, List, Tuple, Union

AttributeValue = Union[float, str]

AGGREGATE_STATUS_NAME = "joints:Status"
JOINT_STATUS_PREFIX = "joints:"


@total_ordering
class SeverityLevel(Enum):
    """Diagnostic severity, ordered OK < WARN < ERROR."""

    OK = 0
    WARN = 1
    ERROR = 2

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, SeverityLevel):
            return NotImplemented
        return self.value < other.value


def message_for_level(level: SeverityLevel) -> str:
    """Return the aggregate message for a severity level."""
    if level is SeverityLevel.OK:
        return "OK"
    if level is SeverityLevel.WARN:
        return "WARN"
    return "ERROR"


def classify_temperature(
    joint: str,
    temperature: float,
    warn_level: float,
    error_level: float,
) -> Tuple[SeverityLevel, str]:
    """
    Classify a joint temperature.

    Thresholds are evaluated in order, first match wins:
    below ``warn_level`` is OK, below ``error_level`` is WARN, anything else is ERROR.
    """
    if temperature < warn_level:
        return SeverityLevel.OK, "OK"
    if temperature < error_level:
        return SeverityLevel.WARN, "Hot"
    return SeverityLevel.ERROR, f"HIGH JOINT TEMPERATURE : {joint}"


@dataclass(frozen=True)
class JointReading:
    """Sensor triple for one joint, fetched fresh on every poll."""

    joint: str
    temperature: float
    stiffness: float
    current: float


@dataclass(frozen=True)
class Status:
    """A single diagnostic status entry."""

    name: str
    hardware_id: str
    level: SeverityLevel
    message: str
    values: Tuple[Tuple[str, AttributeValue], ...] = ()

    def value(self, key: str) -> AttributeValue:
        """Return a named attribute, raising KeyError when absent."""
        for name, value in self.values:
            if name == key:
                return value
        raise KeyError(key)

    def to_dict(self) -> Dict[str, object]:
        """Return the status as a plain dict with the level as its wire value."""
        return {
            "name": self.name,
            "hardware_id": self.hardware_id,
            "level": self.level.value,
            "message": self.message,
            "values": [{"key": key, "value": value} for key, value in self.values],
        }


@dataclass(frozen=True)
class JointStatus(Status):
    """Per-joint status with temperature, stiffness and current attributes."""

    @classmethod
    def from_reading(cls, reading: JointReading, level: SeverityLevel, message: str) -> "JointStatus":
        """Build the status for one joint reading."""
        return cls(
            name=f"{JOINT_STATUS_PREFIX}{reading.joint}",
            hardware_id=reading.joint,
            level=level,
            message=message,
            values=(
                ("Temperature", reading.temperature),
                ("Stiffness", reading.stiffness),
                ("ElectricCurrent", reading.current),
            ),
        )


@dataclass(frozen=True)
class AggregateStatus(Status):
    """Summary of all joints for one poll."""


@dataclass
class StickyStatus:
    """
    Last known overall status, kept across polls.

    The reporter resets it at the start of every cycle and then feeds each
    joint status through ``observe``; only a strictly higher level replaces
    the held message.
    """

    name: str = AGGREGATE_STATUS_NAME
    hardware_id: str = "robot"
    level: SeverityLevel = SeverityLevel.OK
    message: str = "OK"

    def reset(self) -> None:
        """Return to OK before a new cycle."""
        self.level = SeverityLevel.OK
        self.message = "OK"

    def observe(self, level: SeverityLevel, message: str) -> None:
        """Take ``level`` and ``message`` when the level is strictly higher than the held one."""
        if level > self.level:
            self.level = level
            self.message = message


@dataclass
class JointExtrema:
    """Running summary statistics over the joints of one poll."""

    max_temperature: float = 0.0
    max_stiffness: float = 0.0
    min_stiffness: float = 1.0
    min_stiffness_without_hands: float = 1.0
    max_current: float = 0.0
    min_current: float = 10.0
    max_level: SeverityLevel = SeverityLevel.OK
    hot_joints: List[str] = field(default_factory=list)

    def add(self, reading: JointReading, level: SeverityLevel) -> None:
        """Fold one classified reading into the running summary."""
        self.max_level = max(self.max_level, level)
        self.max_temperature = max(self.max_temperature, reading.temperature)
        self.max_stiffness = max(self.max_stiffness, reading.stiffness)
        self.min_stiffness = min(self.min_stiffness, reading.stiffness)
        if "Hand" not in reading.joint:
            self.min_stiffness_without_hands = min(self.min_stiffness_without_hands, reading.stiffness)
        self.max_current = max(self.max_current, reading.current)
        self.min_current = min(self.min_current, reading.current)
        if level >= SeverityLevel.WARN:
            self.hot_joints.append(f"\n{reading.joint}: {reading.temperature:g}°C")

    def to_status(self) -> AggregateStatus:
        """Build the aggregate status from the running summary."""
        return AggregateStatus(
            name=AGGREGATE_STATUS_NAME,
            hardware_id="joints",
            level=self.max_level,
            message=message_for_level(self.max_level),
            values=(
                ("Highest Temperature", self.max_temperature),
                ("Highest Stiffness", self.max_stiffness),
                ("Lowest Stiffness", self.min_stiffness),
                ("Lowest Stiffness without Hands", self.min_stiffness_without_hands),
                ("Highest Electric Current", self.max_current),
                ("Lowest Electric current", self.min_current),
                ("Hot Joints", "".join(self.hot_joints)),
            ),
        )


@dataclass(frozen=True)
class Report:
    """Per-joint statuses followed by the aggregate, stamped at publish time."""

    stamp: datetime
    status: Tuple[Status, ...]

    @property
    def joints(self) -> Tuple[Status, ...]:
        return self.status[:-1]

    @property
    def aggregate(self) -> Status:
        return self.status[-1]

    def to_dict(self) -> Dict[str, object]:
        """Return the report as a plain dict ready for JSON encoding."""
        return {
            "stamp": self.stamp.isoformat(),
            "status": [status.to_dict() for status in self.status],
        }
