"""Joint diagnostics package."""

__all__ = [
    "JointHealthReporter",
    "DiagnosticsRuntime",
    "MemorySource",
    "KafkaReportSink",
    "MemoryReportSink",
    "ReportSink",
    "SchemaManager",
    "ConfigRepository",
    "ReporterConfig",
    "OutputConfig",
    "SeverityLevel",
    "JointReading",
    "JointStatus",
    "AggregateStatus",
    "StickyStatus",
    "Report",
    "DiagnosticsError",
    "ConfigError",
    "DataSourceError",
    "IncompleteSensorDataError",
    "PublishError",
]

from joint_diagnostics.reporter import JointHealthReporter
from joint_diagnostics.runtime import DiagnosticsRuntime
from joint_diagnostics.memory import MemorySource
from joint_diagnostics.sink import KafkaReportSink, MemoryReportSink, ReportSink
from joint_diagnostics.schema import SchemaManager
from joint_diagnostics.config import ConfigRepository, ReporterConfig, OutputConfig
from joint_diagnostics.health import (
    AggregateStatus,
    JointReading,
    JointStatus,
    Report,
    SeverityLevel,
    StickyStatus,
)
from joint_diagnostics.errors import (
    ConfigError,
    DataSourceError,
    DiagnosticsError,
    IncompleteSensorDataError,
    PublishError,
)
