"""Custom exceptions for the joint diagnostics reporter."""


class DiagnosticsError(Exception):
    """Base class for diagnostics failures."""


class ConfigError(DiagnosticsError):
    """Raised when config is invalid or missing."""


class DataSourceError(DiagnosticsError):
    """Raised when the robot memory service cannot be reached or read."""


class IncompleteSensorDataError(DataSourceError):
    """Raised when a fetch returns a value count that does not match the joint keys."""

    def __init__(self, expected: int, received: int) -> None:
        super().__init__(f"incomplete sensor data: expected {expected} values, got {received}")
        self.expected = expected
        self.received = received


class PublishError(DiagnosticsError):
    """Raised when a report cannot be handed to the sink."""
