"""Joint diagnostics entrypoint."""

from __future__ import annotations

import logging
import os
import signal
import threading

from joint_diagnostics.app_logging import configure_logging
from joint_diagnostics.config import ConfigRepository
from joint_diagnostics.errors import ConfigError
from joint_diagnostics.health_server import HealthServer
from joint_diagnostics.memory import MemorySource, open_session
from joint_diagnostics.reporter import JointHealthReporter
from joint_diagnostics.runtime import DiagnosticsRuntime
from joint_diagnostics.sink import KafkaReportSink

logger = logging.getLogger(__name__)


def main() -> None:
    """Application entrypoint for the joint diagnostics reporter."""
    configure_logging(os.getenv("LOG_LEVEL", "INFO"))

    config_path = os.getenv("DIAGNOSTICS_CONFIG")
    health_host = os.getenv("HEALTH_HOST")
    health_port = os.getenv("HEALTH_PORT")

    if not config_path:
        raise ConfigError("DIAGNOSTICS_CONFIG is required")

    config = ConfigRepository(config_path).load()
    logger.info("config loaded: %d joints, error level %.1f", len(config.joints), config.temperature_error_level)

    session = open_session(config.naoqi_url)
    sink = KafkaReportSink(config.output.kafka_bootstrap, config.output.topic)
    reporter = JointHealthReporter(
        MemorySource(session, config.memory_service),
        sink,
        config.joints,
        temperature_error_level=config.temperature_error_level,
    )
    runtime = DiagnosticsRuntime(reporter, rate_hz=config.rate_hz)

    server = None
    if health_host and health_port:
        try:
            port = int(health_port)
        except ValueError as exc:
            raise ConfigError(f"Invalid HEALTH_PORT: {health_port}") from exc
        server = HealthServer(health_host, port, runtime.health_snapshot)
        threading.Thread(target=server.serve_forever, daemon=True).start()
        logger.info("health endpoint on %s:%d", health_host, port)

    stop = threading.Event()
    signal.signal(signal.SIGTERM, lambda *_: stop.set())
    try:
        runtime.run(stop)
    except KeyboardInterrupt:
        stop.set()
    finally:
        if server is not None:
            server.shutdown()
        sink.close()


if __name__ == "__main__":
    main()
