"""Access to the robot memory service that exposes joint sensor values."""

from __future__ import annotations

import logging
from typing import Iterable, List, Sequence, Tuple

from joint_diagnostics.errors import DataSourceError

logger = logging.getLogger(__name__)

SENSOR_KEY_TEMPLATES = (
    "Device/SubDeviceList/{joint}/Temperature/Sensor/Value",
    "Device/SubDeviceList/{joint}/Hardness/Actuator/Value",
    "Device/SubDeviceList/{joint}/ElectricCurrent/Sensor/Value",
)

VALUES_PER_JOINT = len(SENSOR_KEY_TEMPLATES)


def build_joint_keys(joints: Iterable[str]) -> Tuple[str, ...]:
    """Return temperature, stiffness and current keys for each joint, grouped in joint order."""
    return tuple(template.format(joint=joint) for joint in joints for template in SENSOR_KEY_TEMPLATES)


def open_session(url: str):
    """Open a NAOqi session on ``url``."""
    try:
        import qi  # type: ignore
    except ModuleNotFoundError as exc:
        raise DataSourceError("qi is required to connect to the robot") from exc

    session = qi.Session()
    try:
        session.connect(url)
    except RuntimeError as exc:
        raise DataSourceError(f"Unable to connect to NAOqi at {url}: {exc}") from exc
    return session


class MemorySource:
    """
    Batched key/value reads from the robot memory service.

    The service is resolved through the session on ``connect()``; until that
    succeeds every fetch fails.
    """

    def __init__(self, session, service_name: str = "ALMemory") -> None:
        self._session = session
        self._service_name = service_name
        self._proxy = None

    @property
    def connected(self) -> bool:
        return self._proxy is not None

    @property
    def service_name(self) -> str:
        return self._service_name

    def connect(self) -> None:
        """Resolve the memory service from the session."""
        try:
            self._proxy = self._session.service(self._service_name)
        except Exception as exc:
            self._proxy = None
            raise DataSourceError(f"Failed to connect to {self._service_name}: {exc}") from exc
        logger.info("connected to %s", self._service_name)

    def fetch_values(self, keys: Sequence[str]) -> List[float]:
        """Read all ``keys`` in one call and return their values as floats, in key order."""
        if self._proxy is None:
            raise DataSourceError(f"{self._service_name} is not connected")

        try:
            raw = self._proxy.getListData(list(keys))
        except Exception as exc:
            raise DataSourceError(f"getListData failed: {exc}") from exc

        try:
            return [float(value) for value in raw]
        except (TypeError, ValueError) as exc:
            raise DataSourceError(f"Non-numeric sensor value in getListData result: {exc}") from exc
