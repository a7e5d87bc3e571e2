"""Serialization strategy for joint health reports."""

from __future__ import annotations

import json

from joint_diagnostics.health import Report


class SchemaManager:
    """
    Handles the wire format of published reports.

    Reports go out as UTF-8 JSON; the non-ASCII degree sign in the hot joints
    text is kept as is.
    """

    def encode(self, report: Report) -> bytes:
        """Serialize a report into bytes."""
        return json.dumps(report.to_dict(), ensure_ascii=False).encode("utf-8")
