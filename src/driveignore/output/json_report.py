"""JSON reporter for scripts and CI pipelines."""

from __future__ import annotations

import json
from typing import Any, Dict

from driveignore.diff.models import DiffReport


def to_dict(report: DiffReport) -> Dict[str, Any]:
    """Convert DiffReport to a JSON-serialisable dict."""
    return {
        "version": "1.0",
        "source": report.source,
        "target": report.target,
        "ignore_source": report.ignore_source.value,
        "missing": list(report.missing),
        "stale": list(report.stale),
        "total_missing": len(report.missing),
        "total_stale": len(report.stale),
        "clean": report.clean,
        "duration_ms": report.duration_ms,
    }


def render(report: DiffReport) -> str:
    """Return formatted JSON string."""
    return json.dumps(to_dict(report), indent=2)
