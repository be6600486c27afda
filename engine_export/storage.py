"""JSON file helpers for export outputs."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from engine_export.exceptions import FileIOError

logger = logging.getLogger(__name__)


def dumps(data: Any) -> str:
    """Pretty-print with 2-space indentation, keys in response order."""
    return json.dumps(data, indent=2, ensure_ascii=False)


def write_json(path: Path, data: Any) -> int:
    """
    Write data to path as pretty-printed UTF-8 JSON, replacing the file.

    Returns:
        Number of bytes written
    """
    json_bytes = dumps(data).encode("utf-8")
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(json_bytes)
    except OSError as e:
        raise FileIOError(path, f"cannot write ({e.strerror or e})") from e

    logger.info(f"Wrote {path} ({len(json_bytes)} bytes)")
    return len(json_bytes)


def read_json(path: Path) -> Any:
    try:
        with path.open("r", encoding="utf-8") as handle:
            return json.load(handle)
    except OSError as e:
        raise FileIOError(path, f"cannot read ({e.strerror or e})") from e
    except json.JSONDecodeError as e:
        raise FileIOError(path, f"invalid JSON ({e})") from e
