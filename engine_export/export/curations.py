"""
Curation export.

Curations are kept only when they promote or hide at least one document;
the internal id is dropped so the file can be replayed into another engine.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from engine_export.client import EngineAPIClient
from engine_export.config import ExportConfig
from engine_export.exceptions import MalformedResponseError
from engine_export.pagination import Paginator
from engine_export.progress import ProgressReporter
from engine_export.storage import write_json

logger = logging.getLogger(__name__)

CURATIONS_FILE = "curations.json"


def has_overrides(curation: Dict[str, Any]) -> bool:
    """True if the curation promotes or hides anything."""
    return bool(curation.get("promoted")) or bool(curation.get("hidden"))


def clean_curation(curation: Dict[str, Any]) -> Dict[str, Any]:
    """Copy of the curation without its id. Other fields pass through."""
    cleaned = dict(curation)
    cleaned.pop("id", None)
    return cleaned


def filter_curations(results: List[Any]) -> List[Dict[str, Any]]:
    """
    Strip ids and drop curations with nothing promoted or hidden.
    Emptiness is judged on the fetched identifier lists.
    """
    curations = []
    for result in results:
        if not isinstance(result, dict):
            raise MalformedResponseError(EngineAPIClient.CURATIONS, "curation is not an object")
        if not all(isinstance(result.get(name), list) for name in ("promoted", "hidden")):
            raise MalformedResponseError(EngineAPIClient.CURATIONS, "curation without promoted/hidden")
        curation = clean_curation(result)
        if has_overrides(curation):
            curations.append(curation)
    return curations


class CurationExporter:
    """Exports curations with promoted or hidden documents to a JSON file."""

    def __init__(
        self,
        config: ExportConfig,
        client: EngineAPIClient,
        progress: Optional[ProgressReporter] = None,
    ):
        self.config = config
        self.client = client
        self.paginator = Paginator(client, progress)

    @property
    def output_file(self) -> Path:
        return self.config.output_path(CURATIONS_FILE)

    def fetch(self) -> List[Dict[str, Any]]:
        results = self.paginator.paginate(EngineAPIClient.CURATIONS, "Getting curations")
        curations = filter_curations(results)
        dropped = len(results) - len(curations)
        if dropped:
            logger.info(f"Skipped {dropped} curation(s) with no promoted or hidden results")
        return curations

    def export(self) -> List[Dict[str, Any]]:
        logger.info("Getting curations")
        curations = self.fetch()
        write_json(self.output_file, curations)
        logger.info(f"Exported {len(curations)} curation(s)")
        return curations


def export_curations(
    config: ExportConfig,
    client: EngineAPIClient,
    progress: Optional[ProgressReporter] = None,
) -> List[Dict[str, Any]]:
    """Fetch curations and write the ones with overrides to curations.json."""
    return CurationExporter(config, client, progress).export()
