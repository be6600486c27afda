"""
Synonym set export.

Writes every synonym group of the engine to synonyms.json as an array of
string arrays. Synonym set ids are not kept.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

from engine_export.client import EngineAPIClient
from engine_export.config import ExportConfig
from engine_export.exceptions import MalformedResponseError
from engine_export.pagination import Paginator
from engine_export.progress import ProgressReporter
from engine_export.storage import write_json

logger = logging.getLogger(__name__)

SYNONYMS_FILE = "synonyms.json"


class SynonymExporter:
    """Exports synonym sets to a JSON file."""

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
        return self.config.output_path(SYNONYMS_FILE)

    def fetch(self) -> List[List[str]]:
        results = self.paginator.paginate(EngineAPIClient.SYNONYMS, "Getting synonyms")
        synonym_sets = []
        for result in results:
            if not isinstance(result, dict) or "synonyms" not in result:
                raise MalformedResponseError(EngineAPIClient.SYNONYMS, "result without synonyms field")
            synonym_sets.append(result["synonyms"])
        return synonym_sets

    def export(self) -> List[List[str]]:
        logger.info("Getting synonyms")
        synonym_sets = self.fetch()
        write_json(self.output_file, synonym_sets)
        logger.info(f"Exported {len(synonym_sets)} synonym set(s)")
        return synonym_sets


def export_synonyms(
    config: ExportConfig,
    client: EngineAPIClient,
    progress: Optional[ProgressReporter] = None,
) -> List[List[str]]:
    """Fetch all synonym sets and write them to synonyms.json."""
    return SynonymExporter(config, client, progress).export()
