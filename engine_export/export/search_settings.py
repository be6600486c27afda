"""Search field settings export."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict

from engine_export.client import EngineAPIClient
from engine_export.config import ExportConfig
from engine_export.exceptions import MalformedResponseError
from engine_export.storage import write_json

logger = logging.getLogger(__name__)

SEARCH_SETTINGS_FILE = "search_settings.json"


class SearchSettingsExporter:
    """Writes the search_fields part of the engine search settings."""

    def __init__(self, config: ExportConfig, client: EngineAPIClient):
        self.config = config
        self.client = client

    @property
    def output_file(self) -> Path:
        return self.config.output_path(SEARCH_SETTINGS_FILE)

    def fetch(self) -> Dict[str, Any]:
        settings = self.client.get_search_settings()
        if "search_fields" not in settings:
            raise MalformedResponseError(EngineAPIClient.SEARCH_SETTINGS, "missing search_fields")
        return settings["search_fields"]

    def export(self) -> Dict[str, Any]:
        logger.info("Getting search settings")
        search_fields = self.fetch()
        write_json(self.output_file, search_fields)
        return search_fields


def export_search_settings(config: ExportConfig, client: EngineAPIClient) -> Dict[str, Any]:
    """Fetch search settings and write search_fields to search_settings.json."""
    return SearchSettingsExporter(config, client).export()
