"""
Curation URL resolution.

Replaces the document ids in each curation's promoted and hidden lists
with the URL stored on the document, so curations can be matched against
documents in another engine. Ids are looked up in one documents request per
list; the API answers positionally, with null for ids that no longer exist.

Runs against curations.json as written by the curation export, or against
an in-memory list via CurationURLResolver.resolve().
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from engine_export.client import EngineAPIClient
from engine_export.config import ExportConfig
from engine_export.exceptions import MalformedResponseError
from engine_export.export.curations import CURATIONS_FILE
from engine_export.progress import NullProgress, ProgressReporter
from engine_export.storage import read_json, write_json

logger = logging.getLogger(__name__)

OVERRIDE_FIELDS = ("promoted", "hidden")


class CurationURLResolver:
    """Rewrites curation id lists as URL lists."""

    def __init__(
        self,
        config: ExportConfig,
        client: EngineAPIClient,
        progress: Optional[ProgressReporter] = None,
    ):
        self.config = config
        self.client = client
        self.progress = progress or NullProgress()
        self.missing_documents = 0

    @property
    def curations_file(self) -> Path:
        return self.config.output_path(CURATIONS_FILE)

    def lookup_urls(self, ids: List[str]) -> List[str]:
        """
        Resolve ids to URLs, keeping the order the API returns.

        Documents that no longer exist come back as null and are dropped.
        A response whose length differs from the request cannot be aligned
        and is rejected.
        """
        documents = self.client.get_documents(ids)
        if len(documents) != len(ids):
            raise MalformedResponseError(
                EngineAPIClient.DOCUMENTS,
                f"requested {len(ids)} document(s), received {len(documents)}",
            )

        urls = []
        for doc_id, document in zip(ids, documents):
            if document is None:
                logger.warning(f"Document {doc_id} no longer exists, dropping it from the curation")
                self.missing_documents += 1
                continue
            if not isinstance(document, dict) or self.config.url_field not in document:
                raise MalformedResponseError(
                    EngineAPIClient.DOCUMENTS,
                    f"document {doc_id} has no '{self.config.url_field}' field",
                )
            urls.append(document[self.config.url_field])
        return urls

    def resolve_curation(self, curation: Dict[str, Any]) -> Dict[str, Any]:
        """Copy of the curation with promoted/hidden ids replaced by URLs. Empty lists are left alone."""
        resolved = dict(curation)
        for name in OVERRIDE_FIELDS:
            ids = curation.get(name) or []
            if ids:
                resolved[name] = self.lookup_urls(ids)
        return resolved

    def resolve(self, curations: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        """
        Resolve URLs for every curation, reporting progress per curation.

        Returns new curation dicts; the input list is not modified, so a
        failed lookup never leaves it half resolved.
        """
        resolved = []
        self.progress.start("Getting URLs for each result in each curation", len(curations))
        try:
            for curation in curations:
                if not isinstance(curation, dict):
                    raise MalformedResponseError(CURATIONS_FILE, "curation is not an object")
                if any(curation.get(name) for name in OVERRIDE_FIELDS):
                    curation = self.resolve_curation(curation)
                resolved.append(curation)
                self.progress.advance()
        finally:
            self.progress.finish()
        return resolved

    def resolve_file(self, path: Optional[Path] = None) -> List[Dict[str, Any]]:
        """Read curations.json, resolve every curation, write the file back."""
        path = path or self.curations_file
        logger.info("Getting URLs for each result in each curation")

        curations = read_json(path)
        if not isinstance(curations, list):
            raise MalformedResponseError(str(path), "expected a JSON array of curations")

        curations = self.resolve(curations)
        write_json(path, curations)
        if self.missing_documents:
            logger.warning(f"{self.missing_documents} curated document(s) no longer exist")
        return curations


def resolve_curation_urls(
    config: ExportConfig,
    client: EngineAPIClient,
    progress: Optional[ProgressReporter] = None,
) -> List[Dict[str, Any]]:
    """Rewrite curations.json with URLs in place of document ids."""
    return CurationURLResolver(config, client, progress).resolve_file()
