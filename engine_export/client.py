"""
Search Engine Management API Client

Provides authenticated read access to the engine endpoints used by the
export:
- synonyms (paged)
- curations (paged)
- documents (batch lookup by id)
- search_settings

Usage:
    from engine_export.client import EngineAPIClient
    from engine_export.config import load_config

    client = EngineAPIClient(load_config())
    settings = client.get("search_settings")
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Optional

import requests

from engine_export.config import ExportConfig
from engine_export.exceptions import ApiError, MalformedResponseError, TransportError

logger = logging.getLogger(__name__)


class EngineAPIClient:
    """
    Client for the engine management API.

    Every request is a GET carrying the bearer token and a JSON content type.
    Page selectors and id lists travel as a JSON request body, which is how
    the API expects them even on GET.
    """

    # Endpoints
    SYNONYMS = "synonyms"
    CURATIONS = "curations"
    DOCUMENTS = "documents"
    SEARCH_SETTINGS = "search_settings"

    def __init__(self, config: ExportConfig, session: Optional[requests.Session] = None):
        self.config = config
        self.session = session or requests.Session()

    @property
    def headers(self) -> Dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.config.api_key}",
        }

    def build_url(self, endpoint: str) -> str:
        """Build the full API URL for an endpoint."""
        return f"{self.config.engine_url}/{endpoint.lstrip('/')}"

    def get(self, endpoint: str, body: Optional[Any] = None) -> Any:
        """
        Make a GET request and return the decoded JSON.

        Args:
            endpoint: Path under the engine, e.g. "synonyms"
            body: Optional JSON-serializable request body

        Raises:
            TransportError: the request could not complete
            ApiError: the response status was not 2xx
            MalformedResponseError: the response body was not JSON
        """
        url = self.build_url(endpoint)
        data = json.dumps(body) if body is not None else None

        logger.info(f"API Request: GET {endpoint}")
        logger.debug(f"URL: {url} body: {data}")
        try:
            response = self.session.get(
                url,
                headers=self.headers,
                data=data,
                timeout=self.config.timeout,
            )
        except requests.exceptions.RequestException as e:
            logger.error(f"Request failed: {e}")
            raise TransportError(endpoint, str(e)) from e

        if not response.ok:
            if response.status_code == 401:
                logger.error("Unauthorized: check PRIVATE_API_KEY")
            elif response.status_code == 403:
                logger.error("API key invalid or access denied")
            elif response.status_code == 404:
                logger.error(f"Not found: is ENGINE_NAME '{self.config.engine_name}' correct?")
            raise ApiError(endpoint, response.status_code, response.text)

        try:
            return response.json()
        except ValueError as e:
            raise MalformedResponseError(endpoint, f"body is not JSON ({e})") from e

    def close(self) -> None:
        self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

    # =========================================================================
    # ENDPOINTS
    # =========================================================================

    def get_documents(self, ids: list) -> list:
        """
        Look up documents by id.

        Returns:
            Documents in request order. The API returns null in place of
            ids that no longer exist.
        """
        documents = self.get(self.DOCUMENTS, list(ids))
        if not isinstance(documents, list):
            raise MalformedResponseError(self.DOCUMENTS, "expected a JSON array of documents")
        return documents

    def get_search_settings(self) -> Dict[str, Any]:
        settings = self.get(self.SEARCH_SETTINGS)
        if not isinstance(settings, dict):
            raise MalformedResponseError(self.SEARCH_SETTINGS, "expected a JSON object")
        return settings
