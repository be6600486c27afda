"""
Exception types for the engine export run.

Every failure raised by the client, the paginator, the exporters and the
file helpers derives from ExportError so the orchestrator can stop the run
on any of them while still reporting the specific category.
"""

from __future__ import annotations


class ExportError(Exception):
    """Base exception for engine export failures."""


class ConfigurationError(ExportError):
    """Raised when required settings are missing or invalid."""


class TransportError(ExportError):
    """Raised when a request cannot complete (DNS, connection, timeout)."""

    def __init__(self, endpoint: str, message: str):
        self.endpoint = endpoint
        super().__init__(f"GET {endpoint} failed: {message}")


class ApiError(ExportError):
    """Raised when the API answers with a non-success status."""

    def __init__(self, endpoint: str, status_code: int, body: str = ""):
        self.endpoint = endpoint
        self.status_code = status_code
        self.body = body
        detail = f": {body[:500]}" if body else ""
        super().__init__(f"GET {endpoint} returned HTTP {status_code}{detail}")


class MalformedResponseError(ExportError):
    """Raised when a response lacks a field the export depends on."""

    def __init__(self, endpoint: str, message: str):
        self.endpoint = endpoint
        super().__init__(f"Unexpected response from {endpoint}: {message}")


class FileIOError(ExportError):
    """Raised when an output file cannot be read or written."""

    def __init__(self, path, message: str):
        self.path = path
        super().__init__(f"{path}: {message}")
