"""
engine-export

Backs up the configuration of a hosted search engine (synonym sets,
curations with URLs in place of document ids, search field settings) to
local JSON files.
"""

from engine_export.config import ExportConfig, load_config
from engine_export.exceptions import (
    ExportError,
    ConfigurationError,
    TransportError,
    ApiError,
    MalformedResponseError,
    FileIOError,
)

__version__ = "1.0.0"

__all__ = [
    "ExportConfig",
    "load_config",
    "ExportError",
    "ConfigurationError",
    "TransportError",
    "ApiError",
    "MalformedResponseError",
    "FileIOError",
    "__version__",
]
