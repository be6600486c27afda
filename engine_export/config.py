"""
Configuration loader for the engine export.

Supports loading from:
1. Process environment variables
2. A .env file in the working directory (or a path passed explicitly)

Variables already present in the environment always win over the file.

Required:
- HOST_IDENTIFIER: account host, e.g. host-2376rb
- ENGINE_NAME: engine to export
- PRIVATE_API_KEY: private key used as the bearer token

Optional:
- URL_FIELD: document field holding the URL (default "url")
- API_BASE_URL: full engine base URL template, overrides the hosted default
- REQUEST_TIMEOUT: per-request timeout in seconds (default 30)

Usage:
    from engine_export.config import load_config

    config = load_config()
    print(config.engine_url)
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Mapping, Optional

from engine_export.exceptions import ConfigurationError

DEFAULT_ENV_FILE = Path(".env")
DEFAULT_URL_FIELD = "url"
DEFAULT_TIMEOUT = 30.0
DEFAULT_BASE_URL = "https://{host}.api.example.com/api/as/v1/engines/{engine}"

REQUIRED_VARS = ["HOST_IDENTIFIER", "ENGINE_NAME", "PRIVATE_API_KEY"]


@dataclass(frozen=True)
class ExportConfig:
    """Settings for a single export run."""
    host_identifier: str
    engine_name: str
    api_key: str = field(repr=False)
    url_field: str = DEFAULT_URL_FIELD
    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT
    output_dir: Path = Path(".")

    @property
    def engine_url(self) -> str:
        """Engine base URL with host and engine filled in, no trailing slash."""
        return self.base_url.format(
            host=self.host_identifier,
            engine=self.engine_name,
        ).rstrip("/")

    def output_path(self, filename: str) -> Path:
        return self.output_dir / filename


def load_env_file(path: Path = DEFAULT_ENV_FILE, environ: Optional[Dict[str, str]] = None) -> int:
    """
    Load KEY=VALUE lines from an env file without overriding existing values.

    Returns the number of variables that were newly set.
    """
    environ = os.environ if environ is None else environ
    if not path.exists():
        return 0

    loaded = 0
    with open(path, "r", encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if line.startswith("export "):
                line = line[len("export "):].lstrip()
            if not line or line.startswith("#") or "=" not in line:
                continue
            key, _, value = line.partition("=")
            key = key.strip()
            value = value.strip()
            # Remove quotes if present
            if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
                value = value[1:-1]
            if key and key not in environ:
                environ[key] = value
                loaded += 1
    return loaded


def _is_placeholder(value: Optional[str]) -> bool:
    """Check if a value is a template placeholder that should be ignored."""
    if not value:
        return True
    value_lower = value.lower()
    return (
        value_lower.startswith("your_") or
        value_lower.startswith("your-") or
        value_lower.startswith("private-xxxx") or
        value_lower in ("changeme", "placeholder", "<private_api_key>")
    )


def _get(environ: Mapping[str, str], name: str) -> Optional[str]:
    value = environ.get(name)
    if value is None:
        return None
    value = value.strip()
    if _is_placeholder(value):
        return None
    return value


def load_config(
    environ: Optional[Mapping[str, str]] = None,
    output_dir: Optional[Path] = None,
) -> ExportConfig:
    """
    Build an ExportConfig from the environment.

    Raises:
        ConfigurationError: if a required variable is missing or an optional
            one has an invalid value. Raised before any request is made.
    """
    environ = os.environ if environ is None else environ

    missing = [name for name in REQUIRED_VARS if not _get(environ, name)]
    if missing:
        raise ConfigurationError(
            "Missing required environment variable(s): " + ", ".join(missing)
        )

    raw_timeout = _get(environ, "REQUEST_TIMEOUT")
    timeout = DEFAULT_TIMEOUT
    if raw_timeout:
        try:
            timeout = float(raw_timeout)
        except ValueError:
            raise ConfigurationError(f"REQUEST_TIMEOUT must be a number, got {raw_timeout!r}")
        if timeout <= 0:
            raise ConfigurationError("REQUEST_TIMEOUT must be positive")

    base_url = _get(environ, "API_BASE_URL") or DEFAULT_BASE_URL

    return ExportConfig(
        host_identifier=_get(environ, "HOST_IDENTIFIER"),
        engine_name=_get(environ, "ENGINE_NAME"),
        api_key=_get(environ, "PRIVATE_API_KEY"),
        url_field=_get(environ, "URL_FIELD") or DEFAULT_URL_FIELD,
        base_url=base_url,
        timeout=timeout,
        output_dir=output_dir if output_dir is not None else Path("."),
    )


def mask_key(key: str) -> str:
    return f"{'*' * 8}...{key[-4:]}" if len(key) > 4 else "****"


def describe_config(config: ExportConfig) -> List[str]:
    """
    Lines describing the configuration, safe to print.
    The API key is masked.
    """
    return [
        f"Host identifier: {config.host_identifier}",
        f"Engine: {config.engine_name}",
        f"API key: {mask_key(config.api_key)}",
        f"URL field: {config.url_field}",
        f"Engine URL: {config.engine_url}",
        f"Timeout: {config.timeout:g}s",
        f"Output dir: {config.output_dir}",
    ]
