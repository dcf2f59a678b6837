"""
Centralized application settings.

Defaults come from environment variables (``DIR2CONTEXT_*``) or an optional
TOML file; command line flags override both.
"""
from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, List, Optional

try:  # Python 3.11+
    import tomllib  # type: ignore[attr-defined]
except ModuleNotFoundError:  # pragma: no cover - fallback for older interpreters
    import tomli as tomllib  # type: ignore[attr-defined]

from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """Project-wide settings loaded from env or .env files."""

    model_config = SettingsConfigDict(
        env_prefix="DIR2CONTEXT_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    output_prefix: str = "dir2context"
    output_dir: Path = Path(".")
    chunk_size: Optional[int] = None
    semantic_chunks: bool = False
    ignore_hidden: bool = False
    allowed_extensions: Optional[List[str]] = None
    exclude_dirs: List[str] = []
    exclude_files: List[str] = []
    log_level: str = "INFO"
    log_filename: str = "dir2context.log"


_CONFIG_ENV_VAR = "DIR2CONTEXT_CONFIG_PATH"
_DEFAULT_CONFIG_FILE = Path("dir2context_settings.toml")


def _load_toml_config(path: Optional[Path] = None) -> Dict[str, Any]:
    """Load configuration from the primary TOML file on disk."""
    candidates: List[Path] = []
    if path is not None:
        candidates.append(path)
    config_override = os.getenv(_CONFIG_ENV_VAR)
    if config_override:
        candidates.append(Path(config_override))
    candidates.append(_DEFAULT_CONFIG_FILE)

    for candidate in candidates:
        if candidate.is_file():
            with candidate.open("rb") as handle:
                return tomllib.load(handle)
    return {}


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and value.strip() == "":
        return None
    return value


def _as_list(value: Any) -> List[str]:
    if isinstance(value, str):
        return [item.strip() for item in value.split(",") if item.strip()]
    return [str(item).strip() for item in value if str(item).strip()]


def _flatten_config(raw: Dict[str, Any]) -> Dict[str, Any]:
    """Translate grouped TOML sections into AppSettings keyword arguments."""
    data: Dict[str, Any] = {}

    output = raw.get("output", {})
    if "prefix" in output:
        data["output_prefix"] = output["prefix"]
    if "directory" in output:
        data["output_dir"] = output["directory"]

    scan = raw.get("scan", {})
    if "extensions" in scan:
        extensions = _blank_to_none(scan["extensions"])
        data["allowed_extensions"] = _as_list(extensions) if extensions else None
    if "exclude_dirs" in scan:
        data["exclude_dirs"] = _as_list(scan["exclude_dirs"])
    if "exclude_files" in scan:
        data["exclude_files"] = _as_list(scan["exclude_files"])
    if "ignore_hidden" in scan:
        data["ignore_hidden"] = bool(scan["ignore_hidden"])

    chunking = raw.get("chunking", {})
    if "size" in chunking:
        size = _blank_to_none(chunking["size"])
        data["chunk_size"] = int(size) if size is not None else None
    if "semantic" in chunking:
        data["semantic_chunks"] = bool(chunking["semantic"])

    logging_section = raw.get("logging", {})
    if "level" in logging_section:
        data["log_level"] = str(logging_section["level"]).upper()
    if "filename" in logging_section:
        data["log_filename"] = logging_section["filename"]

    return data


def load_settings(path: Optional[Path] = None) -> AppSettings:
    raw = _load_toml_config(path)
    flattened = _flatten_config(raw)
    return AppSettings(**flattened)


settings = load_settings()
