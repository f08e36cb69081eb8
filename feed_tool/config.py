"""
Configuration management using YAML files and dataclasses.

This module defines all configuration dataclasses and provides loading
from YAML files with defaults. Configuration sections:
- ClientConfig: Feed server HTTP settings
- EmbedConfig: Embedded file expansion settings
- RenderConfig: XML output settings
- LoggingConfig: Logging behavior
- AppConfig: Root configuration container
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import yaml

from . import __version__


@dataclass
class ClientConfig:
    """Configuration for feed server requests.

    Attributes:
        timeout_seconds: HTTP request timeout
        retries: Number of retry attempts for failed GET requests
        trust_env: Whether to respect system proxy settings
        user_agent: HTTP User-Agent header string
    """

    timeout_seconds: float = 30.0
    retries: int = 2
    trust_env: bool = True
    user_agent: str = f"feed-tool/{__version__}"


@dataclass
class EmbedConfig:
    """Configuration for embedded file expansion.

    Attributes:
        encoding: Text encoding of entry documents and embedded files
        max_depth: Maximum nesting of embedded files (None disables the limit)
    """

    encoding: str = "utf-8"
    max_depth: int | None = 32


@dataclass
class RenderConfig:
    """Configuration for XML output.

    Attributes:
        indent: Spaces added per nesting level
    """

    indent: int = 2


@dataclass
class LoggingConfig:
    """Configuration for logging behavior.

    Attributes:
        level: Logging level ("DEBUG", "INFO", "WARNING", "ERROR")
        console: Whether to log to the console (stderr)
        file: Whether to log to file
        format: Log file format ("jsonl" or "plain")
        filename: Name of the log file
        directory: Directory for the log file (None for the working directory)
    """

    level: str = "WARNING"
    console: bool = True
    file: bool = False
    format: str = "jsonl"
    filename: str = "feed-tool.jsonl"
    directory: str | None = None


@dataclass
class AppConfig:
    """Root configuration container aggregating all config sections."""

    client: ClientConfig = field(default_factory=ClientConfig)
    embed: EmbedConfig = field(default_factory=EmbedConfig)
    render: RenderConfig = field(default_factory=RenderConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def load_config(path: str | None) -> AppConfig:
    """Load configuration from a YAML file with defaults."""
    if not path:
        return AppConfig()

    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    return _merge_config(AppConfig(), raw)


def _merge_config(base: AppConfig, raw: dict[str, Any]) -> AppConfig:
    """Merge raw YAML config into base AppConfig."""
    data = _asdict(base)
    for key, value in raw.items():
        if key not in data:
            continue
        if isinstance(value, dict) and isinstance(data[key], dict):
            data[key].update(value)
        else:
            data[key] = value
    return _fromdict(data)


def _asdict(cfg: AppConfig) -> dict[str, Any]:
    """Convert AppConfig to nested dictionary."""
    return {
        "client": {
            "timeout_seconds": cfg.client.timeout_seconds,
            "retries": cfg.client.retries,
            "trust_env": cfg.client.trust_env,
            "user_agent": cfg.client.user_agent,
        },
        "embed": {
            "encoding": cfg.embed.encoding,
            "max_depth": cfg.embed.max_depth,
        },
        "render": {
            "indent": cfg.render.indent,
        },
        "logging": {
            "level": cfg.logging.level,
            "console": cfg.logging.console,
            "file": cfg.logging.file,
            "format": cfg.logging.format,
            "filename": cfg.logging.filename,
            "directory": cfg.logging.directory,
        },
    }


def _fromdict(data: dict[str, Any]) -> AppConfig:
    """Reconstruct AppConfig from nested dictionary."""
    return AppConfig(
        client=ClientConfig(**data["client"]),
        embed=EmbedConfig(**data["embed"]),
        render=RenderConfig(**data["render"]),
        logging=LoggingConfig(**data["logging"]),
    )
