"""Typed configuration loading and access.

The optional ``vulx.toml`` at the project root tunes ports, paths and the
external tool names. Every key has a default, so a project without the file
behaves exactly like one with an empty file.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_bool, get_int, get_str, get_table

__all__ = [
    "CONFIG_FILE_NAME",
    "DEFAULT_PORT",
    "Config",
    "ConfigError",
    "PathsConfig",
    "ServerConfig",
    "TemplatesConfig",
    "ToolsConfig",
    "load_config",
    "load_project_config",
]

CONFIG_FILE_NAME = "vulx.toml"

DEFAULT_PORT = 3000
DEFAULT_HOST = "localhost"
DEFAULT_MAX_ATTEMPTS = 100


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when config cannot be loaded or parsed."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class ServerConfig:
    """Dev server / static server port negotiation."""

    port: int = DEFAULT_PORT
    host: str = DEFAULT_HOST
    max_attempts: int = DEFAULT_MAX_ATTEMPTS


@dataclass(frozen=True, slots=True)
class PathsConfig:
    """Project-relative paths."""

    cache: str = ".cache"
    dist: str = "_dist"
    config_source: str = "vulmix.config.ts"


@dataclass(frozen=True, slots=True)
class ToolsConfig:
    """External programs.

    Attributes:
        runner: Program used to launch node tools (``tsc``, ``mix``, ``http-server``).
        package: Distribution name reinstalled by ``vulx upgrade``.
    """

    runner: str = "npx"
    package: str = "vulx"


@dataclass(frozen=True, slots=True)
class TemplatesConfig:
    """Template selection; ``dev`` picks the ``.dev`` variants."""

    dev: bool = False


@dataclass(frozen=True, slots=True)
class Config:
    """Main configuration container."""

    server: ServerConfig = field(default_factory=ServerConfig)
    paths: PathsConfig = field(default_factory=PathsConfig)
    tools: ToolsConfig = field(default_factory=ToolsConfig)
    templates: TemplatesConfig = field(default_factory=TemplatesConfig)

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> Config:
        """Create Config from a mapping (parsed TOML).

        Raises:
            ValueError: A value is present but out of range.
        """
        server: StrDict = get_table(data, "server") or {}
        paths: StrDict = get_table(data, "paths") or {}
        tools: StrDict = get_table(data, "tools") or {}
        templates: StrDict = get_table(data, "templates") or {}

        port = get_int(server, "port")
        if port is None:
            port = DEFAULT_PORT
        if not 1 <= port <= 65535:
            raise ValueError(f"server.port must be within 1..65535 (got {port})")

        max_attempts = get_int(server, "max_attempts")
        if max_attempts is None:
            max_attempts = DEFAULT_MAX_ATTEMPTS
        if max_attempts < 1:
            raise ValueError(f"server.max_attempts must be positive (got {max_attempts})")

        dev = get_bool(templates, "dev")

        return cls(
            server=ServerConfig(
                port=port,
                host=get_str(server, "host") or DEFAULT_HOST,
                max_attempts=max_attempts,
            ),
            paths=PathsConfig(
                cache=get_str(paths, "cache") or ".cache",
                dist=get_str(paths, "dist") or "_dist",
                config_source=get_str(paths, "config_source") or "vulmix.config.ts",
            ),
            tools=ToolsConfig(
                runner=get_str(tools, "runner") or "npx",
                package=get_str(tools, "package") or "vulx",
            ),
            templates=TemplatesConfig(dev=bool(dev)),
        )


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    import tomllib

    try:
        data_obj: object = tomllib.loads(path.read_bytes().decode("utf-8"))
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))

    data = as_str_dict(data_obj)
    if data is None:
        return Err(ConfigError("Config root must be a TOML table", path=path))
    return Ok(data)


def load_config(path: Path) -> Result[Config, ConfigError]:
    """Load and parse configuration from a TOML file."""
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result

    try:
        return Ok(Config.from_dict(result.value))
    except (KeyError, TypeError, ValueError) as e:
        return Err(ConfigError(f"Invalid config structure: {e}", path=path))


def load_project_config(root: Path) -> Result[Config, ConfigError]:
    """Load ``<root>/vulx.toml``, or defaults when the file does not exist."""
    path = root / CONFIG_FILE_NAME
    if not path.exists():
        return Ok(Config())
    return load_config(path)
