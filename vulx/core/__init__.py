"""Core domain types and logic."""

from .config import Config, ConfigError, load_config, load_project_config
from .errors import ErrorCode
from .result import Err, Ok, Result
from .workspace import (
    PackageAssets,
    WorkspaceError,
    WorkspaceLayout,
    default_assets_dir,
    detect_project_root,
)

__all__ = [
    # config
    "Config",
    "ConfigError",
    "load_config",
    "load_project_config",
    # errors
    "ErrorCode",
    # result
    "Err",
    "Ok",
    "Result",
    # workspace
    "PackageAssets",
    "WorkspaceError",
    "WorkspaceLayout",
    "default_assets_dir",
    "detect_project_root",
]
