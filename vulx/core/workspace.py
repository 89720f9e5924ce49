"""Workspace layout and project root detection.

The workspace is a hidden, tool-owned directory at the project root that
holds the provisioned build assets:

    <root>/.cache/
        bundler-config/webpack.mix.js
        types/{tsconfig.json,vue-shims.d.ts,env.d.ts}
        utilities/defineVulmixConfig.ts
        runtime/components/...
        vulmix.config.js            (compiled from <root>/vulmix.config.ts)

Every path is derived here once; services never rebuild them by hand.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from .config import Config
from .result import Err, Ok, Result

__all__ = [
    "ROOT_ENV_VAR",
    "PackageAssets",
    "WorkspaceError",
    "WorkspaceLayout",
    "default_assets_dir",
    "detect_project_root",
]

ROOT_ENV_VAR = "VULX_ROOT"

MIX_CONFIG_NAME = "webpack.mix.js"
CONFIG_HELPER_NAME = "defineVulmixConfig.ts"


@dataclass(frozen=True)
class WorkspaceError:
    """Error when the project root cannot be resolved."""

    message: str
    searched_from: Path | None = None


@dataclass(frozen=True, slots=True)
class WorkspaceLayout:
    """Paths of one project and its hidden workspace.

    Attributes:
        root: Absolute project root.
        cache_name: Name of the hidden workspace directory.
        dist_name: Name of the production output directory.
        config_source_name: Name of the user's configuration source file.
    """

    root: Path
    cache_name: str = ".cache"
    dist_name: str = "_dist"
    config_source_name: str = "vulmix.config.ts"

    @classmethod
    def from_config(cls, root: Path, config: Config) -> WorkspaceLayout:
        return cls(
            root=root,
            cache_name=config.paths.cache,
            dist_name=config.paths.dist,
            config_source_name=config.paths.config_source,
        )

    @property
    def cache_dir(self) -> Path:
        """Hidden workspace directory; also the type-checker's output dir."""
        return self.root / self.cache_name

    @property
    def bundler_config_dir(self) -> Path:
        return self.cache_dir / "bundler-config"

    @property
    def types_dir(self) -> Path:
        return self.cache_dir / "types"

    @property
    def utilities_dir(self) -> Path:
        return self.cache_dir / "utilities"

    @property
    def runtime_components_dir(self) -> Path:
        return self.cache_dir / "runtime" / "components"

    @property
    def mix_config_path(self) -> Path:
        """Provisioned bundler config; every composed build points here."""
        return self.bundler_config_dir / MIX_CONFIG_NAME

    @property
    def config_helper_path(self) -> Path:
        return self.utilities_dir / CONFIG_HELPER_NAME

    @property
    def config_source_path(self) -> Path:
        return self.root / self.config_source_name

    @property
    def dist_dir(self) -> Path:
        return self.root / self.dist_name

    @property
    def dependencies_dir(self) -> Path:
        return self.root / "node_modules"

    def directories(self) -> tuple[Path, ...]:
        """Directories that must exist after provisioning, parents first."""
        return (
            self.cache_dir,
            self.bundler_config_dir,
            self.types_dir,
            self.utilities_dir,
            self.runtime_components_dir,
        )


def default_assets_dir() -> Path:
    """Template directory shipped inside the package."""
    return Path(__file__).resolve().parent.parent / "assets"


@dataclass(frozen=True, slots=True)
class PackageAssets:
    """Template files bundled with the installed package.

    ``dev`` selects the ``.dev`` variants of the bundler config and the config
    helper, used when working on vulx itself against a local checkout.
    """

    root: Path
    dev: bool = False

    @property
    def _suffix(self) -> str:
        return ".dev" if self.dev else ""

    @property
    def mix_config(self) -> Path:
        return self.root / "bundler" / f"webpack.mix{self._suffix}.js"

    @property
    def tsconfig(self) -> Path:
        return self.root / "types" / "tsconfig.json"

    @property
    def vue_shims(self) -> Path:
        return self.root / "types" / "vue-shims.d.ts"

    @property
    def env_types(self) -> Path:
        return self.root / "types" / "env.d.ts"

    @property
    def config_helper(self) -> Path:
        return self.root / "utilities" / f"defineVulmixConfig{self._suffix}.ts"

    @property
    def runtime_components(self) -> Path:
        return self.root / "runtime" / "components"


def detect_project_root(override: Path | None = None) -> Result[Path, WorkspaceError]:
    """Resolve the project root.

    Priority: explicit override, then ``VULX_ROOT``, then the current directory.
    """
    if override is not None:
        candidate = override
    else:
        env = os.environ.get(ROOT_ENV_VAR)
        candidate = Path(env) if env else Path.cwd()

    try:
        root = candidate.expanduser().resolve()
    except OSError as e:
        return Err(WorkspaceError(f"invalid project root: {e}", searched_from=candidate))

    if not root.is_dir():
        return Err(WorkspaceError(f"project root is not a directory: {root}", searched_from=root))
    return Ok(root)
