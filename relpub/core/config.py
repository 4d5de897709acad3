"""Typed configuration loading.

The publish inputs (repository URL, tag, asset path) are read from a
``relpub.toml`` file at the repository root and can be overridden from the
command line. Layout:

    [release]
    repository_url = "https://github.com/owner/repo.git"
    tag = "v0.1"
    asset = "dist/app-linux-x86_64.zip"
    title = "v0.1"
    notes = "Linux x86_64 binary"
    notes_file = "NOTES.md"
    preflight_first = false

    [git]
    remote = "origin"
    branch = "main"

    [build]
    hints = ["cargo build --release"]
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_bool, get_str, get_str_list, get_table

__all__ = [
    "CONFIG_FILE_NAME",
    "DEFAULT_BRANCH",
    "DEFAULT_REMOTE",
    "ConfigError",
    "ConfigOverrides",
    "PublishConfig",
    "find_config",
    "load_config",
]

CONFIG_FILE_NAME = "relpub.toml"

DEFAULT_REMOTE = "origin"
DEFAULT_BRANCH = "main"


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when config cannot be loaded or is incomplete."""

    message: str
    path: Path | None = None
    hint: str | None = None


@dataclass(frozen=True, slots=True)
class PublishConfig:
    """Inputs of one publish run.

    Attributes:
        repository_url: URL the remote is bound to
        tag_name: Release tag, force-moved on every run
        asset_path: Archive to attach, relative to the repository root
        title: Release title (defaults to the tag name)
        notes: Release notes text
        notes_file: File with release notes, takes precedence over notes
        remote: Remote binding name
        branch: Primary branch synchronized with the remote
        build_hints: Commands printed when the asset is missing
        preflight_first: Check gh and the asset before mutating anything
    """

    repository_url: str
    tag_name: str
    asset_path: Path
    title: str | None = None
    notes: str | None = None
    notes_file: Path | None = None
    remote: str = DEFAULT_REMOTE
    branch: str = DEFAULT_BRANCH
    build_hints: tuple[str, ...] = ()
    preflight_first: bool = False

    @property
    def release_title(self) -> str:
        return self.title or self.tag_name

    @property
    def release_notes(self) -> str:
        return self.notes or f"Release {self.tag_name}"

    def resolve(self, root: Path, path: Path) -> Path:
        """Resolve a config path against the repository root."""
        return path if path.is_absolute() else root / path


@dataclass(frozen=True, slots=True)
class ConfigOverrides:
    """Values given on the command line; None means "not given"."""

    repository_url: str | None = None
    tag_name: str | None = None
    asset_path: Path | None = None
    title: str | None = None
    notes: str | None = None
    notes_file: Path | None = None
    remote: str | None = None
    branch: str | None = None
    preflight_first: bool | None = None


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    """Parse a TOML file, handling read and parse errors."""
    import tomllib

    try:
        content = path.read_bytes()
        data_obj: object = tomllib.loads(content.decode("utf-8"))
        data = as_str_dict(data_obj)
        if data is None:
            return Err(ConfigError("Config root must be a TOML table", path=path))
        return Ok(data)
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))
    except OSError as e:
        return Err(ConfigError(f"Cannot read config {path}: {e.strerror or e}", path=path))


def _build(
    data: Mapping[str, object],
    overrides: ConfigOverrides,
    path: Path | None,
) -> Result[PublishConfig, ConfigError]:
    release: StrDict = get_table(data, "release") or {}
    git: StrDict = get_table(data, "git") or {}
    build: StrDict = get_table(data, "build") or {}

    url = overrides.repository_url or get_str(release, "repository_url")
    tag = overrides.tag_name or get_str(release, "tag")
    asset: Path | None = overrides.asset_path
    if asset is None:
        asset_str = get_str(release, "asset")
        asset = Path(asset_str) if asset_str else None

    missing = [
        name
        for name, value in (("repository_url", url), ("tag", tag), ("asset", asset))
        if value is None
    ]
    if missing or url is None or tag is None or asset is None:
        return Err(
            ConfigError(
                f"missing required release setting(s): {', '.join(missing)}",
                path=path,
                hint=f"Set them under [release] in {CONFIG_FILE_NAME} or pass --url/--tag/--asset.",
            )
        )

    notes_file: Path | None = overrides.notes_file
    if notes_file is None:
        notes_file_str = get_str(release, "notes_file")
        notes_file = Path(notes_file_str) if notes_file_str else None

    preflight_first = overrides.preflight_first
    if preflight_first is None:
        preflight_first = get_bool(release, "preflight_first") or False

    return Ok(
        PublishConfig(
            repository_url=url,
            tag_name=tag,
            asset_path=asset,
            title=overrides.title or get_str(release, "title"),
            notes=overrides.notes or get_str(release, "notes"),
            notes_file=notes_file,
            remote=overrides.remote or get_str(git, "remote") or DEFAULT_REMOTE,
            branch=overrides.branch or get_str(git, "branch") or DEFAULT_BRANCH,
            build_hints=tuple(get_str_list(build, "hints") or ()),
            preflight_first=preflight_first,
        )
    )


def find_config(root: Path) -> Path | None:
    """Return the default config file under root, if present."""
    candidate = root / CONFIG_FILE_NAME
    return candidate if candidate.is_file() else None


def load_config(
    path: Path | None,
    overrides: ConfigOverrides | None = None,
) -> Result[PublishConfig, ConfigError]:
    """Load publish configuration.

    Args:
        path: TOML config file, or None to rely on overrides only
        overrides: Command-line values taking precedence over the file

    Returns:
        Ok(PublishConfig) on success, Err(ConfigError) on failure
    """
    overrides = overrides or ConfigOverrides()

    data: StrDict = {}
    if path is not None:
        parsed = _parse_toml(path)
        if isinstance(parsed, Err):
            return parsed
        data = parsed.value

    return _build(data, overrides, path)
