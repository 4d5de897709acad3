from __future__ import annotations

from pathlib import Path

from relpub.core.result import Err, Ok, Result
from relpub.publish.errors import PublishError


def build_instructions(hints: tuple[str, ...]) -> str:
    if not hints:
        return "Build the release archive, then retry."
    lines = ["Build it first:", *(f"  {cmd}" for cmd in hints)]
    return "\n".join(lines)


def locate_asset(
    *,
    root: Path,
    asset: Path,
    build_hints: tuple[str, ...],
) -> Result[Path, PublishError]:
    """Check the prebuilt archive exists at its fixed path.

    There is no search path and no fallback location: a relative path is
    resolved against the repository root and must name a regular file.
    """
    path = asset if asset.is_absolute() else root / asset
    if not path.is_file():
        return Err(
            PublishError(
                kind="asset_missing",
                message=f"Missing {asset}",
                hint=build_instructions(build_hints),
            )
        )
    return Ok(path)
