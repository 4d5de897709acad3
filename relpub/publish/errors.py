"""Error payload shared by every publish stage."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

PublishErrorKind = Literal[
    "invalid_config",
    "not_a_repo",
    "gh_missing",
    "asset_missing",
    "git_failed",
    "release_failed",
]


@dataclass(frozen=True, slots=True)
class PublishError:
    """Canonical publish error.

    ``hint`` carries either a remediation (install URL, build commands) or
    the verbatim stderr of the failing tool.
    """

    kind: PublishErrorKind
    message: str
    hint: str | None = None
