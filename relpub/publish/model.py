from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Literal

StageName = Literal[
    "bind_remote",
    "sync_branch",
    "move_tag",
    "locate_asset",
    "replace_release",
]

STAGE_TITLES: dict[StageName, str] = {
    "bind_remote": "Bind remote",
    "sync_branch": "Sync branch",
    "move_tag": "Move tag",
    "locate_asset": "Locate asset",
    "replace_release": "Replace release",
}


@dataclass(frozen=True, slots=True)
class StageOutcome:
    stage: StageName
    detail: str


@dataclass(frozen=True, slots=True)
class PublishReport:
    """What a publish run did, in stage order."""

    tag: str
    outcomes: tuple[StageOutcome, ...]
    tag_commit: str | None = None
    asset: Path | None = None
    release_url: str | None = None
    dry_run: bool = False

    @property
    def stages(self) -> tuple[StageName, ...]:
        return tuple(o.stage for o in self.outcomes)
