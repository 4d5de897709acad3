"""Read-only readiness report for ``relpub check``."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from pathlib import Path

from relpub.core.config import PublishConfig
from relpub.gh import GH_INSTALL_URL
from relpub.platform.process import which
from relpub.publish.asset import build_instructions
from relpub.publish.ports import ReleaseHost, VcsClient


class CheckStatus(Enum):
    OK = auto()
    WARNING = auto()
    """Publishing works but will change or may fail on this state."""
    ERROR = auto()
    """Publishing cannot succeed."""


@dataclass(frozen=True, slots=True)
class CheckResult:
    """Result of a single check.

    Attributes:
        name: Short identifier for what was checked (e.g., "gh", "asset")
        status: Whether the check passed, warned, or failed
        message: Human-readable result message
        hint: Optional fix command or URL
    """

    name: str
    status: CheckStatus
    message: str
    hint: str | None = None

    @property
    def is_error(self) -> bool:
        return self.status == CheckStatus.ERROR

    @classmethod
    def success(cls, name: str, message: str) -> CheckResult:
        return cls(name=name, status=CheckStatus.OK, message=message)

    @classmethod
    def warning(cls, name: str, message: str, hint: str | None = None) -> CheckResult:
        return cls(name=name, status=CheckStatus.WARNING, message=message, hint=hint)

    @classmethod
    def error(cls, name: str, message: str, hint: str | None = None) -> CheckResult:
        return cls(name=name, status=CheckStatus.ERROR, message=message, hint=hint)


def _check_git(root: Path, config: PublishConfig, vcs: VcsClient) -> list[CheckResult]:
    if which("git") is None:
        return [CheckResult.error("git", "missing", hint="Install git: https://git-scm.com/")]

    results = [CheckResult.success("git", "found")]
    if not vcs.exists():
        results.append(CheckResult.error("repository", f"not a git repository: {root}"))
        return results

    results.append(CheckResult.success("repository", str(root)))
    if vcs.is_clean():
        results.append(CheckResult.success("working tree", "clean"))
    else:
        results.append(
            CheckResult.warning(
                "working tree",
                "uncommitted changes",
                hint="git pull --rebase refuses to run on a dirty tree; commit or stash first.",
            )
        )

    branch = vcs.current_branch()
    if branch == config.branch:
        results.append(CheckResult.success("branch", config.branch))
    else:
        results.append(
            CheckResult.warning(
                "branch",
                f"on {branch}" if branch else "detached HEAD",
                hint=(
                    f"the tag goes on HEAD but {config.branch} is what gets pushed; "
                    f"run: git switch {config.branch}"
                ),
            )
        )
    return results


def _check_remote(config: PublishConfig, vcs: VcsClient) -> CheckResult:
    name = f"remote {config.remote}"
    current = vcs.remote_url(config.remote)
    if current is None:
        return CheckResult.warning(name, "not bound yet", hint=f"will be set to {config.repository_url}")
    if current != config.repository_url:
        return CheckResult.warning(
            name, f"bound to {current}", hint=f"will be rebound to {config.repository_url}"
        )
    return CheckResult.success(name, current)


def _check_gh(host: ReleaseHost) -> list[CheckResult]:
    if not host.is_available():
        return [CheckResult.error("gh", "missing", hint=f"Install: {GH_INSTALL_URL}")]
    if not host.is_authenticated():
        return [
            CheckResult.success("gh", "found"),
            CheckResult.error("gh auth", "not logged in", hint="Run: gh auth login"),
        ]
    return [CheckResult.success("gh", "found"), CheckResult.success("gh auth", "logged in")]


def _check_files(root: Path, config: PublishConfig) -> list[CheckResult]:
    results: list[CheckResult] = []
    asset = config.resolve(root, config.asset_path)
    if asset.is_file():
        results.append(CheckResult.success("asset", str(config.asset_path)))
    else:
        results.append(
            CheckResult.error(
                "asset",
                f"missing {config.asset_path}",
                hint=build_instructions(config.build_hints),
            )
        )

    if config.notes_file is not None:
        notes = config.resolve(root, config.notes_file)
        if notes.is_file():
            results.append(CheckResult.success("notes file", str(config.notes_file)))
        else:
            results.append(CheckResult.error("notes file", f"missing {config.notes_file}"))
    return results


def run_checks(
    *,
    root: Path,
    config: PublishConfig,
    vcs: VcsClient,
    host: ReleaseHost,
) -> list[CheckResult]:
    results = _check_git(root, config, vcs)
    if vcs.exists():
        results.append(_check_remote(config, vcs))
    results.extend(_check_gh(host))
    results.extend(_check_files(root, config))
    return results
