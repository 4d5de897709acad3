"""Tests for relpub.publish.stages."""

from __future__ import annotations

import shlex
from pathlib import Path

from relpub.core.config import PublishConfig
from relpub.core.result import Err, Ok
from relpub.git.repository import GitError
from relpub.output.console import MockConsole, Style
from relpub.publish.stages import (
    bind_remote,
    git_failure,
    locate_notes_file,
    move_tag,
    replace_release,
    require_release_tool,
)

from ._fakes import FakeReleaseHost, FakeVcs

URL = "git@github.com:owner/repo.git"


class TestBindRemote:
    def test_adds_when_absent(self) -> None:
        vcs = FakeVcs()
        result = bind_remote(vcs=vcs, remote="origin", url=URL, console=MockConsole(), dry_run=False)

        assert isinstance(result, Ok)
        assert vcs.remotes == {"origin": URL}
        assert result.value.detail == f"origin -> {URL}"

    def test_replaces_stale_binding(self) -> None:
        vcs = FakeVcs(remotes={"origin": "https://old/x.git"})
        result = bind_remote(vcs=vcs, remote="origin", url=URL, console=MockConsole(), dry_run=False)

        assert isinstance(result, Ok)
        assert vcs.remotes == {"origin": URL}
        assert result.value.detail == f"origin -> {URL} (was https://old/x.git)"

    def test_same_binding_is_rebound(self) -> None:
        vcs = FakeVcs(remotes={"origin": URL})
        result = bind_remote(vcs=vcs, remote="origin", url=URL, console=MockConsole(), dry_run=False)

        assert isinstance(result, Ok)
        assert vcs.calls == ["remove_remote origin", f"add_remote origin {URL}"]
        assert result.value.detail.endswith("(unchanged)")

    def test_leaves_other_remotes(self) -> None:
        vcs = FakeVcs(remotes={"upstream": "https://up/x.git"})
        bind_remote(vcs=vcs, remote="origin", url=URL, console=MockConsole(), dry_run=False)

        assert vcs.remotes == {"upstream": "https://up/x.git", "origin": URL}

    def test_remove_failure_is_silent(self) -> None:
        console = MockConsole()
        bind_remote(vcs=FakeVcs(), remote="origin", url=URL, console=console, dry_run=False)

        assert not console.has_error()
        assert console.count(Style.WARNING) == 0


class TestMoveTag:
    def test_returns_commit(self) -> None:
        vcs = FakeVcs(head="c" * 40, remotes={"origin": URL})
        result = move_tag(vcs=vcs, remote="origin", tag="v1", console=MockConsole(), dry_run=False)

        assert isinstance(result, Ok)
        outcome, sha = result.value
        assert sha == "c" * 40
        assert outcome.detail == f"v1 -> {'c' * 12}"

    def test_overwrites_existing_tag(self) -> None:
        vcs = FakeVcs(
            head="d" * 40,
            local_tags={"v1": "a" * 40},
            remote_tags={"v1": "a" * 40},
        )
        move_tag(vcs=vcs, remote="origin", tag="v1", console=MockConsole(), dry_run=False)

        assert vcs.local_tags["v1"] == "d" * 40
        assert vcs.remote_tags["v1"] == "d" * 40


def test_git_failure_keeps_stderr() -> None:
    error = git_failure(GitError(command="push -f origin refs/tags/v1", message="rejected", returncode=1))

    assert error.kind == "git_failed"
    assert error.message == "git push -f origin refs/tags/v1 failed (exit 1)"
    assert error.hint == "rejected"


def test_require_release_tool() -> None:
    assert isinstance(require_release_tool(FakeReleaseHost()), Ok)

    missing = require_release_tool(FakeReleaseHost(available=False))
    assert isinstance(missing, Err)
    assert missing.error.message == "gh CLI is required to publish the release"
    assert missing.error.hint == "Install: https://cli.github.com/"


class TestReplaceRelease:
    def _config(self, **kwargs: object) -> PublishConfig:
        return PublishConfig(
            repository_url=URL,
            tag_name="v1",
            asset_path=Path("a.zip"),
            **kwargs,  # type: ignore[arg-type]
        )

    def test_default_title_and_notes(self, tmp_path: Path) -> None:
        host = FakeReleaseHost()
        result = replace_release(
            host=host,
            config=self._config(),
            root=tmp_path,
            asset=tmp_path / "a.zip",
            console=MockConsole(),
            dry_run=False,
        )

        assert isinstance(result, Ok)
        release = host.releases["v1"]
        assert release.title == "v1"
        assert release.notes == "Release v1"

    def test_delete_then_create(self, tmp_path: Path) -> None:
        host = FakeReleaseHost()
        for _ in range(2):
            replace_release(
                host=host,
                config=self._config(),
                root=tmp_path,
                asset=tmp_path / "a.zip",
                console=MockConsole(),
                dry_run=False,
            )

        assert host.mutations == ["delete v1", "create v1", "delete v1", "create v1"]
        assert list(host.releases) == ["v1"]

    def test_dry_run_prints_commands(self, tmp_path: Path) -> None:
        host = FakeReleaseHost()
        console = MockConsole()
        result = replace_release(
            host=host,
            config=self._config(notes="Linux x86_64 binary"),
            root=tmp_path,
            asset=tmp_path / "a.zip",
            console=console,
            dry_run=True,
        )

        assert isinstance(result, Ok)
        assert result.value[1] is None
        assert host.mutations == []
        assert console.find("gh release create v1")
        assert console.find("--notes 'Linux x86_64 binary'")

    def test_printed_command_is_shell_quoted(self, tmp_path: Path) -> None:
        console = MockConsole()
        asset = tmp_path / "my app.zip"
        replace_release(
            host=FakeReleaseHost(),
            config=self._config(title='v1 "final"', notes="It's ready"),
            root=tmp_path,
            asset=asset,
            console=console,
            dry_run=True,
        )

        [line] = [r.message for r in console.find("gh release create")]
        assert shlex.split(line) == [
            "gh", "release", "create", "v1", str(asset),
            "--title", 'v1 "final"',
            "--notes", "It's ready",
        ]


class TestLocateNotesFile:
    def _config(self, **kwargs: object) -> PublishConfig:
        return PublishConfig(
            repository_url=URL,
            tag_name="v1",
            asset_path=Path("a.zip"),
            **kwargs,  # type: ignore[arg-type]
        )

    def test_inline_notes(self, tmp_path: Path) -> None:
        assert locate_notes_file(config=self._config(notes="n"), root=tmp_path) == Ok(None)

    def test_relative_to_root(self, tmp_path: Path) -> None:
        (tmp_path / "NOTES.md").write_text("n", encoding="utf-8")
        config = self._config(notes_file=Path("NOTES.md"))

        assert locate_notes_file(config=config, root=tmp_path) == Ok(tmp_path / "NOTES.md")

    def test_missing(self, tmp_path: Path) -> None:
        result = locate_notes_file(config=self._config(notes_file=Path("NOTES.md")), root=tmp_path)

        assert isinstance(result, Err)
        assert result.error.kind == "invalid_config"
