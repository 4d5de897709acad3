"""End-to-end publish against real git and a local bare remote.

Only the release host is faked.
"""

from __future__ import annotations

import shutil
import subprocess
from pathlib import Path

import pytest

from relpub.core.config import PublishConfig
from relpub.core.result import Err, Ok
from relpub.git.repository import Repository
from relpub.output.console import MockConsole
from relpub.publish.workflow import ReleasePublisher
from relpub.test.publish._fakes import FakeReleaseHost

pytestmark = pytest.mark.skipif(shutil.which("git") is None, reason="git not installed")


def _git(cwd: Path, *args: str) -> str:
    proc = subprocess.run(["git", *args], cwd=cwd, capture_output=True, text=True, check=True)
    return proc.stdout.strip()


def _commit(repo: Path, name: str, content: str) -> str:
    (repo / name).write_text(content, encoding="utf-8")
    _git(repo, "add", name)
    _git(repo, "commit", "-q", "-m", f"edit {name}")
    return _git(repo, "rev-parse", "HEAD")


@pytest.fixture(autouse=True)
def _git_identity(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("GIT_AUTHOR_NAME", "Release Bot")
    monkeypatch.setenv("GIT_AUTHOR_EMAIL", "release@example.com")
    monkeypatch.setenv("GIT_COMMITTER_NAME", "Release Bot")
    monkeypatch.setenv("GIT_COMMITTER_EMAIL", "release@example.com")
    monkeypatch.setenv("GIT_CONFIG_GLOBAL", str(tmp_path / "gitconfig"))
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")


@pytest.fixture
def remote(tmp_path: Path) -> Path:
    bare = tmp_path / "remote.git"
    _git(tmp_path, "init", "-q", "--bare", "-b", "main", str(bare))
    seed = tmp_path / "seed"
    _git(tmp_path, "init", "-q", "-b", "main", str(seed))
    _commit(seed, "README.md", "seed\n")
    _git(seed, "push", "-q", str(bare), "main")
    return bare


@pytest.fixture
def work(tmp_path: Path, remote: Path) -> Path:
    """Clone whose origin points somewhere stale, with a built asset."""
    path = tmp_path / "work"
    _git(tmp_path, "clone", "-q", str(remote), str(path))
    _git(path, "remote", "set-url", "origin", str(tmp_path / "stale.git"))
    (path / "dist").mkdir()
    (path / "dist" / "app.zip").write_bytes(b"PK\x05\x06" + b"\x00" * 18)
    _git(path, "commit", "-q", "--allow-empty", "-m", "local work")
    return path


def _publish(work: Path, remote: Path, host: FakeReleaseHost) -> Ok[object] | Err[object]:
    config = PublishConfig(
        repository_url=str(remote),
        tag_name="v0.1",
        asset_path=Path("dist/app.zip"),
        notes="Linux x86_64 binary",
    )
    publisher = ReleasePublisher(
        root=work,
        config=config,
        vcs=Repository(work),
        host=host,
        console=MockConsole(),
    )
    return publisher.run()


def test_publish_end_to_end(work: Path, remote: Path) -> None:
    host = FakeReleaseHost()

    result = _publish(work, remote, host)

    assert isinstance(result, Ok)
    head = _git(work, "rev-parse", "HEAD")
    assert _git(work, "remote", "get-url", "origin") == str(remote)
    assert _git(work, "rev-parse", "v0.1^{commit}") == head
    assert _git(remote, "rev-parse", "v0.1^{commit}") == head
    assert _git(remote, "rev-parse", "main") == head
    assert _git(work, "rev-parse", "--abbrev-ref", "main@{upstream}") == "origin/main"
    assert list(host.releases) == ["v0.1"]


def test_rerun_after_new_commit_moves_remote_tag(work: Path, remote: Path) -> None:
    host = FakeReleaseHost()
    assert isinstance(_publish(work, remote, host), Ok)

    new_head = _commit(work, "CHANGELOG.md", "fix\n")
    assert isinstance(_publish(work, remote, host), Ok)

    assert _git(remote, "rev-parse", "v0.1^{commit}") == new_head
    assert host.mutations == ["delete v0.1", "create v0.1", "delete v0.1", "create v0.1"]
    assert list(host.releases) == ["v0.1"]


def test_missing_gh_leaves_tag_pushed(work: Path, remote: Path) -> None:
    host = FakeReleaseHost(available=False)

    result = _publish(work, remote, host)

    assert isinstance(result, Err)
    assert _git(remote, "rev-parse", "v0.1^{commit}") == _git(work, "rev-parse", "HEAD")
    assert host.mutations == []
