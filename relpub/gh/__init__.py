"""GitHub release hosting through the gh CLI."""

from relpub.gh.host import GH_INSTALL_URL, GhReleaseHost, repo_slug

__all__ = [
    "GH_INSTALL_URL",
    "GhReleaseHost",
    "repo_slug",
]
