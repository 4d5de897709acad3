"""Git operations.

Usage:
    from relpub.git import Repository

    repo = Repository(Path("/path/to/repo"))
    repo.force_tag("v0.1")
"""

from relpub.git.repository import GitError, Repository

__all__ = [
    "GitError",
    "Repository",
]
