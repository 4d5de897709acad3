"""Process exit codes for relpub commands.

Tool-missing and asset-missing failures use distinct codes so that callers
(CI jobs, wrapper scripts) can tell them apart without parsing stderr.
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Exit codes for CLI commands.

    These values are used as process exit codes and should remain stable:
    - 0: Success
    - 1: User error (invalid config, bad arguments)
    - 2: Environment error (gh or git not installed)
    - 3: Asset missing (release archive not built)
    - 4: Remote error (git fetch, rebase, push or tag failed)
    - 5: Release error (gh release create failed)
    """

    OK = 0
    USER_ERROR = 1
    ENV_ERROR = 2
    ASSET_MISSING = 3
    REMOTE_ERROR = 4
    RELEASE_ERROR = 5
