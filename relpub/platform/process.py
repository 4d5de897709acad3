"""Subprocess execution with Result-based error handling.

Wraps subprocess.run so that a failing tool, a missing binary or a
timeout all come back as ``Err(ProcessError)`` rather than exceptions.

Usage:
    result = run(["git", "rev-parse", "HEAD"], cwd=repo_root)
    match result:
        case Ok(stdout):
            print(stdout.strip())
        case Err(error):
            print(f"Failed: {error.stderr}")
"""

from __future__ import annotations

import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path

from relpub.core.result import Err, Ok, Result

__all__ = ["ProcessError", "run", "which"]


@dataclass(frozen=True, slots=True)
class ProcessError:
    """Error from a failed subprocess execution.

    Attributes:
        command: The command that was executed.
        returncode: Exit code of the process, -1 if it never ran or timed out.
        stdout: Standard output (may be empty).
        stderr: Standard error (contains error details).
    """

    command: tuple[str, ...]
    returncode: int
    stdout: str
    stderr: str

    def __str__(self) -> str:
        cmd_str = " ".join(self.command[:3])
        if len(self.command) > 3:
            cmd_str += " ..."
        return f"{cmd_str} failed (exit {self.returncode})"

    @property
    def detail(self) -> str | None:
        """Tool output explaining the failure, stderr first."""
        return self.stderr.strip() or self.stdout.strip() or None


def run(
    cmd: list[str],
    cwd: Path,
    env: dict[str, str] | None = None,
    *,
    timeout: float | None = None,
) -> Result[str, ProcessError]:
    """Execute a command and return stdout or error.

    Args:
        cmd: Command and arguments to execute.
        cwd: Working directory for the command.
        env: Environment variables (uses current env if None).
        timeout: Maximum seconds to wait (None for no limit).

    Returns:
        Ok(stdout) on success, Err(ProcessError) on failure.
    """
    try:
        proc = subprocess.run(
            cmd,
            cwd=str(cwd),
            env=env,
            capture_output=True,
            text=True,
            timeout=timeout,
            check=False,
        )
    except subprocess.TimeoutExpired as e:
        return Err(
            ProcessError(
                command=tuple(cmd),
                returncode=-1,
                stdout=e.stdout if isinstance(e.stdout, str) else "",
                stderr=f"Command timed out after {timeout}s",
            )
        )
    except OSError as e:
        return Err(
            ProcessError(
                command=tuple(cmd),
                returncode=-1,
                stdout="",
                stderr=str(e),
            )
        )

    if proc.returncode != 0:
        return Err(
            ProcessError(
                command=tuple(cmd),
                returncode=proc.returncode,
                stdout=proc.stdout,
                stderr=proc.stderr,
            )
        )

    return Ok(proc.stdout)


def which(name: str) -> Path | None:
    """Locate an executable on PATH."""
    found = shutil.which(name)
    return Path(found) if found else None
