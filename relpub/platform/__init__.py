"""Platform layer: subprocess execution."""

from .process import ProcessError, run, which

__all__ = ["ProcessError", "run", "which"]
