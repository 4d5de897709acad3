"""Console output abstraction.

Services print through ConsoleProtocol so that the publish workflow can be
driven with Rich in production and captured by MockConsole in tests.
Progress goes to stdout; errors and hints go to stderr.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Protocol

__all__ = [
    "Style",
    "ConsoleProtocol",
    "RichConsole",
    "MockConsole",
]


class Style(Enum):
    """Text styles for console output."""

    DEFAULT = auto()
    SUCCESS = auto()  # Green, positive message
    ERROR = auto()  # Red, error message
    WARNING = auto()  # Yellow, warning message
    INFO = auto()  # Cyan, informational
    DIM = auto()  # Muted text (commands being run)
    HEADER = auto()  # Stage header

    def __str__(self) -> str:
        return self.name.lower()


class ConsoleProtocol(Protocol):
    """Protocol for console output."""

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        """Print a message with optional styling."""
        ...

    def success(self, message: str) -> None: ...

    def error(self, message: str) -> None:
        """Print an error message to stderr."""
        ...

    def hint(self, message: str) -> None:
        """Print a remediation hint to stderr, below an error."""
        ...

    def warning(self, message: str) -> None: ...

    def info(self, message: str) -> None: ...

    def header(self, message: str) -> None: ...

    def newline(self) -> None: ...


class RichConsole:
    """Console implementation using Rich library."""

    def __init__(self) -> None:
        # Import Rich lazily to avoid import-time dependency
        from rich.console import Console

        self._console = Console()
        self._err_console = Console(stderr=True)
        self._style_map = {
            Style.DEFAULT: "",
            Style.SUCCESS: "green",
            Style.ERROR: "red bold",
            Style.WARNING: "yellow",
            Style.INFO: "cyan",
            Style.DIM: "dim",
            Style.HEADER: "blue bold",
        }

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        target = self._err_console if style == Style.ERROR else self._console
        rich_style = self._style_map.get(style, "")
        # Commands and tool output may contain [brackets]
        if rich_style:
            target.print(message, style=rich_style, markup=False, highlight=False)
        else:
            target.print(message, markup=False, highlight=False)

    def success(self, message: str) -> None:
        self._console.print(f"[green]OK[/green] {_escape(message)}")

    def error(self, message: str) -> None:
        self._err_console.print(f"[red bold]error:[/red bold] {_escape(message)}")

    def hint(self, message: str) -> None:
        self._err_console.print(f"[dim]hint: {_escape(message)}[/dim]")

    def warning(self, message: str) -> None:
        self._console.print(f"[yellow]warning:[/yellow] {_escape(message)}")

    def info(self, message: str) -> None:
        self._console.print(f"[cyan]info:[/cyan] {_escape(message)}")

    def header(self, message: str) -> None:
        self._console.print(f"\n[blue bold]{_escape(message)}[/blue bold]")

    def newline(self) -> None:
        self._console.print()


def _escape(message: str) -> str:
    from rich.markup import escape

    return escape(message)


@dataclass
class OutputRecord:
    """A single output record for MockConsole."""

    message: str
    style: Style


def _empty_outputs() -> list[OutputRecord]:
    return []


@dataclass
class MockConsole:
    """Console implementation that captures output for testing."""

    outputs: list[OutputRecord] = field(default_factory=_empty_outputs)

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        self.outputs.append(OutputRecord(message, style))

    def success(self, message: str) -> None:
        self.outputs.append(OutputRecord(f"OK {message}", Style.SUCCESS))

    def error(self, message: str) -> None:
        self.outputs.append(OutputRecord(f"error: {message}", Style.ERROR))

    def hint(self, message: str) -> None:
        self.outputs.append(OutputRecord(f"hint: {message}", Style.DIM))

    def warning(self, message: str) -> None:
        self.outputs.append(OutputRecord(f"warning: {message}", Style.WARNING))

    def info(self, message: str) -> None:
        self.outputs.append(OutputRecord(f"info: {message}", Style.INFO))

    def header(self, message: str) -> None:
        self.outputs.append(OutputRecord(message, Style.HEADER))

    def newline(self) -> None:
        self.outputs.append(OutputRecord("", Style.DEFAULT))

    # Test helper methods

    def clear(self) -> None:
        self.outputs.clear()

    @property
    def messages(self) -> list[str]:
        return [o.message for o in self.outputs]

    @property
    def text(self) -> str:
        return "\n".join(self.messages)

    def has_error(self) -> bool:
        return any(o.style == Style.ERROR for o in self.outputs)

    def has_success(self) -> bool:
        return any(o.style == Style.SUCCESS for o in self.outputs)

    def find(self, substring: str) -> list[OutputRecord]:
        """Find all outputs containing a substring."""
        return [o for o in self.outputs if substring in o.message]

    def count(self, style: Style) -> int:
        return sum(1 for o in self.outputs if o.style == style)
