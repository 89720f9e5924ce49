"""Terminal output for vulx.

vulx talks briefly (a header while provisioning, one line per removed
directory, the composed command) and then hands the terminal to a delegated
tool. ``banner`` marks that hand-off: the screen is cleared and the version
line printed, so the tool's own output starts on a clean terminal.

Services depend on ``ConsoleProtocol`` only. ``RichConsole`` renders with
Rich; ``MockConsole`` records what would have been printed.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Protocol

__all__ = ["ConsoleProtocol", "MockConsole", "OutputRecord", "RichConsole", "Style"]


class Style(Enum):
    DEFAULT = auto()
    SUCCESS = auto()
    ERROR = auto()
    WARNING = auto()
    DIM = auto()
    HEADER = auto()


# Leading label for status lines, with the Rich markup used to colour it.
_LABELS: dict[Style, tuple[str, str]] = {
    Style.SUCCESS: ("OK", "green"),
    Style.ERROR: ("error:", "red bold"),
    Style.WARNING: ("warning:", "yellow"),
}

_RICH_STYLES: dict[Style, str] = {
    Style.SUCCESS: "green",
    Style.ERROR: "red bold",
    Style.WARNING: "yellow",
    Style.DIM: "dim",
    Style.HEADER: "blue bold",
}


def _plain_label(style: Style, message: str) -> str:
    label, _ = _LABELS[style]
    return f"{label} {message}"


class ConsoleProtocol(Protocol):
    def print(self, message: str, style: Style = Style.DEFAULT) -> None: ...

    def success(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...

    def warning(self, message: str) -> None: ...

    def header(self, message: str) -> None: ...

    def newline(self) -> None: ...

    def clear(self) -> None: ...

    def banner(self, version: str) -> None:
        """Clear the screen and print the version line before a hand-off."""
        ...


class RichConsole:
    def __init__(self) -> None:
        # Import Rich lazily to avoid import-time dependency
        from rich.console import Console

        self._console = Console(highlight=False)

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        self._console.print(message, style=_RICH_STYLES.get(style), markup=False)

    def _labelled(self, style: Style, message: str) -> None:
        from rich.text import Text

        label, colour = _LABELS[style]
        self._console.print(Text.assemble((label, colour), " ", message))

    def success(self, message: str) -> None:
        self._labelled(Style.SUCCESS, message)

    def error(self, message: str) -> None:
        self._labelled(Style.ERROR, message)

    def warning(self, message: str) -> None:
        self._labelled(Style.WARNING, message)

    def header(self, message: str) -> None:
        self.newline()
        self.print(message, Style.HEADER)

    def newline(self) -> None:
        self._console.line()

    def clear(self) -> None:
        # Only a real terminal is cleared; piped output keeps its history.
        if self._console.is_terminal:
            self._console.clear()

    def banner(self, version: str) -> None:
        self.clear()
        self.print(f"vulx {version}", Style.DIM)
        self.newline()


@dataclass(frozen=True, slots=True)
class OutputRecord:
    message: str
    style: Style


@dataclass
class MockConsole:
    """Records output instead of printing it."""

    outputs: list[OutputRecord] = field(default_factory=list)
    clears: int = 0

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        self.outputs.append(OutputRecord(message, style))

    def success(self, message: str) -> None:
        self.print(_plain_label(Style.SUCCESS, message), Style.SUCCESS)

    def error(self, message: str) -> None:
        self.print(_plain_label(Style.ERROR, message), Style.ERROR)

    def warning(self, message: str) -> None:
        self.print(_plain_label(Style.WARNING, message), Style.WARNING)

    def header(self, message: str) -> None:
        self.print(message, Style.HEADER)

    def newline(self) -> None:
        self.print("")

    def clear(self) -> None:
        self.clears += 1

    def banner(self, version: str) -> None:
        self.clear()
        self.print(f"vulx {version}", Style.DIM)
        self.newline()

    @property
    def messages(self) -> list[str]:
        return [o.message for o in self.outputs]

    def has_error(self) -> bool:
        return any(o.style is Style.ERROR for o in self.outputs)

    def find(self, substring: str) -> list[OutputRecord]:
        return [o for o in self.outputs if substring in o.message]
