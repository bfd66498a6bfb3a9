"""Console output abstraction.

Services narrate through ConsoleProtocol instead of printing directly: the
CLI renders with Rich, tests capture every line with MockConsole.

Errors and warnings are diagnostics and go to stderr; narration, echoed
commands and mirrored git output go to stdout.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from rich.console import Console
    from rich.text import Text

__all__ = [
    "Style",
    "ConsoleProtocol",
    "RichConsole",
    "MockConsole",
    "OutputRecord",
]


class Style(Enum):
    """Semantic text styles; each backend decides how to render them."""

    DEFAULT = auto()
    SUCCESS = auto()
    ERROR = auto()
    WARNING = auto()
    INFO = auto()
    DIM = auto()
    BOLD = auto()
    HEADER = auto()
    COMMAND = auto()  # echoed "$ git ..." line

    def __str__(self) -> str:
        return self.name.lower()


# Prefix printed by the labelled helpers (success(), error(), ...)
_LABELS: dict[Style, str] = {
    Style.SUCCESS: "OK",
    Style.ERROR: "error:",
    Style.WARNING: "warning:",
    Style.INFO: "info:",
}

_DIAGNOSTICS = frozenset({Style.ERROR, Style.WARNING})


class ConsoleProtocol(Protocol):
    """Where services send their narration."""

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        """Print one message as-is, in the given style."""
        ...

    def success(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...

    def warning(self, message: str) -> None: ...

    def info(self, message: str) -> None: ...

    def header(self, message: str) -> None: ...

    def command(self, line: str) -> None:
        """Echo a command line before it runs."""
        ...

    def newline(self) -> None: ...


class RichConsole:
    """ConsoleProtocol backed by two Rich consoles (stdout and stderr).

    Messages are wrapped in rich Text, never parsed as markup: branch names,
    paths and git output may contain square brackets.
    """

    _RICH_STYLES: dict[Style, str] = {
        Style.DEFAULT: "",
        Style.SUCCESS: "green",
        Style.ERROR: "red bold",
        Style.WARNING: "yellow",
        Style.INFO: "cyan",
        Style.DIM: "dim",
        Style.BOLD: "bold",
        Style.HEADER: "blue bold",
        Style.COMMAND: "bold magenta",
    }

    def __init__(self) -> None:
        # Rich is only needed once something is printed
        from rich.console import Console

        self._out: Console = Console(highlight=False)
        self._err: Console = Console(stderr=True, highlight=False)

    def _target(self, style: Style) -> Console:
        return self._err if style in _DIAGNOSTICS else self._out

    def _emit(self, text: Text, style: Style) -> None:
        self._target(style).print(text)

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        from rich.text import Text

        self._emit(Text(message, style=self._RICH_STYLES[style]), style)

    def _labelled(self, style: Style, message: str) -> None:
        from rich.text import Text

        text = Text.assemble((_LABELS[style], self._RICH_STYLES[style]), " ", message)
        self._emit(text, style)

    def success(self, message: str) -> None:
        self._labelled(Style.SUCCESS, message)

    def error(self, message: str) -> None:
        self._labelled(Style.ERROR, message)

    def warning(self, message: str) -> None:
        self._labelled(Style.WARNING, message)

    def info(self, message: str) -> None:
        self._labelled(Style.INFO, message)

    def header(self, message: str) -> None:
        self._out.print()
        self.print(message, Style.HEADER)

    def command(self, line: str) -> None:
        self.print(line, Style.COMMAND)

    def newline(self) -> None:
        self._out.print()


@dataclass
class OutputRecord:
    """One captured MockConsole line."""

    message: str
    style: Style


def _no_records() -> list[OutputRecord]:
    return []


@dataclass
class MockConsole:
    """ConsoleProtocol that records every line for assertions.

    Labelled helpers are stored with their prefix ("error: boom"), exactly
    as a user would read them.
    """

    outputs: list[OutputRecord] = field(default_factory=_no_records)

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        self.outputs.append(OutputRecord(message, style))

    def _labelled(self, style: Style, message: str) -> None:
        self.print(f"{_LABELS[style]} {message}", style)

    def success(self, message: str) -> None:
        self._labelled(Style.SUCCESS, message)

    def error(self, message: str) -> None:
        self._labelled(Style.ERROR, message)

    def warning(self, message: str) -> None:
        self._labelled(Style.WARNING, message)

    def info(self, message: str) -> None:
        self._labelled(Style.INFO, message)

    def header(self, message: str) -> None:
        self.print(message, Style.HEADER)

    def command(self, line: str) -> None:
        self.print(line, Style.COMMAND)

    def newline(self) -> None:
        self.print("")

    # -- assertions helpers -------------------------------------------------

    def clear(self) -> None:
        self.outputs.clear()

    @property
    def messages(self) -> list[str]:
        return [o.message for o in self.outputs]

    @property
    def commands(self) -> list[str]:
        """Echoed command lines, in execution order."""
        return [o.message for o in self.outputs if o.style is Style.COMMAND]

    @property
    def text(self) -> str:
        return "\n".join(self.messages)

    def count(self, style: Style) -> int:
        return sum(1 for o in self.outputs if o.style is style)

    def has_error(self) -> bool:
        return self.count(Style.ERROR) > 0

    def has_warning(self) -> bool:
        return self.count(Style.WARNING) > 0

    def find(self, substring: str) -> list[OutputRecord]:
        """Records whose message contains substring."""
        return [o for o in self.outputs if substring in o.message]
