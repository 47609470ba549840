"""Console output abstraction.

The plugin reports progress (issues found, versions created, tracker calls
that failed) through a ConsoleProtocol. Production code gets a RichConsole
that writes to stderr, leaving stdout to the plugin host protocol; tests get
a MockConsole that records every line.
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
    "OutputRecord",
]


class Style(Enum):
    """Kinds of console line."""

    DEFAULT = auto()
    SUCCESS = auto()
    ERROR = auto()
    WARNING = auto()
    INFO = auto()

    def __str__(self) -> str:
        return self.name.lower()


class ConsoleProtocol(Protocol):
    """Where the plugin sends human-readable progress."""

    def print(self, message: str, style: Style = Style.DEFAULT) -> None: ...

    def success(self, message: str) -> None:
        """Report an action that was carried out."""
        ...

    def error(self, message: str) -> None: ...

    def warning(self, message: str) -> None: ...

    def info(self, message: str) -> None: ...


# Style -> (rich style, label shown before the message).
_TAGS: dict[Style, tuple[str, str]] = {
    Style.SUCCESS: ("green", ""),
    Style.ERROR: ("red bold", "error"),
    Style.WARNING: ("yellow", "warning"),
    Style.INFO: ("cyan", ""),
}


class RichConsole:
    """Writes `<prefix>[ label]: message` lines with Rich."""

    def __init__(self, *, prefix: str = "jira", stderr: bool = True) -> None:
        # Import Rich lazily to avoid import-time dependency
        from rich.console import Console

        self._console = Console(stderr=stderr, highlight=False)
        self._prefix = prefix

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        if style in _TAGS:
            self._tagged(style, message)
        else:
            self._console.print(message, markup=False)

    def success(self, message: str) -> None:
        self._tagged(Style.SUCCESS, message)

    def error(self, message: str) -> None:
        self._tagged(Style.ERROR, message)

    def warning(self, message: str) -> None:
        self._tagged(Style.WARNING, message)

    def info(self, message: str) -> None:
        self._tagged(Style.INFO, message)

    def _tagged(self, style: Style, message: str) -> None:
        from rich.markup import escape

        rich_style, label = _TAGS[style]
        tag = f"{self._prefix} {label}" if label else self._prefix
        # Tracker error text and commit messages may contain square brackets.
        self._console.print(f"[{rich_style}]{escape(tag)}:[/{rich_style}]", escape(message))


@dataclass
class OutputRecord:
    message: str
    style: Style


def _empty_outputs() -> list[OutputRecord]:
    return []


@dataclass
class MockConsole:
    """Records console lines so tests can assert on them."""

    outputs: list[OutputRecord] = field(default_factory=_empty_outputs)

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        self.outputs.append(OutputRecord(message, style))

    def success(self, message: str) -> None:
        self.print(message, Style.SUCCESS)

    def error(self, message: str) -> None:
        self.print(f"error: {message}", Style.ERROR)

    def warning(self, message: str) -> None:
        self.print(f"warning: {message}", Style.WARNING)

    def info(self, message: str) -> None:
        self.print(message, Style.INFO)

    def clear(self) -> None:
        self.outputs.clear()

    @property
    def messages(self) -> list[str]:
        return [o.message for o in self.outputs]

    @property
    def text(self) -> str:
        return "\n".join(self.messages)

    def has_error(self) -> bool:
        return self.count(Style.ERROR) > 0

    def has_warning(self) -> bool:
        return self.count(Style.WARNING) > 0

    def find(self, substring: str) -> list[OutputRecord]:
        """Records whose message contains `substring`."""
        return [o for o in self.outputs if substring in o.message]

    def count(self, style: Style) -> int:
        return sum(1 for o in self.outputs if o.style == style)
