"""Data-driven help and usage formatting.

Purpose
-------
Turn a command's computed view (runnable?, children, flags, aliases) into
human-readable help text without any template engine. Everything here is a
pure function of its inputs except :class:`UsageRenderer`, which probes the
terminal width on each call.

Contents
--------
* :class:`FlagUsage` – one row of a flags block.
* :class:`CommandEntry` – one child listed under a parent command.
* :class:`CommandView` – everything the formatter needs to know about a node.
* :func:`flag_usages` / :func:`wrapped_flag_usages` – flags block formatting.
* :func:`format_usage` / :func:`format_help` – the usage and help layouts.
* :class:`UsageRenderer` – injects the terminal width into the formatters.

System Role
-----------
:mod:`zap.command` builds :class:`CommandView` instances from click objects
and asks the renderer bound to the root command for text. Tests exercise the
formatters directly with hand-made views.
"""

from __future__ import annotations

import textwrap
from dataclasses import dataclass, field
from typing import Callable, Final, Sequence

from .terminal import terminal_width

MIN_NAME_PADDING: Final[int] = 11
"""Minimum column width for command names in the listing blocks."""

MIN_WRAP_WIDTH: Final[int] = 24
"""Usage text narrower than this after the flag column is not wrapped."""

_USAGE_GAP: Final[int] = 3


@dataclass(frozen=True)
class FlagUsage:
    """Render-time description of a single flag."""

    name: str
    shorthand: str = ""
    value_type: str = ""
    usage: str = ""
    default: str = ""
    quote_default: bool = False

    @property
    def left_column(self) -> str:
        """Return the ``-x, --name type`` part of the row."""

        if self.shorthand:
            text = f"  -{self.shorthand}, --{self.name}"
        else:
            text = f"      --{self.name}"
        if self.value_type:
            text += f" {self.value_type}"
        return text

    @property
    def described_usage(self) -> str:
        """Return the usage text including the default suffix when relevant."""

        if not self.default:
            return self.usage
        if self.quote_default:
            return f'{self.usage} (default "{self.default}")'
        return f"{self.usage} (default {self.default})"


@dataclass(frozen=True)
class CommandEntry:
    """A child command as seen from its parent's usage text."""

    name: str
    path: str
    short: str = ""
    available: bool = True
    help_topic: bool = False


@dataclass(frozen=True)
class CommandView:
    """Computed metadata of one command node, ready for formatting."""

    command_path: str
    use_line: str
    runnable: bool = True
    short: str = ""
    long: str = ""
    aliases: tuple[str, ...] = ()
    commands: tuple[CommandEntry, ...] = ()
    local_flags: tuple[FlagUsage, ...] = ()
    inherited_flags: tuple[FlagUsage, ...] = ()

    @property
    def name(self) -> str:
        return self.command_path.rsplit(" ", 1)[-1]

    @property
    def name_and_aliases(self) -> str:
        return ", ".join((self.name, *self.aliases))

    @property
    def has_available_subcommands(self) -> bool:
        return any(entry.available for entry in self.commands)

    @property
    def has_subcommands(self) -> bool:
        return bool(self.commands)

    @property
    def help_topics(self) -> tuple[CommandEntry, ...]:
        return tuple(entry for entry in self.commands if entry.help_topic)

    @property
    def name_padding(self) -> int:
        return max([MIN_NAME_PADDING, *(len(entry.name) for entry in self.commands)])

    @property
    def path_padding(self) -> int:
        return max([MIN_NAME_PADDING, *(len(entry.path) for entry in self.commands)])


def flag_usages(flags: Sequence[FlagUsage]) -> str:
    """Return the flags block without wrapping usage text."""

    return wrapped_flag_usages(flags, 0)


def wrapped_flag_usages(flags: Sequence[FlagUsage], width: int) -> str:
    """Return the flags block with usage text wrapped to *width* columns.

    Rows are sorted by flag name and aligned on a shared usage column. A
    *width* of ``0`` disables wrapping.

    Examples
    --------
    >>> print(wrapped_flag_usages([FlagUsage("version", usage="Display version information")], 79), end="")
          --version   Display version information
    """

    ordered = sorted(flags, key=lambda flag: flag.name)
    if not ordered:
        return ""
    column = max(len(flag.left_column) for flag in ordered) + _USAGE_GAP
    lines = []
    for flag in ordered:
        left = flag.left_column.ljust(column)
        lines.append(left + _wrap(column, width, flag.described_usage))
    return "\n".join(lines) + "\n"


def _wrap(indent: int, width: int, text: str) -> str:
    """Wrap *text* to ``width - indent`` columns, indenting continuation lines."""

    separator = "\n" + " " * indent
    available = width - indent
    if width == 0 or available < MIN_WRAP_WIDTH:
        return separator.join(text.split("\n"))
    wrapped: list[str] = []
    for paragraph in text.split("\n"):
        chunks = textwrap.wrap(
            paragraph,
            width=available,
            break_long_words=False,
            break_on_hyphens=False,
        )
        wrapped.extend(chunks or [""])
    return separator.join(wrapped)


def format_usage(view: CommandView, flag_width: int) -> str:
    """Return the usage text for *view* with local flags wrapped to *flag_width*.

    Why
        The usage block is shown on ``--help``, by the ``help`` command and
        through ``get_usage``, so its layout lives in one place.

    What
        Emits, in order and only when they apply: the usage lines, aliases,
        available commands (``help`` is always listed), local flags, global
        flags, additional help topics and the trailing ``--help`` hint.
    """

    parts = ["Usage:"]
    if view.runnable:
        parts.append(f"\n  {view.use_line}")
    if view.has_available_subcommands:
        parts.append(f"\n  {view.command_path} [command]")
    if view.aliases:
        parts.append(f"\n\nAliases:\n  {view.name_and_aliases}")
    if view.has_available_subcommands:
        parts.append("\n\nAvailable Commands:")
        for entry in view.commands:
            if entry.available or entry.name == "help":
                parts.append(f"\n  {entry.name.ljust(view.name_padding)} {entry.short}")
    if view.local_flags:
        parts.append("\n\nFlags:\n" + wrapped_flag_usages(view.local_flags, flag_width).rstrip())
    if view.inherited_flags:
        parts.append("\n\nGlobal Flags:\n" + flag_usages(view.inherited_flags).rstrip())
    if view.help_topics:
        parts.append("\n\nAdditional help topics:")
        for entry in view.help_topics:
            parts.append(f"\n  {entry.path.ljust(view.path_padding)} {entry.short}")
    if view.has_available_subcommands:
        parts.append(f'\n\nUse "{view.command_path} [command] --help" for more information about a command.')
    parts.append("\n")
    return "".join(parts)


def format_help(view: CommandView, flag_width: int) -> str:
    """Return the description of *view* followed by its usage text."""

    text = ""
    description = (view.long or view.short).rstrip()
    if description:
        text = description + "\n\n"
    if view.runnable or view.has_subcommands:
        text += format_usage(view, flag_width)
    return text


class UsageRenderer:
    """Render help text for command views at the current terminal width.

    The width is probed on every call; it is never cached because the
    terminal may be resized between process start and the help request.
    """

    def __init__(self, width_probe: Callable[[], int] = terminal_width) -> None:
        self._width_probe = width_probe

    def flag_width(self) -> int:
        """Return the wrap width for local flags (terminal width minus one)."""

        return self._width_probe() - 1

    def render_usage(self, view: CommandView) -> str:
        return format_usage(view, self.flag_width())

    def render_help(self, view: CommandView) -> str:
        return format_help(view, self.flag_width())


DEFAULT_RENDERER: Final[UsageRenderer] = UsageRenderer()
"""Renderer used when no command in the context chain carries one."""


__all__ = [
    "CommandEntry",
    "CommandView",
    "DEFAULT_RENDERER",
    "FlagUsage",
    "UsageRenderer",
    "flag_usages",
    "format_help",
    "format_usage",
    "wrapped_flag_usages",
]
