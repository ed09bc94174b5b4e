"""Command nodes that render their help through :mod:`zap.usage`.

Purpose
-------
Bridge click's command objects and the data-driven usage formatter: compute a
:class:`zap.usage.CommandView` for any node of the tree and hand it to the
renderer inherited from the nearest ancestor that carries one.

Contents
--------
* :data:`CLICK_CONTEXT_SETTINGS` – shared click settings ensuring ``-h`` works.
* :class:`GlobalOption` – option listed under "Global Flags" in descendants.
* :class:`ZapCommand` / :class:`ZapGroup` – click command classes with a
  ``use`` string, aliases and an optional ``usage_renderer``.
* :func:`describe` – builds the :class:`CommandView` for a click context.
* :func:`resolve_renderer` – finds the renderer in effect for a context.
* :func:`canonical_path` – command path spelled with names, never aliases.

System Role
-----------
:mod:`zap.cli` and :mod:`zap.commands` construct their nodes from these
classes. Click calls :meth:`get_help` for ``--help`` and :meth:`get_usage`
when reporting argument errors, so both paths produce the same layout.
"""

from __future__ import annotations

from typing import Any, Iterable, Sequence

import rich_click as click

from .usage import DEFAULT_RENDERER, CommandEntry, CommandView, FlagUsage, UsageRenderer

CLICK_CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}

_TYPE_NAMES = {
    "text": "string",
    "integer": "int",
    "integer range": "int",
    "float": "float",
    "float range": "float",
    "choice": "string",
    "path": "string",
    "file": "string",
    "boolean": "",
}


class GlobalOption(click.Option):
    """Option defined on an ancestor and advertised in every descendant's usage."""

    persistent = True


class _RenderedHelp:
    """Mixin replacing click's help formatter with the usage renderer."""

    use: str
    aliases: tuple[str, ...]
    usage_renderer: UsageRenderer | None

    def _init_rendering(
        self,
        use: str | None,
        aliases: Sequence[str],
        usage_renderer: UsageRenderer | None,
    ) -> None:
        self.use = use or self.name or ""  # type: ignore[attr-defined]
        self.aliases = tuple(aliases)
        self.usage_renderer = usage_renderer

    def get_help_option(self, ctx: click.Context) -> click.Option | None:
        option = super().get_help_option(ctx)  # type: ignore[misc]
        if option is not None:
            option.help = f"help for {self.name}"  # type: ignore[attr-defined]
        return option

    def get_help(self, ctx: click.Context) -> str:
        return resolve_renderer(ctx).render_help(describe(ctx)).rstrip("\n")

    def get_usage(self, ctx: click.Context) -> str:
        return resolve_renderer(ctx).render_usage(describe(ctx)).rstrip("\n")


class ZapCommand(_RenderedHelp, click.RichCommand):
    """Leaf command node."""

    def __init__(
        self,
        *args: Any,
        use: str | None = None,
        aliases: Sequence[str] = (),
        usage_renderer: UsageRenderer | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(*args, **kwargs)
        self._init_rendering(use, aliases, usage_renderer)


class ZapGroup(_RenderedHelp, click.RichGroup):
    """Command node with children; resolves children by name or alias."""

    command_class = ZapCommand

    def __init__(
        self,
        *args: Any,
        use: str | None = None,
        aliases: Sequence[str] = (),
        usage_renderer: UsageRenderer | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(*args, **kwargs)
        self._init_rendering(use, aliases, usage_renderer)

    def get_command(self, ctx: click.Context, cmd_name: str) -> click.Command | None:
        command = super().get_command(ctx, cmd_name)
        if command is not None:
            return command
        for candidate in self.commands.values():
            if cmd_name in getattr(candidate, "aliases", ()):
                return candidate
        return None


def resolve_renderer(ctx: click.Context) -> UsageRenderer:
    """Return the renderer of the nearest command in *ctx*'s chain that has one."""

    current: click.Context | None = ctx
    while current is not None:
        renderer = getattr(current.command, "usage_renderer", None)
        if renderer is not None:
            return renderer
        current = current.parent
    return DEFAULT_RENDERER


def describe(ctx: click.Context) -> CommandView:
    """Compute the :class:`CommandView` of the command bound to *ctx*.

    What
        Collects the use line, children (sorted by name), local flags
        (including the help option) and the global flags of every ancestor.
    """

    command = ctx.command
    path = canonical_path(ctx)
    local_flags = tuple(_flag_usages(command.get_params(ctx), ctx))
    use = getattr(command, "use", None) or command.name or ""
    if ctx.parent is not None:
        use_line = f"{canonical_path(ctx.parent)} {use}"
    else:
        use_line = path
    if local_flags and "[flags]" not in use_line:
        use_line += " [flags]"
    return CommandView(
        command_path=path,
        use_line=use_line,
        runnable=command.callback is not None,
        short=command.short_help or "",
        long=command.help or "",
        aliases=tuple(getattr(command, "aliases", ())),
        commands=tuple(_child_entries(ctx, path)),
        local_flags=local_flags,
        inherited_flags=tuple(_flag_usages(_inherited_params(ctx), ctx)),
    )


def canonical_path(ctx: click.Context) -> str:
    """Return the command path of *ctx* spelled with command names, not aliases.

    Only the root keeps the name it was invoked under (the program name).
    """

    if ctx.parent is None:
        return ctx.command_path
    return f"{canonical_path(ctx.parent)} {ctx.command.name}"


def _child_entries(ctx: click.Context, path: str) -> Iterable[CommandEntry]:
    command = ctx.command
    if not isinstance(command, click.Group):
        return
    for name in command.list_commands(ctx):
        child = command.get_command(ctx, name)
        if child is None:
            continue
        runnable = child.callback is not None
        has_children = isinstance(child, click.Group) and bool(child.commands)
        yield CommandEntry(
            name=name,
            path=f"{path} {name}",
            short=child.short_help or "",
            available=not child.hidden and not child.deprecated and name != "help" and (runnable or has_children),
            help_topic=not child.hidden and not runnable and not has_children,
        )


def _inherited_params(ctx: click.Context) -> list[click.Parameter]:
    params: list[click.Parameter] = []
    seen: set[str] = set()
    parent = ctx.parent
    while parent is not None:
        for param in parent.command.params:
            if getattr(param, "persistent", False) and param.name not in seen:
                seen.add(param.name or "")
                params.append(param)
        parent = parent.parent
    return params


def _flag_usages(params: Iterable[click.Parameter], ctx: click.Context) -> Iterable[FlagUsage]:
    for param in params:
        if not isinstance(param, click.Option) or param.hidden:
            continue
        yield _flag_usage(param, ctx)


def _flag_usage(option: click.Option, ctx: click.Context) -> FlagUsage:
    long_names = [opt for opt in option.opts if opt.startswith("--")]
    short_names = [opt for opt in option.opts if not opt.startswith("--")]
    name = long_names[0][2:] if long_names else short_names[0].lstrip("-")
    shorthand = short_names[0].lstrip("-") if short_names and long_names else ""
    value_type = "" if option.is_flag else _type_name(option)
    default, quote = _default_text(option, ctx)
    return FlagUsage(
        name=name,
        shorthand=shorthand,
        value_type=value_type,
        usage=option.help or "",
        default=default,
        quote_default=quote,
    )


def _type_name(option: click.Option) -> str:
    name = _TYPE_NAMES.get(option.type.name, option.type.name)
    if option.multiple:
        return f"{name}Array"
    return name


def _default_text(option: click.Option, ctx: click.Context) -> tuple[str, bool]:
    """Return the default shown for *option* and whether it is quoted.

    Required options and options without a default show nothing. The default
    is read through ``get_default`` so click's internal unset marker never
    leaks into the help text.
    """

    if option.required:
        return "", False
    default = option.get_default(ctx, call=False)
    if option.is_flag:
        return ("true", False) if default is True else ("", False)
    if isinstance(option.show_default, str):
        return option.show_default, False
    if default is None or callable(default) or default == "" or default == () or default == 0:
        return "", False
    if isinstance(default, str):
        return default, True
    return str(default), False
