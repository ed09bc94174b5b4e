"""Command views computed from the click command tree."""

from __future__ import annotations

import rich_click as click

from zap.command import ZapCommand, ZapGroup, canonical_path, describe, resolve_renderer
from zap.usage import DEFAULT_RENDERER, UsageRenderer


def _root_context(root: ZapGroup) -> click.Context:
    return root.make_context("zap", [], resilient_parsing=True)


def _child_context(root_ctx: click.Context, name: str) -> click.Context:
    child = root_ctx.command.get_command(root_ctx, name)
    return child.make_context(name, [], parent=root_ctx, resilient_parsing=True)


def test_root_view_lists_children_sorted(root: ZapGroup) -> None:
    view = describe(_root_context(root))
    assert [entry.name for entry in view.commands] == ["help", "publish", "stats", "subscribe"]
    assert view.use_line == "zap [flags]"
    assert view.command_path == "zap"
    assert view.runnable


def test_help_entry_is_listed_but_not_available(root: ZapGroup) -> None:
    entries = {entry.name: entry for entry in describe(_root_context(root)).commands}
    assert entries["help"].available is False
    assert all(entries[name].available for name in ("publish", "stats", "subscribe"))


def test_root_local_flags(root: ZapGroup) -> None:
    flags = {flag.name: flag for flag in describe(_root_context(root)).local_flags}
    assert set(flags) == {"config", "help", "traceback", "verbosity", "version"}
    assert flags["help"].shorthand == "h"
    assert flags["version"].value_type == ""
    assert flags["config"].default == "$HOME/.zap.toml"
    assert describe(_root_context(root)).inherited_flags == ()


def test_child_view_inherits_global_flags(root: ZapGroup) -> None:
    view = describe(_child_context(_root_context(root), "subscribe"))
    assert view.use_line == "zap subscribe [flags]"
    assert view.aliases == ("sub",)
    assert {flag.name for flag in view.inherited_flags} == {"config", "traceback", "verbosity"}
    local = {flag.name: flag for flag in view.local_flags}
    assert local["topic"].value_type == "stringArray"
    assert local["port"].value_type == "int"
    assert local["port"].default == "1883"
    assert local["host"].default == "localhost"
    assert local["host"].quote_default is True
    assert local["qos"].default == ""


def test_help_command_use_line(root: ZapGroup) -> None:
    view = describe(_child_context(_root_context(root), "help"))
    assert view.use_line == "zap help [command] [flags]"


def test_renderer_is_inherited_from_root() -> None:
    renderer = UsageRenderer(width_probe=lambda: 120)
    parent = ZapGroup("zap", usage_renderer=renderer)
    child = ZapCommand("leaf", callback=lambda: None)
    parent.add_command(child)
    parent_ctx = parent.make_context("zap", [], resilient_parsing=True)
    child_ctx = child.make_context("leaf", [], parent=parent_ctx)
    assert resolve_renderer(child_ctx) is renderer


def test_child_renderer_overrides_parent() -> None:
    own = UsageRenderer(width_probe=lambda: 60)
    parent = ZapGroup("zap", usage_renderer=UsageRenderer())
    child = ZapCommand("leaf", callback=lambda: None, usage_renderer=own)
    parent.add_command(child)
    parent_ctx = parent.make_context("zap", [], resilient_parsing=True)
    assert resolve_renderer(child.make_context("leaf", [], parent=parent_ctx)) is own


def test_default_renderer_without_any_binding() -> None:
    command = ZapCommand("lonely", callback=lambda: None)
    assert resolve_renderer(command.make_context("lonely", [])) is DEFAULT_RENDERER


def test_aliases_resolve_to_commands(root: ZapGroup) -> None:
    ctx = _root_context(root)
    assert root.get_command(ctx, "pub") is root.commands["publish"]
    assert root.get_command(ctx, "sub") is root.commands["subscribe"]
    assert root.get_command(ctx, "nope") is None


def test_alias_context_describes_canonical_path(root: ZapGroup) -> None:
    root_ctx = _root_context(root)
    child = root.get_command(root_ctx, "sub")
    alias_ctx = child.make_context("sub", [], parent=root_ctx, resilient_parsing=True)
    view = describe(alias_ctx)
    assert canonical_path(alias_ctx) == "zap subscribe"
    assert view.command_path == "zap subscribe"
    assert view.use_line == "zap subscribe [flags]"
    assert view.name_and_aliases == "subscribe, sub"


def test_required_options_have_no_default(root: ZapGroup) -> None:
    view = describe(_child_context(_root_context(root), "publish"))
    local = {flag.name: flag for flag in view.local_flags}
    assert (local["topic"].default, local["message"].default) == ("", "")
    assert local["retain"].default == ""


def test_help_option_text_names_the_command(root: ZapGroup) -> None:
    root_ctx = _root_context(root)
    assert {flag.name: flag for flag in describe(root_ctx).local_flags}["help"].usage == "help for zap"
    child_view = describe(_child_context(root_ctx, "stats"))
    assert {flag.name: flag for flag in child_view.local_flags}["help"].usage == "help for stats"


def test_hidden_global_copies_are_not_listed_locally(root: ZapGroup) -> None:
    view = describe(_child_context(_root_context(root), "publish"))
    assert not {"config", "verbosity", "traceback"} & {flag.name for flag in view.local_flags}
    assert {param.name for param in root.commands["publish"].params} >= {"config_path", "verbosity", "traceback"}
