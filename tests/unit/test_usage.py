"""Formatting rules of the data-driven usage renderer."""

from __future__ import annotations

from zap.usage import (
    CommandEntry,
    CommandView,
    FlagUsage,
    UsageRenderer,
    flag_usages,
    format_help,
    format_usage,
    wrapped_flag_usages,
)

HELP_FLAG = FlagUsage("help", shorthand="h", usage="help for zap")
VERSION_FLAG = FlagUsage("version", usage="Display version information")

ROOT_VIEW = CommandView(
    command_path="zap",
    use_line="zap [flags]",
    short="Listen or publish to a MQTT broker",
    long="zap - what happens when technology meets mosquito\n",
    commands=(
        CommandEntry("help", "zap help", "Help about any command", available=False),
        CommandEntry("publish", "zap publish", "Publish a message to a MQTT broker"),
        CommandEntry("secret", "zap secret", "Hidden command", available=False),
    ),
    local_flags=(VERSION_FLAG, HELP_FLAG),
)

ROOT_USAGE = (
    "Usage:\n"
    "  zap [flags]\n"
    "  zap [command]\n"
    "\n"
    "Available Commands:\n"
    "  help        Help about any command\n"
    "  publish     Publish a message to a MQTT broker\n"
    "\n"
    "Flags:\n"
    "  -h, --help      help for zap\n"
    "      --version   Display version information\n"
    "\n"
    'Use "zap [command] --help" for more information about a command.\n'
)


def test_root_usage_layout() -> None:
    assert format_usage(ROOT_VIEW, 79) == ROOT_USAGE


def test_help_prefixes_trimmed_long_description() -> None:
    text = format_help(ROOT_VIEW, 79)
    assert text == "zap - what happens when technology meets mosquito\n\n" + ROOT_USAGE


def test_help_falls_back_to_short_description() -> None:
    view = CommandView(command_path="zap stats", use_line="zap stats", short="Show statistics")
    assert format_help(view, 79).startswith("Show statistics\n\nUsage:\n  zap stats\n")


def test_rendering_is_idempotent() -> None:
    assert format_usage(ROOT_VIEW, 79) == format_usage(ROOT_VIEW, 79)


def test_leaf_usage_lists_aliases_and_global_flags() -> None:
    view = CommandView(
        command_path="zap publish",
        use_line="zap publish [flags]",
        aliases=("pub",),
        local_flags=(FlagUsage("topic", shorthand="t", value_type="string", usage="Topic to publish on"),),
        inherited_flags=(FlagUsage("verbosity", value_type="string", usage="Diagnostics level", default="standard"),),
    )
    assert format_usage(view, 79) == (
        "Usage:\n"
        "  zap publish [flags]\n"
        "\n"
        "Aliases:\n"
        "  publish, pub\n"
        "\n"
        "Flags:\n"
        "  -t, --topic string   Topic to publish on\n"
        "\n"
        "Global Flags:\n"
        "      --verbosity string   Diagnostics level (default standard)\n"
    )


def test_non_runnable_view_omits_use_line() -> None:
    view = CommandView(
        command_path="zap",
        use_line="zap",
        runnable=False,
        commands=(CommandEntry("stats", "zap stats", "Show statistics"),),
    )
    assert format_usage(view, 79).startswith("Usage:\n  zap [command]\n")


def test_additional_help_topics_are_listed() -> None:
    view = CommandView(
        command_path="zap",
        use_line="zap",
        commands=(
            CommandEntry("config", "zap config", "Config file format", available=False, help_topic=True),
        ),
    )
    text = format_usage(view, 79)
    assert "Additional help topics:\n  zap config  Config file format\n" in text
    assert "Available Commands" not in text


def test_name_padding_grows_with_long_names() -> None:
    view = CommandView(
        command_path="zap",
        use_line="zap",
        commands=(
            CommandEntry("a-rather-long-name", "zap a-rather-long-name", "Long"),
            CommandEntry("x", "zap x", "Short"),
        ),
    )
    assert "\n  x                  Short" in format_usage(view, 79)


def test_string_defaults_are_quoted() -> None:
    flag = FlagUsage("host", shorthand="H", value_type="string", usage="Broker host name", default="localhost", quote_default=True)
    assert flag_usages([flag]) == '  -H, --host string   Broker host name (default "localhost")\n'


def test_flags_are_sorted_by_name() -> None:
    text = flag_usages([VERSION_FLAG, HELP_FLAG])
    assert text.index("--help") < text.index("--version")


def test_long_usage_wraps_under_usage_column() -> None:
    flag = FlagUsage(
        "topic",
        shorthand="t",
        value_type="stringArray",
        usage="Topic filter to subscribe to; repeat the flag to listen on several topic filters at once",
    )
    lines = wrapped_flag_usages([flag], 60).rstrip("\n").split("\n")
    column = len(flag.left_column) + 3
    assert len(lines) > 1
    assert all(len(line) <= 60 for line in lines)
    for continuation in lines[1:]:
        assert continuation.startswith(" " * column)
        assert continuation[column] != " "


def test_narrow_terminal_disables_wrapping() -> None:
    flag = FlagUsage("topic", shorthand="t", value_type="stringArray", usage="word " * 20)
    assert len(wrapped_flag_usages([flag], 40).rstrip("\n").split("\n")) == 1
    assert len(wrapped_flag_usages([flag], 0).rstrip("\n").split("\n")) == 1


def test_renderer_wraps_one_column_short_of_terminal() -> None:
    renderer = UsageRenderer(width_probe=lambda: 100)
    assert renderer.flag_width() == 99
    assert renderer.render_usage(ROOT_VIEW) == format_usage(ROOT_VIEW, 99)
    assert renderer.render_help(ROOT_VIEW) == format_help(ROOT_VIEW, 99)


def test_renderer_probes_width_on_every_render() -> None:
    widths = iter([120, 60])
    probed: list[int] = []

    def _probe() -> int:
        width = next(widths)
        probed.append(width)
        return width

    renderer = UsageRenderer(width_probe=_probe)
    renderer.render_usage(ROOT_VIEW)
    renderer.render_usage(ROOT_VIEW)
    assert probed == [120, 60]
