"""Command line entry point of ``swctl``."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from swctl.completion import script_for
from swctl.duration import choose_timezone

log = logging.getLogger("swctl")

VERSION = "dev"
AUTO_COMPLETE_FLAG = "--auto_complete"

_USAGE_TEXT = """Commands in SkyWalking CLI are organized into two levels,
in the form of "swctl --option <level1> --option <level2> --option",
there are options in each level, which should follow right after
the corresponding command, take the following command as example:

\t$ swctl --debug service list --start="2019-11-11" --end="2019-11-12"

where "--debug" is is an option of "swctl", and since the "swctl" is
a top-level command, "--debug" is also called global option, and "--start"
is an option of the third level command "list", there is no option for the
second level command "service".

Generally, the second level commands are entity related, there are entities
like "service", "service instance", "metrics" in SkyWalking, and we have
corresponding sub-command like "service"; the third level commands are
operations on the entities, such as "list" command will list all the
services, service instances, etc."""


@dataclass(frozen=True)
class _GlobalFlag:
    name: str
    default: Any
    help: str
    metavar: str | None = None
    boolean: bool = False

    @property
    def dest(self) -> str:
        return self.name.replace("-", "_")


_GLOBAL_FLAGS = (
    _GlobalFlag("config", "~/.skywalking.yml", "file path of the default configurations.", "path"),
    _GlobalFlag(
        "base-url",
        "http://127.0.0.1:12800/graphql",
        "base url of the OAP backend graphql service",
        "url",
    ),
    _GlobalFlag("grpc-addr", "127.0.0.1:11800", "backend gRPC service address", "<host:port>"),
    _GlobalFlag("username", "", "username of basic authorization", "username"),
    _GlobalFlag("password", "", "password of basic authorization", "password"),
    _GlobalFlag(
        "authorization",
        "",
        "authorization header, can be something like 'Basic base64(username:password)' "
        "or 'Bearer jwt-token'; if it is set, --username and --password are ignored",
        "authorization",
    ),
    _GlobalFlag(
        "timezone",
        "",
        "specifies the timezone where --start and --end are based, in the form of +0800. "
        "If --timezone is given in the command line option, then it's used directly. "
        "Otherwise the backend timezone is used when known, else the local one.",
        "timezone",
    ),
    _GlobalFlag(
        "debug",
        False,
        "enable debug mode, will print more detailed information at runtime",
        boolean=True,
    ),
    _GlobalFlag(
        "display",
        "",
        "display style of the result, supported styles are: json, yaml, table, graph.",
        "style",
    ),
)


@dataclass(frozen=True)
class _Node:
    aliases: tuple[str, ...] = ()
    children: dict[str, _Node] = field(default_factory=dict)


_COMMAND_TREE: dict[str, _Node] = {
    "completion": _Node(
        children={
            "bash": _Node(aliases=("b",)),
            "powershell": _Node(aliases=("p",)),
        }
    ),
}

Before = Callable[[argparse.Namespace], None]


def expand_file_path(path: str) -> str:
    """Expand a leading ``~`` in ``path`` to the user's home directory."""
    return os.path.expanduser(path)


def load_config(path: str | os.PathLike[str]) -> dict[str, Any]:
    """Load global option values from a YAML file.

    A missing file gives an empty dict. Raises ``ValueError`` when the file
    does not hold a mapping, ``yaml.YAMLError`` when it is not valid YAML and
    ``OSError`` when it cannot be read.
    """
    try:
        text = Path(path).read_text(encoding="utf-8")
    except FileNotFoundError:
        log.debug("open %s no such file, skip loading configuration file", path)
        return {}
    log.debug("Using configurations:\n%s", text)
    data = yaml.safe_load(text)
    if data is None:
        return {}
    if not isinstance(data, Mapping):
        raise ValueError(f"configuration file {path} must hold a mapping of options")
    return {str(key): value for key, value in data.items()}


def _apply_timezone(ctx: argparse.Namespace) -> None:
    explicit = getattr(ctx, "timezone", None) or None
    chosen = choose_timezone(explicit, getattr(ctx, "server_timezone", None))
    if chosen is not None:
        ctx.timezone = chosen


def before_chain(*functions: Before) -> Before:
    """Chain steps to run before a command, applying the timezone first.

    The first step to raise stops the chain.
    """

    def run(ctx: argparse.Namespace) -> None:
        _apply_timezone(ctx)
        for function in functions:
            function(ctx)

    return run


def _set_up_logging(ctx: argparse.Namespace) -> None:
    if getattr(ctx, "debug", None):
        log.setLevel(logging.DEBUG)
        log.debug("Debug mode is enabled")


def _expand_config(ctx: argparse.Namespace) -> None:
    ctx.config = expand_file_path(ctx.config or _GLOBAL_FLAGS[0].default)


def _try_config(ctx: argparse.Namespace) -> None:
    values = load_config(ctx.config)
    for flag in _GLOBAL_FLAGS:
        if getattr(ctx, flag.dest, None) is None:
            setattr(ctx, flag.dest, values.get(flag.name, flag.default))


def _print_completion(ctx: argparse.Namespace) -> None:
    sys.stdout.write(script_for(ctx.shell))


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser of the command line tool."""
    parser = argparse.ArgumentParser(
        prog="swctl",
        description="The CLI (Command Line Interface) for Apache SkyWalking.",
        epilog=_USAGE_TEXT,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=f"swctl version {VERSION}")
    for flag in _GLOBAL_FLAGS:
        if flag.boolean:
            parser.add_argument(
                f"--{flag.name}", dest=flag.dest, action="store_true", default=None, help=flag.help
            )
        else:
            parser.add_argument(
                f"--{flag.name}", dest=flag.dest, default=None, metavar=flag.metavar, help=flag.help
            )

    commands = parser.add_subparsers(dest="command", metavar="<command>")
    completion = commands.add_parser(
        "completion", help="Output shell completion code for bash and powershell"
    )
    completion.set_defaults(help_parser=completion)
    shells = completion.add_subparsers(dest="shell_command", metavar="<shell>")
    for shell, node in _COMMAND_TREE["completion"].children.items():
        sub = shells.add_parser(
            shell,
            aliases=list(node.aliases),
            help=f"Output shell completion code for {shell}",
        )
        sub.set_defaults(handler=_print_completion, shell=shell)
    return parser


def _find_child(children: Mapping[str, _Node], word: str) -> _Node | None:
    for name, node in children.items():
        if word == name or word in node.aliases:
            return node
    return None


def _completions(words: Sequence[str]) -> list[str]:
    children: Mapping[str, _Node] = _COMMAND_TREE
    at_top = True
    for word in words:
        if word.startswith("-"):
            continue
        node = _find_child(children, word)
        if node is not None:
            children = node.children
            at_top = False
    if words and words[-1].startswith("-"):
        return [f"--{flag.name}" for flag in _GLOBAL_FLAGS] if at_top else []
    return list(children)


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command line tool and return its exit status."""
    logging.basicConfig(format="%(message)s")
    args = list(sys.argv[1:] if argv is None else argv)

    if AUTO_COMPLETE_FLAG in args:
        words = [arg for arg in args if arg != AUTO_COMPLETE_FLAG]
        for candidate in _completions(words):
            print(candidate)
        return 0

    parser = build_parser()
    ctx = parser.parse_args(args)
    try:
        before_chain(_set_up_logging, _expand_config, _try_config)(ctx)
        handler = getattr(ctx, "handler", None)
        if handler is None:
            getattr(ctx, "help_parser", parser).print_help()
            return 0
        handler(ctx)
    except (OSError, ValueError, yaml.YAMLError) as exc:
        log.error("%s", exc)
        return 1
    return 0