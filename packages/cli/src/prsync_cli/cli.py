"""CLI entry point for prsync.

Commands:
  sync     fetch a PR's review conversation and write it to disk (default)
  resolve  mark a synced entry as done, skip or in_progress on GitHub
"""

from __future__ import annotations

import importlib.metadata
import logging

import click
from rich.console import Console
from rich.logging import RichHandler

from prsync_cli.commands.resolve import resolve_cmd
from prsync_cli.commands.sync import sync_cmd


class DefaultCommandGroup(click.Group):
    """A group that falls back to ``default_command`` when no subcommand is named.

    ``prsync 123`` behaves like ``prsync sync 123``. Leading options that belong
    to the group itself are left in front of the inserted command name.
    """

    default_command = "sync"

    def parse_args(self, ctx: click.Context, args: list[str]) -> list[str]:
        takes_value: dict[str, bool] = {}
        for param in self.get_params(ctx):
            if isinstance(param, click.Option):
                for name in param.opts + param.secondary_opts:
                    takes_value[name] = not (param.is_flag or param.count)

        index = 0
        while index < len(args):
            name = args[index].split("=", 1)[0]
            if name not in takes_value:
                break
            index += 1 if ("=" in args[index] or not takes_value[name]) else 2

        if index >= len(args) or args[index] not in self.commands:
            args = [*args[:index], self.default_command, *args[index:]]
        return super().parse_args(ctx, args)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _package_version() -> str:
    try:
        return importlib.metadata.version("prsync")
    except importlib.metadata.PackageNotFoundError:
        return "0.0.0"


@click.group(cls=DefaultCommandGroup)
@click.version_option(version=_package_version(), prog_name="prsync")
@click.option(
    "--config",
    "config_path",
    default=".prsync.yml",
    show_default=True,
    help="Path to the configuration file.",
    envvar="PRSYNC_CONFIG",
)
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
@click.pass_context
def main(ctx: click.Context, config_path: str, verbose: bool):
    """Sync PR review conversations for AI-assisted review handling."""
    from prsync_core.config import load_config
    from prsync_cli.auth import resolve_github_token

    _configure_logging(verbose)
    ctx.ensure_object(dict)

    try:
        config = load_config(config_path)
    except (OSError, ValueError) as e:
        raise click.ClickException(f"Could not load {config_path}: {e}") from e

    # Resolve token early so both commands share the same resolution.
    token = resolve_github_token()
    if token:
        config["github_token"] = token

    ctx.obj["config"] = config


main.add_command(sync_cmd)
main.add_command(resolve_cmd)
