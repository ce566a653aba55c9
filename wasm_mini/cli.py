"""Main CLI entry point."""

import click

from . import PROGRAM_NAME, __version__
from .commands import instantiate_command, parse_command, validate_command
from .core import EXIT_CLI_ERROR, RunOptions
from .engine import create_engine
from .settings import load_settings

CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])


class StageGroup(click.Group):
    """Command group that exits with the CLI error code on usage errors.

    Covers errors raised while parsing the group's own options, resolving
    the command name and parsing the command's arguments.
    """

    def make_context(self, info_name, args, parent=None, **extra):
        try:
            return super().make_context(info_name, args, parent=parent, **extra)
        except click.UsageError as e:
            e.exit_code = EXIT_CLI_ERROR
            raise

    def invoke(self, ctx):
        try:
            return super().invoke(ctx)
        except click.UsageError as e:
            e.exit_code = EXIT_CLI_ERROR
            raise


def print_version(ctx: click.Context, param, value) -> None:
    if not value or ctx.resilient_parsing:
        return
    engine = create_engine()
    click.echo(f"{PROGRAM_NAME} version {__version__}")
    click.echo(f"{engine.name} version: {engine.version()}")
    ctx.exit()


@click.group(cls=StageGroup, context_settings=CONTEXT_SETTINGS, no_args_is_help=False)
@click.option(
    "-v", "--version",
    is_flag=True,
    callback=print_version,
    expose_value=False,
    is_eager=True,
    help="Show version information.",
)
@click.option("--verbose", is_flag=True, default=False, help="Enable verbose output.")
@click.pass_context
def cli(ctx: click.Context, verbose: bool):
    """A mini CLI tool for WebAssembly modules.

    \b
    Examples:
      wasm-mini parse example.wasm
      wasm-mini validate example.wasm
      wasm-mini --verbose instantiate example.wasm
    """
    settings = load_settings()
    ctx.obj = RunOptions(
        verbose=verbose or settings.verbose,
        warn_extension=settings.warn_extension,
    )


cli.add_command(parse_command)
cli.add_command(validate_command)
cli.add_command(instantiate_command)


def main():
    cli(prog_name=PROGRAM_NAME)


if __name__ == "__main__":
    main()
