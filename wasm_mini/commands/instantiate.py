"""Instantiate command implementation."""

import click

from ..core import Verb
from ..utils import handle_errors
from .runner import run_command


@click.command("instantiate")
@click.argument("file")
@click.pass_context
@handle_errors
def instantiate_command(ctx: click.Context, file: str):
    """Instantiate a WebAssembly module.

    \b
    Loads, validates and instantiates the module in a fresh VM.
    No function inside the module is called.

    \b
    Examples:
      wasm-mini --verbose instantiate example.wasm
    """
    run_command(ctx, Verb.INSTANTIATE, file)
