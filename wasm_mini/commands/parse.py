"""Parse command implementation."""

import click

from ..core import Verb
from ..utils import handle_errors
from .runner import run_command


@click.command("parse")
@click.argument("file")
@click.pass_context
@handle_errors
def parse_command(ctx: click.Context, file: str):
    """Parse a WebAssembly module.

    \b
    Examples:
      wasm-mini parse example.wasm
    """
    run_command(ctx, Verb.PARSE, file)
