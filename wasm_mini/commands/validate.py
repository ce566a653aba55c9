"""Validate command implementation."""

import click

from ..core import Verb
from ..utils import handle_errors
from .runner import run_command


@click.command("validate")
@click.argument("file")
@click.pass_context
@handle_errors
def validate_command(ctx: click.Context, file: str):
    """Validate a WebAssembly module.

    Parses the module first. A parse failure is reported as
    FAILED (Parse Error); a module that parses but breaks validation rules
    is reported as INVALID.
    """
    run_command(ctx, Verb.VALIDATE, file)
