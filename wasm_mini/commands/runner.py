"""Shared execution path for the stage commands."""

import click

from ..core import EXIT_CLI_ERROR, Reporter, RunOptions, Verb, run_verb
from ..engine import create_engine
from ..utils import check_module_file


def run_command(ctx: click.Context, verb: Verb, file: str) -> None:
    """Check the input file, run the pipeline for ``verb`` and exit.

    The process exit status is the pipeline outcome's exit code. A missing
    file exits with the CLI error code before any engine resource exists.
    """
    opts = ctx.find_object(RunOptions) or RunOptions()
    reporter = Reporter(verbose=opts.verbose)

    if not check_module_file(file, reporter, opts.warn_extension):
        ctx.exit(EXIT_CLI_ERROR)
    reporter.verbose("File validation passed.")

    outcome = run_verb(verb, file, opts=opts, engine=create_engine(), reporter=reporter)
    ctx.exit(outcome.exit_code)
