"""CLI utilities and decorators."""
from functools import wraps
from pathlib import Path

import click
from rich.console import Console

console = Console()
err_console = Console(stderr=True)

WASM_EXTENSION = ".wasm"


def handle_errors(func):
    """Decorator to report unexpected command errors as runtime failures."""
    @wraps(func)
    def wrapper(*args, **kwargs):
        from .core.result import EXIT_RUNTIME_ERROR

        try:
            return func(*args, **kwargs)
        except (click.exceptions.Exit, click.ClickException):
            raise
        except Exception as e:
            err_console.print(f"Unexpected error: {e}", markup=False, highlight=False, soft_wrap=True)
            raise click.exceptions.Exit(EXIT_RUNTIME_ERROR)
    return wrapper


def has_wasm_extension(path: str) -> bool:
    return path.endswith(WASM_EXTENSION)


def check_module_file(path: str, reporter, warn_extension: bool = True) -> bool:
    """Check the input path before any engine resource is touched.

    A missing file is an error; a missing ``.wasm`` extension only warns.

    Returns:
        True if the file can be handed to the pipeline, False otherwise
    """
    if not Path(path).is_file():
        reporter.error(f"File not found: {path}")
        return False

    if warn_extension and not has_wasm_extension(path):
        reporter.warning(f"File does not have .wasm extension: {path}")

    return True
