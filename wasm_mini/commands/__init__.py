"""Stage commands."""

from .instantiate import instantiate_command
from .parse import parse_command
from .validate import validate_command

__all__ = ["parse_command", "validate_command", "instantiate_command"]
