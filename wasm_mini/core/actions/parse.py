"""Parser actions."""

from typing import Optional

from ..context import RunContext
from ..guards import module_guard, parser_guard
from .base import BaseAction


class CreateParser(BaseAction):
    """Acquire a parser context."""

    def execute(self, ctx: RunContext) -> Optional[bool]:
        ctx.reporter.verbose("Creating parser context...")
        ctx.parser = ctx.own(parser_guard(ctx.engine))
        return True


class ParseModule(BaseAction):
    """Parse the module file into a module handle.

    The produced handle is adopted before the result is inspected, since a
    failed parse can still leave a partial module behind.
    """

    def __init__(self, failed_status: str):
        self.failed_status = failed_status

    def execute(self, ctx: RunContext) -> Optional[bool]:
        ctx.reporter.verbose("Parsing WebAssembly module...")
        result, module = ctx.engine.parse_from_file(ctx.parser.handle, ctx.path)
        ctx.module = ctx.own(module_guard(ctx.engine, module))

        if not result.ok:
            return ctx.fail(self.failed_status, result)
        return True
