"""Validator actions."""

from typing import Optional

from ..context import RunContext
from ..guards import validator_guard
from ..result import STATUS_INVALID, Stage
from .base import BaseAction


class CreateValidator(BaseAction):
    """Acquire a validator context once a module has been parsed."""

    stage = Stage.VALIDATE

    def execute(self, ctx: RunContext) -> Optional[bool]:
        ctx.reporter.verbose("Creating validator context...")
        ctx.validator = ctx.own(validator_guard(ctx.engine))
        return True


class ValidateModule(BaseAction):
    """Validate the parsed module."""

    stage = Stage.VALIDATE

    def execute(self, ctx: RunContext) -> Optional[bool]:
        ctx.reporter.verbose("Validating WebAssembly module...")
        result = ctx.engine.validate(ctx.validator.handle, ctx.module.handle)
        if not result.ok:
            return ctx.fail(STATUS_INVALID, result)
        return True
