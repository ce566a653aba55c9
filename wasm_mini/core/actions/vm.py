"""VM actions for the instantiate pipeline."""

from abc import abstractmethod
from typing import Optional

from ...engine import EngineResult
from ..context import RunContext
from ..guards import vm_guard
from ..result import (
    STATUS_INSTANTIATION_ERROR,
    STATUS_LOAD_ERROR,
    STATUS_VALIDATION_ERROR,
    Stage,
)
from .base import BaseAction


class CreateVm(BaseAction):
    """Acquire a VM context."""

    stage = Stage.INSTANTIATE

    def execute(self, ctx: RunContext) -> Optional[bool]:
        ctx.reporter.verbose("Creating VM context...")
        ctx.vm = ctx.own(vm_guard(ctx.engine))
        return True


class VmOperation(BaseAction):
    """One engine call against the VM, reported with its own status."""

    stage = Stage.INSTANTIATE
    description: str
    failed_status: str

    def execute(self, ctx: RunContext) -> Optional[bool]:
        ctx.reporter.verbose(self.description)
        result = self.call(ctx)
        if not result.ok:
            return ctx.fail(self.failed_status, result)
        return True

    @abstractmethod
    def call(self, ctx: RunContext) -> EngineResult:
        """Run the engine operation against the VM handle."""
        pass


class LoadModule(VmOperation):
    description = "Loading WebAssembly module..."
    failed_status = STATUS_LOAD_ERROR

    def call(self, ctx: RunContext) -> EngineResult:
        return ctx.engine.vm_load_from_file(ctx.vm.handle, ctx.path)


class ValidateLoaded(VmOperation):
    description = "Validating loaded module..."
    failed_status = STATUS_VALIDATION_ERROR

    def call(self, ctx: RunContext) -> EngineResult:
        return ctx.engine.vm_validate(ctx.vm.handle)


class InstantiateModule(VmOperation):
    description = "Instantiating module..."
    failed_status = STATUS_INSTANTIATION_ERROR

    def call(self, ctx: RunContext) -> EngineResult:
        return ctx.engine.vm_instantiate(ctx.vm.handle)
