"""Engine backend built on Wasmtime."""

import re
from importlib.metadata import PackageNotFoundError, version as package_version
from pathlib import Path
from typing import Optional, Tuple

import wasmtime

from .base import Engine, EngineResult
from .decoder import DecodedModule, DecodeError, decode
from .errors import (
    INSTANTIATION_KEYWORDS,
    LOAD_KEYWORDS,
    VALIDATION_KEYWORDS,
    ErrCode,
    classify,
    match,
)

_CAUSE_PREFIX = re.compile(r"^\d+:\s*")


class _Context:
    """Owns a ``wasmtime.Engine`` until closed."""

    def __init__(self, engine: wasmtime.Engine):
        self.engine: Optional[wasmtime.Engine] = engine

    @property
    def closed(self) -> bool:
        return self.engine is None

    def close(self) -> None:
        self.engine = None


class ParserContext(_Context):
    pass


class ValidatorContext(_Context):
    pass


class Vm(_Context):
    """Engine, store and linker used to load and instantiate one module."""

    def __init__(self, engine: wasmtime.Engine):
        super().__init__(engine)
        self.store: Optional[wasmtime.Store] = wasmtime.Store(engine)
        self.linker: Optional[wasmtime.Linker] = wasmtime.Linker(engine)
        self.decoded: Optional[DecodedModule] = None
        self.module: Optional[wasmtime.Module] = None
        self.instance: Optional[wasmtime.Instance] = None

    def close(self) -> None:
        self.instance = None
        self.module = None
        self.decoded = None
        self.linker = None
        self.store = None
        super().close()


def engine_message(error: Exception) -> Optional[str]:
    """Reduce a multi-line Wasmtime error to its innermost cause."""
    lines = [line.strip() for line in str(error).splitlines() if line.strip()]
    if not lines:
        return None
    return _CAUSE_PREFIX.sub("", lines[-1]) or None


def _read_module(path: str) -> Tuple[EngineResult, Optional[DecodedModule]]:
    try:
        data = Path(path).read_bytes()
    except (FileNotFoundError, IsADirectoryError, NotADirectoryError) as e:
        return EngineResult.error(ErrCode.ILLEGAL_PATH, f"{ErrCode.ILLEGAL_PATH.message}: {e.strerror}"), None
    except OSError as e:
        return EngineResult.error(ErrCode.READ_ERROR, f"{ErrCode.READ_ERROR.message}: {e.strerror}"), None

    try:
        return EngineResult.success(), decode(data, path)
    except DecodeError as e:
        return EngineResult.error(e.code, str(e)), None


def _check_binary(engine: wasmtime.Engine, module: DecodedModule) -> EngineResult:
    """Reject binary-format errors inside section bodies.

    Wasmtime decodes and validates in one pass, so only errors that name a
    decoding problem fail here; the rest are left to validation.
    """
    try:
        wasmtime.Module.validate(engine, module.data)
    except wasmtime.WasmtimeError as e:
        message = engine_message(e)
        code = match(message or "", LOAD_KEYWORDS)
        if code is not None:
            return EngineResult.error(code, message)
    return EngineResult.success()


class WasmtimeEngine(Engine):
    """Wasmtime-backed engine.

    Parsing is structural decoding followed by Wasmtime's binary reader;
    validation and instantiation are done by Wasmtime itself. Instantiation
    uses a linker with no host imports.
    """

    name = "Wasmtime"

    def version(self) -> str:
        try:
            return package_version("wasmtime")
        except PackageNotFoundError:
            return "unknown"

    def _new_engine(self) -> Optional[wasmtime.Engine]:
        try:
            return wasmtime.Engine()
        except wasmtime.WasmtimeError:
            return None

    # Parser
    def create_parser(self) -> Optional[ParserContext]:
        engine = self._new_engine()
        return ParserContext(engine) if engine is not None else None

    def parse_from_file(self, parser: ParserContext, path: str) -> Tuple[EngineResult, Optional[DecodedModule]]:
        result, module = _read_module(path)
        if result.ok:
            result = _check_binary(parser.engine, module)
        return result, module

    def delete_parser(self, parser: ParserContext) -> None:
        parser.close()

    def delete_module(self, module: DecodedModule) -> None:
        module.sections.clear()

    # Validator
    def create_validator(self) -> Optional[ValidatorContext]:
        engine = self._new_engine()
        return ValidatorContext(engine) if engine is not None else None

    def validate(self, validator: ValidatorContext, module: DecodedModule) -> EngineResult:
        try:
            wasmtime.Module.validate(validator.engine, module.data)
        except wasmtime.WasmtimeError as e:
            return self._failure(e, VALIDATION_KEYWORDS + LOAD_KEYWORDS, ErrCode.INVALID_MODULE)
        return EngineResult.success()

    def delete_validator(self, validator: ValidatorContext) -> None:
        validator.close()

    # VM
    def create_vm(self) -> Optional[Vm]:
        engine = self._new_engine()
        if engine is None:
            return None
        try:
            return Vm(engine)
        except wasmtime.WasmtimeError:
            return None

    def vm_load_from_file(self, vm: Vm, path: str) -> EngineResult:
        result, decoded = _read_module(path)
        if result.ok:
            result = _check_binary(vm.engine, decoded)
        vm.decoded = decoded if result.ok else None
        return result

    def vm_validate(self, vm: Vm) -> EngineResult:
        if vm.decoded is None:
            return EngineResult.error(ErrCode.WRONG_VM_WORKFLOW)
        try:
            vm.module = wasmtime.Module(vm.engine, vm.decoded.data)
        except wasmtime.WasmtimeError as e:
            return self._failure(e, VALIDATION_KEYWORDS + LOAD_KEYWORDS, ErrCode.INVALID_MODULE)
        return EngineResult.success()

    def vm_instantiate(self, vm: Vm) -> EngineResult:
        if vm.module is None:
            return EngineResult.error(ErrCode.WRONG_VM_WORKFLOW)
        try:
            vm.instance = vm.linker.instantiate(vm.store, vm.module)
        except wasmtime.Trap as e:
            return EngineResult.error(ErrCode.RUNTIME_ERROR, engine_message(e))
        except wasmtime.WasmtimeError as e:
            return self._failure(e, INSTANTIATION_KEYWORDS, ErrCode.INSTANTIATION_FAILED)
        return EngineResult.success()

    def delete_vm(self, vm: Vm) -> None:
        vm.close()

    @staticmethod
    def _failure(error: Exception, keywords, fallback: ErrCode) -> EngineResult:
        message = engine_message(error)
        code = classify(message or "", keywords, fallback)
        return EngineResult.error(code, message)
