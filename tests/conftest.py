"""Pytest configuration and shared fixtures."""
import os
import tempfile
from collections import Counter
from pathlib import Path
from typing import Dict, Iterable, Optional

import pytest
from click.testing import CliRunner

from wasm_mini.engine import Engine, EngineResult, ErrCode

from .samples import (
    BAD_VALTYPE_MODULE,
    GOOD_MODULE,
    ILLEGAL_OPCODE_MODULE,
    TRUNCATED_BODY_MODULE,
    TRUNCATED_MODULE,
    TYPE_MISMATCH_MODULE,
    UNKNOWN_IMPORT_MODULE,
)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def temp_config(monkeypatch):
    """Create temporary config directory for tests."""
    with tempfile.TemporaryDirectory() as temp_dir:
        config_dir = os.path.join(temp_dir, ".wasm-mini")
        os.makedirs(config_dir, exist_ok=True)
        monkeypatch.setenv("HOME", temp_dir)
        monkeypatch.delenv("WASM_MINI_VERBOSE", raising=False)
        monkeypatch.delenv("WASM_MINI_WARN_EXTENSION", raising=False)
        yield Path(config_dir)


@pytest.fixture
def wasm_files(tmp_path) -> Dict[str, Path]:
    """Sample modules written to disk."""
    files = {
        "good": GOOD_MODULE,
        "type-mismatch": TYPE_MISMATCH_MODULE,
        "truncated": TRUNCATED_MODULE,
        "unknown-import": UNKNOWN_IMPORT_MODULE,
        "illegal-opcode": ILLEGAL_OPCODE_MODULE,
        "bad-valtype": BAD_VALTYPE_MODULE,
        "truncated-body": TRUNCATED_BODY_MODULE,
    }
    paths = {}
    for name, data in files.items():
        path = tmp_path / f"{name}.wasm"
        path.write_bytes(data)
        paths[name] = path
    return paths


class Handle:
    def __init__(self, kind: str):
        self.kind = kind

    def __repr__(self):
        return f"Handle({self.kind})"


class RecordingEngine(Engine):
    """Engine double that records every call and counts handles.

    Args:
        refuse: Resource kinds whose creation returns None
            ("parser", "validator", "vm")
        failures: Operation name -> EngineResult to return instead of success
            ("parse", "validate", "vm_load", "vm_validate", "vm_instantiate")
        partial_module: Produce a module handle even when parsing fails
    """

    name = "Recording"

    def __init__(
        self,
        refuse: Iterable[str] = (),
        failures: Optional[Dict[str, EngineResult]] = None,
        partial_module: bool = False,
    ):
        self.refuse = set(refuse)
        self.failures = dict(failures or {})
        self.partial_module = partial_module
        self.calls = []
        self.acquired = Counter()
        self.released = Counter()
        self.live = set()

    def version(self) -> str:
        return "1.0.0"

    def _create(self, kind: str):
        self.calls.append(f"create_{kind}")
        if kind in self.refuse:
            return None
        return self._track(kind)

    def _track(self, kind: str) -> Handle:
        handle = Handle(kind)
        self.acquired[kind] += 1
        self.live.add(handle)
        return handle

    def _delete(self, kind: str, handle: Handle) -> None:
        self.calls.append(f"delete_{kind}")
        assert handle in self.live, f"{kind} released twice"
        self.live.remove(handle)
        self.released[kind] += 1

    def _operate(self, name: str, *handles: Handle) -> EngineResult:
        self.calls.append(name)
        for handle in handles:
            assert handle in self.live, f"{name} used a released {handle.kind}"
        return self.failures.get(name, EngineResult.success())

    def create_parser(self):
        return self._create("parser")

    def parse_from_file(self, parser, path):
        result = self._operate("parse", parser)
        if result.ok or self.partial_module:
            return result, self._track("module")
        return result, None

    def delete_parser(self, parser):
        self._delete("parser", parser)

    def delete_module(self, module):
        self._delete("module", module)

    def create_validator(self):
        return self._create("validator")

    def validate(self, validator, module):
        return self._operate("validate", validator, module)

    def delete_validator(self, validator):
        self._delete("validator", validator)

    def create_vm(self):
        return self._create("vm")

    def vm_load_from_file(self, vm, path):
        return self._operate("vm_load", vm)

    def vm_validate(self, vm):
        return self._operate("vm_validate", vm)

    def vm_instantiate(self, vm):
        return self._operate("vm_instantiate", vm)

    def delete_vm(self, vm):
        self._delete("vm", vm)


@pytest.fixture
def recording_engine():
    """Factory for RecordingEngine instances."""
    return RecordingEngine


@pytest.fixture
def engine_error():
    """Build a failed EngineResult."""
    def build(code: ErrCode = ErrCode.TYPE_CHECK_FAILED, message: Optional[str] = None) -> EngineResult:
        return EngineResult.error(code, message)
    return build
