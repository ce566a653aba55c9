"""Scoped ownership of engine handles.

Every engine handle is wrapped in a ``ResourceGuard`` as soon as it exists.
A guard releases its handle exactly once, whichever way control leaves the
owning scope. Guards are meant to be entered on a ``contextlib.ExitStack``
so teardown runs in reverse order of acquisition.
"""

from typing import Any, Callable, Optional

from ..engine import Engine

PARSER_CONTEXT = "parser context"
MODULE_HANDLE = "module"
VALIDATOR_CONTEXT = "validator context"
VM_CONTEXT = "VM context"


class ContextCreationFailed(Exception):
    """The engine refused to allocate a resource."""

    def __init__(self, kind: str):
        self.kind = kind
        super().__init__(f"Failed to create {kind}")


class ResourceGuard:
    """Owns one engine handle until released."""

    def __init__(self, kind: str, handle: Optional[Any], release: Callable[[Any], None]):
        self.kind = kind
        self._handle = handle
        self._release = release
        self.released = False

    @property
    def handle(self) -> Any:
        if self.released:
            raise RuntimeError(f"{self.kind} used after release")
        return self._handle

    def release(self) -> None:
        """Release the handle. Later calls do nothing."""
        if self.released:
            return
        self.released = True
        handle, self._handle = self._handle, None
        if handle is not None:
            self._release(handle)

    def __enter__(self) -> "ResourceGuard":
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        self.release()
        return False


def _acquire(kind: str, create: Callable[[], Optional[Any]], release: Callable[[Any], None]) -> ResourceGuard:
    handle = create()
    if handle is None:
        raise ContextCreationFailed(kind)
    return ResourceGuard(kind, handle, release)


def parser_guard(engine: Engine) -> ResourceGuard:
    return _acquire(PARSER_CONTEXT, engine.create_parser, engine.delete_parser)


def validator_guard(engine: Engine) -> ResourceGuard:
    return _acquire(VALIDATOR_CONTEXT, engine.create_validator, engine.delete_validator)


def vm_guard(engine: Engine) -> ResourceGuard:
    return _acquire(VM_CONTEXT, engine.create_vm, engine.delete_vm)


def module_guard(engine: Engine, module: Optional[Any]) -> ResourceGuard:
    """Adopt a module handle produced by parsing.

    The handle may be ``None`` (nothing was produced) or a partial module
    left behind by a failed parse; either way the guard owns it.
    """
    return ResourceGuard(MODULE_HANDLE, module, engine.delete_module)
