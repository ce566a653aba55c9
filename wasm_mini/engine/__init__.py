"""Module-processing engine boundary."""

from .base import Engine, EngineResult
from .errors import ErrCode


def create_engine() -> Engine:
    """Return the default engine backend."""
    from .wasmtime_engine import WasmtimeEngine

    return WasmtimeEngine()


__all__ = ["Engine", "EngineResult", "ErrCode", "create_engine"]
