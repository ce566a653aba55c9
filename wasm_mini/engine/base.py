"""Capability contract of a module-processing engine."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Optional, Tuple

from .errors import ErrCode


@dataclass(frozen=True)
class EngineResult:
    """Result of one engine operation."""

    code: int = ErrCode.SUCCESS
    message: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.code == ErrCode.SUCCESS

    @classmethod
    def success(cls) -> "EngineResult":
        return cls()

    @classmethod
    def error(cls, code: ErrCode, message: Optional[str] = None) -> "EngineResult":
        return cls(code=int(code), message=message or code.message)


class Engine(ABC):
    """Base class for module-processing engines.

    Each resource follows a fallible create, fallible operate and idempotent
    delete discipline. ``create_*`` methods return ``None`` when the engine
    refuses to allocate. Operations report failures through ``EngineResult``
    and never raise for a bad module.
    """

    name: str = "engine"

    @abstractmethod
    def version(self) -> str:
        """Return the engine version string."""

    # Parser
    @abstractmethod
    def create_parser(self) -> Optional[Any]:
        pass

    @abstractmethod
    def parse_from_file(self, parser: Any, path: str) -> Tuple[EngineResult, Optional[Any]]:
        """Parse the module at ``path``.

        Returns:
            Tuple of (result, module handle). The handle may be set even
            when the result is a failure; the caller owns it either way.
        """

    @abstractmethod
    def delete_parser(self, parser: Any) -> None:
        pass

    @abstractmethod
    def delete_module(self, module: Any) -> None:
        pass

    # Validator
    @abstractmethod
    def create_validator(self) -> Optional[Any]:
        pass

    @abstractmethod
    def validate(self, validator: Any, module: Any) -> EngineResult:
        pass

    @abstractmethod
    def delete_validator(self, validator: Any) -> None:
        pass

    # VM
    @abstractmethod
    def create_vm(self) -> Optional[Any]:
        pass

    @abstractmethod
    def vm_load_from_file(self, vm: Any, path: str) -> EngineResult:
        pass

    @abstractmethod
    def vm_validate(self, vm: Any) -> EngineResult:
        pass

    @abstractmethod
    def vm_instantiate(self, vm: Any) -> EngineResult:
        """Instantiate the loaded module. Never calls any exported function."""

    @abstractmethod
    def delete_vm(self, vm: Any) -> None:
        pass
