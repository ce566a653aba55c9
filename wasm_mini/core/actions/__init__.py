"""Actions for the stage pipelines."""

from .base import BaseAction
from .parse import CreateParser, ParseModule
from .validate import CreateValidator, ValidateModule
from .vm import CreateVm, InstantiateModule, LoadModule, ValidateLoaded, VmOperation

__all__ = [
    "BaseAction",
    "CreateParser",
    "ParseModule",
    "CreateValidator",
    "ValidateModule",
    "CreateVm",
    "VmOperation",
    "LoadModule",
    "ValidateLoaded",
    "InstantiateModule",
]
