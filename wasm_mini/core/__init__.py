"""Core infrastructure for the staged module pipeline."""

from .context import RunContext
from .guards import ContextCreationFailed, ResourceGuard
from .options import RunOptions
from .pipeline import run_instantiate, run_parse, run_pipeline, run_validate
from .reporter import NullReporter, Reporter
from .result import (
    EXIT_CLI_ERROR,
    EXIT_OK,
    EXIT_RUNTIME_ERROR,
    PipelineOutcome,
    Stage,
    StageResult,
)
from .router import ROUTES, UnknownVerb, Verb, dispatch, run_verb

__all__ = [
    "RunContext",
    "RunOptions",
    "ContextCreationFailed",
    "ResourceGuard",
    "run_pipeline",
    "run_parse",
    "run_validate",
    "run_instantiate",
    "Reporter",
    "NullReporter",
    "EXIT_OK",
    "EXIT_CLI_ERROR",
    "EXIT_RUNTIME_ERROR",
    "PipelineOutcome",
    "Stage",
    "StageResult",
    "ROUTES",
    "UnknownVerb",
    "Verb",
    "dispatch",
    "run_verb",
]
