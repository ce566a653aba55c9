"""Verb to pipeline entry point routing."""

from enum import Enum
from typing import Callable, Dict, Optional

from ..engine import Engine, create_engine
from .context import RunContext
from .options import RunOptions
from .pipeline import run_instantiate, run_parse, run_validate
from .reporter import Reporter
from .result import PipelineOutcome


class UnknownVerb(ValueError):
    """Raised for a verb that has no pipeline entry point."""


class Verb(str, Enum):
    PARSE = "parse"
    VALIDATE = "validate"
    INSTANTIATE = "instantiate"

    @classmethod
    def from_name(cls, name: str) -> "Verb":
        try:
            return cls(name)
        except ValueError:
            raise UnknownVerb(f"Unknown command '{name}'.") from None


ROUTES: Dict[Verb, Callable[[RunContext], PipelineOutcome]] = {
    Verb.PARSE: run_parse,
    Verb.VALIDATE: run_validate,
    Verb.INSTANTIATE: run_instantiate,
}


def dispatch(verb: Verb, ctx: RunContext) -> PipelineOutcome:
    """Run the pipeline entry point for ``verb``."""
    return ROUTES[verb](ctx)


def run_verb(
    verb: Verb,
    path: str,
    opts: Optional[RunOptions] = None,
    engine: Optional[Engine] = None,
    reporter: Optional[Reporter] = None,
) -> PipelineOutcome:
    """Build a fresh context for one invocation and dispatch it."""
    opts = opts or RunOptions()
    ctx = RunContext(
        path,
        engine or create_engine(),
        opts=opts,
        reporter=reporter or Reporter(verbose=opts.verbose),
    )
    return dispatch(verb, ctx)
