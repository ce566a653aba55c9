"""Context object for managing state through the pipeline."""

from contextlib import ExitStack
from typing import Optional, Union

from ..engine import Engine, EngineResult
from .guards import ResourceGuard
from .options import RunOptions
from .reporter import NullReporter, Reporter
from .result import StageResult


class RunContext:
    """Shared context for one pipeline run.

    This context is passed through all actions and accumulates the guarded
    engine handles as the pipeline progresses. Handles are registered on
    ``stack`` so they are released in reverse order when the run ends.
    """

    def __init__(
        self,
        path: str,
        engine: Engine,
        opts: Optional[RunOptions] = None,
        reporter: Union[Reporter, NullReporter, None] = None,
    ):
        self._path = path
        self.engine = engine
        self.opts = opts or RunOptions()
        self.reporter = reporter or NullReporter()
        self.stack: Optional[ExitStack] = None

        # State accumulated during pipeline execution
        self.parser: Optional[ResourceGuard] = None
        self.module: Optional[ResourceGuard] = None
        self.validator: Optional[ResourceGuard] = None
        self.vm: Optional[ResourceGuard] = None

        # Set by the action that stopped the pipeline
        self.failed_status: Optional[str] = None
        self.failure: Optional[StageResult] = None

    @property
    def path(self) -> str:
        return self._path

    def own(self, guard: ResourceGuard) -> ResourceGuard:
        """Register a guard for release when the run ends."""
        return self.stack.enter_context(guard)

    def fail(self, status: str, result: EngineResult) -> bool:
        """Record an engine failure and signal the pipeline to stop."""
        self.failed_status = status
        self.failure = StageResult.from_engine(result)
        return False
