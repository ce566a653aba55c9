"""Pipeline orchestrator for the parse, validate and instantiate stages."""

from contextlib import ExitStack
from typing import List

from .actions import (
    BaseAction,
    CreateParser,
    CreateValidator,
    CreateVm,
    InstantiateModule,
    LoadModule,
    ParseModule,
    ValidateLoaded,
    ValidateModule,
)
from .context import RunContext
from .guards import ContextCreationFailed
from .result import (
    STATUS_FAILED,
    STATUS_PARSE_ERROR,
    STATUS_READY,
    STATUS_SUCCESS,
    STATUS_VALID,
    PipelineOutcome,
    Stage,
    StageResult,
)


def run_pipeline(ctx: RunContext, stage: Stage, actions: List[BaseAction], success_status: str) -> PipelineOutcome:
    """Execute a sequence of actions with the given context.

    Args:
        ctx: The context object containing state and dependencies
        stage: Stage requested by the caller (record header)
        actions: Actions to execute in order
        success_status: Status token reported when every action succeeds

    Returns:
        The outcome of the run, after exactly one record has been reported

    The pipeline will:
    1. Execute each action in sequence
    2. Stop at the first action that returns False or cannot acquire a handle
    3. Release every acquired handle in reverse order
    4. Report the outcome
    """
    ctx.reporter.verbose(f"{ctx.engine.name} version: {ctx.engine.version()}")
    ctx.reporter.verbose(f"Processing file: {ctx.path}")

    outcome = None
    try:
        with ExitStack() as stack:
            ctx.stack = stack
            for action in actions:
                try:
                    result = action.execute(ctx)
                except ContextCreationFailed as e:
                    outcome = PipelineOutcome(stage, action.stage, STATUS_FAILED, StageResult.failed(None, str(e)))
                    break
                if result is False:
                    outcome = PipelineOutcome(stage, action.stage, ctx.failed_status, ctx.failure)
                    break
    finally:
        ctx.stack = None

    if outcome is None:
        ctx.reporter.verbose(f"{stage.noun} completed successfully.")
        outcome = PipelineOutcome(stage, stage, success_status, StageResult.success())

    ctx.reporter.report(ctx.path, outcome)
    return outcome


def run_parse(ctx: RunContext) -> PipelineOutcome:
    """Parse: parser context -> parse."""
    actions = [CreateParser(), ParseModule(STATUS_FAILED)]
    return run_pipeline(ctx, Stage.PARSE, actions, STATUS_SUCCESS)


def run_validate(ctx: RunContext) -> PipelineOutcome:
    """Validate: parse -> validator context -> validate."""
    actions = [
        CreateParser(),
        ParseModule(STATUS_PARSE_ERROR),
        CreateValidator(),
        ValidateModule(),
    ]
    return run_pipeline(ctx, Stage.VALIDATE, actions, STATUS_VALID)


def run_instantiate(ctx: RunContext) -> PipelineOutcome:
    """Instantiate: VM context -> load -> validate -> instantiate.

    No function inside the module is invoked.
    """
    actions = [CreateVm(), LoadModule(), ValidateLoaded(), InstantiateModule()]
    return run_pipeline(ctx, Stage.INSTANTIATE, actions, STATUS_READY)
