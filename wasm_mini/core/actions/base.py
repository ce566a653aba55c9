"""Base action class for the pipeline."""

from abc import ABC, abstractmethod
from typing import Optional

from ..context import RunContext
from ..result import Stage


class BaseAction(ABC):
    """Base class for all pipeline actions.

    Actions are the building blocks of a stage pipeline.
    Each action:
    1. Acquires a guarded engine handle or runs one engine operation
    2. Stores any handle it acquired on the context
    3. Records the failure on the context when the engine reports one
    """

    #: Stage this action belongs to, reported as the stage reached on failure
    stage: Stage = Stage.PARSE

    @abstractmethod
    def execute(self, ctx: RunContext) -> Optional[bool]:
        """Execute the action's main logic.

        Args:
            ctx: The pipeline context (read and modify as needed)

        Returns:
            - None or True: Continue pipeline
            - False: Stop pipeline execution (failure recorded on ctx)

        Raises:
            ContextCreationFailed: If the engine refuses to allocate a handle
        """
        pass
