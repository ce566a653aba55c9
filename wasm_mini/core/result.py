"""Stage outcomes and exit codes."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ..engine import EngineResult

# Exit codes (consistent across all commands)
EXIT_OK = 0
EXIT_CLI_ERROR = 1
EXIT_RUNTIME_ERROR = 2

UNKNOWN_ERROR = "Unknown error"

# Status tokens
STATUS_SUCCESS = "SUCCESS"
STATUS_VALID = "VALID"
STATUS_READY = "READY"
STATUS_FAILED = "FAILED"
STATUS_PARSE_ERROR = "FAILED (Parse Error)"
STATUS_INVALID = "INVALID"
STATUS_LOAD_ERROR = "FAILED (Load Error)"
STATUS_VALIDATION_ERROR = "FAILED (Validation Error)"
STATUS_INSTANTIATION_ERROR = "FAILED (Instantiation Error)"


class Stage(str, Enum):
    PARSE = "parse"
    VALIDATE = "validate"
    INSTANTIATE = "instantiate"

    @property
    def title(self) -> str:
        """Record header, e.g. ``PARSE``."""
        return self.value.upper()

    @property
    def noun(self) -> str:
        """Name used in progress lines, e.g. ``Validation``."""
        return _STAGE_NOUNS[self]


_STAGE_NOUNS = {
    Stage.PARSE: "Parse",
    Stage.VALIDATE: "Validation",
    Stage.INSTANTIATE: "Instantiation",
}


@dataclass(frozen=True)
class StageResult:
    """Outcome of a stage: ok, or failed with a code and message.

    ``code`` is ``None`` only for context creation failures, where the
    engine provides no code.
    """

    ok: bool
    code: Optional[int] = None
    message: Optional[str] = None

    @classmethod
    def success(cls) -> "StageResult":
        return cls(ok=True)

    @classmethod
    def failed(cls, code: Optional[int], message: Optional[str]) -> "StageResult":
        return cls(ok=False, code=code, message=message or UNKNOWN_ERROR)

    @classmethod
    def from_engine(cls, result: EngineResult) -> "StageResult":
        if result.ok:
            return cls.success()
        return cls.failed(int(result.code), result.message)


@dataclass(frozen=True)
class PipelineOutcome:
    """Aggregate result of one pipeline run.

    Attributes:
        stage: Stage that was requested (used as the record header)
        reached: Stage the run stopped in
        status: Status token shown in the record
        result: Result of the stage that was reached
    """

    stage: Stage
    reached: Stage
    status: str
    result: StageResult

    @property
    def exit_code(self) -> int:
        return EXIT_OK if self.result.ok else EXIT_RUNTIME_ERROR
