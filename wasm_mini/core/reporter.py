"""Reporter classes for controlling command output."""

from typing import List, Optional

from rich.console import Console

from ..utils import console, err_console
from .result import PipelineOutcome, Stage, StageResult


def _emit(target: Console, lines: List[str]) -> None:
    # Records are parsed by other tools: no markup, highlighting or wrapping.
    target.print("\n".join(lines), markup=False, highlight=False, emoji=False, soft_wrap=True)


class Reporter:
    """Default reporter that renders structured stage records.

    Success records go to standard output and failure records to standard
    error. Verbose diagnostics are printed only when enabled on this
    instance.
    """

    def __init__(self, verbose: bool = False, out: Optional[Console] = None, err: Optional[Console] = None):
        self.verbose_enabled = verbose
        self.out = out or console
        self.err = err or err_console

    def report(self, path: str, outcome: PipelineOutcome) -> None:
        """Render the single record for a finished pipeline run."""
        if outcome.result.ok:
            self.success(outcome.stage, path, outcome.status)
        else:
            self.failure(outcome.stage, path, outcome.status, outcome.result)

    def success(self, stage: Stage, path: str, status: str) -> None:
        """Print a success record.

        Args:
            stage: Stage named in the record header
            path: Module path as given by the user
            status: Success token (SUCCESS, VALID, READY)
        """
        _emit(self.out, self._header(stage, path, status))

    def failure(self, stage: Stage, path: str, status: str, result: StageResult) -> None:
        """Print a failure record.

        Engine failures render as ``Error  : [code] message``; context
        creation failures carry no code and render the message alone.
        """
        lines = self._header(stage, path, status)
        if result.code is None:
            lines.append(f"Error  : {result.message}")
        else:
            lines.append(f"Error  : [{result.code}] {result.message}")
        _emit(self.err, lines)

    def verbose(self, message: str) -> None:
        """Print a diagnostic line when verbose output is enabled."""
        if self.verbose_enabled:
            _emit(self.out, [f"[VERBOSE] {message}"])

    def warning(self, message: str) -> None:
        _emit(self.err, [f"Warning: {message}"])

    def error(self, message: str) -> None:
        _emit(self.err, [f"Error: {message}"])

    @staticmethod
    def _header(stage: Stage, path: str, status: str) -> List[str]:
        return [
            f"[{stage.title}]",
            f"File   : {path}",
            f"Status : {status}",
        ]


class NullReporter:
    """No-op reporter for callers that only need the outcome value."""

    verbose_enabled = False

    def report(self, path: str, outcome: PipelineOutcome) -> None:
        """No-op."""
        pass

    def success(self, stage: Stage, path: str, status: str) -> None:
        """No-op."""
        pass

    def failure(self, stage: Stage, path: str, status: str, result: StageResult) -> None:
        """No-op."""
        pass

    def verbose(self, message: str) -> None:
        """No-op."""
        pass

    def warning(self, message: str) -> None:
        """No-op."""
        pass

    def error(self, message: str) -> None:
        """No-op."""
        pass
