"""Tests for record rendering."""
import io

import pytest
from rich.console import Console

from wasm_mini.core import NullReporter, PipelineOutcome, Reporter, Stage, StageResult


@pytest.fixture
def streams():
    out, err = io.StringIO(), io.StringIO()
    return out, err


@pytest.fixture
def reporter(streams):
    out, err = streams
    return Reporter(out=Console(file=out), err=Console(file=err))


def test_success_record(reporter, streams):
    """
    Test the success record shape.
    Expected: header, file and status lines on stdout only.
    """
    out, err = streams

    reporter.success(Stage.PARSE, "good.wasm", "SUCCESS")

    assert out.getvalue() == "[PARSE]\nFile   : good.wasm\nStatus : SUCCESS\n"
    assert err.getvalue() == ""


def test_failure_record(reporter, streams):
    """
    Test the failure record shape.
    Expected: error line with code and message on stderr.
    """
    out, err = streams

    reporter.failure(Stage.VALIDATE, "bad.wasm", "INVALID", StageResult.failed(65, "type mismatch"))

    assert err.getvalue() == (
        "[VALIDATE]\n"
        "File   : bad.wasm\n"
        "Status : INVALID\n"
        "Error  : [65] type mismatch\n"
    )
    assert out.getvalue() == ""


def test_context_failure_record(reporter, streams):
    """
    Test a failure without an engine code.
    Expected: message alone on the error line.
    """
    _, err = streams

    reporter.failure(Stage.INSTANTIATE, "x.wasm", "FAILED", StageResult.failed(None, "Failed to create VM context"))

    assert err.getvalue().endswith("Error  : Failed to create VM context\n")


def test_missing_message_placeholder(reporter, streams):
    """
    Test a failure whose engine message is missing.
    Expected: 'Unknown error' placeholder.
    """
    _, err = streams

    reporter.failure(Stage.PARSE, "x.wasm", "FAILED", StageResult.failed(34, None))

    assert "Error  : [34] Unknown error" in err.getvalue()


def test_markup_is_not_interpreted(reporter, streams):
    """
    Test paths and messages that look like rich markup.
    Expected: printed verbatim.
    """
    out, _ = streams

    reporter.success(Stage.PARSE, "[bold]odd:smile:.wasm", "SUCCESS")

    assert "File   : [bold]odd:smile:.wasm\n" in out.getvalue()


def test_long_lines_are_not_wrapped(reporter, streams):
    """
    Test a path longer than the console width.
    Expected: single unwrapped line.
    """
    out, _ = streams
    path = "dir/" * 40 + "module.wasm"

    reporter.success(Stage.PARSE, path, "SUCCESS")

    assert f"File   : {path}\n" in out.getvalue()


def test_report_dispatches_on_result(reporter, streams):
    """
    Test report() routing.
    Expected: ok outcomes to stdout, failures to stderr.
    """
    out, err = streams

    reporter.report("a.wasm", PipelineOutcome(Stage.PARSE, Stage.PARSE, "SUCCESS", StageResult.success()))
    reporter.report("b.wasm", PipelineOutcome(Stage.PARSE, Stage.PARSE, "FAILED", StageResult.failed(34, "x")))

    assert "a.wasm" in out.getvalue()
    assert "b.wasm" in err.getvalue()


def test_verbose_toggle(streams):
    """
    Test verbose output follows the reporter's own setting.
    Expected: [VERBOSE] lines only when enabled.
    """
    out, err = streams
    quiet = Reporter(verbose=False, out=Console(file=out), err=Console(file=err))
    loud_out = io.StringIO()
    loud = Reporter(verbose=True, out=Console(file=loud_out), err=Console(file=err))

    quiet.verbose("Parsing WebAssembly module...")
    loud.verbose("Parsing WebAssembly module...")

    assert out.getvalue() == ""
    assert loud_out.getvalue() == "[VERBOSE] Parsing WebAssembly module...\n"


def test_null_reporter_is_silent(capsys):
    """
    Test NullReporter methods.
    Expected: nothing printed.
    """
    reporter = NullReporter()

    reporter.success(Stage.PARSE, "a.wasm", "SUCCESS")
    reporter.failure(Stage.PARSE, "a.wasm", "FAILED", StageResult.failed(1, "x"))
    reporter.verbose("x")
    reporter.warning("x")
    reporter.error("x")

    captured = capsys.readouterr()
    assert captured.out == ""
    assert captured.err == ""
