"""Tests for verb routing."""
import pytest

from wasm_mini.core import ROUTES, NullReporter, RunOptions, Stage, UnknownVerb, Verb, run_verb


def test_every_verb_has_a_route():
    """
    Test the routing table is exhaustive.
    Expected: one entry point per verb.
    """
    assert set(ROUTES) == set(Verb)


@pytest.mark.parametrize("name", ["parse", "validate", "instantiate"])
def test_from_name(name):
    assert Verb.from_name(name).value == name


@pytest.mark.parametrize("name", ["run", "PARSE", ""])
def test_unknown_verb(name):
    """
    Test names outside the closed set.
    Expected: UnknownVerb with the offending name.
    """
    with pytest.raises(UnknownVerb, match=f"Unknown command '{name}'"):
        Verb.from_name(name)


@pytest.mark.parametrize("verb, stage", [
    (Verb.PARSE, Stage.PARSE),
    (Verb.VALIDATE, Stage.VALIDATE),
    (Verb.INSTANTIATE, Stage.INSTANTIATE),
])
def test_run_verb_dispatches(recording_engine, verb, stage):
    """
    Test run_verb builds a fresh context and runs the matching pipeline.
    Expected: outcome for the requested stage, no leaked handles.
    """
    engine = recording_engine()

    outcome = run_verb(verb, "module.wasm", opts=RunOptions(), engine=engine, reporter=NullReporter())

    assert outcome.stage == stage
    assert outcome.exit_code == 0
    assert engine.acquired == engine.released
