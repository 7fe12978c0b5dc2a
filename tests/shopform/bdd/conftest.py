"""Shared BDD fixtures and step definitions for submission intake."""

import pytest
from protean.exceptions import ValidationError
from pytest_bdd import parsers, then

from shopform.submission.events import SubmissionReceived


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def error():
    """Container for captured validation errors."""
    return {"exc": None}


# ---------------------------------------------------------------------------
# Then steps (shared)
# ---------------------------------------------------------------------------
@then("the submission fails with a validation error")
def submission_fails(error):
    assert error["exc"] is not None, "Expected a validation error but none was raised"
    assert isinstance(error["exc"], ValidationError)


@then(parsers.cfparse('the error reports "{field}" as required'))
def error_reports_required(error, field):
    assert error["exc"].messages[field] == ["is required"]


@then(parsers.cfparse('the submission is a "{kind}"'))
def submission_kind_is(submission, kind):
    assert submission.kind == kind


@then("a SubmissionReceived event is raised")
def submission_received_raised(submission):
    assert any(
        isinstance(e, SubmissionReceived) for e in submission._events
    ), f"No SubmissionReceived event found. Events: {[type(e).__name__ for e in submission._events]}"
