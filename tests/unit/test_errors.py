"""Unit tests for the error hierarchy."""

import pytest

from aiqa.errors import (
    InvalidStateError,
    NotFoundError,
    QualityAssuranceError,
    UpstreamUnavailableError,
    ValidationError,
)


@pytest.mark.parametrize("error", [
    ValidationError("bad rating"),
    NotFoundError("review item", "r-1"),
    InvalidStateError("review item", "r-1", "APPROVED", "approve"),
    UpstreamUnavailableError("store down"),
])
def test_all_errors_share_base(error):
    assert isinstance(error, QualityAssuranceError)


def test_not_found_message():
    assert str(NotFoundError("alert", "a-1")) == "alert not found: a-1"


def test_invalid_state_message():
    error = InvalidStateError("review item", "r-1", "APPROVED", "reject")
    assert str(error) == "Cannot reject review item r-1 in state APPROVED"
