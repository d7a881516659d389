r"""Unit tests for DefaultRetryState."""

from __future__ import annotations

import pytest

from aretry.classifier import BinaryExceptionClassifier
from aretry.state import DefaultRetryState


def test_default_retry_state_defaults() -> None:
    """Test the default values."""
    state = DefaultRetryState("foo")
    assert state.key == "foo"
    assert not state.force_refresh


def test_default_retry_state_rollback_without_classifier() -> None:
    """Test that every failure requires a rollback without
    classifier."""
    state = DefaultRetryState("foo")
    assert state.rollback_for(ValueError())
    assert state.rollback_for(RuntimeError())


def test_default_retry_state_rollback_with_classifier() -> None:
    """Test that the classifier decides the rollback."""
    state = DefaultRetryState(("order", 42), BinaryExceptionClassifier.retryable(KeyError))
    assert state.rollback_for(KeyError())
    assert not state.rollback_for(ValueError())


def test_default_retry_state_rollback_with_callable() -> None:
    """Test that any predicate can be used as classifier."""
    state = DefaultRetryState("foo", lambda exc: "rollback" in str(exc))
    assert state.rollback_for(ValueError("rollback please"))
    assert not state.rollback_for(ValueError("keep going"))


def test_default_retry_state_force_refresh() -> None:
    """Test the force_refresh flag."""
    assert DefaultRetryState("foo", force_refresh=True).force_refresh


def test_default_retry_state_immutable() -> None:
    """Test that attributes cannot be changed."""
    state = DefaultRetryState("foo")
    with pytest.raises(AttributeError, match=r"DefaultRetryState is immutable"):
        state.key = "bar"
    assert state.key == "foo"


def test_default_retry_state_repr() -> None:
    """Test the string representation."""
    assert repr(DefaultRetryState("foo")) == "DefaultRetryState(key='foo', force_refresh=False)"
