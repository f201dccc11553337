"""Tests for sweeper exceptions (error_code, message, details)."""

import pytest

from sweeper.application.dtos.sweep import DeletionOutcome, StoreDeletion
from sweeper.domain.exceptions import (
    ConfigurationException,
    PartialDeletionException,
    StoreOperationException,
    SweeperException,
    SweepInvariantException,
)


def test_sweeper_exception_default_error_code() -> None:
    """Base SweeperException uses class name as error_code when not provided."""
    exc = SweeperException("Something failed")
    assert exc.message == "Something failed"
    assert exc.error_code == "SweeperException"
    assert exc.details == {}
    assert str(exc) == "Something failed"


def test_sweeper_exception_custom_error_code_and_details() -> None:
    """SweeperException accepts custom error_code and details."""
    exc = SweeperException("Oops", error_code="CUSTOM", details={"key": "value"})
    assert exc.error_code == "CUSTOM"
    assert exc.details == {"key": "value"}


def test_configuration_exception() -> None:
    """ConfigurationException sets CONFIGURATION_ERROR and optional field."""
    exc = ConfigurationException("Redis settings are required", field="redis")
    assert exc.error_code == "CONFIGURATION_ERROR"
    assert exc.details == {"field": "redis"}


def test_configuration_exception_without_field() -> None:
    exc = ConfigurationException("bad")
    assert exc.details == {}


def test_store_operation_exception() -> None:
    """StoreOperationException names the store and operation in the message."""
    exc = StoreOperationException("cache", "delete", "Connection reset by peer")
    assert exc.message == "cache store delete failed: Connection reset by peer"
    assert exc.error_code == "STORE_OPERATION_ERROR"
    assert exc.details == {
        "store": "cache",
        "operation": "delete",
        "reason": "Connection reset by peer",
    }


def test_partial_deletion_exception_carries_outcome() -> None:
    """PartialDeletionException exposes the per-store outcome."""
    outcome = DeletionOutcome(
        ids=("a", "b"),
        stores=(
            StoreDeletion("primary", True, removed=2),
            StoreDeletion("history", True, removed=1),
            StoreDeletion("cache", False, error="timeout"),
        ),
    )
    exc = PartialDeletionException(outcome)
    assert exc.outcome is outcome
    assert exc.error_code == "PARTIAL_DELETION"
    assert "cache" in exc.message
    assert exc.details == {
        "failed_stores": ["cache"],
        "removed_by_store": {"primary": 2, "history": 1, "cache": 0},
        "ids": ["a", "b"],
    }


def test_sweep_invariant_exception_truncates_ids() -> None:
    """SweepInvariantException keeps at most 20 ids in details."""
    ids = [f"id-{i}" for i in range(50)]
    exc = SweepInvariantException(ids)
    assert exc.error_code == "SWEEP_INVARIANT_VIOLATION"
    assert "50 identifier(s)" in exc.message
    assert exc.details["repeated_ids"] == ids[:20]


@pytest.mark.parametrize(
    "exc",
    [
        ConfigurationException("x"),
        StoreOperationException("primary", "fetch_batch", "x"),
        SweepInvariantException(["a"]),
    ],
)
def test_all_inherit_from_sweeper_exception(exc: SweeperException) -> None:
    """All sweeper exceptions are SweeperException subclasses."""
    assert isinstance(exc, SweeperException)
