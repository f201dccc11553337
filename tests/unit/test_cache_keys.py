"""Cache key builder tests (shared by deleter and inventory scan)."""

import pytest

from sweeper.infrastructure.cache.keys import category_prefix, resource_key


def test_resource_key_layout() -> None:
    assert resource_key("AuditEvent", "123") == "AuditEvent/123"


def test_category_prefix_ends_with_separator() -> None:
    assert category_prefix("Patient") == "Patient/"


def test_category_with_separator_rejected() -> None:
    with pytest.raises(ValueError, match="must not contain separator"):
        category_prefix("Audit/Event")


def test_empty_category_rejected() -> None:
    with pytest.raises(ValueError, match="must not be empty"):
        resource_key("", "1")
