"""Tests for the domain exception types."""

from types import SimpleNamespace

from uis.domain.exceptions import DomainException, PartialFailureError


def test_partial_failure_names_failed_sizes():
    result = SimpleNamespace(failures=[SimpleNamespace(size="L"), SimpleNamespace(size="XL")])

    error = PartialFailureError(result)

    assert isinstance(error, DomainException)
    assert str(error) == "2 size(s) could not be applied: L, XL"
    assert error.result is result
