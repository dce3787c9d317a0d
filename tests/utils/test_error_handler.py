"""
Unit tests for translate_storage_errors.

Run with:
    pytest tests/utils/test_error_handler.py -v
"""

import pytest
import requests
from google.api_core.exceptions import DeadlineExceeded, Forbidden, NotFound
from google.auth.exceptions import RefreshError, TransportError

from gs_storage_provider.storage.base_adapter import (
    AuthenticationError,
    DeadlineExceededError,
    NotFoundError,
    StorageError,
    TransferError,
)
from gs_storage_provider.utils.error_handler import translate_storage_errors


def raising(exc, **decorator_kwargs):
    @translate_storage_errors("op", **decorator_kwargs)
    def operation():
        raise exc

    return operation


def test_return_value_passes_through():
    @translate_storage_errors("op")
    def operation(a, b=2):
        return a + b

    assert operation(1, b=3) == 4
    assert operation.__name__ == "operation"


def test_not_found_mapped_when_declared():
    with pytest.raises(NotFoundError) as exc_info:
        raising(NotFound("gone"), not_found=True)()

    assert isinstance(exc_info.value.__cause__, NotFound)


def test_not_found_propagates_when_not_declared():
    with pytest.raises(NotFound):
        raising(NotFound("gone"))()


def test_not_found_uses_failure_class_when_given():
    with pytest.raises(TransferError):
        raising(NotFound("no bucket"), failure=TransferError)()


@pytest.mark.parametrize(
    "exc",
    [DeadlineExceeded("slow"), requests.exceptions.ConnectTimeout("slow"), requests.exceptions.ReadTimeout("slow")],
)
def test_timeouts_become_deadline_exceeded(exc):
    with pytest.raises(DeadlineExceededError) as exc_info:
        raising(exc, failure=TransferError)()

    assert isinstance(exc_info.value, TimeoutError)
    assert isinstance(exc_info.value, StorageError)


def test_refresh_error_becomes_authentication_error():
    with pytest.raises(AuthenticationError):
        raising(RefreshError("invalid_grant"))()


@pytest.mark.parametrize(
    "exc",
    [Forbidden("denied"), TransportError("dns"), requests.exceptions.ConnectionError("reset")],
)
def test_backend_errors_use_failure_class(exc):
    with pytest.raises(TransferError) as exc_info:
        raising(exc, failure=TransferError)()

    assert exc_info.value.__cause__ is exc


def test_backend_errors_propagate_unmodified_without_failure_class():
    with pytest.raises(Forbidden):
        raising(Forbidden("denied"))()


def test_storage_errors_not_rewrapped():
    original = NotFoundError("already translated")

    with pytest.raises(NotFoundError) as exc_info:
        raising(original, failure=TransferError)()

    assert exc_info.value is original


def test_unrelated_errors_propagate():
    with pytest.raises(KeyError):
        raising(KeyError("x"), failure=TransferError)()
