"""Tests covering object path normalization and cancellation checks."""

import threading

import pytest

from gs_storage_provider.storage.base_adapter import CancelledError
from gs_storage_provider.utils.validation import ValidationHelper


@pytest.mark.parametrize(
    "path, expected",
    [
        ("a/b.txt", "a/b.txt"),
        ("a\\b.txt", "a/b.txt"),
        ("reports\\2024/summary.pdf", "reports/2024/summary.pdf"),
        ("\\leading", "/leading"),
    ],
)
def test_normalize_object_path(path, expected):
    assert ValidationHelper.normalize_object_path(path) == expected


def test_normalize_rejects_empty_path():
    with pytest.raises(ValueError):
        ValidationHelper.normalize_object_path("")


def test_validate_bucket_name():
    assert ValidationHelper.validate_bucket_name("my-bucket") is None
    assert ValidationHelper.validate_bucket_name("") is not None
    assert ValidationHelper.validate_bucket_name("   ") is not None
    assert "path separators" in ValidationHelper.validate_bucket_name("a/b")


def test_check_cancelled():
    event = threading.Event()

    ValidationHelper.check_cancelled(None, "upload")
    ValidationHelper.check_cancelled(event, "upload")

    event.set()
    with pytest.raises(CancelledError, match="upload cancelled"):
        ValidationHelper.check_cancelled(event, "upload")
