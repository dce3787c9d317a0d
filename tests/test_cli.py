"""
Unit tests for the gs-storage command.

Run with:
    pytest tests/test_cli.py -v
"""

import json
from datetime import datetime, timezone
from unittest.mock import MagicMock, patch

import pytest
from google.api_core.exceptions import Forbidden

from gs_storage_provider import cli
from gs_storage_provider.storage.base_adapter import BucketInfo, NotFoundError, ObjectInfo

BASE_ARGS = ["--credentials", "key.json", "--project", "proj", "--bucket", "bucket"]


@pytest.fixture(autouse=True)
def no_logging_setup():
    with patch("gs_storage_provider.cli.setup_logging"):
        yield


@pytest.fixture
def mock_adapter():
    adapter = MagicMock()
    adapter.__enter__.return_value = adapter
    with patch("gs_storage_provider.config.StorageSettings.create_adapter", return_value=adapter):
        yield adapter


def test_list_objects_json(mock_adapter, capsys):
    mock_adapter.list_objects.return_value = [
        ObjectInfo(name="a.txt", size=3, updated=datetime(2024, 1, 1, tzinfo=timezone.utc))
    ]

    exit_code = cli.main(BASE_ARGS + ["--json", "list-objects", "--prefix", "logs/"])

    assert exit_code == cli.EXIT_OK
    mock_adapter.list_objects.assert_called_once_with("logs/")
    output = json.loads(capsys.readouterr().out)
    assert output["status"] == "success"
    assert output["result"][0]["name"] == "a.txt"
    assert output["result"][0]["updated"] == "2024-01-01T00:00:00+00:00"
    mock_adapter.__exit__.assert_called_once()


def test_list_buckets_human_readable(mock_adapter, capsys):
    mock_adapter.list_buckets.return_value = [BucketInfo(name="alpha", location="US")]

    assert cli.main(BASE_ARGS + ["list-buckets"]) == cli.EXIT_OK
    assert "alpha" in capsys.readouterr().out


def test_upload_uses_content_type(mock_adapter):
    mock_adapter.upload_file.return_value = True

    exit_code = cli.main(BASE_ARGS + ["upload", "local.bin", "remote/file.bin", "--content-type", "image/png"])

    assert exit_code == cli.EXIT_OK
    mock_adapter.upload_file.assert_called_once_with("local.bin", "remote/file.bin", "image/png")


def test_delete_false_exit_code(mock_adapter, capsys):
    mock_adapter.delete.return_value = False

    assert cli.main(BASE_ARGS + ["delete", "missing.txt"]) == cli.EXIT_OPERATION_FAILED
    assert "FAILED" in capsys.readouterr().out


def test_exists_false_is_not_a_failure(mock_adapter, capsys):
    mock_adapter.exists.return_value = False

    assert cli.main(BASE_ARGS + ["exists", "missing.txt"]) == cli.EXIT_OK
    assert "exists: False" in capsys.readouterr().out


def test_storage_error_exit_code(mock_adapter, capsys):
    mock_adapter.download_to_file.side_effect = NotFoundError("object not found")

    exit_code = cli.main(BASE_ARGS + ["--json", "download", "missing.bin", "out.bin"])

    assert exit_code == cli.EXIT_STORAGE_ERROR
    output = json.loads(capsys.readouterr().out)
    assert output["error_type"] == "NotFoundError"


def test_provider_error_exit_code(mock_adapter, capsys):
    """Untranslated provider errors still map to the storage error exit code."""
    mock_adapter.list_buckets.side_effect = Forbidden("access denied")

    exit_code = cli.main(BASE_ARGS + ["--json", "list-buckets"])

    assert exit_code == cli.EXIT_STORAGE_ERROR
    output = json.loads(capsys.readouterr().out)
    assert output["error_type"] == "Forbidden"


def test_missing_configuration_exit_code(monkeypatch, capsys):
    for name in ["GCS_CREDENTIALS_PATH", "GOOGLE_APPLICATION_CREDENTIALS", "GCP_PROJECT_ID", "GCS_BUCKET_NAME"]:
        monkeypatch.delenv(name, raising=False)

    with patch("gs_storage_provider.storage.gcs_adapter.GCSAdapter") as mock_cls:
        exit_code = cli.main(["list-buckets"])

    assert exit_code == cli.EXIT_CONFIG_ERROR
    mock_cls.assert_not_called()
    assert "missing" in capsys.readouterr().err


def test_command_required():
    with pytest.raises(SystemExit):
        cli.main([])
