"""
Shared fixtures wiring GCSAdapter to the in-memory fake client in gcs_fakes.
"""

from unittest.mock import MagicMock, patch

import pytest

from gcs_fakes import TEST_BUCKET, TEST_PROJECT, FakeStorageClient
from gs_storage_provider.storage.gcs_adapter import GCSAdapter


@pytest.fixture
def fake_client():
    return FakeStorageClient()


@pytest.fixture
def mock_gcs(fake_client):
    """Patch the storage module and credential loading used by GCSAdapter."""
    with patch("gs_storage_provider.storage.gcs_adapter.storage") as mock_storage, patch(
        "gs_storage_provider.storage.gcs_adapter.load_credentials"
    ) as mock_load:
        mock_storage.Client.return_value = fake_client
        mock_load.return_value = MagicMock(name="credentials")
        yield mock_storage, mock_load


@pytest.fixture
def adapter(mock_gcs, fake_client):
    """GCSAdapter backed by the in-memory fake client."""
    return GCSAdapter("credentials.json", TEST_PROJECT, TEST_BUCKET)
