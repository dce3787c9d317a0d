"""
Storage package for the GS Storage Provider.

Architecture:
- BaseStorageAdapter: Abstract interface and StorageError taxonomy
- load_credentials: Credential loading from a path or stream
- GCSAdapter: Google Cloud Storage implementation

Usage:
    from gs_storage_provider.storage import GCSAdapter

    with GCSAdapter("key.json", project_id="my-project", bucket_name="my-bucket") as adapter:
        adapter.upload(b"report", "reports\\2024\\summary.txt")
        content = adapter.download("reports/2024/summary.txt")
        names = [obj.name for obj in adapter.list_objects()]
"""

from .base_adapter import (
    AdapterClosedError,
    AuthenticationError,
    BaseStorageAdapter,
    BucketInfo,
    CancelledError,
    DeadlineExceededError,
    NotFoundError,
    ObjectInfo,
    StorageError,
    TransferError,
    TransferProgress,
    TransferStatus,
)
from .credentials import load_credentials
from .gcs_adapter import GCSAdapter

__all__ = [
    "AdapterClosedError",
    "AuthenticationError",
    "BaseStorageAdapter",
    "BucketInfo",
    "CancelledError",
    "DeadlineExceededError",
    "GCSAdapter",
    "NotFoundError",
    "ObjectInfo",
    "StorageError",
    "TransferError",
    "TransferProgress",
    "TransferStatus",
    "load_credentials",
]
