"""
GS Storage Provider

Bucket and object operations against Google Cloud Storage behind a single
adapter: list buckets and objects, upload, download, delete.
"""

from .config import StorageSettings
from .storage import (
    AdapterClosedError,
    AuthenticationError,
    BucketInfo,
    CancelledError,
    DeadlineExceededError,
    GCSAdapter,
    NotFoundError,
    ObjectInfo,
    StorageError,
    TransferError,
)

__version__ = "0.1.0"

__all__ = [
    "AdapterClosedError",
    "AuthenticationError",
    "BucketInfo",
    "CancelledError",
    "DeadlineExceededError",
    "GCSAdapter",
    "NotFoundError",
    "ObjectInfo",
    "StorageError",
    "StorageSettings",
    "TransferError",
]
