"""
Base Storage Adapter Interface for the GS Storage Provider.

Defines the error taxonomy, the descriptor types returned by listings and
the abstract interface the Google Cloud Storage adapter implements.

Path Format:
- Object paths are slash-delimited: "reports/2024/summary.pdf"
- Backslashes are normalized to forward slashes before any remote call
- The backend namespace is flat; "directories" are only name prefixes
"""

import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from os import PathLike
from typing import BinaryIO, Callable, List, Optional, Union


class StorageError(Exception):
    """Base exception for storage operations."""

    pass


class AuthenticationError(StorageError):
    """Raised when credential material is malformed or unreadable."""

    pass


class NotFoundError(StorageError):
    """Raised when the requested object does not exist."""

    pass


class TransferError(StorageError):
    """Raised when an upload fails or does not complete."""

    pass


class DeadlineExceededError(StorageError, TimeoutError):
    """Raised when a per-call deadline elapses."""

    pass


class CancelledError(StorageError):
    """Raised when a caller-supplied cancellation token is set."""

    pass


class AdapterClosedError(StorageError):
    """Raised when an adapter is used after its client was released."""

    pass


class TransferStatus(Enum):
    """Backend-reported state of a transfer."""

    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass
class TransferProgress:
    """Progress snapshot handed to download observers."""

    status: TransferStatus
    bytes_transferred: int
    total_bytes: Optional[int] = None


@dataclass
class BucketInfo:
    """Descriptor for a bucket visible to the configured project."""

    name: str
    location: Optional[str] = None
    storage_class: Optional[str] = None
    created: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "location": self.location,
            "storage_class": self.storage_class,
            "created": self.created.isoformat() if self.created else None,
        }


@dataclass
class ObjectInfo:
    """Descriptor for an object stored in a bucket."""

    name: str
    size: int = 0
    updated: Optional[datetime] = None
    content_type: Optional[str] = None
    etag: Optional[str] = None
    media_link: Optional[str] = None
    generation: Optional[int] = None

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "size": self.size,
            "updated": self.updated.isoformat() if self.updated else None,
            "content_type": self.content_type,
            "etag": self.etag,
            "media_link": self.media_link,
            "generation": self.generation,
        }


CredentialSource = Union[str, PathLike, BinaryIO]
UploadContent = Union[bytes, bytearray, memoryview, BinaryIO]
ProgressCallback = Callable[[TransferProgress], None]


class BaseStorageAdapter(ABC):
    """
    Abstract base class for storage adapters.

    Design Principles:
    - Synchronous, blocking calls; one remote request per operation
    - Scoped to one project and one (reassignable) bucket
    - Optional per-call timeout and cancellation token
    - Consistent error handling (StorageError hierarchy)
    - Deterministic teardown via close() or the context manager protocol
    """

    @abstractmethod
    def list_buckets(
        self,
        *,
        max_results: Optional[int] = None,
        timeout: Optional[float] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> List[BucketInfo]:
        """
        List buckets visible to the configured project.

        Returns:
            Ordered list of BucketInfo objects
        """
        pass

    @abstractmethod
    def list_objects(
        self,
        prefix: Optional[str] = None,
        *,
        max_results: Optional[int] = None,
        timeout: Optional[float] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> List[ObjectInfo]:
        """
        List objects in the configured bucket.

        Args:
            prefix: Optional name prefix (e.g., "reports/")

        Returns:
            Ordered list of ObjectInfo objects, empty when the bucket is empty
        """
        pass

    @abstractmethod
    def upload(
        self,
        content: UploadContent,
        destination_path: str,
        content_type: Optional[str] = None,
        *,
        timeout: Optional[float] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> bool:
        """
        Upload a byte buffer or readable stream.

        Args:
            content: Bytes or a readable binary stream
            destination_path: Object path within the bucket
            content_type: MIME type (inferred from the extension if None)

        Returns:
            True when the backend reports the upload as completed

        Raises:
            TransferError: If the upload fails or ends incomplete
        """
        pass

    @abstractmethod
    def download(
        self,
        source_path: str,
        *,
        timeout: Optional[float] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> bytes:
        """
        Download an object into memory.

        Raises:
            NotFoundError: If the object does not exist
        """
        pass

    @abstractmethod
    def download_to_file(
        self,
        source_path: str,
        destination_path: Union[str, PathLike],
        *,
        progress: Optional[ProgressCallback] = None,
        timeout: Optional[float] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> bool:
        """
        Stream an object into a local file.

        Returns:
            True only when the transfer completed
        """
        pass

    @abstractmethod
    def delete(
        self,
        path: str,
        *,
        timeout: Optional[float] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> bool:
        """
        Delete an object.

        Returns:
            True on success, False when the backend rejected the request
        """
        pass

    @abstractmethod
    def close(self) -> None:
        """Release the client handle. Calling it again is a no-op."""
        pass

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
