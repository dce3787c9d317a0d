"""
Google Cloud Storage Adapter for the GS Storage Provider.

Implements BaseStorageAdapter for Google Cloud Storage (GCS) with:
- Credentials from a JSON file path or an in-memory stream
- Project-scoped bucket listing, bucket-scoped object operations
- Slash-normalized object paths
- Per-call timeout and cancellation, SDK retries disabled
- Idempotent teardown of the owned client

Thread safety: the adapter adds no locking. Concurrent use is exactly as
safe as google.cloud.storage.Client, whose requests session is shared by
every call made through one adapter.
"""

import logging
import mimetypes
import os
import threading
from os import PathLike
from typing import Any, Dict, List, Optional, Union

from google.api_core.client_info import ClientInfo
from google.auth.exceptions import RefreshError
from google.cloud import storage

from ..constants import DEFAULT_APPLICATION_NAME, DEFAULT_CHUNK_SIZE, DEFAULT_CONTENT_TYPE
from ..utils.error_handler import BACKEND_ERRORS, TIMEOUT_ERRORS, translate_storage_errors
from ..utils.validation import ValidationHelper
from .base_adapter import (
    AdapterClosedError,
    BaseStorageAdapter,
    BucketInfo,
    CredentialSource,
    NotFoundError,
    ObjectInfo,
    ProgressCallback,
    TransferError,
    TransferProgress,
    TransferStatus,
    UploadContent,
)
from .credentials import load_credentials

logger = logging.getLogger(__name__)

# Backend failures that delete() turns into a False result instead of raising.
DELETE_ABSORBED_ERRORS = BACKEND_ERRORS + (RefreshError,)


def guess_content_type(path: str) -> str:
    """Infer a MIME type from the path's extension."""
    content_type, _ = mimetypes.guess_type(path)
    return content_type or DEFAULT_CONTENT_TYPE


class GCSAdapter(BaseStorageAdapter):
    """
    Google Cloud Storage adapter scoped to one project and one bucket.

    Usage:
        with GCSAdapter("service-account.json", "my-gcp-project", "my-bucket") as adapter:
            adapter.upload(b"hello", "docs\\\\hello.txt")   # stored as docs/hello.txt
            content = adapter.download("docs/hello.txt")
            adapter.download_to_file("docs/hello.txt", "/tmp/hello.txt")
            adapter.delete("docs/hello.txt")

    Security:
    - Service account or authorized-user JSON, read once at construction
    - Scoped credentials are widened to devstorage.full_control
    """

    def __init__(
        self,
        credentials: CredentialSource,
        project_id: str,
        bucket_name: str,
        *,
        application_name: str = DEFAULT_APPLICATION_NAME,
        default_timeout: Optional[float] = None,
    ):
        """
        Initialize the adapter and its authenticated client.

        Args:
            credentials: Path to a JSON credential file, or a readable binary stream
            project_id: GCP project ID used for bucket listing and billing
            bucket_name: Bucket every object operation targets
            application_name: User agent reported to the storage API
            default_timeout: Timeout (seconds) for calls that do not pass one

        Raises:
            AuthenticationError: If the credential material is malformed or unreadable
            ValueError: If project_id or bucket_name is empty
        """
        if not project_id:
            raise ValueError("GCP project ID cannot be empty")

        self._project_id = project_id
        self.bucket_name = bucket_name
        self.default_timeout = default_timeout

        scoped_credentials = load_credentials(credentials)
        self._client: Optional[storage.Client] = storage.Client(
            project=project_id,
            credentials=scoped_credentials,
            client_info=ClientInfo(user_agent=application_name),
        )

        logger.info(
            f"Initialized GCS adapter: project={project_id}, bucket={bucket_name}, "
            f"application={application_name}"
        )

    @property
    def project_id(self) -> str:
        return self._project_id

    @property
    def bucket_name(self) -> str:
        return self._bucket_name

    @bucket_name.setter
    def bucket_name(self, value: str) -> None:
        error = ValidationHelper.validate_bucket_name(value)
        if error:
            raise ValueError(error)
        self._bucket_name = value

    @property
    def closed(self) -> bool:
        return self._client is None

    @property
    def client(self) -> storage.Client:
        """The owned client; raises AdapterClosedError once released."""
        if self._client is None:
            raise AdapterClosedError("GCS adapter has been closed")
        return self._client

    def _bucket(self) -> storage.Bucket:
        return self.client.bucket(self._bucket_name)

    def _call_kwargs(self, timeout: Optional[float]) -> Dict[str, Any]:
        kwargs: Dict[str, Any] = {"retry": None}
        timeout = timeout if timeout is not None else self.default_timeout
        if timeout is not None:
            kwargs["timeout"] = timeout
        return kwargs

    @translate_storage_errors("list_buckets")
    def list_buckets(
        self,
        *,
        max_results: Optional[int] = None,
        timeout: Optional[float] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> List[BucketInfo]:
        ValidationHelper.check_cancelled(cancel_event, "list_buckets")

        buckets = self.client.list_buckets(
            max_results=max_results,
            project=self._project_id,
            **self._call_kwargs(timeout),
        )
        return [_to_bucket_info(bucket) for bucket in buckets]

    @translate_storage_errors("list_objects")
    def list_objects(
        self,
        prefix: Optional[str] = None,
        *,
        max_results: Optional[int] = None,
        timeout: Optional[float] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> List[ObjectInfo]:
        ValidationHelper.check_cancelled(cancel_event, "list_objects")

        if prefix:
            prefix = ValidationHelper.normalize_object_path(prefix)

        blobs = self.client.list_blobs(
            self._bucket_name,
            prefix=prefix,
            max_results=max_results,
            **self._call_kwargs(timeout),
        )
        return [_to_object_info(blob) for blob in blobs]

    @translate_storage_errors("upload", failure=TransferError)
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
        Upload a byte buffer or readable stream in a single request.

        Incomplete and failed uploads are the same outcome: both raise
        TransferError.
        """
        destination_path = ValidationHelper.normalize_object_path(destination_path)
        content_type = content_type or guess_content_type(destination_path)
        ValidationHelper.check_cancelled(cancel_event, "upload")

        blob = self._bucket().blob(destination_path)
        kwargs = self._call_kwargs(timeout)

        if isinstance(content, (bytes, bytearray, memoryview)):
            data = bytes(content)
            blob.upload_from_string(data, content_type=content_type, **kwargs)
            if blob.size is not None and blob.size != len(data):
                raise TransferError(
                    f"upload incomplete: {blob.size} of {len(data)} bytes stored "
                    f"for {destination_path}"
                )
        else:
            blob.upload_from_file(content, content_type=content_type, **kwargs)

        logger.info(f"Uploaded {destination_path} ({content_type}) to bucket {self._bucket_name}")
        return True

    def upload_file(
        self,
        local_path: Union[str, PathLike],
        destination_path: str,
        content_type: Optional[str] = None,
        *,
        timeout: Optional[float] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> bool:
        """Upload a local file through upload()."""
        with open(local_path, "rb") as file_stream:
            return self.upload(
                file_stream,
                destination_path,
                content_type,
                timeout=timeout,
                cancel_event=cancel_event,
            )

    @translate_storage_errors("download", not_found=True)
    def download(
        self,
        source_path: str,
        *,
        timeout: Optional[float] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> bytes:
        source_path = ValidationHelper.normalize_object_path(source_path)
        ValidationHelper.check_cancelled(cancel_event, "download")

        content = self._bucket().blob(source_path).download_as_bytes(**self._call_kwargs(timeout))
        logger.info(f"Downloaded {source_path} ({len(content)} bytes)")
        return content

    @translate_storage_errors("download_to_file", not_found=True)
    def download_to_file(
        self,
        source_path: str,
        destination_path: Union[str, PathLike],
        *,
        progress: Optional[ProgressCallback] = None,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        timeout: Optional[float] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> bool:
        """
        Stream an object into a local file, creating or truncating it.

        Implementation:
        1. Resolve object metadata (missing object raises NotFoundError)
        2. Read the object in chunks, writing each to the destination
        3. Report progress after every chunk when an observer is given
        4. Compare bytes written with the object size

        A backend or transport failure while streaming yields False.
        Timeouts and cancellation raise.
        """
        source_path = ValidationHelper.normalize_object_path(source_path)
        ValidationHelper.check_cancelled(cancel_event, "download_to_file")

        kwargs = self._call_kwargs(timeout)
        blob = self._bucket().get_blob(source_path, **kwargs)
        if blob is None:
            raise NotFoundError(f"download_to_file failed: object not found: {source_path}")

        total_bytes = blob.size
        transferred = 0
        _notify(progress, TransferStatus.NOT_STARTED, transferred, total_bytes)

        try:
            with blob.open("rb", chunk_size=chunk_size, **kwargs) as reader, open(
                destination_path, "wb"
            ) as file_stream:
                while True:
                    ValidationHelper.check_cancelled(cancel_event, "download_to_file")
                    chunk = reader.read(chunk_size)
                    if not chunk:
                        break
                    file_stream.write(chunk)
                    transferred += len(chunk)
                    _notify(progress, TransferStatus.IN_PROGRESS, transferred, total_bytes)
        except TIMEOUT_ERRORS:
            raise
        except BACKEND_ERRORS as e:
            logger.warning(f"Download of {source_path} failed after {transferred} bytes: {e}")
            _notify(progress, TransferStatus.FAILED, transferred, total_bytes)
            return False

        if total_bytes is not None and transferred != total_bytes:
            logger.warning(
                f"Download of {source_path} incomplete: {transferred} of {total_bytes} bytes"
            )
            _notify(progress, TransferStatus.FAILED, transferred, total_bytes)
            return False

        _notify(progress, TransferStatus.COMPLETED, transferred, total_bytes)
        logger.info(f"Downloaded {source_path} to {os.fspath(destination_path)}")
        return True

    def delete(
        self,
        path: str,
        *,
        timeout: Optional[float] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> bool:
        """
        Delete an object.

        Error absorption policy: any provider API or transport error is
        reported as False ("already absent or inaccessible") and logged at
        WARNING. Using a closed adapter still raises AdapterClosedError, and
        a set cancellation token raises CancelledError before any request.
        """
        path = ValidationHelper.normalize_object_path(path)
        ValidationHelper.check_cancelled(cancel_event, "delete")
        blob = self._bucket().blob(path)

        try:
            blob.delete(**self._call_kwargs(timeout))
        except DELETE_ABSORBED_ERRORS as e:
            logger.warning(f"Delete of {path} in bucket {self._bucket_name} returned False: {e}")
            return False

        logger.info(f"Deleted {path} from bucket {self._bucket_name}")
        return True

    @translate_storage_errors("exists")
    def exists(
        self,
        path: str,
        *,
        timeout: Optional[float] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> bool:
        path = ValidationHelper.normalize_object_path(path)
        ValidationHelper.check_cancelled(cancel_event, "exists")
        return self._bucket().blob(path).exists(**self._call_kwargs(timeout))

    @translate_storage_errors("get_object_metadata", not_found=True)
    def get_object_metadata(
        self,
        path: str,
        *,
        timeout: Optional[float] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> ObjectInfo:
        path = ValidationHelper.normalize_object_path(path)
        ValidationHelper.check_cancelled(cancel_event, "get_object_metadata")
        blob = self._bucket().get_blob(path, **self._call_kwargs(timeout))
        if blob is None:
            raise NotFoundError(f"Object not found: {path}")
        return _to_object_info(blob)

    def close(self) -> None:
        client, self._client = self._client, None
        if client is None:
            return
        client.close()
        logger.info(f"Closed GCS adapter for bucket {self._bucket_name}")


def _notify(
    progress: Optional[ProgressCallback],
    status: TransferStatus,
    transferred: int,
    total_bytes: Optional[int],
) -> None:
    if progress is not None:
        progress(TransferProgress(status=status, bytes_transferred=transferred, total_bytes=total_bytes))


def _to_bucket_info(bucket) -> BucketInfo:
    return BucketInfo(
        name=bucket.name,
        location=bucket.location,
        storage_class=bucket.storage_class,
        created=bucket.time_created,
    )


def _to_object_info(blob) -> ObjectInfo:
    return ObjectInfo(
        name=blob.name,
        size=blob.size or 0,
        updated=blob.updated,
        content_type=blob.content_type,
        etag=blob.etag,
        media_link=blob.media_link,
        generation=blob.generation,
    )


__all__ = ["GCSAdapter", "guess_content_type", "DELETE_ABSORBED_ERRORS"]
