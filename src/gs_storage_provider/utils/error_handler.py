"""
Decorator-based error handling for storage operations.

This module translates Google Cloud and transport exceptions into the
StorageError taxonomy consistently across all adapter operations.
Exceptions the decorator does not recognize propagate unmodified.
"""

import functools
import logging
from typing import Callable, Optional, Tuple, Type

import requests
from google.api_core.exceptions import DeadlineExceeded, GoogleAPICallError, NotFound
from google.auth.exceptions import RefreshError, TransportError

from ..storage.base_adapter import (
    AuthenticationError,
    DeadlineExceededError,
    NotFoundError,
    StorageError,
)

logger = logging.getLogger(__name__)

TIMEOUT_ERRORS: Tuple[Type[BaseException], ...] = (
    DeadlineExceeded,
    requests.exceptions.Timeout,
)

# Provider and transport failures that are a "backend error" from the
# caller's point of view.
BACKEND_ERRORS: Tuple[Type[BaseException], ...] = (
    GoogleAPICallError,
    TransportError,
    requests.exceptions.RequestException,
)


def translate_storage_errors(
    operation: str,
    not_found: bool = False,
    failure: Optional[Type[StorageError]] = None,
) -> Callable:
    """
    Decorator to map provider exceptions onto the StorageError taxonomy.

    Args:
        operation: Human-readable operation name used in error messages
        not_found: Map provider NotFound to NotFoundError
        failure: StorageError subclass raised for any other backend error.
            When None, other backend errors propagate unmodified.

    Returns:
        Decorator function that wraps adapter operations with error translation

    Example:
        @translate_storage_errors("download", not_found=True)
        def download(self, source_path: str) -> bytes:
            return self.bucket.blob(source_path).download_as_bytes()

        @translate_storage_errors("upload", failure=TransferError)
        def upload(self, content: bytes, destination_path: str) -> bool:
            ...
    """

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except StorageError:
                raise
            except NotFound as e:
                if not_found:
                    raise NotFoundError(f"{operation} failed: object not found ({e})") from e
                if failure is not None:
                    logger.error(f"{operation} failed: {e}")
                    raise failure(f"{operation} failed: {e}") from e
                raise
            except TIMEOUT_ERRORS as e:
                logger.error(f"{operation} timed out: {e}")
                raise DeadlineExceededError(f"{operation} timed out: {e}") from e
            except RefreshError as e:
                logger.error(f"{operation} failed to refresh credentials: {e}")
                raise AuthenticationError(f"{operation} failed: {e}") from e
            except BACKEND_ERRORS as e:
                if failure is None:
                    raise
                logger.error(f"{operation} failed: {e}")
                raise failure(f"{operation} failed: {e}") from e

        return wrapper

    return decorator
