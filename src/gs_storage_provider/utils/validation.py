"""
Common validation logic for storage operations.

This module provides shared validation functions used by the adapter
so every remote call sees the same normalized arguments.
"""

import threading
from typing import Optional

from ..storage.base_adapter import CancelledError


class ValidationHelper:
    """
    Helper class containing common validation logic.

    This class provides static methods for common validation operations
    that are used across adapter operations and the CLI.
    """

    @staticmethod
    def normalize_object_path(path: str) -> str:
        """
        Normalize an object path to the backend's slash-delimited form.

        Args:
            path: Object path, possibly using Windows separators

        Returns:
            The path with every backslash replaced by a forward slash

        Raises:
            ValueError: If the path is empty
        """
        if not path:
            raise ValueError("Object path cannot be empty")

        return path.replace("\\", "/")

    @staticmethod
    def validate_bucket_name(bucket_name: str) -> Optional[str]:
        """
        Validate a bucket name.

        Returns:
            Error message if validation fails, None if valid
        """
        if not bucket_name or not bucket_name.strip():
            return "Bucket name cannot be empty"

        if "/" in bucket_name or "\\" in bucket_name:
            return f"Invalid bucket name: {bucket_name} (path separators not allowed)"

        return None

    @staticmethod
    def check_cancelled(cancel_event: Optional[threading.Event], operation: str) -> None:
        """
        Raise CancelledError if the caller's cancellation token is set.

        Args:
            cancel_event: Optional token supplied by the caller
            operation: Operation name used in the error message
        """
        if cancel_event is not None and cancel_event.is_set():
            raise CancelledError(f"{operation} cancelled")
