"""
Utility modules for the GS Storage Provider.

This package contains shared utilities used by the adapter:
- error_handler: Decorator-based translation of provider exceptions
- validation: Object path normalization and cancellation checks
"""

from .error_handler import translate_storage_errors
from .validation import ValidationHelper

__all__ = [
    "translate_storage_errors",
    "ValidationHelper",
]
