"""
Environment-driven settings for the GS Storage Provider.

Environment Variables:
    GCS_CREDENTIALS_PATH: Path to the JSON credential file
    GOOGLE_APPLICATION_CREDENTIALS: Fallback credential path (standard GCP variable)
    GCP_PROJECT_ID: Project used for bucket listing
    GCS_BUCKET_NAME: Bucket targeted by object operations
    GCS_APPLICATION_NAME: User agent reported to the API (default: FileService)
    GCS_TIMEOUT_SECONDS: Default per-call timeout in seconds
    LOG_LEVEL: Logging level for the CLI (default: INFO)
"""

import logging
import os
from dataclasses import dataclass, replace
from typing import List, Optional

from .constants import (
    DEFAULT_APPLICATION_NAME,
    ENV_APPLICATION_CREDENTIALS,
    ENV_APPLICATION_NAME,
    ENV_BUCKET_NAME,
    ENV_CREDENTIALS_PATH,
    ENV_LOG_LEVEL,
    ENV_PROJECT_ID,
    ENV_TIMEOUT_SECONDS,
)

logger = logging.getLogger(__name__)


@dataclass
class StorageSettings:
    """Connection settings for a GCSAdapter."""

    credentials_path: Optional[str] = None
    project_id: Optional[str] = None
    bucket_name: Optional[str] = None
    application_name: str = DEFAULT_APPLICATION_NAME
    timeout: Optional[float] = None
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "StorageSettings":
        """Build settings from environment variables."""
        timeout_raw = os.getenv(ENV_TIMEOUT_SECONDS)
        try:
            timeout = float(timeout_raw) if timeout_raw else None
        except ValueError:
            raise ValueError(f"{ENV_TIMEOUT_SECONDS} must be a number, got {timeout_raw!r}")

        return cls(
            credentials_path=os.getenv(ENV_CREDENTIALS_PATH) or os.getenv(ENV_APPLICATION_CREDENTIALS),
            project_id=os.getenv(ENV_PROJECT_ID),
            bucket_name=os.getenv(ENV_BUCKET_NAME),
            application_name=os.getenv(ENV_APPLICATION_NAME, DEFAULT_APPLICATION_NAME),
            timeout=timeout,
            log_level=os.getenv(ENV_LOG_LEVEL, "INFO").upper(),
        )

    def with_overrides(self, **overrides) -> "StorageSettings":
        """Return a copy with every non-None override applied."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})

    def missing_fields(self) -> List[str]:
        missing = []
        if not self.credentials_path:
            missing.append(f"credentials_path ({ENV_CREDENTIALS_PATH} or {ENV_APPLICATION_CREDENTIALS})")
        if not self.project_id:
            missing.append(f"project_id ({ENV_PROJECT_ID})")
        if not self.bucket_name:
            missing.append(f"bucket_name ({ENV_BUCKET_NAME})")
        return missing

    def validate(self) -> None:
        """
        Raise ValueError naming every missing required field.
        """
        missing = self.missing_fields()
        if missing:
            error_msg = f"Storage settings incomplete, missing: {', '.join(missing)}"
            logger.error(error_msg)
            raise ValueError(error_msg)

    def create_adapter(self):
        """Validate the settings and build a GCSAdapter from them."""
        from .storage.gcs_adapter import GCSAdapter

        self.validate()
        return GCSAdapter(
            self.credentials_path,
            self.project_id,
            self.bucket_name,
            application_name=self.application_name,
            default_timeout=self.timeout,
        )
