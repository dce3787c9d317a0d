"""
Shared constants for the GS Storage Provider.
"""

# OAuth scope granting full control over Cloud Storage resources
FULL_CONTROL_SCOPE = "https://www.googleapis.com/auth/devstorage.full_control"

# User agent reported to the storage API
DEFAULT_APPLICATION_NAME = "FileService"

# Fallback when the destination extension has no known MIME type
DEFAULT_CONTENT_TYPE = "application/octet-stream"

# Download chunk size for streaming to local files (must be a multiple of 256 KiB)
DEFAULT_CHUNK_SIZE = 1024 * 1024

# Environment variables read by StorageSettings
ENV_CREDENTIALS_PATH = "GCS_CREDENTIALS_PATH"
ENV_APPLICATION_CREDENTIALS = "GOOGLE_APPLICATION_CREDENTIALS"
ENV_PROJECT_ID = "GCP_PROJECT_ID"
ENV_BUCKET_NAME = "GCS_BUCKET_NAME"
ENV_APPLICATION_NAME = "GCS_APPLICATION_NAME"
ENV_TIMEOUT_SECONDS = "GCS_TIMEOUT_SECONDS"
ENV_LOG_LEVEL = "LOG_LEVEL"
