"""
Credential loading for the Google Cloud Storage adapter.

Accepts a JSON credential file path or an in-memory binary stream and
delegates parsing to google-auth. Credentials that require scopes are
widened to full storage control, matching what the adapter needs for
bucket listing, uploads and deletes.
"""

import json
import logging
import os
from typing import Sequence

import google.auth
from google.auth import credentials as ga_credentials
from google.auth.exceptions import GoogleAuthError

from ..constants import FULL_CONTROL_SCOPE
from .base_adapter import AuthenticationError, CredentialSource

logger = logging.getLogger(__name__)


def load_credentials(
    source: CredentialSource,
    scopes: Sequence[str] = (FULL_CONTROL_SCOPE,),
) -> ga_credentials.Credentials:
    """
    Load Google credentials from a file path or a binary stream.

    Args:
        source: Path to a JSON credential file, or a readable binary stream
        scopes: Scopes applied when the credential requires them

    Returns:
        google.auth Credentials, scoped when scoping was required

    Raises:
        AuthenticationError: If the material is unreadable or malformed
    """
    if isinstance(source, (str, os.PathLike)):
        try:
            with open(source, "rb") as json_stream:
                return _load_from_stream(json_stream, scopes)
        except OSError as e:
            logger.error(f"Failed to read credentials file {source}: {e}")
            raise AuthenticationError(f"Cannot read credentials file {source}: {e}") from e

    return _load_from_stream(source, scopes)


def _load_from_stream(stream, scopes: Sequence[str]) -> ga_credentials.Credentials:
    try:
        info = json.loads(stream.read())
    except (OSError, ValueError) as e:
        raise AuthenticationError(f"Credential material is not valid JSON: {e}") from e

    if not isinstance(info, dict):
        raise AuthenticationError("Credential material must be a JSON object")

    try:
        credentials, _ = google.auth.load_credentials_from_dict(info)
    except (GoogleAuthError, ValueError) as e:
        raise AuthenticationError(f"Invalid credentials: {e}") from e

    if isinstance(credentials, ga_credentials.Scoped) and credentials.requires_scopes:
        logger.debug(f"Widening credential scopes to {list(scopes)}")
        credentials = credentials.with_scopes(list(scopes))
    return credentials
