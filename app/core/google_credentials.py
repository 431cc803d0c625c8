# app/core/google_credentials.py
"""
Service account credentials for the Google Sheets API.

Two mutually exclusive sources, checked in this order:
  1. GOOGLE_CREDENTIALS_JSON: the service account JSON, base64 encoded
     (for deployed environments where files are awkward).
  2. GOOGLE_CREDENTIALS_PATH: path to the JSON file (local development).
"""

import base64
import binascii
import json
import logging
from pathlib import Path
from typing import Any

from google.oauth2 import service_account

from app.core.config import Settings
from app.core.errors import ConfigurationError

logger = logging.getLogger(__name__)

SCOPES = ["https://www.googleapis.com/auth/spreadsheets.readonly"]


def _decode_inline(raw: str) -> dict[str, Any]:
    try:
        decoded = base64.b64decode(raw.strip(), validate=True).decode("utf-8")
        payload = json.loads(decoded)
    except (binascii.Error, UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise ConfigurationError(
            f"Failed to parse GOOGLE_CREDENTIALS_JSON: {exc}"
        ) from exc

    if not isinstance(payload, dict):
        raise ConfigurationError(
            "Failed to parse GOOGLE_CREDENTIALS_JSON: expected a JSON object"
        )
    return payload


def _read_file(raw_path: str) -> dict[str, Any]:
    path = Path(raw_path).expanduser().resolve()
    if not path.is_file():
        raise ConfigurationError(f"Credentials file not found at: {path}")

    try:
        payload = json.loads(path.read_text(encoding="utf-8-sig"))
    except (OSError, json.JSONDecodeError) as exc:
        raise ConfigurationError(
            f"Failed to read credentials file {path}: {exc}"
        ) from exc

    if not isinstance(payload, dict):
        raise ConfigurationError(
            f"Failed to read credentials file {path}: expected a JSON object"
        )
    return payload


def load_service_account_info(settings: Settings) -> dict[str, Any]:
    """
    Resolve the raw service account document.

    Inline value wins when both are set.

    Raises:
        ConfigurationError: if neither source is set, or the selected
        source cannot be decoded / parsed.
    """
    if settings.GOOGLE_CREDENTIALS_JSON:
        info = _decode_inline(settings.GOOGLE_CREDENTIALS_JSON)
        logger.info("✅ Using credentials from GOOGLE_CREDENTIALS_JSON environment variable")
        return info

    if settings.GOOGLE_CREDENTIALS_PATH:
        info = _read_file(settings.GOOGLE_CREDENTIALS_PATH)
        logger.info(f"✅ Using credentials from file: {settings.GOOGLE_CREDENTIALS_PATH}")
        return info

    raise ConfigurationError(
        "No credentials provided. Set either GOOGLE_CREDENTIALS_JSON "
        "or GOOGLE_CREDENTIALS_PATH"
    )


def load_credentials(settings: Settings) -> service_account.Credentials:
    """
    Build read-only Sheets credentials from the configured source.
    """
    info = load_service_account_info(settings)
    try:
        return service_account.Credentials.from_service_account_info(
            info, scopes=SCOPES
        )
    except (ValueError, KeyError) as exc:
        raise ConfigurationError(f"Invalid service account credentials: {exc}") from exc
